"""
Step Counter Test Suite

Test Organization:
- tests/unit/: Isolated stage and helper tests
- tests/integration/: Full pipeline runs on synthetic wrist signals

Synthetic walking signals are Gaussian acceleration bumps on top of gravity,
one per step, sampled at the 25 Hz rate of the validation recordings.
"""

__version__ = "1.0.0"
