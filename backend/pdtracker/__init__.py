"""PD Tracker - staff professional-development record keeping.

Invariants:
    - Package root holds only the version string (no import side effects)
"""

__version__ = "1.0.0"
