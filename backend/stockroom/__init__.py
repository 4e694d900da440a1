"""Stockroom — inventory management API.

Invariants:
    - Package root has no import side effects beyond the version constant
"""

__version__ = "1.0.0"
