"""
FPA Kernel

Domain core of the Function Point Analysis calculator:
- Closed function type and complexity enumerations
- Immutable project, entry and characteristic records
- Typed exception hierarchy
- Structured JSON logging
"""

__version__ = "0.1.0"
