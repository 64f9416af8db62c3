"""
Bikram Sambat Calendar Kernel

A table-driven AD <-> BS calendar core with:
- Exact bidirectional day-count conversion
- Calendar and financial accounting-year conventions
- Typed, code-carrying exceptions
- Structured JSON logging
"""

__version__ = "0.1.0"
