"""Network traffic bookkeeping: header analysis, address classification, notifications and reports."""

__version__ = "0.1.0"

__all__ = [
    "addressing",
    "notifications",
    "packets",
    "protocols",
    "report",
    "runtime",
    "traffic",
]