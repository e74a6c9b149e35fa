"""Binary indexing of trade records from CSV and slot-based search over named pipes."""

__version__ = "0.1.0"