"""
Shop manager – single-operator inventory and order desk.

This package keeps a product catalog and a client roster in a local SQLite
database, places orders linking the two, and produces CSV exports, PDF order
receipts and confirmation emails.
"""

__all__ = [
    "config",
    "logging",
    "paths",
]
