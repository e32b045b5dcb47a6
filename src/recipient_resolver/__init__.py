"""Recipient resolution and validation for ledger payments."""

__version__ = "0.1.0"
