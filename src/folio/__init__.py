"""Folio: market data aggregation, portfolio valuation and risk fingerprinting."""

__version__ = "0.1.0"
