"""Household mortgage affordability calculator."""

__version__ = "0.1.0"
