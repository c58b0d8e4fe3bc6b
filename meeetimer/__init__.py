"""Meeetimer — presentation countdown timer with remaining-time alerts."""

__version__ = "0.1.0"
