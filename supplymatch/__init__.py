"""SupplyMatch — supplier matching & scoring engine."""

__version__ = "0.4.0"
