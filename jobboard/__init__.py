"""Job board backend: filtered listings, recommendations and expiry sweeps."""

__version__ = "0.1.0"
