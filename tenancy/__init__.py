"""Multi-tenant organization membership service."""

__version__ = "0.1.0"
