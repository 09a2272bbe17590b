"""Subscription feed service - short-form-free video feed over a catalog API."""

__version__ = "1.0.0"
