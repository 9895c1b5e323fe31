"""Listing search for the real-estate marketplace: filters, radius, sorting and a JSON API."""

__version__ = "0.1.0"
