"""Listing ingestion: raw row normalization and the JSON export repository."""

from imovel_search.listings.normalize import merge_unique, normalize_row, normalize_rows
from imovel_search.listings.repository import ListingRepository, ListingSourceError

__all__ = [
    "ListingRepository",
    "ListingSourceError",
    "merge_unique",
    "normalize_row",
    "normalize_rows",
]
