"""Concrete strategy implementations."""

from docfill.strategies.acquisition import HttpContentFetcher
from docfill.strategies.extraction import PlaceholderExtractor
from docfill.strategies.mapping import FieldAutoMapper

__all__ = [
    "FieldAutoMapper",
    "HttpContentFetcher",
    "PlaceholderExtractor",
]
