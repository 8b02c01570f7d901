"""Content acquisition strategies."""

from docfill.strategies.acquisition.catalog import (
    DEFAULT_STRATEGIES,
    build_strategy_table,
    proxy_strategy,
)
from docfill.strategies.acquisition.http_fetcher import HttpContentFetcher
from docfill.strategies.acquisition.locator import extract_document_id

__all__ = [
    "DEFAULT_STRATEGIES",
    "HttpContentFetcher",
    "build_strategy_table",
    "extract_document_id",
    "proxy_strategy",
]
