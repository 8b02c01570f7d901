"""Component Factory for strategy instantiation.

The Factory Pattern allows callers to obtain configured fetchers,
extractors and mappers without wiring settings through by hand.
"""

import logging

import httpx

from docfill.core.config import Settings, get_settings
from docfill.interfaces.acquisition import BaseContentFetcher
from docfill.interfaces.extractor import BasePlaceholderExtractor
from docfill.interfaces.log_sink import LogSink
from docfill.interfaces.mapper import BaseFieldMapper
from docfill.services.log_sinks import DebugLog, FanoutSink, StructlogSink
from docfill.services.mapping_service import MappingService
from docfill.services.pipeline import TemplateParsingService
from docfill.strategies.acquisition import HttpContentFetcher, build_strategy_table
from docfill.strategies.extraction import PlaceholderExtractor
from docfill.strategies.mapping import FieldAutoMapper

logger = logging.getLogger(__name__)


class ComponentFactory:
    """Factory for creating component instances based on configuration.

    Every component shares one log sink: structlog output plus an
    in-memory DebugLog reachable through ``debug_log``.

    Example:
        ```python
        factory = ComponentFactory(get_settings())

        service = factory.get_parsing_service()
        parsed = await service.parse(url)
        suggestions = factory.get_mapper().suggest(parsed.placeholders, fields)
        ```
    """

    def __init__(
        self,
        settings: Settings | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the factory with optional settings.

        Args:
            settings: Package settings. If None, uses global settings.
            transport: Optional httpx transport handed to the fetcher.
        """
        self._settings = settings or get_settings()
        self._transport = transport
        self._debug_log = DebugLog(capacity=self._settings.debug_log_capacity)
        self._log_sink: LogSink = FanoutSink(StructlogSink(), self._debug_log)
        self._fetcher_cache: BaseContentFetcher | None = None
        self._extractor_cache: BasePlaceholderExtractor | None = None
        self._mapper_cache: BaseFieldMapper | None = None

    @property
    def debug_log(self) -> DebugLog:
        """In-memory record of recent pipeline events."""
        return self._debug_log

    @property
    def log_sink(self) -> LogSink:
        return self._log_sink

    def get_fetcher(self) -> BaseContentFetcher:
        """Get the content fetcher configured from settings."""
        if self._fetcher_cache is None:
            strategies = build_strategy_table(
                include_proxy=self._settings.include_proxy_strategy,
                proxy_base_url=self._settings.proxy_base_url,
            )
            logger.info(f"Instantiating content fetcher with {len(strategies)} strategies")
            self._fetcher_cache = HttpContentFetcher(
                strategies=strategies,
                timeout_ms=self._settings.fetch_timeout_ms,
                min_content_length=self._settings.min_content_length,
                transport=self._transport,
                log_sink=self._log_sink,
            )
        return self._fetcher_cache

    def get_extractor(self) -> BasePlaceholderExtractor:
        """Get the placeholder extractor configured from settings."""
        if self._extractor_cache is None:
            logger.info("Instantiating placeholder extractor")
            self._extractor_cache = PlaceholderExtractor(
                max_matches_per_pattern=self._settings.max_matches_per_pattern,
                log_sink=self._log_sink,
            )
        return self._extractor_cache

    def get_mapper(self) -> BaseFieldMapper:
        """Get the field auto-mapper."""
        if self._mapper_cache is None:
            logger.info("Instantiating field auto-mapper")
            self._mapper_cache = FieldAutoMapper(log_sink=self._log_sink)
        return self._mapper_cache

    def get_parsing_service(self) -> TemplateParsingService:
        """Get a parsing service wired to the cached fetcher and extractor."""
        return TemplateParsingService(
            fetcher=self.get_fetcher(),
            extractor=self.get_extractor(),
            log_sink=self._log_sink,
        )

    def get_mapping_service(self) -> MappingService:
        """Get a mapping service wired to the cached mapper."""
        return MappingService(mapper=self.get_mapper(), log_sink=self._log_sink)

    def clear_cache(self) -> None:
        """Clear all cached component instances."""
        self._fetcher_cache = None
        self._extractor_cache = None
        self._mapper_cache = None
        logger.info("Component cache cleared")
