"""Shared fixtures and fakes for the unit tests."""

import httpx
import pytest
import structlog

from docfill.interfaces.acquisition import BaseContentFetcher, RetrievalAttempt, RetrievalStrategy
from docfill.interfaces.data_source import BaseDataSource, FieldDescriptor, FieldType, Record

DOCUMENT_ID = "1AbC-dEf_123"
DOCUMENT_URL = f"https://docs.google.com/document/d/{DOCUMENT_ID}/edit?usp=sharing"

INVOICE_TEXT = "Invoice for {{customer_name}} dated {{invoice_date}}"


class FakeFetcher(BaseContentFetcher):
    """Returns canned attempts and records every call."""

    def __init__(self, attempts: list[RetrievalAttempt]) -> None:
        self._attempts = attempts
        self.calls: list[tuple[str, int | None]] = []

    async def fetch_all_content(
        self, document_id: str, timeout_ms: int | None = None
    ) -> list[RetrievalAttempt]:
        self.calls.append((document_id, timeout_ms))
        return list(self._attempts)

    @property
    def strategies(self) -> tuple[RetrievalStrategy, ...]:
        return tuple(RetrievalStrategy(a.strategy_name, "") for a in self._attempts)


class InMemoryDataSource(BaseDataSource):
    """Data source backed by plain lists."""

    def __init__(
        self,
        fields: list[FieldDescriptor],
        records: list[Record] | None = None,
        linked: dict[str, list[Record]] | None = None,
    ) -> None:
        self._fields = fields
        self._records = records or []
        self._linked = linked or {}

    async def list_field_descriptors(self) -> list[FieldDescriptor]:
        return list(self._fields)

    async def list_records(self, max_records: int | None = None) -> list[Record]:
        return self._records[:max_records] if max_records else list(self._records)

    async def fetch_linked_records(
        self, parent_id: str, linked_field: FieldDescriptor
    ) -> list[Record]:
        return list(self._linked.get(parent_id, []))


def make_transport(routes: dict[str, httpx.Response], default_status: int = 404):
    """MockTransport answering by path suffix; unknown paths get ``default_status``.

    Keys are matched against ``<path>?<query>`` so export formats can be told apart.
    """

    def handler(request: httpx.Request) -> httpx.Response:
        target = request.url.path
        if request.url.query:
            target += "?" + request.url.query.decode()
        for suffix, response in routes.items():
            if target.endswith(suffix):
                return response
        return httpx.Response(default_status)

    return httpx.MockTransport(handler)


@pytest.fixture
def invoice_fields() -> list[FieldDescriptor]:
    return [
        FieldDescriptor(name="Customer Name", type=FieldType.SINGLE_LINE_TEXT),
        FieldDescriptor(name="Email", type=FieldType.EMAIL),
        FieldDescriptor(name="Phone", type=FieldType.PHONE_NUMBER),
        FieldDescriptor(name="Invoice Date", type=FieldType.DATE),
        FieldDescriptor(
            name="Line Items",
            type=FieldType.LINKED_RECORDS,
            is_linked_record=True,
            linked_table_id="tblItems",
            linked_table_name="Items",
        ),
    ]


@pytest.fixture
def reset_structlog():
    """Restore structlog defaults after a test reconfigures it."""
    yield
    structlog.reset_defaults()
