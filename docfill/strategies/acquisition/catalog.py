"""Default retrieval strategy table.

Each entry fetches the same document through a different rendering or
client context. Some renderings keep placeholder markup intact that others
mangle, so the table is tried in full rather than until the first success.
"""

from urllib.parse import quote

from docfill.interfaces.acquisition import RetrievalStrategy

DESKTOP_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/124.0.0.0 Safari/537.36"
)
CRAWLER_USER_AGENT = "Mozilla/5.0 (compatible; Googlebot/2.1; +http://www.google.com/bot.html)"
MOBILE_USER_AGENT = (
    "Mozilla/5.0 (iPhone; CPU iPhone OS 14_7_1 like Mac OS X) "
    "AppleWebKit/605.1.15 (KHTML, like Gecko) Mobile/15E148"
)

# Sent with every request; strategy headers override these.
COMMON_HEADERS = {
    "Accept": "*/*",
    "Accept-Language": "en-US,en;q=0.9",
    "Cache-Control": "no-cache",
    "Pragma": "no-cache",
}

DOCUMENT_BASE_URL = "https://docs.google.com/document/d/{document_id}"

DEFAULT_STRATEGIES: tuple[RetrievalStrategy, ...] = (
    RetrievalStrategy(
        name="HTML Export",
        url_template=DOCUMENT_BASE_URL + "/export?format=html",
        headers={"User-Agent": DESKTOP_USER_AGENT},
    ),
    RetrievalStrategy(
        name="Published HTML",
        url_template=DOCUMENT_BASE_URL + "/pub",
        headers={"User-Agent": CRAWLER_USER_AGENT},
    ),
    RetrievalStrategy(
        name="Edit View (Public)",
        url_template=DOCUMENT_BASE_URL + "/edit?usp=sharing",
        headers={"User-Agent": DESKTOP_USER_AGENT},
    ),
    RetrievalStrategy(
        name="Text Export",
        url_template=DOCUMENT_BASE_URL + "/export?format=txt",
        headers={"User-Agent": DESKTOP_USER_AGENT, "Accept": "text/plain,*/*"},
    ),
    RetrievalStrategy(
        name="ODT Export",
        url_template=DOCUMENT_BASE_URL + "/export?format=odt",
        headers={"User-Agent": DESKTOP_USER_AGENT},
    ),
    RetrievalStrategy(
        name="DOCX Export",
        url_template=DOCUMENT_BASE_URL + "/export?format=docx",
        headers={"User-Agent": DESKTOP_USER_AGENT},
    ),
    RetrievalStrategy(
        name="Mobile View",
        url_template=DOCUMENT_BASE_URL + "/mobilebasic",
        headers={"User-Agent": MOBILE_USER_AGENT},
    ),
    RetrievalStrategy(
        name="Print View",
        url_template=DOCUMENT_BASE_URL + "/edit#print",
        headers={"User-Agent": DESKTOP_USER_AGENT},
    ),
)


def proxy_strategy(proxy_base_url: str) -> RetrievalStrategy:
    """Build the JSON-wrapping proxy strategy for the published view.

    The proxy answers ``{"contents": "<html>..."}``. The document id slot is
    left unescaped so ``url_for`` can still fill it.
    """
    published = quote(DOCUMENT_BASE_URL + "/pub", safe="{}")
    return RetrievalStrategy(
        name="CORS Proxy",
        url_template=f"{proxy_base_url}?url={published}",
        headers={"Accept": "application/json"},
        unwrap_json_key="contents",
    )


def build_strategy_table(
    include_proxy: bool = False,
    proxy_base_url: str = "https://api.allorigins.win/get",
) -> tuple[RetrievalStrategy, ...]:
    """Return the default table, optionally followed by the proxy strategy."""
    if include_proxy:
        return DEFAULT_STRATEGIES + (proxy_strategy(proxy_base_url),)
    return DEFAULT_STRATEGIES
