"""Result extraction for DuckDuckGo's HTML search page.

The HTML endpoint is not a documented API, so this works blockwise with
tolerant regexes rather than a full DOM parse: split the page on the result
container class, then pull link, title and snippet out of each block
independently. A block that doesn't match is skipped; nothing here raises.
"""

import logging
import re
from urllib.parse import unquote

from .base import SearchResult, host_matches, is_absolute_url

logger = logging.getLogger(__name__)

BACKEND_DOMAIN = "duckduckgo.com"

# `class="result results_links ..."` opens a block; `result__a` etc. don't.
_BLOCK_SPLIT = re.compile(r'class="result\s')

# Redirect carrier on DuckDuckGo's outbound links: /l/?uddg=<encoded url>&rut=...
_UDDG = re.compile(r'uddg=([^&"]+)')

_RESULT_ANCHOR = re.compile(
    r'<a\b[^>]*class="[^"]*\bresult__a\b[^"]*"[^>]*>(.*?)</a>',
    re.DOTALL | re.IGNORECASE,
)
_HREF = re.compile(r'\bhref="([^"]*)"', re.IGNORECASE)

_SNIPPET = re.compile(
    r'class="[^"]*\bresult__snippet\b[^"]*"[^>]*>(.*?)(?:</a>|</td>)',
    re.DOTALL | re.IGNORECASE,
)

_TAG = re.compile(r"<[^>]*>")
_WHITESPACE = re.compile(r"\s+")

_ENTITIES = {
    "&amp;": "&",
    "&lt;": "<",
    "&gt;": ">",
    "&quot;": '"',
    "&#39;": "'",
}
_ENTITY = re.compile("|".join(re.escape(e) for e in _ENTITIES))


def decode_entities(text: str) -> str:
    """Decode the five common HTML entities in a single pass."""
    return _ENTITY.sub(lambda m: _ENTITIES[m.group(0)], text)


def clean_text(fragment: str) -> str:
    """Strip tags, decode entities and collapse whitespace."""
    text = _TAG.sub("", fragment)
    text = decode_entities(text)
    return _WHITESPACE.sub(" ", text).strip()


def resolve_url(block: str) -> str:
    """Find the destination URL of a result block.

    The `uddg` redirect parameter wins over the anchor's own href. If the
    parameter can't be decoded the raw value is kept.
    """
    uddg = _UDDG.search(block)
    if uddg:
        raw = uddg.group(1)
        try:
            return unquote(raw, errors="strict")
        except UnicodeDecodeError:
            return raw

    anchor = _RESULT_ANCHOR.search(block)
    if anchor:
        opening_tag = anchor.group(0)[: anchor.group(0).find(">") + 1]
        href = _HREF.search(opening_tag)
        if href:
            return decode_entities(href.group(1)).strip()
    return ""


def _is_internal(url: str) -> bool:
    return not url or url.startswith("/") or host_matches(url, BACKEND_DOMAIN)


def extract_results(html: str, max_results: int) -> list[SearchResult]:
    """Extract up to `max_results` results from a DuckDuckGo HTML page.

    Results come back in page order; duplicates are kept. Empty or
    malformed input yields an empty list.
    """
    if not isinstance(html, str) or not html or max_results <= 0:
        return []

    results: list[SearchResult] = []
    blocks = _BLOCK_SPLIT.split(html)

    for block in blocks[1:]:
        if len(results) >= max_results:
            break

        url = resolve_url(block)
        if _is_internal(url):
            continue

        anchor = _RESULT_ANCHOR.search(block)
        title = clean_text(anchor.group(1)) if anchor else ""

        snippet = _SNIPPET.search(block)
        content = clean_text(snippet.group(1)) if snippet else ""

        if not title or not is_absolute_url(url):
            logger.debug(f"Skipping result block without usable title/url: {url!r}")
            continue

        results.append(SearchResult(title=title, url=url, content=content))

    logger.debug(f"Extracted {len(results)} results from {len(blocks) - 1} blocks")
    return results
