"""Digest extraction: turns page HTML into a PageDigest.

Noise elements are filtered out while walking the tree instead of being removed
from it, so the parsed document is never mutated.
"""

import re
from typing import Callable, Iterator, List, Optional

from bs4 import BeautifulSoup
from bs4.element import NavigableString, PageElement, PreformattedString, Tag

from ..config import get_settings
from ..errors import ScrapeFailed
from ..log import get_logger
from ..schemas.digest import PageDigest
from .fetch import fetcher

settings = get_settings()
logger = get_logger("extract")

NOISE_TAGS = frozenset({"script", "style", "nav", "footer", "iframe", "noscript"})
# Document metadata; only read as body text when the parser built no <body>
HEAD_TAGS = frozenset({"head", "title"})

_WHITESPACE_RE = re.compile(r"\s+")


def is_noise(node: PageElement) -> bool:
    """True when the node is a noise tag or sits anywhere inside one."""
    if isinstance(node, Tag) and node.name in NOISE_TAGS:
        return True
    return any(parent.name in NOISE_TAGS for parent in node.parents)


def visible_strings(root: Tag, skip: Callable[[PageElement], bool] = is_noise) -> Iterator[str]:
    # PreformattedString covers comments, CDATA, doctypes and processing instructions
    for node in root.descendants:
        if not isinstance(node, NavigableString) or isinstance(node, PreformattedString):
            continue
        if skip(node):
            continue
        yield str(node)


def collapse_whitespace(text: str) -> str:
    return _WHITESPACE_RE.sub(" ", text).strip()


def _noise_or_head(node: PageElement) -> bool:
    return is_noise(node) or any(parent.name in HEAD_TAGS for parent in node.parents)


def _body_text(soup: BeautifulSoup) -> str:
    if soup.body is not None:
        strings = visible_strings(soup.body)
    else:
        # html.parser does not synthesize <body> for fragments
        strings = visible_strings(soup, skip=_noise_or_head)
    return collapse_whitespace("".join(strings))


def _element_text(tag: Tag) -> str:
    return collapse_whitespace("".join(visible_strings(tag)))


def _headings(soup: BeautifulSoup, name: str) -> List[str]:
    texts = (_element_text(tag) for tag in soup.find_all(name) if not is_noise(tag))
    return [text for text in texts if text]


def _title(soup: BeautifulSoup) -> str:
    tag = soup.find("title")
    if tag is None or is_noise(tag):
        return ""
    return collapse_whitespace(tag.get_text())


def _meta_description(soup: BeautifulSoup) -> str:
    tag = soup.find("meta", attrs={"name": re.compile(r"^description$", re.IGNORECASE)})
    if tag is None:
        return ""
    return (tag.get("content") or "").strip()


def extract_digest(html: str, max_chars: Optional[int] = None) -> PageDigest:
    """
    Builds the digest from raw HTML.
    Missing optional tags yield empty fields; this function never fails on them.
    """
    limit = settings.BODY_EXCERPT_CHARS if max_chars is None else max_chars
    soup = BeautifulSoup(html, "html.parser")
    body_text = _body_text(soup)

    return PageDigest(
        title=_title(soup),
        meta_description=_meta_description(soup),
        h1s=tuple(_headings(soup, "h1")),
        h2s=tuple(_headings(soup, "h2")),
        body_excerpt=body_text[:limit],
    )


def extract_page(url: str) -> PageDigest:
    """
    Fetches one URL and reduces it to a PageDigest.
    Raises ScrapeFailed if the page cannot be fetched or has no extractable content.
    """
    html = fetcher.fetch_url(url)
    digest = extract_digest(html)
    if digest.is_empty():
        logger.warning(f"No extractable content at {url}")
        raise ScrapeFailed(detail=f"no extractable content at {url}")

    logger.info(
        f"Extracted digest from {url}: {len(digest.h1s)} h1, {len(digest.h2s)} h2, "
        f"{len(digest.body_excerpt)} body chars"
    )
    return digest
