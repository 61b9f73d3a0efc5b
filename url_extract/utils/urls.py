"""URL extraction from free text."""

import re
from dataclasses import dataclass
from typing import Iterator, Optional

from url_extract.config import get_settings
from url_extract.utils.logger import setup_logger

logger = setup_logger()

# Heuristic URL pattern, loosely based on RFC 3986.
# Group 1 is the scheme (or "www.") prefix; the boundary before it is not captured.
URL_PATTERN = re.compile(
    r"(?:^|\W)((?:ht|f)tps?://|www\.)"
    r"(?:[\w\-]+\.)+?(?:[\w\-.~]+/?)*"
    r"[A-Za-z0-9.,%_=?&#\-+()\[\]*$~@!:/{};']*",
    re.IGNORECASE | re.MULTILINE | re.DOTALL | re.ASCII,
)


class ExtractionAborted(Exception):
    """Raised when input text exceeds the configured length guard."""

    def __init__(self, text_length: int, limit: int):
        self.text_length = text_length
        self.limit = limit
        super().__init__(
            f"Extraction aborted: text length {text_length} exceeds limit {limit}"
        )


@dataclass(frozen=True)
class UrlMatch:
    """A URL found in text. ``start`` excludes the boundary character."""
    start: int
    end: int
    url: str


def iter_url_matches(text: str) -> Iterator[UrlMatch]:
    """Scan text left to right, yielding non-overlapping URL matches."""
    for match in URL_PATTERN.finditer(text):
        start = match.start(1)
        end = match.end()
        yield UrlMatch(start=start, end=end, url=text[start:end])


def strip_url_arguments(url: str) -> str:
    """Drop everything from the first '?' onwards."""
    index = url.find("?")
    if index >= 0:
        return url[:index]
    return url


def _check_length(text: str, max_length: Optional[int]):
    if max_length is None:
        try:
            max_length = get_settings().max_text_length
        except ValueError as e:
            logger.warning(f"Length guard disabled: {e}")
            max_length = 0
    if max_length and len(text) > max_length:
        logger.warning(f"Refusing to scan {len(text)} characters (limit {max_length})")
        raise ExtractionAborted(len(text), max_length)


def extract_urls_ordered(
    text: str,
    strip_arguments: bool = False,
    max_length: Optional[int] = None,
) -> list[str]:
    """
    Extract unique URLs from text in order of first appearance.

    Args:
        text: Arbitrary text, may span multiple lines.
        strip_arguments: Truncate each URL at its first '?'.
        max_length: Length guard in characters. None uses the configured
            value, 0 disables the guard.

    Returns:
        List of unique URLs.

    Raises:
        ExtractionAborted: If the guard is enabled and text is longer than it.
    """
    _check_length(text, max_length)

    seen: set[str] = set()
    unique: list[str] = []
    for found in iter_url_matches(text):
        url = strip_url_arguments(found.url) if strip_arguments else found.url
        if url not in seen:
            seen.add(url)
            unique.append(url)

    logger.debug(f"Extracted {len(unique)} unique URLs from {len(text)} characters")
    return unique


def extract_urls(
    text: str,
    strip_arguments: bool = False,
    max_length: Optional[int] = None,
) -> set[str]:
    """
    Extract the set of distinct URLs found in text.

    Returns an empty set when nothing matches. See extract_urls_ordered for
    arguments and the ExtractionAborted condition.
    """
    return set(extract_urls_ordered(text, strip_arguments, max_length))
