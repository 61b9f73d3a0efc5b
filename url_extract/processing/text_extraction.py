"""
Shared text extraction utilities.

Turns uploaded or local files (TXT, HTML, PDF, DOCX) into plain text for URL
extraction. Used by both web.py (upload endpoint) and main.py (batch runs).
"""

import io
import os
import tempfile
from typing import Optional

import pdfplumber
from bs4 import BeautifulSoup

try:
    import docx2txt
except ImportError:
    docx2txt = None

from url_extract.utils.logger import setup_logger
from url_extract.utils.urls import extract_urls

logger = setup_logger()

HTML_EXTENSIONS = (".html", ".htm")


def html_to_text(html: str) -> str:
    """Visible text of an HTML document, one block per line."""
    soup = BeautifulSoup(html, "html.parser")
    for element in soup(["script", "style"]):
        element.decompose()
    return soup.get_text("\n")


def extract_text_from_file(filename: str, file_bytes: bytes) -> str:
    """
    Extract plain text from a file based on its extension.

    Args:
        filename: Original filename (used to determine type via extension).
        file_bytes: Raw file content as bytes.

    Returns:
        Extracted plain text.

    Raises:
        ValueError: If the file type is unsupported or extraction fails.
    """
    source_type = get_source_type(filename)

    if source_type == "txt":
        return file_bytes.decode("utf-8", errors="replace")

    elif source_type == "html":
        return html_to_text(file_bytes.decode("utf-8", errors="replace"))

    elif source_type == "docx":
        if docx2txt is None:
            raise ValueError("docx2txt is not installed — cannot process DOCX files")
        # docx2txt.process() needs a file path, so write to a temp file
        with tempfile.NamedTemporaryFile(suffix=".docx", delete=False) as tmp:
            tmp.write(file_bytes)
            tmp_path = tmp.name
        try:
            text = docx2txt.process(tmp_path)
        finally:
            os.unlink(tmp_path)
        return text or ""

    elif source_type == "pdf":
        try:
            with pdfplumber.open(io.BytesIO(file_bytes)) as pdf:
                pages = [page.extract_text() or "" for page in pdf.pages]
                return "\n\n".join(pages)
        except Exception as e:
            raise ValueError(f"PDF parsing failed: {e}") from e

    else:
        raise ValueError(f"Unsupported file type: {filename}")


def extract_urls_from_html(
    html: str,
    strip_arguments: bool = False,
    max_length: Optional[int] = None,
) -> set[str]:
    """
    Extract URLs from HTML content.

    Anchor hrefs and the visible text are both scanned with URL_PATTERN.
    Relative links and mailto: targets never match.

    Args:
        html: HTML content
        strip_arguments: Truncate each URL at its first '?'
        max_length: Length guard passed through to extract_urls

    Returns:
        Set of unique URLs found in the HTML
    """
    if not html:
        return set()

    soup = BeautifulSoup(html, "html.parser")

    urls = set()
    for link in soup.find_all("a", href=True):
        urls.update(extract_urls(link["href"], strip_arguments, max_length))

    text = html_to_text(html)
    urls.update(extract_urls(text, strip_arguments, max_length))

    logger.info(f"Found {len(urls)} URLs in HTML document")
    return urls


def extract_urls_from_file(
    filename: str,
    file_bytes: bytes,
    strip_arguments: bool = False,
    max_length: Optional[int] = None,
) -> set[str]:
    """
    Extract URLs from a file, picking the HTML path for .html/.htm files.

    Raises:
        ValueError: If the file type is unsupported or extraction fails.
        ExtractionAborted: If the extracted text exceeds the length guard.
    """
    if get_source_type(filename) == "html":
        html = file_bytes.decode("utf-8", errors="replace")
        return extract_urls_from_html(html, strip_arguments, max_length)

    text = extract_text_from_file(filename, file_bytes)
    return extract_urls(text, strip_arguments, max_length)


def get_source_type(filename: str) -> str:
    """
    Map a filename to the source_type recorded in reports and used to pick
    the extractor.

    Returns:
        "pdf", "docx", "html", "txt" or "unsupported".
    """
    filename_lower = filename.lower()
    if filename_lower.endswith(".docx"):
        return "docx"
    elif filename_lower.endswith(".pdf"):
        return "pdf"
    elif filename_lower.endswith(HTML_EXTENSIONS):
        return "html"
    elif filename_lower.endswith(".txt"):
        return "txt"
    else:
        return "unsupported"
