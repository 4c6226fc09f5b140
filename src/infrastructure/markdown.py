"""HTML to markdown conversion."""

import html2text
from bs4 import BeautifulSoup
from loguru import logger


def _make_converter() -> html2text.HTML2Text:
    converter = html2text.HTML2Text()
    # Links must stay on one line for the listing patterns to match
    converter.body_width = 0
    converter.ignore_images = True
    converter.ignore_emphasis = False
    converter.ignore_links = False
    return converter


def html_to_markdown(html: str) -> str:
    """
    Convert an HTML fragment or document to markdown.

    Never raises: if the converter fails, the plain text of the document is
    returned instead.
    """
    if not html:
        return ""

    try:
        return _make_converter().handle(html).strip()
    except Exception as e:
        logger.warning(f"Markdown conversion failed, falling back to plain text: {e}")
        return BeautifulSoup(html, "lxml").get_text(separator="\n", strip=True)
