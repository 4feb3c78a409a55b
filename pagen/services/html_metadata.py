"""
HTML Metadata - pull a title and a short description out of a finished page.

Used by the admin import endpoints, where pages arrive as HTML without the
submission fields that normally provide title and description.
"""

from bs4 import BeautifulSoup

DESCRIPTION_MAX_LENGTH = 200


def extract_title(html: str) -> str:
    """Text of the <title> element, or "Untitled"."""
    soup = BeautifulSoup(html, "html.parser")
    if soup.title and soup.title.string and soup.title.string.strip():
        return soup.title.string.strip()
    return "Untitled"


def extract_description(html: str) -> str:
    """
    Meta description if present, else the first paragraph.

    Paragraph text is cut to DESCRIPTION_MAX_LENGTH characters and marked
    with "...". Returns "" if the page has neither.
    """
    soup = BeautifulSoup(html, "html.parser")

    meta = soup.find("meta", attrs={"name": "description"})
    if meta and meta.get("content", "").strip():
        return meta["content"].strip()

    paragraph = soup.find("p")
    if paragraph:
        text = paragraph.get_text().strip()
        if text:
            return text[:DESCRIPTION_MAX_LENGTH] + "..."

    return ""
