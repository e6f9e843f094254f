"""
BeautifulSoup helpers that flatten rendered markup into classifier-ready text.
"""

from __future__ import annotations

import re

from bs4 import BeautifulSoup

_NON_CONTENT_TAGS = ["script", "style", "noscript", "template", "svg"]


def html_to_text(html: str | None) -> str:
    """
    Return visible text, one block per line, without empty lines.
    """

    if not html:
        return ""
    soup = BeautifulSoup(html, "html.parser")
    for node in soup.find_all(_NON_CONTENT_TAGS):
        node.decompose()

    lines: list[str] = []
    for raw_line in soup.get_text("\n").splitlines():
        line = re.sub(r"\s+", " ", raw_line).strip()
        if line:
            lines.append(line)
    return "\n".join(lines)


def page_title(html: str | None) -> str | None:
    if not html:
        return None
    soup = BeautifulSoup(html, "html.parser")
    heading = soup.find("h1")
    if heading is not None:
        text = heading.get_text(" ", strip=True)
        if text:
            return text[:180]
    if soup.title is not None and soup.title.string:
        return soup.title.string.strip()[:180] or None
    return None
