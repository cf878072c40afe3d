"""Text utilities for cleaning user-supplied search terms.

``sanitize_text_field`` mirrors the WordPress helper of the same name, which
the autosuggest script's search term has always been run through: tags are
stripped, whitespace runs collapsed and percent-encoded octets dropped.
"""

from __future__ import annotations

import re
from typing import Any

_LONE_LESS_THAN = re.compile(r"<[^>]*?((?=<)|>|$)")
_SCRIPT_STYLE = re.compile(r"<(script|style)[^>]*?>.*?</\1>", re.IGNORECASE | re.DOTALL)
_TAG = re.compile(r"<[^>]*>")
_WHITESPACE = re.compile(r"[\r\n\t ]+")
_OCTET = re.compile(r"%[a-f0-9]{2}", re.IGNORECASE)
_SPACES = re.compile(r" +")
_BARE_AMPERSAND = re.compile(r"&(?!#?\w+;)")

# Characters PHP trim() removes by default
TRIM_CHARS = " \t\n\r\0\x0b"


def esc_html(text: str) -> str:
    """HTML-escape ``text``, leaving entities that are already encoded alone."""
    text = _BARE_AMPERSAND.sub("&amp;", text)
    return text.replace("<", "&lt;").replace(">", "&gt;").replace('"', "&quot;").replace("'", "&#039;")


def _escape_lone_less_than(text: str) -> str:
    def repl(match: "re.Match[str]") -> str:
        chunk = match.group(0)
        if ">" in chunk:
            return chunk
        return esc_html(chunk)

    return _LONE_LESS_THAN.sub(repl, text)


def strip_all_tags(text: str) -> str:
    text = _SCRIPT_STYLE.sub("", text)
    return _TAG.sub("", text).strip(TRIM_CHARS)


def sanitize_text_field(value: Any) -> str:
    """Sanitize a string from user input.

    - ``None``, containers and undecodable bytes become ``""``
    - a ``<`` that does not open a tag is HTML-escaped, tags are removed
    - line breaks, tabs and repeated spaces collapse to one space
    - percent-encoded octets are removed
    """
    if value is None or isinstance(value, (dict, list, tuple, set)):
        return ""
    if isinstance(value, bytes):
        try:
            value = value.decode("utf-8")
        except UnicodeDecodeError:
            return ""
    filtered = str(value)

    if "<" in filtered:
        filtered = _escape_lone_less_than(filtered)
        filtered = strip_all_tags(filtered)
        filtered = filtered.replace("<\n", "&lt;\n")

    filtered = _WHITESPACE.sub(" ", filtered).strip(TRIM_CHARS)

    found = False
    while True:
        match = _OCTET.search(filtered)
        if not match:
            break
        filtered = filtered.replace(match.group(0), "")
        found = True
    if found:
        filtered = _SPACES.sub(" ", filtered).strip(TRIM_CHARS)

    return filtered
