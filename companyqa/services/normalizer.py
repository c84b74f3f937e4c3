"""Plain-text cleanup for streamed provider output.

Each fragment is cleaned on its own, with no lookback into earlier fragments,
so a marker split across two fragments is left untouched. List markers
(``- ``, ``1. ``), newlines and non-ASCII text pass through unchanged.
"""
from __future__ import annotations

import re

_CITATION_BRACKET = re.compile(r"\[\d+\]")
_BOLD = re.compile(r"\*\*(?=\S)(.+?)(?<=\S)\*\*")
_ITALIC_STAR = re.compile(r"\*(?=\S)(.+?)(?<=\S)\*")
_ITALIC_UNDERSCORE = re.compile(r"(?<!\w)_(?=\S)(.+?)(?<=\S)_(?!\w)")
_HEADING = re.compile(r"^#{1,6}[ \t]+", re.MULTILINE)
_BLOCKQUOTE = re.compile(r"^>[ \t]+", re.MULTILINE)
_INLINE_CODE = re.compile(r"`([^`\n]+)`")
_HTML_EMPHASIS = re.compile(r"</?(?:b|i|strong|em)>", re.IGNORECASE)
_CITATION_PAREN = re.compile(r"\(\d+\)")
_CITATION_PREAMBLE = re.compile(
    r"\b(?:footnote \d+|source|reference|according to): ",
    re.IGNORECASE,
)
_SPACE_RUN = re.compile(r" {2,}")
_SPACE_BEFORE_PUNCT = re.compile(r" ([.,])")

_TYPOGRAPHY = str.maketrans(
    {
        "\u201c": '"',
        "\u201d": '"',
        "\u201e": '"',
        "\u201f": '"',
        "\u2018": "'",
        "\u2019": "'",
        "\u201a": "'",
        "\u201b": "'",
        "\u2013": "-",
        "\u2014": "-",
        "\u2015": "-",
    }
)


def normalize_fragment(fragment: str) -> str:
    """Strip markdown and citation artifacts from one streamed fragment.

    The passes run in a fixed order: wrapping syntax (citations, emphasis,
    headings, quotes, code, HTML tags) goes first so that the whitespace
    passes at the end see the final text.
    """
    text = _CITATION_BRACKET.sub("", fragment)
    text = _BOLD.sub(r"\1", text)
    text = _ITALIC_STAR.sub(r"\1", text)
    text = _ITALIC_UNDERSCORE.sub(r"\1", text)
    text = _HEADING.sub("", text)
    text = _BLOCKQUOTE.sub("", text)
    text = _INLINE_CODE.sub(r"\1", text)
    text = _HTML_EMPHASIS.sub("", text)
    text = _CITATION_PAREN.sub("", text)
    text = _CITATION_PREAMBLE.sub("", text)
    text = text.translate(_TYPOGRAPHY)
    text = _SPACE_RUN.sub(" ", text)
    return _SPACE_BEFORE_PUNCT.sub(r"\1", text)
