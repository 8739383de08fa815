"""
Small text helpers shared by the extractors and the section parsers.

These only touch whitespace and bullet glyphs, never the words themselves.
"""

import re


# Bullet/achievement line detector
BULLET_RE = re.compile(r"^\s*(?:[•●▪◦■‣*>+]|[-–—](?=\s|$))")
BULLET_PREFIX_RE = re.compile(r"^[\s•●▪◦■‣*>+\-–—]+")

HORIZONTAL_SPACE_RE = re.compile(r"[ \t\f\v ]+")
EXCESS_NEWLINES_RE = re.compile(r"\n{3,}")


def clean_extracted_text(text: str) -> str:
    """
    Tidy text coming out of a PDF/DOCX reader.

    Collapses runs of spaces/tabs to one space while PRESERVING line breaks,
    and limits blank lines to one.
    """
    if not text:
        return ""
    text = text.replace("\r\n", "\n").replace("\r", "\n")
    text = HORIZONTAL_SPACE_RE.sub(" ", text)
    text = re.sub(r" *\n *", "\n", text)
    text = EXCESS_NEWLINES_RE.sub("\n\n", text)
    return text.strip()


def starts_with_bullet(text: str) -> bool:
    return bool(BULLET_RE.match(text))


def strip_bullet(text: str) -> str:
    """'- Built X' -> 'Built X', '•  Shipped Y' -> 'Shipped Y'."""
    return BULLET_PREFIX_RE.sub("", text).strip()


def collapse_whitespace(text: str) -> str:
    return " ".join(text.split())
