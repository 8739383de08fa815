"""
Rebuild logical lines from extracted resume text.

PDF/DOCX readers routinely lose line breaks: a header ends up glued to the
previous sentence, bullets run together on one line, whole paragraphs come out
as a single line. The rewrites below put those breaks back before we split.

Order matters:
    (a) break before section-header keywords
    (b) break before bullet markers
    (c) break after sentence-ending punctuation followed by a capital
"""

import re
from typing import List

from resume_engine.core.taxonomy import LINE_BREAK_KEYWORDS, SECTION_KEYWORDS
from resume_engine.core.text_normalization import HORIZONTAL_SPACE_RE


MONTH_PREFIX = r"(?:jan|feb|mar|apr|may|jun|jul|aug|sep|sept|oct|nov|dec)[a-z]*\.?"

_keyword_alternation = "|".join(
    re.escape(k).replace(r"\ ", r"\s+")
    for k in sorted(LINE_BREAK_KEYWORDS, key=len, reverse=True)
)

# (a) "... Jane Doe EXPERIENCE Software Engineer ..." -> break before EXPERIENCE.
# Mid-line keywords only count when shouted in caps, or when capitalised and
# followed by ':' or the end of the line after something other than a lowercase
# word. "strong communication skills" and "experience in Python" stay intact.
SECTION_KEYWORD_RE = re.compile(
    rf"[ \t]+(?=(?:{_keyword_alternation})\b)",
    re.IGNORECASE,
)
_SECTION_KEYWORD_AT_RE = re.compile(rf"(?:{_keyword_alternation})\b", re.IGNORECASE)
_LEADING_HEADER_RE = re.compile(
    r"(?:"
    + "|".join(
        re.escape(k).replace(r"\ ", r"\s+")
        for k in sorted(
            set(LINE_BREAK_KEYWORDS).union(*SECTION_KEYWORDS.values()),
            key=len,
            reverse=True,
        )
    )
    + r")\b",
    re.IGNORECASE,
)
LAST_WORD_RE = re.compile(r"\S+$")
LOWERCASE_WORD_END_RE = re.compile(r"(?:^|\s)[a-z]+$")
CONNECTOR_END_RE = re.compile(r"(?:^|\s)(?:in|of|and|&)$", re.IGNORECASE)

# (b) glyph bullets always break; dashes break unless they sit inside a date
# range ("2020 - Present", "Jan 2019 – Mar 2021").
GLYPH_BULLET_RE = re.compile(r"[ \t]+(?=[•●▪◦■‣]\s*\S)")
DASH_BULLET_RE = re.compile(
    rf"(?<=[^\d\s])[ \t]+(?=[-–—][ \t]+(?!\d|present\b|current\b|now\b|{MONTH_PREFIX}\s*\d)\S)",
    re.IGNORECASE,
)

# (c) "...shipped it. Then I..." -> break after the period.
SENTENCE_END_RE = re.compile(r"(?<=[a-z]{2}[.!?])[ \t]+(?=[A-Z])")


def _inside_longer_header(text: str, line_start: int, before: str, pos: int) -> bool:
    # "Technical Skills", "Professional Experience" are one header, at the start
    # of a line or further along it
    last_word = LAST_WORD_RE.search(before)
    starts = {line_start}
    if last_word is not None:
        starts.add(line_start + last_word.start())
    for start in starts:
        lead = _LEADING_HEADER_RE.match(text, start)
        if lead is not None and lead.end() > pos:
            return True
    return False


def _break_before_section_keywords(text: str) -> str:
    def replace(m: re.Match) -> str:
        line_start = text.rfind("\n", 0, m.start()) + 1
        before = text[line_start:m.start()]
        if _inside_longer_header(text, line_start, before, m.start()):
            return m.group(0)
        # "Bachelor of Science in Education"
        if CONNECTOR_END_RE.search(before):
            return m.group(0)

        rest = text[m.end():]
        kw = _SECTION_KEYWORD_AT_RE.match(rest)
        if kw is None:
            return m.group(0)
        word = kw.group(0)
        if word.isupper():
            return "\n"

        labelled = bool(re.match(r"[ \t]*(?::|\n|$)", rest[kw.end():]))
        if labelled and word[0].isupper() and not LOWERCASE_WORD_END_RE.search(before):
            return "\n"
        return m.group(0)

    return SECTION_KEYWORD_RE.sub(replace, text)


def _break_before_bullets(text: str) -> str:
    text = GLYPH_BULLET_RE.sub("\n", text)
    return DASH_BULLET_RE.sub("\n", text)


def _break_after_sentences(text: str) -> str:
    return SENTENCE_END_RE.sub("\n", text)


def reconstruct_lines(text: str) -> List[str]:
    """
    Normalize raw text into ordered, trimmed, non-empty logical lines.

    Deterministic; any input with at least one non-whitespace character yields
    at least one line.
    """
    if not text:
        return []

    t = text.replace("\r\n", "\n").replace("\r", "\n")
    t = HORIZONTAL_SPACE_RE.sub(" ", t)

    t = _break_before_section_keywords(t)
    t = _break_before_bullets(t)
    t = _break_after_sentences(t)

    return [ln.strip() for ln in t.split("\n") if ln.strip()]
