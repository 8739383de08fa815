"""
Locate the line span owned by each recognized resume section.

A header is a short line that equals or starts with one of the section's
keywords. Length limits keep prose that merely mentions "experience" from being
taken for a header.
"""

import logging
import re
from dataclasses import dataclass
from typing import Dict, List, Optional

from resume_engine.core.settings import DEFAULT_SETTINGS, EngineSettings
from resume_engine.core.taxonomy import SECTION_KEYWORDS, TERMINATOR_HEADERS, Section

logger = logging.getLogger(__name__)


def _keyword_re(keywords) -> re.Pattern:
    alternation = "|".join(
        re.escape(k).replace(r"\ ", r"\s+")
        for k in sorted(keywords, key=len, reverse=True)
    )
    return re.compile(rf"^(?:{alternation})\b", re.IGNORECASE)


SECTION_HEADER_RES: Dict[Section, re.Pattern] = {
    section: _keyword_re(keywords) for section, keywords in SECTION_KEYWORDS.items()
}
# Terminators must be the whole line: "Languages: Python, Go" inside a skills
# block is content, a bare "LANGUAGES" is a header.
TERMINATOR_HEADER_RE = re.compile(_keyword_re(TERMINATOR_HEADERS).pattern + r"\s*:?$", re.IGNORECASE)
INLINE_SEPARATOR_RE = re.compile(r"^[\s:\-–—|]+")


@dataclass(frozen=True)
class SectionSpan:
    header: Optional[int] = None  # index of the header line, None when absent
    start: int = 0  # first content line (inclusive)
    end: int = 0  # exclusive
    inline: str = ""  # header-line text after the keyword, e.g. "Skills: Python, SQL"

    @property
    def found(self) -> bool:
        return self.header is not None

    def __len__(self) -> int:
        return max(0, self.end - self.start)


EMPTY_SPAN = SectionSpan()


def match_section_header(line: str, settings: EngineSettings = DEFAULT_SETTINGS) -> Optional[Section]:
    """Return the section this line opens, or None."""
    t = line.strip()
    for section, header_re in SECTION_HEADER_RES.items():
        if len(t) >= settings.sections[section].header_max_length:
            continue
        if header_re.match(t):
            return section
    return None


def is_terminator_header(line: str, settings: EngineSettings = DEFAULT_SETTINGS) -> bool:
    t = line.strip()
    return len(t) < settings.terminator_header_max_length and bool(TERMINATOR_HEADER_RE.match(t))


def is_any_header(line: str, settings: EngineSettings = DEFAULT_SETTINGS) -> bool:
    return match_section_header(line, settings) is not None or is_terminator_header(line, settings)


def _inline_remainder(line: str, section: Section) -> str:
    m = SECTION_HEADER_RES[section].match(line.strip())
    if not m:
        return ""
    return INLINE_SEPARATOR_RE.sub("", line.strip()[m.end():]).strip()


def locate_sections(
    lines: List[str],
    settings: EngineSettings = DEFAULT_SETTINGS,
) -> Dict[Section, SectionSpan]:
    """
    Find the span of every recognized section.

    A span runs from the line after the section's first header to the next
    header of any kind, capped at the section's lookahead and the end of the
    document. Sections that are not found map to an empty span.
    """
    header_kinds: Dict[int, Optional[Section]] = {}
    for idx, line in enumerate(lines):
        section = match_section_header(line, settings)
        if section is not None:
            header_kinds[idx] = section
        elif is_terminator_header(line, settings):
            header_kinds[idx] = None

    header_positions = sorted(header_kinds)
    spans: Dict[Section, SectionSpan] = {}

    for section in Section:
        header_idx = next((i for i in header_positions if header_kinds[i] == section), None)
        if header_idx is None:
            spans[section] = EMPTY_SPAN
            continue

        start = header_idx + 1
        next_header = next((i for i in header_positions if i > header_idx), len(lines))
        end = min(next_header, start + settings.sections[section].max_lookahead, len(lines))

        spans[section] = SectionSpan(
            header=header_idx,
            start=start,
            end=end,
            inline=_inline_remainder(lines[header_idx], section),
        )
        logger.debug(f"Section {section.value}: header line {header_idx}, span [{start}, {end})")

    return spans


def span_lines(lines: List[str], span: SectionSpan) -> List[str]:
    return lines[span.start:span.end]
