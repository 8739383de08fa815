"""
Education parsing module for detecting and extracting education entries from resumes.

An entry starts on a degree line ("Bachelor of Science in Computer Science").
The first following line names the school, usually with the graduation year.
"""

import re
from dataclasses import replace
from typing import List, Optional, Tuple

from resume_engine.core.dates import YEAR_RE, has_year, parse_date_range
from resume_engine.core.entry_machine import (
    ORG_TRAILING_RE,
    EntryDraft,
    EntryMachine,
    LineRole,
    Rule,
)
from resume_engine.core.schemas import EducationEntry
from resume_engine.core.section_locator import SectionSpan, span_lines
from resume_engine.core.settings import DEFAULT_SETTINGS, EngineSettings
from resume_engine.core.taxonomy import DEGREE_PATTERNS, INSTITUTION_KEYWORDS
from resume_engine.core.text_normalization import strip_bullet


# ===== DEGREE / INSTITUTION DETECTION =====
# If a line contains ANY degree pattern, it opens an education entry

DEGREE_RE = re.compile(
    r"(?<![A-Za-z])(?:" + "|".join(DEGREE_PATTERNS) + r")(?![A-Za-z])",
    re.IGNORECASE,
)
INSTITUTION_RE = re.compile(
    r"\b(?:" + "|".join(re.escape(k) for k in INSTITUTION_KEYWORDS) + r")\b",
    re.IGNORECASE,
)
ACRONYM_RE = re.compile(r"^[A-Z]{2,6}$")
FIELD_RE = re.compile(r"\bin\s+([A-Za-z][A-Za-z\s&/\-]*?)\s*(?:,|\(|\||\d|$)", re.IGNORECASE)
DEGREE_SPLIT_RE = re.compile(r"\s+in\s+|,|\(|\|", re.IGNORECASE)


def has_degree_keyword(text: str) -> bool:
    """
    Check if text contains degree keywords.
    This is a STRONG signal that a line is education, not experience.

    Args:
        text: Text to check

    Returns:
        True if degree keyword found (case-insensitive)
    """
    return bool(DEGREE_RE.search(text))


def is_institution_keyword(text: str) -> bool:
    """
    Check if text contains institution-specific keywords
    (university, college, institute, ...).

    Args:
        text: Text to check

    Returns:
        True if institution keyword found
    """
    return bool(INSTITUTION_RE.search(text))


def extract_degree_from_text(text: str) -> str:
    """
    Extract degree name from a degree line.

    Examples:
        "Bachelor of Science in Computer Science" -> "Bachelor of Science"
        "M.S. in Engineering, Stanford, 2019" -> "M.S."
        "PhD" -> "PhD"

    Args:
        text: Text containing degree information

    Returns:
        Degree text with field, school and dates removed
    """
    head = DEGREE_SPLIT_RE.split(strip_bullet(text), maxsplit=1)[0]
    head = YEAR_RE.split(head, maxsplit=1)[0]
    return ORG_TRAILING_RE.sub("", head).strip()


def extract_field_of_study_from_degree_line(text: str) -> str:
    """
    Extract field of study from a degree line.

    Examples:
        "Bachelor of Science in Computer Science" -> "Computer Science"
        "M.S. in Engineering, Stanford" -> "Engineering"
        "Bachelor of Arts" -> ""

    Args:
        text: Text containing degree and field information

    Returns:
        Extracted field of study or "" when the line has none
    """
    m = FIELD_RE.search(text)
    if not m:
        return ""
    field = m.group(1).strip(" -/&")
    return field if len(field) > 1 else ""


def _school_from_degree_line(text: str) -> str:
    # "Bachelor of Science, Stanford University, 2020" -> "Stanford University"
    # "B.S. Computer Science, MIT" -> "MIT"
    for segment in text.split(",")[1:]:
        segment = YEAR_RE.sub("", segment).strip(" -–—|()")
        if not segment:
            continue
        if is_institution_keyword(segment) or ACRONYM_RE.match(segment):
            return segment
    return ""


def parse_degree_line(text: str) -> EntryDraft:
    """
    Open an education draft from a degree line.

    Besides degree and field, a degree line sometimes carries the school and
    the graduation year; pick those up when they are unambiguous.
    """
    text = text.strip()
    end_date = ""
    dates = parse_date_range(text)
    if dates is not None:
        end_date = dates.end or dates.start

    return EntryDraft(
        title=extract_degree_from_text(text) or text,
        field_of_study=extract_field_of_study_from_degree_line(text),
        organization=_school_from_degree_line(text),
        end_date=end_date,
    )


def _open_degree(draft: EntryDraft, line: str) -> EntryDraft:
    return parse_degree_line(line)


def _set_dated_school(draft: EntryDraft, line: str) -> EntryDraft:
    text = strip_bullet(line)
    dates = parse_date_range(text)
    if dates is None:
        return replace(draft, organization=text)
    school = ORG_TRAILING_RE.sub("", text[:dates.offset]).strip()
    return replace(draft, organization=school, end_date=dates.end or dates.start)


# ===== RULES =====

def is_degree_line(line: str, settings: EngineSettings = DEFAULT_SETTINGS) -> bool:
    return len(line.strip()) < settings.degree_line_max_length and has_degree_keyword(line)


def _is_trigger(line: str, current: Optional[EntryDraft], settings: EngineSettings) -> bool:
    return is_degree_line(line, settings)


def _is_dated_school(line: str, current: Optional[EntryDraft], settings: EngineSettings) -> bool:
    return current is not None and not current.organization and has_year(line)


def _is_school(line: str, current: Optional[EntryDraft], settings: EngineSettings) -> bool:
    return current is not None and not current.organization


EDUCATION_RULES = (
    Rule(LineRole.TRIGGER, _is_trigger),
    Rule(LineRole.DATED_ORGANIZATION, _is_dated_school),
    Rule(LineRole.ORGANIZATION, _is_school),
)

EDUCATION_MACHINE = EntryMachine(
    "education",
    EDUCATION_RULES,
    transitions={
        LineRole.TRIGGER: _open_degree,
        LineRole.DATED_ORGANIZATION: _set_dated_school,
    },
)


def _to_entry(draft: EntryDraft, index: int) -> EducationEntry:
    return EducationEntry(
        id=f"edu-{index}",
        degree=draft.title,
        field=draft.field_of_study,
        school=draft.organization,
        end_date=draft.end_date,
    )


def extract_education(
    lines: List[str],
    span: SectionSpan,
    settings: EngineSettings = DEFAULT_SETTINGS,
) -> Tuple[EducationEntry, ...]:
    """
    Parse the education span into entries.

    Args:
        lines: All reconstructed lines of the document
        span: The education section span

    Returns:
        Education entries in document order (possibly empty)
    """
    drafts = EDUCATION_MACHINE.run(span_lines(lines, span), settings)
    return tuple(_to_entry(d, i) for i, d in enumerate(drafts, start=1))
