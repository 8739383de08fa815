"""
Experience section parsing.

A new position starts on a title-like line ("Senior Software Engineer"); the
lines after it carry the company and dates, an optional one-line description,
and bulleted achievements.
"""

import re
from typing import List, Optional, Tuple

from resume_engine.core.dates import has_year
from resume_engine.core.entry_machine import EntryDraft, EntryMachine, LineRole, Rule
from resume_engine.core.schemas import ExperienceEntry
from resume_engine.core.section_locator import SectionSpan, span_lines
from resume_engine.core.settings import DEFAULT_SETTINGS, EngineSettings
from resume_engine.core.education_parser import has_degree_keyword
from resume_engine.core.taxonomy import ACTION_VERBS, INSTITUTION_KEYWORDS, ROLE_KEYWORDS
from resume_engine.core.text_normalization import starts_with_bullet


ROLE_KEYWORD_RE = re.compile(
    r"\b(?:" + "|".join(re.escape(k) for k in ROLE_KEYWORDS) + r")s?\b",
    re.IGNORECASE,
)
ACTION_VERB_RE = re.compile(
    r"^(?:" + "|".join(re.escape(v) for v in ACTION_VERBS) + r")\b",
    re.IGNORECASE,
)
INSTITUTION_RE = re.compile(
    r"\b(?:" + "|".join(re.escape(k) for k in INSTITUTION_KEYWORDS) + r")\b",
    re.IGNORECASE,
)


def looks_like_entry_title(line: str, settings: EngineSettings = DEFAULT_SETTINGS) -> bool:
    """
    Shape check shared by experience and project titles: starts with a capital
    letter, reasonable length, few words, and is not a finished sentence.
    """
    t = line.strip()
    if not t or not t[0].isalpha() or not t[0].isupper():
        return False
    if not settings.entry_title_min_length <= len(t) <= settings.entry_title_max_length:
        return False
    if len(t.split()) > settings.entry_title_max_words:
        return False
    if t.endswith("."):
        return False
    if ACTION_VERB_RE.match(t):
        return False
    return True


def is_job_title_line(line: str, settings: EngineSettings = DEFAULT_SETTINGS) -> bool:
    if not looks_like_entry_title(line, settings):
        return False
    if not ROLE_KEYWORD_RE.search(line):
        return False
    # "Teaching Assistant, State University" belongs to education
    if INSTITUTION_RE.search(line) or has_degree_keyword(line):
        return False
    return True


def _is_trigger(line: str, current: Optional[EntryDraft], settings: EngineSettings) -> bool:
    return is_job_title_line(line, settings)


def _needs_company(current: Optional[EntryDraft]) -> bool:
    return current is not None and not current.organization


def _is_dated_company(line: str, current: Optional[EntryDraft], settings: EngineSettings) -> bool:
    return _needs_company(current) and has_year(line)


def _is_company(line: str, current: Optional[EntryDraft], settings: EngineSettings) -> bool:
    return _needs_company(current)


def _is_achievement(line: str, current: Optional[EntryDraft], settings: EngineSettings) -> bool:
    return starts_with_bullet(line)


def _is_description(line: str, current: Optional[EntryDraft], settings: EngineSettings) -> bool:
    return (
        current is not None
        and not current.description
        and len(line.strip()) > settings.experience_description_min_length
    )


EXPERIENCE_RULES = (
    Rule(LineRole.TRIGGER, _is_trigger),
    Rule(LineRole.DATED_ORGANIZATION, _is_dated_company),
    Rule(LineRole.ORGANIZATION, _is_company),
    Rule(LineRole.ACHIEVEMENT, _is_achievement),
    Rule(LineRole.DESCRIPTION, _is_description),
)

EXPERIENCE_MACHINE = EntryMachine("experience", EXPERIENCE_RULES)


def _to_entry(draft: EntryDraft, index: int) -> ExperienceEntry:
    return ExperienceEntry(
        id=f"exp-{index}",
        position=draft.title,
        company=draft.organization,
        start_date=draft.start_date,
        end_date=draft.end_date,
        current=draft.current,
        description=draft.description,
        achievements=draft.achievements,
    )


def extract_experiences(
    lines: List[str],
    span: SectionSpan,
    settings: EngineSettings = DEFAULT_SETTINGS,
) -> Tuple[ExperienceEntry, ...]:
    drafts = EXPERIENCE_MACHINE.run(span_lines(lines, span), settings)
    return tuple(_to_entry(d, i) for i, d in enumerate(drafts, start=1))
