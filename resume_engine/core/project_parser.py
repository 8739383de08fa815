"""
Projects section parsing.

Project titles carry no role keyword, so any title-shaped line could open an
entry. To keep wrapped multi-line titles together, a new project may only start
once the current one has a description.
"""

import re
from dataclasses import replace
from typing import List, Optional, Tuple

from resume_engine.core.education_parser import has_degree_keyword
from resume_engine.core.entry_machine import EntryDraft, EntryMachine, LineRole, Rule
from resume_engine.core.experience_parser import looks_like_entry_title
from resume_engine.core.schemas import ProjectEntry
from resume_engine.core.section_locator import SectionSpan, span_lines
from resume_engine.core.settings import DEFAULT_SETTINGS, EngineSettings
from resume_engine.core.taxonomy import TECHNOLOGY_LABELS
from resume_engine.core.text_normalization import starts_with_bullet


URL_RE = re.compile(r"(?:https?://|www\.)[^\s)>\]]+|\b(?:github|gitlab)\.com/[^\s)>\]]+", re.IGNORECASE)
TECHNOLOGY_LABEL_RE = re.compile(
    r"^(?:" + "|".join(re.escape(k).replace(r"\ ", r"\s+") for k in TECHNOLOGY_LABELS) + r")\s*(?::|-|–)\s*",
    re.IGNORECASE,
)
TECH_SEPARATOR_RE = re.compile(r"\s*[,;|/•]\s*")


def _set_link(draft: EntryDraft, line: str) -> EntryDraft:
    m = URL_RE.search(line)
    return replace(draft, link=m.group(0).rstrip(".,;")) if m else draft


def _set_technologies(draft: EntryDraft, line: str) -> EntryDraft:
    listed = TECHNOLOGY_LABEL_RE.sub("", line.strip())
    found = tuple(t.strip() for t in TECH_SEPARATOR_RE.split(listed) if t.strip())
    return replace(draft, technologies=draft.technologies + found)


# ===== RULES =====

def _is_trigger(line: str, current: Optional[EntryDraft], settings: EngineSettings) -> bool:
    if current is not None and not current.description:
        return False
    if TECHNOLOGY_LABEL_RE.match(line.strip()) or URL_RE.search(line):
        return False
    return looks_like_entry_title(line, settings) and not has_degree_keyword(line)


def _is_achievement(line: str, current: Optional[EntryDraft], settings: EngineSettings) -> bool:
    return starts_with_bullet(line)


def _is_link(line: str, current: Optional[EntryDraft], settings: EngineSettings) -> bool:
    return current is not None and not current.link and bool(URL_RE.search(line))


def _is_technologies(line: str, current: Optional[EntryDraft], settings: EngineSettings) -> bool:
    return bool(TECHNOLOGY_LABEL_RE.match(line.strip()))


def _is_description(line: str, current: Optional[EntryDraft], settings: EngineSettings) -> bool:
    return (
        current is not None
        and not current.description
        and len(line.strip()) > settings.project_description_min_length
    )


def _is_title_continuation(line: str, current: Optional[EntryDraft], settings: EngineSettings) -> bool:
    return current is not None and not current.description and not current.achievements


def _is_description_continuation(line: str, current: Optional[EntryDraft], settings: EngineSettings) -> bool:
    return current is not None and bool(current.description)


PROJECT_RULES = (
    Rule(LineRole.TRIGGER, _is_trigger),
    Rule(LineRole.ACHIEVEMENT, _is_achievement),
    Rule(LineRole.LINK, _is_link),
    Rule(LineRole.TECHNOLOGIES, _is_technologies),
    Rule(LineRole.DESCRIPTION, _is_description),
    Rule(LineRole.TITLE_CONTINUATION, _is_title_continuation),
    Rule(LineRole.DESCRIPTION_CONTINUATION, _is_description_continuation),
)

PROJECT_MACHINE = EntryMachine(
    "projects",
    PROJECT_RULES,
    transitions={
        LineRole.LINK: _set_link,
        LineRole.TECHNOLOGIES: _set_technologies,
    },
)


def _to_entry(draft: EntryDraft, index: int) -> ProjectEntry:
    return ProjectEntry(
        id=f"proj-{index}",
        name=draft.title,
        description=draft.description,
        achievements=draft.achievements,
        technologies=draft.technologies,
        link=draft.link,
    )


def extract_projects(
    lines: List[str],
    span: SectionSpan,
    settings: EngineSettings = DEFAULT_SETTINGS,
) -> Tuple[ProjectEntry, ...]:
    drafts = PROJECT_MACHINE.run(span_lines(lines, span), settings)
    return tuple(_to_entry(d, i) for i, d in enumerate(drafts, start=1))
