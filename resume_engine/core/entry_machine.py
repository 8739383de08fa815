"""
Table-driven state machine shared by the experience, education and project parsers.

Each section walks its lines with a single "current entry" slot. Instead of a
cascade of ifs, a section declares an ordered rule table: the first rule whose
predicate holds decides the line's role, and the role's transition produces the
next accumulator. Drafts are frozen; every transition returns a new one.

    lines --fold--> (completed drafts, current draft) --flush--> drafts
"""

import logging
import re
from dataclasses import dataclass, replace
from enum import Enum
from functools import reduce
from typing import Callable, Dict, Iterable, NamedTuple, Optional, Sequence, Tuple

from resume_engine.core.dates import parse_date_range
from resume_engine.core.settings import EngineSettings
from resume_engine.core.text_normalization import collapse_whitespace, strip_bullet

logger = logging.getLogger(__name__)


class LineRole(str, Enum):
    TRIGGER = "trigger"
    DATED_ORGANIZATION = "dated_organization"
    ORGANIZATION = "organization"
    ACHIEVEMENT = "achievement"
    DESCRIPTION = "description"
    LINK = "link"
    TECHNOLOGIES = "technologies"
    TITLE_CONTINUATION = "title_continuation"
    DESCRIPTION_CONTINUATION = "description_continuation"
    SKIP = "skip"


@dataclass(frozen=True)
class EntryDraft:
    title: str = ""
    organization: str = ""
    start_date: str = ""
    end_date: str = ""
    current: bool = False
    description: str = ""
    achievements: Tuple[str, ...] = ()
    technologies: Tuple[str, ...] = ()
    field_of_study: str = ""
    link: str = ""


# (line, current draft or None, settings) -> bool
Predicate = Callable[[str, Optional[EntryDraft], EngineSettings], bool]
# (current draft, line) -> new draft
Transition = Callable[[EntryDraft, str], EntryDraft]


class Rule(NamedTuple):
    role: LineRole
    applies: Predicate


class _Fold(NamedTuple):
    done: Tuple[EntryDraft, ...]
    current: Optional[EntryDraft]


ORG_TRAILING_RE = re.compile(r"[\s,;:|@(\[\-–—]+$")


# ===== STANDARD TRANSITIONS =====

def open_entry(draft: EntryDraft, line: str) -> EntryDraft:
    return EntryDraft(title=line.strip())


def set_dated_organization(draft: EntryDraft, line: str) -> EntryDraft:
    text = strip_bullet(line)
    dates = parse_date_range(text)
    if dates is None:
        return replace(draft, organization=text)
    organization = ORG_TRAILING_RE.sub("", text[:dates.offset]).strip()
    return replace(
        draft,
        organization=organization,
        start_date=dates.start,
        end_date=dates.end,
        current=dates.current,
    )


def set_organization(draft: EntryDraft, line: str) -> EntryDraft:
    return replace(draft, organization=strip_bullet(line))


def add_achievement(draft: EntryDraft, line: str) -> EntryDraft:
    text = strip_bullet(line)
    if not text:
        return draft
    return replace(draft, achievements=draft.achievements + (text,))


def set_description(draft: EntryDraft, line: str) -> EntryDraft:
    return replace(draft, description=line.strip())


def extend_title(draft: EntryDraft, line: str) -> EntryDraft:
    return replace(draft, title=collapse_whitespace(f"{draft.title} {line}"))


def extend_description(draft: EntryDraft, line: str) -> EntryDraft:
    return replace(draft, description=collapse_whitespace(f"{draft.description} {line}"))


def skip_line(draft: EntryDraft, line: str) -> EntryDraft:
    return draft


STANDARD_TRANSITIONS: Dict[LineRole, Transition] = {
    LineRole.TRIGGER: open_entry,
    LineRole.DATED_ORGANIZATION: set_dated_organization,
    LineRole.ORGANIZATION: set_organization,
    LineRole.ACHIEVEMENT: add_achievement,
    LineRole.DESCRIPTION: set_description,
    LineRole.TITLE_CONTINUATION: extend_title,
    LineRole.DESCRIPTION_CONTINUATION: extend_description,
    LineRole.SKIP: skip_line,
}


class EntryMachine:
    """
    Fold a section's lines into entry drafts.

    Lines seen before the first TRIGGER have no entry to attach to and are
    skipped. A TRIGGER flushes the open draft, so an entry made of a title line
    alone is still emitted.
    """

    def __init__(
        self,
        name: str,
        rules: Sequence[Rule],
        transitions: Optional[Dict[LineRole, Transition]] = None,
    ):
        self.name = name
        self.rules = tuple(rules)
        self.transitions = {**STANDARD_TRANSITIONS, **(transitions or {})}

    def classify(self, line: str, current: Optional[EntryDraft], settings: EngineSettings) -> LineRole:
        for rule in self.rules:
            if rule.applies(line, current, settings):
                return rule.role
        return LineRole.SKIP

    def run(self, lines: Iterable[str], settings: EngineSettings) -> Tuple[EntryDraft, ...]:
        def step(acc: _Fold, line: str) -> _Fold:
            role = self.classify(line, acc.current, settings)
            if role is LineRole.TRIGGER:
                done = acc.done + ((acc.current,) if acc.current is not None else ())
                return _Fold(done, self.transitions[LineRole.TRIGGER](EntryDraft(), line))
            if acc.current is None:
                return acc
            return _Fold(acc.done, self.transitions[role](acc.current, line))

        final = reduce(step, lines, _Fold((), None))
        drafts = final.done + ((final.current,) if final.current is not None else ())
        logger.debug(f"{self.name}: {len(drafts)} entries")
        return drafts
