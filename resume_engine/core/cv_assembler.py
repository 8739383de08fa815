"""
Assemble the structured CV record from raw resume text.

    raw text -> lines -> {personal info, section spans} -> section parsers -> CVRecord

structure_cv() is total: every input string, including "", yields a complete
CVRecord. Fields that cannot be recovered keep their documented defaults.
"""

import logging
from typing import Callable, Optional, TypeVar

from resume_engine.core.education_parser import extract_education
from resume_engine.core.experience_parser import extract_experiences
from resume_engine.core.line_reconstructor import reconstruct_lines
from resume_engine.core.personal_info import extract_personal_info
from resume_engine.core.project_parser import extract_projects
from resume_engine.core.schemas import CVRecord, PersonalInfo
from resume_engine.core.section_locator import EMPTY_SPAN, locate_sections
from resume_engine.core.settings import DEFAULT_SETTINGS, EngineSettings
from resume_engine.core.skills_parser import extract_skills
from resume_engine.core.taxonomy import Section

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _degrade(component: str, fn: Callable[[], T], default: T) -> T:
    # A heuristic blowing up on odd input costs one component, not the record.
    try:
        return fn()
    except Exception:
        logger.exception(f"{component} failed; using default")
        return default


def structure_cv(text: Optional[str], settings: EngineSettings = DEFAULT_SETTINGS) -> CVRecord:
    """
    Turn extracted resume text into a CVRecord.

    Pure and synchronous: no I/O, no shared state, safe to call concurrently.
    """
    text = text or ""
    lines = _degrade("line reconstruction", lambda: reconstruct_lines(text), [])
    spans = _degrade("section location", lambda: locate_sections(lines, settings), {})

    def span(section: Section):
        return spans.get(section, EMPTY_SPAN)

    record = CVRecord(
        personal_info=_degrade(
            "personal info",
            lambda: extract_personal_info(text, lines, settings),
            PersonalInfo(),
        ),
        experiences=_degrade(
            "experience",
            lambda: extract_experiences(lines, span(Section.EXPERIENCE), settings),
            (),
        ),
        education=_degrade(
            "education",
            lambda: extract_education(lines, span(Section.EDUCATION), settings),
            (),
        ),
        skills=_degrade(
            "skills",
            lambda: extract_skills(lines, span(Section.SKILLS), settings),
            (),
        ),
        projects=_degrade(
            "projects",
            lambda: extract_projects(lines, span(Section.PROJECTS), settings),
            (),
        ),
    )
    logger.debug(
        f"Structured CV: {len(lines)} lines, {len(record.experiences)} experiences, "
        f"{len(record.education)} education, {len(record.skills)} skills, {len(record.projects)} projects"
    )
    return record
