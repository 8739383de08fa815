"""
Tunable thresholds for the structuring engine.

The values below were picked empirically; they are knobs, not contracts.
Pass a different EngineSettings instance to structure_cv() to experiment.
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping

from resume_engine.core.taxonomy import Section


@dataclass(frozen=True)
class SectionLimits:
    header_max_length: int  # longer lines are prose, not headers
    max_lookahead: int  # span is capped at this many lines


def _default_section_limits() -> Mapping[Section, SectionLimits]:
    return MappingProxyType({
        Section.SKILLS: SectionLimits(header_max_length=100, max_lookahead=15),
        Section.EXPERIENCE: SectionLimits(header_max_length=50, max_lookahead=50),
        Section.EDUCATION: SectionLimits(header_max_length=50, max_lookahead=20),
        Section.PROJECTS: SectionLimits(header_max_length=50, max_lookahead=30),
        Section.SUMMARY: SectionLimits(header_max_length=50, max_lookahead=15),
    })


@dataclass(frozen=True)
class EngineSettings:
    sections: Mapping[Section, SectionLimits] = field(default_factory=_default_section_limits)
    terminator_header_max_length: int = 50

    # Personal info
    name_scan_lines: int = 3
    name_min_length: int = 2
    name_max_length: int = 50
    title_scan_lines: int = 8
    title_max_length: int = 100
    summary_scan_lines: int = 20
    summary_header_max_length: int = 50
    summary_follow_lines: int = 5
    summary_min_line_length: int = 50
    summary_max_length: int = 500

    # Skills
    skill_min_length: int = 2
    skill_max_length: int = 50

    # Entry triggers
    entry_title_min_length: int = 5
    entry_title_max_length: int = 150
    entry_title_max_words: int = 12
    degree_line_max_length: int = 150

    # Continuation lines
    experience_description_min_length: int = 20
    project_description_min_length: int = 50


DEFAULT_SETTINGS = EngineSettings()
