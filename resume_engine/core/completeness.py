"""
Completeness scoring for structured CV records.

Tells the editor how much of the CV is filled in and which sections the user
should still add. Placeholders written by the engine count as missing.

Score breakdown (sums to at most 90; result is capped at 100):
  Personal info   20  (name 5, email 5, phone 3, summary > 50 chars 7)
  Experience      30  (any 10, any achievements 10, two or more 10)
  Education       15
  Skills          15  (at least 5)
  Projects        10
"""

from typing import List

from resume_engine.core.schemas import NAME_PLACEHOLDER, SUMMARY_PLACEHOLDER, CVRecord


MIN_SKILLS = 5
MIN_SUMMARY_LENGTH = 50


class CompletenessCalculator:
    """Central place for all completeness logic."""

    @staticmethod
    def has_name(record: CVRecord) -> bool:
        name = record.personal_info.full_name.strip()
        return bool(name) and name != NAME_PLACEHOLDER

    @staticmethod
    def has_summary(record: CVRecord) -> bool:
        summary = record.personal_info.summary.strip()
        return bool(summary) and summary != SUMMARY_PLACEHOLDER

    @staticmethod
    def score(record: CVRecord) -> int:
        info = record.personal_info
        score = 0

        if CompletenessCalculator.has_name(record):
            score += 5
        if info.email:
            score += 5
        if info.phone:
            score += 3
        if CompletenessCalculator.has_summary(record) and len(info.summary) > MIN_SUMMARY_LENGTH:
            score += 7

        if record.experiences:
            score += 10
            if any(e.achievements for e in record.experiences):
                score += 10
            if len(record.experiences) >= 2:
                score += 10

        if record.education:
            score += 15
        if len(record.skills) >= MIN_SKILLS:
            score += 15
        if record.projects:
            score += 10

        return min(score, 100)

    @staticmethod
    def missing_fields(record: CVRecord) -> List[str]:
        missing: List[str] = []
        if not CompletenessCalculator.has_summary(record):
            missing.append("Professional Summary")
        if not record.experiences:
            missing.append("Work Experience")
        if not record.education:
            missing.append("Education")
        if len(record.skills) < MIN_SKILLS:
            missing.append(f"Skills (at least {MIN_SKILLS})")
        if not record.projects:
            missing.append("Projects")
        return missing
