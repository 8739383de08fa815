import re
import logging
from typing import List, Tuple

from resume_engine.core.schemas import Skill
from resume_engine.core.section_locator import SectionSpan, span_lines
from resume_engine.core.settings import DEFAULT_SETTINGS, EngineSettings
from resume_engine.core.taxonomy import SKILL_CATEGORIES, SKILL_CATEGORY_OTHER
from resume_engine.core.text_normalization import strip_bullet

logger = logging.getLogger(__name__)

SKILL_SEPARATOR_RE = re.compile(r"[,;|•●▪◦■‣\n]")
# "Languages: Python" -> "Python"; leaves "C++" and "Node.js" alone
LABEL_PREFIX_RE = re.compile(r"^[A-Za-z][A-Za-z &/]{0,30}:\s*")


def categorize_skill(name: str) -> str:
    key = name.strip().lower()
    for category, keywords in SKILL_CATEGORIES:
        if key in keywords:
            return category
    return SKILL_CATEGORY_OTHER


def tokenize_skills(text: str, settings: EngineSettings = DEFAULT_SETTINGS) -> List[str]:
    """Split a skills block into clean, de-duplicated tokens (original order)."""
    tokens: List[str] = []
    seen = set()
    for part in SKILL_SEPARATOR_RE.split(text):
        token = LABEL_PREFIX_RE.sub("", strip_bullet(part)).strip()
        if not settings.skill_min_length <= len(token) <= settings.skill_max_length:
            continue
        if token.lower() in seen:
            continue
        seen.add(token.lower())
        tokens.append(token)
    return tokens


def extract_skills(
    lines: List[str],
    span: SectionSpan,
    settings: EngineSettings = DEFAULT_SETTINGS,
) -> Tuple[Skill, ...]:
    if not span.found:
        return ()

    block = "\n".join([span.inline] + span_lines(lines, span))
    skills = tuple(
        Skill(id=f"skill-{i}", name=token, category=categorize_skill(token))
        for i, token in enumerate(tokenize_skills(block, settings), start=1)
    )
    logger.debug(f"Extracted {len(skills)} skills")
    return skills
