"""
AI-first CV structuring with the rule-based engine as guaranteed fallback.

The hosted model gives better structure when it is up; when it is missing,
slow, rate-limited or returns junk, the user still gets an editable record from
structure_cv(). Callers never see an AI failure, only a warning.
"""

import inspect
import json
import logging
import re
from typing import Any, Awaitable, Callable, Dict, List, Mapping, Optional, Union

from resume_engine.core.completeness import CompletenessCalculator
from resume_engine.core.cv_assembler import structure_cv
from resume_engine.core.errors import AIServiceError, StructuringError
from resume_engine.core.rate_limiter import AIRateLimiter
from resume_engine.core.schemas import AnalysisResult, CVRecord, StructuringSource
from resume_engine.core.settings import DEFAULT_SETTINGS, EngineSettings
from resume_engine.core.taxonomy import SECTION_KEYWORDS, SKILL_CATEGORIES, SKILL_CATEGORY_OTHER

logger = logging.getLogger(__name__)

# Receives the (truncated) resume text, returns the model's JSON text or an
# already-decoded mapping. May be sync or async.
AIStructurer = Callable[[str], Union[Awaitable[Union[str, Mapping[str, Any]]], str, Mapping[str, Any]]]

MAX_AI_INPUT_CHARS = 10_000
FALLBACK_WARNING = "Basic parsing used (AI temporarily unavailable)"

CODE_FENCE_RE = re.compile(r"^```(?:json)?\s*|\s*```$", re.IGNORECASE)

VALID_CATEGORIES = {category for category, _ in SKILL_CATEGORIES} | {SKILL_CATEGORY_OTHER}
CATEGORY_ALIASES = {
    "programming": "Languages",
    "programming languages": "Languages",
    "cloud": "Tools",
    "devops": "Tools",
    "libraries": "Frameworks",
}
SENTENCE_WORDS_RE = re.compile(r"\b(?:and|the|with|for|using|to|in|on|at|of)\b", re.IGNORECASE)
MAX_SKILL_NAME_LENGTH = 50
MAX_PROJECT_NAME_LENGTH = 120
DESCRIPTION_STARTERS_RE = re.compile(
    r"^(?:Built|Created|Developed|Designed|Implemented|Established|Launched|Produced|Engineered|Constructed|Wrote|Made)\s",
    re.IGNORECASE,
)
HEADER_NAMES = {k for keywords in SECTION_KEYWORDS.values() for k in keywords}


def parse_json_response(text: str) -> Dict[str, Any]:
    """Decode a model reply, tolerating ```json fences around it."""
    cleaned = CODE_FENCE_RE.sub("", text.strip())
    try:
        data = json.loads(cleaned)
    except json.JSONDecodeError as e:
        raise AIServiceError(f"Model returned invalid JSON: {e}") from e
    if not isinstance(data, dict):
        raise AIServiceError(f"Model returned {type(data).__name__}, expected an object")
    return data


def _drop_nulls(value: Any) -> Any:
    # Models love "linkedin": null; let the schema defaults apply instead.
    if isinstance(value, dict):
        return {k: _drop_nulls(v) for k, v in value.items() if v is not None}
    if isinstance(value, list):
        return [_drop_nulls(v) for v in value if v is not None]
    return value


def _normalize_category(category: Any) -> str:
    text = str(category or "").strip()
    if text in VALID_CATEGORIES:
        return text
    return CATEGORY_ALIASES.get(text.lower(), SKILL_CATEGORY_OTHER)


def _prepare_payload(payload: Mapping[str, Any]) -> Dict[str, Any]:
    data = _drop_nulls(dict(payload))
    for key, prefix in (("experiences", "exp"), ("education", "edu"), ("skills", "skill"), ("projects", "proj")):
        items = [item for item in data.get(key, []) if isinstance(item, dict)]
        for i, item in enumerate(items, start=1):
            item["id"] = str(item.get("id") or f"{prefix}-{i}")
            if key == "skills":
                item["category"] = _normalize_category(item.get("category"))
        data[key] = items
    return data


def _is_valid_skill_name(name: str) -> bool:
    name = name.strip()
    if not name or len(name) > MAX_SKILL_NAME_LENGTH:
        return False
    # "Worked with the team on deployments" is a sentence, not a skill
    if SENTENCE_WORDS_RE.search(name) and len(name.split()) > 3:
        return False
    return True


def _is_valid_project_name(name: str) -> bool:
    name = name.strip()
    if not name or len(name) > MAX_PROJECT_NAME_LENGTH:
        return False
    if name.lower() in HEADER_NAMES:
        return False
    if DESCRIPTION_STARTERS_RE.match(name):
        return False
    return True


def clean_ai_record(record: CVRecord) -> CVRecord:
    """Drop skills/projects that are clearly mis-parsed and renumber ids."""
    skills = [s for s in record.skills if _is_valid_skill_name(s.name)]
    projects = [p for p in record.projects if _is_valid_project_name(p.name)]

    dropped = (len(record.skills) - len(skills), len(record.projects) - len(projects))
    if any(dropped):
        logger.debug(f"Cleaned AI record: dropped {dropped[0]} skills, {dropped[1]} projects")

    return record.model_copy(update={
        "skills": tuple(s.model_copy(update={"id": f"skill-{i}"}) for i, s in enumerate(skills, start=1)),
        "projects": tuple(p.model_copy(update={"id": f"proj-{i}"}) for i, p in enumerate(projects, start=1)),
    })


async def structure_with_ai(text: str, ai_structurer: AIStructurer) -> CVRecord:
    """Run the AI path. Raises on any failure; analyze_cv() handles the fallback."""
    reply = ai_structurer(text[:MAX_AI_INPUT_CHARS])
    if inspect.isawaitable(reply):
        reply = await reply

    if isinstance(reply, str):
        payload = parse_json_response(reply)
    elif isinstance(reply, Mapping):
        payload = reply
    else:
        raise AIServiceError(f"AI structurer returned {type(reply).__name__}")

    record = CVRecord.model_validate(_prepare_payload(payload))
    return clean_ai_record(record)


def _analysis(record: CVRecord, source: StructuringSource, warnings: Optional[List[str]] = None) -> AnalysisResult:
    return AnalysisResult(
        cv=record,
        score=CompletenessCalculator.score(record),
        missing_fields=CompletenessCalculator.missing_fields(record),
        source=source,
        warnings=warnings or [],
    )


async def analyze_cv(
    text: str,
    ai_structurer: Optional[AIStructurer] = None,
    settings: EngineSettings = DEFAULT_SETTINGS,
    limiter: Optional[AIRateLimiter] = None,
) -> AnalysisResult:
    """
    Structure resume text, preferring the AI path when one is configured.

    Any AI failure (provider error, rate limit, quota, bad JSON, schema
    mismatch, network) is logged and replaced by the rule-based result. With a
    limiter, provider rate limits are retried with backoff and a blocked
    limiter skips the AI call entirely.
    """
    if ai_structurer is None:
        logger.debug("No AI structurer configured, using rule-based parser")
        return _analysis(structure_cv(text, settings), "rules")

    try:
        if limiter is None:
            record = await structure_with_ai(text, ai_structurer)
        else:
            record = await limiter.call(lambda: structure_with_ai(text, ai_structurer))
    except StructuringError as e:
        logger.warning(f"AI structuring failed ({e.code}): {e}. Falling back to rule-based parser")
        return _analysis(structure_cv(text, settings), "rules", [FALLBACK_WARNING, e.user_message])
    except Exception:
        logger.warning("AI structuring failed. Falling back to rule-based parser", exc_info=True)
        return _analysis(structure_cv(text, settings), "rules", [FALLBACK_WARNING])

    logger.info(f"AI structuring succeeded: {len(record.experiences)} experiences, {len(record.skills)} skills")
    return _analysis(record, "ai")
