"""
Recover contact identity fields from the top of a resume.

Email, phone and profile links are pattern matches over the raw text. Name,
title and summary are positional: they are looked for in the first handful of
reconstructed lines, anchored on the email line when there is one.
"""

import logging
import re
from typing import List, Optional

from resume_engine.core.schemas import NAME_PLACEHOLDER, SUMMARY_PLACEHOLDER, PersonalInfo
from resume_engine.core.section_locator import is_any_header
from resume_engine.core.settings import DEFAULT_SETTINGS, EngineSettings
from resume_engine.core.taxonomy import NAME_BLACKLIST, SUMMARY_KEYWORDS, TITLE_KEYWORDS

logger = logging.getLogger(__name__)


EMAIL_RE = re.compile(r"\b[A-Z0-9._%+-]+@[A-Z0-9.-]+\.[A-Z]{2,}\b", re.IGNORECASE)

# Phone regex: optional "+", up to two short prefix groups, then 1-3 groups of 3-4 digits.
# Handles: +44 20 7946 0958, (555) 123-4567, 555.123.4567, +1 555 123 4567
PHONE_RE = re.compile(
    r"(?<![\w+])"
    r"("
        r"\+?"
        r"(?:\(?\d{1,4}\)?[ .-]?){0,2}"  # Country / area code
        r"(?:\(?\d{3,4}\)?[ .-]?){0,2}"
        r"\d{3,4}"
    r")"
    r"(?![\w@])"
)
YEAR_GROUP_RE = re.compile(r"(?:19|20)\d{2}")

LINKEDIN_RE = re.compile(r"linkedin\.com/in/([A-Za-z0-9_%-]+)", re.IGNORECASE)
LINKEDIN_LABEL_RE = re.compile(r"\blinkedin\s*:\s*(\S+)", re.IGNORECASE)
GITHUB_RE = re.compile(r"github\.com/([A-Za-z0-9_-]+)", re.IGNORECASE)
GITHUB_LABEL_RE = re.compile(r"\bgithub\s*:\s*(\S+)", re.IGNORECASE)

LONG_DIGIT_RUN_RE = re.compile(r"\d{3,}")
NAME_BLACKLIST_RE = re.compile(
    r"\b(?:" + "|".join(re.escape(w) for w in sorted(NAME_BLACKLIST)) + r")\b",
    re.IGNORECASE,
)
TITLE_KEYWORD_RE = re.compile(
    r"\b(?:" + "|".join(re.escape(w) for w in TITLE_KEYWORDS) + r")s?\b",
    re.IGNORECASE,
)
SUMMARY_KEYWORD_RE = re.compile(
    r"\b(?:" + "|".join(re.escape(w) for w in SUMMARY_KEYWORDS) + r")\b",
    re.IGNORECASE,
)


def extract_email(text: str) -> str:
    m = EMAIL_RE.search(text)
    return m.group(0) if m else ""


def extract_phone(text: str) -> str:
    for m in PHONE_RE.finditer(text):
        candidate = m.group(1).strip(" .-")
        digits = re.sub(r"\D", "", candidate)
        if not 7 <= len(digits) <= 15:
            continue
        # "2019-2021", "2019 2020 2021" are date runs, not numbers
        if all(YEAR_GROUP_RE.fullmatch(g) for g in re.findall(r"\d+", candidate)):
            continue
        return candidate
    return ""


def _handle_from_label(value: str, url_re: re.Pattern) -> str:
    # "linkedin: linkedin.com/in/jane" and "linkedin: jane" both give "jane"
    m = url_re.search(value)
    if m:
        return m.group(1)
    return value.strip("/.,;()[]<>").rsplit("/", 1)[-1]


def extract_linkedin(text: str) -> str:
    m = LINKEDIN_RE.search(text)
    handle = m.group(1) if m else ""
    if not handle:
        label = LINKEDIN_LABEL_RE.search(text)
        handle = _handle_from_label(label.group(1), LINKEDIN_RE) if label else ""
    return f"https://linkedin.com/in/{handle}" if handle else ""


def extract_github(text: str) -> str:
    m = GITHUB_RE.search(text)
    handle = m.group(1) if m else ""
    if not handle:
        label = GITHUB_LABEL_RE.search(text)
        handle = _handle_from_label(label.group(1), GITHUB_RE) if label else ""
    return f"https://github.com/{handle}" if handle else ""


def looks_like_name(line: str, settings: EngineSettings = DEFAULT_SETTINGS) -> bool:
    t = line.strip()
    if not settings.name_min_length <= len(t) <= settings.name_max_length:
        return False
    if "@" in t:
        return False
    if LONG_DIGIT_RUN_RE.search(t):
        return False
    if NAME_BLACKLIST_RE.search(t):
        return False
    return True


def _find_name(lines: List[str], email: str, settings: EngineSettings) -> Optional[int]:
    email_idx = None
    if email:
        email_idx = next((i for i, ln in enumerate(lines) if email in ln), None)

    # Preferred: lines above the email (strongest positional signal)
    if email_idx is not None:
        candidates = range(email_idx)
    else:
        candidates = range(min(settings.name_scan_lines, len(lines)))

    for idx in candidates:
        if looks_like_name(lines[idx], settings):
            return idx
    return None


def _find_title(lines: List[str], name_idx: Optional[int], settings: EngineSettings) -> str:
    for idx, line in enumerate(lines[:settings.title_scan_lines]):
        if idx == name_idx:
            continue
        if len(line) < settings.title_max_length and TITLE_KEYWORD_RE.search(line):
            return line
    return ""


def _find_summary(lines: List[str], settings: EngineSettings) -> str:
    for idx, line in enumerate(lines[:settings.summary_scan_lines]):
        if len(line) >= settings.summary_header_max_length or not SUMMARY_KEYWORD_RE.search(line):
            continue

        parts: List[str] = []
        for follow in lines[idx + 1: idx + 1 + settings.summary_follow_lines]:
            if is_any_header(follow, settings):
                break
            if len(follow) > settings.summary_min_line_length:
                parts.append(follow)

        summary = " ".join(parts)[:settings.summary_max_length].strip()
        if summary:
            return summary
        logger.debug(f"Summary header at line {idx} has no qualifying body lines")
        return ""
    return ""


def extract_personal_info(
    text: str,
    lines: List[str],
    settings: EngineSettings = DEFAULT_SETTINGS,
) -> PersonalInfo:
    """
    Build PersonalInfo from the raw text and its reconstructed lines.

    Never fails: anything that cannot be found falls back to "" or to the
    documented placeholder.
    """
    email = extract_email(text)
    name_idx = _find_name(lines, email, settings)

    info = PersonalInfo(
        full_name=lines[name_idx] if name_idx is not None else NAME_PLACEHOLDER,
        title=_find_title(lines, name_idx, settings),
        email=email,
        phone=extract_phone(text),
        linkedin=extract_linkedin(text),
        github=extract_github(text),
        summary=_find_summary(lines, settings) or SUMMARY_PLACEHOLDER,
    )
    logger.debug(f"Personal info: name_found={name_idx is not None}, email_found={bool(email)}")
    return info
