import re
from dataclasses import dataclass
from typing import Optional


MONTHS = (
    r"(?:Jan|Feb|Mar|Apr|May|Jun|Jul|Aug|Sep|Sept|Oct|Nov|Dec|January|February|March|April"
    r"|June|July|August|September|October|November|December)\.?"
)

# One date: "January 2024", "Jan. 2024", "01/2024", "2024"
SINGLE_DATE = rf"\b(?:{MONTHS}\s+\d{{4}}|\d{{1,2}}[/.-]\d{{4}}|\d{{4}})\b"

ONGOING = r"(?:present|current|now)"

# Date patterns (relaxed, capture many formats)
# Examples: "January 2024-Present", "01/2024 - 12/2025", "Jan 2020 - Dec 2021", "2020 to 2021"
DATE_RANGE_RE = re.compile(
    rf"(?P<start>{SINGLE_DATE})\s*(?:-|–|—|to)\s*(?P<end>{ONGOING}\b|{SINGLE_DATE})",
    re.IGNORECASE,
)
SINGLE_DATE_RE = re.compile(rf"(?P<start>{SINGLE_DATE})", re.IGNORECASE)
YEAR_RE = re.compile(r"\b(?:19|20)\d{2}\b")
ONGOING_RE = re.compile(rf"^{ONGOING}$", re.IGNORECASE)


@dataclass(frozen=True)
class DateRange:
    start: str
    end: str
    current: bool
    offset: int  # where the date text begins in the source line


def has_year(text: str) -> bool:
    return bool(YEAR_RE.search(text))


def parse_date_range(text: str) -> Optional[DateRange]:
    """
    Find a date range (or a lone date) in a line.

    The end date is returned exactly as written ("Present", "PRESENT",
    "Dec 2021"); `current` is True when it reads as present/current/now.
    Returns None when the line holds no recognizable date.
    """
    m = DATE_RANGE_RE.search(text)
    if m:
        end = m.group("end").strip()
        return DateRange(
            start=m.group("start").strip(),
            end=end,
            current=bool(ONGOING_RE.match(end)),
            offset=m.start(),
        )

    m = SINGLE_DATE_RE.search(text)
    if m and has_year(m.group("start")):
        return DateRange(start=m.group("start").strip(), end="", current=False, offset=m.start())
    return None
