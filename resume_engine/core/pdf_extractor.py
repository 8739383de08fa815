import logging
import re
from io import BytesIO
from typing import Any, List, Optional, Tuple

import pdfplumber

from resume_engine.core.errors import DocumentExtractionError
from resume_engine.core.text_normalization import clean_extracted_text

logger = logging.getLogger(__name__)

X_TOLERANCE_RANGE = (1.5, 2, 2.5, 3)


def _words_to_text(page: Any, *, x_tolerance: float = 3, line_y_tolerance: float = 3) -> str:
    """
    Rebuild page text from word objects, grouping words into lines by their
    vertical position and joining them with single spaces.
    """
    words = page.extract_words(
        x_tolerance=x_tolerance,
        y_tolerance=2,
        keep_blank_chars=False,
        use_text_flow=True,
    )
    if not words:
        return ""

    words.sort(key=lambda w: (round(w["top"] / line_y_tolerance), w["x0"]))
    lines: List[str] = []
    current_key = None
    current_words: List[str] = []

    for w in words:
        key = round(w["top"] / line_y_tolerance)
        if current_key is None or key == current_key:
            current_words.append(w["text"])
        else:
            lines.append(" ".join(current_words))
            current_words = [w["text"]]
        current_key = key

    if current_words:
        lines.append(" ".join(current_words))
    return "\n".join(lines)


def _score_text(s: str) -> float:
    """
    Lower is better. Penalizes glued words (18+ letter tokens) and
    fragmentation (lots of single-letter tokens).
    """
    tokens = re.findall(r"[A-Za-z]+", s)
    if not tokens:
        return 1e9
    long_glued = sum(1 for t in tokens if len(t) >= 18)
    excessive_singles = max(0, sum(1 for t in tokens if len(t) == 1) - 10)
    return long_glued * 10 + excessive_singles * 3


def _extract_best(page: Any, x_tolerance_range: Optional[Tuple[float, ...]] = None) -> str:
    """Try several x_tolerance values and keep the cleanest page text."""
    candidates = []
    for xt in x_tolerance_range or X_TOLERANCE_RANGE:
        txt = _words_to_text(page, x_tolerance=xt)
        candidates.append((_score_text(txt), xt, txt))
    candidates.sort(key=lambda c: c[0])
    return candidates[0][2]


def extract_pdf_text(pdf_bytes: bytes) -> str:
    """
    Extract the text layer of a PDF. Pages are separated by a blank line.

    Scanned (image-only) PDFs yield "". OCR is out of scope.
    """
    try:
        with pdfplumber.open(BytesIO(pdf_bytes)) as pdf:
            pages = [_extract_best(page) for page in pdf.pages]
    except Exception as e:
        raise DocumentExtractionError(f"Not a readable PDF: {e}") from e

    logger.debug(f"PDF: {len(pages)} pages, {sum(1 for p in pages if p)} with text")
    return clean_extracted_text("\n\n".join(p for p in pages if p))
