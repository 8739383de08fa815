import logging

from fastapi import APIRouter, File, HTTPException, Request, UploadFile

from resume_engine.core.analyzer import analyze_cv
from resume_engine.core.docx_extractor import extract_docx_text
from resume_engine.core.errors import DocumentExtractionError
from resume_engine.core.pdf_extractor import extract_pdf_text
from resume_engine.core.schemas import AnalysisResult, StructureTextRequest

logger = logging.getLogger(__name__)

router = APIRouter(tags=["structure"])

DOCX_CONTENT_TYPE = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"
TEXT_CONTENT_TYPES = {"text/plain", "text/markdown"}


def _ai_structurer(request: Request):
    return getattr(request.app.state, "ai_structurer", None)


def _ai_limiter(request: Request):
    return getattr(request.app.state, "ai_limiter", None)


def _extract_text(raw: bytes, filename: str, content_type: str) -> str:
    if filename.endswith(".docx") or content_type == DOCX_CONTENT_TYPE:
        return extract_docx_text(raw)
    if filename.endswith(".pdf") or content_type == "application/pdf":
        return extract_pdf_text(raw)
    if content_type in TEXT_CONTENT_TYPES or filename.endswith((".txt", ".md")):
        return raw.decode("utf-8", errors="replace")
    raise HTTPException(status_code=415, detail=f"Unsupported content type: {content_type or filename}")


@router.post(
    "/structure",
    response_model=AnalysisResult,
    response_model_by_alias=True,
    summary="Structure Resume File",
    description="Extract text from a resume file (DOCX, PDF, or TXT) and structure it into an editable CV record.",
    responses={
        400: {"description": "Empty file uploaded"},
        415: {"description": "Unsupported file format"},
        422: {"description": "File has no extractable text"},
    },
)
async def structure_resume(
    request: Request,
    file: UploadFile = File(..., description="Resume file (DOCX, PDF, or TXT format)"),
):
    """
    **Supported formats:**
    - DOCX (.docx)
    - PDF (.pdf) - text layer only, OCR not supported
    - TXT / Markdown (.txt, .md)

    Uses the configured AI structurer when available and falls back to the
    rule-based parser otherwise; `source` tells which one produced the record.
    """
    raw = await file.read()
    if not raw:
        raise HTTPException(status_code=400, detail="Empty file uploaded.")

    filename = (file.filename or "").lower()
    content_type = (file.content_type or "").lower()

    try:
        text = _extract_text(raw, filename, content_type)
    except DocumentExtractionError as e:
        logger.warning(f"Extraction failed for {filename!r}: {e}")
        raise HTTPException(status_code=422, detail=e.user_message) from e

    if not text.strip():
        raise HTTPException(
            status_code=422,
            detail="File appears to have no extractable text. OCR is not supported.",
        )

    return await analyze_cv(text, _ai_structurer(request), limiter=_ai_limiter(request))


@router.post(
    "/structure/text",
    response_model=AnalysisResult,
    response_model_by_alias=True,
    summary="Structure Resume Text",
    description="Structure already-extracted resume text into an editable CV record.",
)
async def structure_text(request: Request, body: StructureTextRequest):
    return await analyze_cv(body.text, _ai_structurer(request), limiter=_ai_limiter(request))
