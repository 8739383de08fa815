import logging
from io import BytesIO
from typing import List
from zipfile import BadZipFile

from docx import Document
from docx.opc.exceptions import PackageNotFoundError

from resume_engine.core.errors import DocumentExtractionError
from resume_engine.core.text_normalization import clean_extracted_text

logger = logging.getLogger(__name__)


def extract_docx_text(docx_bytes: bytes) -> str:
    """
    Extract plain text from a DOCX, one paragraph per line.

    Table cells follow the body paragraphs; many templates put contact details
    or the skills grid in a table.
    """
    try:
        doc = Document(BytesIO(docx_bytes))
    except (BadZipFile, PackageNotFoundError, KeyError, ValueError) as e:
        raise DocumentExtractionError(f"Not a readable DOCX: {e}") from e

    lines: List[str] = [p.text for p in doc.paragraphs if (p.text or "").strip()]

    seen_cells = set()
    for table in doc.tables:
        for row in table.rows:
            for cell in row.cells:
                # merged cells show up once per grid position
                if cell._tc in seen_cells:
                    continue
                seen_cells.add(cell._tc)
                text = (cell.text or "").strip()
                if text:
                    lines.append(text)

    logger.debug(f"DOCX: {len(doc.paragraphs)} paragraphs, {len(doc.tables)} tables")
    return clean_extracted_text("\n".join(lines))
