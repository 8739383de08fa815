"""Tests for the DOCX/PDF text readers and text cleanup."""

from io import BytesIO

import pytest
from docx import Document

from resume_engine.core.docx_extractor import extract_docx_text
from resume_engine.core.errors import DocumentExtractionError
from resume_engine.core.pdf_extractor import extract_pdf_text
from resume_engine.core.text_normalization import clean_extracted_text, starts_with_bullet, strip_bullet


def test_clean_extracted_text():
    raw = "Jane   Doe \t\r\n\r\n\r\n\r\n  jane@x.com  "
    assert clean_extracted_text(raw) == "Jane Doe\n\njane@x.com"
    assert clean_extracted_text("") == ""


def test_bullet_helpers():
    assert starts_with_bullet("• Built X")
    assert starts_with_bullet("- Built X")
    assert not starts_with_bullet("-5% churn")
    assert not starts_with_bullet("Built X")
    assert strip_bullet("  •  Built X") == "Built X"


def test_docx_paragraphs_then_table_cells():
    doc = Document()
    doc.add_paragraph("Jane Doe")
    doc.add_paragraph("   ")
    doc.add_paragraph("Skills")
    table = doc.add_table(rows=1, cols=2)
    table.cell(0, 0).text = "Python"
    table.cell(0, 1).text = "SQL"
    buf = BytesIO()
    doc.save(buf)

    assert extract_docx_text(buf.getvalue()) == "Jane Doe\nSkills\nPython\nSQL"


def test_docx_merged_cells_are_read_once():
    doc = Document()
    table = doc.add_table(rows=1, cols=2)
    merged = table.cell(0, 0).merge(table.cell(0, 1))
    merged.text = "Python, SQL"
    buf = BytesIO()
    doc.save(buf)

    assert extract_docx_text(buf.getvalue()) == "Python, SQL"


def test_corrupt_docx_raises():
    with pytest.raises(DocumentExtractionError):
        extract_docx_text(b"not a zip")


def test_pdf_text_layer(minimal_pdf):
    text = extract_pdf_text(minimal_pdf(["Jane Doe", "jane@x.com"]))
    assert "Jane Doe" in text
    assert "jane@x.com" in text


def test_corrupt_pdf_raises():
    with pytest.raises(DocumentExtractionError):
        extract_pdf_text(b"not a pdf")
