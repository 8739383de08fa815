from io import BytesIO

from docx import Document
from fastapi.testclient import TestClient

from resume_engine.core.rate_limiter import AIRateLimiter
from resume_engine.main import app

client = TestClient(app)

DOCX_TYPE = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"

RESUME = b"""Jane Doe
jane@x.com
EXPERIENCE
Software Engineer
Acme Corp 2020 - Present
- Built X
- Shipped Y
EDUCATION
Bachelor of Science
MIT 2016
"""


def test_health():
    r = client.get("/health")
    assert r.status_code == 200
    assert r.json() == {"status": "ok", "aiConfigured": False, "aiBlocked": False}


def test_structure_txt_upload():
    files = {"file": ("resume.txt", RESUME, "text/plain")}
    r = client.post("/structure", files=files)
    assert r.status_code == 200
    data = r.json()

    assert data["source"] == "rules"
    assert data["cv"]["personalInfo"]["fullName"] == "Jane Doe"
    assert data["cv"]["experiences"][0]["achievements"] == ["Built X", "Shipped Y"]
    assert data["cv"]["experiences"][0]["current"] is True
    assert data["cv"]["education"][0]["school"] == "MIT"
    assert "Projects" in data["missingFields"]
    assert 0 <= data["score"] <= 100


def test_structure_docx_upload_reads_tables():
    doc = Document()
    doc.add_paragraph("Jane Doe")
    doc.add_paragraph("EXPERIENCE")
    doc.add_paragraph("Software Engineer")
    doc.add_paragraph("Acme Corp 2020 - Present")
    doc.add_paragraph("- Built X")
    table = doc.add_table(rows=1, cols=2)
    table.cell(0, 0).text = "jane.doe@example.com"
    table.cell(0, 1).text = "(555) 123-4567"

    buf = BytesIO()
    doc.save(buf)

    files = {"file": ("resume.docx", buf.getvalue(), DOCX_TYPE)}
    r = client.post("/structure", files=files)
    assert r.status_code == 200
    info = r.json()["cv"]["personalInfo"]

    assert info["fullName"] == "Jane Doe"
    assert info["email"] == "jane.doe@example.com"
    assert info["phone"] == "(555) 123-4567"
    assert r.json()["cv"]["experiences"][0]["company"] == "Acme Corp"


def test_structure_text_endpoint():
    r = client.post("/structure/text", json={"text": RESUME.decode()})
    assert r.status_code == 200
    assert r.json()["cv"]["personalInfo"]["email"] == "jane@x.com"


def test_structure_uses_configured_ai(monkeypatch):
    async def structurer(text):
        return {"personalInfo": {"fullName": "Jane Q. Doe"}}

    monkeypatch.setattr(app.state, "ai_structurer", structurer)
    r = client.post("/structure/text", json={"text": RESUME.decode()})
    assert r.status_code == 200
    assert r.json()["source"] == "ai"
    assert r.json()["cv"]["personalInfo"]["fullName"] == "Jane Q. Doe"


def test_empty_file_rejected():
    r = client.post("/structure", files={"file": ("resume.txt", b"", "text/plain")})
    assert r.status_code == 400


def test_unsupported_type_rejected():
    r = client.post("/structure", files={"file": ("photo.png", b"\x89PNG", "image/png")})
    assert r.status_code == 415


def test_blank_text_file_rejected():
    r = client.post("/structure", files={"file": ("resume.txt", b"   \n  ", "text/plain")})
    assert r.status_code == 422


def test_corrupt_docx_rejected():
    r = client.post("/structure", files={"file": ("resume.docx", b"not a zip", DOCX_TYPE)})
    assert r.status_code == 422


def test_structure_pdf_upload(minimal_pdf):
    pdf = minimal_pdf(["Jane Doe", "jane@x.com", "Skills", "Python, SQL"])
    r = client.post("/structure", files={"file": ("resume.pdf", pdf, "application/pdf")})
    assert r.status_code == 200
    cv = r.json()["cv"]
    assert cv["personalInfo"]["fullName"] == "Jane Doe"
    assert [s["name"] for s in cv["skills"]] == ["Python", "SQL"]


def test_blocked_limiter_falls_back_and_shows_in_health(monkeypatch):
    async def structurer(text):
        return {"personalInfo": {"fullName": "Jane Q. Doe"}}

    limiter = AIRateLimiter()
    limiter.block(600)
    monkeypatch.setattr(app.state, "ai_structurer", structurer)
    monkeypatch.setattr(app.state, "ai_limiter", limiter)

    assert client.get("/health").json()["aiBlocked"] is True
    r = client.post("/structure/text", json={"text": RESUME.decode()})
    assert r.status_code == 200
    assert r.json()["source"] == "rules"
    assert r.json()["warnings"][1] == "AI service is temporarily busy. Please try again in 10 minutes."
