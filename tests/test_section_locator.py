from resume_engine.core.section_locator import (
    EMPTY_SPAN,
    is_terminator_header,
    locate_sections,
    match_section_header,
    span_lines,
)
from resume_engine.core.taxonomy import Section


def test_spans_run_to_next_header():
    lines = ["Jane", "SKILLS", "Python, SQL", "EXPERIENCE", "Engineer", "Acme"]
    spans = locate_sections(lines)

    assert span_lines(lines, spans[Section.SKILLS]) == ["Python, SQL"]
    assert span_lines(lines, spans[Section.EXPERIENCE]) == ["Engineer", "Acme"]


def test_missing_section_has_empty_span():
    spans = locate_sections(["Jane", "SKILLS", "Python"])
    assert spans[Section.EDUCATION] == EMPTY_SPAN
    assert not spans[Section.EDUCATION].found
    assert len(spans[Section.EDUCATION]) == 0


def test_span_is_capped_by_lookahead():
    lines = ["Skills"] + [f"Skill{i}" for i in range(30)]
    span = locate_sections(lines)[Section.SKILLS]
    assert len(span) == 15


def test_terminator_header_closes_span():
    lines = ["EXPERIENCE", "Developer", "CERTIFICATIONS", "AWS Solutions Architect"]
    span = locate_sections(lines)[Section.EXPERIENCE]
    assert span_lines(lines, span) == ["Developer"]


def test_terminator_must_be_whole_line():
    assert is_terminator_header("LANGUAGES")
    assert is_terminator_header("Languages:")
    assert not is_terminator_header("Languages: Python, Go")


def test_long_prose_is_not_a_header():
    assert match_section_header("Work Experience") is Section.EXPERIENCE
    assert match_section_header("Experience building distributed systems at scale for fintech clients") is None


def test_inline_remainder_is_kept():
    spans = locate_sections(["Skills: Python, SQL"])
    assert spans[Section.SKILLS].found
    assert spans[Section.SKILLS].inline == "Python, SQL"


def test_first_header_wins():
    lines = ["Projects", "Alpha", "Projects", "Beta"]
    span = locate_sections(lines)[Section.PROJECTS]
    assert span.header == 0
    assert span_lines(lines, span) == ["Alpha"]
