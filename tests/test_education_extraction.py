"""Tests for education extraction."""

from resume_engine.core.cv_assembler import structure_cv
from resume_engine.core.education_parser import (
    extract_degree_from_text,
    extract_field_of_study_from_degree_line,
    has_degree_keyword,
    parse_degree_line,
)


def test_degree_and_field_are_split():
    line = "Bachelor of Science in Computer Science"
    assert extract_degree_from_text(line) == "Bachelor of Science"
    assert extract_field_of_study_from_degree_line(line) == "Computer Science"


def test_degree_line_with_school_and_year():
    draft = parse_degree_line("M.S. in Engineering, Stanford University, 2019")
    assert draft.title == "M.S."
    assert draft.field_of_study == "Engineering"
    assert draft.organization == "Stanford University"
    assert draft.end_date == "2019"


def test_acronym_school_on_degree_line():
    draft = parse_degree_line("B.S. Computer Science, MIT")
    assert draft.organization == "MIT"


def test_degree_keywords():
    assert has_degree_keyword("PhD in Physics")
    assert has_degree_keyword("MBA")
    assert not has_degree_keyword("Photography")
    assert not has_degree_keyword("Mastered Kubernetes")


def test_entries_with_schools_and_years():
    text = (
        "EDUCATION\n"
        "Bachelor of Science in Computer Science\n"
        "State University 2015 - 2019\n"
        "Master of Science\n"
        "MIT 2021\n"
    )
    first, second = structure_cv(text).education

    assert first.id == "edu-1"
    assert first.degree == "Bachelor of Science"
    assert first.field == "Computer Science"
    assert first.school == "State University"
    assert first.end_date == "2019"

    assert second.id == "edu-2"
    assert second.degree == "Master of Science"
    assert second.school == "MIT"
    assert second.end_date == "2021"


def test_school_without_year():
    (entry,) = structure_cv("Education\nBachelor of Arts\nUniversity of Toronto").education
    assert entry.school == "University of Toronto"
    assert entry.end_date == ""


def test_no_degree_line_means_no_entries():
    assert structure_cv("Education\nSelf-taught through online courses").education == ()


def test_field_named_like_a_section_header():
    (entry,) = structure_cv("EDUCATION\nBachelor of Science in Education\nState University 2016").education
    assert entry.degree == "Bachelor of Science"
    assert entry.field == "Education"
    assert entry.school == "State University"
    assert entry.end_date == "2016"
