"""Tests for skills extraction and categorization."""

from resume_engine.core.cv_assembler import structure_cv
from resume_engine.core.skills_parser import categorize_skill, tokenize_skills


def _skills(text):
    return [(s.name, s.category) for s in structure_cv(text).skills]


def test_skills_are_split_and_categorized():
    text = "Jane Doe\nSkills\nPython, Django, PostgreSQL | Docker; Figma\nLeadership"
    assert _skills(text) == [
        ("Python", "Languages"),
        ("Django", "Frameworks"),
        ("PostgreSQL", "Databases"),
        ("Docker", "Tools"),
        ("Figma", "Tools"),
        ("Leadership", "Other"),
    ]


def test_skill_ids_are_sequential():
    record = structure_cv("Skills\nPython, Go, Rust")
    assert [s.id for s in record.skills] == ["skill-1", "skill-2", "skill-3"]


def test_inline_skills_on_header_line():
    assert [name for name, _ in _skills("Skills: Python, SQL")] == ["Python", "SQL"]


def test_label_prefixes_are_removed():
    text = "Technical Skills\nLanguages: Python, Go\nDatabases: Redis"
    assert [name for name, _ in _skills(text)] == ["Python", "Go", "Redis"]


def test_duplicates_are_dropped_case_insensitively():
    assert tokenize_skills("Python, python, PYTHON, Go") == ["Python", "Go"]


def test_single_character_tokens_are_dropped():
    assert tokenize_skills("C, Go") == ["Go"]


def test_no_skills_section():
    assert structure_cv("Jane Doe\njane@x.com").skills == ()


def test_categorize_is_case_insensitive():
    assert categorize_skill("KUBERNETES") == "Tools"
    assert categorize_skill("Node.js") == "Frameworks"
    assert categorize_skill("Negotiation") == "Other"
