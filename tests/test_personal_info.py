"""Tests for contact and identity extraction."""

from resume_engine.core.line_reconstructor import reconstruct_lines
from resume_engine.core.personal_info import (
    extract_email,
    extract_github,
    extract_linkedin,
    extract_personal_info,
    extract_phone,
    looks_like_name,
)
from resume_engine.core.schemas import NAME_PLACEHOLDER, SUMMARY_PLACEHOLDER


def _info(text):
    return extract_personal_info(text, reconstruct_lines(text))


def test_extract_email():
    assert extract_email("Contact: jane.doe@example.com | Boston") == "jane.doe@example.com"
    assert extract_email("no email here") == ""


def test_extract_phone_formats():
    assert extract_phone("Call (555) 123-4567 today") == "(555) 123-4567"
    assert extract_phone("555.123.4567") == "555.123.4567"
    assert extract_phone("+44 20 7946 0958") == "+44 20 7946 0958"


def test_extract_phone_rejects_short_numbers_and_year_ranges():
    assert extract_phone("Phone: 12345") == ""
    assert extract_phone("2019-2021") == ""
    assert extract_phone("2019 2021") == ""
    assert extract_phone("Tel: 2019 2020 2021") == ""


def test_linkedin_urls_are_canonical():
    assert extract_linkedin("www.linkedin.com/in/janedoe/") == "https://linkedin.com/in/janedoe"
    assert extract_linkedin("LinkedIn: janedoe") == "https://linkedin.com/in/janedoe"
    assert extract_linkedin("nothing") == ""


def test_github_urls_are_canonical():
    assert extract_github("https://github.com/janedoe/repo") == "https://github.com/janedoe"
    assert extract_github("GitHub: janedoe") == "https://github.com/janedoe"


def test_looks_like_name():
    assert looks_like_name("Jane Doe")
    assert not looks_like_name("jane@x.com")
    assert not looks_like_name("RESUME")
    assert not looks_like_name("555-123-4567")
    assert not looks_like_name("J")


def test_name_is_taken_from_above_email():
    info = _info("Jane Doe\njane@x.com\nSkills: Python")
    assert info.full_name == "Jane Doe"
    assert info.email == "jane@x.com"


def test_name_without_email_skips_blacklisted_lines():
    info = _info("RESUME\nJohn Smith\nDeveloper")
    assert info.full_name == "John Smith"
    assert info.title == "Developer"


def test_name_placeholder_when_nothing_precedes_email():
    info = _info("jane@x.com\nSkills")
    assert info.full_name == NAME_PLACEHOLDER


def test_summary_collects_long_lines_until_next_header():
    first = "Backend specialist with eight years of experience building payment systems."
    second = "Comfortable owning services from design review through on-call rotations."
    text = f"Jane Doe\njane@x.com\nSummary\n{first}\n{second}\nEXPERIENCE\n{first}"
    info = _info(text)
    assert info.summary == f"{first} {second}"


def test_summary_placeholder_when_missing():
    info = _info("Jane Doe\njane@x.com")
    assert info.summary == SUMMARY_PLACEHOLDER
    assert info.title == ""
