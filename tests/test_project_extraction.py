from resume_engine.core.cv_assembler import structure_cv


PROJECTS = """PROJECTS
Expense Tracker
A small web app that tracks shared household expenses and splits bills fairly.
Tech Stack: React, Node.js, MongoDB
https://github.com/jane/expense-tracker
- Added CSV export
Weather Bot
Slack bot that posts the morning forecast for every office location we have.
"""


def test_projects_with_details():
    first, second = structure_cv(PROJECTS).projects

    assert first.id == "proj-1"
    assert first.name == "Expense Tracker"
    assert first.description.startswith("A small web app")
    assert first.technologies == ("React", "Node.js", "MongoDB")
    assert first.link == "https://github.com/jane/expense-tracker"
    assert first.achievements == ("Added CSV export",)

    assert second.id == "proj-2"
    assert second.name == "Weather Bot"
    assert second.description.startswith("Slack bot")
    assert second.technologies == ()


def test_wrapped_title_is_joined():
    text = (
        "Projects\n"
        "Distributed Key Value\n"
        "Store in Rust\n"
        "A replicated key-value store with Raft consensus and snapshotting built for fun.\n"
    )
    (project,) = structure_cv(text).projects
    assert project.name == "Distributed Key Value Store in Rust"
    assert project.description.startswith("A replicated")


def test_description_continues_over_short_lines():
    text = (
        "Projects\n"
        "Chat App\n"
        "A realtime chat application supporting rooms, typing indicators and receipts\n"
        "over websockets\n"
    )
    (project,) = structure_cv(text).projects
    assert project.description.endswith("receipts over websockets")


def test_projects_do_not_leak_into_experience():
    text = "EXPERIENCE\nSoftware Engineer\nAcme 2020 - 2021\n" + PROJECTS
    record = structure_cv(text)
    assert len(record.experiences) == 1
    assert len(record.projects) == 2
    assert record.experiences[0].achievements == ()
