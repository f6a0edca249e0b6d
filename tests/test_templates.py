"""Tests for commit message templates."""
import pytest
from pydantic import ValidationError

from gitsmartcheck.models import CommitMessageOptions
from gitsmartcheck.templates import CommitTemplate, CommitTemplateManager, TemplatePlaceholder


@pytest.fixture
def manager():
    return CommitTemplateManager()


@pytest.fixture
def custom_template():
    return CommitTemplate(
        id="ticket",
        name="Ticket Commit",
        template="{{type}}: [{{ticket}}] {{subject}}",
        placeholders=[
            TemplatePlaceholder(key="type", label="Type", required=True, options=["feat", "fix"]),
            TemplatePlaceholder(key="ticket", label="Ticket", required=True, validation=r"^[A-Z]+-\d+$"),
            TemplatePlaceholder(key="subject", label="Subject", required=True),
        ],
    )


def test_builtin_templates(manager):
    ids = [t.id for t in manager.templates]
    assert ids == [
        "conventional-basic",
        "conventional-scope",
        "conventional-full",
        "breaking-change",
        "issue-fix",
        "co-authored",
        "release",
    ]
    assert manager.get_default_template().id == "conventional-basic"
    assert manager.get_template("missing") is None


def test_templates_by_category(manager, custom_template):
    manager.add_custom_template(custom_template)
    by_category = manager.templates_by_category()
    assert [t.id for t in by_category["Conventional Commits"]] == [
        "conventional-basic", "conventional-scope", "conventional-full",
    ]
    assert [t.id for t in by_category["Other"]] == ["ticket"]


def test_add_and_remove_custom_template(manager, custom_template):
    manager.add_custom_template(custom_template)
    manager.add_custom_template(custom_template.model_copy(update={"name": "Renamed"}))
    assert [t.name for t in manager.templates if t.id == "ticket"] == ["Renamed"]

    manager.remove_custom_template("ticket")
    assert manager.get_template("ticket") is None


def test_validate_values(manager, custom_template):
    values = {"type": "feat", "ticket": "ABC-1", "subject": "add thing"}
    assert manager.validate_values(custom_template, values).valid

    assert manager.validate_values(custom_template, {**values, "subject": ""}).error == "Subject is required"
    assert manager.validate_values(custom_template, {**values, "type": "docs"}).error == \
        "Type must be one of: feat, fix"
    assert manager.validate_values(custom_template, {**values, "ticket": "abc"}).error == \
        "Ticket format is invalid"


def test_optional_placeholder_may_be_missing(manager):
    template = manager.get_template("conventional-scope")
    assert manager.validate_values(template, {"type": "fix", "subject": "x"}).valid


def test_invalid_placeholder_regex():
    with pytest.raises(ValidationError):
        TemplatePlaceholder(key="k", label="K", validation="(")


def test_fill_template_full(manager):
    template = manager.get_template("conventional-full")
    message = manager.fill_template(template, {
        "type": "feat",
        "scope": "api",
        "subject": "add endpoint",
        "body": "Details here.",
        "footer": "Fixes #3",
    })
    assert message == "feat(api): add endpoint\n\nDetails here.\n\nFixes #3"


def test_fill_template_drops_empty_parts(manager):
    template = manager.get_template("conventional-full")
    message = manager.fill_template(template, {"type": "fix", "subject": "crash"})
    assert message == "fix: crash"


def test_fill_issue_template(manager):
    template = manager.get_template("issue-fix")
    message = manager.fill_template(template, {"subject": "null check", "issueNumber": "12"})
    assert message == "fix: null check\n\nFixes #12"
    assert manager.validate_message(message).valid


def test_validate_message_uses_options():
    manager = CommitTemplateManager(options=CommitMessageOptions(require_type=True))
    assert not manager.validate_message("Freeform message").valid
    assert manager.validate_message("chore: tidy").valid


def test_parse_conventional_message(manager):
    parsed = manager.parse_message("fix(ui)!: broken button\n\nMore info.\n\nFixes #4\nRefs #9")
    assert parsed.type == "fix"
    assert parsed.scope == "ui"
    assert parsed.subject == "broken button"
    assert parsed.breaking is True
    assert parsed.body == "More info."
    assert parsed.footer == "Fixes #4\nRefs #9"
    assert parsed.issues == ["4", "9"]


def test_parse_freeform_message(manager):
    parsed = manager.parse_message("Update things\n\nThis is a breaking change for users.")
    assert parsed.type is None
    assert parsed.subject == "Update things"
    assert parsed.body == "This is a breaking change for users."
    assert parsed.breaking is True
    assert parsed.issues == []


def test_generate_from_context(manager):
    message = manager.generate_from_context("handle timeouts", commit_type="fix", scope="net", issues=["5", "8"])
    assert message == "fix(net): handle timeouts\n\nFixes #5\nFixes #8"


def test_generate_from_context_defaults(manager):
    assert manager.generate_from_context("add search", breaking=True) == "feat!: add search"
