"""Tests for the task draft validation engine."""

import pytest

from taskpad.models.task import Priority, TaskDraft
from taskpad.services.validation import (
    DESCRIPTION_TOO_LONG,
    DUE_DATE_INVALID,
    PRIORITY_INVALID,
    TITLE_REQUIRED,
    TITLE_TOO_LONG,
    TaskValidationError,
    validate_task,
)


def valid_draft(**overrides):
    draft = {"title": "Ok", "priority": "Low"}
    draft.update(overrides)
    return draft


class TestTitleRules:
    """Test title validation."""

    @pytest.mark.parametrize("title", [None, "", " ", "   \t\n"])
    def test_missing_or_blank_title(self, title):
        """Test that absent or whitespace-only titles are required errors."""
        errors = validate_task(valid_draft(title=title))

        assert errors == {"title": TITLE_REQUIRED}

    def test_title_at_limit(self):
        """Test that a 100 character title is accepted."""
        assert validate_task(valid_draft(title="x" * 100)) == {}

    def test_title_over_limit(self):
        """Test that a 101 character title is rejected."""
        errors = validate_task(valid_draft(title="x" * 101))

        assert errors == {"title": TITLE_TOO_LONG}
        assert errors["title"] == "Max 100 characters"

    def test_title_length_counted_after_trim(self):
        """Test that surrounding whitespace does not count towards the limit."""
        assert validate_task(valid_draft(title="  " + "x" * 100 + "  ")) == {}


class TestOtherFieldRules:
    """Test description, priority and due date validation."""

    def test_description_limit(self):
        """Test description length boundary."""
        assert validate_task(valid_draft(description="d" * 1000)) == {}
        assert validate_task(valid_draft(description="d" * 1001)) == {
            "description": DESCRIPTION_TOO_LONG
        }

    def test_description_length_is_untrimmed(self):
        """Test that whitespace counts towards the description limit."""
        errors = validate_task(valid_draft(description=" " * 1001))

        assert errors == {"description": DESCRIPTION_TOO_LONG}

    def test_empty_description_is_valid(self):
        """Test that empty or missing description is fine."""
        assert validate_task(valid_draft(description="")) == {}
        assert validate_task(valid_draft(description=None)) == {}

    @pytest.mark.parametrize("priority", [None, "", "low", "HIGH", "Urgent", 1])
    def test_invalid_priority(self, priority):
        """Test that anything but the exact literals is rejected."""
        errors = validate_task(valid_draft(priority=priority))

        assert errors == {"priority": PRIORITY_INVALID}

    @pytest.mark.parametrize("priority", ["Low", "Medium", "High", Priority.HIGH])
    def test_valid_priority(self, priority):
        """Test the three accepted priorities."""
        assert validate_task(valid_draft(priority=priority)) == {}

    def test_unparseable_due_date_only_error(self):
        """Test a draft whose only problem is its due date."""
        errors = validate_task({"title": "Ok", "priority": "Low", "dueDate": "not-a-date"})

        assert errors == {"dueDate": DUE_DATE_INVALID}

    @pytest.mark.parametrize("due_date", ["2025-02-30", "2025-13-01", "20/11/2025"])
    def test_impossible_due_dates(self, due_date):
        """Test that dates which are not real calendar dates are rejected."""
        assert validate_task(valid_draft(dueDate=due_date)) == {"dueDate": DUE_DATE_INVALID}

    @pytest.mark.parametrize("due_date", [None, "", "2025-11-20", "2025-11-20T10:30:00Z"])
    def test_valid_or_absent_due_dates(self, due_date):
        """Test that absent, empty and ISO due dates pass."""
        assert validate_task(valid_draft(dueDate=due_date)) == {}

    def test_snake_case_keys_accepted(self):
        """Test that mappings may use python field names."""
        errors = validate_task({"title": "Ok", "priority": "Low", "due_date": "nope"})

        assert errors == {"dueDate": DUE_DATE_INVALID}


class TestValidationEngine:
    """Test combined behaviour of the engine."""

    def test_all_errors_reported_together(self):
        """Test that rules are not short-circuited."""
        errors = validate_task({
            "title": "",
            "description": "d" * 1001,
            "priority": "Urgent",
            "dueDate": "soon",
        })

        assert errors == {
            "title": TITLE_REQUIRED,
            "description": DESCRIPTION_TOO_LONG,
            "priority": PRIORITY_INVALID,
            "dueDate": DUE_DATE_INVALID,
        }

    def test_accepts_draft_models(self):
        """Test validation of a TaskDraft instance."""
        draft = TaskDraft(title="Write report", priority="High", due_date="2025-12-01")

        assert validate_task(draft) == {}

    def test_does_not_modify_input(self):
        """Test that validation is side-effect free."""
        draft = {"title": "  padded  ", "priority": "Low"}
        validate_task(draft)

        assert draft == {"title": "  padded  ", "priority": "Low"}

    def test_rejects_unsupported_input(self):
        """Test that non-mapping drafts are a programming error."""
        with pytest.raises(TypeError):
            validate_task(["title"])

    def test_validation_error_carries_errors(self):
        """Test the exception raised on rejected mutations."""
        error = TaskValidationError({"title": TITLE_REQUIRED})

        assert isinstance(error, ValueError)
        assert error.errors == {"title": TITLE_REQUIRED}
        assert "title: Title is required" in str(error)
