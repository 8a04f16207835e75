"""Unit tests for YouTrack data models."""

import pytest
from fakes import BOARD, api_issue

from tracksync.youtrack import RemoteIssue


@pytest.mark.unit
class TestRemoteIssueFromApi:
    """Tests for RemoteIssue.from_api."""

    def test_maps_fields(self) -> None:
        issue = RemoteIssue.from_api(api_issue("PRJ-1", "Fix login", description="Steps"), BOARD)

        assert issue.id == "PRJ-1"
        assert issue.title == "Fix login"
        assert issue.description == "Steps"
        assert issue.custom_fields == {"Priority": "Normal", "State": "Open"}
        assert issue.board == BOARD

    def test_null_description_becomes_empty(self) -> None:
        issue = RemoteIssue.from_api(api_issue("PRJ-1", "Fix login", description=None))

        assert issue.description == ""

    def test_null_field_value(self) -> None:
        """Unset custom fields are kept with a None value."""
        data = api_issue("PRJ-1", "Fix login", state=None)
        data["customFields"].append({"name": "Assignee", "value": None})

        issue = RemoteIssue.from_api(data)

        assert "Assignee" in issue.custom_fields
        assert issue.field_value("Assignee") is None

    def test_missing_custom_fields(self) -> None:
        issue = RemoteIssue.from_api({"idReadable": "PRJ-1", "summary": "Bare"})

        assert issue.custom_fields == {}
        assert issue.field_value("State") is None

    def test_non_text_value_ignored(self) -> None:
        """Numeric field values are not usable as states."""
        data = {
            "idReadable": "PRJ-1",
            "summary": "Estimate",
            "customFields": [{"name": "Story points", "value": 5}],
        }

        issue = RemoteIssue.from_api(data)

        assert issue.field_value("Story points") is None

    def test_repeated_field_name_keeps_first(self) -> None:
        data = api_issue("PRJ-1", "Fix login", state="Open")
        data["customFields"].append({"name": "State", "value": {"name": "Done"}})

        issue = RemoteIssue.from_api(data)

        assert issue.field_value("State") == "Open"


@pytest.mark.unit
class TestFieldValue:
    """Tests for RemoteIssue.field_value."""

    def test_field_name_lookup_ignores_case(self) -> None:
        issue = RemoteIssue(id="PRJ-1", title="t", custom_fields={"State": "Open"})

        assert issue.field_value("state") == "Open"
        assert issue.field_value("STATE") == "Open"

    def test_value_case_preserved(self) -> None:
        issue = RemoteIssue(id="PRJ-1", title="t", custom_fields={"State": "open"})

        assert issue.field_value("State") == "open"

    def test_missing_field(self) -> None:
        issue = RemoteIssue(id="PRJ-1", title="t")

        assert issue.field_value("State") is None
