"""Data models for the YouTrack board client."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class BoardRef:
    """A sprint of a YouTrack agile board.

    Attributes:
        base_url: YouTrack root, always ending with '/' (e.g. https://host/youtrack/).
        agile_id: Agile board id as it appears in the board URL (e.g. 65-52).
        sprint_id: Sprint id as it appears in the board URL (e.g. 66-155467).
    """

    base_url: str
    agile_id: str
    sprint_id: str

    @property
    def issues_url(self) -> str:
        """REST endpoint listing the issues of this sprint."""
        return f"{self.base_url}api/agiles/{self.agile_id}/sprints/{self.sprint_id}/issues"

    def issue_url(self, issue_id: str) -> str:
        """Browser URL of an issue on the same YouTrack instance."""
        return f"{self.base_url}issue/{issue_id}"


@dataclass(frozen=True)
class RemoteIssue:
    """Read-only snapshot of a YouTrack issue on a sprint."""

    id: str  # idReadable, e.g. "PRJ-12"
    title: str
    description: str = ""
    custom_fields: dict[str, str | None] = field(default_factory=dict)
    board: BoardRef | None = None

    def field_value(self, name: str) -> str | None:
        """Value of a custom field, looked up by name ignoring ASCII case.

        Returns None when the issue has no such field or the field is empty.
        """
        wanted = name.lower()
        for field_name, value in self.custom_fields.items():
            if field_name.lower() == wanted:
                return value
        return None

    @classmethod
    def from_api(cls, data: dict[str, Any], board: BoardRef | None = None) -> RemoteIssue:
        """Build an issue from a YouTrack REST API issue object.

        Raises:
            KeyError: If idReadable or summary is missing.
        """
        custom_fields: dict[str, str | None] = {}
        for item in data.get("customFields") or []:
            name = item.get("name")
            if name is None:
                continue
            # First occurrence wins when a name repeats
            custom_fields.setdefault(name, _custom_field_value(item.get("value")))

        return cls(
            id=str(data["idReadable"]),
            title=str(data["summary"]),
            description=data.get("description") or "",
            custom_fields=custom_fields,
            board=board,
        )


def _custom_field_value(value: Any) -> str | None:
    # Enum/state values are objects with a "name"; simple fields are bare strings
    if isinstance(value, dict):
        name = value.get("name")
        return name if isinstance(name, str) else None
    if isinstance(value, str):
        return value
    return None
