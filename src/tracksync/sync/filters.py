"""State filter - selects the open issues of a sprint."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable

    from tracksync.youtrack import RemoteIssue


def is_open(issue: RemoteIssue, state_field: str, open_value: str) -> bool:
    """Whether the issue's state field holds exactly ``open_value``.

    The field is found by name ignoring case; its value must match case-sensitively.
    Issues without the field, or with an empty one, are not open.
    """
    value = issue.field_value(state_field)
    return value is not None and value == open_value


def filter_open(
    issues: Iterable[RemoteIssue], state_field: str, open_value: str
) -> list[RemoteIssue]:
    """Open issues, in their original order."""
    return [issue for issue in issues if is_open(issue, state_field, open_value)]
