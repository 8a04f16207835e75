"""YouTrack Board Client - Reads sprint issues from YouTrack agile boards."""

from tracksync.youtrack.client import (
    YouTrackClient,
    normalize_base_url,
    parse_board_url,
)
from tracksync.youtrack.exceptions import (
    AuthenticationFailedError,
    InvalidBoardReferenceError,
    MissingCredentialError,
    RemoteUnavailableError,
    YouTrackError,
)
from tracksync.youtrack.models import BoardRef, RemoteIssue

__all__ = [
    "AuthenticationFailedError",
    "BoardRef",
    "InvalidBoardReferenceError",
    "MissingCredentialError",
    "RemoteIssue",
    "RemoteUnavailableError",
    "YouTrackClient",
    "YouTrackError",
    "normalize_base_url",
    "parse_board_url",
]
