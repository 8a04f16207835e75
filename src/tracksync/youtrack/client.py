"""YouTrackClient - Reads agile board sprint issues from the YouTrack REST API."""

from __future__ import annotations

import logging
from typing import Any
from urllib.parse import SplitResult, urlsplit, urlunsplit

import httpx

from tracksync.logging import sanitize_for_log
from tracksync.youtrack.exceptions import (
    AuthenticationFailedError,
    InvalidBoardReferenceError,
    MissingCredentialError,
    RemoteUnavailableError,
)
from tracksync.youtrack.models import BoardRef, RemoteIssue

logger = logging.getLogger("tracksync.youtrack")

PAGE_SIZE = 100
ISSUE_FIELDS = "idReadable,summary,description,customFields(name,value(name))"


def _split_http_url(url: str, label: str) -> SplitResult:
    """Split an absolute http(s) URL, rejecting a missing host or a bad port."""
    try:
        parts = urlsplit(url.strip())
        parts.port  # noqa: B018
    except ValueError as e:
        raise InvalidBoardReferenceError(f"Invalid YouTrack {label}: {url!r} ({e})") from None
    if parts.scheme not in ("http", "https") or not parts.hostname:
        raise InvalidBoardReferenceError(f"Invalid YouTrack {label}: {url!r}")
    return parts


def normalize_base_url(base_url: str) -> str:
    """Validate a YouTrack base URL and make sure it ends with '/'.

    Raises:
        InvalidBoardReferenceError: If the URL is not an absolute http(s) URL.
    """
    parts = _split_http_url(base_url, "base URL")
    path = parts.path if parts.path.endswith("/") else f"{parts.path}/"
    return urlunsplit((parts.scheme, parts.netloc, path, "", ""))


def parse_board_url(board_url: str) -> BoardRef:
    """Split a board URL into YouTrack base URL, agile id and sprint id.

    Board URLs look like ``https://host/youtrack/agiles/{agileId}/{sprintId}?...``;
    everything before the ``agiles`` segment is the YouTrack base path.

    Args:
        board_url: Full agile board URL, scoped to a sprint.

    Returns:
        BoardRef for the sprint.

    Raises:
        InvalidBoardReferenceError: If the URL is malformed or lacks a sprint.
    """
    parts = _split_http_url(board_url, "board URL")

    segments = [s for s in parts.path.split("/") if s]
    agiles_index = next(
        (i for i, s in enumerate(segments) if s.lower() == "agiles"),
        None,
    )
    if agiles_index is None:
        raise InvalidBoardReferenceError(
            "Board URL must contain '/agiles/{agileId}/{sprintId}'"
        )

    try:
        agile_id = segments[agiles_index + 1]
    except IndexError:
        raise InvalidBoardReferenceError("Board URL is missing the agile id") from None
    try:
        sprint_id = segments[agiles_index + 2]
    except IndexError:
        raise InvalidBoardReferenceError(
            "Board URL is missing the sprint id; open the board on a specific sprint"
        ) from None

    prefix = "/".join(segments[:agiles_index])
    base_path = f"/{prefix}/" if prefix else "/"
    base_url = urlunsplit((parts.scheme, parts.netloc, base_path, "", ""))

    return BoardRef(base_url=base_url, agile_id=agile_id, sprint_id=sprint_id)


class YouTrackClient:
    """Read-only client for YouTrack agile boards.

    Authenticates every request with a permanent token sent as a bearer
    Authorization header.
    """

    def __init__(
        self,
        token: str,
        timeout: float = 30.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            token: YouTrack permanent token
            timeout: Request timeout in seconds
            transport: Optional httpx transport (for testing)

        Raises:
            MissingCredentialError: If token is empty.
            AuthenticationFailedError: If token can't be sent as a header value.
        """
        if not token or not token.strip():
            raise MissingCredentialError("YouTrack token is required")
        token = token.strip()
        if not (token.isascii() and token.isprintable()):
            raise AuthenticationFailedError(
                "YouTrack token contains characters that are not allowed in a token"
            )
        self.token = token
        self.timeout = timeout
        self._transport = transport
        self._client: httpx.Client | None = None

    @property
    def client(self) -> httpx.Client:
        """Get or create the HTTP client."""
        if self._client is None:
            self._client = httpx.Client(
                headers={
                    "Authorization": f"Bearer {self.token}",
                    "Accept": "application/json",
                },
                timeout=self.timeout,
                transport=self._transport,
            )
        return self._client

    def close(self) -> None:
        """Close the HTTP client."""
        if self._client is not None:
            self._client.close()
            self._client = None

    def __enter__(self) -> YouTrackClient:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def fetch_board_issues(self, board_url: str) -> list[RemoteIssue]:
        """Fetch all issues on the sprint a board URL points at.

        Raises:
            InvalidBoardReferenceError: Malformed URL, or unknown board/sprint.
            AuthenticationFailedError: Token rejected.
            RemoteUnavailableError: Network or service failure.
        """
        return self.fetch_sprint_issues(parse_board_url(board_url))

    def fetch_sprint_issues(self, board: BoardRef) -> list[RemoteIssue]:
        """Fetch all issues of a sprint, following $skip/$top paging.

        Issues are returned in YouTrack's order for the sprint.
        """
        logger.debug("Fetching issues for agile %s sprint %s", board.agile_id, board.sprint_id)
        issues: list[RemoteIssue] = []
        skip = 0

        while True:
            batch = self._get_page(board, skip)
            for item in batch:
                try:
                    issues.append(RemoteIssue.from_api(item, board=board))
                except (KeyError, TypeError, AttributeError) as e:
                    raise RemoteUnavailableError(
                        f"Unexpected issue payload from YouTrack: missing {e}"
                    ) from e

            if len(batch) < PAGE_SIZE:
                break
            skip += PAGE_SIZE

        logger.info(
            "Fetched %d issue(s) from agile %s sprint %s",
            len(issues),
            board.agile_id,
            board.sprint_id,
        )
        return issues

    def _get_page(self, board: BoardRef, skip: int) -> list[dict[str, Any]]:
        params = {"$skip": str(skip), "$top": str(PAGE_SIZE), "fields": ISSUE_FIELDS}
        try:
            response = self.client.get(board.issues_url, params=params)
        except httpx.InvalidURL as e:
            raise InvalidBoardReferenceError(f"Invalid YouTrack URL: {e}") from e
        except httpx.HTTPError as e:
            logger.warning("YouTrack request failed: %s", sanitize_for_log(str(e)))
            raise RemoteUnavailableError(f"YouTrack request failed: {e}") from e

        status = response.status_code
        if status in (401, 403):
            raise AuthenticationFailedError(
                f"YouTrack rejected the token ({status}); check that it is valid and not expired"
            )
        if status == 404:
            raise InvalidBoardReferenceError(
                f"Agile board '{board.agile_id}' sprint '{board.sprint_id}' not found"
            )
        if not 200 <= status < 300:
            logger.warning(
                "YouTrack returned %s: %s", status, sanitize_for_log(response.text[:500])
            )
            raise RemoteUnavailableError(f"YouTrack returned an error status: {status}")

        try:
            data = response.json()
        except ValueError as e:
            raise RemoteUnavailableError("Failed to decode YouTrack issues JSON") from e

        if not isinstance(data, list):
            raise RemoteUnavailableError("Unexpected YouTrack response: expected a list of issues")
        return data
