"""REST API for tracksync."""

from tracksync.api.app import create_app
from tracksync.api.models import (
    APIResponse,
    YouTrackOpenSyncRequest,
    YouTrackOpenSyncResponse,
)

__all__ = [
    "APIResponse",
    "YouTrackOpenSyncRequest",
    "YouTrackOpenSyncResponse",
    "create_app",
]
