"""Open-issue sync - Reconciles YouTrack sprint issues into local tasks."""

from tracksync.sync.filters import filter_open, is_open
from tracksync.sync.index import build_index, load_index
from tracksync.sync.models import (
    CREATED_TITLES_SAMPLE,
    DEFAULT_OPEN_VALUE,
    DEFAULT_STATE_FIELD,
    ReconcileOutcome,
    RunStatus,
    SyncDone,
    SyncFailed,
    SyncOutcome,
    SyncRequest,
    SyncResult,
    TaskPreview,
)
from tracksync.sync.reconciler import Reconciler, task_description
from tracksync.sync.results import assemble
from tracksync.sync.service import SyncRun, SyncService

__all__ = [
    "CREATED_TITLES_SAMPLE",
    "DEFAULT_OPEN_VALUE",
    "DEFAULT_STATE_FIELD",
    "ReconcileOutcome",
    "Reconciler",
    "RunStatus",
    "SyncDone",
    "SyncFailed",
    "SyncOutcome",
    "SyncRequest",
    "SyncResult",
    "SyncRun",
    "SyncService",
    "TaskPreview",
    "assemble",
    "build_index",
    "filter_open",
    "is_open",
    "load_index",
    "task_description",
]
