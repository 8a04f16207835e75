"""YouTrack open-issue sync endpoint."""

from fastapi import APIRouter

from tracksync.api.dependencies import SyncServiceDep
from tracksync.api.models import (
    APIResponse,
    YouTrackOpenSyncRequest,
    YouTrackOpenSyncResponse,
    sync_result_to_response,
)

router = APIRouter(prefix="/integrations/youtrack", tags=["sync"])


@router.post("/open-sync", response_model=APIResponse[YouTrackOpenSyncResponse])
def sync_youtrack_open(
    payload: YouTrackOpenSyncRequest, service: SyncServiceDep
) -> APIResponse[YouTrackOpenSyncResponse]:
    """Create Todo tasks for the open issues of a YouTrack sprint.

    With dry_run, reports what would be created without writing anything.
    """
    result = service.sync(payload.to_sync_request())
    return APIResponse(data=sync_result_to_response(result))
