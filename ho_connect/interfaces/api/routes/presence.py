"""Route exposing who is currently online."""

from fastapi import APIRouter, Depends

from ho_connect.application.state import AppState
from ho_connect.application.use_cases import presence_stats
from ho_connect.interfaces.api.dependencies import get_directory_state
from ho_connect.interfaces.api.routes_helpers import employee_to_schema
from ho_connect.interfaces.api.schemas import PresenceRead
from ho_connect.utils import now_in_app_timezone

router = APIRouter(prefix="/presence", tags=["presence"])


@router.get("/", response_model=PresenceRead)
async def read_presence(state: AppState = Depends(get_directory_state)) -> PresenceRead:
    """Recompute the presence of the whole directory at request time."""

    now = now_in_app_timezone()
    snapshot = presence_stats(state.employees, now)
    return PresenceRead(
        online_count=snapshot.online_count,
        offline_count=snapshot.offline_count,
        online_users=[employee_to_schema(employee, now) for employee in snapshot.online_users],
    )
