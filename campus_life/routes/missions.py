"""
Daily mission routes.
"""
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from campus_life.auth import get_current_user_id
from campus_life.database import get_db
from campus_life.exceptions import (
    DatabaseException,
    MissionNotFoundException,
    UnauthorizedAccessException,
)
from campus_life.schemas import MissionToggleResponse, UserActionRequest
from campus_life.services.mission_service import MissionService

router = APIRouter(prefix="/api/mission", tags=["missions"])


@router.post("/{mission_id}/toggle", response_model=MissionToggleResponse)
def toggle_mission(
    mission_id: int,
    data: UserActionRequest,
    db: Session = Depends(get_db),
    caller_id: int = Depends(get_current_user_id)
):
    """Mark a mission done or undone"""
    try:
        return MissionService(db).toggle(mission_id, data.user_id, caller_id)
    except UnauthorizedAccessException as e:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(e))
    except MissionNotFoundException as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except DatabaseException as e:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))
