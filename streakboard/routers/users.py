"""
Users router.

GET   /api/user/{user_id}   — profile (zeroed default for unknown users)
POST  /api/user/{user_id}   — explicit registration
PATCH /api/user/{user_id}   — change display name
"""
from typing import Annotated, Optional

from fastapi import APIRouter, Body, Depends, Path, Request, Response
from sqlalchemy.orm import Session
from starlette import status

from streakboard.core.clock import Clock, get_clock
from streakboard.core.rate_limit import api_limit
from streakboard.db.base import get_db
from streakboard.schemas.common import ErrorResponse
from streakboard.schemas.season import SeasonResponse
from streakboard.schemas.user import RegisterUserRequest, RenameUserRequest, UserResponse
from streakboard.services.users import UserView, get_or_create_user, register_user, rename_user

router = APIRouter(prefix="/user", tags=["users"])

UserId = Annotated[
    str, Path(min_length=1, max_length=64, description="Opaque id assigned by the bot platform.")
]


def user_to_response(view: UserView) -> UserResponse:
    return UserResponse(
        user_id=view.user_id,
        display_name=view.display_name,
        start_date=view.start_date,
        last_checkin_date=view.last_checkin_date,
        checkin_history=view.checkin_history,
        current_streak=view.current_streak,
        best_streak=view.best_streak,
        total_checkins=view.total_checkins,
        season=view.season,
        current_season=SeasonResponse.model_validate(view.current_season),
        exists=view.exists,
    )


@router.get(
    "/{user_id}",
    response_model=UserResponse,
    summary="User profile with live streak",
)
@api_limit
def get_user(
    request: Request,
    user_id: UserId,
    db: Session = Depends(get_db),
    clock: Clock = Depends(get_clock),
):
    """
    Return the stored record with `currentStreak` recomputed from history.
    Unknown users get a zeroed profile (`exists=false`); nothing is stored.
    """
    return user_to_response(get_or_create_user(db=db, user_id=user_id, clock=clock))


@router.post(
    "/{user_id}",
    response_model=UserResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register a user without checking in",
    responses={
        201: {"description": "Record created."},
        200: {"description": "Record already existed; returned unchanged."},
    },
)
@api_limit
def post_user(
    request: Request,
    response: Response,
    user_id: UserId,
    payload: Optional[RegisterUserRequest] = Body(default=None),
    db: Session = Depends(get_db),
    clock: Clock = Depends(get_clock),
):
    view, created = register_user(
        db=db,
        user_id=user_id,
        clock=clock,
        display_name=payload.display_name if payload else None,
    )
    if not created:
        response.status_code = status.HTTP_200_OK
    return user_to_response(view)


@router.patch(
    "/{user_id}",
    response_model=UserResponse,
    summary="Change a user's display name",
    responses={404: {"model": ErrorResponse, "description": "User has no record."}},
)
@api_limit
def patch_user(
    request: Request,
    user_id: UserId,
    payload: RenameUserRequest,
    db: Session = Depends(get_db),
    clock: Clock = Depends(get_clock),
):
    view = rename_user(db=db, user_id=user_id, display_name=payload.display_name, clock=clock)
    return user_to_response(view)
