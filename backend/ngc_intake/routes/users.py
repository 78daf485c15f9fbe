from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from ..database import get_db
from ..schemas.common_schema import UserCreate, UserResponse, UserRole
from ..services.errors import RecordNotFound
from ..services.user_service import create_user, find_user_by_email, get_user, list_users

router = APIRouter(
    prefix="/users",
    tags=["Users"],
)


@router.post("/", response_model=UserResponse, status_code=status.HTTP_201_CREATED, summary="Create a Team Member")
def register_user(payload: UserCreate, db: Session = Depends(get_db)) -> UserResponse:
    """Create a staff account that consultations and contacts can be assigned to."""
    if find_user_by_email(db, payload.email):
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="A user with this email already exists",
        )
    return UserResponse.model_validate(create_user(db, payload))


@router.get("/", response_model=list[UserResponse])
def users(
    role: Optional[UserRole] = None,
    active_only: bool = False,
    db: Session = Depends(get_db),
) -> list[UserResponse]:
    return [UserResponse.model_validate(user) for user in list_users(db, role=role, active_only=active_only)]


@router.get("/{user_id}", response_model=UserResponse)
def user_detail(user_id: UUID, db: Session = Depends(get_db)) -> UserResponse:
    try:
        return UserResponse.model_validate(get_user(db, user_id))
    except RecordNotFound as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
