from __future__ import annotations

from uuid import UUID, uuid4

from sqlalchemy.orm import Session

from ..models.user import User
from ..schemas.common_schema import UserCreate
from .errors import RecordNotFound


def create_user(db: Session, payload: UserCreate) -> User:
    user = User(
        id=uuid4(),
        name=payload.name,
        email=payload.email.lower(),
        role=payload.role,
        department=payload.department,
        is_active=True,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def find_user_by_email(db: Session, email: str) -> User | None:
    return db.query(User).filter(User.email == email.lower()).first()


def get_user(db: Session, user_id: UUID) -> User:
    user = db.query(User).filter(User.id == str(user_id)).first()
    if user is None:
        raise RecordNotFound("User not found")
    return user


def list_users(db: Session, *, role: str | None = None, active_only: bool = False) -> list[User]:
    query = db.query(User)
    if role:
        query = query.filter(User.role == role)
    if active_only:
        query = query.filter(User.is_active.is_(True))
    return query.order_by(User.name).all()
