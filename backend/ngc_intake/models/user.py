import uuid
from datetime import datetime

from sqlalchemy import Boolean, Column, DateTime, String

from ..database import Base
from .project_consultation import GUID


class User(Base):
    __tablename__ = "users"

    id = Column(GUID(), primary_key=True, default=uuid.uuid4)
    name = Column(String(100), nullable=False)
    email = Column(String(320), unique=True, index=True, nullable=False)
    role = Column(String(16), nullable=False, default="agent", index=True)  # admin | agent | manager | viewer
    department = Column(String(64), nullable=True, index=True)
    is_active = Column(Boolean, default=True, nullable=False)
    last_login = Column(DateTime, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow)
