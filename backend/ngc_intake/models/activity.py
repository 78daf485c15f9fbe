import uuid
from datetime import datetime

from sqlalchemy import JSON, Column, DateTime, String, Text

from ..database import Base
from .project_consultation import GUID


class Activity(Base):
    """Audit-trail row written by every consultation/contact mutation.

    Record ids are stored without foreign keys so the trail survives a
    permanent delete of the record it describes.
    """

    __tablename__ = "activities"

    id = Column(GUID(), primary_key=True, default=uuid.uuid4)
    contact_id = Column(GUID(), nullable=True, index=True)
    project_id = Column(GUID(), nullable=True, index=True)
    user_id = Column(GUID(), nullable=True, index=True)
    action = Column(String(64), nullable=False)
    details = Column(Text, nullable=True)
    metadata_json = Column("metadata", JSON, nullable=True)
    timestamp = Column(DateTime, default=datetime.utcnow, index=True)
