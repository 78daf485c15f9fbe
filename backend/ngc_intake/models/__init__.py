from .activity import Activity
from .contact import Contact
from .project_consultation import ProjectConsultation
from .user import User

__all__ = ["Activity", "Contact", "ProjectConsultation", "User"]
