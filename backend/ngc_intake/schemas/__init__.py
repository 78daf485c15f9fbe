# Schemas package
from .common_schema import ActivityResponse, UserCreate, UserResponse
from .consultation_schema import (
    ConsultationCreatedResponse,
    ConsultationListResponse,
    ConsultationStats,
    ProjectConsultationCreate,
    ProjectConsultationResponse,
)
from .contact_schema import ContactCreate, ContactCreatedResponse, ContactListResponse, ContactResponse, ContactStats
from .wizard_schema import SubmitResponse, WizardSessionResponse

__all__ = [
    "ActivityResponse",
    "ConsultationCreatedResponse",
    "ConsultationListResponse",
    "ConsultationStats",
    "ContactCreate",
    "ContactCreatedResponse",
    "ContactListResponse",
    "ContactResponse",
    "ContactStats",
    "ProjectConsultationCreate",
    "ProjectConsultationResponse",
    "SubmitResponse",
    "UserCreate",
    "UserResponse",
    "WizardSessionResponse",
]
