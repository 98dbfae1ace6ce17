from .models import ClientInfo, LeadRecord, LeadSubmission, NormalizedLead
from .repository import LeadRepository
from .service import LeadService

__all__ = [
    "ClientInfo",
    "LeadRecord",
    "LeadSubmission",
    "NormalizedLead",
    "LeadRepository",
    "LeadService",
]
