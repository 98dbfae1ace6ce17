from __future__ import annotations

from fastapi import APIRouter, status

from lead_capture.leads.models import LeadCreatedResponse, LeadListResponse, LeadSubmission

from ..dependencies import ClientInfoDep, LeadServiceDep

router = APIRouter(prefix="/api", tags=["leads"])


@router.post(
    "/users",
    status_code=status.HTTP_201_CREATED,
    response_model=LeadCreatedResponse,
)
async def create_user(payload: LeadSubmission, client: ClientInfoDep, service: LeadServiceDep):
    lead_id = await service.create(payload, client)
    return LeadCreatedResponse(user_id=lead_id)


@router.get("/users", response_model=LeadListResponse)
async def list_users(service: LeadServiceDep):
    users = await service.list_all()
    return LeadListResponse(count=len(users), users=users)
