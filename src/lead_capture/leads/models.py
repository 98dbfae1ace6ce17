from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from lead_capture.exceptions import ValidationError

REQUIRED_FIELDS = ("name", "email", "phone")


class LeadSubmission(BaseModel):
    """Raw form payload. Every field is optional here; presence is checked by ``normalize``."""

    model_config = ConfigDict(extra="ignore")

    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    product: Optional[str] = None

    def missing_fields(self) -> list[str]:
        return [f for f in REQUIRED_FIELDS if not (getattr(self, f) or "").strip()]

    def normalize(self, *, default_product: str) -> "NormalizedLead":
        missing = self.missing_fields()
        if missing:
            raise ValidationError(extra={"fields": missing})
        product = (self.product or "").strip() or default_product
        return NormalizedLead(
            name=self.name.strip(),
            email=self.email.strip().lower(),
            phone=self.phone.strip(),
            product=product,
        )


@dataclass(frozen=True)
class NormalizedLead:
    name: str
    email: str
    phone: str
    product: str


@dataclass(frozen=True)
class ClientInfo:
    source_ip: str = "unknown"
    user_agent: str = "unknown"


def build_document(
    lead: NormalizedLead,
    client: ClientInfo,
    *,
    created_at: Optional[datetime] = None,
) -> dict[str, Any]:
    return {
        "name": lead.name,
        "email": lead.email,
        "phone": lead.phone,
        "product": lead.product,
        "createdAt": created_at or datetime.now(timezone.utc),
        "sourceIp": client.source_ip,
        "userAgent": client.user_agent,
    }


class LeadRecord(BaseModel):
    """A stored lead as returned to API clients (camelCase on the wire)."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str
    name: str
    email: str
    phone: str
    product: Optional[str] = None
    created_at: Optional[datetime] = None
    source_ip: Optional[str] = None
    user_agent: Optional[str] = None

    @classmethod
    def from_document(cls, doc: dict[str, Any]) -> "LeadRecord":
        return cls(
            id=str(doc["_id"]),
            name=doc.get("name", ""),
            email=doc.get("email", ""),
            phone=doc.get("phone", ""),
            product=doc.get("product"),
            created_at=doc.get("createdAt"),
            source_ip=doc.get("sourceIp"),
            user_agent=doc.get("userAgent"),
        )


class LeadCreatedResponse(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    success: bool = True
    message: str = "Registration completed successfully!"
    user_id: str


class LeadListResponse(BaseModel):
    success: bool = True
    count: int
    users: list[LeadRecord] = Field(default_factory=list)
