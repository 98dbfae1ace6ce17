from __future__ import annotations

import logging
from datetime import datetime
from typing import Callable, Optional

from pymongo.errors import DuplicateKeyError, PyMongoError

from lead_capture.db.nosql.mongo.connection import MongoConnectionManager
from lead_capture.exceptions import (
    DatabaseConnectionError,
    DuplicateEmail,
    StorageError,
    StorageUnavailable,
)

from .models import ClientInfo, LeadRecord, LeadSubmission, build_document
from .repository import LeadRepository

logger = logging.getLogger(__name__)


class LeadService:
    """Validate-then-store operations for lead submissions."""

    def __init__(
        self,
        manager: MongoConnectionManager,
        *,
        default_product: str,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self._manager = manager
        self._default_product = default_product
        self._clock = clock

    async def _repository(self) -> LeadRepository:
        try:
            await self._manager.ensure_connected()
        except DatabaseConnectionError as exc:
            raise StorageUnavailable(
                extra={"connectionState": self._manager.current_state().value}
            ) from exc
        return LeadRepository(self._manager.collection)

    async def create(self, submission: LeadSubmission, client: ClientInfo) -> str:
        # validation happens before any connection attempt or write
        lead = submission.normalize(default_product=self._default_product)
        repo = await self._repository()
        created_at = self._clock() if self._clock else None
        try:
            lead_id = await repo.insert(build_document(lead, client, created_at=created_at))
        except DuplicateKeyError as exc:
            logger.info("Duplicate lead rejected", extra={"product": lead.product})
            raise DuplicateEmail() from exc
        except PyMongoError as exc:
            logger.error("Saving lead failed: %s", exc)
            raise StorageError("Registration failed. Please try again.") from exc
        logger.info("Lead saved", extra={"lead_id": lead_id, "product": lead.product})
        return lead_id

    async def list_all(self) -> list[LeadRecord]:
        repo = await self._repository()
        try:
            docs = await repo.list_newest_first()
        except PyMongoError as exc:
            logger.error("Listing leads failed: %s", exc)
            raise StorageError() from exc
        return [LeadRecord.from_document(d) for d in docs]

    async def count(self) -> int:
        repo = await self._repository()
        try:
            return await repo.count()
        except PyMongoError as exc:
            logger.error("Counting leads failed: %s", exc)
            raise StorageError(
                str(exc), extra={"connectionState": self._manager.current_state().value}
            ) from exc
