"""Generic CRUD service driven by a ``ResourceSpec``."""

from __future__ import annotations

import logging
import uuid
from typing import Any

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from sqlalchemy.orm.exc import StaleDataError

from fleet.core.exceptions import NotFoundError, ValidationError
from fleet.resources import ResourceSpec
from fleet.services.pagination import PagedResult, PagingParameters, paginate

logger = logging.getLogger(__name__)


class CrudService:
    """Single-table persistence operations, one transaction per write."""

    def __init__(self, db: Session, resource: ResourceSpec) -> None:
        self.db = db
        self.resource = resource

    @property
    def _id_column(self):
        return getattr(self.resource.model, self.resource.id_field)

    def commit(self) -> None:
        """Commit current transaction and rollback on failure."""
        try:
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

    def _commit_write(self) -> None:
        try:
            self.commit()
        except IntegrityError as exc:
            raise ValidationError(f"{self.resource.name} violates a data constraint.") from exc

    def exists(self, item_id: uuid.UUID) -> bool:
        statement = select(self._id_column).where(self._id_column == item_id)
        return self.db.execute(statement).first() is not None

    def list_page(self, params: PagingParameters) -> PagedResult:
        model = self.resource.model
        statement = select(model).order_by(getattr(model, self.resource.order_by), self._id_column)
        return paginate(self.db, statement, params)

    def get(self, item_id: uuid.UUID) -> Any:
        entity = self.db.get(self.resource.model, item_id)
        if entity is None:
            raise NotFoundError(f"{self.resource.name} not found: {item_id}")
        return entity

    def create(self, values: dict[str, Any]) -> Any:
        entity = self.resource.model(**self.resource.prepare(values))
        self.db.add(entity)
        self._commit_write()
        self.db.refresh(entity)
        logger.info(
            f"crud.{self.resource.name}.created",
            extra={"event": f"crud.{self.resource.name}.created", "id": str(self.resource.identifier_of(entity))},
        )
        return entity

    def update(self, item_id: uuid.UUID, values: dict[str, Any]) -> Any:
        entity = self.get(item_id)
        for key, value in self.resource.prepare(values).items():
            setattr(entity, key, value)
        self._flush_concurrent_write(item_id)
        logger.info(
            f"crud.{self.resource.name}.updated",
            extra={"event": f"crud.{self.resource.name}.updated", "id": str(item_id)},
        )
        return entity

    def delete(self, item_id: uuid.UUID) -> None:
        entity = self.get(item_id)
        self.db.delete(entity)
        self._flush_concurrent_write(item_id)
        logger.info(
            f"crud.{self.resource.name}.deleted",
            extra={"event": f"crud.{self.resource.name}.deleted", "id": str(item_id)},
        )

    def _flush_concurrent_write(self, item_id: uuid.UUID) -> None:
        """Commit a write whose target row may have vanished underneath us.

        A row removed by another request surfaces as ``NotFoundError``; any
        other stale-data condition propagates unchanged.
        """
        try:
            self._commit_write()
        except StaleDataError:
            if not self.exists(item_id):
                logger.warning(
                    "crud.concurrency_conflict.row_missing",
                    extra={"event": "crud.concurrency_conflict.row_missing", "resource": self.resource.name},
                )
                raise NotFoundError(f"{self.resource.name} not found: {item_id}") from None
            raise
