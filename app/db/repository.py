from __future__ import annotations

import logging
from typing import Any, Generic, NoReturn, TypeVar

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.errors import StorageError
from app.db.base import Base

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=Base)


class RecordRepository(Generic[ModelT]):
    """find/insert/update/delete for one mapped table.

    Writes commit immediately. Any SQLAlchemy failure rolls the session back
    and is re-raised as ``StorageError``.
    """

    def __init__(self, db: Session, model: type[ModelT]):
        self.db = db
        self.model = model

    def find_by_id(self, record_id: int) -> ModelT | None:
        try:
            return self.db.get(self.model, record_id)
        except SQLAlchemyError as exc:
            self._fail("find_by_id", exc)

    def find_one(self, *criteria: Any, **filters: Any) -> ModelT | None:
        query = select(self.model).filter_by(**filters).where(*criteria).limit(1)
        try:
            return self.db.scalars(query).first()
        except SQLAlchemyError as exc:
            self._fail("find_one", exc)

    def find_all(self, *criteria: Any, order_by: Any = None, **filters: Any) -> list[ModelT]:
        query = select(self.model).filter_by(**filters).where(*criteria)
        if order_by is not None:
            query = query.order_by(order_by)
        try:
            return list(self.db.scalars(query).unique().all())
        except SQLAlchemyError as exc:
            self._fail("find_all", exc)

    def insert(self, **fields: Any) -> ModelT:
        record = self.model(**fields)
        try:
            self.db.add(record)
            self.db.commit()
            self.db.refresh(record)
        except SQLAlchemyError as exc:
            self._fail("insert", exc)
        return record

    def update_by_id(self, record_id: int, **fields: Any) -> ModelT | None:
        record = self.find_by_id(record_id)
        if record is None:
            return None
        for name, value in fields.items():
            setattr(record, name, value)
        try:
            self.db.commit()
            self.db.refresh(record)
        except SQLAlchemyError as exc:
            self._fail("update_by_id", exc)
        return record

    def delete_by_id(self, record_id: int) -> ModelT | None:
        record = self.find_by_id(record_id)
        if record is None:
            return None
        try:
            self.db.delete(record)
            self.db.commit()
        except SQLAlchemyError as exc:
            self._fail("delete_by_id", exc)
        return record

    def _fail(self, operation: str, exc: SQLAlchemyError) -> NoReturn:
        self.db.rollback()
        logger.error("%s.%s failed", self.model.__tablename__, operation, exc_info=exc)
        raise StorageError() from exc
