from typing import Any, Dict, Iterable, List, Optional, Sequence
from sqlalchemy import delete
from sqlalchemy.orm import Session
from sqlalchemy.exc import SQLAlchemyError
import logging

logger = logging.getLogger(__name__)


class EntityRepository:
    """Table access for one model: full or filtered fetch, insert, update, delete."""

    def __init__(self, db: Session, model):
        self.db = db
        self.model = model
        self.table = model.__tablename__

    def list(self, filters: Optional[Dict[str, Any]] = None, order_by: Sequence = ()) -> List[Any]:
        try:
            query = self.db.query(self.model)
            for column, value in (filters or {}).items():
                query = query.filter(getattr(self.model, column) == value)
            if order_by:
                query = query.order_by(*order_by)
            rows = query.all()
            logger.info(f"Retrieved {len(rows)} rows from {self.table}")
            return rows
        except Exception as e:
            logger.error(f"Error fetching {self.table}: {e}", exc_info=True)
            raise

    def get(self, row_id: str) -> Optional[Any]:
        return self.db.query(self.model).filter(self.model.id == row_id).first()

    def list_by_ids(self, ids: Iterable[str]) -> List[Any]:
        ids = list(ids)
        if not ids:
            return []
        return self.db.query(self.model).filter(self.model.id.in_(ids)).all()

    def create(self, values: Dict[str, Any]) -> Any:
        try:
            row = self.model(**values)
            self.db.add(row)
            self.db.commit()
            self.db.refresh(row)
            logger.info(f"Inserted into {self.table}: ID {row.id}")
            return row
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Database error inserting into {self.table}: {e}", exc_info=True)
            raise

    def update(self, row: Any, values: Dict[str, Any]) -> Any:
        try:
            for key, value in values.items():
                setattr(row, key, value)
            self.db.commit()
            self.db.refresh(row)
            logger.info(f"Updated {self.table}: ID {row.id}")
            return row
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Database error updating {self.table} {row.id}: {e}", exc_info=True)
            raise

    def delete(self, row: Any) -> None:
        row_id = row.id
        try:
            self.db.delete(row)
            self.db.commit()
            logger.info(f"Deleted from {self.table}: ID {row_id}")
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Database error deleting {self.table} {row_id}: {e}", exc_info=True)
            raise

    def delete_many(self, ids: Iterable[str]) -> int:
        """One statement scoped to `id IN (...)`."""
        ids = list(ids)
        if not ids:
            return 0
        try:
            result = self.db.execute(delete(self.model).where(self.model.id.in_(ids)))
            deleted = result.rowcount
            self.db.commit()
            logger.info(f"Bulk deleted {deleted} rows from {self.table}")
            return deleted
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Database error bulk deleting from {self.table}: {e}", exc_info=True)
            raise
