import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterable, List, Optional, Tuple

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from preppal.application.attachments.attachment_service import (
    Attachment,
    AttachmentManager,
    BucketSpec,
    ensure_pdf,
)
from preppal.application.errors import ValidationError
from preppal.application.filters.cascading_filter import CascadingFilter, FilterMode, visible_rows
from preppal.infrastructure.repositories.entity_repo_impl import EntityRepository
from preppal.infrastructure.repositories.reference_repo_impl import get_all_subjects
from preppal.infrastructure.storage import StorageError

logger = logging.getLogger(__name__)

SUCCESS_DISMISS_SECONDS = 3.0


@dataclass(frozen=True)
class EntityConfig:
    name: str
    model: Any
    fields: Tuple[str, ...]
    required: Tuple[str, ...]
    required_message: str
    order_by: Tuple = ()
    form_only: Tuple[str, ...] = ()
    parent_filters: Tuple[str, ...] = ()
    exam_scoped: bool = False
    bucket: Optional[BucketSpec] = None
    owner_field: Optional[str] = None
    dependent_attachments: Optional[Callable[[Any], List[Tuple[str, Optional[str]]]]] = None

    @property
    def label(self) -> str:
        return self.name.capitalize()

    @property
    def confirm_prompt(self) -> str:
        return f"Are you sure you want to delete this {self.name}? This action cannot be undone."


@dataclass
class CommandResult:
    ok: bool
    value: Any = None
    message: str = ""
    error: str = ""
    kind: str = ""
    dismiss_after: Optional[float] = None

    @classmethod
    def success(cls, value=None, message: str = "", dismiss_after: Optional[float] = None) -> "CommandResult":
        return cls(ok=True, value=value, message=message, dismiss_after=dismiss_after)

    @classmethod
    def failure(cls, error: str, kind: str) -> "CommandResult":
        return cls(ok=False, error=error, kind=kind)


def describe_remote_error(error: Exception) -> str:
    # SQLAlchemy wraps the driver error; its text is the useful part
    original = getattr(error, "orig", None)
    return str(original if original is not None else error).strip()


class EntityController:
    """
    Create/read/update/delete for one table, configured by an EntityConfig.
    Every command returns a CommandResult instead of raising.
    """

    def __init__(
        self,
        db: Session,
        config: EntityConfig,
        attachments: Optional[AttachmentManager] = None,
        owner_id: Optional[str] = None,
    ):
        self.db = db
        self.config = config
        self.repo = EntityRepository(db, config.model)
        self._attachments = attachments
        self._owner_id = owner_id

    # ---------------------------
    # Queries
    # ---------------------------

    def list(self, **filters: str) -> CommandResult:
        direct = {k: v for k, v in filters.items() if k in self.config.parent_filters and v}
        if self.config.owner_field:
            direct[self.config.owner_field] = self._owner_id
        try:
            if self.config.exam_scoped:
                subjects = get_all_subjects(self.db)
                selection = CascadingFilter(subjects, mode=FilterMode.LOOSE).apply(
                    exam_id=filters.get("exam_id", ""), subject_id=filters.get("subject_id", "")
                )
                direct.pop("subject_id", None)
                rows = self.repo.list(direct, self.config.order_by)
                rows = visible_rows(rows, subjects, selection["exam_id"], selection["subject_id"])
            else:
                rows = self.repo.list(direct, self.config.order_by)
            return CommandResult.success(rows)
        except SQLAlchemyError as e:
            logger.error(f"Error loading {self.config.name} list: {e}", exc_info=True)
            return CommandResult.failure(
                f"Failed to load {self.config.name}s. Please refresh the page.", "remote"
            )

    def get(self, row_id: str) -> CommandResult:
        row = self._find(row_id)
        if row is None:
            return self._not_found(row_id)
        return CommandResult.success(row)

    # ---------------------------
    # Commands
    # ---------------------------

    def create(self, data: Dict[str, Any], attachment: Optional[Attachment] = None) -> CommandResult:
        values = self._clean(data)
        try:
            self._validate(values)
            if attachment is not None:
                self._require_bucket()
                ensure_pdf(attachment)
        except ValidationError as e:
            logger.warning(f"Validation error creating {self.config.name}: {e}")
            return CommandResult.failure(str(e), "validation")

        values = self._persistable(values)
        if self.config.owner_field:
            values[self.config.owner_field] = self._owner_id

        try:
            row = self.repo.create(values)
            if attachment is not None:
                url = self._manager().upload(self.config.bucket, attachment)
                row = self.repo.update(row, {self.config.bucket.url_field: url})
        except (SQLAlchemyError, StorageError) as e:
            return self._remote_failure("create", e)

        logger.info(f"Created {self.config.name} {row.id}")
        return CommandResult.success(
            row, f"{self.config.label} created successfully", dismiss_after=SUCCESS_DISMISS_SECONDS
        )

    def update(self, row_id: str, data: Dict[str, Any], attachment: Optional[Attachment] = None) -> CommandResult:
        row = self._find(row_id)
        if row is None:
            return self._not_found(row_id)

        values = self._clean(data)
        merged = {name: getattr(row, name, None) for name in self.config.required}
        merged.update(values)
        try:
            self._validate(merged)
            if attachment is not None:
                self._require_bucket()
                ensure_pdf(attachment)
        except ValidationError as e:
            logger.warning(f"Validation error updating {self.config.name} {row_id}: {e}")
            return CommandResult.failure(str(e), "validation")

        values = self._persistable(values)
        try:
            if attachment is not None:
                bucket = self.config.bucket
                # Old object goes first; the new one gets a distinct generated key
                self._manager().delete_by_url(bucket.name, getattr(row, bucket.url_field))
                values[bucket.url_field] = self._manager().upload(bucket, attachment)
            row = self.repo.update(row, values)
        except (SQLAlchemyError, StorageError) as e:
            return self._remote_failure("update", e)

        return CommandResult.success(
            row, f"{self.config.label} updated successfully", dismiss_after=SUCCESS_DISMISS_SECONDS
        )

    def replace_attachment(self, row_id: str, attachment: Attachment) -> CommandResult:
        return self.update(row_id, {}, attachment)

    def delete(self, row_id: str, confirm: Callable[[str], bool]) -> CommandResult:
        row = self._find(row_id)
        if row is None:
            return self._not_found(row_id)

        if not confirm(self.config.confirm_prompt):
            logger.info(f"Delete of {self.config.name} {row_id} cancelled")
            return CommandResult.failure(self.config.confirm_prompt, "cancelled")

        for bucket_name, url in self._owned_attachments(row):
            self._manager().delete_by_url(bucket_name, url)

        try:
            self.repo.delete(row)
        except SQLAlchemyError as e:
            return self._remote_failure("delete", e)

        return CommandResult.success(
            None, f"{self.config.label} deleted successfully", dismiss_after=SUCCESS_DISMISS_SECONDS
        )

    # ---------------------------
    # Helpers
    # ---------------------------

    def _find(self, row_id: str):
        row = self.repo.get(row_id)
        if row is None:
            return None
        if self.config.owner_field and getattr(row, self.config.owner_field) != self._owner_id:
            return None
        return row

    def _not_found(self, row_id: str) -> CommandResult:
        logger.warning(f"{self.config.label} with id {row_id} not found")
        return CommandResult.failure(f"{self.config.label} with id {row_id} not found", "not_found")

    def _clean(self, data: Dict[str, Any]) -> Dict[str, Any]:
        allowed = set(self.config.fields) | set(self.config.form_only)
        values = {}
        for key, value in data.items():
            if key not in allowed:
                continue
            if isinstance(value, str):
                value = value.strip()
            values[key] = value
        return values

    def _validate(self, values: Dict[str, Any]) -> None:
        for name in self.config.required:
            value = values.get(name)
            if value is None or (isinstance(value, str) and not value):
                raise ValidationError(self.config.required_message)

    def _persistable(self, values: Dict[str, Any]) -> Dict[str, Any]:
        persisted = {}
        for key, value in values.items():
            if key in self.config.form_only:
                continue
            # Blank optional inputs are stored as NULL
            if value == "" and key not in self.config.required:
                value = None
            persisted[key] = value
        return persisted

    def _owned_attachments(self, row) -> Iterable[Tuple[str, Optional[str]]]:
        owned = []
        if self.config.bucket is not None:
            owned.append((self.config.bucket.name, getattr(row, self.config.bucket.url_field, None)))
        if self.config.dependent_attachments is not None:
            owned.extend(self.config.dependent_attachments(row))
        return [(bucket, url) for bucket, url in owned if url]

    def _require_bucket(self) -> None:
        if self.config.bucket is None:
            raise ValidationError(f"{self.config.label}s do not carry attachments")

    def _manager(self) -> AttachmentManager:
        if self._attachments is None:
            raise RuntimeError(f"No attachment manager configured for {self.config.name}")
        return self._attachments

    def _remote_failure(self, verb: str, error: Exception) -> CommandResult:
        self.db.rollback()
        description = describe_remote_error(error)
        logger.error(f"Error trying to {verb} {self.config.name}: {description}", exc_info=True)
        if description:
            message = f"Failed to {verb} {self.config.name}: {description}"
        else:
            message = f"Failed to {verb} {self.config.name}. Please try again."
        return CommandResult.failure(message, "remote")
