import logging
import re
import time
from dataclasses import dataclass
from typing import Optional
from urllib.parse import unquote, urlparse

from preppal.application.errors import AttachmentRejected
from preppal.infrastructure.storage import StorageClient

logger = logging.getLogger(__name__)

PDF_MIME_TYPE = "application/pdf"
FALLBACK_BASE_NAME = "file"

_NON_ALNUM_RUN = re.compile(r"[^A-Za-z0-9]+")


@dataclass(frozen=True)
class BucketSpec:
    name: str
    url_field: str
    file_size_limit: Optional[int] = None


BOOKS_BUCKET = BucketSpec("books", "pdf_url", 20 * 1024 * 1024)
CHAPTERS_BUCKET = BucketSpec("chapters", "pdf_url", 10 * 1024 * 1024)
SYLLABUS_BUCKET = BucketSpec("syllabus", "syllabus_pdf_url")


@dataclass(frozen=True)
class Attachment:
    filename: str
    content_type: str
    data: bytes


def sanitize_filename(filename: str) -> str:
    """
    Replaces every run of non-alphanumeric characters in the base name with a
    single underscore and reattaches the original extension untouched. A base
    with no letters or digits at all becomes `file`.

    >>> sanitize_filename("Unit 1 - Kinematics (v2).pdf")
    'Unit_1_Kinematics_v2_.pdf'
    >>> sanitize_filename("!!!.pdf")
    'file.pdf'
    """
    last_dot = filename.rfind(".")
    if last_dot == -1:
        base, extension = filename, ""
    else:
        base, extension = filename[:last_dot], filename[last_dot:]

    sanitized = _NON_ALNUM_RUN.sub("_", base)
    if not sanitized.strip("_"):
        sanitized = FALLBACK_BASE_NAME
    return sanitized + extension


def build_storage_key(filename: str, now_ms: Optional[int] = None) -> str:
    if now_ms is None:
        now_ms = int(time.time() * 1000)
    return f"{now_ms}_{sanitize_filename(filename)}"


def extract_key(url: str) -> str:
    """Storage key of a public object URL: the last segment of its path."""
    path = urlparse(url).path
    key = unquote(path[path.rfind("/") + 1:])
    if not key:
        raise ValueError(f"No object key in URL: {url!r}")
    return key


def ensure_pdf(attachment: Attachment) -> None:
    if attachment.content_type != PDF_MIME_TYPE:
        logger.warning(f"Rejected non-PDF attachment {attachment.filename!r} ({attachment.content_type})")
        raise AttachmentRejected("Please upload a PDF file")


class AttachmentManager:
    def __init__(self, storage: StorageClient):
        self._storage = storage

    def ensure_bucket(self, bucket: BucketSpec) -> None:
        # The bucket may exist already or be managed by hand, so failures never block an upload
        try:
            if bucket.name not in self._storage.list_buckets():
                self._storage.create_bucket(bucket.name, public=True, file_size_limit=bucket.file_size_limit)
        except Exception as e:
            logger.error(f"Error checking/creating storage bucket '{bucket.name}': {e}")

    def upload(self, bucket: BucketSpec, attachment: Attachment) -> str:
        """Uploads the file under a fresh key and returns its public URL."""
        ensure_pdf(attachment)
        self.ensure_bucket(bucket)

        key = build_storage_key(attachment.filename)
        logger.info(f"Uploading {attachment.filename!r} to bucket '{bucket.name}' as {key}")
        self._storage.upload(bucket.name, key, attachment.data, attachment.content_type)
        return self._storage.get_public_url(bucket.name, key)

    def delete_by_url(self, bucket: str, url: Optional[str]) -> bool:
        """Best-effort removal of a stored object; never raises."""
        if not url:
            return False
        try:
            key = extract_key(url)
            self._storage.remove(bucket, [key])
        except Exception as e:
            logger.error(f"Failed to delete attachment {url!r} from bucket '{bucket}': {e}")
            return False
        logger.info(f"Deleted attachment {key} from bucket '{bucket}'")
        return True
