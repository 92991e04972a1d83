import logging
from typing import List, Optional

from supabase import Client

from .storage_client import StorageClient, StorageError

logger = logging.getLogger(__name__)


class SupabaseStorageClient(StorageClient):
    def __init__(self, client: Client):
        self._storage = client.storage

    def list_buckets(self) -> List[str]:
        try:
            return [bucket.name for bucket in self._storage.list_buckets()]
        except Exception as e:
            raise StorageError(f"Could not list buckets: {e}") from e

    def create_bucket(self, name: str, *, public: bool = True, file_size_limit: Optional[int] = None) -> None:
        options = {"public": public}
        if file_size_limit:
            options["file_size_limit"] = file_size_limit
        try:
            self._storage.create_bucket(name, options=options)
            logger.info(f"Created storage bucket '{name}' (public={public}, limit={file_size_limit})")
        except Exception as e:
            raise StorageError(f"Could not create bucket '{name}': {e}") from e

    def upload(self, bucket: str, key: str, data: bytes, content_type: str) -> None:
        try:
            self._storage.from_(bucket).upload(key, data, {"content-type": content_type})
        except Exception as e:
            raise StorageError(str(e)) from e

    def get_public_url(self, bucket: str, key: str) -> str:
        return self._storage.from_(bucket).get_public_url(key)

    def remove(self, bucket: str, keys: List[str]) -> None:
        try:
            self._storage.from_(bucket).remove(keys)
        except Exception as e:
            raise StorageError(str(e)) from e
