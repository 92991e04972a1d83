from typing import List, Optional, Protocol


class StorageError(Exception):
    """Raised when the object-storage service rejects a call."""


class StorageClient(Protocol):
    def list_buckets(self) -> List[str]:
        """
        Returns the names of the existing buckets.
        """
        ...

    def create_bucket(self, name: str, *, public: bool = True, file_size_limit: Optional[int] = None) -> None:
        ...

    def upload(self, bucket: str, key: str, data: bytes, content_type: str) -> None:
        ...

    def get_public_url(self, bucket: str, key: str) -> str:
        ...

    def remove(self, bucket: str, keys: List[str]) -> None:
        ...
