from .storage_client import StorageClient, StorageError

__all__ = ["StorageClient", "StorageError"]
