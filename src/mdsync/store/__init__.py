from mdsync.store.base import DocumentHandle, DocumentStore, normalize_path
from mdsync.store.fs import FileSystemStore
from mdsync.store.memory import MemoryStore

__all__ = ["DocumentHandle", "DocumentStore", "FileSystemStore", "MemoryStore", "normalize_path"]
