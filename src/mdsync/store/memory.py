"""In-memory document store; folders are implied by path prefixes"""

import logging
from dataclasses import dataclass, field
from typing import Optional

from mdsync.errors import DocumentNotFoundError
from mdsync.store.base import DocumentHandle, DocumentStore, normalize_path


log = logging.getLogger(__name__)


@dataclass
class MemoryStore(DocumentStore):
    documents: dict[str, str] = field(default_factory=dict)
    writes: list[str] = field(default_factory=list)     # paths, in write order

    def __post_init__(self) -> None:
        self.documents = {normalize_path(p): text for p, text in self.documents.items()}

    def resolve(self, path: str) -> Optional[DocumentHandle]:
        key = normalize_path(path)
        return DocumentHandle(key) if key in self.documents else None

    def read(self, handle: DocumentHandle) -> str:
        if handle.path not in self.documents:
            raise DocumentNotFoundError(handle.path)
        return self.documents[handle.path]

    def write(self, handle: DocumentHandle, text: str) -> None:
        self.documents[handle.path] = text
        self.writes.append(handle.path)

    def list_children(self, folder_path: str, recursive: bool) -> list[DocumentHandle]:
        folder = normalize_path(folder_path)
        prefix = f"{folder}/" if folder else ""
        under = sorted(p for p in self.documents if p.startswith(prefix))
        if not under:
            log.warning("Folder not found: %s", folder_path)
            return []
        return [
            DocumentHandle(p) for p in under
            if recursive or DocumentHandle(p).parent == folder
        ]
