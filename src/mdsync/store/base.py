"""Abstract document store consumed by the update pipeline"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import PurePosixPath
from typing import Optional


def normalize_path(path: str) -> str:
    """Store-relative POSIX form: no leading './' or '/', no trailing '/'; '' is the root."""
    parts = [p for p in PurePosixPath(str(path).replace("\\", "/")).parts if p not in ("/", ".")]
    return "/".join(parts)


@dataclass(frozen=True)
class DocumentHandle:
    """A resolved document, identified by its store-relative path."""
    path: str

    @property
    def parent(self) -> str:
        return self.path.rpartition("/")[0]


class DocumentStore(ABC):
    @abstractmethod
    def resolve(self, path: str) -> Optional[DocumentHandle]:
        """Return a handle for an existing document, else None."""
        raise NotImplementedError

    @abstractmethod
    def read(self, handle: DocumentHandle) -> str:
        """Return the document text. Raises DocumentNotFoundError or DocumentReadError."""
        raise NotImplementedError

    @abstractmethod
    def write(self, handle: DocumentHandle, text: str) -> None:
        """Replace the document's text. Raises DocumentWriteError on failure."""
        raise NotImplementedError

    @abstractmethod
    def list_children(self, folder_path: str, recursive: bool) -> list[DocumentHandle]:
        """Documents under folder_path (descending into subfolders when recursive); [] if unknown."""
        raise NotImplementedError
