"""Document store backed by a directory of Markdown files"""

import logging
from pathlib import Path
from typing import Iterable, Optional

from mdsync.errors import DocumentNotFoundError, DocumentReadError, DocumentWriteError
from mdsync.store.base import DocumentHandle, DocumentStore, normalize_path


log = logging.getLogger(__name__)

MD_EXTENSIONS = {'.md'}


class FileSystemStore(DocumentStore):
    """Vault rooted at `root`; handles carry paths relative to it."""

    def __init__(self, root: Path, extensions: Iterable[str] = MD_EXTENSIONS):
        self.root = Path(root)
        self.extensions = {e.lower() for e in extensions}

    def _abs(self, path: str) -> Path:
        return self.root / normalize_path(path)

    def _is_document(self, path: Path) -> bool:
        return path.is_file() and path.suffix.lower() in self.extensions

    def resolve(self, path: str) -> Optional[DocumentHandle]:
        if not self._is_document(self._abs(path)):
            return None
        return DocumentHandle(normalize_path(path))

    def read(self, handle: DocumentHandle) -> str:
        try:
            return self._abs(handle.path).read_text(encoding='utf-8')
        except FileNotFoundError as e:
            raise DocumentNotFoundError(handle.path) from e
        except UnicodeDecodeError as e:
            raise DocumentReadError(handle.path, e) from e

    def write(self, handle: DocumentHandle, text: str) -> None:
        try:
            self._abs(handle.path).write_text(text, encoding='utf-8')
        except OSError as e:
            raise DocumentWriteError(handle.path, e) from e

    def list_children(self, folder_path: str, recursive: bool) -> list[DocumentHandle]:
        base = self._abs(folder_path)
        if not base.is_dir():
            log.warning("Folder not found: %s", folder_path)
            return []

        candidates = base.rglob('*') if recursive else base.iterdir()
        return [
            DocumentHandle(p.relative_to(self.root).as_posix())
            for p in sorted(candidates)
            if self._is_document(p) and not any(part.startswith('.') for part in p.relative_to(base).parts)
        ]
