"""Unit tests for store/fs.py"""

import pytest

from mdsync.errors import DocumentNotFoundError, DocumentReadError, DocumentWriteError
from mdsync.store import DocumentHandle, FileSystemStore


@pytest.fixture(name="vault")
def vault_fixture(tmp_path):
    (tmp_path / "Notes" / "sub").mkdir(parents=True)
    (tmp_path / "Notes" / ".obsidian").mkdir()
    (tmp_path / "Notes" / "a.md").write_text("# A", encoding="utf-8")
    (tmp_path / "Notes" / "b.MD").write_text("# B", encoding="utf-8")
    (tmp_path / "Notes" / "image.png").write_bytes(b"\x89PNG")
    (tmp_path / "Notes" / "sub" / "c.md").write_text("# C", encoding="utf-8")
    (tmp_path / "Notes" / ".obsidian" / "hidden.md").write_text("x", encoding="utf-8")
    return tmp_path


@pytest.fixture(name="store")
def store_fixture(vault):
    return FileSystemStore(vault)


def test_resolve_existing_document(store):
    """Existing Markdown files resolve to store-relative handles."""
    assert store.resolve("Notes/a.md") == DocumentHandle("Notes/a.md")
    assert store.resolve("./Notes/a.md") == DocumentHandle("Notes/a.md")


def test_resolve_missing_or_non_document(store):
    """Missing files, folders and other extensions do not resolve."""
    assert store.resolve("Notes/zzz.md") is None
    assert store.resolve("Notes") is None
    assert store.resolve("Notes/image.png") is None


def test_read_and_write_round_trip(store, vault):
    """write replaces the file text; read returns it."""
    handle = store.resolve("Notes/a.md")
    store.write(handle, "# A\nnew body")
    assert store.read(handle) == "# A\nnew body"
    assert (vault / "Notes" / "a.md").read_text(encoding="utf-8") == "# A\nnew body"


def test_read_missing_raises_not_found(store):
    """Reading a vanished file raises DocumentNotFoundError."""
    with pytest.raises(DocumentNotFoundError):
        store.read(DocumentHandle("Notes/gone.md"))


def test_read_undecodable_raises_read_error(store, vault):
    """A file that is not valid UTF-8 raises DocumentReadError carrying the path."""
    (vault / "Notes" / "latin1.md").write_bytes("# Caf\xe9".encode("latin-1"))
    with pytest.raises(DocumentReadError, match="Failed to read Notes/latin1.md") as exc:
        store.read(store.resolve("Notes/latin1.md"))
    assert exc.value.path == "Notes/latin1.md"


def test_write_failure_is_wrapped(store):
    """OS errors on write surface as DocumentWriteError."""
    with pytest.raises(DocumentWriteError, match="missing/dir.md"):
        store.write(DocumentHandle("missing/dir.md"), "text")


def test_list_children_flat(store):
    """Only direct Markdown children are listed, sorted; extensions match case-insensitively."""
    assert [h.path for h in store.list_children("Notes", False)] == ["Notes/a.md", "Notes/b.MD"]


def test_list_children_recursive_skips_hidden(store):
    """Recursive listing descends into subfolders but not hidden ones."""
    assert [h.path for h in store.list_children("Notes", True)] == [
        "Notes/a.md", "Notes/b.MD", "Notes/sub/c.md",
    ]


def test_list_children_unknown_folder(store):
    """An unknown folder lists nothing."""
    assert store.list_children("Nope", True) == []


def test_list_children_root(store):
    """The empty path is the vault root."""
    assert [h.path for h in store.list_children("", True)][:1] == ["Notes/a.md"]
    assert store.list_children(".", False) == []


def test_custom_extensions(vault):
    """Only configured extensions count as documents."""
    (vault / "Notes" / "d.markdown").write_text("# D", encoding="utf-8")
    store = FileSystemStore(vault, extensions=[".markdown"])
    assert [h.path for h in store.list_children("Notes", False)] == ["Notes/d.markdown"]
