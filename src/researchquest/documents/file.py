# src/researchquest/documents/file.py
"""Filesystem document source."""

from pathlib import Path

from researchquest.documents.base import Document, DocumentSource
from researchquest.exceptions import DocumentNotFoundError


class FileDocumentSource(DocumentSource):
    """Treats one file on disk as the active document.

    Without a root, document ids are absolute paths (POSIX separators), so the
    same note keeps the same id wherever the process is started from. With a
    root, files under it get ids relative to the root and files outside it
    fall back to absolute paths.

    Example:
        source = FileDocumentSource(root="./notes")
        source.set_active("./notes/topic.md")
        document = source.get_active_document()  # Document(id="topic.md", ...)
    """

    def __init__(self, active_path: str | None = None, root: str | None = None) -> None:
        self.root = Path(root).resolve() if root else None
        self._active: Path | None = None
        if active_path is not None:
            self.set_active(active_path)

    def set_active(self, path: str | None) -> None:
        """Switch the active document (None means no document is open)."""
        self._active = Path(path).resolve() if path is not None else None

    def document_for(self, path: str | Path) -> Document:
        """Build the Document identity for a path."""
        resolved = Path(path).resolve()
        document_id = resolved.as_posix()
        if self.root is not None and resolved.is_relative_to(self.root):
            document_id = resolved.relative_to(self.root).as_posix()
        return Document(id=document_id, path=str(resolved))

    def get_active_document(self) -> Document | None:
        if self._active is None:
            return None
        return self.document_for(self._active)

    def read_text(self, document: Document) -> str:
        file_path = Path(document.path)
        if not file_path.is_file():
            raise DocumentNotFoundError(f"Document not found: {document.path}")
        return file_path.read_text(encoding="utf-8")
