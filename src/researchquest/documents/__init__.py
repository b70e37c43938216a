# src/researchquest/documents/__init__.py
"""Document sources: where the active document and its text come from."""

from researchquest.documents.base import Document, DocumentSource
from researchquest.documents.file import FileDocumentSource

__all__ = ["Document", "DocumentSource", "FileDocumentSource"]
