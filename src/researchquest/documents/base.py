# src/researchquest/documents/base.py
"""Document source abstract base class."""

from abc import ABC, abstractmethod

from pydantic import BaseModel


class Document(BaseModel):
    """Identity of a document quests can be attached to."""

    id: str
    path: str


class DocumentSource(ABC):
    """Identifies the current document and reads its text."""

    @abstractmethod
    def get_active_document(self) -> Document | None:
        """Return the document currently in focus, or None if there is none."""
        ...

    @abstractmethod
    def read_text(self, document: Document) -> str:
        """Read the full current text of a document."""
        ...

    async def aread_text(self, document: Document) -> str:
        """Async variant. Default implementation calls sync read_text()."""
        return self.read_text(document)
