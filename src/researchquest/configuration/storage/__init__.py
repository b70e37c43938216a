# src/researchquest/configuration/storage/__init__.py
"""Storage configurations for researchquest."""

from researchquest.configuration.storage.local import LocalStorage

__all__ = ["LocalStorage"]
