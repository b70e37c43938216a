# src/researchquest/context/fingerprint.py
"""Content fingerprinting for drift detection."""

import hashlib


def fingerprint(text: str) -> str:
    """Return the SHA-256 hex digest of a document's text.

    Used both to stamp new quests and to detect that a document changed
    since a quest's context was captured.
    """
    return hashlib.sha256(text.encode("utf-8")).hexdigest()
