# src/researchquest/context/window.py
"""Midpoint word-window context extraction.

Known limitation: this is a positional heuristic. It returns the words
around the middle of the document whatever the question is, so the snapshot
is not guaranteed to be the part of the document the question is about.
LLMContextExtractor trades an extra model call for a relevance-ranked window.
"""

from researchquest.context.base import DEFAULT_CONTEXT_SIZE, ContextExtractor


def midpoint_window(text: str, target_size: int = DEFAULT_CONTEXT_SIZE) -> str:
    """Return target_size words centered on the document's midpoint word."""
    words = text.split()
    if len(words) <= target_size:
        return text

    start = max(0, len(words) // 2 - target_size // 2)
    end = min(len(words), start + target_size)
    return " ".join(words[start:end])


def split_windows(text: str, target_size: int = DEFAULT_CONTEXT_SIZE) -> list[str]:
    """Split text into consecutive, non-overlapping windows of target_size words."""
    words = text.split()
    return [" ".join(words[i : i + target_size]) for i in range(0, len(words), target_size)]


class WindowContextExtractor(ContextExtractor):
    """Baseline extractor: the midpoint window, independent of the question."""

    def extract(self, text: str, question: str, target_size: int = DEFAULT_CONTEXT_SIZE) -> str:
        if not text:
            return ""
        return midpoint_window(text, target_size)
