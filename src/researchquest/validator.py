# src/researchquest/validator.py
"""Context drift validation for stored quests."""

from collections.abc import Iterable
from datetime import datetime

from researchquest.context import fingerprint
from researchquest.models import OBSOLETE_REASON, Quest, utcnow


def validate_quests(
    quests: Iterable[Quest],
    document_text: str,
    *,
    document_id: str | None = None,
    self_heal: bool = False,
    now: datetime | None = None,
) -> list[Quest]:
    """Flag quests whose captured context no longer matches the document.

    The comparison is coarse: any change anywhere in the document changes
    its fingerprint, so every quest with captured context is flagged even
    if the passage it cares about is untouched.

    Args:
        quests: Quests to validate. Not modified.
        document_text: Current text of the active document.
        document_id: If given, only quests of this document are validated and
            all others pass through unchanged. If None, every quest is compared
            against document_text.
        self_heal: Clear a previous obsolete flag when the fingerprint matches
            again. Obsolescence is sticky when False.
        now: Timestamp recorded in last_validated (default: current UTC time).

    Returns:
        A new list, in input order.
    """
    now = now or utcnow()
    current_hash = fingerprint(document_text)

    validated = []
    for quest in quests:
        if document_id is not None and quest.document_id != document_id:
            validated.append(quest)
        elif not quest.has_context:
            validated.append(quest)
        elif quest.context_hash != current_hash:
            # Already-flagged quests keep their original timestamp
            if not quest.is_obsolete:
                quest = quest.mark_obsolete(OBSOLETE_REASON, now)
            validated.append(quest)
        elif self_heal and quest.is_obsolete:
            validated.append(quest.clear_obsolete(now))
        else:
            validated.append(quest)
    return validated
