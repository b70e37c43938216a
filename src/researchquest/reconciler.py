# src/researchquest/reconciler.py
"""Quest reconciliation: keep each document's active quest set fresh."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum

from researchquest.context import ContextExtractor, WindowContextExtractor, fingerprint
from researchquest.documents import Document, DocumentSource
from researchquest.models import Quest, QuestionRef, ensure_unique_ids, utcnow
from researchquest.questions import QuestionEvaluator, QuestionGenerator
from researchquest.settings import Settings
from researchquest.stores import QuestStore
from researchquest.validator import validate_quests

logger = logging.getLogger(__name__)

ChangeCallback = Callable[[list[Quest]], None]
"""Called with the full collection after every successful write."""


class RefreshStatus(Enum):
    """How a refresh cycle ended."""

    COMPLETED = "completed"
    NOT_CONFIGURED = "not_configured"
    NO_DOCUMENT = "no_document"
    IN_FLIGHT = "in_flight"
    FAILED = "failed"


@dataclass
class RefreshResult:
    """Outcome of one refresh cycle.

    Attributes:
        status: How the cycle ended
        document_id: Active document id (None if there was none)
        evaluated: Number of quests sent for evaluation
        completed_ids: Quests marked complete this cycle
        obsoleted_ids: Quests newly flagged obsolete this cycle
        created: Quests generated this cycle
        active_count: Active quests for the document after the cycle
        writes: Number of store writes performed
        error: Error message if the cycle failed
    """

    status: RefreshStatus
    document_id: str | None = None
    evaluated: int = 0
    completed_ids: list[str] = field(default_factory=list)
    obsoleted_ids: list[str] = field(default_factory=list)
    created: list[Quest] = field(default_factory=list)
    active_count: int = 0
    writes: int = 0
    error: str | None = None

    @property
    def ok(self) -> bool:
        """True unless the cycle failed."""
        return self.status is not RefreshStatus.FAILED


class Reconciler:
    """Orchestrates one refresh cycle per trigger.

    Cycle:
    1. Check a generator and an evaluator are configured, and a document is active
    2. Load the document text and the full quest collection
    3. Validate stored quests against the document fingerprint
    4. Evaluate the document's active quests and mark answered ones complete
    5. Generate replacements up to settings.target_active_count
    6. Persist the merged collection

    When both evaluation and generation run, the post-evaluation collection is
    saved before generation starts so completions survive a generation
    failure. Otherwise there is a single write.

    Errors never propagate: they are logged with the "Error refreshing quests:"
    prefix and reported through RefreshResult.status.

    Overlapping cycles for the same document are not run: a trigger arriving
    while that document's cycle is in flight returns RefreshStatus.IN_FLIGHT.
    Cycles for different documents are not serialized and the store is
    last-writer-wins on the whole collection.
    """

    def __init__(
        self,
        store: QuestStore,
        documents: DocumentSource,
        question_generator: QuestionGenerator | None = None,
        question_evaluator: QuestionEvaluator | None = None,
        context_extractor: ContextExtractor | None = None,
        settings: Settings | None = None,
        on_change: ChangeCallback | None = None,
    ) -> None:
        """Initialize the reconciler.

        Args:
            store: Whole-collection quest store
            documents: Source of the active document and its text
            question_generator: Capability producing new questions. Refreshes
                are skipped while it is None.
            question_evaluator: Capability judging which questions are answered.
                Refreshes are skipped while it is None.
            context_extractor: Picks the snapshot stored with new quests.
                Default: WindowContextExtractor.
            settings: Behavioral settings (target count, context size, validation)
            on_change: Optional callback fired after each write
        """
        self.store = store
        self.documents = documents
        self.question_generator = question_generator
        self.question_evaluator = question_evaluator
        self.context_extractor = context_extractor or WindowContextExtractor()
        self.settings = settings if settings is not None else Settings()
        self.on_change = on_change
        self._in_flight: set[str] = set()

    @property
    def is_configured(self) -> bool:
        return self.question_generator is not None and self.question_evaluator is not None

    def refresh(self) -> RefreshResult:
        """Run one refresh cycle synchronously."""
        return asyncio.run(self.arefresh())

    async def arefresh(self) -> RefreshResult:
        """Run one refresh cycle. Never raises."""
        if not self.is_configured:
            logger.error("Question generation is not configured; skipping quest refresh")
            return RefreshResult(status=RefreshStatus.NOT_CONFIGURED)

        try:
            document = self.documents.get_active_document()
        except Exception as e:
            logger.exception("Error refreshing quests: %s", e)
            return RefreshResult(status=RefreshStatus.FAILED, error=str(e))

        if document is None:
            logger.debug("No active document; skipping quest refresh")
            return RefreshResult(status=RefreshStatus.NO_DOCUMENT)

        if document.id in self._in_flight:
            logger.info("Refresh already in flight for %s; skipping", document.id)
            return RefreshResult(status=RefreshStatus.IN_FLIGHT, document_id=document.id)

        result = RefreshResult(status=RefreshStatus.COMPLETED, document_id=document.id)
        self._in_flight.add(document.id)
        try:
            await self._run_cycle(document, result)
        except Exception as e:
            logger.exception("Error refreshing quests: %s", e)
            result.status = RefreshStatus.FAILED
            result.error = str(e)
        finally:
            self._in_flight.discard(document.id)

        if result.ok:
            logger.info(
                "Refreshed quests for %s: %d completed, %d created, %d newly obsolete, %d active",
                document.id,
                len(result.completed_ids),
                len(result.created),
                len(result.obsoleted_ids),
                result.active_count,
            )
        return result

    async def _run_cycle(self, document: Document, result: RefreshResult) -> None:
        now = utcnow()
        document_text = await self.documents.aread_text(document)
        loaded = await self.store.aget_quests()

        quests = self._validate(loaded, document, document_text, now, result)
        document_quests = [q for q in quests if q.document_id == document.id]

        evaluated = False
        # Documents seen for the first time skip evaluation entirely
        if document_quests:
            active = [q for q in document_quests if q.is_active]
            if active:
                quests = await self._evaluate(quests, active, document_text, now, result)
                evaluated = True

        active_count = sum(1 for q in quests if q.document_id == document.id and q.is_active)
        needed = max(0, self.settings.target_active_count - active_count)
        result.active_count = active_count

        if needed == 0:
            if quests != loaded:
                await self._persist(quests, result)
            return

        if evaluated:
            await self._persist(quests, result)

        new_quests = await self._generate(document, document_text, needed, now)
        await self._persist(quests + new_quests, result)
        result.created = new_quests
        result.active_count = active_count + len(new_quests)

    def _validate(
        self,
        quests: list[Quest],
        document: Document,
        document_text: str,
        now: datetime,
        result: RefreshResult,
    ) -> list[Quest]:
        scope_id = document.id if self.settings.validation_scope == "document" else None
        validated = validate_quests(
            quests,
            document_text,
            document_id=scope_id,
            self_heal=self.settings.self_heal_obsolescence,
            now=now,
        )
        result.obsoleted_ids = [
            after.id
            for before, after in zip(quests, validated, strict=True)
            if after.is_obsolete and not before.is_obsolete
        ]
        return validated

    async def _evaluate(
        self,
        quests: list[Quest],
        active: list[Quest],
        document_text: str,
        now: datetime,
        result: RefreshResult,
    ) -> list[Quest]:
        """Ask the evaluator about active quests; return the collection with answers completed."""
        assert self.question_evaluator is not None
        refs = [QuestionRef(id=q.id, question=q.question) for q in active]
        evaluation = await self.question_evaluator.aevaluate(document_text, refs)
        result.evaluated = len(refs)

        # Verdicts on ids that were not asked about are ignored
        answered = evaluation.answered_ids() & {q.id for q in active}
        result.completed_ids = [q.id for q in active if q.id in answered]
        return [q.complete(now) if q.id in answered else q for q in quests]

    async def _generate(
        self,
        document: Document,
        document_text: str,
        needed: int,
        now: datetime,
    ) -> list[Quest]:
        assert self.question_generator is not None
        questions = await self.question_generator.agenerate(document_text, needed)
        if len(questions) != needed:
            logger.warning(
                "Requested %d questions for %s but the generator returned %d",
                needed,
                document.id,
                len(questions),
            )

        context_hash = fingerprint(document_text)
        new_quests = []
        for question in questions:
            snapshot = await self.context_extractor.aextract(
                document_text, question, self.settings.context_size
            )
            new_quests.append(
                Quest.create(
                    question,
                    document.id,
                    document.path,
                    context_hash=context_hash,
                    context_snapshot=snapshot,
                    now=now,
                )
            )
        return new_quests

    async def _persist(self, quests: list[Quest], result: RefreshResult) -> None:
        ensure_unique_ids(quests)
        await self.store.asave_quests(quests)
        result.writes += 1
        if self.on_change is not None:
            self.on_change(quests)
