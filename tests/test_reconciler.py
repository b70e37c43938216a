# tests/test_reconciler.py
"""Tests for the quest reconciliation cycle."""

import asyncio
import logging

import pytest

from researchquest.reconciler import Reconciler, RefreshStatus
from researchquest.settings import Settings

EDITED = "The note was rewritten and now talks about mitochondria."


@pytest.fixture
def reconciler(memory_store, documents, generator, evaluator):
    return Reconciler(
        store=memory_store,
        documents=documents,
        question_generator=generator,
        question_evaluator=evaluator,
    )


def active_for(store, document_id="notes/topic.md"):
    return [q for q in store.quests if q.document_id == document_id and q.is_active]


class TestPreconditions:
    @pytest.mark.asyncio
    async def test_not_configured(self, memory_store, documents, caplog):
        reconciler = Reconciler(store=memory_store, documents=documents)

        with caplog.at_level(logging.ERROR):
            result = await reconciler.arefresh()

        assert result.status is RefreshStatus.NOT_CONFIGURED
        assert memory_store.saves == []
        assert "not configured" in caplog.text

    @pytest.mark.asyncio
    async def test_missing_evaluator_is_not_configured(self, memory_store, documents, generator):
        reconciler = Reconciler(
            store=memory_store, documents=documents, question_generator=generator
        )

        result = await reconciler.arefresh()

        assert result.status is RefreshStatus.NOT_CONFIGURED
        assert generator.calls == []

    @pytest.mark.asyncio
    async def test_no_active_document(self, reconciler, documents, memory_store, generator):
        documents.document = None

        result = await reconciler.arefresh()

        assert result.status is RefreshStatus.NO_DOCUMENT
        assert memory_store.saves == []
        assert generator.calls == []


class TestRefreshCycle:
    @pytest.mark.asyncio
    async def test_first_visit_generates_target_count(self, reconciler, memory_store, evaluator):
        result = await reconciler.arefresh()

        assert result.status is RefreshStatus.COMPLETED
        assert len(memory_store.quests) == 5
        assert all(not q.is_completed for q in memory_store.quests)
        assert all(q.document_id == "notes/topic.md" for q in memory_store.quests)
        assert len(result.created) == 5
        assert result.active_count == 5
        assert evaluator.calls == []  # nothing to evaluate on a first visit
        assert result.writes == 1

    @pytest.mark.asyncio
    async def test_new_quests_capture_context(self, reconciler, memory_store, document_text):
        from researchquest.context import fingerprint

        await reconciler.arefresh()

        for quest in memory_store.quests:
            assert quest.context_hash == fingerprint(document_text)
            assert quest.context_snapshot == document_text
            assert quest.document_path == "/vault/notes/topic.md"
            assert quest.last_validated is not None

    @pytest.mark.asyncio
    async def test_single_answered_quest_is_replaced(
        self, reconciler, memory_store, generator, evaluator, make_quest
    ):
        quest = make_quest()
        memory_store.quests = [quest]
        evaluator.answered = {quest.id}

        result = await reconciler.arefresh()

        stored = {q.id: q for q in memory_store.quests}
        assert stored[quest.id].is_completed
        assert stored[quest.id].completed_at is not None
        assert generator.calls == [5]
        assert result.completed_ids == [quest.id]
        assert len(active_for(memory_store)) == 5

    @pytest.mark.asyncio
    async def test_partial_completion_tops_up(
        self, reconciler, memory_store, generator, evaluator, make_quest
    ):
        quests = [make_quest(f"Q{i}?") for i in range(5)]
        memory_store.quests = quests
        evaluator.answered = {q.id for q in quests[:3]}

        result = await reconciler.arefresh()

        assert generator.calls == [3]
        active = active_for(memory_store)
        assert len(active) == 5
        assert {q.id for q in quests[3:]} <= {q.id for q in active}
        assert len(result.created) == 3
        assert result.writes == 2

    @pytest.mark.asyncio
    async def test_full_set_unchanged_skips_generation_and_write(
        self, reconciler, memory_store, generator, make_quest
    ):
        memory_store.quests = [make_quest(f"Q{i}?") for i in range(5)]

        result = await reconciler.arefresh()

        assert generator.calls == []
        assert memory_store.saves == []
        assert result.writes == 0
        assert result.active_count == 5

    @pytest.mark.asyncio
    async def test_full_set_with_drift_writes_once(
        self, reconciler, memory_store, documents, generator, make_quest
    ):
        memory_store.quests = [make_quest(f"Q{i}?") for i in range(5)]
        documents.text = EDITED

        result = await reconciler.arefresh()

        assert generator.calls == []
        assert result.writes == 1
        assert len(result.obsoleted_ids) == 5
        assert all(q.is_obsolete for q in memory_store.quests)

    @pytest.mark.asyncio
    async def test_completed_and_dismissed_not_evaluated(
        self, reconciler, memory_store, evaluator, make_quest
    ):
        done = make_quest("Done?").complete()
        dismissed = make_quest("Dismissed?").dismiss()
        active = make_quest("Open?")
        memory_store.quests = [done, dismissed, active]

        await reconciler.arefresh()

        assert [[ref.id for ref in call] for call in evaluator.calls] == [[active.id]]

    @pytest.mark.asyncio
    async def test_only_current_document_evaluated(
        self, reconciler, memory_store, evaluator, make_quest
    ):
        mine = make_quest("Mine?")
        other = make_quest("Other?", document_id="other.md")
        memory_store.quests = [mine, other]

        await reconciler.arefresh()

        assert [ref.id for ref in evaluator.calls[0]] == [mine.id]

    @pytest.mark.asyncio
    async def test_only_inactive_quests_skip_evaluation(
        self, reconciler, memory_store, evaluator, generator, make_quest
    ):
        memory_store.quests = [make_quest().complete()]

        result = await reconciler.arefresh()

        assert evaluator.calls == []
        assert generator.calls == [5]
        assert result.writes == 1

    @pytest.mark.asyncio
    async def test_unknown_evaluation_ids_ignored(
        self, reconciler, memory_store, evaluator, make_quest
    ):
        mine = make_quest("Mine?")
        other = make_quest("Other?", document_id="other.md")
        memory_store.quests = [mine, other]
        evaluator.extra_ids = {other.id, "no-such-quest"}

        result = await reconciler.arefresh()

        stored = {q.id: q for q in memory_store.quests}
        assert not stored[other.id].is_completed
        assert result.completed_ids == []
        assert "no-such-quest" not in stored

    @pytest.mark.asyncio
    async def test_other_documents_kept(self, reconciler, memory_store, make_quest):
        other = make_quest("Other?", document_id="other.md", text="other text")
        memory_store.quests = [other]

        await reconciler.arefresh()

        assert other.id in {q.id for q in memory_store.quests}
        assert len(memory_store.quests) == 6

    @pytest.mark.asyncio
    async def test_collection_scope_flags_other_documents(
        self, reconciler, memory_store, make_quest
    ):
        other = make_quest("Other?", document_id="other.md", text="other text")
        memory_store.quests = [other]

        await reconciler.arefresh()

        stored = {q.id: q for q in memory_store.quests}
        assert stored[other.id].is_obsolete is True

    @pytest.mark.asyncio
    async def test_document_scope_leaves_other_documents(
        self, memory_store, documents, generator, evaluator, make_quest
    ):
        reconciler = Reconciler(
            store=memory_store,
            documents=documents,
            question_generator=generator,
            question_evaluator=evaluator,
            settings=Settings(validation_scope="document"),
        )
        other = make_quest("Other?", document_id="other.md", text="other text")
        memory_store.quests = [other]

        await reconciler.arefresh()

        stored = {q.id: q for q in memory_store.quests}
        assert stored[other.id] == other

    @pytest.mark.asyncio
    async def test_obsolete_quests_still_count_as_active(
        self, reconciler, memory_store, documents, generator, evaluator, make_quest
    ):
        quests = [make_quest(f"Q{i}?") for i in range(5)]
        memory_store.quests = quests
        documents.text = EDITED

        await reconciler.arefresh()

        assert generator.calls == []
        assert len(evaluator.calls[0]) == 5

    @pytest.mark.asyncio
    async def test_custom_target_count(self, memory_store, documents, generator, evaluator):
        reconciler = Reconciler(
            store=memory_store,
            documents=documents,
            question_generator=generator,
            question_evaluator=evaluator,
            settings=Settings(target_active_count=2),
        )

        await reconciler.arefresh()

        assert generator.calls == [2]
        assert len(memory_store.quests) == 2

    @pytest.mark.asyncio
    async def test_target_zero_never_generates(self, memory_store, documents, generator, evaluator):
        reconciler = Reconciler(
            store=memory_store,
            documents=documents,
            question_generator=generator,
            question_evaluator=evaluator,
            settings=Settings(target_active_count=0),
        )

        result = await reconciler.arefresh()

        assert generator.calls == []
        assert result.writes == 0

    def test_sync_refresh(self, reconciler, memory_store):
        result = reconciler.refresh()

        assert result.ok
        assert len(memory_store.quests) == 5


class TestGenerationCount:
    @pytest.mark.asyncio
    async def test_short_generation_warns(self, reconciler, memory_store, generator, caplog):
        generator.questions = ["Only one?", "And two?"]

        with caplog.at_level(logging.WARNING):
            result = await reconciler.arefresh()

        assert result.ok
        assert len(memory_store.quests) == 2
        assert "Requested 5 questions" in caplog.text

    @pytest.mark.asyncio
    async def test_long_generation_kept_and_warns(
        self, reconciler, memory_store, generator, caplog
    ):
        generator.questions = [f"Q{i}?" for i in range(7)]

        with caplog.at_level(logging.WARNING):
            await reconciler.arefresh()

        assert len(memory_store.quests) == 7
        assert "returned 7" in caplog.text


class TestFailures:
    @pytest.mark.asyncio
    async def test_generation_failure_writes_nothing(
        self, memory_store, documents, failing_generator, evaluator, caplog
    ):
        reconciler = Reconciler(
            store=memory_store,
            documents=documents,
            question_generator=failing_generator,
            question_evaluator=evaluator,
        )

        with caplog.at_level(logging.ERROR):
            result = await reconciler.arefresh()

        assert result.status is RefreshStatus.FAILED
        assert not result.ok
        assert "generation service unavailable" in result.error
        assert memory_store.saves == []
        assert "Error refreshing quests:" in caplog.text

    @pytest.mark.asyncio
    async def test_generation_failure_keeps_completions(
        self, memory_store, documents, failing_generator, evaluator, make_quest
    ):
        quest = make_quest()
        memory_store.quests = [quest]
        evaluator.answered = {quest.id}
        reconciler = Reconciler(
            store=memory_store,
            documents=documents,
            question_generator=failing_generator,
            question_evaluator=evaluator,
        )

        result = await reconciler.arefresh()

        assert result.status is RefreshStatus.FAILED
        assert len(memory_store.saves) == 1
        assert memory_store.quests[0].is_completed

    @pytest.mark.asyncio
    async def test_evaluation_failure_writes_nothing(
        self, reconciler, memory_store, evaluator, make_quest
    ):
        memory_store.quests = [make_quest()]

        def fail(document_text, questions):
            raise RuntimeError("evaluation timed out")

        evaluator.evaluate = fail

        result = await reconciler.arefresh()

        assert result.status is RefreshStatus.FAILED
        assert memory_store.saves == []

    @pytest.mark.asyncio
    async def test_document_read_failure(self, reconciler, documents, memory_store):
        def fail(document):
            raise FileNotFoundError("note deleted")

        documents.read_text = fail

        result = await reconciler.arefresh()

        assert result.status is RefreshStatus.FAILED
        assert memory_store.saves == []

    @pytest.mark.asyncio
    async def test_duplicate_ids_refuse_write(self, reconciler, memory_store, make_quest):
        quest = make_quest().complete()
        memory_store.quests = [quest, quest]

        result = await reconciler.arefresh()

        assert result.status is RefreshStatus.FAILED
        assert memory_store.saves == []


class TestConcurrency:
    @pytest.mark.asyncio
    async def test_overlapping_refresh_for_same_document_skipped(
        self, reconciler, memory_store, generator
    ):
        generator.delay = 0.05

        first, second = await asyncio.gather(reconciler.arefresh(), reconciler.arefresh())

        assert first.status is RefreshStatus.COMPLETED
        assert second.status is RefreshStatus.IN_FLIGHT
        assert generator.calls == [5]
        assert len(memory_store.quests) == 5

    @pytest.mark.asyncio
    async def test_guard_released_after_cycle(self, reconciler, memory_store, generator):
        await reconciler.arefresh()
        memory_store.quests = []

        result = await reconciler.arefresh()

        assert result.status is RefreshStatus.COMPLETED
        assert generator.calls == [5, 5]

    @pytest.mark.asyncio
    async def test_guard_released_after_failure(
        self, memory_store, documents, failing_generator, evaluator
    ):
        reconciler = Reconciler(
            store=memory_store,
            documents=documents,
            question_generator=failing_generator,
            question_evaluator=evaluator,
        )

        await reconciler.arefresh()
        result = await reconciler.arefresh()

        assert result.status is RefreshStatus.FAILED


class TestOnChange:
    @pytest.mark.asyncio
    async def test_callback_receives_collection_after_each_write(
        self, memory_store, documents, generator, evaluator, make_quest
    ):
        seen = []
        quests = [make_quest(f"Q{i}?") for i in range(5)]
        memory_store.quests = quests
        evaluator.answered = {quests[0].id}
        reconciler = Reconciler(
            store=memory_store,
            documents=documents,
            question_generator=generator,
            question_evaluator=evaluator,
            on_change=seen.append,
        )

        await reconciler.arefresh()

        assert len(seen) == 2
        assert len(seen[0]) == 5
        assert len(seen[1]) == 6
        assert seen[-1] == memory_store.quests

    @pytest.mark.asyncio
    async def test_callback_not_called_without_write(
        self, memory_store, documents, generator, evaluator, make_quest
    ):
        seen = []
        memory_store.quests = [make_quest(f"Q{i}?") for i in range(5)]
        reconciler = Reconciler(
            store=memory_store,
            documents=documents,
            question_generator=generator,
            question_evaluator=evaluator,
            on_change=seen.append,
        )

        await reconciler.arefresh()

        assert seen == []
