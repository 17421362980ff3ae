"""Tests for the session controller."""

import asyncio
import pytest
from unittest.mock import AsyncMock, Mock

from notescribe.enhancer import SUMMARY_DELIMITER
from notescribe.exceptions import ConfigurationError, TransportError
from notescribe.exporter import MarkdownExporter
from notescribe.models import Action, EnhancementResponse
from notescribe.session import NoteSession


@pytest.fixture
def enhancer():
    client = Mock()
    client.enhance = AsyncMock(return_value=EnhancementResponse.empty())
    return client


@pytest.fixture
def session(store, enhancer, temp_dir):
    return NoteSession(store, enhancer, MarkdownExporter(str(temp_dir / "exports")))


class TestEditing:
    """Test list/editor intents."""

    def test_new_note_becomes_active(self, session):
        session.preview = True
        note = session.new_note()

        assert session.active_note is note
        assert session.preview is False

    def test_edit_changes_active_note(self, session):
        note = session.new_note()
        session.edit(title="Groceries", content="buy milk")
        assert (note.title, note.content) == ("Groceries", "buy milk")

    def test_edit_without_active_note(self, session):
        assert session.edit(title="x") is None

    def test_open_and_close(self, session):
        first = session.new_note()
        session.new_note()

        session.open_note(first.id)
        assert session.active_note is first

        session.close_note()
        assert session.active_note is None

    def test_search_filters_visible_notes(self, session):
        a = session.new_note()
        session.edit(content="buy milk")
        session.new_note()
        session.edit(content="call mom")

        session.set_search("MILK")
        assert [n.id for n in session.visible_notes()] == [a.id]

        session.set_search("")
        assert len(session.visible_notes()) == 2

    def test_toggle_preview(self, session):
        assert session.toggle_preview() is True
        assert session.toggle_preview() is False


class TestDelete:
    """Test confirmation-gated deletion."""

    def test_confirmed_delete(self, session):
        note = session.new_note()

        assert session.delete_note(note.id, confirm=lambda: True) is True
        assert session.store.get(note.id) is None
        assert session.active_note is None

    def test_cancelled_delete(self, session):
        note = session.new_note()

        assert session.delete_note(note.id, confirm=lambda: False) is False
        assert session.store.get(note.id) is note


class TestRunAction:
    """Test enhancement actions against the active note."""

    def test_title_action(self, session, enhancer):
        note = session.new_note()
        session.edit(content="buy milk and eggs")
        enhancer.enhance.return_value = EnhancementResponse(suggested_title="Grocery List")

        changed = asyncio.run(session.run_action(Action.TITLE))

        assert changed is True
        assert note.title == "Grocery List"
        assert note.content == "buy milk and eggs"
        enhancer.enhance.assert_awaited_once_with("buy milk and eggs", Action.TITLE)

    def test_tag_action(self, session, enhancer):
        note = session.new_note()
        session.edit(content="...", tags=["home"])
        enhancer.enhance.return_value = EnhancementResponse(tags=["home", "shopping"])

        asyncio.run(session.run_action("tag"))

        assert note.tags == ["home", "shopping"]

    def test_summarize_action(self, session, enhancer):
        note = session.new_note()
        session.edit(content="buy milk and eggs")
        enhancer.enhance.return_value = EnhancementResponse(summary="A short grocery list.")

        asyncio.run(session.run_action(Action.SUMMARIZE))

        assert note.content == "buy milk and eggs" + SUMMARY_DELIMITER + "A short grocery list."

    def test_empty_response_leaves_note_unchanged(self, session, enhancer):
        note = session.new_note()
        session.edit(content="buy milk")
        before = note.to_dict()

        changed = asyncio.run(session.run_action(Action.IMPROVE))

        assert changed is False
        assert note.to_dict() == before

    def test_no_active_note(self, session, enhancer):
        assert asyncio.run(session.run_action(Action.TITLE)) is False
        enhancer.enhance.assert_not_awaited()

    def test_empty_content_skipped(self, session, enhancer):
        session.new_note()
        assert asyncio.run(session.run_action(Action.TITLE)) is False
        enhancer.enhance.assert_not_awaited()

    @pytest.mark.parametrize("error", [ConfigurationError("no key"), TransportError("down")])
    def test_errors_propagate_without_mutation(self, session, enhancer, error):
        note = session.new_note()
        session.edit(content="buy milk")
        before = note.to_dict()
        enhancer.enhance.side_effect = error

        with pytest.raises(type(error)):
            asyncio.run(session.run_action(Action.TITLE))

        assert note.to_dict() == before
        assert session.is_busy is False

    def test_result_applies_to_note_active_at_request_time(self, session, enhancer):
        first = session.new_note()
        session.edit(content="buy milk and eggs")

        async def enhance(content, action):
            # User opens another note while the request is in flight
            session.new_note()
            return EnhancementResponse(suggested_title="Grocery List")

        enhancer.enhance.side_effect = enhance
        asyncio.run(session.run_action(Action.TITLE))

        assert first.title == "Grocery List"
        assert session.active_note.title == "Untitled Note"

    def test_result_discarded_when_note_deleted(self, session, enhancer):
        note = session.new_note()
        session.edit(content="buy milk")

        async def enhance(content, action):
            session.delete_note(note.id, confirm=lambda: True)
            return EnhancementResponse(suggested_title="Too late")

        enhancer.enhance.side_effect = enhance

        assert asyncio.run(session.run_action(Action.TITLE)) is False
        assert session.store.notes == []

    def test_single_request_in_flight(self, session, enhancer):
        session.new_note()
        session.edit(content="buy milk")

        async def run_two():
            started = asyncio.Event()
            release = asyncio.Event()

            async def slow_enhance(content, action):
                started.set()
                await release.wait()
                return EnhancementResponse(suggested_title="First")

            enhancer.enhance.side_effect = slow_enhance
            first = asyncio.create_task(session.run_action(Action.TITLE))
            await started.wait()
            busy = session.is_busy
            second = await session.run_action(Action.TITLE)
            release.set()
            return busy, second, await first

        busy, second, first = asyncio.run(run_two())

        assert busy is True
        assert second is False
        assert first is True
        assert enhancer.enhance.await_count == 1


class TestExport:
    """Test exporting the active note."""

    def test_export_active(self, session):
        session.new_note()
        session.edit(title="Groceries", content="buy milk")

        path = session.export_active()

        assert path.name == "Groceries.md"
        assert "buy milk" in path.read_text(encoding='utf-8')

    def test_export_without_active_note(self, session):
        assert session.export_active() is None

    def test_export_empty_title_uses_default_name(self, session):
        session.new_note()
        session.edit(title="")
        assert session.export_active().name == "Note.md"
