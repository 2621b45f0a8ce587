"""Unit tests for the sessions module."""
import pytest
from hypothesis import given
from hypothesis import strategies as st
from pydantic import ValidationError

from parley.sessions import (
    DEFAULT_SESSION_NAME,
    Message,
    Role,
    Session,
    SessionStore,
    default_session_name,
)


class TestMessage:
    """Tests for the Message model."""

    def test_message_is_immutable(self):
        """Test that messages cannot be edited after creation."""
        message = Message(sender_role=Role.USER, content="hi")
        with pytest.raises(ValidationError):
            message.content = "changed"  # type: ignore

    def test_message_accepts_file_aliases(self):
        """Test that messages load from the sender/content file keys."""
        message = Message.model_validate({"sender": "assistant", "content": "Hello!"})
        assert message.sender_role is Role.ASSISTANT
        assert message.content == "Hello!"

    def test_legacy_api_sender_maps_to_assistant(self):
        """Test that the legacy 'API' sender loads as an assistant message."""
        message = Message.model_validate({"sender": "API", "content": "old reply"})
        assert message.sender_role is Role.ASSISTANT

    def test_unknown_sender_fails(self):
        """Test that unknown sender values are rejected."""
        with pytest.raises(ValidationError):
            Message.model_validate({"sender": "robot", "content": "?"})

    def test_dump_uses_file_keys(self):
        """Test that messages serialize with sender/content keys."""
        message = Message(sender_role=Role.SYSTEM, content="Error: boom")
        assert message.model_dump(mode="json", by_alias=True) == {
            "sender": "system",
            "content": "Error: boom",
        }


class TestSession:
    """Tests for the Session model."""

    def test_default_session(self):
        """Test the default session shape."""
        session = Session.default()
        assert session.ordinal_id == 0
        assert session.display_name == DEFAULT_SESSION_NAME
        assert session.transcript == []

    def test_reset_clears_and_renames(self):
        """Test that reset drops messages and restores the default name."""
        session = Session(ordinal_id=3, display_name="Work")
        session.append(Role.USER, "hi")
        session.reset()
        assert session.transcript == []
        assert session.display_name == DEFAULT_SESSION_NAME
        assert session.ordinal_id == 3

    def test_default_session_name_is_one_based(self):
        """Test that generated names count from 1."""
        assert default_session_name(0) == "Session 1"
        assert default_session_name(4) == "Session 5"


class TestSessionStore:
    """Tests for SessionStore."""

    def test_new_store_has_one_default_session(self, store):
        """Test that a fresh store is never empty."""
        assert len(store) == 1
        assert store.active_index == 0
        assert store.active_session.display_name == DEFAULT_SESSION_NAME

    def test_create_session_assigns_count_as_id(self, store):
        """Test id assignment and default naming."""
        session = store.create_session()
        assert session.ordinal_id == 1
        assert session.display_name == "Session 2"
        assert store.active_session is session
        assert store.active_index == 1

    def test_create_session_with_name(self, store):
        """Test that a supplied name is used as is."""
        session = store.create_session("Research")
        assert session.display_name == "Research"

    def test_create_session_blank_name_uses_default(self, store):
        """Test that a blank name counts as not supplied."""
        session = store.create_session("   ")
        assert session.display_name == "Session 2"

    @given(st.integers(min_value=0, max_value=30))
    def test_create_session_grows_by_one(self, count: int):
        """Property test: each create adds exactly one session."""
        store = SessionStore()
        for expected in range(2, count + 2):
            store.create_session()
            assert len(store) == expected
            assert store.active_index == expected - 1

    def test_remove_active_session_repoints_to_last(self, store):
        """Test that removing the last index moves the active index back."""
        store.create_session("A")
        store.create_session("B")
        removed = store.remove_active_session()

        assert removed is not None and removed.display_name == "B"
        assert len(store) == 2
        assert store.active_index == 1
        assert store.active_session.display_name == "A"

    def test_remove_middle_session_keeps_index(self, store):
        """Test that removing a middle session activates its successor."""
        store.create_session("A")
        store.create_session("B")
        store.select_session(1)
        store.remove_active_session()

        assert store.active_index == 1
        assert store.active_session.display_name == "B"

    def test_remove_only_session_resets_it(self, store):
        """Test that the last session is cleared and renamed, not removed."""
        store.active_session.display_name = "Renamed"
        store.append_message(Role.USER, "hi")

        assert store.remove_active_session() is None
        assert len(store) == 1
        assert store.active_session.transcript == []
        assert store.active_session.display_name == DEFAULT_SESSION_NAME

    @given(st.lists(st.sampled_from(["create", "remove"]), max_size=40))
    def test_store_never_empty(self, operations: list[str]):
        """Property test: no sequence of creates and removes empties the store."""
        store = SessionStore()
        for operation in operations:
            if operation == "create":
                store.create_session()
            else:
                store.remove_active_session()
            assert len(store) >= 1
            assert 0 <= store.active_index < len(store)

    def test_ids_can_repeat_after_removal(self, store):
        """Test that ids follow the session count, not a counter."""
        store.create_session()
        store.remove_active_session()
        again = store.create_session()
        assert again.ordinal_id == 1

    def test_clear_all_sessions(self, store):
        """Test that clearing leaves a single empty default session."""
        store.create_session("A")
        store.append_message(Role.USER, "hi")
        store.create_session("B")
        store.clear_all_sessions()

        assert len(store) == 1
        assert store.active_index == 0
        assert store.active_session.display_name == DEFAULT_SESSION_NAME
        assert store.active_session.transcript == []
        assert store.active_session.ordinal_id == 0

    def test_select_session_out_of_range(self, store):
        """Test that selecting a missing session fails and keeps the selection."""
        with pytest.raises(IndexError):
            store.select_session(5)
        assert store.active_index == 0

    def test_append_message_targets_active_session(self, store):
        """Test that appends go to the active session only."""
        first = store.active_session
        store.create_session()
        store.append_message(Role.USER, "hello")

        assert first.transcript == []
        assert store.active_session.transcript == [Message(sender_role=Role.USER, content="hello")]

    def test_change_listener(self):
        """Test that structural changes notify and appends do not."""
        calls = []
        store = SessionStore(on_change=lambda: calls.append(len(calls)))

        store.append_message(Role.USER, "hi")
        assert calls == []

        store.create_session()
        store.remove_active_session()
        store.remove_active_session()
        store.clear_all_sessions()
        assert len(calls) == 4

    def test_replace_all_with_empty_list_keeps_default(self, store):
        """Test that loading nothing still leaves one session."""
        store.replace_all([])
        assert len(store) == 1
        assert store.active_session.display_name == DEFAULT_SESSION_NAME

    def test_replace_all_resets_bad_index(self, store):
        """Test that an out-of-range active index falls back to 0."""
        store.replace_all([Session(ordinal_id=0, display_name="Only")], active_index=7)
        assert store.active_index == 0
