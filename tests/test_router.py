"""Tests for the command router."""

import pytest

from conftest import OWNER_ID, InMemoryStore
from weeklist.config import SaveFailurePolicy
from weeklist.core.commands import ADD_USAGE, EDIT_USAGE, REMOVE_USAGE, VIEW_USAGE
from weeklist.core.tasks import EMPTY_PLACEHOLDER, escape_markdown
from weeklist.router import HELP_TEXT, OUT_OF_RANGE_TEXT, SAVE_WARNING, UNKNOWN_TEXT, CommandRouter


@pytest.fixture
def router(store):
    return CommandRouter(store, OWNER_ID)


def seeded(weekday=(), weekend=()) -> InMemoryStore:
    return InMemoryStore({"weekday": list(weekday), "weekend": list(weekend)})


class TestAuthorization:
    def test_other_sender_gets_nothing(self, router, store):
        assert router.handle("/add weekday Buy milk", 1) is None
        assert store.data["weekday"] == []

    def test_other_sender_never_touches_storage(self, router, store):
        router.handle("/lists", 1)
        assert store.loads == 0
        assert store.saves == 0

    def test_sender_compared_as_string(self, store):
        router = CommandRouter(store, str(OWNER_ID))
        assert router.handle("/help", OWNER_ID) == HELP_TEXT


class TestReadOnlyCommands:
    def test_help_lists_every_command(self, router):
        text = router.handle("/help", OWNER_ID)
        for name in ("/add", "/view", "/edit", "/remove", "/lists"):
            assert name in text

    def test_unknown_command(self, router):
        assert router.handle("/dance", OWNER_ID) == UNKNOWN_TEXT

    def test_lists(self):
        store = seeded(weekday=["Gym"], weekend=["Hike", "Read"])
        text = CommandRouter(store, OWNER_ID).handle("/lists", OWNER_ID)
        assert "1. Gym" in text
        assert "1. Hike\n2. Read" in text

    def test_view_empty_list_shows_placeholder(self, router):
        assert router.handle("/view weekend", OWNER_ID) == f"**weekend**\n{EMPTY_PLACEHOLDER}"

    def test_view_bad_list(self, router):
        assert router.handle("/view someday", OWNER_ID) == VIEW_USAGE

    def test_view_is_idempotent_and_never_saves(self):
        store = seeded(weekday=["a", "b"])
        router = CommandRouter(store, OWNER_ID)
        first = router.handle("/view weekday", OWNER_ID)
        second = router.handle("/view weekday", OWNER_ID)
        assert first == second
        assert store.saves == 0
        assert store.data["weekday"] == ["a", "b"]

    def test_every_command_loads_once(self, router, store):
        router.handle("/lists", OWNER_ID)
        assert store.loads == 1


class TestAdd:
    def test_add_appends_and_confirms(self, router, store):
        response = router.handle("/add weekday Buy milk", OWNER_ID)
        assert response == "Added to **weekday**: Buy milk"
        assert store.data["weekday"] == ["Buy milk"]
        assert store.saves == 1

    @pytest.mark.parametrize("task", ["Water plants", "Call   the   bank", "Pay rent!"])
    def test_added_task_is_last_in_view(self, task):
        store = seeded(weekend=["Existing"])
        router = CommandRouter(store, OWNER_ID)
        router.handle(f"/add weekend {task}", OWNER_ID)
        view = router.handle("/view weekend", OWNER_ID)
        expected = escape_markdown(" ".join(task.split()))
        assert view.splitlines()[-1] == f"2. {expected}"

    def test_markdown_in_task_is_escaped_in_reply(self, router, store):
        response = router.handle("/add weekday Call <mom> re 2*3*4", OWNER_ID)
        assert response == "Added to **weekday**: Call \\<mom\\> re 2\\*3\\*4"
        assert store.data["weekday"] == ["Call <mom> re 2*3*4"]

    def test_duplicates_allowed(self):
        store = seeded(weekday=["Gym"])
        CommandRouter(store, OWNER_ID).handle("/add weekday Gym", OWNER_ID)
        assert store.data["weekday"] == ["Gym", "Gym"]

    def test_whitespace_task_rejected(self, router, store):
        response = router.handle("/add weekday    ", OWNER_ID)
        assert response == ADD_USAGE
        assert store.saves == 0


class TestEdit:
    def test_edit_replaces_only_that_position(self):
        store = seeded(weekday=["a", "b", "c"])
        response = CommandRouter(store, OWNER_ID).handle("/edit weekday 2 B!", OWNER_ID)
        assert response == 'Edited **weekday** 2: "b" → "B\\!"'
        assert store.data["weekday"] == ["a", "B!", "c"]

    def test_edit_out_of_range_leaves_list_unchanged(self):
        store = seeded(weekday=["a", "b"])
        response = CommandRouter(store, OWNER_ID).handle("/edit weekday 5 x", OWNER_ID)
        assert response == OUT_OF_RANGE_TEXT
        assert store.data["weekday"] == ["a", "b"]
        assert store.saves == 0

    @pytest.mark.parametrize("index", ["0", "x", "-1"])
    def test_bad_index_is_usage_error_not_range_error(self, index):
        store = seeded(weekday=["a"])
        response = CommandRouter(store, OWNER_ID).handle(f"/edit weekday {index} x", OWNER_ID)
        assert response == EDIT_USAGE
        assert store.data["weekday"] == ["a"]

    def test_edit_empty_text_rejected(self):
        store = seeded(weekday=["a"])
        response = CommandRouter(store, OWNER_ID).handle("/edit weekday 1   ", OWNER_ID)
        assert response == EDIT_USAGE


class TestRemove:
    def test_remove_shifts_later_entries(self):
        store = seeded(weekend=["a", "b", "c"])
        router = CommandRouter(store, OWNER_ID)
        assert router.handle("/remove weekend 1", OWNER_ID) == "Removed from **weekend**: a"
        assert store.data["weekend"] == ["b", "c"]

    def test_same_index_targets_next_entry(self):
        store = seeded(weekend=["a", "b", "c"])
        router = CommandRouter(store, OWNER_ID)
        router.handle("/remove weekend 2", OWNER_ID)
        assert router.handle("/remove weekend 2", OWNER_ID) == "Removed from **weekend**: c"
        assert store.data["weekend"] == ["a"]

    def test_out_of_range(self):
        store = seeded(weekend=["a"])
        response = CommandRouter(store, OWNER_ID).handle("/remove weekend 2", OWNER_ID)
        assert response == OUT_OF_RANGE_TEXT
        assert store.data["weekend"] == ["a"]
        assert store.saves == 0

    def test_zero_index_is_usage(self, router):
        assert router.handle("/remove weekend 0", OWNER_ID) == REMOVE_USAGE


class TestSaveFailurePolicy:
    def test_report_success_by_default(self):
        store = InMemoryStore(fail_saves=True)
        response = CommandRouter(store, OWNER_ID).handle("/add weekday x", OWNER_ID)
        assert response == "Added to **weekday**: x"

    def test_warn_user(self):
        store = InMemoryStore(fail_saves=True)
        router = CommandRouter(store, OWNER_ID, SaveFailurePolicy.WARN_USER)
        response = router.handle("/add weekday x", OWNER_ID)
        assert response.startswith("Added to **weekday**: x")
        assert SAVE_WARNING in response

    def test_warn_user_silent_when_save_works(self, store):
        router = CommandRouter(store, OWNER_ID, SaveFailurePolicy.WARN_USER)
        assert SAVE_WARNING not in router.handle("/add weekday x", OWNER_ID)


class TestScenario:
    def test_add_view_edit_remove(self, router, store):
        assert "Buy milk" in router.handle("/add weekday Buy milk", OWNER_ID)
        assert router.handle("/view weekday", OWNER_ID) == "**weekday**\n1. Buy milk"

        edited = router.handle("/edit weekday 1 Buy oat milk", OWNER_ID)
        assert '"Buy milk"' in edited
        assert '"Buy oat milk"' in edited

        router.handle("/remove weekday 1", OWNER_ID)
        assert store.data == {"weekday": [], "weekend": []}
        assert router.handle("/view weekday", OWNER_ID) == f"**weekday**\n{EMPTY_PLACEHOLDER}"
