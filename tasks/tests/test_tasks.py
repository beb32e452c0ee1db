"""
Tests for the task module.

Tests:
- Task model serialisation
- Task service (CRUD, validation)
- Ownership scoping between users
"""

import pytest

from auth.exceptions import UnauthenticatedError
from tasks.exceptions import InvalidDueDateError, InvalidTitleError, TaskNotFoundError
from tasks.models import Task


@pytest.fixture
def alice(credential_store):
    return credential_store.create_user("alice@example.com", "password1").id


@pytest.fixture
def bob(credential_store):
    return credential_store.create_user("bob@example.com", "password2").id


class TestTaskModel:
    """Tests for Task model."""

    def test_new_task_defaults(self):
        task = Task.new(owner_id="user-1", title="Buy milk")

        assert task.completed is False
        assert task.due_date is None
        assert len(task.id) == 36

    def test_to_dict_shape(self):
        task = Task.new(owner_id="user-1", title="Buy milk", due_date="2024-05-01")
        d = task.to_dict()

        assert d["_id"] == d["id"] == task.id
        assert d["title"] == "Buy milk"
        assert d["completed"] is False
        assert d["dueDate"] == "2024-05-01"
        assert "createdAt" in d

    def test_to_dict_hides_owner(self):
        d = Task.new(owner_id="user-1", title="x").to_dict()

        assert "owner_id" not in d
        assert "ownerId" not in d
        assert "user-1" not in d.values()


class TestCreateAndList:
    """Tests for create() and list()."""

    def test_round_trip(self, task_service, alice):
        task_service.create(alice, "Buy milk")

        tasks = task_service.list(alice)
        assert len(tasks) == 1
        assert tasks[0].title == "Buy milk"
        assert tasks[0].completed is False

    def test_list_newest_first(self, task_service, alice):
        t1 = task_service.create(alice, "T1")
        t2 = task_service.create(alice, "T2")
        t3 = task_service.create(alice, "T3")

        assert [t.id for t in task_service.list(alice)] == [t3.id, t2.id, t1.id]

    def test_title_is_trimmed(self, task_service, alice):
        task = task_service.create(alice, "  Walk dog  ")
        assert task.title == "Walk dog"

    @pytest.mark.parametrize("title", ["", "   ", "\t\n", None, 42])
    def test_blank_title_rejected(self, task_service, alice, title):
        with pytest.raises(InvalidTitleError):
            task_service.create(alice, title)
        assert task_service.list(alice) == []

    def test_due_date_kept_as_given(self, task_service, alice):
        task = task_service.create(alice, "Pay rent", due_date="2024-06-01")
        assert task_service.list(alice)[0].due_date == "2024-06-01"
        assert task.due_date == "2024-06-01"

    def test_due_date_datetime_accepted(self, task_service, alice):
        task = task_service.create(alice, "Call", due_date="2024-06-01T09:30:00.000Z")
        assert task.due_date == "2024-06-01T09:30:00.000Z"

    def test_empty_due_date_is_null(self, task_service, alice):
        task = task_service.create(alice, "Someday", due_date="")
        assert task.due_date is None

    def test_bad_due_date_rejected(self, task_service, alice):
        with pytest.raises(InvalidDueDateError):
            task_service.create(alice, "Nope", due_date="next tuesday")

    def test_requires_user(self, task_service):
        with pytest.raises(UnauthenticatedError):
            task_service.create(None, "Buy milk")
        with pytest.raises(UnauthenticatedError):
            task_service.list("")


class TestToggleUpdateDelete:
    """Tests for toggle_complete(), update() and delete()."""

    def test_toggle_flips_both_ways(self, task_service, alice):
        task = task_service.create(alice, "Task A")

        assert task_service.toggle_complete(alice, task.id).completed is True
        assert task_service.toggle_complete(alice, task.id).completed is False

    def test_toggle_unknown_task(self, task_service, alice):
        with pytest.raises(TaskNotFoundError):
            task_service.toggle_complete(alice, "no-such-task")

    def test_update_title_only_keeps_due_date(self, task_service, alice):
        task = task_service.create(alice, "Old", due_date="2024-06-01")

        updated = task_service.update(alice, task.id, title="New")
        assert updated.title == "New"
        assert updated.due_date == "2024-06-01"

    def test_update_due_date_can_clear(self, task_service, alice):
        task = task_service.create(alice, "Old", due_date="2024-06-01")

        updated = task_service.update(alice, task.id, due_date=None)
        assert updated.due_date is None
        assert updated.title == "Old"
        assert task_service.list(alice)[0].due_date is None

    def test_update_blank_title_rejected(self, task_service, alice):
        task = task_service.create(alice, "Keep me")

        with pytest.raises(InvalidTitleError):
            task_service.update(alice, task.id, title="   ")
        assert task_service.list(alice)[0].title == "Keep me"

    def test_update_does_not_touch_completed(self, task_service, alice):
        task = task_service.create(alice, "Old")
        task_service.toggle_complete(alice, task.id)

        updated = task_service.update(alice, task.id, title="New")
        assert updated.completed is True

    def test_update_unknown_task(self, task_service, alice):
        with pytest.raises(TaskNotFoundError):
            task_service.update(alice, "no-such-task", title="x")

    def test_delete(self, task_service, alice):
        task = task_service.create(alice, "Bye")

        task_service.delete(alice, task.id)
        assert task_service.list(alice) == []

    def test_delete_twice(self, task_service, alice):
        task = task_service.create(alice, "Bye")
        task_service.delete(alice, task.id)

        with pytest.raises(TaskNotFoundError):
            task_service.delete(alice, task.id)


class TestOwnership:
    """A user can never see or change another user's tasks."""

    def test_list_is_scoped(self, task_service, alice, bob):
        task_service.create(alice, "Alice's")
        task_service.create(bob, "Bob's")

        assert [t.title for t in task_service.list(alice)] == ["Alice's"]
        assert [t.title for t in task_service.list(bob)] == ["Bob's"]

    def test_other_user_cannot_toggle(self, task_service, alice, bob):
        task = task_service.create(alice, "Alice's")

        with pytest.raises(TaskNotFoundError):
            task_service.toggle_complete(bob, task.id)
        assert task_service.list(alice)[0].completed is False

    def test_other_user_cannot_update(self, task_service, alice, bob):
        task = task_service.create(alice, "Alice's")

        with pytest.raises(TaskNotFoundError):
            task_service.update(bob, task.id, title="Mine now")
        assert task_service.list(alice)[0].title == "Alice's"

    def test_other_user_cannot_delete(self, task_service, alice, bob):
        task = task_service.create(alice, "Alice's")

        with pytest.raises(TaskNotFoundError):
            task_service.delete(bob, task.id)
        assert len(task_service.list(alice)) == 1

    def test_not_owned_looks_like_missing(self, task_service, alice, bob):
        task = task_service.create(alice, "Alice's")

        with pytest.raises(TaskNotFoundError) as not_owned:
            task_service.toggle_complete(bob, task.id)
        with pytest.raises(TaskNotFoundError) as missing:
            task_service.toggle_complete(bob, "no-such-task")

        assert not_owned.value.message == missing.value.message
        assert not_owned.value.status_code == missing.value.status_code == 404

    def test_owner_survives_update(self, task_service, alice, bob):
        task = task_service.create(alice, "Alice's")
        task_service.update(alice, task.id, title="Still Alice's")

        stored = task_service.store.get_for_owner(alice, task.id)
        assert stored.owner_id == alice
        assert task_service.store.get_for_owner(bob, task.id) is None
