"""Tests for the ownership and pagination rules of the task service."""

from datetime import datetime, timedelta, timezone

import pytest

from taskboard.errors import ForbiddenError, NotFoundError, ValidationError
from taskboard.models import Task, TaskStatus, UserRole
from taskboard.schemas.task import TaskCreate, TaskUpdate
from taskboard.services import tasks as task_service


def _create(db, owner, title="Write report", description="Quarterly numbers", status=None):
    return task_service.create_task(
        db, owner.id, TaskCreate(title=title, description=description, status=status)
    )


def test_create_defaults_status_to_pending(db, alice):
    task = _create(db, alice)

    assert task.status == TaskStatus.PENDING
    assert task.owner_id == alice.id
    assert task.created_at is not None
    assert task.updated_at is not None


def test_create_keeps_explicit_status(db, alice):
    task = _create(db, alice, status=TaskStatus.COMPLETED)
    assert task.status == TaskStatus.COMPLETED


@pytest.mark.parametrize(
    "title,description",
    [
        ("", "desc"),
        ("title", ""),
        (None, "desc"),
        ("title", None),
        ("   ", "desc"),
    ],
)
def test_create_rejects_missing_fields(db, alice, title, description):
    with pytest.raises(ValidationError):
        task_service.create_task(db, alice.id, TaskCreate(title=title, description=description))
    assert db.query(Task).count() == 0


def test_list_only_returns_own_tasks(db, alice, bob):
    for i in range(3):
        _create(db, alice, title=f"alice-{i}")
    _create(db, bob, title="bob-0")

    page = task_service.list_tasks(db, bob.id, page=1, page_size=10)

    assert [t.title for t in page.tasks] == ["bob-0"]
    assert page.total_tasks == 1


def test_list_pages_25_tasks_by_10(db, alice):
    for i in range(25):
        _create(db, alice, title=f"task-{i}")

    pages = [task_service.list_tasks(db, alice.id, page=n, page_size=10) for n in (1, 2, 3, 4)]

    assert [len(p.tasks) for p in pages] == [10, 10, 5, 0]
    assert all(p.total_pages == 3 for p in pages)
    assert all(p.total_tasks == 25 for p in pages)
    assert [p.current_page for p in pages] == [1, 2, 3, 4]

    seen = [t.id for p in pages for t in p.tasks]
    assert len(seen) == len(set(seen)) == 25


def test_list_orders_newest_first(db, alice):
    base = datetime(2024, 1, 1, 12, 0, 0, tzinfo=timezone.utc)
    for offset, title in enumerate(["oldest", "middle", "newest"]):
        task = _create(db, alice, title=title)
        task.created_at = base + timedelta(minutes=offset)
    db.commit()

    page = task_service.list_tasks(db, alice.id, page=1, page_size=10)

    assert [t.title for t in page.tasks] == ["newest", "middle", "oldest"]


def test_list_is_stable_when_timestamps_tie(db, alice):
    same_time = datetime(2024, 1, 1, 12, 0, 0, tzinfo=timezone.utc)
    for i in range(7):
        task = _create(db, alice, title=f"tied-{i}")
        task.created_at = same_time
    db.commit()

    first = task_service.list_tasks(db, alice.id, page=1, page_size=3)
    second = task_service.list_tasks(db, alice.id, page=2, page_size=3)
    third = task_service.list_tasks(db, alice.id, page=3, page_size=3)

    ids = [t.id for p in (first, second, third) for t in p.tasks]
    assert len(ids) == 7
    assert len(set(ids)) == 7


def test_list_filters_by_status(db, alice):
    for i in range(5):
        _create(db, alice, title=f"pending-{i}")
    for i in range(3):
        _create(db, alice, title=f"done-{i}", status=TaskStatus.COMPLETED)

    page = task_service.list_tasks(db, alice.id, page=1, page_size=10, status=TaskStatus.COMPLETED)

    assert len(page.tasks) == 3
    assert page.total_tasks == 3
    assert page.total_pages == 1
    assert all(t.status == TaskStatus.COMPLETED for t in page.tasks)


def test_list_with_no_tasks_has_zero_pages(db, alice):
    page = task_service.list_tasks(db, alice.id, page=1, page_size=10)
    assert page.tasks == []
    assert page.total_pages == 0
    assert page.total_tasks == 0


def test_list_rejects_bad_window(db, alice):
    with pytest.raises(ValidationError):
        task_service.list_tasks(db, alice.id, page=0, page_size=10)
    with pytest.raises(ValidationError):
        task_service.list_tasks(db, alice.id, page=1, page_size=0)


def test_get_round_trip(db, alice):
    created = _create(db, alice, title="Buy milk", description="2% please", status=TaskStatus.PENDING)

    fetched = task_service.get_task(db, alice.id, created.id)

    assert fetched.id == created.id
    assert fetched.title == "Buy milk"
    assert fetched.description == "2% please"
    assert fetched.status == TaskStatus.PENDING
    assert fetched.owner_id == alice.id


def test_get_missing_task_is_not_found(db, alice):
    with pytest.raises(NotFoundError):
        task_service.get_task(db, alice.id, "does-not-exist")


def test_get_other_users_task_is_forbidden(db, alice, bob):
    task = _create(db, alice)
    with pytest.raises(ForbiddenError):
        task_service.get_task(db, bob.id, task.id)


def test_update_overwrites_only_present_fields(db, alice):
    task = _create(db, alice, title="Old", description="Keep me")
    before = task.updated_at

    updated = task_service.update_task(
        db, alice.id, task.id, TaskUpdate(title="New", status=TaskStatus.COMPLETED)
    )

    assert updated.title == "New"
    assert updated.description == "Keep me"
    assert updated.status == TaskStatus.COMPLETED
    assert updated.updated_at >= before


def test_update_ignores_empty_values(db, alice):
    task = _create(db, alice, title="Title", description="Description")

    updated = task_service.update_task(db, alice.id, task.id, TaskUpdate(title="", description=None))

    assert updated.title == "Title"
    assert updated.description == "Description"


def test_update_other_users_task_is_forbidden(db, alice, bob):
    task = _create(db, alice, title="Mine")

    with pytest.raises(ForbiddenError):
        task_service.update_task(db, bob.id, task.id, TaskUpdate(title="Stolen"))

    db.expire_all()
    assert task_service.get_task(db, alice.id, task.id).title == "Mine"


def test_update_missing_task_is_not_found(db, alice):
    with pytest.raises(NotFoundError):
        task_service.update_task(db, alice.id, "nope", TaskUpdate(title="x"))


def test_owner_cannot_change_through_update(db, alice, bob):
    task = _create(db, alice)
    updated = task_service.update_task(db, alice.id, task.id, TaskUpdate(title="Renamed"))
    assert updated.owner_id == alice.id


def test_delete_by_admin_removes_any_task(db, alice):
    task = _create(db, alice)

    task_service.delete_task(db, UserRole.ADMIN, task.id)

    assert db.query(Task).count() == 0


def test_delete_by_owner_without_admin_role_is_forbidden(db, alice):
    task = _create(db, alice)

    with pytest.raises(ForbiddenError):
        task_service.delete_task(db, alice.role, task.id)

    assert db.query(Task).count() == 1


def test_delete_twice_is_not_found(db, alice):
    task = _create(db, alice)
    task_service.delete_task(db, "admin", task.id)

    with pytest.raises(NotFoundError):
        task_service.delete_task(db, "admin", task.id)


def test_delete_missing_task_by_non_admin_is_forbidden(db):
    with pytest.raises(ForbiddenError):
        task_service.delete_task(db, UserRole.USER, "missing")


def test_timestamps_survive_a_write_and_reload(db, alice):
    task = _create(db, alice)
    task_id = task.id
    db.expire_all()

    stored = db.query(Task).filter(Task.id == task_id).one()

    assert stored.created_at is not None
    assert stored.updated_at is not None
    assert stored.created_at.replace(tzinfo=None) <= datetime.now(timezone.utc).replace(tzinfo=None)
