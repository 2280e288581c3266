from datetime import date, timedelta
from types import SimpleNamespace

import pytest

from taskflow.errors import Forbidden, NotFound
from taskflow.models.enums import Priority, Role, TaskStatus
from taskflow.schemas.task import TaskCreate, TaskUpdate
from taskflow.services.credentials import CredentialStore
from taskflow.services.tasks import TaskService


@pytest.fixture
def users(db):
    store = CredentialStore(db)
    ids = {
        "alice": store.register("Alice", "alice@example.com", "secret1"),
        "carol": store.register("Carol", "carol@example.com", "secret1"),
        "bob": store.register("Bob", "bob@example.com", "secret1", Role.ADMIN),
    }
    return {
        "alice": SimpleNamespace(id=ids["alice"], role=Role.USER),
        "carol": SimpleNamespace(id=ids["carol"], role=Role.USER),
        "bob": SimpleNamespace(id=ids["bob"], role=Role.ADMIN),
    }


@pytest.fixture
def service(db):
    return TaskService(db)


def test_create_defaults(service, users):
    task = service.create(users["alice"], TaskCreate(title="Write report"))
    assert task.priority is Priority.MEDIUM
    assert task.status is TaskStatus.PENDING
    assert task.user_id == users["alice"].id
    assert task.user_name == "Alice"


def test_non_admin_cannot_create_for_someone_else(service, users):
    task = service.create(users["alice"], TaskCreate(title="Sneaky", user_id=users["carol"].id))
    assert task.user_id == users["alice"].id


def test_admin_creates_on_behalf(service, users):
    task = service.create(users["bob"], TaskCreate(title="Delegated", user_id=users["carol"].id))
    assert task.user_id == users["carol"].id


def test_admin_create_for_unknown_user(service, users):
    with pytest.raises(NotFound):
        service.create(users["bob"], TaskCreate(title="Nobody", user_id=999))


def test_list_scope_and_filters(service, users):
    alice, carol, bob = users["alice"], users["carol"], users["bob"]
    service.create(alice, TaskCreate(title="Buy milk", priority="high"))
    service.create(alice, TaskCreate(title="Read book", description="about milk"))
    service.create(carol, TaskCreate(title="Carol milk run", priority="high"))

    assert {t.title for t in service.list(alice)} == {"Buy milk", "Read book"}
    assert {t.title for t in service.list(alice, search="milk")} == {"Buy milk", "Read book"}
    assert [t.title for t in service.list(alice, priority=Priority.HIGH)] == ["Buy milk"]
    assert service.list(alice, status=TaskStatus.COMPLETED) == []

    assert len(service.list(bob)) == 3
    assert {t.title for t in service.list(bob, priority=Priority.HIGH)} == {"Buy milk", "Carol milk run"}


def test_list_newest_first(service, users):
    first = service.create(users["alice"], TaskCreate(title="First"))
    second = service.create(users["alice"], TaskCreate(title="Second"))
    assert [t.id for t in service.list(users["alice"])] == [second.id, first.id]


def test_get_update_delete_access(service, users):
    alice, carol, bob = users["alice"], users["carol"], users["bob"]
    task = service.create(carol, TaskCreate(title="Carol's"))

    with pytest.raises(Forbidden):
        service.get(alice, task.id)
    update = TaskUpdate(title="Hijacked", priority="low", status="completed")
    with pytest.raises(Forbidden):
        service.update(alice, task.id, update)
    with pytest.raises(Forbidden):
        service.delete(alice, task.id)

    updated = service.update(bob, task.id, update)
    assert updated.title == "Hijacked"
    assert updated.status is TaskStatus.COMPLETED
    assert updated.user_id == carol.id

    service.delete(carol, task.id)
    with pytest.raises(NotFound):
        service.get(bob, task.id)


def test_missing_task_is_not_found_for_everyone(service, users):
    for who in ("alice", "bob"):
        with pytest.raises(NotFound):
            service.delete(users[who], 12345)


def test_stats(service, users):
    alice, carol, bob = users["alice"], users["carol"], users["bob"]
    today = date(2026, 10, 19)
    yesterday = today - timedelta(days=1)
    service.create(alice, TaskCreate(title="Late one", due_date=yesterday, priority="high"))
    service.create(alice, TaskCreate(title="Late but done", due_date=yesterday, status="completed"))
    service.create(alice, TaskCreate(title="Future", due_date=today + timedelta(days=3)))
    service.create(carol, TaskCreate(title="Carol late", due_date=yesterday))

    mine = service.stats(alice, today=today)
    assert mine["total"] == 3
    assert mine["overdue"] == 1
    by_status = {row["status"]: row["count"] for row in mine["byStatus"]}
    assert by_status == {TaskStatus.PENDING: 2, TaskStatus.COMPLETED: 1}
    by_priority = {row["priority"]: row["count"] for row in mine["byPriority"]}
    assert by_priority == {Priority.HIGH: 1, Priority.MEDIUM: 2}

    everyone = service.stats(bob, today=today)
    assert everyone["total"] == 4
    assert everyone["overdue"] == 2
