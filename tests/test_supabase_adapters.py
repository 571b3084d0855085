"""Tests for Supabase adapter implementations."""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from uuid import UUID, uuid4

import pytest

from fridgy.adapters.supabase_grocery_repository import SupabaseGroceryRepository
from fridgy.adapters.supabase_inventory_repository import (
    SupabaseInventoryRepository,
)
from fridgy.adapters.supabase_section_repository import SupabaseSectionRepository


@dataclass
class FakeResponse:
    data: list[dict[str, object]] | None


@dataclass
class FakeQuery:
    """Records one builder chain and answers it from queued rows."""

    table: "FakeTable"
    action: str
    payload: object | None = None
    filters: list[tuple[str, str, object]] = field(default_factory=list)
    ordering: list[str] = field(default_factory=list)

    def eq(self, column: str, value: object) -> "FakeQuery":
        self.filters.append(("eq", column, value))
        return self

    def in_(self, column: str, values: list[str]) -> "FakeQuery":
        self.filters.append(("in", column, values))
        return self

    def lt(self, column: str, value: object) -> "FakeQuery":
        self.filters.append(("lt", column, value))
        return self

    def order(self, column: str, desc: bool = False) -> "FakeQuery":
        self.ordering.append(column)
        return self

    def limit(self, _count: int) -> "FakeQuery":
        return self

    def execute(self) -> FakeResponse:
        self.table.executed.append(self)
        queue = self.table.responses[self.action]
        return FakeResponse(data=queue.pop(0) if queue else [])


@dataclass
class FakeTable:
    name: str
    responses: dict[str, list[list[dict[str, object]]]] = field(
        default_factory=lambda: {"select": [], "insert": [], "update": [], "delete": []}
    )
    executed: list[FakeQuery] = field(default_factory=list)

    def queue(self, action: str, rows: list[dict[str, object]]) -> None:
        self.responses[action].append(rows)

    def select(self, *_columns: str) -> FakeQuery:
        return FakeQuery(self, "select")

    def insert(self, payload: object) -> FakeQuery:
        return FakeQuery(self, "insert", payload)

    def update(self, payload: object) -> FakeQuery:
        return FakeQuery(self, "update", payload)

    def delete(self) -> FakeQuery:
        return FakeQuery(self, "delete")


@dataclass
class FakeSupabaseClient:
    tables: dict[str, FakeTable] = field(default_factory=dict)

    def table(self, name: str) -> FakeTable:
        return self.tables.setdefault(name, FakeTable(name=name))


def _inventory_row(user_id: UUID, **overrides: object) -> dict[str, object]:
    row: dict[str, object] = {
        "id": str(uuid4()),
        "user_id": str(user_id),
        "section_id": "fridge",
        "name": "Milk",
        "expires_at": "2024-03-17T09:00:00+00:00",
        "calories": 42,
        "protein": "3.4",
        "carbs": None,
        "fats": 1,
        "barcode": None,
        "added_at": "2024-03-10T18:30:00+00:00",
    }
    row.update(overrides)
    return row


def test_section_repository_lists_and_creates() -> None:
    client = FakeSupabaseClient()
    sections = client.table("sections")
    user_id = uuid4()
    row = {
        "id": "fridge",
        "user_id": str(user_id),
        "name": "Fridge",
        "color": "#2D2D2D",
        "created_at": "2024-03-10T18:30:00+00:00",
    }
    sections.queue("select", [row])
    sections.queue("insert", [{**row, "id": "pantry", "name": "Pantry"}])

    repository = SupabaseSectionRepository(client)
    listed = repository.list_sections(user_id)
    created = repository.create_section(user_id, "pantry", "Pantry", "#2D2D2D")

    assert listed[0].id == "fridge"
    assert listed[0].created_at == datetime(2024, 3, 10, 18, 30, tzinfo=UTC)
    assert created.name == "Pantry"
    assert sections.executed[0].filters == [("eq", "user_id", str(user_id))]
    assert sections.executed[1].payload == {
        "id": "pantry",
        "user_id": str(user_id),
        "name": "Pantry",
        "color": "#2D2D2D",
    }


def test_section_repository_delete_filters_by_owner() -> None:
    client = FakeSupabaseClient()
    user_id = uuid4()

    SupabaseSectionRepository(client).delete_section(user_id, "fridge")

    executed = client.table("sections").executed
    assert executed[0].action == "delete"
    assert executed[0].filters == [
        ("eq", "user_id", str(user_id)),
        ("eq", "id", "fridge"),
    ]


def test_section_repository_create_without_data_fails() -> None:
    repository = SupabaseSectionRepository(FakeSupabaseClient())

    with pytest.raises(RuntimeError):
        repository.create_section(uuid4(), "fridge", "Fridge", "#2D2D2D")


def test_inventory_repository_parses_rows() -> None:
    client = FakeSupabaseClient()
    table = client.table("inventory_items")
    user_id = uuid4()
    table.queue("insert", [_inventory_row(user_id, barcode="0049000050103")])
    table.queue("select", [_inventory_row(user_id, added_at=None)])

    repository = SupabaseInventoryRepository(client)
    added = repository.add_item(user_id, {"section_id": "fridge", "name": "Milk"})
    listed = repository.list_items(user_id, "fridge")

    assert added.barcode == "0049000050103"
    assert added.protein == 3.4
    assert added.carbs == 0.0
    assert added.expires_at == datetime(2024, 3, 17, 9, 0, tzinfo=UTC)
    assert listed[0].added_at is None
    assert table.executed[0].payload == {
        "user_id": str(user_id),
        "section_id": "fridge",
        "name": "Milk",
    }
    assert table.executed[1].filters == [
        ("eq", "user_id", str(user_id)),
        ("eq", "section_id", "fridge"),
    ]
    assert table.executed[1].ordering == ["expires_at"]


def test_inventory_repository_expiring_and_delete() -> None:
    client = FakeSupabaseClient()
    table = client.table("inventory_items")
    user_id, item_id = uuid4(), uuid4()
    cutoff = datetime(2024, 3, 13, tzinfo=UTC)
    table.queue("select", [_inventory_row(user_id)])

    repository = SupabaseInventoryRepository(client)
    expiring = repository.list_expiring(user_id, cutoff)
    deleted = repository.delete_item(user_id, item_id)

    assert len(expiring) == 1
    assert deleted is False
    assert ("lt", "expires_at", cutoff.isoformat()) in table.executed[0].filters
    assert table.executed[1].action == "delete"
    assert table.executed[1].filters == [
        ("eq", "id", str(item_id)),
        ("eq", "user_id", str(user_id)),
    ]


def test_inventory_repository_deletes_section_items() -> None:
    client = FakeSupabaseClient()
    table = client.table("inventory_items")
    user_id = uuid4()
    table.queue("delete", [_inventory_row(user_id), _inventory_row(user_id)])

    removed = SupabaseInventoryRepository(client).delete_section_items(
        user_id, "fridge"
    )

    assert removed == 2
    assert table.executed[0].filters == [
        ("eq", "user_id", str(user_id)),
        ("eq", "section_id", "fridge"),
    ]


def test_grocery_repository_roundtrip() -> None:
    client = FakeSupabaseClient()
    table = client.table("grocery_items")
    user_id, item_id = uuid4(), uuid4()
    row = {
        "id": str(item_id),
        "user_id": str(user_id),
        "name": "Milk",
        "qty": "2",
        "checked": False,
        "position": 0,
    }
    table.queue("insert", [row])
    table.queue("select", [row])
    table.queue("update", [{**row, "checked": True}])

    repository = SupabaseGroceryRepository(client)
    created = repository.create_item(user_id, {"name": "Milk", "qty": "2"})
    fetched = repository.get_item(user_id, item_id)
    updated = repository.update_item(user_id, item_id, {"checked": True})
    missing = repository.get_item(uuid4(), item_id)
    table.queue("delete", [row])
    removed = repository.delete_items(user_id, [item_id])

    assert created.id == item_id
    assert fetched == created
    assert updated.checked is True
    assert missing is None
    assert removed == 1
    owner_filter = ("eq", "user_id", str(user_id))
    get, update, delete = table.executed[1], table.executed[2], table.executed[-1]
    assert get.filters == [("eq", "id", str(item_id)), owner_filter]
    assert update.filters == [("eq", "id", str(item_id)), owner_filter]
    assert delete.filters == [owner_filter, ("in", "id", [str(item_id)])]


def test_grocery_repository_update_without_data_fails() -> None:
    repository = SupabaseGroceryRepository(FakeSupabaseClient())

    with pytest.raises(RuntimeError):
        repository.update_item(uuid4(), uuid4(), {"checked": True})
