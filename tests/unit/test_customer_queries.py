"""
Query layer tests against an in-memory SQLite database.

Run with: pytest tests/unit/test_customer_queries.py -v
"""

from datetime import datetime
from unittest.mock import MagicMock

import pytest

from models.customer import Customer, CustomerInput
from repositories.customer_queries import COLUMNS, CustomerQueries, _escape_like
from utils.error_handling import ConflictError, StoreError


LONG_AGO = datetime(2000, 1, 1)


def _insert(queries, **fields):
    payload = {"project_id": "proj_001", "name": "John Doe"}
    payload.update(fields)
    return queries.insert(CustomerInput(**payload))


def _backdate(queries, customer_id):
    queries.repo.execute(
        "UPDATE customers SET updated_at = :ts WHERE id = :id",
        {"ts": LONG_AGO.strftime("%Y-%m-%d %H:%M:%S"), "id": customer_id},
    )


def _stored(queries, customer_id):
    """Read a row by id, soft-deleted or not."""
    row = queries.repo.fetch_one(f"SELECT {COLUMNS} FROM customers WHERE id = :id", {"id": customer_id})
    return Customer.model_validate(row)


class TestInsert:
    def test_insert_returns_stored_row(self, queries):
        customer = _insert(queries, email="john@example.com", phone="555-1234")

        assert customer.id > 0
        assert customer.project_id == "proj_001"
        assert customer.email == "john@example.com"
        assert customer.phone == "555-1234"
        assert customer.address is None
        assert customer.is_deleted == 0
        assert customer.created_at == customer.updated_at

    def test_duplicate_email_is_conflict(self, queries):
        _insert(queries, email="dup@example.com")
        with pytest.raises(ConflictError):
            _insert(queries, name="Someone Else", email="dup@example.com")

    def test_ids_are_not_reused_after_hard_delete(self, queries):
        first = _insert(queries)
        assert queries.hard_delete(first.id) is True

        second = _insert(queries)
        assert second.id > first.id

    def test_missing_table_raises_store_error(self):
        from repositories.database import create_db_engine
        from repositories.sql_repo import SqlRepository

        bare = CustomerQueries(SqlRepository(create_db_engine("sqlite://")))
        with pytest.raises(StoreError) as exc_info:
            bare.insert(CustomerInput(project_id="p", name="n"))
        assert exc_info.value.context == "Error executing insert query"
        assert "no such table" in str(exc_info.value)


class TestFetch:
    def test_fetch_by_id(self, queries):
        created = _insert(queries)
        fetched = queries.fetch_by_id(created.id)
        assert fetched == created

    def test_fetch_by_id_missing(self, queries):
        assert queries.fetch_by_id(12345) is None

    def test_soft_deleted_rows_are_hidden(self, queries):
        created = _insert(queries)
        assert queries.soft_delete(created.id) is True
        assert queries.fetch_by_id(created.id) is None

        rows, total = queries.fetch_list(10, 0)
        assert rows == []
        assert total == 0


class TestFetchList:
    def test_orders_newest_first(self, queries):
        a = _insert(queries, name="A")
        b = _insert(queries, name="B")
        c = _insert(queries, name="C")

        rows, total = queries.fetch_list(10, 0)
        assert [row.id for row in rows] == [c.id, b.id, a.id]
        assert total == 3

    def test_count_ignores_paging(self, queries):
        for i in range(5):
            _insert(queries, name=f"Customer {i}")

        rows, total = queries.fetch_list(2, 2)
        assert len(rows) == 2
        assert total == 5

    def test_search_matches_name_email_or_project(self, queries):
        by_project = _insert(queries, project_id="proj_001", name="Alpha")
        by_name = _insert(queries, project_id="other", name="proj_001 Holdings")
        by_email = _insert(queries, project_id="other", name="Beta", email="proj_001@example.com")
        _insert(queries, project_id="proj_002", name="Gamma", email="gamma@example.com")

        rows, total = queries.fetch_list(10, 0, "proj_001")
        assert {row.id for row in rows} == {by_project.id, by_name.id, by_email.id}
        assert total == 3

    def test_search_is_case_sensitive(self, queries):
        _insert(queries, name="Alice")

        assert queries.fetch_list(10, 0, "Alice")[1] == 1
        assert queries.fetch_list(10, 0, "alice")[1] == 0

    def test_search_treats_wildcards_literally(self, queries):
        _insert(queries, name="100% Cotton")
        _insert(queries, name="1000 Cotton")

        rows, total = queries.fetch_list(10, 0, "100%")
        assert total == 1
        assert rows[0].name == "100% Cotton"

    def test_escape_like(self):
        assert _escape_like("a_b%c!d") == "a!_b!%c!!d"


class TestUpdate:
    def test_update_only_supplied_fields(self, queries):
        created = _insert(queries, phone="555-1234", email="old@example.com")

        assert queries.update(created.id, {"email": "new@example.com"}) is True
        fetched = queries.fetch_by_id(created.id)
        assert fetched.email == "new@example.com"
        assert fetched.phone == "555-1234"

    def test_update_advances_updated_at(self, queries):
        created = _insert(queries)
        _backdate(queries, created.id)
        assert _stored(queries, created.id).updated_at == LONG_AGO

        assert queries.update(created.id, {"phone": "555-0000"}) is True
        assert queries.fetch_by_id(created.id).updated_at > LONG_AGO

    def test_update_ignores_protected_fields(self, queries):
        created = _insert(queries)

        assert queries.update(created.id, {"name": "Renamed", "is_deleted": 1, "id": 999}) is True
        fetched = queries.fetch_by_id(created.id)
        assert fetched.name == "Renamed"
        assert fetched.is_deleted == 0

    def test_update_without_writable_fields_does_not_write(self):
        repo = MagicMock()
        queries = CustomerQueries(repo)

        assert queries.update(1, {"id": 5, "created_at": "now", "is_deleted": 1}) is False
        repo.execute.assert_not_called()

    def test_update_soft_deleted_row_affects_nothing(self, queries):
        created = _insert(queries)
        queries.soft_delete(created.id)

        assert queries.update(created.id, {"name": "Ghost"}) is False

    def test_update_missing_row(self, queries):
        assert queries.update(4242, {"name": "Nobody"}) is False


class TestDelete:
    def test_soft_delete_is_repeatable(self, queries):
        created = _insert(queries)
        assert queries.soft_delete(created.id) is True
        assert queries.soft_delete(created.id) is True

    def test_soft_delete_refreshes_updated_at(self, queries):
        created = _insert(queries)
        _backdate(queries, created.id)

        assert queries.soft_delete(created.id) is True
        stored = _stored(queries, created.id)
        assert stored.is_deleted == 1
        assert stored.updated_at > LONG_AGO

    def test_soft_delete_missing_row(self, queries):
        assert queries.soft_delete(4242) is False

    def test_hard_delete_bypasses_soft_delete_filter(self, queries):
        created = _insert(queries)
        queries.soft_delete(created.id)

        assert queries.hard_delete(created.id) is True
        assert queries.hard_delete(created.id) is False
