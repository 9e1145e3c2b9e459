"""
Customer queries.

Every statement is parameterized. Failures from the driver are logged and
re-raised as StoreError (or ConflictError for unique-column collisions) with
a short description of the statement that failed.
"""

from typing import Any, List, Mapping, Optional, Tuple

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from models.customer import WRITABLE_FIELDS, Customer, CustomerInput
from repositories.sql_repo import SqlRepository
from utils.error_handling import ConflictError, StoreError
from utils.logging_config import get_logger

logger = get_logger(__name__)

COLUMNS = (
    "id, project_id, name, address, phone, aadhar, email, "
    "is_deleted, created_at, updated_at"
)

LIKE_ESCAPE = "!"


def _escape_like(term: str) -> str:
    """Make %, _ and the escape character match literally."""
    for char in (LIKE_ESCAPE, "%", "_"):
        term = term.replace(char, LIKE_ESCAPE + char)
    return term


class CustomerQueries:
    """SQL for the customers table."""

    def __init__(self, repo: SqlRepository):
        self.repo = repo

    def insert(self, customer: CustomerInput) -> Customer:
        """Insert a live customer row and return it as stored."""
        params = customer.model_dump(include=set(WRITABLE_FIELDS))
        try:
            new_id = self.repo.execute_returning(
                """
                INSERT INTO customers (project_id, name, address, phone, aadhar, email, is_deleted)
                VALUES (:project_id, :name, :address, :phone, :aadhar, :email, 0)
                RETURNING id
                """,
                params,
            )
            # Read back by id without the soft-delete filter.
            row = self.repo.fetch_one(
                f"SELECT {COLUMNS} FROM customers WHERE id = :id", {"id": new_id}
            )
        except IntegrityError as exc:
            raise self._conflict("insert", exc) from exc
        except SQLAlchemyError as exc:
            raise self._store_error("Error executing insert query", exc) from exc

        if not row:
            raise self._store_error("Failed to retrieve newly created customer")
        return Customer.model_validate(row)

    def fetch_by_id(self, customer_id: int) -> Optional[Customer]:
        try:
            row = self.repo.fetch_one(
                f"SELECT {COLUMNS} FROM customers WHERE id = :id AND is_deleted = 0",
                {"id": customer_id},
            )
        except SQLAlchemyError as exc:
            raise self._store_error(f"Error executing fetch_by_id query for ID {customer_id}", exc) from exc
        return Customer.model_validate(row) if row else None

    def fetch_list(self, limit: int, offset: int, search: str = "") -> Tuple[List[Customer], int]:
        """
        Return one page of live customers and the total number matching ``search``.

        ``search`` is a case-sensitive substring matched against name, email
        and project_id. The count query shares the filter but not the paging.
        """
        where = "WHERE is_deleted = 0"
        filter_params: dict = {}
        if search:
            where += (
                f" AND (name LIKE :pattern ESCAPE '{LIKE_ESCAPE}'"
                f" OR email LIKE :pattern ESCAPE '{LIKE_ESCAPE}'"
                f" OR project_id LIKE :pattern ESCAPE '{LIKE_ESCAPE}')"
            )
            filter_params["pattern"] = f"%{_escape_like(search)}%"

        try:
            total = self.repo.scalar(f"SELECT COUNT(*) FROM customers {where}", filter_params)
            rows = self.repo.fetch_all(
                f"""
                SELECT {COLUMNS} FROM customers {where}
                ORDER BY updated_at DESC, id DESC
                LIMIT :limit OFFSET :offset
                """,
                {**filter_params, "limit": limit, "offset": offset},
            )
        except SQLAlchemyError as exc:
            raise self._store_error("Error executing fetch_list query", exc) from exc

        return [Customer.model_validate(row) for row in rows], int(total or 0)

    def update(self, customer_id: int, updates: Mapping[str, Any]) -> bool:
        """
        Apply a partial update to a live customer.

        Only keys in WRITABLE_FIELDS are written. Returns False without
        touching the database when none are present.
        """
        fields = {name: updates[name] for name in WRITABLE_FIELDS if name in updates}
        if not fields:
            return False

        assignments = ", ".join(f"{name} = :{name}" for name in fields)
        try:
            affected = self.repo.execute(
                f"UPDATE customers SET {assignments}, updated_at = CURRENT_TIMESTAMP "
                "WHERE id = :id AND is_deleted = 0",
                {**fields, "id": customer_id},
            )
        except IntegrityError as exc:
            raise self._conflict("update", exc) from exc
        except SQLAlchemyError as exc:
            raise self._store_error(f"Error executing update query for ID {customer_id}", exc) from exc
        return affected > 0

    def soft_delete(self, customer_id: int) -> bool:
        try:
            affected = self.repo.execute(
                "UPDATE customers SET is_deleted = 1, updated_at = CURRENT_TIMESTAMP WHERE id = :id",
                {"id": customer_id},
            )
        except SQLAlchemyError as exc:
            raise self._store_error(f"Error executing soft_delete query for ID {customer_id}", exc) from exc
        return affected > 0

    def hard_delete(self, customer_id: int) -> bool:
        try:
            affected = self.repo.execute(
                "DELETE FROM customers WHERE id = :id", {"id": customer_id}
            )
        except SQLAlchemyError as exc:
            raise self._store_error(f"Error executing hard_delete query for ID {customer_id}", exc) from exc
        return affected > 0

    @staticmethod
    def _store_error(context: str, cause: Optional[BaseException] = None) -> StoreError:
        logger.error("Store error", extra={"context": context, "error": str(cause) if cause else None})
        return StoreError(context, cause)

    @staticmethod
    def _conflict(operation: str, cause: IntegrityError) -> ConflictError:
        logger.warning("Unique constraint violated", extra={"operation": operation, "error": str(cause.orig)})
        return ConflictError("A customer with this email or aadhar already exists")
