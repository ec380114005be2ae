"""SQLAlchemy repository implementation for the customer domain."""

from uuid import UUID

from sqlalchemy import Select, insert, select, update
from sqlalchemy.exc import IntegrityError, OperationalError
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.domain.customer.model.customer import Customer
from storefront.domain.customer.model.value import CustomerId
from storefront.domain.customer.port.repository import CustomerRepository
from storefront.domain.shared.error import ConflictError, StorageUnavailableError
from storefront.infrastructure.persistence.tables import customers_table


def _row_to_customer(row: dict) -> Customer:
    """Convert a database row to a Customer model."""
    return Customer(
        id=CustomerId(UUID(row["id"])),
        email_address=row["email_address"],
        username=row["username"],
        first_name=row["first_name"],
        last_name=row["last_name"],
        is_registered=row["is_registered"],
        password_hash=row["password_hash"],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def _customer_to_dict(customer: Customer) -> dict:
    """Convert a Customer model to a database row dict. Request-scoped flags are dropped."""
    return {
        "id": str(customer.id),
        "email_address": customer.email_address,
        "username": customer.username,
        "first_name": customer.first_name,
        "last_name": customer.last_name,
        "is_registered": customer.is_registered,
        "password_hash": customer.password_hash,
        "created_at": customer.created_at,
        "updated_at": customer.updated_at,
    }


class SqlAlchemyCustomerRepository(CustomerRepository):
    """SQLAlchemy implementation of CustomerRepository.

    Driver failures surface as StorageUnavailableError. A unique-constraint
    violation on save rolls the unit of work back and raises ConflictError.
    """

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def get(self, customer_id: CustomerId) -> Customer | None:
        stmt = select(customers_table).where(customers_table.c.id == str(customer_id))
        return await self._fetch_one(stmt)

    async def get_by_username(self, username: str) -> Customer | None:
        stmt = select(customers_table).where(customers_table.c.username == username)
        return await self._fetch_one(stmt)

    async def save(self, customer: Customer) -> None:
        customer_dict = _customer_to_dict(customer)
        existing = await self.get(customer.id)

        if existing:
            stmt = (
                update(customers_table)
                .where(customers_table.c.id == str(customer.id))
                .values(**customer_dict)
            )
        else:
            stmt = insert(customers_table).values(**customer_dict)

        try:
            await self.session.execute(stmt)
            await self.session.flush()
        except IntegrityError as e:
            await self.session.rollback()
            raise ConflictError(
                f"Customer {customer.id} conflicts with an existing record"
            ) from e
        except OperationalError as e:
            raise StorageUnavailableError(f"Could not save customer {customer.id}: {e}") from e

    async def _fetch_one(self, stmt: Select) -> Customer | None:
        try:
            result = await self.session.execute(stmt)
        except OperationalError as e:
            raise StorageUnavailableError(f"Could not read customers: {e}") from e
        row = result.mappings().first()
        return _row_to_customer(dict(row)) if row else None
