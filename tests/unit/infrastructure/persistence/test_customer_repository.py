"""Tests for SqlAlchemyCustomerRepository against an in-memory SQLite database."""

import pytest
import pytest_asyncio

from storefront.config import DatabaseConfig
from storefront.domain.customer.model.customer import Customer
from storefront.domain.customer.model.value import CustomerId
from storefront.domain.shared.error import ConflictError, StorageUnavailableError
from storefront.infrastructure.persistence.database import (
    create_db_engine,
    create_session_factory,
    create_tables,
)
from storefront.infrastructure.persistence.repository.customer import (
    SqlAlchemyCustomerRepository,
    _customer_to_dict,
    _row_to_customer,
)


@pytest_asyncio.fixture
async def session():
    engine = create_db_engine(DatabaseConfig(url="sqlite+aiosqlite:///:memory:"))
    await create_tables(engine)
    session_factory = create_session_factory(engine)
    async with session_factory() as session:
        yield session
    await engine.dispose()


@pytest.fixture
def repo(session) -> SqlAlchemyCustomerRepository:
    return SqlAlchemyCustomerRepository(session)


def make_registered(email: str) -> Customer:
    customer = Customer.create()
    customer.email_address = email
    customer.username = email
    customer.first_name = "Ada"
    customer.last_name = "Lovelace"
    customer.register("pbkdf2_sha256$1$00$00")
    return customer


class TestCustomerMappers:
    def test_customer_mapping(self):
        customer = make_registered("ada@example.com")
        customer.mark_logged_in()

        data = _customer_to_dict(customer)
        assert data["id"] == str(customer.id)
        assert data["username"] == "ada@example.com"
        assert data["password_hash"] == "pbkdf2_sha256$1$00$00"
        assert "is_logged_in" not in data
        assert "is_anonymous" not in data

        reconstructed = _row_to_customer(data)
        assert reconstructed.id == customer.id
        assert reconstructed.is_registered is True
        assert reconstructed.is_logged_in is False


class TestSqlAlchemyCustomerRepository:
    @pytest.mark.asyncio
    async def test_get_missing_returns_none(self, repo: SqlAlchemyCustomerRepository):
        assert await repo.get(CustomerId.generate()) is None

    @pytest.mark.asyncio
    async def test_save_and_get_guest(self, repo: SqlAlchemyCustomerRepository):
        guest = Customer.create()

        await repo.save(guest)
        loaded = await repo.get(guest.id)

        assert loaded is not None
        assert loaded.id == guest.id
        assert loaded.is_registered is False
        assert loaded.username is None

    @pytest.mark.asyncio
    async def test_get_by_username(self, repo: SqlAlchemyCustomerRepository):
        customer = make_registered("ada@example.com")
        await repo.save(customer)

        loaded = await repo.get_by_username("ada@example.com")

        assert loaded is not None
        assert loaded.id == customer.id
        assert loaded.first_name == "Ada"
        assert await repo.get_by_username("nobody@example.com") is None

    @pytest.mark.asyncio
    async def test_save_updates_existing_record(self, repo: SqlAlchemyCustomerRepository):
        customer = Customer.create()
        await repo.save(customer)

        customer.email_address = "grace@example.com"
        customer.username = "grace@example.com"
        customer.register("pbkdf2_sha256$1$00$00")
        await repo.save(customer)

        loaded = await repo.get(customer.id)
        assert loaded is not None
        assert loaded.is_registered is True
        assert loaded.username == "grace@example.com"
        assert loaded.password_hash == "pbkdf2_sha256$1$00$00"

    @pytest.mark.asyncio
    async def test_duplicate_username_raises_conflict(self, repo: SqlAlchemyCustomerRepository):
        first = make_registered("ada@example.com")
        await repo.save(first)
        await repo.session.commit()

        with pytest.raises(ConflictError):
            await repo.save(make_registered("ada@example.com"))

        # The session stays usable after the conflict
        loaded = await repo.get_by_username("ada@example.com")
        assert loaded is not None
        assert loaded.id == first.id

    @pytest.mark.asyncio
    async def test_request_flags_are_not_persisted(self, repo: SqlAlchemyCustomerRepository):
        customer = make_registered("ada@example.com")
        customer.mark_logged_in()
        await repo.save(customer)

        loaded = await repo.get(customer.id)

        assert loaded is not None
        assert loaded.is_logged_in is False
        assert loaded.is_anonymous is False


class TestStorageUnavailable:
    @pytest.mark.asyncio
    async def test_driver_errors_become_storage_unavailable(self):
        # No tables created, so every statement fails inside the driver
        engine = create_db_engine(DatabaseConfig(url="sqlite+aiosqlite:///:memory:"))
        try:
            async with create_session_factory(engine)() as session:
                repo = SqlAlchemyCustomerRepository(session)

                with pytest.raises(StorageUnavailableError):
                    await repo.get(CustomerId.generate())
        finally:
            await engine.dispose()
