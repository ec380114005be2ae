"""Unit tests for CustomerService."""

from unittest.mock import AsyncMock

import pytest

from storefront.domain.customer.model.customer import Customer
from storefront.domain.customer.service.customer import (
    PBKDF2_ITERATIONS,
    CustomerService,
    hash_password,
)
from storefront.domain.shared.error import (
    ConflictError,
    RegistrationError,
    StorageUnavailableError,
)


def make_service(repo: AsyncMock | None = None) -> CustomerService:
    if repo is None:
        repo = AsyncMock()
        repo.get_by_username.return_value = None
    return CustomerService(_customer_repo=repo)


def make_customer(username: str | None = "ada@example.com") -> Customer:
    customer = Customer.create()
    customer.email_address = username
    customer.username = username
    return customer


class TestHashPassword:
    def test_hash_format(self):
        algorithm, iterations, salt, digest = hash_password("hunter2").split("$")

        assert algorithm == "pbkdf2_sha256"
        assert int(iterations) == PBKDF2_ITERATIONS
        assert len(salt) == 32
        assert len(digest) == 64

    def test_hash_is_salted(self):
        assert hash_password("hunter2") != hash_password("hunter2")


class TestCreateAndRead:
    def test_create_new_customer_is_not_saved(self):
        repo = AsyncMock()
        service = make_service(repo)

        customer = service.create_new_customer()

        assert customer.is_registered is False
        repo.save.assert_not_called()

    @pytest.mark.asyncio
    async def test_read_customer_by_id_delegates(self):
        customer = make_customer()
        repo = AsyncMock()
        repo.get.return_value = customer
        service = make_service(repo)

        assert await service.read_customer_by_id(customer.id) is customer
        repo.get.assert_called_once_with(customer.id)

    @pytest.mark.asyncio
    async def test_read_missing_customer_returns_none(self):
        repo = AsyncMock()
        repo.get.return_value = None
        service = make_service(repo)

        assert await service.read_customer_by_id(make_customer().id) is None

    @pytest.mark.asyncio
    async def test_save_customer_returns_customer(self):
        repo = AsyncMock()
        service = make_service(repo)
        customer = make_customer(username=None)

        assert await service.save_customer(customer) is customer
        repo.save.assert_called_once_with(customer)


class TestRegisterCustomer:
    @pytest.mark.asyncio
    async def test_register_saves_registered_customer(self):
        repo = AsyncMock()
        repo.get_by_username.return_value = None
        service = make_service(repo)
        customer = make_customer()

        result = await service.register_customer(customer, "pw-123456", "pw-123456")

        assert result is customer
        assert customer.is_registered is True
        assert customer.password_hash.startswith("pbkdf2_sha256$")
        assert "pw-123456" not in customer.password_hash
        repo.save.assert_called_once_with(customer)

    @pytest.mark.asyncio
    async def test_password_mismatch(self):
        repo = AsyncMock()
        service = make_service(repo)

        with pytest.raises(RegistrationError) as exc_info:
            await service.register_customer(make_customer(), "one", "two")

        assert exc_info.value.code == "password_mismatch"
        repo.save.assert_not_called()

    @pytest.mark.asyncio
    async def test_already_registered(self):
        repo = AsyncMock()
        service = make_service(repo)
        customer = make_customer()
        customer.register("hash")

        with pytest.raises(RegistrationError) as exc_info:
            await service.register_customer(customer, "pw", "pw")

        assert exc_info.value.code == "already_registered"
        repo.save.assert_not_called()

    @pytest.mark.asyncio
    async def test_duplicate_username(self):
        repo = AsyncMock()
        repo.get_by_username.return_value = make_customer()
        service = make_service(repo)

        with pytest.raises(RegistrationError) as exc_info:
            await service.register_customer(make_customer(), "pw", "pw")

        assert exc_info.value.code == "duplicate_email"
        repo.save.assert_not_called()

    @pytest.mark.asyncio
    async def test_same_record_is_not_a_duplicate(self):
        """A stored guest registering under its own username is not a conflict."""
        customer = make_customer()
        repo = AsyncMock()
        repo.get_by_username.return_value = customer
        service = make_service(repo)

        await service.register_customer(customer, "pw", "pw")

        assert customer.is_registered is True

    @pytest.mark.asyncio
    async def test_conflict_on_save_is_duplicate_email(self):
        """A concurrent registration that wins the insert makes this one a duplicate."""
        repo = AsyncMock()
        repo.get_by_username.return_value = None
        repo.save.side_effect = ConflictError("username taken")
        service = make_service(repo)

        with pytest.raises(RegistrationError) as exc_info:
            await service.register_customer(make_customer(), "pw", "pw")

        assert exc_info.value.code == "duplicate_email"

    @pytest.mark.asyncio
    async def test_storage_errors_propagate(self):
        repo = AsyncMock()
        repo.get_by_username.return_value = None
        repo.save.side_effect = StorageUnavailableError("database down")
        service = make_service(repo)

        with pytest.raises(StorageUnavailableError):
            await service.register_customer(make_customer(), "pw", "pw")
