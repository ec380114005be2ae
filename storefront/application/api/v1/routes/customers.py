"""Customer routes: registration, guest creation and current-customer lookup."""

import logging

from dishka import FromDishka
from dishka.integrations.fastapi import DishkaRoute
from fastapi import APIRouter, status
from pydantic import BaseModel

from storefront.domain.customer.command.guest import (
    CreateGuestCustomer,
    CreateGuestCustomerHandler,
)
from storefront.domain.customer.command.register import (
    RegisterCustomer,
    RegisterCustomerHandler,
)
from storefront.domain.customer.model.customer import Customer
from storefront.domain.customer.model.value import RegisterRequest

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/customers", tags=["Customers"], route_class=DishkaRoute)


class RegisterResponse(BaseModel):
    """Response for a successful registration."""

    customer_id: str
    access_token: str
    customer_token: str
    token_type: str = "Bearer"
    expires_in: int


class GuestResponse(BaseModel):
    customer_id: str
    customer_token: str
    expires_in: int


class CustomerResponse(BaseModel):
    """The customer resolved for the current request."""

    id: str | None  # None for anonymous customers, which have no stored identity
    email_address: str | None
    username: str | None
    first_name: str | None
    last_name: str | None
    is_registered: bool
    is_anonymous: bool
    is_logged_in: bool

    @classmethod
    def from_customer(cls, customer: Customer) -> "CustomerResponse":
        return cls(
            id=None if customer.is_anonymous else str(customer.id),
            email_address=customer.email_address,
            username=customer.username,
            first_name=customer.first_name,
            last_name=customer.last_name,
            is_registered=customer.is_registered,
            is_anonymous=customer.is_anonymous,
            is_logged_in=customer.is_logged_in,
        )


@router.post("/register", status_code=status.HTTP_201_CREATED)
async def register_customer(
    body: RegisterRequest,
    handler: FromDishka[RegisterCustomerHandler],
) -> RegisterResponse:
    """Register a new customer and start a session for them."""
    result = await handler.run(RegisterCustomer(registration=body))
    logger.info("Customer registered via API: %s", result.customer_id)
    return RegisterResponse(
        customer_id=result.customer_id,
        access_token=result.access_token,
        customer_token=result.customer_token,
        expires_in=result.expires_in,
    )


@router.post("/guest", status_code=status.HTTP_201_CREATED)
async def create_guest_customer(
    handler: FromDishka[CreateGuestCustomerHandler],
) -> GuestResponse:
    """Create a guest customer and return the token that identifies it."""
    result = await handler.run(CreateGuestCustomer())
    return GuestResponse(
        customer_id=result.customer_id,
        customer_token=result.customer_token,
        expires_in=result.expires_in,
    )


@router.get("/current")
async def get_current_customer(customer: FromDishka[Customer]) -> CustomerResponse:
    """Return the customer this request resolves to (never fails; may be anonymous)."""
    return CustomerResponse.from_customer(customer)
