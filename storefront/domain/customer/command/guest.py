"""Guest command: persist a non-registered customer and hand out its token."""

from storefront.domain.customer.service.customer import CustomerService
from storefront.domain.customer.service.token import TokenService
from storefront.domain.shared.command import Command, CommandHandler, Result


class CreateGuestCustomer(Command):
    """Command to create a guest customer (e.g. when a cart is first created)."""


class CreateGuestCustomerResult(Result):
    customer_id: str
    customer_token: str
    expires_in: int


class CreateGuestCustomerHandler(CommandHandler[CreateGuestCustomer, CreateGuestCustomerResult]):
    customer_service: CustomerService
    token_service: TokenService

    async def run(self, cmd: CreateGuestCustomer) -> CreateGuestCustomerResult:
        customer = self.customer_service.create_new_customer()
        await self.customer_service.save_customer(customer)

        return CreateGuestCustomerResult(
            customer_id=str(customer.id),
            customer_token=self.token_service.create_customer_token(customer.id),
            expires_in=self.token_service.customer_token_expire_seconds,
        )
