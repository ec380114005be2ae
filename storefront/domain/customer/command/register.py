"""Registration command: create an account and start its session."""

from storefront.domain.customer.model.principal import CUSTOMER_PRINCIPAL_TYPE
from storefront.domain.customer.model.value import RegisterRequest
from storefront.domain.customer.service.customer_state import CustomerStateService
from storefront.domain.customer.service.token import TokenService
from storefront.domain.shared.command import Command, CommandHandler, Result


class RegisterCustomer(Command):
    """Command to register a new customer account."""

    registration: RegisterRequest


class RegisterCustomerResult(Result):
    """Result containing the new customer's id and tokens."""

    customer_id: str
    access_token: str
    customer_token: str
    expires_in: int


class RegisterCustomerHandler(CommandHandler[RegisterCustomer, RegisterCustomerResult]):
    """Handler for RegisterCustomer command."""

    state_service: CustomerStateService
    token_service: TokenService

    async def run(self, cmd: RegisterCustomer) -> RegisterCustomerResult:
        customer = await self.state_service.register_new_customer(cmd.registration)
        customer_id = str(customer.id)

        return RegisterCustomerResult(
            customer_id=customer_id,
            access_token=self.token_service.create_access_token(
                customer_id, CUSTOMER_PRINCIPAL_TYPE
            ),
            customer_token=self.token_service.create_customer_token(customer.id),
            expires_in=self.token_service.access_token_expire_seconds,
        )
