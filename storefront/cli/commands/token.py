"""Token commands - issue customer tokens for support and testing."""

import sys
from uuid import UUID

import cyclopts
from pydantic import ValidationError

from storefront.cli.console import get_console
from storefront.config import Config
from storefront.domain.customer.model.value import CustomerId
from storefront.domain.customer.service.token import TokenService

app = cyclopts.App(name="token", help="Customer token utilities")


@app.command
def issue(customer_id: UUID) -> None:
    """Print a customer token bound to CUSTOMER_ID, signed with the configured secret."""
    console = get_console()
    try:
        config = Config()  # type: ignore[call-arg]
    except ValidationError as e:
        console.error(f"Invalid configuration: {e}", hint="Is STOREFRONT_AUTH__JWT__SECRET set?")
        sys.exit(1)

    token_service = TokenService(_config=config.auth.jwt)
    console.print(token_service.create_customer_token(CustomerId(customer_id)), soft_wrap=True)
