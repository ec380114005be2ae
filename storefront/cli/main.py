"""Main CLI application using Cyclopts."""

import cyclopts

from storefront.cli.commands import migrate, server, token

app = cyclopts.App(
    name="storefront",
    help="Storefront customer identity service - CLI",
)

app.command(server.app, name="serve")
app.command(migrate.app, name="migrate")
app.command(token.app, name="token")


def main() -> None:
    app()
