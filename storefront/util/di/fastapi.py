"""Custom Dishka FastAPI integration using Scope.UOW."""

from dishka import AsyncContainer
from starlette.requests import Request
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from storefront.util.di.scope import Scope as StorefrontScope

FORM_CONTENT_TYPES = ("application/x-www-form-urlencoded", "multipart/form-data")


def has_form_body(request: Request) -> bool:
    content_type = request.headers.get("content-type", "")
    return content_type.split(";", 1)[0].strip().lower() in FORM_CONTENT_TYPES


def replay_body(body: bytes, receive: Receive) -> Receive:
    """Wrap `receive` so the app downstream sees `body` again."""
    replayed = False

    async def replay() -> Message:
        nonlocal replayed
        if not replayed:
            replayed = True
            return {"type": "http.request", "body": body, "more_body": False}
        return await receive()

    return replay


class ContainerMiddleware:
    """ASGI middleware that opens a Scope.UOW container for each HTTP request.

    Stands in for dishka.integrations.starlette.ContainerMiddleware, which
    would enter dishka.Scope.REQUEST instead of our Scope.UOW.

    Form bodies are read up front and replayed to the app, so providers can
    call `request.form()` on the container's Request without starving the route.
    """

    def __init__(self, app: ASGIApp) -> None:
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            return await self.app(scope, receive, send)

        request = Request(scope, receive=receive, send=send)
        if has_form_body(request):
            receive = replay_body(await request.body(), receive)

        try:
            async with request.app.state.dishka_container(
                {Request: request},
                scope=StorefrontScope.UOW,
            ) as request_container:
                request.state.dishka_container = request_container
                return await self.app(scope, receive, send)
        finally:
            await request.close()


def setup_dishka(container: AsyncContainer, app) -> None:
    """Attach the container to the app and install the per-request middleware."""
    app.add_middleware(ContainerMiddleware)
    app.state.dishka_container = container
