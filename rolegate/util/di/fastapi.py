"""Dishka FastAPI integration opening a Scope.UOW container per request."""

from dishka import AsyncContainer
from fastapi import FastAPI
from starlette.requests import Request
from starlette.types import ASGIApp, Receive, Scope, Send

from rolegate.util.di.scope import Scope as RoleGateScope


class ContainerMiddleware:
    """ASGI middleware that enters a Scope.UOW container for each HTTP request.

    Stands in for dishka.integrations.starlette.ContainerMiddleware, which
    would open dishka.Scope.REQUEST instead.
    """

    def __init__(self, app: ASGIApp) -> None:
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            return await self.app(scope, receive, send)

        request = Request(scope, receive=receive, send=send)
        async with request.app.state.dishka_container(
            {Request: request},
            scope=RoleGateScope.UOW,
        ) as request_container:
            request.state.dishka_container = request_container
            return await self.app(scope, receive, send)


def setup_dishka(container: AsyncContainer, app: FastAPI) -> None:
    """Attach the container to ``app`` and install the per-request middleware."""
    app.add_middleware(ContainerMiddleware)
    app.state.dishka_container = container
