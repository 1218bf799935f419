"""FastAPI application — HTTP entry point for booking creation.

Endpoints:

  POST /bookings   Create a booking (body: bookingData with camelCase keys)
  GET  /health     Health check

POST /bookings always answers with the result object.  A failed booking is
still a well-formed response: ``success`` is false and ``error`` / ``code`` /
``requiresReauth`` tell the UI what to do next.
"""

from __future__ import annotations

import logging
import time
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Awaitable, Callable

# Configure root logger early so all app loggers are visible when run via
# `uvicorn bookings.app:app`.
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(name)-20s %(levelname)-7s %(message)s",
)

from fastapi import Body, FastAPI, Request
from fastapi.responses import JSONResponse

from bookings.config import settings
from bookings.workflow import BookingCreationWorkflow

log = logging.getLogger("bookings.app")

_START_TIME = time.time()


async def _build_default_workflow() -> tuple[
    BookingCreationWorkflow, list[Callable[[], Awaitable[None]]]
]:
    """Build the Clerk/Google/database workflow plus its shutdown hooks."""
    from bookings.auth.clerk import ClerkTokenProvider
    from bookings.calendar_providers.google import GoogleCalendarService
    from bookings.store.sqlalchemy_store import SQLAlchemyBookingStore

    for warning in settings.validate_startup():
        log.warning(warning)

    store = SQLAlchemyBookingStore()
    if settings.debug:
        await store.init_schema()
    auth = ClerkTokenProvider()
    workflow = BookingCreationWorkflow(
        store=store,
        auth=auth,
        calendar=GoogleCalendarService(),
    )
    return workflow, [auth.aclose, store.dispose]


def create_app(workflow: BookingCreationWorkflow | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Passing a workflow skips building the Clerk/Google/database collaborators.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        shutdown_hooks: list[Callable[[], Awaitable[None]]] = []
        if workflow is not None:
            app.state.workflow = workflow
        else:
            app.state.workflow, shutdown_hooks = await _build_default_workflow()
        log.info("Booking service ready")
        try:
            yield
        finally:
            for hook in shutdown_hooks:
                await hook()
            log.info("Booking service stopped")

    app = FastAPI(
        title="Booking Service",
        description="Books event slots and mirrors them onto Google Calendar",
        version="0.1.0",
        lifespan=lifespan,
    )

    # ── Health check ───────────────────────────────────────────

    @app.get("/health")
    async def health() -> JSONResponse:
        uptime = round(time.time() - _START_TIME, 1)
        return JSONResponse({"status": "ok", "uptime": uptime})

    # ── Bookings ───────────────────────────────────────────────

    @app.post("/bookings")
    async def create_booking(
        request: Request, booking_data: dict[str, Any] = Body(...)
    ) -> JSONResponse:
        result = await request.app.state.workflow.create_booking(booking_data)
        status_code = 201 if result.success else 200
        return JSONResponse(result.to_dict(), status_code=status_code)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "bookings.app:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )
