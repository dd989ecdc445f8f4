import logging
import os
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request

from config import Settings
from db import make_engine
from dispatcher import Dispatcher
from errors import LinkServiceError
from responses import text_response
from store import SqlLinkStore

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger("url_shortener")


class DispatchEndpoint:
    """ASGI endpoint that hands every request to the dispatcher, whatever its method.

    Must stay a class instance: Starlette restricts function endpoints to GET by default.
    """

    def __init__(self, dispatcher: Dispatcher):
        self.dispatcher = dispatcher

    async def __call__(self, scope, receive, send):
        response = await self.dispatcher.dispatch(Request(scope, receive))
        await response(scope, receive, send)


def create_app(dispatcher: Dispatcher) -> FastAPI:
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        create_all = getattr(dispatcher.store, "create_all", None)
        if create_all is not None:
            await create_all()
        yield

    # The generated docs routes would shadow short IDs such as "docs".
    app = FastAPI(
        title="URL Shortener Service",
        description="Short links kept in a key-value store.",
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
        lifespan=lifespan,
    )

    @app.exception_handler(LinkServiceError)
    async def link_service_error_handler(request: Request, exc: LinkServiceError):
        if exc.status_code >= 500:
            logger.error(f"{request.method} {request.url.path} failed: {exc.detail}")
        return text_response(exc.detail, status_code=exc.status_code)

    app.router.add_route("/{path:path}", DispatchEndpoint(dispatcher), include_in_schema=False)

    return app


settings = Settings.from_env()
app = create_app(
    Dispatcher(settings.api_key, SqlLinkStore(make_engine(settings.database_url)), site_name=settings.site_name)
)

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=int(os.getenv("PORT", "8000")))
