import enum
import logging
from typing import Optional, Tuple

import pydantic
from fastapi import Request

from auth import is_authorized
from errors import (
    AuthError,
    ConfigurationError,
    ConflictError,
    MethodNotSupportedError,
    NotFoundError,
    ValidationError,
)
from keys import decode_key, literal_key
from models import MAX_SHORT_ID_LENGTH
from responses import home_response, json_response, redirect_response
from schemas import CreateLinkRequest, CreateLinkResponse, DeleteLinkResponse
from store import LinkStore

logger = logging.getLogger("url_shortener")

API_PREFIX = "/api/"
DELETE_PREFIX = "/api/delete/"


class Route(enum.Enum):
    CREATE = "create"
    LIST = "list"
    DELETE = "delete"
    API_UNKNOWN = "api_unknown"
    HOME = "home"
    REDIRECT = "redirect"
    UNSUPPORTED = "unsupported"

    @property
    def needs_auth(self) -> bool:
        return self in (Route.CREATE, Route.LIST, Route.DELETE, Route.API_UNKNOWN)


def classify(method: str, path: str) -> Tuple[Route, Optional[str]]:
    """Map a method and raw path to a route and its path argument, first match wins."""
    if path.startswith(API_PREFIX):
        if path == "/api/create" and method == "POST":
            return Route.CREATE, None
        if path == "/api/list" and method == "GET":
            return Route.LIST, None
        if path.startswith(DELETE_PREFIX) and method == "DELETE":
            return Route.DELETE, path[len(DELETE_PREFIX):]
        return Route.API_UNKNOWN, None
    if path == "/":
        return Route.HOME, None
    if method == "GET":
        return Route.REDIRECT, literal_key(path)
    return Route.UNSUPPORTED, None


def raw_path(request: Request) -> str:
    raw = request.scope.get("raw_path")
    if not raw:
        return request.url.path
    return raw.decode("utf-8", errors="replace").split("?", 1)[0]


class Dispatcher:
    def __init__(self, api_key: Optional[str], store: LinkStore, site_name: str = "brig.gs"):
        self.api_key = api_key
        self.store = store
        self.site_name = site_name
        self.handlers = {
            Route.CREATE: self.create_link,
            Route.LIST: self.list_links,
            Route.DELETE: self.delete_link,
            Route.API_UNKNOWN: self.unknown_api,
            Route.HOME: self.home,
            Route.REDIRECT: self.redirect,
            Route.UNSUPPORTED: self.unsupported,
        }

    async def dispatch(self, request: Request):
        if not self.api_key:
            raise ConfigurationError("Server not configured with an API_KEY")
        route, arg = classify(request.method, raw_path(request))
        if route.needs_auth and not is_authorized(request.headers.get("Authorization"), self.api_key):
            logger.warning(f"Unauthorized {request.method} {request.url.path}")
            raise AuthError("Unauthorized")
        return await self.handlers[route](request, arg)

    async def create_link(self, request: Request, _arg):
        body = await request.body()
        try:
            req = CreateLinkRequest.model_validate_json(body)
        except pydantic.ValidationError as exc:
            if any(err["type"] == "json_invalid" for err in exc.errors()):
                raise ValidationError(f"Error parsing JSON: {exc.errors()[0]['msg']}")
            if any(err["type"] == "string_too_long" for err in exc.errors()):
                raise ValidationError(f"short_id is longer than {MAX_SHORT_ID_LENGTH} characters")
            raise ValidationError("Missing 'short_id' or 'target_url'")
        if not await self.store.put_if_absent(req.short_id, req.target_url):
            logger.warning(f"Create failed: short_id={req.short_id} already exists")
            raise ConflictError(f"Conflict: '{req.short_id}' already exists")
        logger.info(f"Created link short_id={req.short_id} target_url={req.target_url}")
        response = CreateLinkResponse(message="Link created", short_id=req.short_id, target_url=req.target_url)
        return json_response(response.model_dump(), status_code=201)

    async def list_links(self, request: Request, _arg):
        links = await self.store.items()
        logger.info(f"Listed {len(links)} links")
        return json_response(links)

    async def delete_link(self, request: Request, encoded_id: str):
        if not encoded_id:
            raise ValidationError("Invalid delete path - missing short ID")
        short_id = decode_key(encoded_id)
        if await self.store.get(short_id) is None:
            logger.warning(f"Delete failed: short_id={short_id} not found")
            raise NotFoundError(f"Not Found: '{short_id}' does not exist")
        await self.store.delete(short_id)
        logger.info(f"Deleted link short_id={short_id}")
        return json_response(DeleteLinkResponse(message=f"Deleted '{short_id}'").model_dump())

    async def unknown_api(self, request: Request, _arg):
        raise NotFoundError("Not Found or method not allowed")

    async def home(self, request: Request, _arg):
        return home_response(self.site_name)

    async def redirect(self, request: Request, short_id: str):
        if not short_id:
            raise ValidationError("Missing short ID")
        target_url = await self.store.get(short_id)
        if target_url is None:
            logger.warning(f"Redirect failed: short_id={short_id} not found")
            raise NotFoundError("Not Found")
        logger.info(f"Redirecting short_id={short_id} to url={target_url}")
        return redirect_response(target_url)

    async def unsupported(self, request: Request, _arg):
        raise MethodNotSupportedError("Method Not Allowed")
