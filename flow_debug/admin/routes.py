"""
Debug admin routes.

HTTP endpoints of the debug node: switching a node's output on and off,
and serving the static assets of the debug viewer.
"""

from __future__ import annotations

import functools
import inspect
import logging
from pathlib import Path, PurePosixPath
from typing import Awaitable, Callable, Optional, Union

from aiohttp import web

from flow_debug.flow import NodeRegistry

logger = logging.getLogger(__name__)

VIEW_DIR = Path(__file__).parent / "view"
DEBUG_WRITE = "debug.write"

Authorizer = Callable[[web.Request, str], Union[bool, Awaitable[bool]]]

NODES_KEY = web.AppKey("nodes", NodeRegistry)
AUTHORIZER_KEY = web.AppKey("authorizer", object)
VIEW_DIR_KEY = web.AppKey("view_dir", Path)


def needs_permission(permission: str):
    """
    Require ``permission`` before running a handler.

    The application's authorizer decides; without one every request is
    allowed. A denied request gets 401.
    """
    def decorator(handler):
        @functools.wraps(handler)
        async def wrapper(request: web.Request) -> web.StreamResponse:
            authorizer = request.app.get(AUTHORIZER_KEY)
            if authorizer is not None:
                allowed = authorizer(request, permission)
                if inspect.isawaitable(allowed):
                    allowed = await allowed
                if not allowed:
                    logger.warning("Permission %s denied for %s %s", permission, request.method, request.path)
                    raise web.HTTPUnauthorized()
            return await handler(request)
        return wrapper
    return decorator


@needs_permission(DEBUG_WRITE)
async def set_node_state(request: web.Request) -> web.Response:
    """POST /debug/{id}/{state} - enable or disable a debug node."""
    node_id = request.match_info["id"]
    state = request.match_info["state"]
    node = request.app[NODES_KEY].get(node_id)

    if node is None or not hasattr(node, "active"):
        return web.Response(status=404, text="Not Found")
    if state == "enable":
        node.active = True
        logger.info("Debug node %s enabled", node_id)
        return web.Response(status=200, text="OK")
    if state == "disable":
        node.active = False
        logger.info("Debug node %s disabled", node_id)
        return web.Response(status=201, text="Created")
    return web.Response(status=404, text="Not Found")


async def serve_view_asset(request: web.Request) -> web.StreamResponse:
    """
    GET /debug/view/{filename} - serve a debug viewer asset.

    The viewer script is loaded through a plain <script> tag, before any
    auth header can be attached, so this route has no permission check.
    """
    filename = request.match_info["filename"]
    root = request.app[VIEW_DIR_KEY].resolve()

    if any(part.startswith(".") for part in PurePosixPath(filename).parts):
        raise web.HTTPForbidden()

    path = (root / filename).resolve()
    if root not in path.parents or not path.is_file():
        raise web.HTTPNotFound()
    return web.FileResponse(path)


def setup_routes(app: web.Application) -> None:
    app.router.add_get("/debug/view/{filename:.*}", serve_view_asset)
    app.router.add_post("/debug/{id}/{state}", set_node_state)


def create_admin_app(
    nodes: NodeRegistry,
    authorizer: Optional[Authorizer] = None,
    view_dir: Path = VIEW_DIR,
) -> web.Application:
    """
    Create the admin application.

    Args:
        nodes: Registry the state endpoint looks nodes up in
        authorizer: ``(request, permission) -> bool`` check, sync or async
        view_dir: Directory the viewer assets are served from

    Returns:
        aiohttp application with the debug routes
    """
    app = web.Application()
    app[NODES_KEY] = nodes
    app[VIEW_DIR_KEY] = view_dir
    if authorizer is not None:
        app[AUTHORIZER_KEY] = authorizer
    setup_routes(app)
    return app
