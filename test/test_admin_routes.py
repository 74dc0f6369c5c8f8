import os
import sys

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

import pytest
from aiohttp import test_utils

from flow_debug.admin import DEBUG_WRITE, create_admin_app
from flow_debug.debug import DebugPublisher
from flow_debug.flow import build_nodes


class TestAdminRoutes:
    """Node state endpoint and viewer asset serving."""

    def setup_method(self):
        self.registry = build_nodes([{"id": "n1", "type": "debug"}], DebugPublisher())

    @pytest.mark.asyncio
    async def test_enable_and_disable(self):
        node = self.registry.get("n1")
        async with test_utils.TestClient(test_utils.TestServer(create_admin_app(self.registry))) as client:
            resp = await client.post("/debug/n1/disable")
            assert resp.status == 201
            assert node.active is False

            resp = await client.post("/debug/n1/enable")
            assert resp.status == 200
            assert node.active is True

    @pytest.mark.asyncio
    async def test_unknown_node_or_state(self):
        async with test_utils.TestClient(test_utils.TestServer(create_admin_app(self.registry))) as client:
            resp = await client.post("/debug/missing/enable")
            assert resp.status == 404

            resp = await client.post("/debug/n1/toggle")
            assert resp.status == 404
            assert self.registry.get("n1").active is True

    @pytest.mark.asyncio
    async def test_permission_is_checked(self):
        checked = []

        def deny(request, permission):
            checked.append(permission)
            return False

        async with test_utils.TestClient(test_utils.TestServer(create_admin_app(self.registry, authorizer=deny))) as client:
            resp = await client.post("/debug/n1/disable")
            assert resp.status == 401
            assert checked == [DEBUG_WRITE]
            assert self.registry.get("n1").active is True

    @pytest.mark.asyncio
    async def test_async_authorizer(self):
        async def allow(request, permission):
            return permission == DEBUG_WRITE

        async with test_utils.TestClient(test_utils.TestServer(create_admin_app(self.registry, authorizer=allow))) as client:
            resp = await client.post("/debug/n1/disable")
            assert resp.status == 201

    @pytest.mark.asyncio
    async def test_view_assets(self, tmp_path):
        (tmp_path / "viewer.js").write_text("var viewer = {};")
        (tmp_path / ".secret").write_text("token")
        (tmp_path / "lib").mkdir()
        (tmp_path / "lib" / ".hidden.js").write_text("hidden")

        def deny(request, permission):
            return False

        app = create_admin_app(self.registry, authorizer=deny, view_dir=tmp_path)
        async with test_utils.TestClient(test_utils.TestServer(app)) as client:
            # Served without a permission check
            resp = await client.get("/debug/view/viewer.js")
            assert resp.status == 200
            assert await resp.text() == "var viewer = {};"

            resp = await client.get("/debug/view/.secret")
            assert resp.status == 403

            resp = await client.get("/debug/view/lib/.hidden.js")
            assert resp.status == 403

            resp = await client.get("/debug/view/missing.js")
            assert resp.status == 404

            resp = await client.get("/debug/view/lib")
            assert resp.status == 404

    @pytest.mark.asyncio
    async def test_bundled_viewer_script(self):
        async with test_utils.TestClient(test_utils.TestServer(create_admin_app(self.registry))) as client:
            resp = await client.get("/debug/view/debug-utils.js")
            assert resp.status == 200
            assert "renderMessage" in await resp.text()
