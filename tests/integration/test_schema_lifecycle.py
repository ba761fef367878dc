"""
Integration tests for ParseSchema lifecycle flows.

Tests cover:
- Full create/update/get/delete flow against the in-memory controller
- Default REST controllers end to end over a mocked HTTP transport
"""

import json

import httpx
import pytest

from parse_sdk import (
    HttpxRestController,
    MemorySchemaController,
    ParseSchema,
    ParseSettings,
    get_registry,
    set_rest_controller,
    set_schema_controller,
)
from parse_sdk.errors import RequestError, SchemaConflictError, SchemaNotFoundError


class TestMemoryLifecycle:
    """ParseSchema against MemorySchemaController."""

    @pytest.fixture(autouse=True)
    def store(self):
        store = MemorySchemaController()
        set_schema_controller(store)
        return store

    @pytest.mark.asyncio
    async def test_full_flow(self):
        """Create, evolve, list and delete a class."""
        schema = (
            ParseSchema("GameScore")
            .add_number("score", required=True)
            .add_string("cheatMode")
            .add_pointer("player", "User")
            .add_index("score_idx", {"score": -1})
            .set_class_level_permissions({"find": {"*": True}})
        )
        created = await schema.save()
        assert created["fields"]["score"] == {"type": "Number", "required": True}
        assert created["classLevelPermissions"] == {"find": {"*": True}}

        update = ParseSchema("GameScore").delete_field("cheatMode").add_date("playedAt")
        update.delete_index("score_idx")
        updated = await update.update()
        assert set(updated["fields"]) == {"score", "player", "playedAt"}
        assert updated["indexes"] == {}

        fetched = await ParseSchema("GameScore").get()
        assert fetched == updated

        listing = await ParseSchema.all()
        assert [s["className"] for s in listing] == ["GameScore"]

        assert await schema.delete() == {}
        with pytest.raises(SchemaNotFoundError):
            await schema.get()

    @pytest.mark.asyncio
    async def test_user_class_stored_under_reserved_name(self):
        """User schemas land on _User."""
        await ParseSchema("User").add_string("nickname").save()

        fetched = await ParseSchema("_User").get()

        assert fetched["className"] == "_User"

    @pytest.mark.asyncio
    async def test_all_with_no_classes_raises(self):
        """Empty store is reported as not found."""
        with pytest.raises(SchemaNotFoundError, match="Schema not found."):
            await ParseSchema.all()

    @pytest.mark.asyncio
    async def test_save_twice_conflicts(self):
        """Saving an existing class surfaces the controller's error."""
        schema = ParseSchema("GameScore").add_number("score")
        await schema.save()

        with pytest.raises(SchemaConflictError):
            await schema.save()


class TestDefaultControllers:
    """ParseSchema through the default REST controllers."""

    @pytest.fixture
    def requests(self):
        return []

    @pytest.fixture(autouse=True)
    def rest(self, requests):
        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            if request.url.path.endswith("/schemas/Missing"):
                return httpx.Response(400, json={"code": 103, "error": "Class Missing does not exist."})
            if request.url.path.endswith("/schemas"):
                return httpx.Response(200, json={"results": [{"className": "SchemaTest"}]})
            return httpx.Response(200, json={})

        settings = ParseSettings(server_url="http://parse.test/parse", application_id="app")
        rest = HttpxRestController(
            settings,
            client=httpx.AsyncClient(transport=httpx.MockTransport(handler)),
        )
        set_rest_controller(rest)
        return rest

    @pytest.mark.asyncio
    async def test_save_with_session_token(self, requests):
        """save() POSTs the payload with the session token header."""
        schema = ParseSchema("SchemaTest").add_string("name")

        assert await schema.save({"sessionToken": 1234}) == {}

        request = requests[0]
        assert request.method == "POST"
        assert request.url.path == "/parse/schemas/SchemaTest"
        assert request.headers["X-Parse-Session-Token"] == "1234"
        assert json.loads(request.content) == {
            "className": "SchemaTest",
            "fields": {"name": {"type": "String"}},
            "indexes": {},
        }

    @pytest.mark.asyncio
    async def test_get_update_delete(self, requests):
        """get/update/delete map to GET/PUT/DELETE."""
        schema = ParseSchema("SchemaTest")

        assert await schema.get() == {}
        assert await schema.update() == {}
        assert await schema.delete() == {}

        assert [r.method for r in requests] == ["GET", "PUT", "DELETE"]

    @pytest.mark.asyncio
    async def test_all(self, requests):
        """all() reads the schemas collection."""
        assert await ParseSchema.all() == [{"className": "SchemaTest"}]
        assert requests[0].url.path == "/parse/schemas"

    @pytest.mark.asyncio
    async def test_server_error_propagates(self):
        """Server errors surface as RequestError."""
        with pytest.raises(RequestError) as exc:
            await ParseSchema("Missing").get()

        assert exc.value.server_code == 103

    def test_schema_controller_is_default(self):
        """The default schema controller stays in place."""
        assert type(get_registry().get_schema_controller()).__name__ == "RestSchemaController"
