import pytest
from mcp import types
from mcp.server.lowlevel import Server
from mcp.shared.exceptions import McpError

from glue_mcp.catalog import GlueDataCatalog
from glue_mcp.tools import ToolRegistry, ToolSpec, build_catalog_registry

CATALOG_TOOLS = ["list_databases", "get_database_metadata", "get_table_metadata"]


async def _noop() -> dict:
    return {}


def test_catalog_tools_in_order(catalog: GlueDataCatalog) -> None:
    registry = build_catalog_registry(catalog)

    assert registry.names() == CATALOG_TOOLS
    assert registry.get("list_databases").description == (
        "List the databases in an AWS Glue Data Catalog"
    )


def test_input_schemas(catalog: GlueDataCatalog) -> None:
    described = {tool["name"]: tool for tool in build_catalog_registry(catalog).describe()}

    assert described["list_databases"]["input_schema"].get("properties", {}) == {}
    table_schema = described["get_table_metadata"]["input_schema"]
    assert set(table_schema["required"]) == {"database_name", "table_name"}
    assert table_schema["properties"]["table_name"]["description"] == "The table name"
    assert table_schema["properties"]["table_name"]["minLength"] == 1
    assert described["get_database_metadata"]["input_schema"]["required"] == ["database_name"]


def test_duplicate_name_rejected() -> None:
    registry = ToolRegistry()
    registry.add(ToolSpec(name="a", description="first", handler=_noop))

    with pytest.raises(ValueError):
        registry.add(ToolSpec(name="a", description="second", handler=_noop))
    assert len(registry) == 1
    assert registry.get("a").description == "first"


def test_unknown_tool() -> None:
    registry = ToolRegistry()
    assert "missing" not in registry
    with pytest.raises(KeyError):
        registry.get("missing")


@pytest.mark.asyncio
async def test_call_rejects_arguments_the_schema_rejects(
    catalog: GlueDataCatalog, stubber
) -> None:
    registry = build_catalog_registry(catalog)

    with pytest.raises(McpError) as exc_info:
        await registry.call("get_table_metadata", {"database_name": "db1"})

    assert exc_info.value.error.code == types.INVALID_PARAMS
    assert "table_name" in exc_info.value.error.message
    assert exc_info.value.error.data is None
    stubber.assert_no_pending_responses()


@pytest.mark.asyncio
async def test_handshake_advertises_tools_only(mcp_server: Server, connect) -> None:
    async with connect(mcp_server) as (_session, init_result):
        capabilities = init_result.capabilities

    assert capabilities.tools is not None
    assert capabilities.tools.listChanged is False
    assert capabilities.prompts is None
    assert capabilities.resources is None
    assert capabilities.logging is None
    assert init_result.serverInfo.name == "glue-mcp"
    assert "AWS Glue Data Catalog" in init_result.instructions


@pytest.mark.asyncio
async def test_listed_schemas_come_from_argument_models(
    catalog: GlueDataCatalog, mcp_server: Server, connect
) -> None:
    described = {tool["name"]: tool for tool in build_catalog_registry(catalog).describe()}

    async with connect(mcp_server) as (session, _):
        listed = (await session.list_tools()).tools

    assert [tool.name for tool in listed] == CATALOG_TOOLS
    for tool in listed:
        assert tool.inputSchema == described[tool.name]["input_schema"]
    db_schema = {tool.name: tool for tool in listed}["get_database_metadata"].inputSchema
    assert db_schema["properties"]["database_name"]["minLength"] == 1


@pytest.mark.asyncio
async def test_list_databases_over_session(mcp_server: Server, connect, stubber) -> None:
    stubber.add_response(
        "get_databases", {"DatabaseList": [{"Name": "sales"}, {"Name": "ops"}]}, {}
    )

    async with connect(mcp_server) as (session, _):
        result = await session.call_tool("list_databases", {})

    assert result.isError is False
    assert result.structuredContent == {"databases": ["sales", "ops"]}
    assert result.content[0].text == '{"databases": ["sales", "ops"]}'


@pytest.mark.asyncio
async def test_missing_database_reaches_client_as_internal_error(
    mcp_server: Server, connect, stubber
) -> None:
    stubber.add_client_error(
        "get_table",
        service_error_code="EntityNotFoundException",
        service_message="Database missing_db not found.",
        http_status_code=400,
        expected_params={"DatabaseName": "missing_db", "Name": "t1"},
    )

    async with connect(mcp_server) as (session, _):
        with pytest.raises(McpError) as exc_info:
            await session.call_tool(
                "get_table_metadata", {"database_name": "missing_db", "table_name": "t1"}
            )

    error = exc_info.value.error
    assert error.code == types.INTERNAL_ERROR
    assert error.message == "Failed to get table metadata"
    assert "Database missing_db not found." in error.data["error"]


@pytest.mark.asyncio
@pytest.mark.parametrize("name", ["", "   "])
async def test_blank_name_reaches_client_as_invalid_params(
    mcp_server: Server, connect, stubber, name
) -> None:
    async with connect(mcp_server) as (session, _):
        with pytest.raises(McpError) as exc_info:
            await session.call_tool("get_database_metadata", {"database_name": name})

    assert exc_info.value.error.code == types.INVALID_PARAMS
    assert "database_name" in exc_info.value.error.message
    assert exc_info.value.error.data is None
    stubber.assert_no_pending_responses()


@pytest.mark.asyncio
async def test_unknown_tool_reaches_client_as_invalid_params(
    mcp_server: Server, connect
) -> None:
    async with connect(mcp_server) as (session, _):
        with pytest.raises(McpError) as exc_info:
            await session.call_tool("drop_database", {"database_name": "sales"})

    assert exc_info.value.error.code == types.INVALID_PARAMS
    assert exc_info.value.error.message == "Unknown tool: drop_database"
