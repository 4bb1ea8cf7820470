from contextlib import asynccontextmanager
from typing import AsyncIterator

import anyio
import boto3
import pytest
from botocore.stub import Stubber
from mcp import types
from mcp.client.session import ClientSession
from mcp.server.lowlevel import Server
from mcp.shared.memory import create_client_server_memory_streams

from glue_mcp.catalog import GlueDataCatalog
from glue_mcp.server.info import create_mcp_server
from glue_mcp.tools import build_catalog_registry


@pytest.fixture
def glue_client():
    return boto3.client(
        "glue",
        region_name="us-east-1",
        aws_access_key_id="testing",
        aws_secret_access_key="testing",
    )


@pytest.fixture
def stubber(glue_client):
    with Stubber(glue_client) as stub:
        yield stub


@pytest.fixture
def catalog(glue_client) -> GlueDataCatalog:
    return GlueDataCatalog(glue_client)


@asynccontextmanager
async def connected_session(
    mcp_server: Server,
) -> AsyncIterator[tuple[ClientSession, types.InitializeResult]]:
    """Run ``mcp_server`` over in-memory streams and yield an initialized client."""
    async with create_client_server_memory_streams() as (client_streams, server_streams):
        client_read, client_write = client_streams
        server_read, server_write = server_streams
        async with anyio.create_task_group() as tg:
            tg.start_soon(
                lambda: mcp_server.run(
                    server_read, server_write, mcp_server.create_initialization_options()
                )
            )
            async with ClientSession(client_read, client_write) as session:
                init_result = await session.initialize()
                yield session, init_result
            tg.cancel_scope.cancel()


@pytest.fixture
def mcp_server(catalog) -> Server:
    return create_mcp_server(build_catalog_registry(catalog))


@pytest.fixture
def connect():
    return connected_session
