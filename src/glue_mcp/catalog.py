"""AWS Glue Data Catalog facade exposed through the MCP tools.

Every operation is a single read-only round trip: call Glue, reshape the
response into a flat record, serialize it. The only shared state is the
boto3 client, which is thread-safe and never mutated here.
"""

import asyncio
import logging
from typing import Any, Callable

import boto3
from botocore.exceptions import BotoCoreError, ClientError
from mcp.shared.exceptions import McpError
from mcp.types import INVALID_PARAMS, ErrorData
from pydantic import BaseModel

from .config import AWSConfig
from .errors import CatalogCallError, CatalogConnectionError, CatalogError, SerializationError
from .logging_utils import log_extra
from .metrics import record_call, record_error
from .models import DatabaseList, DatabaseMetadata, TableMetadata, to_payload


def _require_name(value: str, field_name: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise McpError(
            ErrorData(code=INVALID_PARAMS, message=f"{field_name} must be a non-empty string")
        )
    return value


class GlueDataCatalog:
    def __init__(self, client: Any) -> None:
        self._client = client
        self._log = logging.getLogger(__name__)

    @classmethod
    def from_config(cls, aws: AWSConfig) -> "GlueDataCatalog":
        """Create a catalog backed by a Glue client from the ambient AWS configuration.

        Region and profile fall back to the standard boto3 resolution chain
        when they are not set. With ``verify_on_startup`` the catalog is probed
        once before it is returned.

        Raises:
            CatalogConnectionError: If the client cannot be built or the probe fails.
        """
        try:
            session = boto3.Session(profile_name=aws.profile, region_name=aws.region)
            client = session.client("glue")
        except BotoCoreError as exc:
            raise CatalogConnectionError(f"Couldn't create Glue client: {exc}") from exc

        catalog = cls(client)
        if aws.verify_on_startup:
            catalog.verify_connection()
        return catalog

    @property
    def region(self) -> str | None:
        return self._client.meta.region_name

    def verify_connection(self) -> None:
        """Probe the catalog once; startup must not continue if this fails."""
        try:
            self._client.get_databases()
        except (BotoCoreError, ClientError) as exc:
            raise CatalogConnectionError(f"Couldn't connect to AWS: {exc}") from exc
        self._log.info("Connected to Glue Data Catalog", extra=log_extra(region=self.region))

    async def list_databases(self) -> dict[str, Any]:
        operation = "list_databases"
        self._log.info("Listing databases in %s", self.region)
        record_call(operation)

        response = await self._call(operation, "Failed to list databases", self._client.get_databases)
        databases = [db["Name"] for db in response.get("DatabaseList", [])]

        return self._serialize(operation, DatabaseList(databases=databases))

    async def get_database_metadata(self, database_name: str) -> dict[str, Any]:
        operation = "get_database_metadata"
        self._log.info("Getting tables for database %s", database_name)
        record_call(operation)
        _require_name(database_name, "database_name")

        response = await self._call(
            operation,
            "Failed to get tables",
            self._client.get_tables,
            DatabaseName=database_name,
        )
        tables = [table["Name"] for table in response.get("TableList", [])]

        return self._serialize(operation, DatabaseMetadata(name=database_name, tables=tables))

    async def get_table_metadata(
        self, database_name: str, table_name: str
    ) -> dict[str, Any]:
        operation = "get_table_metadata"
        self._log.info("Getting columns for table %s", table_name)
        record_call(operation)
        _require_name(database_name, "database_name")
        _require_name(table_name, "table_name")

        response = await self._call(
            operation,
            "Failed to get table metadata",
            self._client.get_table,
            DatabaseName=database_name,
            Name=table_name,
        )
        # Tables without a storage descriptor (e.g. some views) have no columns.
        storage_descriptor = (response.get("Table") or {}).get("StorageDescriptor") or {}
        columns = [col["Name"] for col in storage_descriptor.get("Columns") or []]

        self._log.info("Got %d columns for table %s", len(columns), table_name)

        return self._serialize(operation, TableMetadata(name=table_name, columns=columns))

    async def _call(
        self, operation: str, failure_message: str, method: Callable[..., Any], **params: Any
    ) -> dict[str, Any]:
        try:
            return await asyncio.to_thread(method, **params)
        except (BotoCoreError, ClientError) as exc:
            self._log.warning(
                "Glue call failed",
                extra=log_extra(operation=operation, error_message=str(exc)),
            )
            raise self._fail(operation, CatalogCallError(failure_message, str(exc))) from exc

    def _serialize(self, operation: str, record: BaseModel) -> dict[str, Any]:
        try:
            return to_payload(record)
        except (TypeError, ValueError) as exc:
            raise self._fail(
                operation, SerializationError("Failed to serialize result", str(exc))
            ) from exc

    def _fail(self, operation: str, error: CatalogError) -> McpError:
        record_error(operation, error.kind)
        return McpError(error.to_error_data())
