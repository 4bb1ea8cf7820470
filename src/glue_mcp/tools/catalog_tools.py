"""Glue Data Catalog tools for the MCP server.

Each tool is a thin binding of a GlueDataCatalog operation to a name, a
description surfaced to calling agents, and an argument model.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from ..catalog import GlueDataCatalog
from .registry import NoArgs, ToolRegistry, ToolSpec

LIST_DATABASES_DESCRIPTION = "List the databases in an AWS Glue Data Catalog"
GET_DATABASE_METADATA_DESCRIPTION = (
    "Get database metadata from an AWS Glue Data Catalog, including the tables in the database"
)
GET_TABLE_METADATA_DESCRIPTION = (
    "Get table metadata from an AWS Glue Data Catalog, including the columns in the table"
)


class GetDatabaseMetadataArgs(BaseModel):
    database_name: str = Field(..., min_length=1, description="The database name")


class GetTableMetadataArgs(BaseModel):
    database_name: str = Field(..., min_length=1, description="The database name")
    table_name: str = Field(..., min_length=1, description="The table name")


def build_catalog_registry(catalog: GlueDataCatalog) -> ToolRegistry:
    """Build the registry of catalog tools backed by ``catalog``.

    Args:
        catalog: The GlueDataCatalog every tool delegates to

    Returns:
        ToolRegistry: list_databases, get_database_metadata, get_table_metadata, in that order
    """
    registry = ToolRegistry()
    registry.add(
        ToolSpec(
            name="list_databases",
            description=LIST_DATABASES_DESCRIPTION,
            handler=catalog.list_databases,
            args_model=NoArgs,
        )
    )
    registry.add(
        ToolSpec(
            name="get_database_metadata",
            description=GET_DATABASE_METADATA_DESCRIPTION,
            handler=catalog.get_database_metadata,
            args_model=GetDatabaseMetadataArgs,
        )
    )
    registry.add(
        ToolSpec(
            name="get_table_metadata",
            description=GET_TABLE_METADATA_DESCRIPTION,
            handler=catalog.get_table_metadata,
            args_model=GetTableMetadataArgs,
        )
    )
    return registry
