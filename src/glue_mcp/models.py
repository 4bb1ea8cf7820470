from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class DatabaseList(BaseModel):
    model_config = ConfigDict(frozen=True)

    databases: list[str] = Field(..., description="Database names in catalog order")


class DatabaseMetadata(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="The database name")
    tables: list[str] = Field(..., description="Names of the tables in the database")


class TableMetadata(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="The table name")
    columns: list[str] = Field(..., description="Column names from the table's storage descriptor")


def to_payload(record: BaseModel) -> dict[str, Any]:
    return record.model_dump(mode="json")
