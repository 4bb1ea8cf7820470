from __future__ import annotations

from typing import Any

from mcp.types import INTERNAL_ERROR, ErrorData


class ConfigError(ValueError):
    """Configuration is missing or invalid."""


class CatalogConnectionError(RuntimeError):
    """The Glue Data Catalog could not be reached at startup."""


class CatalogError(RuntimeError):
    """A catalog operation failed after it was accepted."""

    kind = "internal_error"

    def __init__(self, message: str, detail: str) -> None:
        super().__init__(f"{message}: {detail}")
        self.message = message
        self.detail = detail

    def to_error_data(self) -> ErrorData:
        data: dict[str, Any] = {"error": self.detail}
        return ErrorData(code=INTERNAL_ERROR, message=self.message, data=data)


class CatalogCallError(CatalogError):
    """The Glue API call itself failed."""

    kind = "aws_call_error"


class SerializationError(CatalogError):
    """A result record could not be converted to a response payload."""

    kind = "serde_error"
