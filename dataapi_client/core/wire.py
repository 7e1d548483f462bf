"""Wire-level value model.

WireField, ColumnMetadata and SqlParameter mirror the shapes exchanged with
the RDS Data API. They validate from the camelCase dicts boto3 returns and
dump back to them, so nothing outside the transport adapter has to know the
raw request/response layout.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator

from dataapi_client.core.enums import TypeHint

_VALUE_VARIANTS = ("long_value", "double_value", "string_value", "boolean_value", "blob_value")


class WireField(BaseModel):
    """One scalar value as sent to or received from the Data API.

    At most one value variant may be populated. The null marker may be set
    alongside a value and always takes precedence on read.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    is_null: bool | None = Field(default=None, alias="isNull")
    long_value: int | None = Field(default=None, alias="longValue")
    double_value: float | None = Field(default=None, alias="doubleValue")
    string_value: str | None = Field(default=None, alias="stringValue")
    boolean_value: bool | None = Field(default=None, alias="booleanValue")
    blob_value: bytes | None = Field(default=None, alias="blobValue")

    @model_validator(mode="after")
    def _single_variant(self) -> WireField:
        populated = [name for name in _VALUE_VARIANTS if getattr(self, name) is not None]
        if len(populated) > 1:
            raise ValueError(f"WireField carries more than one value: {populated}")
        return self

    @classmethod
    def null(cls) -> WireField:
        return cls(is_null=True)

    @property
    def null_marked(self) -> bool:
        return bool(self.is_null)

    def natural_value(self) -> Any:
        """Return the populated variant as-is, or None."""
        if self.null_marked:
            return None
        for name in _VALUE_VARIANTS:
            value = getattr(self, name)
            if value is not None:
                return value
        return None

    def to_api(self) -> dict[str, Any]:
        """Dump to the Data API ``Field`` shape."""
        return self.model_dump(by_alias=True, exclude_none=True)

    def __repr_args__(self):  # type: ignore[no-untyped-def]
        return [(k, v) for k, v in super().__repr_args__() if v is not None]


class ColumnMetadata(BaseModel):
    """Name and display label of one result column."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str
    label: str | None = None
    type_name: str | None = Field(default=None, alias="typeName")

    def identifier(self, use_label: bool) -> str:
        if use_label and self.label is not None:
            return self.label
        return self.name


class SqlParameter(BaseModel):
    """A named statement parameter ready for the request."""

    model_config = ConfigDict(frozen=True)

    name: str
    value: WireField
    type_hint: TypeHint | None = None

    def to_api(self) -> dict[str, Any]:
        """Dump to the Data API ``SqlParameter`` shape."""
        param: dict[str, Any] = {"name": self.name, "value": self.value.to_api()}
        if self.type_hint is not None:
            param["typeHint"] = self.type_hint.value
        return param
