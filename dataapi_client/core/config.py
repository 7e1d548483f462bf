"""Client configuration.

ClientConfig holds the Data API coordinates and can be filled from keyword
arguments or ``DATA_API_*`` environment variables. MappingOptions is the
small immutable value passed to every result set.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic_settings import BaseSettings, SettingsConfigDict


class MappingOptions(BaseModel):
    """Knobs controlling result mapping.

    Attributes:
        use_label_for_mapping: Identify columns by label instead of name.
        ignore_missing_setters: Skip columns with no setter or field instead
            of raising NoFieldOrSetterError (property population only).
    """

    model_config = ConfigDict(frozen=True)

    use_label_for_mapping: bool = False
    ignore_missing_setters: bool = False

    def with_options(self, **changes: Any) -> MappingOptions:
        """Return a copy with the given flags replaced."""
        return self.model_validate({**self.model_dump(), **changes})


DEFAULT_MAPPING_OPTIONS = MappingOptions()


class ClientConfig(BaseSettings):
    """Configuration for a Data API client."""

    model_config = SettingsConfigDict(env_prefix="DATA_API_", env_nested_delimiter="__")

    resource_arn: str
    secret_arn: str
    database: str | None = None
    region_name: str | None = None
    endpoint_url: str | None = None
    mapping_options: MappingOptions = DEFAULT_MAPPING_OPTIONS
