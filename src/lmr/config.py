"""Report configuration loaded from YAML."""

from __future__ import annotations

from pathlib import Path
from typing import Any, List, Mapping, Optional

import yaml
from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    field_validator,
    model_validator,
)

from common.errors import ConfigError
from common.models import Field as QueryField
from common.models import Query
from dal.util.env import normalize_source_kind
from delivery.mail import MailSettings
from presentation.charts import ChartComponent
from presentation.formats import OutputFormat


class SourceConfig(BaseModel):
    """Data source: backend kind and its connection string."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    kind: str
    conn: str

    @field_validator("kind", mode="before")
    @classmethod
    def normalize_kind(cls, v):
        if isinstance(v, str):
            return normalize_source_kind(v)
        return v


class QueryConfig(BaseModel):
    """One configured query with its columns and optional chart."""

    model_config = ConfigDict(extra="forbid")

    key: Optional[str] = None
    title: str
    sql: str
    fields: List[QueryField] = Field(default_factory=list)
    chart: Optional[ChartComponent] = None

    def to_query(self) -> Query:
        return Query(sql=self.sql, title=self.title, fields=self.fields, key=self.key or "")


class SendConfig(BaseModel):
    """Where and in which format the report is delivered."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    format: OutputFormat = OutputFormat.PLAIN
    stdout: bool = False
    mail: Optional[MailSettings] = None

    @field_validator("format", mode="before")
    @classmethod
    def normalize_format(cls, v):
        """Accept format names case-insensitively."""
        if isinstance(v, str):
            return v.strip().lower()
        return v


class LmrConfig(BaseModel):
    """Top-level report configuration."""

    model_config = ConfigDict(extra="forbid")

    title: str
    source: SourceConfig
    queries: List[QueryConfig] = Field(
        default_factory=list, validation_alias=AliasChoices("queries", "querys")
    )
    send: SendConfig = Field(default_factory=SendConfig)

    @model_validator(mode="after")
    def assign_query_keys(self) -> "LmrConfig":
        """Give every query a stable key: its own ``key`` or ``q<index>``."""
        seen = set()
        for index, query in enumerate(self.queries):
            if not query.key:
                query.key = f"q{index}"
            if query.key in seen:
                raise ValueError(f"duplicate query key '{query.key}'")
            seen.add(query.key)
        return self

    def build_queries(self) -> List[Query]:
        """Return the configured queries in report order."""
        return [q.to_query() for q in self.queries]

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "LmrConfig":
        """Validate an already parsed configuration mapping.

        Raises:
            ConfigError: If the mapping does not describe a valid report.
        """
        if not isinstance(data, Mapping):
            raise ConfigError("Configuration must be a mapping")
        try:
            return cls.model_validate(dict(data))
        except ValidationError as exc:
            raise ConfigError(f"Invalid configuration: {exc}") from exc

    @classmethod
    def from_yaml(cls, path: str | Path) -> "LmrConfig":
        """Load configuration from a YAML file.

        Args:
            path: Path to the YAML configuration file.

        Returns:
            Parsed LmrConfig instance.

        Raises:
            ConfigError: If the file is missing, not valid YAML, or invalid.
        """
        path = Path(path)
        if not path.exists():
            raise ConfigError(f"Config file not found: {path}")

        try:
            with open(path, encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as exc:
            raise ConfigError(f"Invalid YAML in {path}: {exc}") from exc

        return cls.from_mapping(data)
