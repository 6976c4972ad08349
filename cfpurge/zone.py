from __future__ import annotations

from typing import Any, Mapping

from pydantic import BaseModel, ConfigDict, Field, field_validator

PARAMETER_FIELDS = ("files", "tags", "hosts")


class ZoneError(BaseModel):
    model_config = ConfigDict(extra="ignore")

    code: int | None = None
    message: str


class Zone(BaseModel):
    """Purge parameters of a single zone, or the outcome of purging it.

    A batch keeps two of these per identifier: the one built from config/CLI
    input before dispatch, and the one parsed from the provider response.
    """

    model_config = ConfigDict(extra="ignore")

    files: list[str] | None = None
    tags: list[str] | None = None
    hosts: list[str] | None = None

    success: bool | None = None
    errors: list[ZoneError] = Field(default_factory=list)

    @field_validator("errors", mode="before")
    @classmethod
    def _null_errors(cls, value: Any) -> Any:
        return [] if value is None else value

    @classmethod
    def from_config(cls, data: Mapping[str, Any] | None = None) -> Zone:
        # Empty filters in config are treated as absent
        return cls(**{key: value for key, value in (data or {}).items() if key in PARAMETER_FIELDS and value})

    @classmethod
    def from_response(cls, payload: Any) -> Zone:
        return cls.model_validate(payload)

    @property
    def parameters(self) -> dict[str, list[str]]:
        return {key: value for key in PARAMETER_FIELDS if (value := getattr(self, key)) is not None}

    def replace_parameters(
        self,
        files: list[str] | None = None,
        tags: list[str] | None = None,
        hosts: list[str] | None = None,
    ) -> None:
        self.files = list(files) if files is not None else None
        self.tags = list(tags) if tags is not None else None
        self.hosts = list(hosts) if hosts is not None else None

    def serialize(self) -> dict[str, Any]:
        parameters = self.parameters
        if not parameters:
            return {"purge_everything": True}
        return {key: value for key, value in parameters.items() if value}

    def get(self, field: str, default: Any = None) -> Any:
        value = getattr(self, field, None)
        return default if value is None else value
