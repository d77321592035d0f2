"""Pydantic schemas for runtime validation of conversion inputs."""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator

from pheno_convert.types import InputFormat, OutputFormat


class ConversionRequestConfig(BaseModel):
    """Validated fields of a conversion request."""

    model_config = ConfigDict(extra="forbid")

    input_kind: InputFormat
    output_kind: OutputFormat
    input_path: Path
    output_path: Path
    dictionary_path: Path | None = None

    @field_validator("input_path", "output_path")
    @classmethod
    def _validate_non_empty(cls, value: Path) -> Path:
        if not str(value).strip() or value == Path("."):
            raise ValueError("path must not be empty.")
        return value


class BuiltinEngineOptions(BaseModel):
    """Validated options for the built-in conversion engine."""

    model_config = ConfigDict(extra="ignore")

    print_hidden_labels: bool = False
    verbose: bool = False
    debug: int = Field(default=0, ge=0, le=5)
    separator: str = Field(default=",", min_length=1, max_length=1)
    id_field: str = Field(default="record_id", min_length=1)


class EngineResolutionConfig(BaseModel):
    """Validated input for engine registry resolution."""

    model_config = ConfigDict(extra="forbid")

    engine_name: str = Field(min_length=1)
    engine_modules: list[str] = Field(default_factory=list)

    @field_validator("engine_name")
    @classmethod
    def _strip_name(cls, value: str) -> str:
        stripped = value.strip()
        if not stripped:
            raise ValueError("engine name cannot be empty.")
        return stripped
