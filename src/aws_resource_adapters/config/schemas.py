"""Configuration schemas."""
from typing import Dict, List, Optional

from pydantic import BaseModel, Field, field_validator, model_validator


class AWSConfig(BaseModel):
    """AWS session and transport configuration."""

    region: str = Field("us-east-1", description="AWS region")
    profile: Optional[str] = Field(None, description="Named profile from the shared credentials file")
    endpoint_url: Optional[str] = Field(None, description="Override endpoint (e.g. a local emulator)")
    max_attempts: int = Field(3, description="Transport retry attempts")
    retry_mode: str = Field("standard", description="botocore retry mode")
    connect_timeout_ms: int = Field(10000, description="Connection timeout in milliseconds")
    read_timeout_ms: int = Field(60000, description="Read timeout in milliseconds")
    proxy_host: Optional[str] = Field(None, description="HTTP(S) proxy host")
    proxy_port: Optional[int] = Field(None, description="HTTP(S) proxy port")
    validate_credentials: bool = Field(False, description="Call STS GetCallerIdentity on startup")

    @field_validator("max_attempts")
    @classmethod
    def validate_max_attempts(cls, v: int) -> int:
        if v < 0:
            raise ValueError("max_attempts must be non-negative")
        return v

    @field_validator("retry_mode")
    @classmethod
    def validate_retry_mode(cls, v: str) -> str:
        valid_modes = ["legacy", "standard", "adaptive"]
        if v not in valid_modes:
            raise ValueError(f"retry_mode must be one of {valid_modes}")
        return v

    @field_validator("connect_timeout_ms", "read_timeout_ms")
    @classmethod
    def validate_timeouts(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("Timeouts must be positive")
        return v


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = Field("INFO", description="Log level")
    destination: str = Field("stdout", description="stdout, file or both")
    file_path: str = Field("logs/resource_adapters.log", description="Log file path")
    max_size_mb: int = Field(10, description="Rotate the log file at this size")
    backup_count: int = Field(5, description="Rotated files to keep")
    format: str = Field(
        "%(asctime)s - %(levelname)s - %(name)s [%(caller_info)s] - %(message)s",
        description="Log record format",
    )

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"Log level must be one of {valid_levels}")
        return v.upper()

    @field_validator("destination")
    @classmethod
    def validate_destination(cls, v: str) -> str:
        valid_destinations = ["stdout", "file", "both"]
        if v not in valid_destinations:
            raise ValueError(f"Log destination must be one of {valid_destinations}")
        return v


class TagsConfig(BaseModel):
    """Provider-level tag settings."""

    default_tags: Dict[str, str] = Field(default_factory=dict, description="Tags applied to every resource")
    ignore_key_prefixes: List[str] = Field(
        default_factory=lambda: ["aws:"], description="Tag key prefixes never read or written"
    )


class OperationTimeouts(BaseModel):
    """Per-operation deadlines in seconds."""

    create: Optional[float] = None
    read: Optional[float] = None
    update: Optional[float] = None
    delete: Optional[float] = None

    @model_validator(mode="after")
    def validate_positive(self) -> "OperationTimeouts":
        for name in ("create", "read", "update", "delete"):
            value = getattr(self, name)
            if value is not None and value <= 0:
                raise ValueError(f"{name} timeout must be positive")
        return self


class TimeoutsConfig(BaseModel):
    """Timeout overrides keyed by resource type name."""

    resources: Dict[str, OperationTimeouts] = Field(default_factory=dict)


class SweepConfig(BaseModel):
    """Sweeper settings."""

    page_size: Optional[int] = Field(None, description="Items requested per list page")
    resource_types: List[str] = Field(default_factory=list, description="Types swept when none are given")

    @field_validator("page_size")
    @classmethod
    def validate_page_size(cls, v: Optional[int]) -> Optional[int]:
        if v is not None and v < 1:
            raise ValueError("page_size must be at least 1")
        return v


class AppConfig(BaseModel):
    """Application configuration."""

    aws: AWSConfig = Field(default_factory=lambda: AWSConfig())
    logging: LoggingConfig = Field(default_factory=lambda: LoggingConfig())
    tags: TagsConfig = Field(default_factory=lambda: TagsConfig())
    timeouts: TimeoutsConfig = Field(default_factory=lambda: TimeoutsConfig())
    sweep: SweepConfig = Field(default_factory=lambda: SweepConfig())
