"""Pydantic configuration models for the screening service."""

from typing import Optional

from pydantic import BaseModel, Field, field_validator

VALID_STORE_BACKENDS = {"firestore", "memory"}


class ServerConfig(BaseModel):
    """HTTP bind settings."""

    host: str = "0.0.0.0"
    port: int = 3000
    cors_origins: list[str] = Field(default_factory=lambda: ["*"])

    @field_validator("port")
    @classmethod
    def validate_port(cls, v: int) -> int:
        if not 1 <= v <= 65535:
            raise ValueError(f"Port out of range: {v}")
        return v


class ModelConfig(BaseModel):
    """Pretrained classifier location."""

    url: Optional[str] = None  # local path or http(s) URL
    input_size: int = Field(default=224, gt=0)


class StoreConfig(BaseModel):
    """Prediction store configuration."""

    backend: str = "firestore"
    project: Optional[str] = None  # None = use GOOGLE_CLOUD_PROJECT / ADC default
    database: Optional[str] = None
    collection: str = "predictions"

    @field_validator("backend")
    @classmethod
    def validate_backend(cls, v: str) -> str:
        if v not in VALID_STORE_BACKENDS:
            raise ValueError(f"Invalid store backend: {v}. Must be one of {VALID_STORE_BACKENDS}")
        return v


class LimitsConfig(BaseModel):
    """Request limits and classification threshold."""

    max_upload_bytes: int = Field(default=1_000_000, gt=0)
    confidence_threshold: float = Field(default=50.0, ge=0, le=100)


class LoggingConfig(BaseModel):
    level: str = "INFO"
    json_mode: bool = Field(default=False, alias="json")

    model_config = {"populate_by_name": True}


class ServiceConfig(BaseModel):
    """Root configuration model."""

    server: ServerConfig = Field(default_factory=ServerConfig)
    model: ModelConfig = Field(default_factory=ModelConfig)
    store: StoreConfig = Field(default_factory=StoreConfig)
    limits: LimitsConfig = Field(default_factory=LimitsConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    model_config = {"protected_namespaces": ()}

    @classmethod
    def from_dict(cls, data: dict) -> "ServiceConfig":
        """Create config from dictionary (e.g., loaded from YAML)."""
        return cls.model_validate(data)

    def to_dict(self) -> dict:
        """Convert to dictionary for YAML serialization."""
        return self.model_dump(mode="json", by_alias=True)
