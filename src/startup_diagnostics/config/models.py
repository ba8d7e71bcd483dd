"""Typed configuration models with Pydantic validation."""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, SecretStr, model_validator


class LoggingSettings(BaseModel):
    """Logging configuration."""

    model_config = ConfigDict(frozen=True)

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO", description="Log level"
    )
    format: Literal["json", "text"] = Field(default="json", description="Log output format")


class DatabaseSettings(BaseModel):
    """PostgreSQL connection settings used by the database probe."""

    model_config = ConfigDict(frozen=True)

    dsn: SecretStr = Field(..., min_length=1, description="PostgreSQL connection string")
    command_timeout_seconds: float = Field(
        default=10.0, gt=0, description="Command timeout in seconds"
    )


class PataviSettings(BaseModel):
    """Companion Patavi server endpoint and credentials."""

    model_config = ConfigDict(frozen=True)

    host: str = Field(..., min_length=1, description="Patavi server host")
    port: int = Field(default=3000, ge=1, le=65535, description="Patavi server port")
    path: str = Field(default="/", description="Request path probed on the Patavi server")
    auth_mode: Literal["api_key", "client_certificate"] = Field(
        default="api_key",
        description="Authenticate with a static API key header or a TLS client certificate",
    )
    api_key: SecretStr | None = Field(default=None, description="Patavi API key")
    client_key: Path | None = Field(default=None, description="Client private key file")
    client_crt: Path | None = Field(default=None, description="Client certificate file")
    ca: Path | None = Field(default=None, description="Certificate authority file")
    timeout_seconds: float = Field(default=10.0, gt=0.0, description="Request timeout")

    @model_validator(mode="after")
    def validate_path(self) -> PataviSettings:
        if not self.path.startswith("/"):
            raise ValueError("Patavi path must start with '/'")
        return self

    @property
    def url(self) -> str:
        return f"https://{self.host}:{self.port}{self.path}"


class BrokerSettings(BaseModel):
    """AMQP broker reachability settings."""

    model_config = ConfigDict(frozen=True)

    host: str = Field(..., min_length=1, description="Broker host, optionally with credentials")
    scheme: Literal["amqp", "amqps"] = Field(default="amqp", description="AMQP URL scheme")
    connect_timeout_seconds: float = Field(
        default=10.0,
        gt=0.0,
        description="Connect timeout in seconds",
    )

    @property
    def url(self) -> str:
        return f"{self.scheme}://{self.host}"


class ServerCertificateSettings(BaseModel):
    """Locations of the TLS material served by the Patavi server itself."""

    model_config = ConfigDict(frozen=True)

    base_dir: Path = Field(default=Path("."), description="Directory relative paths resolve from")
    server_key: Path = Field(default=Path("ssl/server-key.pem"), description="Server key")
    server_crt: Path = Field(default=Path("ssl/server-crt.pem"), description="Server certificate")
    ca: Path = Field(default=Path("ssl/ca-crt.pem"), description="Certificate authority")

    def resolve(self, path: Path) -> Path:
        return path if path.is_absolute() else self.base_dir / path


class DiagnosticsSettings(BaseModel):
    """Root settings for a startup diagnostics run."""

    model_config = ConfigDict(frozen=True)

    application: str = Field(..., min_length=1, description="Application identifier")
    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    database: DatabaseSettings | None = None
    patavi: PataviSettings | None = None
    broker: BrokerSettings | None = None
    certificates: ServerCertificateSettings = Field(default_factory=ServerCertificateSettings)
