"""servicekit Configuration Schema.

Pydantic models describing valid configuration values for a long-running
service. The models follow a few conventions rather than mandates: a service
that adopts them gets a validated, immutable configuration value and a set of
well-known sections that sibling subsystems (job executors, MQ consumers,
web listeners, database pools) can rely on.

Input keys are camelCase, as they appear in a parsed JSON-like document.
Python attributes are snake_case and may also be used as input keys.
"""

from __future__ import annotations

from collections.abc import Mapping
from enum import StrEnum
from typing import Annotated, Any, Literal

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    Strict,
    StrictStr,
    model_validator,
)
from pydantic.alias_generators import to_camel

# Constants
MAX_PORT = 65535
PRODUCTION_ENV_TYPES = frozenset({"prod", "production"})

Milliseconds = Annotated[float, Strict(), Field(ge=0)]
Port = Annotated[int, Strict(), Field(ge=0, le=MAX_PORT)]
NonEmptyStr = Annotated[StrictStr, Field(min_length=1)]


class LogLevel(StrEnum):
    """Valid log levels, ordered from least to most severe."""

    DEBUG = "debug"
    INFO = "info"
    NOTICE = "notice"
    WARNING = "warning"
    ERROR = "error"
    ALERT = "alert"
    CRITICAL = "critical"
    EMERGENCY = "emergency"


class SchemaModel(BaseModel):
    """Common settings for every configuration schema."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        extra="ignore",
    )

    @model_validator(mode="before")
    @classmethod
    def reject_duplicate_keys(cls, value: Any) -> Any:
        """Reject a field given both by its camelCase alias and its name."""
        if isinstance(value, Mapping):
            for name, field in cls.model_fields.items():
                alias = field.alias
                if alias and alias != name and alias in value and name in value:
                    msg = f"{alias} and {name} are the same setting; give only one"
                    raise ValueError(msg)
        return value


# ==============================================================================
# Optional sub-schemas
# ==============================================================================


class Listener(SchemaModel):
    """A listening port with an optional host.

    Accepts either a mapping or a ``[port]`` / ``[port, host]`` pair.
    """

    port: Port
    host: StrictStr | None = None

    @model_validator(mode="before")
    @classmethod
    def parse_pair(cls, value: Any) -> Any:
        """Turn a ``[port, host]`` pair into a mapping."""
        if isinstance(value, list | tuple):
            if not 1 <= len(value) <= 2:  # noqa: PLR2004
                msg = f"Listener must be a [port] or [port, host] pair, got {len(value)} items"
                raise ValueError(msg)
            port, *rest = value
            return {"port": port, "host": rest[0] if rest else None}
        return value

    def as_tuple(self) -> tuple[int, str | None]:
        return self.port, self.host


class WebServiceConfig(SchemaModel):
    """One or more listening ports, possibly the same port on several hosts."""

    listeners: list[Listener] = Field(
        ...,
        description="Ports (with optional hosts) the web service listens on",
        min_length=1,
    )


class ApiConfig(SchemaModel):
    """Basic API access: a key and secret plus a per-environment base URL."""

    key: StrictStr = Field(..., description="API key")
    secret: StrictStr = Field(..., description="API secret", repr=False)
    base_url: StrictStr = Field(..., description="Base URL of the API")


class MQConnectionConfig(SchemaModel):
    """AMQP broker connection settings."""

    protocol: Literal["amqp"] = Field(..., description="Broker protocol")
    hostname: StrictStr
    port: Port
    username: StrictStr
    password: StrictStr = Field(..., repr=False)
    locale: StrictStr
    vhost: StrictStr = Field(..., description="Virtual host")
    heartbeat: Annotated[float, Strict(), Field(ge=0)] = Field(
        ..., description="Heartbeat interval in seconds"
    )


class DatabaseConfig(SchemaModel):
    """Database connection settings, by host/port or by socket path."""

    host: StrictStr | None = None
    port: Port | None = None
    socket_path: StrictStr | None = None
    user: StrictStr
    password: StrictStr = Field(..., repr=False)
    database: StrictStr

    @model_validator(mode="after")
    def validate_endpoint(self) -> DatabaseConfig:
        """Require either a host or a socket path."""
        if self.host is None and self.socket_path is None:
            msg = "Either host or socketPath must be provided"
            raise ValueError(msg)
        return self


# ==============================================================================
# Composite constituents
# ==============================================================================


class LoggerConfig(SchemaModel):
    """A level at which to write logs and an optional log file."""

    log_level: LogLevel = Field(..., description="Minimum level to log")
    log_file_path: StrictStr | None = Field(
        default=None,
        description="Log file path; when absent logs are only written to stdout",
    )


class EnvironmentAwareConfig(SchemaModel):
    """Configuration that is aware of the environment it runs in."""

    env_type: StrictStr = Field(
        ..., description="Environment type, e.g. 'dev', 'qa', 'staging', 'prod'"
    )
    env_name: StrictStr = Field(
        ..., description="Specific environment name, e.g. 'demo1', 'prod'"
    )


class JobManagerConfig(SchemaModel):
    """Retry parameters for a job manager.

    An executor is expected to wait ``initial_job_wait_ms`` before the first
    retry and double the wait on each failed attempt, giving up once the wait
    would exceed ``max_job_wait_ms``. Absent values mean "executor default".
    """

    initial_job_wait_ms: Milliseconds | None = Field(
        default=None, description="Initial wait in ms before retrying a failed job"
    )
    max_job_wait_ms: Milliseconds | None = Field(
        default=None, description="Maximum wait in ms before giving up on a job"
    )

    @model_validator(mode="after")
    def validate_wait_bounds(self) -> JobManagerConfig:
        """Reject a maximum wait below the initial wait."""
        if (
            self.initial_job_wait_ms is not None
            and self.max_job_wait_ms is not None
            and self.max_job_wait_ms < self.initial_job_wait_ms
        ):
            msg = (
                f"maxJobWaitMs ({self.max_job_wait_ms}) must not be lower than "
                f"initialJobWaitMs ({self.initial_job_wait_ms})"
            )
            raise ValueError(msg)
        return self


class ServiceManagerConfig(SchemaModel):
    """Configuration for the service lifecycle gate."""

    initialization_timeout_ms: Annotated[float, Strict(), Field(gt=0)] = Field(
        ..., description="Maximum time in ms the service may take to initialize"
    )


class ServiceIdentity(SchemaModel):
    """The service name and its logger configuration."""

    service_name: NonEmptyStr = Field(..., description="The service name")
    logger: LoggerConfig = Field(..., description="Logger configuration")


class BaseConfig(
    EnvironmentAwareConfig,
    JobManagerConfig,
    ServiceManagerConfig,
    ServiceIdentity,
):
    """The composite service configuration.

    A value is valid only if it satisfies every constituent schema. Keys that
    no constituent knows about are kept, so services can extend the base
    configuration with their own sections (``web``, ``mq``, ``database``...).
    """

    model_config = ConfigDict(extra="allow")

    @property
    def service_manager(self) -> ServiceManagerConfig:
        """The slice consumed by the lifecycle gate."""
        return ServiceManagerConfig(
            initialization_timeout_ms=self.initialization_timeout_ms
        )

    @property
    def job_manager(self) -> JobManagerConfig:
        """The slice consumed by a job executor."""
        return JobManagerConfig(
            initial_job_wait_ms=self.initial_job_wait_ms,
            max_job_wait_ms=self.max_job_wait_ms,
        )

    def is_production(self) -> bool:
        """Check if running in a production environment."""
        return self.env_type.lower() in PRODUCTION_ENV_TYPES

    def get_startup_summary(self) -> dict[str, Any]:
        """Get a loggable summary of the configuration (no secrets)."""
        return {
            "service_name": self.service_name,
            "env_type": self.env_type,
            "env_name": self.env_name,
            "initialization_timeout_ms": self.initialization_timeout_ms,
            "initial_job_wait_ms": self.initial_job_wait_ms,
            "max_job_wait_ms": self.max_job_wait_ms,
            "log_level": self.logger.log_level.value,
            "log_file_path": self.logger.log_file_path,
            "extra_sections": sorted(self.model_extra or {}),
        }
