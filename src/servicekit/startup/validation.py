"""Structural validation of configuration values.

Each ``validate_*`` function is pure: it takes a value already parsed into a
generic structured form and returns a :class:`ValidationResult` holding either
the validated model or every field-level error found. Nothing here reads files
or environment variables.

The composite :class:`BaseConfig` is validated as an intersection: every
constituent schema checks the same raw value independently and their errors
are concatenated, so callers get complete diagnostics in one pass.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
import logging
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ValidationError

from servicekit.core.exceptions import ConfigValidationError, FieldError
from servicekit.startup.config_schema import (
    ApiConfig,
    BaseConfig,
    DatabaseConfig,
    EnvironmentAwareConfig,
    JobManagerConfig,
    LoggerConfig,
    MQConnectionConfig,
    ServiceIdentity,
    ServiceManagerConfig,
    WebServiceConfig,
)

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)

BASE_CONFIG_CONSTITUENTS: tuple[tuple[str, type[BaseModel]], ...] = (
    ("environment", EnvironmentAwareConfig),
    ("job_manager", JobManagerConfig),
    ("service_manager", ServiceManagerConfig),
    ("service_identity", ServiceIdentity),
)


@dataclass(frozen=True)
class ValidationResult(Generic[ModelT]):
    """Either a validated value or the errors that prevented validation."""

    value: ModelT | None = None
    errors: tuple[FieldError, ...] = ()

    @property
    def ok(self) -> bool:
        return self.value is not None and not self.errors

    def unwrap(self) -> ModelT:
        """Return the validated value or raise ``ConfigValidationError``."""
        if self.value is None or self.errors:
            raise ConfigValidationError(self.errors)
        return self.value


def _format_loc(loc: tuple[int | str, ...]) -> str:
    return ".".join(str(part) for part in loc)


def _field_errors(constituent: str, exc: ValidationError) -> list[FieldError]:
    return [
        FieldError(
            constituent=constituent,
            path=_format_loc(error["loc"]),
            message=error["msg"],
            error_type=error["type"],
        )
        for error in exc.errors()
    ]


def _not_a_mapping(constituent: str, raw: Any) -> FieldError:
    return FieldError(
        constituent=constituent,
        path="",
        message=f"Input should be a mapping, got {type(raw).__name__}",
        error_type="mapping_type",
    )


def validate_model(
    model: type[ModelT], raw: Any, *, constituent: str | None = None
) -> ValidationResult[ModelT]:
    """Validate ``raw`` against a single schema."""
    name = constituent or model.__name__
    if not isinstance(raw, Mapping):
        return ValidationResult(errors=(_not_a_mapping(name, raw),))

    try:
        return ValidationResult(value=model.model_validate(dict(raw)))
    except ValidationError as e:
        return ValidationResult(errors=tuple(_field_errors(name, e)))


def validate_base_config(raw: Any) -> ValidationResult[BaseConfig]:
    """Validate the composite configuration against every constituent."""
    if not isinstance(raw, Mapping):
        return ValidationResult(errors=(_not_a_mapping("base", raw),))

    errors: list[FieldError] = []
    for name, model in BASE_CONFIG_CONSTITUENTS:
        errors.extend(validate_model(model, raw, constituent=name).errors)

    if errors:
        return ValidationResult(errors=tuple(errors))

    return validate_model(BaseConfig, raw, constituent="base")


def validate_service_manager_config(
    raw: Any,
) -> ValidationResult[ServiceManagerConfig]:
    return validate_model(ServiceManagerConfig, raw, constituent="service_manager")


def validate_logger_config(raw: Any) -> ValidationResult[LoggerConfig]:
    return validate_model(LoggerConfig, raw, constituent="logger")


def validate_web_service_config(raw: Any) -> ValidationResult[WebServiceConfig]:
    return validate_model(WebServiceConfig, raw, constituent="web")


def validate_api_config(raw: Any) -> ValidationResult[ApiConfig]:
    return validate_model(ApiConfig, raw, constituent="api")


def validate_mq_connection_config(raw: Any) -> ValidationResult[MQConnectionConfig]:
    return validate_model(MQConnectionConfig, raw, constituent="mq")


def validate_database_config(raw: Any) -> ValidationResult[DatabaseConfig]:
    return validate_model(DatabaseConfig, raw, constituent="database")


def load_base_config(raw: Any) -> BaseConfig:
    """Validate the composite configuration with clear error reporting."""
    result = validate_base_config(raw)

    if not result.ok:
        logger.error("Configuration validation failed:")
        for error in result.errors:
            logger.error("  • %s", error)
        raise ConfigValidationError(result.errors)

    config = result.unwrap()
    logger.info("Configuration loaded for service %s", config.service_name)
    return config
