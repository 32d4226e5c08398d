"""servicekit Startup System.

Configuration validation and the initialization lifecycle gate that a service
passes through before it starts doing work.
"""

from __future__ import annotations

from servicekit.startup.config_schema import BaseConfig
from servicekit.startup.lifecycle import (
    GateState,
    ServiceLifecycleGate,
    ServiceManager,
    service_management,
)
from servicekit.startup.orchestrator import StartupOrchestrator, run_service
from servicekit.startup.validation import (
    ValidationResult,
    load_base_config,
    validate_base_config,
)

__all__ = [
    "BaseConfig",
    "GateState",
    "ServiceLifecycleGate",
    "ServiceManager",
    "StartupOrchestrator",
    "ValidationResult",
    "load_base_config",
    "run_service",
    "service_management",
    "validate_base_config",
]
