"""servicekit Startup Orchestrator.

Drives a service from a raw configuration value to a ready process:
configuration validation, logging setup, the initialization deadline and the
service's own startup coroutine.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
import logging
from typing import Any

from servicekit.core.exceptions import ConfigValidationError, LifecycleError
from servicekit.core.logging_config import setup_logging
from servicekit.startup.config_schema import BaseConfig
from servicekit.startup.lifecycle import (
    GateState,
    ServiceLifecycleGate,
    ServiceManager,
)
from servicekit.startup.validation import load_base_config
from servicekit.version import get_version

logger = logging.getLogger(__name__)

EXIT_SUCCESS = 0
EXIT_FAILURE = 1
EXIT_INTERRUPTED = 130

Initializer = Callable[[BaseConfig, ServiceManager], Awaitable[None]]


class StartupOrchestrator:
    """Orchestrates service startup behind the initialization deadline.

    The initializer receives the validated configuration and the
    ``ServiceManager`` dependency and must call ``initialized(True)`` once the
    service is ready to work. After readiness the orchestrator waits for the
    initializer to return, and an initializer that raises after signaling
    readiness still fails startup. On failure the initializer is cancelled.
    """

    def __init__(
        self,
        raw_config: Any,
        initializer: Initializer,
        *,
        configure_logging: bool = True,
    ) -> None:
        """Initialize startup orchestrator.

        Args:
            raw_config: Configuration already parsed into a generic structure
            initializer: Service startup coroutine function
            configure_logging: If True, apply the configured logger settings
        """
        self.raw_config = raw_config
        self.initializer = initializer
        self.configure_logging = configure_logging

        self.config: BaseConfig | None = None
        self.gate: ServiceLifecycleGate | None = None
        self.startup_errors: list[str] = []

    async def orchestrate_startup(self) -> tuple[bool, BaseConfig | None]:
        """Orchestrate the complete startup process.

        Returns:
            Tuple of (success, config). Config is None if validation fails.
        """
        try:
            self.config = load_base_config(self.raw_config)
        except ConfigValidationError as e:
            self.startup_errors.extend(str(error) for error in e.errors)
            return False, None

        if self.configure_logging:
            setup_logging(self.config.logger, self.config.service_name)

        logger.info(
            "Starting %s (%s/%s) with servicekit %s",
            self.config.service_name,
            self.config.env_type,
            self.config.env_name,
            get_version(),
        )
        logger.debug("Startup configuration: %s", self.config.get_startup_summary())

        self.gate = ServiceLifecycleGate(self.config.service_manager)
        manager = ServiceManager(
            readiness=self.gate.readiness, initialized=self.gate.initialized
        )
        init_task = asyncio.create_task(
            self._run_initializer(self.config, self.gate, manager)
        )

        try:
            await self.gate.wait_ready()
        except Exception as e:
            self.startup_errors.append(str(e))
            if isinstance(e, LifecycleError):
                logger.critical(
                    "Service %s failed to start: %s", self.config.service_name, e
                )
            else:
                logger.critical(
                    "Service %s failed to start", self.config.service_name, exc_info=e
                )
            init_task.cancel()
            await asyncio.gather(init_task, return_exceptions=True)
            return False, self.config

        logger.info("Service %s is ready", self.config.service_name)
        try:
            await init_task
        except Exception as e:
            self.startup_errors.append(str(e))
            logger.critical(
                "Service %s failed after reporting readiness",
                self.config.service_name,
                exc_info=e,
            )
            return False, self.config
        return True, self.config

    async def _run_initializer(
        self, config: BaseConfig, gate: ServiceLifecycleGate, manager: ServiceManager
    ) -> None:
        try:
            await self.initializer(config, manager)
        except Exception as e:
            if gate.state is not GateState.PENDING:
                raise
            gate.signal_failure(e)

    def run(self) -> int:
        """Run startup to completion and return a process exit code."""
        try:
            success, _config = asyncio.run(self.orchestrate_startup())
        except KeyboardInterrupt:
            logger.warning("Startup cancelled")
            return EXIT_INTERRUPTED
        return EXIT_SUCCESS if success else EXIT_FAILURE


def run_service(
    raw_config: Any, initializer: Initializer, *, configure_logging: bool = True
) -> int:
    """Start a service and return an exit code suitable for ``sys.exit``."""
    orchestrator = StartupOrchestrator(
        raw_config, initializer, configure_logging=configure_logging
    )
    return orchestrator.run()
