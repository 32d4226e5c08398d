"""servicekit Service Lifecycle Gate.

Gates process startup behind an explicit readiness signal with a deadline.
The gate arms a timer on the running event loop when it is created; startup
code marks success with ``initialized(True)``. If the deadline elapses first,
the readiness future fails with :class:`InitializationTimeoutError`, which the
owning process is expected to treat as fatal.
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from enum import StrEnum
import logging
from typing import Any, Protocol

from servicekit.core.exceptions import (
    MILLISECONDS_PER_SECOND,
    InitializationFailedError,
    InitializationTimeoutError,
)
from servicekit.startup.validation import validate_service_manager_config

logger = logging.getLogger(__name__)


class GateState(StrEnum):
    """Lifecycle gate states. INITIALIZED and FAILED are terminal."""

    PENDING = "pending"
    INITIALIZED = "initialized"
    FAILED = "failed"


class SupportsInitializationTimeout(Protocol):
    initialization_timeout_ms: float


class ServiceLifecycleGate:
    """One-shot readiness signal guarded by a deadline timer.

    Must be created while an asyncio event loop is running. All state changes
    happen on the loop thread, either in :meth:`signal_success`,
    :meth:`signal_failure` or in the timer callback.
    """

    def __init__(
        self, config: SupportsInitializationTimeout | Mapping[str, Any]
    ) -> None:
        """Arm the initialization deadline.

        Args:
            config: A ``ServiceManagerConfig`` (or anything exposing
                ``initialization_timeout_ms``), or a raw mapping that is
                validated as one.

        Raises:
            ConfigValidationError: If a raw mapping is not a valid
                service-manager configuration.
            RuntimeError: If no event loop is running.
        """
        if isinstance(config, Mapping):
            config = validate_service_manager_config(config).unwrap()

        self.timeout_ms: float = config.initialization_timeout_ms
        self._loop = asyncio.get_running_loop()
        self._state = GateState.PENDING
        self._future: asyncio.Future[None] = self._loop.create_future()
        self._timer: asyncio.TimerHandle | None = self._loop.call_later(
            self.timeout_ms / MILLISECONDS_PER_SECOND, self._on_deadline
        )
        logger.debug("Initialization deadline armed for %.0fms", self.timeout_ms)

    @property
    def state(self) -> GateState:
        return self._state

    @property
    def readiness(self) -> asyncio.Future[None]:
        """Future resolved on success or failed on timeout/explicit failure."""
        return self._future

    async def wait_ready(self) -> None:
        """Wait until the gate resolves; re-raise its failure if it failed.

        Cancelling the waiting task does not cancel the shared future.
        """
        await asyncio.shield(self._future)

    def signal_success(self) -> None:
        """Mark initialization as complete. No-op once the gate has resolved."""
        if self._state is GateState.FAILED:
            logger.warning(
                "Initialization signaled after the gate had already failed; ignoring"
            )
            return
        if self._state is GateState.INITIALIZED:
            return

        self._clear_timer()
        self._state = GateState.INITIALIZED
        if not self._future.done():
            self._future.set_result(None)
        logger.info("Service initialized")

    def signal_failure(self, error: BaseException | None = None) -> None:
        """Mark initialization as failed. No-op once the gate has resolved."""
        if self._state is not GateState.PENDING:
            logger.warning(
                "Initialization failure signaled after the gate resolved (%s); ignoring: %r",
                self._state.value,
                error,
            )
            return

        self._fail(error or InitializationFailedError())

    def initialized(self, is_initialized: bool | None = None) -> bool:
        """Query or set the initialization state.

        Called with no argument, returns whether initialization has been
        signaled, without side effects. Called with ``True``, signals success
        (idempotently) and returns ``True``.
        """
        if is_initialized is None:
            return self._state is GateState.INITIALIZED
        if is_initialized is not True:
            msg = f"initialized() only accepts True, got {is_initialized!r}"
            raise ValueError(msg)

        self.signal_success()
        return True

    def _clear_timer(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def _fail(self, error: BaseException) -> None:
        self._clear_timer()
        self._state = GateState.FAILED
        if not self._future.done():
            self._future.set_exception(error)

    def _on_deadline(self) -> None:
        self._timer = None
        if self._state is not GateState.PENDING:
            return
        error = InitializationTimeoutError(self.timeout_ms)
        logger.error("%s", error)
        self._fail(error)


@dataclass(frozen=True)
class ServiceManager:
    """The dependency handed to startup code.

    Attributes:
        readiness: Future resolved when the service is initialized, or failed
            with ``InitializationTimeoutError`` when the deadline elapses.
        initialized: Query (no argument) or signal (``True``) initialization.
    """

    readiness: asyncio.Future[None]
    initialized: Callable[..., bool]


def service_management(
    config: SupportsInitializationTimeout | Mapping[str, Any],
) -> ServiceManager:
    """Create a lifecycle gate and return its two-member dependency."""
    gate = ServiceLifecycleGate(config)
    return ServiceManager(readiness=gate.readiness, initialized=gate.initialized)
