"""Structural contracts for components that plug into a servicekit service.

These are shapes only. An external MQ dispatcher or cron scheduler accepts
objects matching them as registration input; nothing here schedules or
invokes a handler.

Dispatchers are expected to:

- treat handler and cronjob names as unique within their domain;
- trigger an interval cronjob on each listed interval independently;
- trigger a clock cronjob whenever any listed clockspec matches, using
  crontab(5) matching with a leading seconds field.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Sequence
from typing import Literal, Protocol, TypeAlias, TypeVar, runtime_checkable

ResourcesT = TypeVar("ResourcesT")

# ==============================================================================
# Messages
# ==============================================================================


@runtime_checkable
class MQEventHandler(Protocol[ResourcesT]):
    """Handles events arriving on one or more routing-key bindings.

    The handler returns ``True`` when the event was handled and ``False``
    when the dispatcher should treat it as failed.
    """

    name: str
    bindings: Sequence[str]
    handler: Callable[[object, ResourcesT], Awaitable[bool]]


# ==============================================================================
# Cron
# ==============================================================================

Second: TypeAlias = str
Minute: TypeAlias = str
Hour: TypeAlias = str
DayOfMonth: TypeAlias = str
Month: TypeAlias = str
DayOfWeek: TypeAlias = str

# crontab(5) fields with an extra leading seconds field
Clockspec: TypeAlias = tuple[Second, Minute, Hour, DayOfMonth, Month, DayOfWeek]


@runtime_checkable
class IntervalCronjob(Protocol[ResourcesT]):
    """Runs every time any of the given intervals (in ms) elapses."""

    name: str
    type: Literal["interval"]
    interval_ms: float | Sequence[float]
    handler: Callable[[ResourcesT], Awaitable[bool]]


@runtime_checkable
class ClockCronjob(Protocol[ResourcesT]):
    """Runs whenever any of the given clockspecs matches."""

    name: str
    type: Literal["clock"]
    clockspec: Clockspec | Sequence[Clockspec]
    handler: Callable[[ResourcesT], Awaitable[bool]]


Cronjob: TypeAlias = IntervalCronjob[ResourcesT] | ClockCronjob[ResourcesT]

# ==============================================================================
# Jobs
# ==============================================================================


@runtime_checkable
class JobRetryPolicy(Protocol):
    """Exponential backoff parameters consumed by a job executor.

    ``JobManagerConfig`` satisfies this protocol.
    """

    @property
    def initial_job_wait_ms(self) -> float | None: ...

    @property
    def max_job_wait_ms(self) -> float | None: ...
