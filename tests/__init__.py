"""servicekit Test Suite.

- core/: exceptions, logging configuration and component contracts
- startup/: configuration schema, validation, lifecycle gate and orchestrator
"""

from __future__ import annotations
