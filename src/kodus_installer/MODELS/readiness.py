"""
Models for service readiness probes and log matching rules.
"""
from enum import Enum
from typing import Dict, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

from ..CONFIG.defaults import DEFAULT_MAX_ATTEMPTS, DEFAULT_POLL_INTERVAL


class ProbeState(str, Enum):
    """
    Lifecycle of a readiness probe. READY and FAILED are terminal.
    """
    WAITING = "waiting"
    READY = "ready"
    FAILED = "failed"


class ReadinessProbe(BaseModel):
    """
    Waits for ``success_marker`` to appear in the accumulated logs of ``service``.
    """
    model_config = ConfigDict(frozen=True)

    service: str
    success_marker: str
    max_attempts: int = Field(default=DEFAULT_MAX_ATTEMPTS, ge=1)
    interval: float = Field(default=DEFAULT_POLL_INTERVAL, ge=0)


class ReadinessResult(BaseModel):
    """
    Outcome of running a probe to completion.
    """
    service: str
    state: ProbeState
    attempts: int


class LogRules(BaseModel):
    """
    Declarative log matching rules.

    ``success_markers`` maps a service to the substring that proves it is up;
    ``failure_markers`` apply to any service and are checked on their own,
    so a failure is reported even when a success marker is also present.
    """
    model_config = ConfigDict(frozen=True)

    success_markers: Dict[str, str] = Field(default_factory=dict)
    failure_markers: Tuple[str, ...] = ()

    def find_failure(self, logs: str) -> Optional[str]:
        """
        Returns the first failure marker contained in ``logs``, if any.
        """
        for marker in self.failure_markers:
            if marker in logs:
                return marker
        return None

    def is_ready(self, service: str, logs: str) -> bool:
        """
        True when the service's success marker is in ``logs``.
        """
        marker = self.success_markers.get(service)
        return bool(marker) and marker in logs

    def probe_for(self, service: str, max_attempts: int = DEFAULT_MAX_ATTEMPTS,
                  interval: float = DEFAULT_POLL_INTERVAL) -> ReadinessProbe:
        """
        Builds a readiness probe for a service that has a success marker.

        :raises KeyError: If no success marker is registered for ``service``.
        """
        return ReadinessProbe(
            service=service,
            success_marker=self.success_markers[service],
            max_attempts=max_attempts,
            interval=interval,
        )
