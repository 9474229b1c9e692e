# Copyright 2024 Michael Maillet, Damien Davison, Sacha Davison
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""
Readiness polling for services, based on markers in their accumulated logs.
"""
import logging
import time
from typing import Callable, Dict, Optional

from tenacity import (
    RetryCallState,
    RetryError,
    Retrying,
    retry_if_exception_type,
    retry_if_result,
    stop_after_attempt,
    wait_fixed,
)

from ..exceptions import CommandError, ReadinessTimeoutError
from ..MODELS.readiness import LogRules, ProbeState, ReadinessProbe, ReadinessResult

logger = logging.getLogger(__name__)

LogSource = Callable[[str], str]


class HealthMonitor:
    """
    Runs readiness probes one at a time until each is READY or FAILED.

    Every probe gets the same bounded retry policy: up to ``max_attempts``
    log fetches spaced ``interval`` seconds apart. A failed log fetch counts
    as an attempt and is retried like a missing marker.
    """

    def __init__(
        self,
        log_source: LogSource,
        rules: LogRules,
        sleep: Callable[[float], None] = time.sleep,
        on_attempt: Optional[Callable[[ReadinessProbe, int], None]] = None,
    ):
        """
        Initializes the health monitor.

        :param log_source: Returns the accumulated logs of a service.
        :param rules: Decides from the logs whether a service is ready.
        :param sleep: Called between attempts.
        :param on_attempt: Notified before each retry with the attempt just made.
        """
        self.log_source = log_source
        self.rules = rules
        self.sleep = sleep
        self.on_attempt = on_attempt
        self._states: Dict[str, ProbeState] = {}

    def get_state(self, service: str) -> Optional[ProbeState]:
        """
        Get the current state of a probed service, None if it was never probed.
        """
        return self._states.get(service)

    def wait_for(self, probe: ReadinessProbe) -> ReadinessResult:
        """
        Polls ``probe.service`` until the rules consider it ready.

        Probes are expected to come from ``rules.probe_for``.

        Args:
            probe: The probe to run.

        Returns:
            ReadinessResult in state READY with the number of attempts used.

        Raises:
            ReadinessTimeoutError: If the attempt budget runs out.
            KeyError: If the rules have no success marker for the service.
        """
        if probe.service not in self.rules.success_markers:
            raise KeyError(probe.service)
        self._states[probe.service] = ProbeState.WAITING
        attempts = 0

        def check() -> bool:
            nonlocal attempts
            attempts += 1
            logs = self.log_source(probe.service)
            return self.rules.is_ready(probe.service, logs)

        def before_sleep(retry_state: RetryCallState) -> None:
            logger.debug(
                "%s not ready after attempt %d/%d",
                probe.service, retry_state.attempt_number, probe.max_attempts,
            )
            if self.on_attempt:
                self.on_attempt(probe, retry_state.attempt_number)

        retrying = Retrying(
            stop=stop_after_attempt(probe.max_attempts),
            wait=wait_fixed(probe.interval),
            retry=retry_if_result(lambda ready: not ready)
            | retry_if_exception_type(CommandError),
            sleep=self.sleep,
            before_sleep=before_sleep,
        )

        try:
            retrying(check)
        except RetryError as e:
            self._states[probe.service] = ProbeState.FAILED
            logger.info("%s failed readiness after %d attempts", probe.service, attempts)
            raise ReadinessTimeoutError(probe.service, attempts) from e

        self._states[probe.service] = ProbeState.READY
        logger.info("%s ready after %d attempts", probe.service, attempts)
        return ReadinessResult(service=probe.service, state=ProbeState.READY, attempts=attempts)
