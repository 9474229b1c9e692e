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
Launching the compose stack and verifying that its services came up.
"""
import logging
import time
from typing import Callable, Iterable, List, Optional, Sequence

from ..CONFIG.defaults import (
    APPLICATION_LOG_TAIL,
    APPLICATION_SERVICE,
    CRITICAL_ERRORS,
    DATABASE_CONNECTION_ERRORS,
    DEFAULT_MAX_ATTEMPTS,
    DEFAULT_POLL_INTERVAL,
    ENV_FILE_NAME,
    READINESS_MARKERS,
)
from ..exceptions import CommandError, CriticalLogError, ReadinessTimeoutError
from ..MODELS.readiness import LogRules, ReadinessProbe, ReadinessResult
from ..RUNNERS.docker_client import DockerClient
from ..UTILS.report_templates import render_hints
from .health_monitor import HealthMonitor

logger = logging.getLogger(__name__)


class ServiceOrchestrator:
    """
    Starts the stack and checks it in a fixed sequence: dependency readiness,
    critical errors in the application logs, database setup, and a final
    database connection check.
    """
    def __init__(self,
                 docker: DockerClient,
                 rules: Optional[LogRules] = None,
                 max_attempts: int = DEFAULT_MAX_ATTEMPTS,
                 interval: float = DEFAULT_POLL_INTERVAL,
                 sleep: Callable[[float], None] = time.sleep,
                 on_attempt: Optional[Callable[[ReadinessProbe, int], None]] = None,
                 env_file: str = ENV_FILE_NAME):
        """
        Initializes the orchestrator.

        :param docker: Client for docker-compose commands.
        :param rules: Readiness and critical-error markers.
        :param max_attempts: Attempt budget per readiness probe.
        :param interval: Seconds between readiness attempts.
        :param sleep: Sleep function used between attempts.
        :param on_attempt: Progress callback for readiness attempts.
        :param env_file: Name of the generated env file, for hints.
        """
        self.docker = docker
        self.rules = rules or LogRules(
            success_markers=dict(READINESS_MARKERS),
            failure_markers=CRITICAL_ERRORS,
        )
        self.max_attempts = max_attempts
        self.interval = interval
        self.env_file = env_file
        self.health_monitor = HealthMonitor(
            self.docker.compose_logs, self.rules, sleep=sleep, on_attempt=on_attempt
        )

    @property
    def compose_display(self) -> str:
        return " ".join(self.docker.compose_argv)

    def probes(self, services: Optional[Iterable[str]] = None) -> List[ReadinessProbe]:
        """
        Builds readiness probes, in order, for ``services`` (all rule services by default).
        """
        names = list(self.rules.success_markers) if services is None else list(services)
        return [self.rules.probe_for(name, self.max_attempts, self.interval) for name in names]

    def up(self) -> None:
        """
        Starts all containers in the background.

        :raises CommandError: If docker-compose fails.
        """
        logger.info("Starting containers")
        self.docker.compose_up()

    def wait_for(self, probe: ReadinessProbe) -> ReadinessResult:
        """
        Waits for a single dependency.

        :raises ReadinessTimeoutError: With troubleshooting hints, on timeout.
        """
        try:
            return self.health_monitor.wait_for(probe)
        except ReadinessTimeoutError as e:
            e.hints = render_hints("service_timeout", service=probe.service,
                                   compose=self.compose_display)
            raise

    def wait_for_dependencies(self, probes: Sequence[ReadinessProbe]) -> List[ReadinessResult]:
        """
        Runs each probe to completion before starting the next one.
        """
        return [self.wait_for(probe) for probe in probes]

    def application_state(self, service: str = APPLICATION_SERVICE) -> Optional[str]:
        """
        Returns the container state reported by ``ps --format json``, if available.
        """
        try:
            status = self.docker.compose_status(service)
        except (CommandError, ValueError) as e:
            logger.info("Could not read %s status: %s", service, e)
            return None
        if not status:
            return None
        return status.get("State")

    def check_application_logs(self, service: str = APPLICATION_SERVICE) -> str:
        """
        Scans the tail of the application logs for critical error markers.

        This check runs once and is not retried. A critical marker fails the
        install even when a readiness marker appears in the same excerpt.

        :return: The log excerpt that was checked.
        :raises CriticalLogError: If a critical marker is present.
        :raises CommandError: If the logs cannot be fetched.
        """
        logs = self.docker.compose_logs(service, tail=APPLICATION_LOG_TAIL)
        marker = self.rules.find_failure(logs)
        if marker is not None:
            raise CriticalLogError(
                service, marker, logs,
                hints=render_hints(
                    "critical_log",
                    env_file=self.env_file,
                    compose=self.compose_display,
                    databases=list(self.rules.success_markers),
                ),
            )
        return logs

    def run_setup_script(self, script_path: str) -> str:
        """
        Runs the database setup script.

        :raises CommandError: If the script exits non-zero.
        """
        logger.info("Running %s", script_path)
        return self.docker.run_script(script_path)

    def verify_database_connection(self, service: str = APPLICATION_SERVICE) -> None:
        """
        Looks for database connection errors in the application logs after setup.

        :raises CriticalLogError: If one is found.
        """
        logs = self.docker.compose_logs(service, tail=APPLICATION_LOG_TAIL)
        post_setup = LogRules(failure_markers=DATABASE_CONNECTION_ERRORS)
        marker = post_setup.find_failure(logs)
        if marker is not None:
            raise CriticalLogError(
                service, marker, logs,
                hints=render_hints("database_connection", service=service,
                                   compose=self.compose_display),
            )
