"""
Thin wrapper over the docker and docker-compose command line tools.
"""
import json
import os
from typing import Any, Dict, List, Optional

from ..CONFIG.defaults import COMPOSE_COMMAND_VARIABLE
from .process_runner import ProcessRunner


class DockerClient:
    """
    Builds docker / docker-compose invocations and runs them through a ProcessRunner.
    """
    def __init__(self,
                 runner: Optional[ProcessRunner] = None,
                 docker_argv: Optional[List[str]] = None,
                 compose_argv: Optional[List[str]] = None):
        """
        Initializes the client.

        :param runner: Runner used to execute commands.
        :param docker_argv: Base command for the docker CLI.
        :param compose_argv: Base command for compose, e.g. ``["docker", "compose"]``.
        """
        self.runner = runner or ProcessRunner()
        self.docker_argv = docker_argv or ["docker"]
        self.compose_argv = compose_argv or ["docker-compose"]

    def version(self) -> str:
        return self.runner.run(self.docker_argv + ["--version"]).strip()

    def network_exists(self, name: str) -> bool:
        return self.runner.succeeds(self.docker_argv + ["network", "inspect", name])

    def create_network(self, name: str) -> None:
        self.runner.run(self.docker_argv + ["network", "create", name])

    def compose_up(self) -> str:
        return self.runner.run(self.compose_argv + ["up", "-d"])

    def compose_logs(self, service: str, tail: Optional[int] = None) -> str:
        """
        Fetches the accumulated logs of a compose service.

        :param service: Compose service name.
        :param tail: Only return the last ``tail`` lines.
        """
        command = self.compose_argv + ["logs"]
        if tail is not None:
            command.append(f"--tail={tail}")
        command.append(service)
        return self.runner.run(command)

    def compose_status(self, service: str) -> Optional[Dict[str, Any]]:
        """
        Returns the ``ps --format json`` record of a service, or None if it has no container.

        Older compose releases print one JSON array, newer ones one object per line.
        """
        output = self.runner.run(self.compose_argv + ["ps", service, "--format", "json"]).strip()
        if not output:
            return None
        if output.startswith("["):
            records = json.loads(output)
        else:
            records = [json.loads(line) for line in output.splitlines() if line.strip()]
        record = records[0] if isinstance(records, list) and records else None
        return record if isinstance(record, dict) else None

    def run_script(self, script_path: str) -> str:
        """
        Runs a shell script with the compose command exported for it to reuse.
        """
        env = dict(os.environ)
        env[COMPOSE_COMMAND_VARIABLE] = " ".join(self.compose_argv)
        return self.runner.run(["sh", script_path], env=env)
