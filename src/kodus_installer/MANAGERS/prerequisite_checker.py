"""
Checks that the tools the installer shells out to are available.
"""
import logging

from ..CONFIG.defaults import DOCKER_INSTALL_URL
from ..exceptions import CommandError, PrerequisiteError
from ..RUNNERS.docker_client import DockerClient

logger = logging.getLogger(__name__)


class PrerequisiteChecker:
    """
    Verifies the container runtime is installed. Failures are not retried.
    """
    def __init__(self, docker: DockerClient):
        self.docker = docker

    def check_docker(self) -> str:
        """
        Runs ``docker --version``.

        :return: The version string reported by Docker.
        :raises PrerequisiteError: If Docker is missing or broken.
        """
        try:
            version = self.docker.version()
        except CommandError as e:
            raise PrerequisiteError(
                "Docker is not installed",
                hints=[f"Please install Docker first: {DOCKER_INSTALL_URL}"],
            ) from e
        logger.info("Found %s", version)
        return version
