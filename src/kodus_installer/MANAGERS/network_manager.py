"""
Provisioning of the named Docker networks the stack attaches to.
"""
import logging
from typing import Iterable, List

from ..RUNNERS.docker_client import DockerClient

logger = logging.getLogger(__name__)


class NetworkManager:
    """
    Ensures external Docker networks exist before the stack starts.
    """
    def __init__(self, docker: DockerClient):
        """
        Initializes the network manager.

        :param docker: Client used to inspect and create networks.
        """
        self.docker = docker

    def ensure_networks(self, names: Iterable[str]) -> List[str]:
        """
        Creates every network in ``names`` that does not exist yet.

        Existing networks are left untouched, so this is safe to re-run.

        :param names: Network names.
        :return: The networks that were created.
        :raises CommandError: If a network cannot be created.
        """
        created = []
        for name in names:
            if self.docker.network_exists(name):
                logger.debug("Network %s already exists", name)
                continue
            self.docker.create_network(name)
            logger.info("Created network %s", name)
            created.append(name)
        return created
