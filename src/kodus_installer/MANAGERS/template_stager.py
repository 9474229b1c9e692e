"""
Staging of the bundled compose manifest and lookup of bundled scripts.
"""
import logging
import os
import shutil
from typing import Iterable, Optional

from ..CONFIG.defaults import COMPOSE_FILE_NAME, SETUP_SCRIPT_NAME
from ..exceptions import TemplateError
from ..PARSERS.compose_parser import ComposeManifest, ComposeParser

logger = logging.getLogger(__name__)

PACKAGE_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
TEMPLATES_DIR = os.path.join(PACKAGE_ROOT, "TEMPLATES")
SCRIPTS_DIR = os.path.join(PACKAGE_ROOT, "SCRIPTS")


class TemplateStager:
    """
    Copies the bundled compose manifest into the target directory.
    """
    def __init__(self, templates_dir: str = TEMPLATES_DIR, scripts_dir: str = SCRIPTS_DIR):
        """
        :param templates_dir: Directory holding the bundled docker-compose.yml.
        :param scripts_dir: Directory holding the bundled shell scripts.
        """
        self.templates_dir = templates_dir
        self.scripts_dir = scripts_dir
        self.parser = ComposeParser()

    @property
    def compose_template(self) -> str:
        return os.path.join(self.templates_dir, COMPOSE_FILE_NAME)

    def stage(self, target_dir: str,
              required_services: Iterable[str] = (),
              required_networks: Iterable[str] = ()) -> ComposeManifest:
        """
        Validates the bundled manifest and copies it verbatim to ``target_dir``.

        An existing docker-compose.yml in ``target_dir`` is replaced.

        :param target_dir: Directory the stack will be started from.
        :param required_services: Services that must be defined in the manifest.
        :param required_networks: Networks the manifest must declare as external.
        :return: The parsed manifest.
        :raises TemplateError: If the manifest is missing, malformed or incomplete.
        """
        manifest = self.parser.parse(self.compose_template)

        missing = [name for name in required_services if name not in manifest.services]
        if missing:
            raise TemplateError(
                f"Compose template does not define required services: {', '.join(missing)}"
            )
        missing = [name for name in required_networks if name not in manifest.external_networks]
        if missing:
            raise TemplateError(
                f"Compose template does not declare external networks: {', '.join(missing)}"
            )

        os.makedirs(target_dir, exist_ok=True)
        destination = os.path.join(target_dir, COMPOSE_FILE_NAME)
        if os.path.abspath(destination) != os.path.abspath(self.compose_template):
            shutil.copyfile(self.compose_template, destination)
        logger.info("Staged %s into %s", COMPOSE_FILE_NAME, target_dir)
        return manifest

    def setup_script(self, name: str = SETUP_SCRIPT_NAME) -> Optional[str]:
        """
        Returns the path of a bundled script, or None if it is not shipped.
        """
        path = os.path.join(self.scripts_dir, name)
        return path if os.path.isfile(path) else None
