"""
Reading and writing of flat KEY=value environment files.
"""
import io
import logging
import os
import shutil
from datetime import datetime, timezone
from typing import Dict, Optional

from dotenv import dotenv_values

from ..MODELS.install_config import ConfigurationMap

logger = logging.getLogger(__name__)


class EnvParser:
    """
    Parser for .env files.
    """
    @staticmethod
    def parse(env_path: str) -> Dict[str, str]:
        """
        Parses an .env file from a path. Keys without a value map to "".
        """
        with open(env_path) as f:
            return EnvParser.parse_from_string(f.read())

    @staticmethod
    def parse_from_string(content: str) -> Dict[str, str]:
        return {key: value or "" for key, value in dotenv_values(stream=io.StringIO(content)).items()}


def backup_timestamp(now: Optional[datetime] = None) -> str:
    """
    ISO-8601 UTC timestamp usable in a file name (``:`` and ``.`` become ``-``).
    """
    now = now or datetime.now(timezone.utc)
    stamp = now.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")
    return stamp.replace(":", "-").replace(".", "-")


class EnvFileWriter:
    """
    Writes a configuration map to disk, backing up any file it replaces.
    """
    def __init__(self, path: str):
        """
        :param path: Destination of the env file.
        """
        self.path = path

    def backup(self) -> Optional[str]:
        """
        Copies the current file to ``<name>.backup.<timestamp>``.

        :return: The backup path, or None when there was nothing to back up.
        """
        if not os.path.exists(self.path):
            return None
        backup_path = f"{self.path}.backup.{backup_timestamp()}"
        shutil.copy2(self.path, backup_path)
        logger.info("Backed up %s (%d keys) to %s",
                    self.path, len(EnvParser.parse(self.path)), backup_path)
        return backup_path

    def write(self, config: ConfigurationMap) -> Optional[str]:
        """
        Backs up the existing file, then overwrites it with ``config``.

        :return: The backup path, if a backup was made.
        """
        backup_path = self.backup()
        directory = os.path.dirname(self.path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        with open(self.path, 'w') as f:
            f.write(config.to_env_text())
        logger.debug("Wrote %d keys to %s", len(config), self.path)
        return backup_path
