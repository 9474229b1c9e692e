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
Installer settings resolved from the process environment and an optional
``.kodus-installer.env`` file.
"""
import os
import shlex
from typing import Dict, List, Mapping, Optional

from dotenv import dotenv_values
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from ..exceptions import SettingsError
from .defaults import DEFAULT_MAX_ATTEMPTS, DEFAULT_POLL_INTERVAL

ENV_PREFIX = "KODUS_INSTALLER_"
SETTINGS_FILE = ".kodus-installer.env"


class InstallerSettings(BaseModel):
    """
    Tunables for a single installer run.
    """
    model_config = ConfigDict(frozen=True)

    log_level: str = "WARNING"
    docker_command: str = "docker"
    compose_command: str = "docker-compose"
    max_attempts: int = Field(default=DEFAULT_MAX_ATTEMPTS, ge=1)
    poll_interval: float = Field(default=DEFAULT_POLL_INTERVAL, ge=0)

    @property
    def docker_argv(self) -> List[str]:
        return shlex.split(self.docker_command)

    @property
    def compose_argv(self) -> List[str]:
        # "docker compose" (plugin) and "docker-compose" (standalone) both work
        return shlex.split(self.compose_command)


def load_settings(base_dir: str = ".",
                  environ: Optional[Mapping[str, str]] = None) -> InstallerSettings:
    """
    Builds settings from ``KODUS_INSTALLER_*`` variables.

    Values from the settings file in ``base_dir`` are read first; the process
    environment overrides them.

    :param base_dir: Directory that may contain ``.kodus-installer.env``.
    :param environ: Environment mapping, defaults to ``os.environ``.
    :return: The resolved settings.
    :raises SettingsError: If a value fails validation; the message names the variable.
    """
    merged: Dict[str, str] = {}

    file_path = os.path.join(base_dir, SETTINGS_FILE)
    if os.path.exists(file_path):
        for key, value in dotenv_values(file_path).items():
            if value is not None:
                merged[key] = value

    merged.update(os.environ if environ is None else environ)

    values = {}
    for field_name in InstallerSettings.model_fields:
        key = ENV_PREFIX + field_name.upper()
        if merged.get(key):
            values[field_name] = merged[key]

    try:
        return InstallerSettings(**values)
    except ValidationError as e:
        error = e.errors()[0]
        field_name = str(error["loc"][0])
        key = ENV_PREFIX + field_name.upper()
        raise SettingsError(
            f"Invalid value for {key}: {values.get(field_name)!r} ({error['msg']})",
            hints=[f"Fix or unset {key} in the environment or in {SETTINGS_FILE}"],
        ) from e
