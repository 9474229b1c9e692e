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
Parser for the bundled Docker Compose manifest.
"""
from typing import Any, Dict, List

import yaml
from pydantic import BaseModel

from ..exceptions import TemplateError


class ComposeManifest(BaseModel):
    """
    The parts of a compose file the installer cares about.
    """
    services: List[str] = []
    external_networks: List[str] = []


class ComposeParser:
    """
    Parser for docker-compose.yml files.
    """
    def parse(self, compose_path: str) -> ComposeManifest:
        """
        Parses a compose file from a path.

        :param compose_path: Path to the compose file.
        :return: Parsed manifest.
        :raises TemplateError: If the file is missing or not a compose mapping.
        """
        try:
            with open(compose_path, 'r') as f:
                content = f.read()
        except OSError as e:
            raise TemplateError(f"Cannot read compose file {compose_path}: {e}") from e
        return self.parse_from_string(content)

    def parse_from_string(self, content: str) -> ComposeManifest:
        """
        Parses a compose file from a string.

        :param content: YAML content of the compose file.
        :return: Parsed manifest.
        """
        try:
            data = yaml.safe_load(content)
        except yaml.YAMLError as e:
            raise TemplateError(f"Compose file is not valid YAML: {e}") from e

        if not isinstance(data, dict):
            raise TemplateError("Compose file must be a mapping")

        services = data.get('services')
        if not isinstance(services, dict) or not services:
            raise TemplateError("Compose file does not define any services")

        return ComposeManifest(
            services=list(services.keys()),
            external_networks=self._external_networks(data.get('networks') or {}),
        )

    def _external_networks(self, networks: Dict[str, Any]) -> List[str]:
        """
        Returns the names of networks declared ``external: true``.

        Compose lets an external network carry a different ``name`` than its key.
        """
        external = []
        for key, spec in networks.items():
            if isinstance(spec, dict) and spec.get('external'):
                external.append(spec.get('name') or key)
        return external
