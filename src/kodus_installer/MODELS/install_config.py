"""
Models for operator answers and the synthesized configuration map.
"""
from enum import Enum
from typing import Dict, List, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field


class EnvironmentType(str, Enum):
    """
    Where the stack will be reachable from.
    """
    LOCAL = "local"
    EXTERNAL = "external"


class GitProvider(str, Enum):
    """
    Supported Git hosting providers.
    """
    GITHUB = "github"
    GITLAB = "gitlab"
    BITBUCKET = "bitbucket"

    @property
    def display_name(self) -> str:
        return {"github": "GitHub", "gitlab": "GitLab", "bitbucket": "Bitbucket"}[self.value]


class InstallAnswers(BaseModel):
    """
    Everything the operator chose during the interactive session.
    """
    model_config = ConfigDict(frozen=True)

    environment: EnvironmentType = EnvironmentType.LOCAL
    base_url: str
    git_provider: GitProvider
    use_default_db: bool = True
    # config key -> value, empty string when skipped
    api_keys: Dict[str, str] = Field(default_factory=dict)


class ConfigurationMap(BaseModel):
    """
    Ordered, flat KEY -> value mapping written out as the stack's .env file.

    Instances are never changed in place: :meth:`overlay` returns a new map.
    """
    model_config = ConfigDict(frozen=True)

    entries: Dict[str, str] = Field(default_factory=dict)

    def overlay(self, values: Mapping[str, str]) -> "ConfigurationMap":
        """
        Returns a new map with ``values`` added on top.

        Existing keys keep their position and take the new value; unknown keys
        are appended. Nothing is ever removed.

        :param values: Entries to add or overwrite.
        :return: The merged map.
        """
        merged = dict(self.entries)
        merged.update(values)
        return ConfigurationMap(entries=merged)

    def keys(self) -> List[str]:
        return list(self.entries.keys())

    def get(self, key: str, default: Optional[str] = None) -> Optional[str]:
        return self.entries.get(key, default)

    def to_env_text(self) -> str:
        """
        Serializes the map as newline-joined ``KEY=value`` lines.
        """
        return "\n".join(f"{key}={value}" for key, value in self.entries.items())

    def __getitem__(self, key: str) -> str:
        return self.entries[key]

    def __contains__(self, key: object) -> bool:
        return key in self.entries

    def __len__(self) -> int:
        return len(self.entries)
