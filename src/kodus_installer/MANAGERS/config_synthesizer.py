"""
Synthesis of the stack's environment configuration.
"""
from typing import Callable, Dict, Mapping, Optional

from ..CONFIG.defaults import (
    DEFAULT_CONFIG,
    PASSWORD_FIELDS,
    SECRET_KEY_FIELDS,
    WEBHOOK_KEYS,
)
from ..MODELS.install_config import ConfigurationMap, GitProvider, InstallAnswers
from ..PARSERS.env_parser import EnvFileWriter
from ..UTILS.secret_generator import generate_secrets


def webhook_url(provider: GitProvider, base_url: str) -> str:
    return f"{base_url}/api/webhook/{provider.value}"


def webhook_config(provider: GitProvider, base_url: str) -> Dict[str, str]:
    """
    Returns the provider-specific webhook entry, e.g.
    ``{"API_GITHUB_CODE_MANAGEMENT_WEBHOOK": "<base_url>/api/webhook/github"}``.
    """
    return {WEBHOOK_KEYS[provider.value]: webhook_url(provider, base_url)}


def synthesize(defaults: Mapping[str, str],
               secrets: Mapping[str, str],
               answers: InstallAnswers) -> ConfigurationMap:
    """
    Merges the configuration layers into a single map.

    Layers, later ones winning on key collisions:
    1. static defaults
    2. generated secrets
    3. operator-supplied API keys
    4. the derived Git webhook entry

    :param defaults: Static default values.
    :param secrets: Freshly generated secrets and passwords.
    :param answers: The operator's answers.
    :return: The merged configuration.
    """
    return (
        ConfigurationMap(entries=dict(defaults))
        .overlay(secrets)
        .overlay(answers.api_keys)
        .overlay(webhook_config(answers.git_provider, answers.base_url))
    )


class ConfigSynthesizer:
    """
    Builds the configuration for a set of answers and writes it to disk.
    """
    def __init__(self,
                 defaults: Optional[Mapping[str, str]] = None,
                 secret_factory: Optional[Callable[[], Dict[str, str]]] = None):
        """
        :param defaults: Static defaults, DEFAULT_CONFIG when omitted.
        :param secret_factory: Returns freshly generated secrets.
        """
        self.defaults = dict(DEFAULT_CONFIG if defaults is None else defaults)
        self.secret_factory = secret_factory or (
            lambda: generate_secrets(SECRET_KEY_FIELDS, PASSWORD_FIELDS)
        )

    def build(self, answers: InstallAnswers) -> ConfigurationMap:
        return synthesize(self.defaults, self.secret_factory(), answers)

    def write(self, config: ConfigurationMap, env_path: str) -> Optional[str]:
        """
        Writes ``config`` to ``env_path``, backing up an existing file first.

        :return: The backup path, if a file was replaced.
        """
        return EnvFileWriter(env_path).write(config)
