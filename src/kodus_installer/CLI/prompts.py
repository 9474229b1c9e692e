"""
Interactive questions asked during installation.
"""
from typing import Callable, Dict

import click

from ..CONFIG.defaults import DEFAULT_BASE_URL, LLM_API_KEYS
from ..MANAGERS.config_synthesizer import webhook_url
from ..MODELS.install_config import EnvironmentType, GitProvider, InstallAnswers
from ..UTILS import console
from ..UTILS.url_validation import check_public_url


def public_url(value: str) -> str:
    """
    click value_proc for the public URL; a BadParameter makes click ask again.
    """
    value = value.strip()
    problem = check_public_url(value)
    if problem:
        raise click.BadParameter(problem)
    return value


class Configurator:
    """
    Collects the operator's deployment choices.
    """
    def __init__(self,
                 prompt: Callable = click.prompt,
                 confirm: Callable = click.confirm):
        """
        :param prompt: Prompt function with click.prompt's signature.
        :param confirm: Confirm function with click.confirm's signature.
        """
        self.prompt = prompt
        self.confirm = confirm

    def ask_environment(self) -> EnvironmentType:
        value = self.prompt(
            "What type of environment are you setting up? "
            "(local = localhost, external = public URL)",
            type=click.Choice([e.value for e in EnvironmentType]),
            default=EnvironmentType.LOCAL.value,
        )
        return EnvironmentType(value)

    def ask_base_url(self, environment: EnvironmentType) -> str:
        if environment is EnvironmentType.LOCAL:
            return DEFAULT_BASE_URL
        return self.prompt(
            "Enter your public URL (e.g., https://kodus.yourdomain.com)",
            value_proc=public_url,
        )

    def ask_git_provider(self) -> GitProvider:
        value = self.prompt(
            "Which Git service will you use?",
            type=click.Choice([p.value for p in GitProvider]),
            default=GitProvider.GITHUB.value,
        )
        return GitProvider(value)

    def ask_use_default_db(self) -> bool:
        return self.confirm(
            "Would you like to use default database configurations?", default=True
        )

    def ask_api_keys(self) -> Dict[str, str]:
        """
        Asks for every model-provider key. Skipped keys are stored as "".
        """
        console.section("🔑 Configuring LLM API Keys...")
        keys = {}
        for config_key, label in LLM_API_KEYS:
            keys[config_key] = self.prompt(
                f"Enter your {label} API key (optional)",
                default="",
                show_default=False,
            )
        return keys

    def run(self) -> InstallAnswers:
        """
        Asks every question in order and returns the answers.
        """
        environment = self.ask_environment()
        base_url = self.ask_base_url(environment)
        provider = self.ask_git_provider()

        if environment is EnvironmentType.LOCAL:
            console.warn(
                "\n⚠️  IMPORTANT: If you're using a cloud Git service (GitHub, GitLab, "
                "Bitbucket), you'll need to configure the webhook manually."
            )
            console.warn(
                "For local or self-hosted Git instances, no additional configuration is needed."
            )
            console.warn("The webhook URL will be:")
            console.info(webhook_url(provider, base_url))

        use_default_db = self.ask_use_default_db()
        api_keys = self.ask_api_keys()

        return InstallAnswers(
            environment=environment,
            base_url=base_url,
            git_provider=provider,
            use_default_db=use_default_db,
            api_keys=api_keys,
        )
