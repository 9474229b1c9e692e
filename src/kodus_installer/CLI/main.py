"""
Command Line Interface for the Kodus installer.
"""
import os
import time

import click

from .. import __version__
from ..CONFIG.defaults import (
    APPLICATION_SERVICE,
    DOCKER_NETWORKS,
    ENV_FILE_NAME,
    GRAFANA_URL,
    RABBITMQ_MANAGEMENT_URL,
    READINESS_MARKERS,
    SETUP_SCRIPT_NAME,
)
from ..CONFIG.settings import load_settings
from ..exceptions import CommandError, CriticalLogError, InstallerError, TemplateError
from ..MANAGERS.config_synthesizer import ConfigSynthesizer
from ..MANAGERS.network_manager import NetworkManager
from ..MANAGERS.prerequisite_checker import PrerequisiteChecker
from ..MANAGERS.service_orchestrator import ServiceOrchestrator
from ..MANAGERS.template_stager import TemplateStager
from ..MODELS.install_config import EnvironmentType
from ..RUNNERS.docker_client import DockerClient
from ..RUNNERS.process_runner import ProcessRunner
from ..UTILS import console
from ..UTILS.log_setup import configure_logging
from ..UTILS.report_templates import render_summary
from .prompts import Configurator


@click.group()
@click.version_option(version=__version__, prog_name="kodus-installer")
@click.pass_context
def cli(ctx):
    """
    Kodus installer.

    Configures and launches the Kodus stack with Docker Compose.
    """
    ctx.ensure_object(dict)


def report_error(error: InstallerError) -> None:
    """
    Prints a fatal error with whatever diagnostics it carries.
    """
    click.secho(f"\nError: {error.message}", fg="red", err=True)
    if isinstance(error, CommandError):
        click.secho("\nError details:", fg="red", err=True)
        click.echo(error.output, err=True)
    console.hints(error.hints)
    if isinstance(error, CriticalLogError):
        click.echo("\nFull error log:", err=True)
        click.echo(error.logs, err=True)


def _show_attempt(probe, attempt: int) -> None:
    console.info(f"  {probe.service} not ready yet (attempt {attempt}/{probe.max_attempts})")


@cli.command()
@click.pass_context
def install(ctx):
    """Install and configure Kodus"""
    base_dir = os.getcwd()

    try:
        settings = load_settings(base_dir)
        configure_logging(settings.log_level)

        docker = ctx.obj.get('docker') or DockerClient(
            ProcessRunner(base_dir), settings.docker_argv, settings.compose_argv
        )
        stager = ctx.obj.get('stager') or TemplateStager()
        orchestrator = ServiceOrchestrator(
            docker,
            max_attempts=settings.max_attempts,
            interval=settings.poll_interval,
            sleep=ctx.obj.get('sleep', time.sleep),
            on_attempt=_show_attempt,
        )
        synthesizer = ConfigSynthesizer()

        console.section("🔍 Checking prerequisites...")
        with console.step("Checking Docker installation", "Docker is installed"):
            PrerequisiteChecker(docker).check_docker()

        with console.step("Copying template files", "Template files copied"):
            stager.stage(
                base_dir,
                required_services=list(READINESS_MARKERS) + [APPLICATION_SERVICE],
                required_networks=DOCKER_NETWORKS,
            )

        answers = Configurator().run()

        console.section("🚀 Starting installation...")
        config = synthesizer.build(answers)
        env_path = os.path.join(base_dir, ENV_FILE_NAME)
        with console.step(f"Creating {ENV_FILE_NAME} file", f"Created {ENV_FILE_NAME} file"):
            backup_path = synthesizer.write(config, env_path)
        if backup_path:
            console.info(f"Previous configuration saved to {os.path.basename(backup_path)}")

        with console.step("Creating Docker networks", "Docker networks created"):
            for name in NetworkManager(docker).ensure_networks(DOCKER_NETWORKS):
                console.succeed(f"Created network: {name}")

        with console.step("Starting containers", "Containers started"):
            orchestrator.up()

        for probe in orchestrator.probes():
            with console.step(f"Waiting for {probe.service} to be ready", f"{probe.service} is ready"):
                orchestrator.wait_for(probe)

        with console.step(f"Checking {APPLICATION_SERVICE} logs", f"No critical errors in {APPLICATION_SERVICE} logs"):
            state = orchestrator.application_state()
            if state:
                console.info(f"  {APPLICATION_SERVICE} container is {state}")
            orchestrator.check_application_logs()

        script_path = stager.setup_script()
        if script_path is None:
            raise TemplateError(
                f"{SETUP_SCRIPT_NAME} script not found!",
                hints=[f"Script expected at: {os.path.join(stager.scripts_dir, SETUP_SCRIPT_NAME)}"],
            )
        with console.step("Setting up database", "Database setup completed"):
            orchestrator.run_setup_script(script_path)

        with console.step("Verifying database connection", "Database connection verified"):
            orchestrator.verify_database_connection()
    except InstallerError as e:
        report_error(e)
        ctx.exit(1)
    except OSError as e:
        click.secho(f"\n❌ Installation failed: {e}", fg="red", err=True)
        ctx.exit(1)

    click.secho("\n✨ Installation completed successfully!", fg="green")
    click.echo(render_summary(
        environment="Local" if answers.environment is EnvironmentType.LOCAL else "External",
        show_base_url=answers.environment is EnvironmentType.EXTERNAL,
        base_url=answers.base_url,
        git_service=answers.git_provider.display_name,
        use_default_db=answers.use_default_db,
        grafana_url=GRAFANA_URL,
        rabbitmq_url=RABBITMQ_MANAGEMENT_URL,
    ))

    if click.confirm("\nWould you like to start the services now?", default=True):
        try:
            docker.compose_up()
        except CommandError as e:
            report_error(e)
            ctx.exit(1)
        click.secho("\nServices started successfully!", fg="green")


def main():
    """
    Main entry point for the CLI.
    """
    cli(obj={})


if __name__ == '__main__':
    main()
