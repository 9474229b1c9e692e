"""
Shared fixtures: a scripted stand-in for the docker / docker-compose CLI.
"""
import pytest

from kodus_installer.exceptions import CommandError


class FakeDocker:
    """
    Records calls and returns canned output instead of running docker.

    ``logs`` maps a service to a string, or to a callable returning the logs
    for each fetch.
    """
    def __init__(self, logs=None, networks=(), installed=True, status=None,
                 fail_up=False, fail_network=None, fail_script=False):
        self.docker_argv = ["docker"]
        self.compose_argv = ["docker-compose"]
        self.logs = dict(logs or {})
        self.networks = set(networks)
        self.installed = installed
        self.status = status
        self.fail_up = fail_up
        self.fail_network = fail_network
        self.fail_script = fail_script

        self.created_networks = []
        self.log_calls = []
        self.up_calls = 0
        self.scripts = []

    def version(self):
        if not self.installed:
            raise CommandError(["docker", "--version"], None, stderr="docker: not found")
        return "Docker version 27.0.3, build 7d4bcd8"

    def network_exists(self, name):
        return name in self.networks

    def create_network(self, name):
        if name == self.fail_network:
            raise CommandError(["docker", "network", "create", name], 1,
                               stderr="permission denied")
        self.networks.add(name)
        self.created_networks.append(name)

    def compose_up(self):
        self.up_calls += 1
        if self.fail_up:
            raise CommandError(["docker-compose", "up", "-d"], 1,
                               stdout="pull access denied for kodus-web")
        return ""

    def compose_logs(self, service, tail=None):
        self.log_calls.append((service, tail))
        value = self.logs.get(service, "")
        return value() if callable(value) else value

    def compose_status(self, service):
        return self.status

    def run_script(self, script_path):
        self.scripts.append(script_path)
        if self.fail_script:
            raise CommandError(["sh", script_path], 2, stdout="migration failed")
        return "Database setup completed."


HEALTHY_LOGS = {
    "db_kodus_postgres": "LOG:  database system is ready to accept connections",
    "db_kodus_mongodb": '{"msg":"Waiting for connections","attr":{"port":27017}}',
    "orchestrator": "Database connection established\nConnected to MongoDB",
}


@pytest.fixture
def healthy_docker():
    return FakeDocker(logs=HEALTHY_LOGS, status={"Service": "orchestrator", "State": "running"})


@pytest.fixture
def no_sleep():
    sleeps = []
    return sleeps.append, sleeps
