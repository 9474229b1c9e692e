"""
Unit tests for the stack launcher.
"""
import pytest

from conftest import FakeDocker, HEALTHY_LOGS
from kodus_installer.exceptions import CommandError, CriticalLogError, ReadinessTimeoutError
from kodus_installer.MANAGERS.service_orchestrator import ServiceOrchestrator
from kodus_installer.MODELS.readiness import LogRules, ProbeState


def make_orchestrator(docker, **kwargs):
    kwargs.setdefault("sleep", lambda seconds: None)
    return ServiceOrchestrator(docker, **kwargs)


class TestReadiness:
    """Tests for dependency readiness."""

    def test_default_probes_cover_both_databases_in_order(self, healthy_docker):
        probes = make_orchestrator(healthy_docker).probes()
        assert [p.service for p in probes] == ["db_kodus_postgres", "db_kodus_mongodb"]
        assert all(p.max_attempts == 30 and p.interval == 10 for p in probes)

    def test_wait_for_dependencies_runs_sequentially(self, healthy_docker):
        orchestrator = make_orchestrator(healthy_docker)
        results = orchestrator.wait_for_dependencies(orchestrator.probes())

        assert [r.state for r in results] == [ProbeState.READY, ProbeState.READY]
        assert healthy_docker.log_calls == [("db_kodus_postgres", None), ("db_kodus_mongodb", None)]

    def test_timeout_carries_troubleshooting_hints(self):
        docker = FakeDocker(logs={"db_kodus_postgres": "initializing"})
        orchestrator = make_orchestrator(docker, max_attempts=4)

        with pytest.raises(ReadinessTimeoutError) as exc_info:
            orchestrator.wait_for(orchestrator.probes(["db_kodus_postgres"])[0])

        assert exc_info.value.attempts == 4
        assert exc_info.value.hints == [
            "Check db_kodus_postgres logs: docker-compose logs db_kodus_postgres",
            "Verify db_kodus_postgres container is running: docker-compose ps db_kodus_postgres",
        ]


class TestCriticalErrors:
    """Tests for the application log scan."""

    def test_clean_logs_pass(self, healthy_docker):
        logs = make_orchestrator(healthy_docker).check_application_logs()
        assert "Database connection established" in logs
        assert healthy_docker.log_calls == [("orchestrator", 50)]

    @pytest.mark.parametrize("marker", [
        "password authentication failed",
        "Unable to connect to the database",
        "FATAL:",
        "MongoServerError:",
        "connection refused",
    ])
    def test_critical_marker_fails_even_with_ready_marker(self, marker):
        logs = f"Database connection established\n{marker} for user kodusdev\n"
        docker = FakeDocker(logs={"orchestrator": logs})

        with pytest.raises(CriticalLogError) as exc_info:
            make_orchestrator(docker).check_application_logs()

        assert exc_info.value.marker == marker
        assert exc_info.value.logs == logs
        assert len(docker.log_calls) == 1

    def test_critical_marker_beats_dependency_readiness_marker(self):
        logs = HEALTHY_LOGS["db_kodus_postgres"] + "\nconnection refused"
        docker = FakeDocker(logs={"orchestrator": logs})
        with pytest.raises(CriticalLogError):
            make_orchestrator(docker).check_application_logs()

    def test_hints_name_env_file_and_databases(self):
        docker = FakeDocker(logs={"orchestrator": "FATAL: boom"})
        with pytest.raises(CriticalLogError) as exc_info:
            make_orchestrator(docker, env_file=".env.kodus").check_application_logs()

        hints = exc_info.value.hints
        assert "Check if the database passwords in .env.kodus match the ones in your database" in hints
        assert "Check database logs: docker-compose logs db_kodus_postgres db_kodus_mongodb" in hints

    def test_custom_rules(self):
        docker = FakeDocker(logs={"orchestrator": "panic: out of memory"})
        rules = LogRules(success_markers={"cache": "ready"}, failure_markers=("panic:",))
        with pytest.raises(CriticalLogError):
            make_orchestrator(docker, rules=rules).check_application_logs()


class TestSetup:
    """Tests for the database setup and verification steps."""

    def test_run_setup_script(self, healthy_docker):
        make_orchestrator(healthy_docker).run_setup_script("/opt/kodus/setup-db.sh")
        assert healthy_docker.scripts == ["/opt/kodus/setup-db.sh"]

    def test_setup_script_failure_propagates(self):
        docker = FakeDocker(fail_script=True)
        with pytest.raises(CommandError) as exc_info:
            make_orchestrator(docker).run_setup_script("setup-db.sh")
        assert exc_info.value.output == "migration failed"

    def test_verify_database_connection(self, healthy_docker):
        make_orchestrator(healthy_docker).verify_database_connection()

    def test_verify_database_connection_failure(self):
        docker = FakeDocker(logs={"orchestrator": "Database connection failed: timeout"})
        with pytest.raises(CriticalLogError) as exc_info:
            make_orchestrator(docker).verify_database_connection()
        assert exc_info.value.marker == "Database connection failed"

    def test_application_state(self, healthy_docker):
        assert make_orchestrator(healthy_docker).application_state() == "running"
        assert make_orchestrator(FakeDocker()).application_state() is None

    def test_up_failure_propagates(self):
        with pytest.raises(CommandError):
            make_orchestrator(FakeDocker(fail_up=True)).up()
