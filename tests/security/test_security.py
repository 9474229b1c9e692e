import os
import sys

import pytest

from kodus_installer.exceptions import TemplateError
from kodus_installer.PARSERS.compose_parser import ComposeParser
from kodus_installer.RUNNERS.process_runner import ProcessRunner


def test_command_injection_attempt(tmp_path):
    """
    Shell operators in arguments must be passed through literally.
    """
    injected_file = tmp_path / "injected.txt"
    command = [sys.executable, "-c", "import sys; print(sys.argv[1:])",
               ";", "touch", str(injected_file)]

    out = ProcessRunner(working_dir=str(tmp_path)).run(command)

    assert "';'" in out
    assert not injected_file.exists(), "Command injection successful! Security vulnerability found."


def test_compose_parser_does_not_construct_objects():
    """
    yaml tags that would instantiate Python objects are rejected.
    """
    content = "services: !!python/object/apply:os.system ['echo pwned']\n"
    with pytest.raises(TemplateError):
        ComposeParser().parse_from_string(content)


def test_setup_script_path_is_not_shell_expanded(tmp_path):
    script = tmp_path / "setup $(touch pwned).sh"
    script.write_text("echo ok\n")
    out = ProcessRunner(working_dir=str(tmp_path)).run(["sh", str(script)])
    assert out.strip() == "ok"
    assert not os.path.exists(tmp_path / "pwned")
