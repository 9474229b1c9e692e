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
Execution of external commands with captured output.
"""
import logging
import subprocess
from typing import Dict, List, Optional

from ..exceptions import CommandError

logger = logging.getLogger(__name__)


class ProcessRunner:
    """
    Runs external commands to completion and captures their output.
    """
    def __init__(self, working_dir: Optional[str] = None):
        """
        Initializes the process runner.

        Args:
            working_dir (Optional[str]): Directory commands are run in.
        """
        self.working_dir = working_dir

    def run(self, command: List[str], check: bool = True,
            env: Optional[Dict[str, str]] = None) -> str:
        """
        Runs a command and returns its standard output.

        Args:
            command (List[str]): Command and arguments to execute.
            check (bool): Raise CommandError on a non-zero exit status.
            env (Optional[Dict[str, str]]): Full environment for the child, inherited when None.

        Returns:
            str: Captured stdout.

        Raises:
            CommandError: If the command cannot be started, or exits non-zero
                while ``check`` is set.
        """
        logger.debug("Running command: %s", " ".join(command))
        try:
            result = subprocess.run(
                command,
                cwd=self.working_dir,
                env=env,
                capture_output=True,
                text=True,
                # Avoid shell=True for security reasons (CWE-78)
                shell=False,
            )
        except (FileNotFoundError, PermissionError) as e:
            logger.debug("Command %s could not start: %s", command[0], e)
            raise CommandError(command, None, stderr=str(e)) from e

        if check and result.returncode != 0:
            logger.debug("Command exited with %s: %s", result.returncode, result.stderr.strip())
            raise CommandError(command, result.returncode, result.stdout, result.stderr)
        return result.stdout

    def succeeds(self, command: List[str]) -> bool:
        """
        Returns True if the command runs and exits with status 0.
        """
        try:
            self.run(command)
        except CommandError:
            return False
        return True
