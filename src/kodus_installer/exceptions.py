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
Errors raised by the installation steps.

Every error is fatal to the install. The CLI turns them into a message,
optional troubleshooting hints and exit code 1.
"""
from typing import List, Optional, Sequence


class InstallerError(Exception):
    """Base class for every fatal installation failure."""

    def __init__(self, message: str, hints: Optional[Sequence[str]] = None):
        super().__init__(message)
        self.message = message
        self.hints: List[str] = list(hints or [])


class PrerequisiteError(InstallerError):
    """A required tool (the Docker CLI) is missing."""


class TemplateError(InstallerError):
    """A bundled asset is missing or malformed."""


class SettingsError(InstallerError):
    """An installer setting has a value that cannot be used."""


class CommandError(InstallerError):
    """An external command exited with a non-zero status or could not start."""

    def __init__(
        self,
        command: Sequence[str],
        returncode: Optional[int],
        stdout: str = "",
        stderr: str = "",
    ):
        self.command = list(command)
        self.returncode = returncode
        self.stdout = stdout
        self.stderr = stderr
        if returncode is None:
            message = f"Command could not be started: {' '.join(self.command)}"
        else:
            message = f"Command failed with exit code {returncode}: {' '.join(self.command)}"
        super().__init__(message)

    @property
    def output(self) -> str:
        """Raw output of the failed command, stdout first."""
        return self.stdout or self.stderr or self.message


class ReadinessTimeoutError(InstallerError):
    """A monitored service never printed its readiness marker."""

    def __init__(self, service: str, attempts: int, hints: Optional[Sequence[str]] = None):
        self.service = service
        self.attempts = attempts
        super().__init__(
            f"{service} failed to start properly after {attempts} attempts", hints
        )


class CriticalLogError(InstallerError):
    """A critical error marker showed up in a service's logs."""

    def __init__(
        self,
        service: str,
        marker: str,
        logs: str,
        hints: Optional[Sequence[str]] = None,
    ):
        self.service = service
        self.marker = marker
        self.logs = logs
        super().__init__(f"Critical error detected in {service} logs: {marker!r}", hints)
