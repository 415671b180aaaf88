"""Privileged command execution for wg tooling."""

import subprocess
from collections.abc import Sequence

from .exceptions import ProcessError
from .logging import get_logger

logger = get_logger(__name__)


class RootShell:
    """Runs shell command lines with elevated privileges.

    Each command line is handed to ``sh -c`` behind the configured
    privilege prefix (``sudo -n`` by default) and blocks until it exits.
    """

    def __init__(
        self,
        privilege_command: Sequence[str] = ("sudo", "-n"),
        timeout: float = 30.0,
    ):
        """Initialize RootShell

        Args:
            privilege_command: Elevation prefix; empty when already root
            timeout: Seconds to wait for each command
        """
        self.privilege_command = list(privilege_command)
        self.timeout = timeout

    def build_argv(self, command: str) -> list[str]:
        """Build the argument vector used to run a command line"""
        return [*self.privilege_command, "sh", "-c", command]

    def run(self, command: str) -> tuple[int, list[str]]:
        """Run a command line and capture its standard output

        Undecodable bytes in the output are replaced rather than raised.

        Args:
            command: Shell command line

        Returns:
            Tuple of (exit_code, stdout lines)

        Raises:
            ProcessError: If the command cannot be started or times out
        """
        argv = self.build_argv(command)
        logger.debug("Running privileged command", command=command)
        try:
            result = subprocess.run(
                argv,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                text=True,
                errors="replace",
                timeout=self.timeout,
                check=False,
            )
        except subprocess.TimeoutExpired as e:
            logger.error("Privileged command timed out", command=command)
            raise ProcessError(
                f"Command timed out after {self.timeout}s: {command}"
            ) from e
        except OSError as e:
            logger.error("Failed to start privileged command", error=str(e))
            raise ProcessError(f"Failed to run command: {e}") from e

        if result.returncode != 0:
            logger.debug(
                "Privileged command exited with error",
                command=command,
                exit_code=result.returncode,
                stderr=result.stderr.strip(),
            )
        return result.returncode, result.stdout.splitlines()
