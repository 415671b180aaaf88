"""Shared pytest fixtures for wg-quick backend tests."""

from collections import defaultdict, deque

import pytest

from wgquick_backend.backends import WgQuickBackend
from wgquick_backend.common.worker import AsyncWorker
from wgquick_backend.config import BackendConfig


class ScriptedShell:
    """PrivilegedExecutor double that replays queued results per command.

    Commands are matched on their first two words (``wg show``,
    ``wg-quick up``...). When a queue runs dry its last result repeats.
    """

    def __init__(self):
        self.commands: list[str] = []
        self._results: dict[str, deque] = defaultdict(deque)
        self._last: dict[str, tuple[int, list[str]]] = {}

    @staticmethod
    def _key(command: str) -> str:
        return " ".join(command.split()[:2])

    def script(self, key: str, exit_code: int, output: list[str] | None = None):
        self._results[key].append((exit_code, list(output or [])))
        return self

    def interfaces(self, *names: str, exit_code: int = 0):
        return self.script("wg show", exit_code, [" ".join(names)] if names else [])

    def run(self, command: str) -> tuple[int, list[str]]:
        self.commands.append(command)
        key = self._key(command)
        queue = self._results[key]
        if queue:
            self._last[key] = queue.popleft()
        return self._last.get(key, (0, []))

    def quick_commands(self) -> list[str]:
        return [c for c in self.commands if c.startswith("wg-quick")]


@pytest.fixture
def backend_config(tmp_path):
    """BackendConfig pointing at a temporary files directory.

    Returns:
        BackendConfig: Config with no privilege prefix
    """
    return BackendConfig(files_dir=tmp_path, privilege_command=[])


@pytest.fixture
def shell():
    """Scripted privileged executor."""
    return ScriptedShell()


@pytest.fixture
def worker():
    """Real thread pool worker, shut down after the test."""
    with AsyncWorker(max_workers=2) as w:
        yield w


@pytest.fixture
def backend(backend_config, shell, worker):
    """WgQuickBackend wired to the scripted shell."""
    return WgQuickBackend(backend_config, shell, worker)
