"""Extension management through the VS Code command-line interface."""

import logging
import shutil
import subprocess
from typing import List, Optional, Set

from .exceptions import HostError, ExtensionNotInstalledError, NOT_INSTALLED_MARKER

logger = logging.getLogger(__name__)


class CodeExtensionManager:
    """
    Lists, installs and uninstalls extensions with `code --*-extension`.

    Extension identifiers are compared case-insensitively, the way the
    marketplace treats them.
    """

    def __init__(self, code: Optional[str] = None, variant: str = "code"):
        self.code = code or variant
        self._installed: Optional[Set[str]] = None

    def find_code_command(self) -> str:
        """Resolve the CLI executable on PATH (code.cmd on Windows)."""
        resolved = shutil.which(self.code)
        if not resolved:
            raise HostError(
                f"VS Code command '{self.code}' not found on PATH. "
                "Install it from the Command Palette: 'Shell Command: Install code command in PATH'."
            )
        return resolved

    def _run(self, *args: str) -> subprocess.CompletedProcess:
        cmd = [self.find_code_command(), *args]
        logger.debug(f"Running: {' '.join(cmd)}")
        try:
            return subprocess.run(cmd, capture_output=True, text=True, check=False)
        except OSError as e:
            raise HostError(f"Could not run {self.code}: {e}") from e

    @staticmethod
    def _output(result: subprocess.CompletedProcess) -> str:
        return "\n".join(part.strip() for part in (result.stdout, result.stderr) if part and part.strip())

    def list_extensions(self) -> List[str]:
        """Installed extension identifiers as reported by the CLI."""
        result = self._run("--list-extensions")
        if result.returncode != 0:
            raise HostError(f"Unable to list extensions: {self._output(result)}")
        return [line.strip() for line in result.stdout.splitlines() if line.strip()]

    def installed(self) -> Set[str]:
        """Lowercased installed identifiers, cached until the next change."""
        if self._installed is None:
            self._installed = {ext.lower() for ext in self.list_extensions()}
        return self._installed

    def is_installed(self, extension_id: str) -> bool:
        return extension_id.lower() in self.installed()

    def install(self, extension_id: str) -> None:
        result = self._run("--install-extension", extension_id)
        if result.returncode != 0:
            raise HostError(self._output(result) or f"exit code {result.returncode}")
        if self._installed is not None:
            self._installed.add(extension_id.lower())

    def uninstall(self, extension_id: str) -> None:
        result = self._run("--uninstall-extension", extension_id)
        output = self._output(result)
        # Older CLIs print the message but still exit 0
        if NOT_INSTALLED_MARKER in output:
            raise ExtensionNotInstalledError(output)
        if result.returncode != 0:
            raise HostError(output or f"exit code {result.returncode}")
        if self._installed is not None:
            self._installed.discard(extension_id.lower())
