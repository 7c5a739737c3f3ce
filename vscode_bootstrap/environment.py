"""Operating environment detection."""

import os
import platform as _platform
import sys
from enum import Enum
from typing import Optional

from .config import settings


class Environment(str, Enum):
    """Where the editor (or its remote server) is running."""

    WINDOWS = "windows"
    WSL = "wsl"
    LINUX = "linux"
    OTHER = "other"


ENVIRONMENT_LABELS = {
    Environment.WINDOWS: " [Windows]",
    Environment.WSL: " [WSL]",
    Environment.LINUX: " [Linux]",
    Environment.OTHER: "",
}


def current_remote_name() -> Optional[str]:
    """Name of the remote session, if any.

    An explicit setting wins. Inside a WSL distribution the launcher exports
    WSL_DISTRO_NAME, which stands in for VS Code's "wsl" remote.
    """
    if settings.remote_name:
        return settings.remote_name
    if os.environ.get("WSL_DISTRO_NAME"):
        return "wsl"
    return None


def detect_environment(
    remote_name: Optional[str] = None,
    platform: Optional[str] = None,
    release: Optional[str] = None,
) -> Environment:
    """
    Classify the running environment.

    Args:
        remote_name: Remote session name (defaults to current_remote_name())
        platform: Platform name as in sys.platform (defaults to sys.platform)
        release: Kernel release string (defaults to platform.release())
    """
    if remote_name is None:
        remote_name = current_remote_name()
    if remote_name == "wsl":
        return Environment.WSL

    if platform is None:
        platform = sys.platform
    if release is None:
        release = _platform.release()

    if platform == "win32":
        return Environment.WINDOWS
    if platform == "linux" and "microsoft" in release.lower():
        # WSL kernel without a remote session (e.g. a shell inside the distro)
        return Environment.WSL
    if platform == "linux":
        return Environment.LINUX
    return Environment.OTHER


def environment_label(environment: Environment) -> str:
    """Short label shown next to the status, empty for unrecognized environments."""
    return ENVIRONMENT_LABELS[environment]
