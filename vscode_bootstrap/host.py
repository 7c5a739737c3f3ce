"""Host operations the commands are built on."""

import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Optional, Set

from .exceptions import ExtensionNotInstalledError
from .extensions import CodeExtensionManager
from .settings_store import SettingsStore

logger = logging.getLogger(__name__)


class EditorHost(ABC):
    """The editor's extension registry and global configuration."""

    @abstractmethod
    def installed_extensions(self) -> Set[str]:
        """Lowercased identifiers of installed extensions."""
        pass

    def is_installed(self, extension_id: str) -> bool:
        return extension_id.lower() in self.installed_extensions()

    @abstractmethod
    def install_extension(self, extension_id: str) -> None:
        pass

    @abstractmethod
    def uninstall_extension(self, extension_id: str) -> None:
        """Raises ExtensionNotInstalledError when there is nothing to remove."""
        pass

    @abstractmethod
    def get_setting(self, key: str) -> Any:
        pass

    @abstractmethod
    def update_setting(self, key: str, value: Any) -> None:
        """Set a global value. None removes the key."""
        pass

    def save(self) -> None:
        """Flush staged configuration changes, if the host stages them."""
        pass


class CodeCLIHost(EditorHost):
    """Drives the `code` CLI for extensions and edits settings.json directly."""

    def __init__(
        self,
        settings_path: Path,
        code: Optional[str] = None,
        variant: str = "code",
        dry_run: bool = False,
        backup: bool = True,
    ):
        self.dry_run = dry_run
        self.extensions = CodeExtensionManager(code=code, variant=variant)
        self.store = SettingsStore(settings_path, backup=backup, dry_run=dry_run)

    def installed_extensions(self) -> Set[str]:
        return self.extensions.installed()

    def install_extension(self, extension_id: str) -> None:
        if self.dry_run:
            logger.info(f"(Dry run) would install {extension_id}")
            return
        self.extensions.install(extension_id)

    def uninstall_extension(self, extension_id: str) -> None:
        if self.dry_run:
            if not self.is_installed(extension_id):
                raise ExtensionNotInstalledError(f"Extension '{extension_id}' is not installed.")
            logger.info(f"(Dry run) would uninstall {extension_id}")
            return
        self.extensions.uninstall(extension_id)

    def get_setting(self, key: str) -> Any:
        return self.store.get(key)

    def update_setting(self, key: str, value: Any) -> None:
        self.store.update(key, value)

    def save(self) -> None:
        self.store.save()
