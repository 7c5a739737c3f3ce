"""
User settings.json access.

VS Code stores settings as JSONC (JSON with comments and trailing commas).
json-five parses it and, through its model API, writes it back with the
user's comments and formatting intact.
"""

import json
import logging
import os
import shutil
import sys
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from json5 import loads as json5_loads
from json5.loader import ModelLoader
from json5.dumper import dumps as json5_dumps, ModelDumper

from .config import VARIANTS
from .exceptions import HostError

logger = logging.getLogger(__name__)

# Settings directory name per editor variant
VARIANT_DIRS = {
    "code": "Code",
    "code-insiders": "Code - Insiders",
    "codium": "VSCodium",
    "code-oss": "Code - OSS",
}


def get_vscode_config_path(variant: str = "code") -> Path:
    """
    Get the user settings.json path for an editor variant.

    Args:
        variant: "code", "code-insiders", "codium", or "code-oss"
    """
    dir_name = VARIANT_DIRS.get(variant, "Code")

    if sys.platform == "win32":
        appdata = os.environ.get("APPDATA")
        base = Path(appdata) if appdata else Path.home() / "AppData" / "Roaming"
        return base / dir_name / "User" / "settings.json"
    elif sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / dir_name / "User" / "settings.json"
    else:
        # Linux and others - respect XDG
        config_home = Path(os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config"))
        return config_home / dir_name / "User" / "settings.json"


def get_remote_settings_path() -> Optional[Path]:
    """
    Machine settings of a VS Code server install (WSL, SSH, containers).

    User settings live on the client side, out of reach from inside the
    remote, so the server's machine scope is the global target there.
    """
    agent_root = os.environ.get("VSCODE_AGENT_FOLDER", "").strip()
    if agent_root:
        root = Path(agent_root).expanduser()
    else:
        root = Path.home() / ".vscode-server"
    if not root.exists():
        return None
    return root / "data" / "Machine" / "settings.json"


def resolve_settings_path(
    variant: str = "code",
    explicit: Optional[str] = None,
    remote: bool = False,
) -> Path:
    """Explicit path, else the server's machine settings when remote, else the user settings."""
    if explicit:
        return Path(explicit).expanduser()
    if remote:
        remote_path = get_remote_settings_path()
        if remote_path is not None:
            logger.info(
                f"Writing the VS Code server's machine settings ({remote_path}). "
                "Application-scoped settings such as workbench.colorTheme and editor.fontFamily "
                "are ignored there; apply them from the Windows side as well."
            )
            return remote_path
    return get_vscode_config_path(variant)


def find_vscode_settings() -> List[Tuple[str, Path]]:
    """Find all editor variant settings files that exist."""
    found = []
    for variant in VARIANTS:
        path = get_vscode_config_path(variant)
        if path.exists():
            found.append((variant, path))
    return found


def load_settings(path: Path) -> Tuple[Dict[str, Any], Any]:
    """
    Load settings from a JSONC file.

    Returns (settings_dict, model_or_none). The model is kept for
    comment-preserving saves. Raises HostError if the file cannot be parsed,
    so a broken file is never overwritten.
    """
    if not path.exists():
        return {}, None

    content = path.read_text(encoding="utf-8")
    if not content.strip():
        return {}, None

    try:
        settings_dict = json5_loads(content)
        model = json5_loads(content, loader=ModelLoader())
    except Exception as e:
        raise HostError(f"Could not parse {path}: {e}") from e

    if not isinstance(settings_dict, dict):
        raise HostError(f"{path} does not contain a JSON object")
    return settings_dict, model


def backup_settings(path: Path) -> Optional[Path]:
    """Copy the settings file aside. Returns the backup path, or None if there was nothing to back up."""
    if not path.exists():
        return None

    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    backup_path = path.with_suffix(f".backup_{timestamp}.json")
    try:
        shutil.copy2(path, backup_path)
    except OSError as e:
        raise HostError(f"Could not create backup of {path}: {e}") from e
    logger.info(f"Backup created: {backup_path}")
    return backup_path


def _model_key(key_node: Any) -> str:
    # characters holds the string body; identifiers only have a name
    if hasattr(key_node, "characters"):
        return key_node.characters.strip("\"'")
    if hasattr(key_node, "name"):
        return key_node.name
    return str(key_node).strip("\"'")


def _to_node(value: Any) -> Any:
    """Model node for a Python value, with double-quoted strings as VS Code expects."""
    return json5_loads(json.dumps(value, ensure_ascii=False), loader=ModelLoader()).value


def update_model_with_settings(model: Any, settings: Dict[str, Any]) -> None:
    """
    Update a json-five model in-place, preserving comments and formatting.

    A value of None removes the key. The object's keys and values are parallel
    lists; key_value_pairs is only a view built from them.
    """
    if not hasattr(model, "value") or not hasattr(model.value, "keys"):
        return

    keys = model.value.keys
    values = model.value.values

    removed = {key for key, value in settings.items() if value is None}
    for idx in reversed(range(len(keys))):
        if _model_key(keys[idx]) in removed:
            del keys[idx]
            del values[idx]
    if not keys and getattr(model.value, "trailing_comma", None) is not None:
        # "{,}" is not valid JSONC
        model.value.trailing_comma = None

    existing_keys = {_model_key(key_node): idx for idx, key_node in enumerate(keys)}
    for key, value in settings.items():
        if value is None:
            continue
        if key in existing_keys:
            # Keep the original key node (and the comments attached to it)
            values[existing_keys[key]] = _to_node(value)
        else:
            keys.append(_to_node(key))
            values.append(_to_node(value))
            existing_keys[key] = len(keys) - 1


class SettingsStore:
    """
    Global (user) configuration backed by a settings.json file.

    Updates are staged in memory one key at a time and written by save().
    """

    def __init__(self, path: Path, backup: bool = True, dry_run: bool = False):
        self.path = Path(path)
        self.backup = backup
        self.dry_run = dry_run
        self._settings: Optional[Dict[str, Any]] = None
        self._model: Any = None
        self._pending: Dict[str, Any] = {}

    def _load(self) -> Dict[str, Any]:
        if self._settings is None:
            self._settings, self._model = load_settings(self.path)
        return self._settings

    def get(self, key: str, default: Any = None) -> Any:
        return self._load().get(key, default)

    def update(self, key: str, value: Any) -> None:
        """Stage a new value for key. None unsets it."""
        current = self._load()
        try:
            json.dumps(value)
        except (TypeError, ValueError) as e:
            raise HostError(f"Value for {key} is not JSON serializable: {e}") from e

        old_value = current.get(key)
        if value is None:
            if key not in current:
                return
            del current[key]
        elif key in current and old_value == value:
            return
        else:
            current[key] = value
        self._pending[key] = value

        old_str = json.dumps(old_value) if old_value is not None else "(not set)"
        new_str = json.dumps(value) if value is not None else "(not set)"
        # Dry runs show every change, like a diff
        log = logger.info if self.dry_run else logger.debug
        log(f"{key}: {old_str} -> {new_str}")

    @property
    def pending(self) -> Dict[str, Any]:
        return dict(self._pending)

    def save(self) -> bool:
        """
        Write staged changes. Returns True if the file was written.

        Raises HostError when the backup or the write fails.
        """
        if not self._pending:
            logger.info("No changes needed - settings already configured.")
            return False
        if self.dry_run:
            logger.info(f"(Dry run) {len(self._pending)} setting(s) would change in {self.path}")
            self._pending.clear()
            return False

        if self.backup:
            backup_settings(self.path)

        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            if self._model is not None:
                update_model_with_settings(self._model, self._pending)
                content = json5_dumps(self._model, dumper=ModelDumper())
            else:
                content = json.dumps(self._settings, indent=4, ensure_ascii=False) + "\n"
            self.path.write_text(content, encoding="utf-8")
        except PermissionError as e:
            raise HostError(f"Permission denied writing to {self.path}") from e
        except OSError as e:
            raise HostError(f"Error saving settings: {e}") from e

        logger.info(f"Settings saved to: {self.path}")
        self._pending.clear()
        return True
