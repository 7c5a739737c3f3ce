"""Configuration for vscode-bootstrap."""

from pydantic_settings import BaseSettings
from typing import Optional

# Editor variants whose CLI and settings directory we know about
VARIANTS = ("code", "code-insiders", "codium", "code-oss")


class Settings(BaseSettings):
    """Runtime settings, overridable from the environment or CLI flags."""

    code: Optional[str] = None  # None = executable named after the variant
    variant: str = "code"
    settings_path: Optional[str] = None  # None = the variant's user settings.json
    remote_name: Optional[str] = None  # e.g. "wsl" when running in a remote session
    debug: bool = False
    assume_yes: bool = False  # Answer every confirmation with its accepting choice
    dry_run: bool = False
    no_backup: bool = False

    class Config:
        env_prefix = "VSCODE_BOOTSTRAP_"


settings = Settings()
