"""Errors raised by host operations."""

# Substrings the editor uses for the two benign failure cases
NOT_INSTALLED_MARKER = "is not installed"
UNREGISTERED_MARKER = "not a registered configuration"


class HostError(Exception):
    """An extension or configuration operation failed."""


class ExtensionNotInstalledError(HostError):
    """Uninstall was requested for an extension that is not installed."""


class UnregisteredSettingError(HostError):
    """The setting's owning extension has not registered it yet."""


def is_not_installed_error(exc: BaseException) -> bool:
    return isinstance(exc, ExtensionNotInstalledError) or NOT_INSTALLED_MARKER in str(exc)


def is_unregistered_setting_error(exc: BaseException) -> bool:
    """True when the value will still apply once its extension loads."""
    return isinstance(exc, UnregisteredSettingError) or UNREGISTERED_MARKER in str(exc)
