"""
User-facing commands: configure, enable/disable Copilot, cleanup and the menu.

Every command walks its list one item at a time, calling the host for each.
A failing item is logged and counted and the batch carries on; the counts are
reported when the batch is done.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterable, List, Optional

from .catalog import (
    COPILOT_EXTENSIONS,
    COPILOT_UNINSTALL_ORDER,
    cleanup_extensions_for_environment,
    copilot_settings,
    extensions_for_environment,
    settings_for_environment,
)
from .environment import Environment, detect_environment
from .exceptions import HostError, is_not_installed_error, is_unregistered_setting_error
from .host import EditorHost
from .prompts import Prompter
from .status import SetupStatus, StatusIndicator

logger = logging.getLogger(__name__)

RELOAD_HINT = "Reload VS Code (Developer: Reload Window) to activate the extensions."


class Outcome(str, Enum):
    DONE = "done"
    ISSUES = "issues"  # Finished, but some items failed
    CANCELLED = "cancelled"
    FAILED = "failed"  # Aborted by an unexpected error


@dataclass
class Tally:
    """Counts for one batch of host calls."""

    succeeded: int = 0
    skipped: int = 0
    failed: int = 0
    failed_items: List[str] = field(default_factory=list)

    def fail(self, item: str) -> None:
        self.failed += 1
        self.failed_items.append(item)


def install_extensions(host: EditorHost, extension_ids: Iterable[str]) -> Tally:
    """Install each extension that is not installed yet."""
    tally = Tally()
    for extension_id in extension_ids:
        try:
            if host.is_installed(extension_id):
                logger.info(f"Extension {extension_id} is already installed")
                tally.skipped += 1
                continue
            host.install_extension(extension_id)
            logger.info(f"Successfully installed {extension_id}")
            tally.succeeded += 1
        except HostError as e:
            logger.error(f"Failed to install {extension_id}: {e}")
            tally.fail(extension_id)
    return tally


def uninstall_extensions(host: EditorHost, extension_ids: Iterable[str]) -> Tally:
    """Uninstall each extension; ones that are not installed are skipped."""
    tally = Tally()
    for extension_id in extension_ids:
        logger.debug(f"Attempting to uninstall {extension_id}...")
        try:
            host.uninstall_extension(extension_id)
            logger.info(f"Successfully uninstalled {extension_id}")
            tally.succeeded += 1
        except HostError as e:
            if is_not_installed_error(e):
                logger.info(f"Extension {extension_id} is not installed, skipping")
                tally.skipped += 1
            else:
                logger.error(f"Failed to uninstall {extension_id}: {e}")
                tally.fail(extension_id)
    return tally


def apply_settings(host: EditorHost, values: Dict[str, Any]) -> Tally:
    """
    Set each key globally, then save.

    Keys the editor does not know yet ("not a registered configuration") count
    as applied, since they take effect once their extension loads.
    """
    tally = Tally()
    for key, value in values.items():
        try:
            host.update_setting(key, value)
            tally.succeeded += 1
        except HostError as e:
            if is_unregistered_setting_error(e):
                logger.info(f"Skipping {key}: extension not loaded yet")
                tally.succeeded += 1
            else:
                logger.error(f"Failed to set {key}: {e}")
                tally.fail(key)
    host.save()
    return tally


def reset_settings(host: EditorHost, keys: Iterable[str]) -> Tally:
    """Remove each key from the global configuration, then save."""
    tally = Tally()
    for key in keys:
        try:
            host.update_setting(key, None)
            tally.succeeded += 1
        except HostError as e:
            logger.error(f"Failed to reset {key}: {e}")
            tally.fail(key)
    host.save()
    return tally


def _summary(*parts) -> str:
    """Join the non-zero (count, noun phrase) parts."""
    messages = [f"{count} {text}" for count, text in parts if count > 0]
    return ", ".join(messages) if messages else "no changes"


class Commands:
    """The actions offered by the menu, bound to one host and one console."""

    def __init__(
        self,
        host: EditorHost,
        prompter: Prompter,
        environment: Optional[Environment] = None,
        status: Optional[StatusIndicator] = None,
    ):
        self.host = host
        self.prompter = prompter
        self.environment = environment or detect_environment()
        self.status = status or StatusIndicator(self.environment)

    # ------------------------------------------------------------------
    # configure
    # ------------------------------------------------------------------

    def _configure_prompt(self) -> str:
        if self.environment == Environment.WSL:
            return "Running in WSL! This will install extensions in your WSL environment and apply settings. Continue?"
        if self.environment == Environment.WINDOWS:
            return (
                "This will install extensions on Windows and apply settings. "
                "Note: You'll need to run this again after connecting to WSL. Continue?"
            )
        return "This will update your VS Code user settings with recommended defaults and install required extensions. Continue?"

    def configure(self) -> Outcome:
        """Install the environment's extensions and apply its settings."""
        self.status.set_status(SetupStatus.IN_PROGRESS)

        if self.prompter.ask(self._configure_prompt(), "Yes", "No") != "Yes":
            self.status.set_status(SetupStatus.NOT_STARTED)
            return Outcome.CANCELLED

        try:
            self.prompter.info("Installing required extensions...")
            extensions = install_extensions(self.host, extensions_for_environment(self.environment))
            configured = apply_settings(self.host, settings_for_environment(self.environment))
        except Exception as e:
            logger.debug("configure aborted", exc_info=True)
            self.status.set_status(SetupStatus.ERROR)
            self.prompter.error(f"Failed to configure settings: {e}")
            return Outcome.FAILED

        summary = _summary(
            (extensions.succeeded, "extension(s) installed"),
            (extensions.skipped, "extension(s) already installed"),
            (configured.succeeded, "setting(s) configured"),
        )

        if extensions.failed or configured.failed:
            self.status.set_status(SetupStatus.ERROR)
            errors = _summary(
                (extensions.failed, "extension(s) failed"),
                (configured.failed, "setting(s) failed"),
            )
            self.prompter.warning(
                f"Setup completed with issues: {summary}. Errors: {errors}. Check the log for details."
            )
            return Outcome.ISSUES

        self.status.set_status(SetupStatus.COMPLETE)
        if self.environment == Environment.WINDOWS:
            message = (
                f"✓ Setup complete on Windows! {summary}. "
                "Remember to run \"configure\" again after connecting to WSL."
            )
        elif self.environment == Environment.WSL:
            message = f"✓ Setup complete in WSL! {summary}."
        else:
            message = f"✓ Setup complete! {summary}."
        if extensions.succeeded:
            message = f"{message} {RELOAD_HINT}"
        self.prompter.info(message)
        return Outcome.DONE

    # ------------------------------------------------------------------
    # Copilot toggle
    # ------------------------------------------------------------------

    def copilot_enabled(self) -> bool:
        """
        Copilot counts as enabled if any language in github.copilot.enable is
        on, or if chat.disableAIFeatures is explicitly false.
        """
        languages = self.host.get_setting("github.copilot.enable")
        chat_disabled = self.host.get_setting("chat.disableAIFeatures")

        enabled = False
        if isinstance(languages, dict):
            enabled = any(value is True for value in languages.values())
        if chat_disabled is False:
            enabled = True
        return enabled

    def enable_copilot(self) -> Outcome:
        """Install the Copilot extensions and switch the AI features on."""
        answer = self.prompter.ask(
            "This will install GitHub Copilot extensions and enable AI chat features. Continue?",
            "Yes",
            "No",
        )
        if answer != "Yes":
            return Outcome.CANCELLED

        try:
            self.prompter.info("Installing GitHub Copilot extensions...")
            extensions = install_extensions(self.host, COPILOT_EXTENSIONS)
            configured = apply_settings(self.host, copilot_settings(True))
        except Exception as e:
            logger.debug("enable-copilot aborted", exc_info=True)
            self.prompter.error(f"Failed to enable GitHub Copilot: {e}")
            return Outcome.FAILED

        summary = _summary(
            (extensions.succeeded, "extension(s) installed"),
            (extensions.skipped, "extension(s) already installed"),
            (configured.succeeded, "setting(s) configured"),
        )

        if extensions.failed or configured.failed:
            errors = _summary(
                (extensions.failed, "extension(s) failed"),
                (configured.failed, "setting(s) failed"),
            )
            self.prompter.warning(
                f"GitHub Copilot enabled with issues: {summary}. Errors: {errors}. Check the log for details."
            )
            return Outcome.ISSUES

        if extensions.succeeded:
            self.prompter.info(f"✓ GitHub Copilot enabled! {summary}. {RELOAD_HINT}")
        else:
            self.prompter.info(f"✓ GitHub Copilot is already enabled! {summary}.")
        return Outcome.DONE

    def disable_copilot(self) -> Outcome:
        """Uninstall the Copilot extensions and switch the AI features off."""
        answer = self.prompter.ask(
            "This will uninstall GitHub Copilot extensions and disable AI chat features. Continue?",
            "Yes",
            "No",
            warning=True,
        )
        if answer != "Yes":
            return Outcome.CANCELLED

        try:
            self.prompter.info("Uninstalling GitHub Copilot extensions...")
            extensions = uninstall_extensions(self.host, COPILOT_UNINSTALL_ORDER)
            configured = apply_settings(self.host, copilot_settings(False))
        except Exception as e:
            logger.debug("disable-copilot aborted", exc_info=True)
            self.prompter.error(f"Failed to disable GitHub Copilot: {e}")
            return Outcome.FAILED

        summary = _summary(
            (extensions.succeeded, "extension(s) uninstalled"),
            (configured.succeeded, "setting(s) configured"),
        )

        if extensions.failed or configured.failed:
            errors = _summary(
                (extensions.failed, "extension(s) failed to uninstall"),
                (configured.failed, "setting(s) failed"),
            )
            self.prompter.warning(
                f"Disabled GitHub Copilot with issues: {summary}. Errors: {errors}. Check the log for details."
            )
            return Outcome.ISSUES

        self.prompter.info(
            f"✓ GitHub Copilot disabled! {summary}. Extensions will be fully removed after reloading VS Code."
        )
        return Outcome.DONE

    # ------------------------------------------------------------------
    # cleanup
    # ------------------------------------------------------------------

    def cleanup(self) -> Outcome:
        """Uninstall the catalog's extensions and unset every catalog setting."""
        answer = self.prompter.ask(
            "This will uninstall all configured extensions and reset settings to their default values. "
            "This cannot be undone. Continue?",
            "Yes, Cleanup",
            "Cancel",
            warning=True,
        )
        if answer != "Yes, Cleanup":
            return Outcome.CANCELLED

        try:
            self.prompter.info("Uninstalling extensions...")
            extensions = uninstall_extensions(self.host, cleanup_extensions_for_environment(self.environment))
            reset = reset_settings(self.host, settings_for_environment(self.environment))
        except Exception as e:
            logger.debug("cleanup aborted", exc_info=True)
            self.status.set_status(SetupStatus.ERROR)
            self.prompter.error(f"Failed to cleanup: {e}")
            return Outcome.FAILED

        summary = _summary(
            (extensions.succeeded, "extension(s) uninstalled"),
            (reset.succeeded, "setting(s) reset"),
        )

        if extensions.failed or reset.failed:
            self.status.set_status(SetupStatus.ERROR)
            failed = ", ".join(extensions.failed_items + reset.failed_items)
            self.prompter.warning(f"Cleanup completed with issues: {summary}. Failed: {failed}.")
            if extensions.failed_items:
                self.prompter.info("To uninstall the remaining extensions manually, run:")
                for extension_id in extensions.failed_items:
                    self.prompter.info(f"  code --uninstall-extension {extension_id}")
            return Outcome.ISSUES

        self.status.set_status(SetupStatus.NOT_STARTED)
        self.prompter.info(
            f"✓ Cleanup complete! {summary}. Extensions will be fully removed after reloading VS Code."
        )
        return Outcome.DONE

    # ------------------------------------------------------------------
    # menu
    # ------------------------------------------------------------------

    def menu_items(self) -> List[Dict[str, str]]:
        """Configure, then Enable or Disable Copilot depending on its state, then Cleanup."""
        items = [
            {
                "label": "Configure Settings",
                "description": "Install extensions and apply settings",
                "action": "configure",
            },
        ]
        if self.copilot_enabled():
            items.append({
                "label": "Disable GitHub Copilot",
                "description": "Uninstall GitHub Copilot and disable AI chat features",
                "action": "disable-copilot",
            })
        else:
            items.append({
                "label": "Enable GitHub Copilot",
                "description": "Install and enable GitHub Copilot and AI chat features",
                "action": "enable-copilot",
            })
        items.append({
            "label": "Cleanup",
            "description": "Uninstall extensions and revert settings",
            "action": "cleanup",
        })
        return items

    def run(self, action: str) -> Outcome:
        """Dispatch an action name ("configure", "enable-copilot", ...)."""
        handlers = {
            "configure": self.configure,
            "enable-copilot": self.enable_copilot,
            "disable-copilot": self.disable_copilot,
            "cleanup": self.cleanup,
        }
        if action not in handlers:
            raise ValueError(f"Unknown action: {action}")
        return handlers[action]()

    def show_menu(self) -> Outcome:
        try:
            items = self.menu_items()
        except HostError as e:
            self.prompter.error(f"Could not read current settings: {e}")
            return Outcome.FAILED

        choice = self.prompter.pick(
            items,
            label=lambda item: f"{item['label']} - {item['description']}",
            placeholder=f"{self.status.text} {self.status.tooltip}\nChoose an action:",
        )
        if choice is None:
            return Outcome.CANCELLED
        return self.run(choice["action"])
