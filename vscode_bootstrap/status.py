"""Setup status indicator."""

import logging
from enum import Enum
from typing import Callable

from .environment import Environment, environment_label

logger = logging.getLogger(__name__)


class SetupStatus(str, Enum):
    NOT_STARTED = "not-started"
    IN_PROGRESS = "in-progress"
    COMPLETE = "complete"
    ERROR = "error"


# (icon, message) per status
STATUS_DISPLAY = {
    SetupStatus.NOT_STARTED: ("⚙", "Click to configure settings"),
    SetupStatus.IN_PROGRESS: ("⟳", "Setup in progress..."),
    SetupStatus.COMPLETE: ("✓", "Setup complete"),
    SetupStatus.ERROR: ("⚠", "Setup completed with errors. Click to retry."),
}


class StatusIndicator:
    """Tracks the setup status and echoes each change to the console."""

    def __init__(self, environment: Environment, output_func: Callable[[str], None] = print):
        self.environment = environment
        self.status = SetupStatus.NOT_STARTED
        self._print = output_func

    @property
    def text(self) -> str:
        return STATUS_DISPLAY[self.status][0]

    @property
    def tooltip(self) -> str:
        label = environment_label(self.environment).strip()
        message = STATUS_DISPLAY[self.status][1]
        return f"{label}: {message}" if label else message

    def set_status(self, status: SetupStatus) -> None:
        if status == self.status:
            return
        logger.debug(f"Status {self.status.value} -> {status.value}")
        self.status = status
        self._print(f"{self.text} {self.tooltip}")
