import subprocess

import pytest

from vscode_bootstrap import extensions
from vscode_bootstrap.exceptions import ExtensionNotInstalledError
from vscode_bootstrap.host import EditorHost
from vscode_bootstrap.prompts import Prompter


class FakeHost(EditorHost):
    def __init__(self, installed=(), settings=None, install_errors=None, uninstall_errors=None, setting_errors=None):
        self.installed = {ext.lower() for ext in installed}
        self.settings = dict(settings or {})
        self.install_errors = install_errors or {}
        self.uninstall_errors = uninstall_errors or {}
        self.setting_errors = setting_errors or {}
        self.calls = []
        self.saves = 0

    def installed_extensions(self):
        return self.installed

    def install_extension(self, extension_id):
        self.calls.append(("install", extension_id))
        if extension_id in self.install_errors:
            raise self.install_errors[extension_id]
        self.installed.add(extension_id.lower())

    def uninstall_extension(self, extension_id):
        self.calls.append(("uninstall", extension_id))
        if extension_id in self.uninstall_errors:
            raise self.uninstall_errors[extension_id]
        if extension_id.lower() not in self.installed:
            raise ExtensionNotInstalledError(f"Extension '{extension_id}' is not installed.")
        self.installed.discard(extension_id.lower())

    def get_setting(self, key):
        return self.settings.get(key)

    def update_setting(self, key, value):
        if key in self.setting_errors:
            raise self.setting_errors[key]
        if value is None:
            self.settings.pop(key, None)
        else:
            self.settings[key] = value

    def save(self):
        self.saves += 1


@pytest.fixture
def make_host():
    return FakeHost


@pytest.fixture
def make_prompter():
    """Prompter fed from a list of answers; returns (prompter, printed lines)."""

    def _make(*answers, assume_yes=False):
        pending = list(answers)
        printed = []

        def _input(prompt):
            if not pending:
                raise EOFError
            return pending.pop(0)

        return Prompter(assume_yes=assume_yes, input_func=_input, output_func=printed.append), printed

    return _make


class FakeCLI:
    """Records `code` invocations and answers from a table keyed by flag."""

    def __init__(self, responses):
        self.responses = responses
        self.calls = []

    def __call__(self, cmd, capture_output, text, check):
        self.calls.append(cmd)
        returncode, stdout, stderr = self.responses[cmd[1]]
        return subprocess.CompletedProcess(cmd, returncode, stdout, stderr)


@pytest.fixture
def fake_cli(monkeypatch):
    """Replace the `code` CLI; keyword names map to flags (list_extensions -> --list-extensions)."""

    def _install(**responses):
        cli = FakeCLI({f"--{flag.replace('_', '-')}": value for flag, value in responses.items()})
        monkeypatch.setattr(extensions.shutil, "which", lambda name: f"/usr/bin/{name}")
        monkeypatch.setattr(extensions.subprocess, "run", cli)
        return cli

    return _install
