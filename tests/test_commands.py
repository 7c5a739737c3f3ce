import json

from vscode_bootstrap.catalog import (
    COPILOT_EXTENSIONS,
    REQUIRED_EXTENSIONS,
    WSL_EXTENSION,
    settings_for_environment,
)
from vscode_bootstrap.commands import (
    Commands,
    Outcome,
    apply_settings,
    install_extensions,
    uninstall_extensions,
)
from vscode_bootstrap.environment import Environment
from vscode_bootstrap.exceptions import HostError, UnregisteredSettingError
from vscode_bootstrap.host import CodeCLIHost
from vscode_bootstrap.status import SetupStatus, StatusIndicator


def _commands(host, prompter, environment=Environment.LINUX):
    status = StatusIndicator(environment, output_func=lambda line: None)
    return Commands(host, prompter, environment=environment, status=status)


def test_install_extensions_tally(make_host):
    host = make_host(installed=["MS-Python.Python"], install_errors={"b.b": HostError("boom")})
    tally = install_extensions(host, ["ms-python.python", "a.a", "b.b", "c.c"])
    assert (tally.succeeded, tally.skipped, tally.failed) == (2, 1, 1)
    assert tally.failed_items == ["b.b"]
    assert host.calls == [("install", "a.a"), ("install", "b.b"), ("install", "c.c")]


def test_uninstall_extensions_skips_missing(make_host):
    host = make_host(installed=["a.a"], uninstall_errors={"c.c": HostError("locked")})
    tally = uninstall_extensions(host, ["a.a", "b.b", "c.c"])
    assert (tally.succeeded, tally.skipped, tally.failed) == (1, 1, 1)
    assert tally.failed_items == ["c.c"]


def test_unregistered_setting_counts_as_applied(make_host):
    host = make_host(setting_errors={
        "x.one": UnregisteredSettingError("x.one is not a registered configuration"),
        "x.two": HostError("Unable to write: not a registered configuration."),
        "x.three": HostError("disk full"),
    })
    tally = apply_settings(host, {"x.one": 1, "x.two": 2, "x.three": 3, "x.four": 4})
    assert (tally.succeeded, tally.failed) == (3, 1)
    assert tally.failed_items == ["x.three"]
    assert host.settings == {"x.four": 4}
    assert host.saves == 1


def test_configure_on_linux(make_host, make_prompter):
    host = make_host(installed=["ms-python.python"])
    prompter, printed = make_prompter("Yes")
    commands = _commands(host, prompter)

    assert commands.configure() is Outcome.DONE
    assert commands.status.status is SetupStatus.COMPLETE
    assert host.settings == settings_for_environment(Environment.LINUX)
    installed = [ext for action, ext in host.calls if action == "install"]
    assert installed == REQUIRED_EXTENSIONS[1:]
    assert WSL_EXTENSION not in installed
    assert printed[-1].startswith("✓ Setup complete! 9 extension(s) installed, 1 extension(s) already installed")
    assert "Reload VS Code" in printed[-1]


def test_configure_on_windows_adds_remote_wsl(make_host, make_prompter):
    host = make_host(installed=REQUIRED_EXTENSIONS)
    prompter, printed = make_prompter(assume_yes=True)
    commands = _commands(host, prompter, Environment.WINDOWS)

    assert commands.configure() is Outcome.DONE
    assert host.calls == [("install", WSL_EXTENSION)]
    assert host.settings["vs64.showWelcome"] is False
    assert "Note: You'll need to run this again after connecting to WSL" in printed[0]
    assert printed[-1].startswith("✓ Setup complete on Windows!")


def test_configure_declined(make_host, make_prompter):
    host = make_host()
    prompter, _ = make_prompter("No")
    commands = _commands(host, prompter)

    assert commands.configure() is Outcome.CANCELLED
    assert commands.status.status is SetupStatus.NOT_STARTED
    assert host.calls == []
    assert host.settings == {}


def test_configure_with_failures(make_host, make_prompter):
    host = make_host(install_errors={"usernamehw.errorlens": HostError("offline")})
    prompter, printed = make_prompter("y")
    commands = _commands(host, prompter)

    assert commands.configure() is Outcome.ISSUES
    assert commands.status.status is SetupStatus.ERROR
    assert "Errors: 1 extension(s) failed" in printed[-1]
    # the rest of the batch still ran
    assert ("install", "pomdtr.excalidraw-editor") in host.calls


def test_configure_aborts_on_save_error(make_host, make_prompter):
    host = make_host()

    def _broken_save():
        raise HostError("Permission denied writing to settings.json")

    host.save = _broken_save
    prompter, printed = make_prompter("Yes")
    commands = _commands(host, prompter)

    assert commands.configure() is Outcome.FAILED
    assert commands.status.status is SetupStatus.ERROR
    assert printed[-1] == "Error: Failed to configure settings: Permission denied writing to settings.json"


def test_enable_copilot(make_host, make_prompter):
    host = make_host()
    prompter, printed = make_prompter("Yes")
    commands = _commands(host, prompter)

    assert commands.enable_copilot() is Outcome.DONE
    assert [ext for _, ext in host.calls] == COPILOT_EXTENSIONS
    assert host.settings["chat.disableAIFeatures"] is False
    assert all(host.settings["github.copilot.enable"].values())
    assert printed[-1].startswith("✓ GitHub Copilot enabled! 2 extension(s) installed, 2 setting(s) configured.")


def test_enable_copilot_already_installed(make_host, make_prompter):
    host = make_host(installed=COPILOT_EXTENSIONS)
    prompter, printed = make_prompter("Yes")
    assert _commands(host, prompter).enable_copilot() is Outcome.DONE
    assert printed[-1].startswith("✓ GitHub Copilot is already enabled!")


def test_disable_copilot(make_host, make_prompter):
    host = make_host(installed=["github.copilot"])
    prompter, printed = make_prompter("1")
    commands = _commands(host, prompter)

    assert commands.disable_copilot() is Outcome.DONE
    assert host.calls == [("uninstall", "github.copilot-chat"), ("uninstall", "github.copilot")]
    assert host.settings["chat.disableAIFeatures"] is True
    assert not any(host.settings["github.copilot.enable"].values())
    assert printed[-1].startswith("✓ GitHub Copilot disabled! 1 extension(s) uninstalled")


def test_cleanup_requires_explicit_answer(make_host, make_prompter):
    host = make_host(installed=REQUIRED_EXTENSIONS)
    prompter, _ = make_prompter("yes")
    assert _commands(host, prompter).cleanup() is Outcome.CANCELLED
    assert host.calls == []


def test_cleanup(make_host, make_prompter):
    host = make_host(
        installed=REQUIRED_EXTENSIONS + [WSL_EXTENSION],
        settings={**settings_for_environment(Environment.WSL), "user.own": 1},
    )
    prompter, printed = make_prompter("Yes, Cleanup")
    commands = _commands(host, prompter, Environment.WSL)

    assert commands.cleanup() is Outcome.DONE
    assert host.installed == set()
    assert host.settings == {"user.own": 1}
    assert host.calls[0] == ("uninstall", "ms-python.black-formatter")
    assert host.calls[-1] == ("uninstall", WSL_EXTENSION)
    assert "11 extension(s) uninstalled" in printed[-1]


def test_cleanup_lists_failed_extensions(make_host, make_prompter):
    host = make_host(installed=REQUIRED_EXTENSIONS, uninstall_errors={"ms-python.python": HostError("in use")})
    prompter, printed = make_prompter("Yes, Cleanup")
    commands = _commands(host, prompter)

    assert commands.cleanup() is Outcome.ISSUES
    assert "Failed: ms-python.python." in printed[-3]
    assert printed[-1] == "  code --uninstall-extension ms-python.python"


def test_copilot_enabled(make_host, make_prompter):
    prompter, _ = make_prompter()
    assert not _commands(make_host(), prompter).copilot_enabled()
    assert _commands(make_host(settings={"github.copilot.enable": {"*": False, "css": True}}), prompter).copilot_enabled()
    assert _commands(make_host(settings={"chat.disableAIFeatures": False}), prompter).copilot_enabled()
    assert not _commands(
        make_host(settings={"chat.disableAIFeatures": True, "github.copilot.enable": {"*": False}}), prompter
    ).copilot_enabled()


def test_menu_offers_enable_or_disable(make_host, make_prompter):
    prompter, _ = make_prompter()
    actions = [item["action"] for item in _commands(make_host(), prompter).menu_items()]
    assert actions == ["configure", "enable-copilot", "cleanup"]

    host = make_host(settings={"github.copilot.enable": {"*": True}})
    actions = [item["action"] for item in _commands(host, prompter).menu_items()]
    assert actions == ["configure", "disable-copilot", "cleanup"]


def test_menu_dispatches_choice(make_host, make_prompter):
    host = make_host()
    prompter, _ = make_prompter("2", "Yes")
    assert _commands(host, prompter).show_menu() is Outcome.DONE
    assert [ext for _, ext in host.calls] == COPILOT_EXTENSIONS


def test_menu_dismissed(make_host, make_prompter):
    prompter, _ = make_prompter()
    assert _commands(make_host(), prompter).show_menu() is Outcome.CANCELLED


def test_configure_then_cleanup_edits_the_settings_file(fake_cli, make_prompter, tmp_path):
    path = tmp_path / "settings.json"
    path.write_text('{\n    "user.own": 1\n}\n', encoding="utf-8")
    cli = fake_cli(
        list_extensions=(0, "\n".join(REQUIRED_EXTENSIONS), ""),
        uninstall_extension=(0, "", ""),
    )
    prompter, printed = make_prompter("Yes", "Yes, Cleanup")
    commands = _commands(CodeCLIHost(path, backup=False), prompter)

    assert commands.configure() is Outcome.DONE
    assert json.loads(path.read_text(encoding="utf-8")) == {
        "user.own": 1,
        **settings_for_environment(Environment.LINUX),
    }

    assert commands.cleanup() is Outcome.DONE
    assert json.loads(path.read_text(encoding="utf-8")) == {"user.own": 1}
    assert not any("--install-extension" in cmd for cmd in cli.calls)
