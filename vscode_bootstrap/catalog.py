"""Extension and settings catalogs, with per-environment variations."""

from typing import Any, Dict, List

from .environment import Environment

# Extensions installed by "configure" (order is install order)
REQUIRED_EXTENSIONS = [
    "ms-python.python",
    "ms-python.black-formatter",
    "ms-python.flake8",
    "chadalen.vscode-jetbrains-icon-theme",
    "esbenp.prettier-vscode",
    "usernamehw.errorlens",
    "dbaeumer.vscode-eslint",
    "yzhang.markdown-all-in-one",
    "bierner.markdown-mermaid",
    "pomdtr.excalidraw-editor",
]

# Copilot extensions, installed only by "enable-copilot"
COPILOT_EXTENSIONS = ["github.copilot", "github.copilot-chat"]

# Chat depends on copilot, so it has to go first
COPILOT_UNINSTALL_ORDER = ["github.copilot-chat", "github.copilot"]

WSL_EXTENSION = "ms-vscode-remote.remote-wsl"

# Removed before everything else during cleanup (they depend on other entries)
UNINSTALL_FIRST = [
    "ms-python.black-formatter",
    "ms-python.flake8",
    "github.copilot-chat",
]

COPILOT_LANGUAGES = ("*", "plaintext", "markdown", "scminput", "css")


# Settings applied on every environment
COMMON_SETTINGS: Dict[str, Any] = {
    # ========================================
    # WORKBENCH
    # ========================================
    "workbench.tree.indent": 20,
    "workbench.editor.labelFormat": "short",
    "workbench.iconTheme": "vscode-jetbrains-icon-theme-2023-auto",
    "workbench.startupEditor": "none",
    "workbench.colorTheme": "Gruvbox Dark Hard",
    "explorer.compactFolders": False,

    # ========================================
    # EDITOR
    # ========================================
    "editor.tabSize": 4,
    "editor.insertSpaces": True,
    "editor.formatOnSave": True,
    "editor.formatOnPaste": True,
    "editor.bracketPairColorization.enabled": True,
    "editor.guides.bracketPairs": True,
    "editor.inlayHints.enabled": "offUnlessPressed",
    "editor.rulers": [80],
    "editor.minimap.enabled": False,
    "editor.wordWrap": "wordWrapColumn",
    "editor.wrappingStrategy": "advanced",
    "editor.fontFamily": "Iosevka Nerd Font",

    # Git
    "git.openRepositoryInParentFolders": "always",
    "git.autofetch": True,

    # Copilot is off until "enable-copilot" is run
    "github.copilot.enable": {
        "*": False,
        "plaintext": False,
        "markdown": False,
        "scminput": False,
        "css": False,
    },
    "chat.disableAIFeatures": False,

    # ErrorLens
    "errorLens.problemRangeDecorationEnabled": True,
    "errorLens.gutterIconSet": "square",
    "errorLens.followCursor": "closestProblem",

    # ========================================
    # FILES
    # ========================================
    "files.trimTrailingWhitespace": True,
    "files.trimFinalNewlines": True,
    "files.insertFinalNewline": True,
    "files.exclude": {
        "**/.venv": True,
        "**/.git": True,
        "**/.DS_Store": True,
        "**/node_modules": True,
        "**/.vscode": False,
    },

    # Markdown
    "markdown-mermaid.lightModeTheme": "dark",
    "[markdown]": {
        "editor.defaultFormatter": "esbenp.prettier-vscode",
    },

    # Emmet
    "emmet.includeLanguages": {
        "django-html": "html",
        "jinja-html": "html",
        "javascript": "javascriptreact",
    },

    # YAML
    "redhat.telemetry.enabled": False,

    # Terminal
    "terminal.integrated.scrollback": 10000,

    # ========================================
    # JAVASCRIPT / TYPESCRIPT
    # ========================================
    "javascript.updateImportsOnFileMove.enabled": "always",
    "typescript.updateImportsOnFileMove.enabled": "always",
    "javascript.suggest.autoImports": False,
    "typescript.suggest.autoImports": False,
    "javascript.inlayHints.functionLikeReturnTypes.enabled": True,
    "javascript.inlayHints.parameterNames.enabled": "all",
    "javascript.inlayHints.parameterTypes.enabled": True,
    "javascript.inlayHints.propertyDeclarationTypes.enabled": True,
    "javascript.inlayHints.variableTypes.enabled": True,
    "typescript.inlayHints.enumMemberValues.enabled": True,
    "typescript.inlayHints.functionLikeReturnTypes.enabled": True,
    "typescript.inlayHints.parameterNames.enabled": "all",
    "typescript.inlayHints.parameterTypes.enabled": True,
    "typescript.inlayHints.propertyDeclarationTypes.enabled": True,
    "typescript.inlayHints.variableTypes.enabled": True,
    "[javascript]": {
        "editor.defaultFormatter": "esbenp.prettier-vscode",
    },
    "[javascriptreact]": {
        "editor.defaultFormatter": "esbenp.prettier-vscode",
    },
    "[typescript]": {
        "editor.defaultFormatter": "esbenp.prettier-vscode",
    },
    "[typescriptreact]": {
        "editor.defaultFormatter": "esbenp.prettier-vscode",
    },
    "totalTypeScript.hideAllTips": False,
    "totalTypeScript.hideBasicTips": False,

    # ========================================
    # PYTHON
    # ========================================
    "python.analysis.autoImportCompletions": False,
    "python.analysis.typeCheckingMode": "standard",
    "python.analysis.diagnosticMode": "workspace",
    "python.analysis.completeFunctionParens": True,
    "python.analysis.generateWithTypeAnnotation": True,
    "python.analysis.inlayHints.callArgumentNames": "all",
    "python.analysis.inlayHints.functionReturnTypes": True,
    "python.analysis.inlayHints.variableTypes": True,
    "python.analysis.typeEvaluation.strictDictionaryInference": True,
    "python.analysis.typeEvaluation.strictListInference": True,
    "python.analysis.typeEvaluation.strictSetInference": True,
    "[python]": {
        "editor.defaultFormatter": "ms-python.black-formatter",
    },

    # HTML / CSS
    "html.format.indentInnerHtml": True,
    "[css]": {
        "editor.defaultFormatter": "esbenp.prettier-vscode",
    },

    # ========================================
    # VIM
    # ========================================
    "vim.vimrc.path": "$HOME/.config/vim/vimrc",
    "vim.vimrc.enable": True,
    "vim.neovimUseConfigFile": True,
    "vim.leader": "<space>",
    "vim.highlightedyank.enable": True,
    "vim.useSystemClipboard": True,
    "vim.sneak": True,
    "vim.sneakReplacesF": True,
    "open-in-vim.useNeovim": True,
    "vim.normalModeKeyBindingsNonRecursive": [
        {
            "before": ["<leader>", "/"],
            "after": ["<leader>", "<leader>", "s"],
        },
    ],
    "vim.normalModeKeyBindings": [
        {
            "before": ["<leader>", "f", "f"],
            "commands": ["television.ToggleFileFinder"],
        },
        {
            "before": ["<leader>", "f", "r"],
            "commands": ["television.ToggleTextFinder"],
        },
        {
            "before": ["<leader>", "<space>"],
            "commands": ["workbench.action.showAllEditors"],
        },
    ],
}

# Windows tool paths (vs64 C64 development tools)
WINDOWS_SETTINGS: Dict[str, Any] = {
    "vs64.showWelcome": False,
    "vs64.kickInstallDir": "E:\\c64\\coding\\KickAssembler",
    "vs64.acmeInstallDir": "E:\\c64\\coding",
    "vs64.viceExecutable": "E:\\GTK3VICE-3.10-win64\\bin\\x64sc.exe",
    "vs64.llvmInstallDir": "E:\\c64\\coding\\llvm-mos",
    "vs64.cc65InstallDir": "C:\\Users\\bart\\scoop\\apps\\cc65\\current",
    "vs64.oscar64InstallDir": "C:\\Program Files\\Oscar64",
}

LINUX_SETTINGS: Dict[str, Any] = {}

WSL_SETTINGS: Dict[str, Any] = {}


def extensions_for_environment(environment: Environment) -> List[str]:
    """Extensions "configure" installs. Windows and WSL also get Remote - WSL."""
    extensions = list(REQUIRED_EXTENSIONS)
    if environment in (Environment.WINDOWS, Environment.WSL):
        extensions.append(WSL_EXTENSION)
    return extensions


def settings_for_environment(environment: Environment) -> Dict[str, Any]:
    """Common settings merged with the OS-specific ones (OS-specific wins)."""
    if environment == Environment.WINDOWS:
        os_specific = WINDOWS_SETTINGS
    elif environment == Environment.WSL:
        # WSL sessions are usually driven from a Windows desktop
        os_specific = {**WINDOWS_SETTINGS, **WSL_SETTINGS}
    elif environment == Environment.LINUX:
        os_specific = LINUX_SETTINGS
    else:
        os_specific = {}
    return {**COMMON_SETTINGS, **os_specific}


def cleanup_extensions_for_environment(environment: Environment) -> List[str]:
    """
    Uninstall order for cleanup.

    Dependents in UNINSTALL_FIRST go first (attempted even if they are not part
    of the catalog), then the remaining extensions in catalog order. The WSL
    extension is only removed from inside WSL; on Windows it is left alone
    since it is needed to reach WSL at all.
    """
    extensions = list(REQUIRED_EXTENSIONS)
    if environment == Environment.WSL:
        extensions.append(WSL_EXTENSION)
    remaining = [ext for ext in extensions if ext not in UNINSTALL_FIRST]
    return UNINSTALL_FIRST + remaining


def copilot_settings(enabled: bool) -> Dict[str, Any]:
    """Settings that switch Copilot and the AI chat features on or off."""
    return {
        "github.copilot.enable": {language: enabled for language in COPILOT_LANGUAGES},
        "chat.disableAIFeatures": not enabled,
    }
