"""Interactive prompts using questionary + rich.

The token workflow talks to the operator only through a ``Prompter``, so
tests can drive it with scripted answers instead of a terminal.
"""

from typing import Protocol

import questionary
from questionary import Style
from rich.console import Console
from rich.panel import Panel

console = Console()

# Custom questionary style
STYLE = Style([
    ("qmark", "fg:ansicyan bold"),
    ("question", "bold"),
    ("answer", "fg:ansicyan"),
    ("pointer", "fg:ansicyan bold"),
    ("highlighted", "fg:ansicyan bold"),
    ("selected", "fg:ansigreen"),
    ("separator", "fg:ansibrightblack"),
    ("instruction", "fg:ansibrightblack"),
])

BANNER = """
╔══════════════════════════════════════════════════════════╗
║                VPS Server Initialization                 ║
║        KuBu server configuration from GitHub             ║
╚══════════════════════════════════════════════════════════╝
"""

REUSE = "reuse"
REPLACE = "replace"
GUIDE = "guide"

EXISTING_TOKEN_CHOICES = [
    (REUSE, "Use the existing token"),
    (REPLACE, "Enter a new token"),
    (GUIDE, "Show how to create a token first"),
]


class Prompter(Protocol):
    """Operator I/O used by the token workflow.

    Every ``ask``/``choose`` returns None when the operator aborts
    (Ctrl-C or end of input).
    """

    def ask_secret(self, message: str) -> str | None: ...

    def ask_yes_no(self, message: str, default: bool = False) -> bool | None: ...

    def choose(self, message: str, choices: list[tuple[str, str]]) -> str | None: ...

    def show_text(self, text: str) -> None: ...


class QuestionaryPrompter:
    """Terminal prompts backed by questionary."""

    def ask_secret(self, message: str) -> str | None:
        return questionary.password(message, style=STYLE).ask()

    def ask_yes_no(self, message: str, default: bool = False) -> bool | None:
        return questionary.confirm(message, default=default, style=STYLE).ask()

    def choose(self, message: str, choices: list[tuple[str, str]]) -> str | None:
        return questionary.select(
            message,
            choices=[questionary.Choice(title, value=value) for value, title in choices],
            style=STYLE,
        ).ask()

    def show_text(self, text: str) -> None:
        console.print(Panel(text, border_style="bright_cyan"))


def show_banner() -> None:
    """Display the ASCII art banner and what is about to happen."""
    console.print(BANNER, style="bright_cyan")
    console.print("This script will set up your VPS with the server configuration.")
    console.print()
    console.print("What will be installed:")
    console.print("  • Server management scripts")
    console.print("  • Docker project configurations")
    console.print("  • Welcome message and aliases")
    console.print("  • Documentation and tools")
    console.print()


def token_guide(hostname: str, prefix: str = "ghp_") -> str:
    """Step-by-step instructions for creating a classic personal access token."""
    return (
        "To access the private repository, you need a GitHub token.\n"
        "\n"
        "[yellow]IMPORTANT: Log in to GitHub with the admin account![/yellow]\n"
        "\n"
        "1. Open this URL in your browser:\n"
        "   [cyan]https://github.com/settings/tokens[/cyan]\n"
        "\n"
        "2. Click 'Generate new token' → 'Generate new token (classic)'\n"
        "\n"
        "3. Configure the token:\n"
        f"   • Name: 'VPS Management - {hostname}'\n"
        "   • Expiration: 90 days (or as needed)\n"
        "   • Scopes: Check 'repo' (Full control of private repositories)\n"
        "\n"
        "4. Click 'Generate token'\n"
        "\n"
        f"5. Copy the token (starts with '{prefix}')\n"
        "   You won't be able to see it again!"
    )


def ask_continue(prompter: Prompter) -> bool | None:
    return prompter.ask_yes_no("Continue with initialization?", default=False)


def ask_run_deployment(prompter: Prompter) -> bool | None:
    return prompter.ask_yes_no("Run deployment now?", default=True)
