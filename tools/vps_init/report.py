"""Rich terminal output: step logging, failure guidance, final instructions."""

from pathlib import Path

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from errors import UserCancelled, VpsInitError

console = Console()


def log_info(message: str) -> None:
    console.print(f"[blue]\\[INFO][/blue] {message}")


def log_success(message: str) -> None:
    console.print(f"[green]\\[SUCCESS][/green] {message}")


def log_warning(message: str) -> None:
    console.print(f"[yellow]\\[WARNING][/yellow] {message}")


def log_error(message: str) -> None:
    console.print(f"[red]\\[ERROR][/red] {message}")


def log_step(message: str) -> None:
    console.print(f"[magenta]\\[STEP][/magenta] {message}")


def show_failure(error: VpsInitError) -> None:
    """Display a fatal error with its remediation hints."""
    console.print()
    log_error(error.message)
    if error.hints:
        console.print()
        console.print("Possible issues:")
        for hint in error.hints:
            console.print(f"  • {hint}")
    show_retry()


def show_retry() -> None:
    console.print()
    console.print("Temporary files have been cleaned up. To try again:")
    console.print("  sudo initialize-kubu-vps")
    console.print()


def show_cancelled(cancelled: UserCancelled) -> None:
    """Neutral notice for an operator cancellation."""
    console.print(f"\n  [yellow]{cancelled.message}[/yellow]\n")


def manual_deploy_command(script: Path, token_file: Path) -> str:
    # Reads the token at run time so it never appears on screen
    return f"sudo GITHUB_TOKEN=\"$(sudo cat {token_file})\" {script} --deploy"


def show_manual_deploy(script: Path, token_file: Path) -> None:
    log_info("Deployment skipped")
    console.print()
    console.print("To run deployment later:")
    console.print(f"  cd {script.parent}")
    console.print(f"  {manual_deploy_command(script, token_file)}")
    console.print()


def show_deployment_plan(script_dir: Path) -> None:
    console.print()
    console.print("The management script has been downloaded successfully.")
    console.print("Next step: Deploy the server configuration to your VPS.")
    console.print()
    console.print("This will:")
    console.print("  • Clone the private repository temporarily")
    console.print(f"  • Deploy scripts to {script_dir}/")
    console.print("  • Deploy Docker projects to /srv/docker/")
    console.print("  • Install welcome message to /etc/profile.d/")
    console.print("  • Set up all aliases and commands")
    console.print()


def show_final_instructions(script_dir: Path, token_dir: Path) -> None:
    """Display available commands, next steps and file locations."""
    commands = Table(title="Available commands", show_header=False, box=None)
    commands.add_column("Command", style="cyan", min_width=16)
    commands.add_column("Description")
    commands.add_row("welcome", "Show server status and this information")
    commands.add_row("install-docker", "Install Docker and Docker Compose")
    commands.add_row("setup-groups", "Add current user to sudo and docker groups")
    commands.add_row("manage-kubu-vps", "Main management tool")
    commands.add_row("dockerdir", "Navigate to Docker projects")

    console.print()
    console.print(Panel(
        "Your VPS is now configured with server management tools.",
        title="VPS Setup Complete!",
        border_style="green",
    ))
    console.print(commands)
    console.print()
    console.print("[cyan]Next recommended steps:[/cyan]")
    console.print("  1. Install Docker: install-docker")
    console.print("  2. Add user to groups: setup-groups")
    console.print("  3. Logout and login again to reload environment")
    console.print("  4. Check status: welcome")
    console.print()
    console.print("[cyan]Files and directories:[/cyan]")
    console.print(f"  {script_dir}/    - Management scripts")
    console.print("  /srv/docker/     - Docker project configurations")
    console.print("  /srv/docs/       - Documentation")
    console.print(f"  {token_dir}/     - Secure token storage")
    console.print()
    console.print("For help: manage-kubu-vps --help")
    console.print()
