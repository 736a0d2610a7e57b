#!/usr/bin/env python3
"""KuBu VPS initializer: token setup, management script download, deployment.

Interactive tool run once on a fresh VPS. Obtains a GitHub token with access
to the private server-scripts repository, stores it securely, downloads the
management script and runs its deployment.

Usage:
    sudo python initializer.py            # Interactive
    sudo python initializer.py --yes      # Skip the welcome confirmation
    sudo python initializer.py --skip-deploy
"""

import argparse
import sys
from pathlib import Path

from python_socks import parse_proxy_url

from deployer import check_prerequisites, cleanup_work_files, run_deployment
from errors import ExitStatus, UserCancelled, VpsInitError
from persistor import SecurePersistor
from report import (
    console, log_error, log_info, log_step, log_success, log_warning,
    show_cancelled, show_deployment_plan, show_failure,
    show_final_instructions, show_manual_deploy, show_retry,
)
from script_fetcher import download_management_script, install_script
from settings import (
    DEFAULT_RETRY_BACKOFF, DEFAULT_TIMEOUT, PRIVATE_REPO_RAW, REQUIRED_TOOLS,
    SCRIPT_DIR, TOKEN_DIR, WORK_DIR, Settings,
)
from token_acquirer import TokenAcquirer
from token_locator import TokenLocator
from token_validator import TokenValidator
from wizard import Prompter, QuestionaryPrompter, ask_continue, ask_run_deployment, show_banner


def proxy_url(value: str) -> str:
    """argparse type for --proxy: reject URLs the proxy connector cannot use."""
    try:
        parse_proxy_url(value)
    except (ValueError, TypeError) as e:
        raise argparse.ArgumentTypeError(
            f"invalid proxy URL '{value}' ({e}); expected socks5://host:port or http://host:port"
        ) from e
    return value


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="KuBu VPS initialization: GitHub token setup and deployment",
    )
    parser.add_argument(
        "--yes", "-y",
        action="store_true",
        help="Skip the initial confirmation prompt",
    )
    parser.add_argument(
        "--timeout", "-t",
        type=float, default=DEFAULT_TIMEOUT,
        help=f"Network timeout in seconds (default: {DEFAULT_TIMEOUT:g})",
    )
    parser.add_argument(
        "--retry-backoff",
        type=float, default=DEFAULT_RETRY_BACKOFF,
        help="Seconds to wait per failed token attempt before re-prompting "
             f"(default: {DEFAULT_RETRY_BACKOFF:g})",
    )
    parser.add_argument(
        "--work-dir",
        type=Path, default=WORK_DIR,
        help=f"Scratch directory (default: {WORK_DIR})",
    )
    parser.add_argument(
        "--token-dir",
        type=Path, default=TOKEN_DIR,
        help=f"Secure token directory (default: {TOKEN_DIR})",
    )
    parser.add_argument(
        "--script-dir",
        type=Path, default=SCRIPT_DIR,
        help=f"Install directory for the management script (default: {SCRIPT_DIR})",
    )
    parser.add_argument(
        "--raw-url",
        default=PRIVATE_REPO_RAW,
        help="Raw content base URL of the private repository",
    )
    parser.add_argument(
        "--proxy",
        type=proxy_url,
        help="Proxy URL for GitHub requests (socks5://host:port or http://host:port)",
    )
    parser.add_argument(
        "--skip-deploy",
        action="store_true",
        help="Stop after installing the management script",
    )
    return parser.parse_args(argv)


def settings_from_args(args: argparse.Namespace) -> Settings:
    return Settings(
        raw_base_url=args.raw_url,
        work_dir=args.work_dir,
        token_dir=args.token_dir,
        script_dir=args.script_dir,
        timeout=args.timeout,
        retry_backoff=args.retry_backoff,
        proxy=args.proxy,
        assume_yes=args.yes,
        skip_deploy=args.skip_deploy,
    )


def build_acquirer(
    settings: Settings,
    prompter: Prompter,
    persistor: SecurePersistor,
    validator: TokenValidator | None = None,
) -> TokenAcquirer:
    if validator is None:
        validator = TokenValidator(settings.script_url, settings.timeout, settings.proxy)
    return TokenAcquirer(
        locator=TokenLocator(settings.search_locations()),
        validator=validator,
        persistor=persistor,
        prompter=prompter,
        hostname=settings.hostname,
        token_prefix=settings.token_prefix,
        max_attempts=settings.max_attempts,
        retry_backoff=settings.retry_backoff,
    )


def run(
    settings: Settings,
    prompter: Prompter,
    validator: TokenValidator | None = None,
) -> ExitStatus:
    """Run every initialization step. Errors propagate to ``main``."""
    show_banner()
    if not settings.assume_yes:
        answer = ask_continue(prompter)
        if not answer:
            raise UserCancelled()

    log_step("Checking prerequisites...")
    check_prerequisites(REQUIRED_TOOLS, [settings.token_dir, settings.script_dir])
    log_success("Prerequisites check passed")

    persistor = SecurePersistor(settings.scratch_token_path, settings.durable_token_path)
    credential = build_acquirer(settings, prompter, persistor, validator).acquire()

    downloaded = settings.downloaded_script_path
    try:
        paths = persistor.persist(credential)
        log_success(f"Token secured in {paths.durable}")

        log_step("Downloading management script...")
        download_management_script(
            paths.scratch, settings.script_url, downloaded,
            settings.timeout, settings.proxy,
        )
        installed = install_script(downloaded, settings.script_dir)
    finally:
        persistor.remove_scratch()
        cleanup_work_files([downloaded])
    log_success(f"Management script installed to {installed}")

    log_step("Ready for deployment")
    show_deployment_plan(settings.script_dir)
    if settings.skip_deploy:
        show_manual_deploy(installed, paths.durable)
        return ExitStatus.SUCCESS
    answer = ask_run_deployment(prompter)
    if answer is None:
        raise UserCancelled()
    if not answer:
        show_manual_deploy(installed, paths.durable)
        return ExitStatus.USER_CANCELLED

    log_info("Starting deployment...")
    run_deployment(installed, credential, settings.work_dir, paths.durable)
    log_success("Deployment completed successfully!")

    log_step("Loading welcome message...")
    if settings.welcome_script.is_file():
        log_info("Welcome function installed - type 'welcome' to display")
    else:
        log_warning("Welcome script not found - will be available after logout/login")

    show_final_instructions(settings.script_dir, settings.token_dir)
    log_success("VPS initialization completed successfully!")
    return ExitStatus.SUCCESS


def main(argv: list[str] | None = None) -> None:
    args = parse_args(argv)
    settings = settings_from_args(args)

    try:
        status = run(settings, QuestionaryPrompter())
    except UserCancelled as e:
        show_cancelled(e)
        status = e.exit_status
    except KeyboardInterrupt:
        show_cancelled(UserCancelled())
        status = ExitStatus.USER_CANCELLED
    except VpsInitError as e:
        show_failure(e)
        status = e.exit_status
    except OSError as e:
        log_error(f"Initialization failed: {e}")
        console.print("  Check permissions on the token and script directories.")
        show_retry()
        status = ExitStatus.FAILURE

    sys.exit(int(status))


if __name__ == "__main__":
    main()
