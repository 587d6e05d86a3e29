"""Command line entry point: write a commit message for the staged changes."""

from __future__ import annotations

import argparse
import subprocess
import sys
from importlib.metadata import PackageNotFoundError, version

from dotenv import load_dotenv

from . import providers
from .config import Config, handle_config_command
from .providers import ApiError


class GitError(Exception):
    """A git command failed."""


def _run_git(*args: str) -> subprocess.CompletedProcess[bytes]:
    try:
        return subprocess.run(["git", *args], capture_output=True)
    except OSError as exc:
        raise GitError(f"Failed to run git: {exc}") from exc


def _stderr_text(result: subprocess.CompletedProcess[bytes]) -> str:
    return (result.stderr or b"").decode("utf-8", errors="replace")


def get_staged_diff() -> str:
    """Return the output of ``git diff --staged``."""
    result = _run_git("diff", "--staged")
    if result.returncode != 0:
        raise GitError(f"Failed to get git diff: {_stderr_text(result)}")
    try:
        return (result.stdout or b"").decode("utf-8")
    except UnicodeDecodeError as exc:
        raise GitError(f"git diff output is not valid UTF-8: {exc}") from exc


def generate_commit_message(diff: str, config: Config | None = None) -> str:
    """Ask the configured AI service for a commit message describing ``diff``."""
    if config is None:
        config = Config.load()
    api_key = config.get_api_key()
    if config.custom_prompt is not None:
        system_prompt = config.custom_prompt
    else:
        system_prompt = config.language.system_prompt()
    user_prompt = config.language.user_prompt(diff)
    return providers.generate_commit_message(
        config.platform, api_key, config.get_model_name(), system_prompt, user_prompt
    )


def commit_with_message(message: str) -> None:
    """Run ``git commit`` with ``message``."""
    result = _run_git("commit", "-m", message)
    if result.returncode != 0:
        raise GitError(f"Failed to commit: {_stderr_text(result)}")
    print("Committed successfully!")


def _version() -> str:
    try:
        return version("aicommit")
    except PackageNotFoundError:
        return "unknown"


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="aic", description="Generate commit messages using AI"
    )
    parser.add_argument("-V", "--version", action="version", version=f"%(prog)s {_version()}")
    parser.add_argument(
        "-c",
        "--commit",
        action="store_true",
        help="Use the generated message to commit automatically",
    )
    commands = parser.add_subparsers(dest="command")
    config = commands.add_parser("config", help="Set or get API configuration")
    config.add_argument("--api", action="store_true", help="Set API key interactively")
    config.add_argument("--show", action="store_true", help="Show current configuration")
    config.add_argument(
        "--language",
        action="store_true",
        help="Set language for commit messages (interactive)",
    )
    config.add_argument(
        "--prompt",
        action="store_true",
        help="Set custom prompt for commit messages (interactive)",
    )
    return parser


def _generate(commit: bool) -> None:
    diff = get_staged_diff()
    if not diff:
        print("No staged changes found.")
        return

    config = Config.load()
    print(f"Generating commit message using {config.platform} ({config.get_model_name()})")

    message = generate_commit_message(diff, config)
    print(f"\nGenerated commit message:\n{message}")

    if commit:
        print("\nCommitting with the generated message...")
        commit_with_message(message)
    else:
        escaped = message.replace('"', '\\"')
        print(f'\nTo use this message for commit, run: git commit -m "{escaped}"')


def main(argv: list[str] | None = None) -> int:
    """Run the command and return its exit status."""
    load_dotenv()
    args = _build_parser().parse_args(argv)
    try:
        if args.command == "config":
            handle_config_command(args.api, args.show, args.language, args.prompt)
        else:
            _generate(args.commit)
    except (GitError, ApiError, LookupError, EOFError, OSError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())