"""Entry point: python -m prompt_actions"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import TYPE_CHECKING

from rich.console import Console
from rich.markdown import Markdown
from rich.markup import escape
from rich.prompt import Confirm
from rich.table import Table

from prompt_actions import __version__
from prompt_actions.constants import DEFAULT_PROMPT_ICON, LOG_FORMAT
from prompt_actions.errors import PromptActionsError

if TYPE_CHECKING:
    from prompt_actions.app import PromptActions

console = Console()
logger = logging.getLogger("prompt_actions")


def setup_logging(verbose: bool = False) -> None:
    """Configure logging with rich handler if available."""
    level = logging.DEBUG if verbose else logging.WARNING

    try:
        from rich.logging import RichHandler

        logging.basicConfig(
            level=level,
            format="%(message)s",
            datefmt="[%X]",
            handlers=[RichHandler(console=Console(stderr=True), rich_tracebacks=True)],
        )
    except ImportError:
        logging.basicConfig(level=level, format=LOG_FORMAT)


def build_parser() -> argparse.ArgumentParser:
    """Build the command-line parser."""
    parser = argparse.ArgumentParser(
        prog="prompt-actions",
        description="Run saved LLM prompt templates against the selected text",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable debug logging"
    )
    parser.add_argument(
        "--version", action="version", version=f"prompt-actions {__version__}"
    )
    parser.add_argument(
        "--config", type=str, default=None, help="Path to config file"
    )
    parser.add_argument(
        "--storage", type=str, default=None, help="Path to the prompt storage file"
    )

    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("list", help="List saved prompts")

    create = sub.add_parser("create", help="Create a new prompt")
    create.add_argument("--title", required=True, help="e.g. Translate to Chinese")
    create.add_argument("--body", required=True, help="Template; use {selection} for the selected text")
    create.add_argument("--icon", default=None, help="Display glyph")

    edit = sub.add_parser("edit", help="Edit an existing prompt")
    edit.add_argument("id", help="Prompt id")
    edit.add_argument("--title", default=None)
    edit.add_argument("--body", default=None)
    edit.add_argument("--icon", default=None)

    delete = sub.add_parser("delete", help="Delete a prompt")
    delete.add_argument("id", help="Prompt id")
    delete.add_argument("-y", "--yes", action="store_true", help="Do not ask for confirmation")

    run = sub.add_parser("run", help="Run a prompt against the selection or clipboard")
    run.add_argument("prompt", help="Prompt id or title")
    run.add_argument("--text", default=None, help="Use this text instead of the selection")
    run.add_argument("--copy", action="store_true", help="Copy the result to the clipboard")
    run.add_argument("--paste", action="store_true", help="Paste the result into the focused window")
    run.add_argument("--copy-original", action="store_true", help="Copy the original text to the clipboard")

    sub.add_parser("config", help="Show the provider configuration")

    serve = sub.add_parser("serve", help="Start the web dashboard")
    serve.add_argument("--host", default=None)
    serve.add_argument("--port", type=int, default=None)

    return parser


def cmd_list(app: PromptActions) -> int:
    prompts = app.store.load_all()
    if not prompts:
        console.print(
            "[bold]No Prompts Found[/bold]\n\n"
            "Create one first: prompt-actions create --title ... --body '... {selection}'"
        )
        return 0

    table = Table(show_header=True, header_style="bold")
    table.add_column("")
    table.add_column("Title")
    table.add_column("Prompt")
    table.add_column("ID", style="dim")
    width = app.config.ui.preview_width
    for prompt in prompts:
        table.add_row(prompt.display_icon, escape(prompt.title), escape(prompt.preview(width)), prompt.id)
    console.print(table)
    return 0


def cmd_create(app: PromptActions, args: argparse.Namespace) -> int:
    prompt = app.store.create(args.title, args.body, icon=args.icon or DEFAULT_PROMPT_ICON)
    _toast("Prompt created", app)
    console.print(f"Created [bold]{escape(prompt.title)}[/bold] ({prompt.id})")
    return 0


def cmd_edit(app: PromptActions, args: argparse.Namespace) -> int:
    current = app.store.get(args.id)
    updated = app.store.update(
        current.id,
        title=args.title if args.title is not None else current.title,
        body=args.body if args.body is not None else current.body,
        icon=args.icon,
    )
    _toast("Prompt updated", app)
    console.print(f"Updated [bold]{escape(updated.title)}[/bold] ({updated.id})")
    return 0


def cmd_delete(app: PromptActions, args: argparse.Namespace) -> int:
    def confirm() -> bool:
        if args.yes:
            return True
        return Confirm.ask("Are you sure you want to delete this prompt?", default=False)

    if app.store.delete(args.id, confirm=confirm):
        _toast("Prompt deleted", app)
        console.print("Prompt deleted")
    else:
        console.print("Nothing deleted")
    return 0


def cmd_run(app: PromptActions, args: argparse.Namespace) -> int:
    if not app.store.load_all():
        console.print("No prompts found. Create one first with `prompt-actions create`.")
        return 1

    with console.status("Processing..."):
        result = app.run(args.prompt, text=args.text)

    console.print(Markdown(f"# {result.title}\n\n{result.text}"))

    if args.copy and app.copy(result.text):
        console.print("[dim]Result copied to clipboard[/dim]")
    if args.copy_original and app.copy(result.original_text):
        console.print("[dim]Original copied to clipboard[/dim]")
    if args.paste and not app.paste(result.text):
        console.print("[yellow]Paste failed, the result is on the clipboard[/yellow]")
    return 0


def cmd_config(app: PromptActions) -> int:
    table = Table(show_header=False)
    for key, value in app.config.provider.masked().items():
        table.add_row(key, "" if value is None else str(value))
    console.print(table)
    return 0


def cmd_serve(app: PromptActions, args: argparse.Namespace) -> None:
    from prompt_actions.web.server import run_server

    run_server(
        app,
        host=args.host or app.config.web.host,
        port=args.port or app.config.web.port,
    )


def _toast(title: str, app: PromptActions) -> None:
    if app.config.ui.notifications:
        from prompt_actions.platform.notifications import SUCCESS, notify

        notify(title, kind=SUCCESS)


def dispatch(app: PromptActions, args: argparse.Namespace) -> int:
    """Run one subcommand. Every error is reported, never raised."""
    try:
        if args.command == "list":
            return cmd_list(app)
        if args.command == "create":
            return cmd_create(app, args)
        if args.command == "edit":
            return cmd_edit(app, args)
        if args.command == "delete":
            return cmd_delete(app, args)
        if args.command == "run":
            return cmd_run(app, args)
        if args.command == "config":
            return cmd_config(app)
        if args.command == "serve":
            cmd_serve(app, args)
            return 0
    except PromptActionsError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}", highlight=False)
        return 1
    except KeyboardInterrupt:
        return 130
    except Exception as e:
        logger.debug("Unexpected failure", exc_info=True)
        console.print(f"[red]Error:[/red] {escape(str(e))}", highlight=False)
        return 1

    console.print(f"Unknown command: {args.command}")
    return 2


def main(argv: list[str] | None = None) -> None:
    """Main entry point."""
    args = build_parser().parse_args(argv)
    setup_logging(verbose=args.verbose)

    from prompt_actions.app import PromptActions
    from prompt_actions.config import AppConfig

    config_path = Path(args.config) if args.config else None
    storage_path = Path(args.storage) if args.storage else None
    app = PromptActions(
        config=AppConfig.load(config_path),
        config_path=config_path,
        storage_path=storage_path,
    )

    sys.exit(dispatch(app, args))


if __name__ == "__main__":
    main()
