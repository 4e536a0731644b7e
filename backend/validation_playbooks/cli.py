"""Command-line authoring surface for validation playbooks."""

from __future__ import annotations

import argparse
import asyncio
import json
import sys
from collections.abc import Callable
from pathlib import Path
from typing import TYPE_CHECKING, TextIO

from pydantic import ValidationError

from validation_playbooks.client.library import PlaybookLibrary
from validation_playbooks.client.local import LocalPlaybookStore
from validation_playbooks.client.remote import RemotePlaybookStore
from validation_playbooks.client.stores import FallbackPlaybookStore
from validation_playbooks.core.config import settings
from validation_playbooks.core.errors import PlaybookError
from validation_playbooks.core.logging import configure_logging
from validation_playbooks.render import (
    RenderContext,
    Theme,
    render_outcome,
    render_playbook,
    render_playbook_summary,
)
from validation_playbooks.schemas.playbooks import PlaybookCreate, PlaybookUpdate
from validation_playbooks.services.decision_tree import DecisionSession

if TYPE_CHECKING:
    from validation_playbooks.schemas.playbooks import Playbook

YES_ANSWERS = frozenset({"y", "yes"})
NO_ANSWERS = frozenset({"n", "no"})


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="validation-playbooks",
        description="Author, inspect, and walk through validation playbooks.",
    )
    parser.add_argument(
        "--api-url",
        default=settings.api_base_url,
        help="Playbook API base URL (default: %(default)s)",
    )
    parser.add_argument(
        "--local-store",
        default=settings.local_store_path,
        help="Fallback JSON file used when the API is unreachable",
    )
    parser.add_argument(
        "--theme",
        choices=[theme.value for theme in Theme],
        default=Theme.LIGHT.value,
    )
    parser.add_argument(
        "--color",
        action=argparse.BooleanOptionalAction,
        default=sys.stdout.isatty(),
        help="Colourise output (default: when stdout is a terminal)",
    )
    commands = parser.add_subparsers(dest="command", required=True)
    commands.add_parser("list", help="List templates and stored playbooks")
    show = commands.add_parser("show", help="Print one playbook")
    show.add_argument("playbook_id")
    evaluate = commands.add_parser("evaluate", help="Answer yes/no questions to get guidance")
    evaluate.add_argument("playbook_id")
    create = commands.add_parser("create", help="Create a playbook from a JSON file")
    create.add_argument("file", type=Path)
    update = commands.add_parser("update", help="Merge fields from a JSON file into a playbook")
    update.add_argument("playbook_id")
    update.add_argument("file", type=Path)
    delete = commands.add_parser("delete", help="Delete a stored playbook")
    delete.add_argument("playbook_id")
    serve = commands.add_parser("serve", help="Run the API server")
    serve.add_argument("--host", default="127.0.0.1")
    serve.add_argument("--port", type=int, default=8000)
    return parser.parse_args(argv)


def build_library(api_url: str, local_store: str) -> PlaybookLibrary:
    """Remote API first, local file when the API cannot be reached."""
    store = FallbackPlaybookStore(
        RemotePlaybookStore(api_url, timeout=settings.client_timeout_seconds),
        LocalPlaybookStore(local_store),
    )
    return PlaybookLibrary(store)


def run_decision(
    ctx: RenderContext,
    playbook: Playbook,
    *,
    ask: Callable[[str], str],
    out: TextIO,
) -> DecisionSession:
    """Drive a decision session from prompts; `r` restarts, `q` or end of input stops."""
    session = DecisionSession.for_playbook(playbook)
    while not session.is_complete:
        question = session.current_question
        total = len(session.questions)
        try:
            reply = ask(f"[{session.step + 1}/{total}] {question}? (y/n/r/q) ").strip().lower()
        except EOFError:
            # Closed input ends the walk the same way as `q`.
            reply = "q"
        if reply in YES_ANSWERS:
            session.answer(True)
        elif reply in NO_ANSWERS:
            session.answer(False)
        elif reply == "r":
            session.reset()
        elif reply == "q":
            out.write("Stopped before a recommendation was reached.\n")
            return session
        else:
            out.write("Please answer y, n, r (restart) or q (quit).\n")
    out.write(render_outcome(ctx, session.outcome()) + "\n")
    return session


def _load_json(path: Path) -> dict[str, object]:
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except OSError as exc:
        message = f"error: cannot read {path}: {exc.strerror or exc}"
        raise SystemExit(message) from exc
    except ValueError as exc:
        message = f"error: {path} is not valid JSON: {exc}"
        raise SystemExit(message) from exc
    if not isinstance(data, dict):
        message = f"error: {path} must contain a JSON object"
        raise SystemExit(message)
    return data


async def _run(args: argparse.Namespace, out: TextIO) -> int:
    ctx = RenderContext(theme=Theme(args.theme), use_color=bool(args.color))
    library = build_library(args.api_url, args.local_store)

    if args.command == "list":
        playbooks = await library.list_all()
        out.write("\n\n".join(render_playbook_summary(ctx, item) for item in playbooks) + "\n")
    elif args.command == "show":
        out.write(render_playbook(ctx, await library.get(args.playbook_id)) + "\n")
    elif args.command == "evaluate":
        playbook = await library.get(args.playbook_id)
        if not playbook.escalation_paths:
            out.write("This playbook has no escalation paths.\n")
            return 1
        run_decision(ctx, playbook, ask=input, out=out)
    elif args.command == "create":
        created = await library.create(PlaybookCreate.model_validate(_load_json(args.file)))
        out.write(f"Playbook created successfully: {created.id}\n")
    elif args.command == "update":
        changes = PlaybookUpdate.model_validate(_load_json(args.file))
        updated = await library.update(args.playbook_id, changes)
        out.write(f"Playbook updated successfully: {updated.id}\n")
    elif args.command == "delete":
        await library.delete(args.playbook_id)
        out.write("Playbook deleted successfully\n")
    return 0


def main(argv: list[str] | None = None) -> None:
    """Parse arguments, run the command, and exit with its return code."""
    configure_logging()
    args = _parse_args(argv)
    if args.command == "serve":
        import uvicorn

        uvicorn.run("validation_playbooks.main:app", host=args.host, port=args.port)
        return
    try:
        code = asyncio.run(_run(args, sys.stdout))
    except (PlaybookError, ValidationError) as exc:
        sys.stderr.write(f"error: {exc}\n")
        code = 1
    raise SystemExit(code)


if __name__ == "__main__":
    main()
