"""Command-line entry point.

``codeshell serve`` runs the HTTP API under uvicorn. ``codeshell terminal``
runs the simulated shell interactively; lines starting with ``?`` are sent to
the generation service instead of the shell.
"""

import argparse
import asyncio
import logging
from collections.abc import Callable

from client.generation import GenerationClient
from config import get_settings
from models.catalog import MODEL_CATALOG
from models.shell import HELP_TEXT
from models.workspace import Workspace

logger = logging.getLogger(__name__)

PROMPT_PREFIX = "?"
EXIT_COMMANDS = {"exit", "quit"}
WELCOME = "Welcome to Linux Simulator\nType commands to test code"


async def run_terminal(
    workspace: Workspace,
    read_line: Callable[[str], str] = input,
    write: Callable[[str], None] = print,
) -> None:
    """Read lines until EOF or ``exit`` and route them to the workspace.

    Args:
        workspace: Workspace to drive.
        read_line: Callable returning the next line given a prompt.
        write: Callable receiving each chunk of output.
    """
    write(WELCOME)
    while True:
        try:
            line = read_line(workspace.session.transcript.rsplit("\n", 1)[-1])
        except EOFError:
            break
        if line.strip() in EXIT_COMMANDS:
            break

        if line.startswith(PROMPT_PREFIX):
            prompt = line[len(PROMPT_PREFIX):].strip()
            if not prompt:
                continue
            outcome = await workspace.generate(prompt)
            write(outcome.message.content)
            if outcome.batch.filenames:
                write(f"[saved to {outcome.outputs_path}: {', '.join(outcome.batch.filenames)}]")
            continue

        result = workspace.execute(line)
        if result is None:
            continue
        if result.clear_screen:
            write("\033[2J\033[H")
        elif result.output:
            write(result.output)


async def _terminal_main(args: argparse.Namespace) -> None:
    settings = get_settings()
    async with GenerationClient.from_settings(settings) as client:
        workspace = Workspace(generator=client, home_directory=settings.home_directory)
        workspace.select_model(args.model)
        logger.info("Starting terminal in %s", settings.home_directory)
        await run_terminal(workspace)


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(prog="codeshell", description="Code assistant simulator")
    subparsers = parser.add_subparsers(dest="command", required=True)

    serve = subparsers.add_parser("serve", help="Run the HTTP API")
    serve.add_argument("--host", default="127.0.0.1")
    serve.add_argument("--port", type=int, default=8000)
    serve.add_argument("--reload", action="store_true")

    terminal = subparsers.add_parser(
        "terminal",
        help="Run the simulated shell interactively",
        description=f"{HELP_TEXT}\n\nPrefix a line with '?' to ask the assistant.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    terminal.add_argument(
        "--model",
        default=MODEL_CATALOG[0].model_id,
        choices=[m.model_id for m in MODEL_CATALOG],
        help="Model used for '?' prompts",
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    """Console script entry point."""
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=get_settings().log_level)

    if args.command == "serve":
        import uvicorn

        uvicorn.run("main:app", host=args.host, port=args.port, reload=args.reload)
    else:
        asyncio.run(_terminal_main(args))


if __name__ == "__main__":
    main()
