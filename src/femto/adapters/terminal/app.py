"""Command-line entry point running the editor in the current terminal."""

from __future__ import annotations

import argparse
import sys
from typing import Optional, Sequence

from femto import __version__
from femto.runtime import telemetry

from femto.buffer import Buffer, FileIOError, load_file
from femto.modes import EditMode, ModeBus, ModeContext, PromptMode
from femto.modes.mode_manager import ModeManager

from .controller import TerminalEditorAdapter
from .terminal import RawTerminal, TerminalError

HELP_MESSAGE = "HELP: Ctrl-S = save | Ctrl-Q = quit | Ctrl-F = find"

logger = telemetry.get_logger("femto.app")


def create_default_manager(buffer: Optional[Buffer] = None) -> ModeManager:
    """Build a ModeManager with the edit and prompt modes + default keymaps."""

    context = ModeContext(buffer=buffer or Buffer(), bus=ModeBus(), extras={})
    manager = ModeManager(context)
    manager.register_mode(EditMode)
    manager.register_mode(PromptMode)
    return manager


def open_buffer(path: Optional[str], *, line_numbers: bool = False) -> Buffer:
    """Load ``path`` into a fresh buffer; no path gives an empty, unnamed one."""

    if not path:
        return Buffer(line_numbers=line_numbers)
    return Buffer.from_lines(load_file(path), filename=path, line_numbers=line_numbers)


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="femto", description="A minimal terminal text editor."
    )
    parser.add_argument("path", nargs="?", help="File to open")
    parser.add_argument(
        "--line-numbers",
        action="store_true",
        help="Show a line-number gutter",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = _parse_args(argv)
    telemetry.configure(preset="editor")

    try:
        buffer = open_buffer(args.path, line_numbers=args.line_numbers)
    except FileIOError as exc:
        logger.error("unable to open %s: %s", exc.path, exc.reason)
        print(f"femto: {exc}", file=sys.stderr)
        return 1

    manager = create_default_manager(buffer)
    terminal = RawTerminal()
    try:
        with terminal.raw_mode():
            adapter = TerminalEditorAdapter(manager, terminal)
            adapter.set_status(HELP_MESSAGE)
            adapter.run()
    except TerminalError as exc:
        terminal.clear()
        logger.error("terminal failure: %s", exc)
        print(f"femto: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":  # pragma: no cover - manual entry
    sys.exit(main())
