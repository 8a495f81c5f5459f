"""Interactive console for the POS terminal.

Each line typed is one action:

    <code>        look up a product code (what a scanner sends)
    add           add the staged product to the purchase list
    rm <n>        remove line n (1-based) from the purchase list
    buy           submit the purchase list
    lang <ja|en>  switch message language
    quit          leave
"""

import sys
from typing import Iterable, Iterator, Optional, TextIO

from prompt_toolkit import PromptSession
from prompt_toolkit.history import InMemoryHistory

from .presenter import render_session
from .terminal import PosTerminal

HELP = "Commands: <code> | add | rm <n> | buy | lang <ja|en> | help | quit"


def _prompt_lines() -> Iterator[str]:
    """Lines typed at an interactive prompt, until Ctrl-D or Ctrl-C."""
    session: PromptSession = PromptSession(history=InMemoryHistory())
    while True:
        try:
            yield session.prompt("> ")
        except (EOFError, KeyboardInterrupt):
            return


def run_console(
    terminal: PosTerminal,
    lines: Optional[Iterable[str]] = None,
    stdout: TextIO = sys.stdout,
) -> None:
    """
    Run actions until the input ends or quit is typed, printing both panels after each.

    Args:
        terminal: Terminal session to drive
        lines: Input lines (default: an interactive prompt)
        stdout: Where panels are printed
    """
    if lines is None:
        lines = _prompt_lines()

    def show(message: str) -> None:
        print(message, file=stdout, flush=True)

    show(HELP)
    show(render_session(terminal.state, terminal.language))

    for raw in lines:
        line = raw.strip()
        if not line:
            continue

        command, _, argument = line.partition(" ")
        command = command.lower()

        if command in ("quit", "exit", "q"):
            break
        elif command == "help":
            show(HELP)
            continue
        elif command == "add":
            if not terminal.state.can_add:
                show("(add is disabled: no product staged)")
                continue
            terminal.add_to_cart()
        elif command == "rm":
            try:
                terminal.remove_at(int(argument) - 1)
            except (ValueError, IndexError) as e:
                show(f"Cannot remove line {argument!r}: {e}")
                continue
        elif command == "buy":
            terminal.purchase()
        elif command == "lang":
            try:
                terminal.set_language(argument.strip())
            except ValueError as e:
                show(str(e))
                continue
        else:
            terminal.lookup(line)

        show("")
        show(render_session(terminal.state, terminal.language))
