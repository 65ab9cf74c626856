"""Signal handling for the prompt, for running children and for here-documents."""

from __future__ import annotations

import signal
import sys

from .state import record_status


def _newline() -> None:
    sys.stdout.write("\n")
    sys.stdout.flush()


def _prompt_interrupt(signum, frame) -> None:
    record_status(1)
    raise KeyboardInterrupt


def _child_signal(signum, frame) -> None:
    if signum == signal.SIGINT:
        _newline()
        record_status(130)
    elif signum == signal.SIGQUIT:
        sys.stdout.write(f"Quit: {signum}\n")
        sys.stdout.flush()
        record_status(131)


def _heredoc_interrupt(signum, frame) -> None:
    record_status(1)
    _newline()
    raise KeyboardInterrupt


def install_prompt_handlers() -> None:
    """Ctrl-C abandons the current line with status 1; Ctrl-\\ is ignored."""
    signal.signal(signal.SIGINT, _prompt_interrupt)
    signal.signal(signal.SIGQUIT, signal.SIG_IGN)


def install_child_handlers() -> None:
    """While children run, record 130 for Ctrl-C and 131 for Ctrl-\\."""
    signal.signal(signal.SIGINT, _child_signal)
    signal.signal(signal.SIGQUIT, _child_signal)


def install_heredoc_handlers() -> None:
    """Ctrl-C ends here-document input with status 1; Ctrl-\\ is ignored."""
    signal.signal(signal.SIGINT, _heredoc_interrupt)
    signal.signal(signal.SIGQUIT, signal.SIG_IGN)