import logging
import os
from typing import Callable, Optional

import pyperclip

from scicalc.engine import Failure, trace
from scicalc.parser import format_rpn
from scicalc.session import CalculatorSession
from scicalc.storage import THEMES, Storage
from scicalc.utils import format_number

QUIT_COMMANDS = {":q", ":quit", ":exit"}

SIMPLE_ACTIONS: dict[str, Callable[[CalculatorSession], None]] = {
    ":c": CalculatorSession.clear,
    ":back": CalculatorSession.backspace,
    ":%": CalculatorSession.percent,
    ":neg": CalculatorSession.negate,
    ":recip": CalculatorSession.reciprocal,
    ":sq": CalculatorSession.square,
    ":ans": CalculatorSession.ans,
    ":mc": CalculatorSession.memory_clear,
    ":mr": CalculatorSession.memory_recall,
    ":m+": CalculatorSession.memory_add,
    ":m-": CalculatorSession.memory_subtract,
    ":clearhistory": CalculatorSession.clear_history,
}


def render_state(session: CalculatorSession) -> str:
    expression = session.expression or "0"
    return f"{expression} = {session.display}" if session.display else expression


def render_history(session: CalculatorSession) -> str:
    if not session.history:
        return "(history is empty)"
    return "\n".join(
        f"{i:> 3}: {entry.expr} = {format_number(entry.value)}" for i, entry in enumerate(session.history)
    )


def render_trace(expression: str) -> str:
    t = trace(expression)
    result = t.result if isinstance(t.result, Failure) else format_number(t.result)
    return "\n".join(
        [
            f"normalized: {t.normalized!r}",
            f"tokens: {' '.join(str(token) for token in t.tokens)}",
            f"rpn: {format_rpn(t.rpn)}",
            f"result: {result}",
        ]
    )


def _history_index(session: CalculatorSession, arg: str) -> Optional[int]:
    try:
        index = int(arg)
    except ValueError:
        return None
    return index if 0 <= index < len(session.history) else None


def handle_line(session: CalculatorSession, storage: Storage, line: str) -> str:
    line = line.strip()
    if not line.startswith(":"):
        session.set_expression(line)
        result = session.equals()
        if isinstance(result, Failure):
            return f"{session.display} ({result.kind})"
        return session.display

    command, _, arg = line.partition(" ")
    arg = arg.strip()

    if command in SIMPLE_ACTIONS:
        SIMPLE_ACTIONS[command](session)
        return render_state(session)
    elif command == ":history":
        return render_history(session)
    elif command in (":use", ":del"):
        index = _history_index(session, arg)
        if index is None:
            return f"No history entry {arg!r}"
        if command == ":use":
            session.use_history(index)
            return render_state(session)
        session.delete_history(index)
        return render_history(session)
    elif command == ":theme":
        if not arg:
            return storage.load_theme() or "(no theme saved)"
        if arg not in THEMES:
            return f"Unknown theme {arg!r}, expected one of: {', '.join(THEMES)}"
        storage.save_theme(arg)
        return arg
    elif command == ":copy":
        if session.last_result is None:
            return "Nothing to copy"
        try:
            pyperclip.copy(format_number(session.last_result))
        except pyperclip.PyperclipException as e:
            return f"Clipboard unavailable: {e}"
        return f"Copied {format_number(session.last_result)}"
    elif command == ":trace":
        return render_trace(arg or session.expression)
    else:
        return f"Unknown command {command!r}"


def main() -> None:
    logging.basicConfig(level=os.environ.get("SCICALC_LOG_LEVEL", "WARNING").upper())
    storage = Storage()
    session = CalculatorSession(history=storage.load_history(), on_history_change=storage.save_history)

    while True:
        try:
            line = input("> ")
        except (EOFError, KeyboardInterrupt):
            print()
            break

        if line.strip() in QUIT_COMMANDS:
            break

        print(handle_line(session, storage, line))


if __name__ == "__main__":
    main()
