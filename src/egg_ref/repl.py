"""Interactive REPL for Egg, powered by prompt_toolkit."""

from __future__ import annotations

import os
import re
import sys
from prompt_toolkit import PromptSession
from prompt_toolkit.completion import Completer, Completion
from prompt_toolkit.history import InMemoryHistory
from prompt_toolkit.key_binding import KeyBindings
from prompt_toolkit.shortcuts import clear

from .lexer_rd import has_open_string, paren_depth
from .repl_highlight import EggLexer
from .runner import report_error, run
from .runtime import EggError, Environment, make_top_env
from .utils import DEBUG_PY_TRACE_ENV, debug_py_trace_enabled

# Zero-width and invisible characters to strip from input.
_INVISIBLE_RE = re.compile("[\u200b\u200c\u200d\ufeff\u00a0\r]")

# Slash commands: name => (description, argument_hint).
_SLASH_CMDS = {
    "/clear": ("Clear the terminal screen", ""),
    "/py-traceback": ("Toggle Python traceback on errors", "[on|off]"),
    "/reset": ("Reset the REPL environment", ""),
}


def new_session_env() -> Environment:
    return make_top_env().child()


def needs_more_input(text: str) -> bool:
    """True while `text` has unclosed parens or an unterminated string."""
    return paren_depth(text) > 0 or has_open_string(text)


class _SlashCompleter(Completer):
    """Offer slash commands (with their argument hint) at the prompt."""

    def get_completions(self, document, complete_event):
        typed = document.text_before_cursor
        if not typed.startswith("/"):
            return

        for name, (desc, hint) in _SLASH_CMDS.items():
            if name.startswith(typed):
                yield Completion(
                    name,
                    start_position=-len(typed),
                    display=f"{name} {hint}".rstrip(),
                    display_meta=desc,
                )


_TRACE_SWITCH = {
    "on": True, "1": True, "true": True, "yes": True,
    "off": False, "0": False, "false": False, "no": False,
}


def _set_py_trace(arg: str) -> bool:
    """Apply a /py-traceback argument; an empty one flips the current state."""
    if arg:
        if arg.lower() not in _TRACE_SWITCH:
            print("Usage: /py-traceback [on|off]", file=sys.stderr)
            return False
        enable = _TRACE_SWITCH[arg.lower()]
    else:
        enable = not debug_py_trace_enabled()

    if enable:
        os.environ[DEBUG_PY_TRACE_ENV] = "1"
    else:
        os.environ.pop(DEBUG_PY_TRACE_ENV, None)

    return True


def handle_slash(line: str, env_box: list[Environment]) -> bool:
    """Run `line` as a slash command. False means it is ordinary Egg source."""
    command, *rest = line.split(None, 1) or [""]
    if not command.startswith("/"):
        return False

    arg = rest[0].strip() if rest else ""

    if command == "/clear":
        clear()
    elif command == "/py-traceback":
        if _set_py_trace(arg):
            print(f"Python traceback: {'on' if debug_py_trace_enabled() else 'off'}")
    elif command == "/reset":
        env_box[0] = new_session_env()
        print("Environment reset.")
    else:
        print(f"Unknown command: {command}", file=sys.stderr)

    return True


def normalize(text: str) -> str:
    """Strip invisible characters from input."""
    return _INVISIBLE_RE.sub("", text)


def repl() -> None:
    """Interactive read-eval-print loop with prompt_toolkit."""
    # Use a mutable box so /reset can swap the environment.
    env_box: list[Environment] = [new_session_env()]

    bindings = KeyBindings()

    @bindings.add("enter")
    def _enter(event):
        buf = event.app.current_buffer
        text = buf.text

        if text.lstrip().startswith("/") or not needs_more_input(text):
            buf.validate_and_handle()
            return

        buf.insert_text("\n")

    session: PromptSession[str] = PromptSession(
        history=InMemoryHistory(),
        lexer=EggLexer(),
        completer=_SlashCompleter(),
        complete_while_typing=True,
        key_bindings=bindings,
        multiline=True,
        prompt_continuation="... ",
    )

    print("egg repl - Ctrl-D to exit, / for commands")

    while True:
        try:
            text = session.prompt(">>> ")
        except EOFError:
            print()
            break
        except KeyboardInterrupt:
            print("KeyboardInterrupt")
            continue

        text = normalize(text)
        if not text.strip():
            continue

        if handle_slash(text, env_box):
            continue

        try:
            result = run(text, env=env_box[0])
        except EggError as exc:
            report_error(exc)
            continue

        print(repr(result))
