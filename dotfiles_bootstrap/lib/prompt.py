from __future__ import annotations

import logging
import sys
from typing import Callable, Optional

logger = logging.getLogger(__name__)

InputFunc = Callable[[str], str]
EchoFunc = Callable[[str], None]

YES = frozenset({"y", "yes"})
NO = frozenset({"n", "no"})

_DEFAULT_ANSWERS = {"yes": True, "no": False, None: None}
_DISPLAY_DEFAULTS = {"yes": "[y]", "no": "[n]", None: "[]"}


def _stderr(msg: str) -> None:
    print(msg, file=sys.stderr)


def ask(
    question: str,
    default: Optional[str] = "yes",
    *,
    input_fn: InputFunc = input,
    echo_err: EchoFunc = _stderr,
) -> bool:
    """Ask a yes/no question until a valid answer is given.

    ``default`` is "yes", "no" or None. With None an empty answer is invalid.
    """

    if default not in _DEFAULT_ANSWERS:
        raise ValueError(f"invalid default answer: {default!r}")

    prompt = f"{question} (y/n): {_DISPLAY_DEFAULTS[default]} "
    invalid = 0
    while True:
        reply = "".join(input_fn(prompt).split()).lower()
        if reply in YES:
            answer = True
        elif reply in NO:
            answer = False
        elif not reply and default is not None:
            answer = _DEFAULT_ANSWERS[default]
        else:
            invalid += 1
            echo_err("Invalid input; enter 'y' or 'n'.")
            continue

        logger.info("Prompt %r answered %s after %d invalid replies", question, answer, invalid)
        return answer
