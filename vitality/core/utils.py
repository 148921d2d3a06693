"""
Utilities module for the vitality engine.

Provides console printing with rich formatting, input parsing for the
manual damage/heal controls, and small numeric helpers shared by the
projections.
"""

from __future__ import annotations

import math
from typing import Any

from rich.console import Console
from rich.rule import Rule
from typing_extensions import TypeVar

# Initialize the rich console.
_console = Console(markup=True, width=120, force_terminal=True, force_jupyter=False)


def cprint(*args: Any, **kwargs: Any) -> None:
    """
    Custom print function to handle colored output.

    Args:
        *args: Arguments to pass to the console print function.
        **kwargs: Keyword arguments to pass to the console print function.

    """
    _console.print(*args, **kwargs)


def crule(*args: Any, **kwargs: Any) -> None:
    """
    Custom print function to handle colored output with a rule.

    Args:
        *args: Arguments to pass to the Rule constructor.
        **kwargs: Keyword arguments to pass to the Rule constructor.

    """
    _console.print(Rule(*args, **kwargs))


def ccapture(content: Any) -> str:
    """
    Captures console output as a string.

    Args:
        content (Any): The content to capture.

    Returns:
        str: The captured output as a string.

    """
    with _console.capture() as capture:
        _console.print(content, markup=True, end="")
    return capture.get()


def hp_percent(current: int, maximum: int) -> float:
    """Returns current HP as a percentage of the maximum."""
    if maximum <= 0:
        return 0.0
    return (current / maximum) * 100


_N = TypeVar("_N", int, float)


def clamp(value: _N, low: _N, high: _N) -> _N:
    """Clamps value into the inclusive range [low, high]."""
    return max(low, min(high, value))


def parse_delta_input(text: Any, sign: int = -1) -> int | None:
    """
    Turns a manual magnitude entry into a signed delta for the ledger.

    The ledger expects callers to reject malformed input before signing the
    delta, so anything that is not a finite, strictly positive integer is
    ignored here.

    Args:
        text (Any): The raw user input (string or number).
        sign (int): -1 for damage, +1 for healing.

    Returns:
        int | None: The signed delta, or None when the input must be ignored.

    """
    if sign not in (-1, 1):
        raise ValueError(f"sign must be -1 or 1, got {sign}")
    if isinstance(text, bool):
        return None
    if isinstance(text, str):
        text = text.strip()
        # Whole numbers only: "3.5" and "12abc" are ignored rather than read as 3 and 12.
        try:
            value = int(text)
        except ValueError:
            return None
    elif isinstance(text, (int, float)):
        if isinstance(text, float) and not math.isfinite(text):
            return None
        value = int(text)
    else:
        return None
    if value <= 0:
        return None
    return sign * value


def make_bar(current: int, maximum: int, length: int = 10, color: str = "white") -> str:
    """
    Creates a visual progress bar representation.

    Args:
        current (int): The current value.
        maximum (int): The maximum value.
        length (int): The length of the bar in characters. Defaults to 10.
        color (str): The color for the filled portion. Defaults to "white".

    Returns:
        str: A formatted progress bar string.

    """
    filled = int((current / maximum) * length) if maximum > 0 else 0
    empty = length - filled
    bar = f"[{color}]" + "▮" * filled
    if empty > 0:
        bar += "[dim white]" + "▯" * empty + "[/]"
    bar += "[/]"
    return bar
