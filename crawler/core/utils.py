"""
Utilities module for the crawler.

Provides common utility functions and helpers, including console printing
with rich formatting, the singleton pattern, and grid distance helpers.
"""

from __future__ import annotations

import math
from typing import Any, Generic

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


# ---- Singleton Metaclass ----


_T = TypeVar("_T")


class Singleton(type, Generic[_T]):
    """Metaclass that returns the same instance every time."""

    _instances: dict[Singleton[_T], _T] = {}

    def __call__(cls, *args: Any, **kwargs: Any) -> _T:
        if cls not in cls._instances:
            cls._instances[cls] = super().__call__(*args, **kwargs)
        return cls._instances[cls]


# ---- Grid helpers ----


def chebyshev_distance(x1: int, y1: int, x2: int, y2: int) -> int:
    """Returns the king-move distance between two tiles."""
    return max(abs(x1 - x2), abs(y1 - y2))


def euclidean_distance(x1: int, y1: int, x2: int, y2: int) -> float:
    """Returns the straight-line distance between two tiles."""
    return math.hypot(x1 - x2, y1 - y2)


def round_half_up(value: float) -> int:
    """
    Rounds to the nearest integer, with halves rounded towards +infinity.

    Args:
        value (float): The value to round.

    Returns:
        int: The rounded value.

    """
    return math.floor(value + 0.5)


def sign(value: int) -> int:
    """Returns -1, 0 or 1 depending on the sign of the value."""
    return (value > 0) - (value < 0)


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
    if maximum <= 0:
        return ""
    # Compute the filled part of the bar.
    filled = max(0, min(length, int((current / maximum) * length)))
    # Compute the empty part of the bar.
    empty = length - filled
    bar = f"[{color}]" + "▮" * filled
    if empty > 0:
        bar += "[dim white]" + "▯" * empty + "[/]"
    bar += "[/]"
    return bar
