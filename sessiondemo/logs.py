"""Console logging that names the calling function."""

from __future__ import annotations

import inspect


def _caller_name(depth: int) -> str:
    frame = inspect.currentframe()
    try:
        for _ in range(depth + 1):
            if frame is None:
                return "?"
            frame = frame.f_back
        if frame is None:
            return "?"
        module = inspect.getmodule(frame)
        module_name = module.__name__ if module is not None else "?"
        return f"{module_name}.{frame.f_code.co_name}"
    finally:
        del frame


def print_log(message: str) -> str:
    """Print the message and the caller's name; return the caller's name."""
    name = _caller_name(2)
    print("log.Print - ", message)
    print("log-Print", name)
    return name