"""
Conversions between command names ("run-app") and script names ("RunApp").
"""

from __future__ import annotations

from typing import Optional


def is_blank(value: Optional[str]) -> bool:
    return value is None or not value.strip()


def capitalize(value: Optional[str]) -> Optional[str]:
    if is_blank(value):
        return value
    return value[:1].upper() + value[1:]


def to_script_name(name: Optional[str]) -> Optional[str]:
    """Convert a command name to the framework's script name.

    "run-app" -> "RunApp", "clean" -> "Clean". Empty tokens produced by
    repeated hyphens are dropped.
    """
    if is_blank(name):
        return name
    if "-" in name:
        return "".join(capitalize(token) for token in name.split("-") if token)
    return capitalize(name)


def to_command_name(name: Optional[str]) -> Optional[str]:
    """Convert a script name back to its command form ("RunApp" -> "run-app")."""
    if is_blank(name):
        return name
    out = []
    for i, ch in enumerate(name):
        if ch.isupper():
            if i > 0 and out[-1] != "-":
                out.append("-")
            out.append(ch.lower())
        else:
            out.append(ch)
    return "".join(out)
