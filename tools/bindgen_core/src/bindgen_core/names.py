from __future__ import annotations

from .model import Var

RESERVED_SENTINEL = "_"
SYNTHETIC_PREFIX = "p"
DECIMAL_DIGITS = frozenset("0123456789")


def is_synthetic_name(name: str) -> bool:
    if not name.startswith(SYNTHETIC_PREFIX):
        return False
    return all(ch in DECIMAL_DIGITS for ch in name[len(SYNTHETIC_PREFIX):])


def param_name(params: tuple[Var, ...] | list[Var], pos: int) -> str:
    """Replace an incompatible parameter name with a p0-pN name.

    Missing names, names starting with '_' and names of the form p[0-9]*
    are incompatible.
    """
    return resolve_param_name(pos, params[pos].name)


def resolve_param_name(pos: int, name: str) -> str:
    # TODO: names that are not valid C identifiers are passed through as is.
    if not name or name.startswith(RESERVED_SENTINEL) or is_synthetic_name(name):
        return f"{SYNTHETIC_PREFIX}{pos}"
    return name
