"""Lifetime modes for values crossing the language boundary.

A mode guides the conversion of string and byte slice values. The same mode
must be used for the conversion before a foreign call and for the matching
conversion after it.
"""

from __future__ import annotations

import enum


class VarMode(enum.Enum):
    # Function arguments that are not used after the function returns.
    # Neither strings nor byte slices need copying.
    TRANSIENT = "transient"
    # Function arguments the callee may keep after returning. Strings can be
    # shared, byte slices are copied.
    RETAINED = "retained"
    # Values returned to the caller. Always copied.
    RETURNED = "returned"

    def copy_string(self) -> bool:
        return self is VarMode.RETURNED

    def copy_slice(self) -> bool:
        return self in (VarMode.RETAINED, VarMode.RETURNED)


def copy_string(mode: VarMode) -> bool:
    return mode.copy_string()


def copy_slice(mode: VarMode) -> bool:
    return mode.copy_slice()


def to_c_flag(value: bool) -> int:
    return 1 if value else 0


def param_mode(proxy: bool) -> VarMode:
    """Mode for a parameter, by which side implements the callee.

    Proxy methods are implemented on the foreign side, which may hold on to
    its arguments. Exported functions run on the source side and do not.
    """
    if proxy:
        return VarMode.RETAINED
    return VarMode.TRANSIENT


def result_mode() -> VarMode:
    return VarMode.RETURNED
