from __future__ import annotations

from typing import Iterator


class BindgenError(Exception):
    pass


class UnsupportedSymbolKind(BindgenError):
    pass


class UnsupportedConstType(BindgenError):
    pass


class EmptyExportedSurface(BindgenError):
    pass


class UnresolvedEmbeddedInterface(BindgenError):
    pass


class UnsupportedTypeError(BindgenError):
    """Raised by the type mapper when a type cannot cross the boundary.

    Fatal for the declaration being built. ``type_desc`` names the offending
    type; ``symbol`` is filled in by the generator once the declaration that
    needed the type is known.
    """

    def __init__(self, message: str, type_desc: str, symbol: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.type_desc = type_desc
        self.symbol = symbol

    def __str__(self) -> str:
        if self.symbol:
            return f"{self.symbol}: {self.message}"
        return self.message

    def for_symbol(self, symbol: str) -> UnsupportedTypeError:
        return type(self)(self.message, self.type_desc, symbol)


class UnsupportedScalarKind(UnsupportedTypeError):
    pass


class UnsupportedSliceElement(UnsupportedTypeError):
    pass


class UnsupportedPointerTarget(UnsupportedTypeError):
    pass


class UnsupportedTypeShape(UnsupportedTypeError):
    pass


class ErrorList(BindgenError):
    """Failures collected over one generation pass, in discovery order."""

    def __init__(self, errors: list[BindgenError] | None = None) -> None:
        super().__init__()
        self.errors: list[BindgenError] = list(errors or [])

    def append(self, err: BindgenError) -> None:
        self.errors.append(err)

    def errorf(self, cls: type[BindgenError], message: str) -> None:
        self.errors.append(cls(message))

    def __len__(self) -> int:
        return len(self.errors)

    def __bool__(self) -> bool:
        return bool(self.errors)

    def __iter__(self) -> Iterator[BindgenError]:
        return iter(self.errors)

    def __str__(self) -> str:
        return "\n".join(str(err) for err in self.errors)
