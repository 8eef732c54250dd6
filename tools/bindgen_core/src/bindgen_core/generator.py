from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Iterator

from .collect import BindablePredicate, InterfaceInfo, StructInfo, Worklists, collect_symbols, is_bindable
from .errors import BindgenError, ErrorList, UnsupportedTypeError
from .model import FuncObject, Package
from .printer import Printer
from .signatures import CSignature, build_func_signature, build_method_signature, write_signature

TOOL_NAME = "bindgen"
SUPPORTED_POLICIES = ("abort", "skip")
DEFAULT_INCLUDES = ("<stdint.h>", '"seq.h"')

BodyWriter = Callable[[Printer, CSignature], None]


@dataclass(frozen=True)
class GeneratorOptions:
    # Disambiguates declaration names when several packages are bound
    # together. Defaults to the package name.
    pkg_prefix: str | None = None
    on_unsupported_type: str = "abort"
    header_includes: tuple[str, ...] = DEFAULT_INCLUDES
    is_bindable: BindablePredicate = field(default=is_bindable, compare=False)

    def __post_init__(self) -> None:
        if self.on_unsupported_type not in SUPPORTED_POLICIES:
            raise BindgenError(
                f"on_unsupported_type must be one of: {', '.join(SUPPORTED_POLICIES)}; "
                f"got {self.on_unsupported_type!r}"
            )


class Generator:
    """State of one generation pass over one package.

    Holds the worklists and the accumulated diagnostics. Create a new
    instance per package; instances share nothing.
    """

    def __init__(self, package: Package, options: GeneratorOptions | None = None) -> None:
        self.package = package
        self.options = options or GeneratorOptions()
        self.err = ErrorList()
        self.pkg_name = package.name
        self.pkg_prefix = self.options.pkg_prefix or package.name
        self.work: Worklists | None = None
        self._signatures: list[CSignature] | None = None

    def init(self) -> Worklists:
        if self.work is None:
            self.work = collect_symbols(self.package, self.err, self.options.is_bindable)
        return self.work

    def _members(self) -> Iterator[tuple[str, Callable[[], CSignature]]]:
        work = self.init()
        for item in work.bindable:
            if isinstance(item, FuncObject):
                yield item.name, lambda f=item: build_func_signature(f, self.pkg_prefix)
            elif isinstance(item, StructInfo):
                for m in item.struct.methods:
                    if not m.exported or not self.options.is_bindable(m):
                        continue
                    yield (
                        f"{item.name}.{m.name}",
                        lambda m=m, iname=item.name: build_method_signature(m, iname, self.pkg_prefix, proxy=False),
                    )
            elif isinstance(item, InterfaceInfo):
                for m in item.summary.callable:
                    if not m.exported:
                        continue
                    yield (
                        f"{item.name}.{m.name}",
                        lambda m=m, iname=item.name: build_method_signature(m, iname, self.pkg_prefix, proxy=True),
                    )

    def signatures(self) -> list[CSignature]:
        """Build every declaration in enumeration order.

        A declaration whose types cannot be mapped either aborts the pass or
        is dropped and recorded, depending on options.on_unsupported_type.
        """
        if self._signatures is not None:
            return list(self._signatures)
        out: list[CSignature] = []
        for symbol, build in self._members():
            csig = self._build(symbol, build)
            if csig is not None:
                out.append(csig)
        self._signatures = out
        return list(out)

    def _build(self, symbol: str, build: Callable[[], CSignature]) -> CSignature | None:
        try:
            return build()
        except UnsupportedTypeError as exc:
            annotated = exc.for_symbol(f"{self.package.path}.{symbol}")
            if self.options.on_unsupported_type == "abort":
                raise annotated from exc
            self.err.append(annotated)
            return None

    def gen_interface_method_signature(self, p: Printer, m: FuncObject, iname: str, header: bool) -> None:
        csig = self._build(
            f"{iname}.{m.name}",
            lambda: build_method_signature(m, iname, self.pkg_prefix, proxy=True),
        )
        if csig is not None:
            write_signature(p, csig, header)

    def gen_declarations(self, p: Printer) -> None:
        for csig in self.signatures():
            write_signature(p, csig, header=True)

    def gen_header(self) -> str:
        p = Printer()
        guard = f"__{self.pkg_prefix.upper()}_H__"
        p.printf("// Code generated by %s for package %s. DO NOT EDIT.\n\n", TOOL_NAME, self.package.path)
        p.printf("#ifndef %s\n#define %s\n\n", guard, guard)
        for include in self.options.header_includes:
            p.printf("#include %s\n", include)
        if self.options.header_includes:
            p.printf("\n")
        self.gen_declarations(p)
        p.printf("\n#endif\n")
        return p.getvalue()

    def gen_definitions(self, body: BodyWriter) -> str:
        p = Printer()
        for csig in self.signatures():
            write_signature(p, csig, header=False)
            p.indent()
            body(p, csig)
            p.outdent()
            p.printf("}\n\n")
        return p.getvalue()

    def gen_interface_description(self) -> dict[str, Any]:
        signatures = self.signatures()
        work = self.init()
        return {
            "tool": TOOL_NAME,
            "package": {"path": self.package.path, "name": self.pkg_name, "prefix": self.pkg_prefix},
            "worklists": work.as_dict(),
            "interfaces": [
                {"name": info.name, "implementable": info.summary.implementable}
                for info in work.interfaces
            ],
            "functions": [csig.as_dict() for csig in signatures],
            "diagnostics": [str(err) for err in self.err],
        }
