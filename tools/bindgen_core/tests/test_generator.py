from __future__ import annotations

import sys
import unittest
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[3]
SRC_ROOT = REPO_ROOT / "tools" / "bindgen_core" / "src"
if str(SRC_ROOT) not in sys.path:
    sys.path.insert(0, str(SRC_ROOT))

from bindgen_core.errors import (
    BindgenError,
    UnresolvedEmbeddedInterface,
    UnsupportedScalarKind,
    UnsupportedSymbolKind,
)
from bindgen_core.generator import Generator, GeneratorOptions
from bindgen_core.model import (
    Basic,
    FuncObject,
    Interface,
    InterfaceSummary,
    Named,
    OtherObject,
    OtherType,
    Package,
    Pointer,
    Signature,
    Struct,
    TypeNameObject,
    Var,
)
from bindgen_core.printer import Printer


def func(name: str, params=(), results=()) -> FuncObject:
    return FuncObject(
        name,
        Signature(
            tuple(Var(n, t) for n, t in params),
            tuple(Var("", t) for t in results),
        ),
    )


def demo_package(*extra) -> Package:
    objects = (
        func("Add", [("a", Basic("int32")), ("b", Basic("int32"))], [Basic("int32")]),
        TypeNameObject(
            "Counter",
            Struct(
                fields=(Var("N", Basic("int64")),),
                methods=(func("Inc", [("by", Basic("int64"))]),),
            ),
        ),
        TypeNameObject(
            "Greeter",
            Interface(methods=(func("Greet", [("who", Basic("string"))], [Basic("int32"), Basic("string")]),)),
        ),
    )
    return Package("example.com/demo", "demo", objects + tuple(extra))


class GeneratorTests(unittest.TestCase):
    def test_header_declarations_in_scope_order(self) -> None:
        gen = Generator(demo_package(), GeneratorOptions(header_includes=("<stdint.h>",)))
        header = gen.gen_header()

        self.assertFalse(gen.err)
        self.assertEqual(
            header,
            "// Code generated by bindgen for package example.com/demo. DO NOT EDIT.\n"
            "\n"
            "#ifndef __DEMO_H__\n"
            "#define __DEMO_H__\n"
            "\n"
            "#include <stdint.h>\n"
            "\n"
            "int32_t proxy_demo_Add(int32_t a, int32_t b);\n"
            "void proxy_demo_Counter_Inc(int32_t refnum, int64_t by);\n"
            "typedef struct proxy_demo_Greeter_Greet_return {\n"
            "\tint32_t r0;\n"
            "\tnstring r1;\n"
            "} proxy_demo_Greeter_Greet_return;\n"
            "struct proxy_demo_Greeter_Greet_return proxy_demo_Greeter_Greet(int32_t refnum, nstring who);\n"
            "\n"
            "#endif\n",
        )
        self.assertEqual(gen.gen_header(), header)

    def test_reversed_scope_reverses_declarations(self) -> None:
        package = demo_package()
        reversed_package = Package(package.path, package.name, tuple(reversed(package.objects)))
        names = [csig.name for csig in Generator(reversed_package).signatures()]
        self.assertEqual(names, ["proxy_demo_Greeter_Greet", "proxy_demo_Counter_Inc", "proxy_demo_Add"])

    def test_prefix_override(self) -> None:
        gen = Generator(demo_package(), GeneratorOptions(pkg_prefix="demo2"))
        self.assertEqual(gen.signatures()[0].name, "proxy_demo2_Add")

    def test_recoverable_errors_are_aggregated(self) -> None:
        gen = Generator(demo_package(OtherObject("Label", "label"), OtherObject("Builtin", "builtin")))
        signatures = gen.signatures()

        self.assertEqual(len(signatures), 3)
        self.assertEqual(len(gen.err), 2)
        self.assertTrue(all(isinstance(err, UnsupportedSymbolKind) for err in gen.err))
        self.assertEqual(
            str(gen.err),
            "unsupported exported type for Label: label\nunsupported exported type for Builtin: builtin",
        )

    def test_abort_policy_raises_with_symbol(self) -> None:
        bad = func("Mask", [("bits", Basic("uint32"))])
        gen = Generator(demo_package(bad))
        with self.assertRaises(UnsupportedScalarKind) as ctx:
            gen.gen_header()
        self.assertEqual(ctx.exception.symbol, "example.com/demo.Mask")
        self.assertEqual(str(ctx.exception), "example.com/demo.Mask: unsupported basic type: uint32")

    def test_skip_policy_drops_only_the_bad_declaration(self) -> None:
        bad = func("Lookup", results=[OtherType("map[string]int")])
        late = func("Reset")
        gen = Generator(demo_package(bad, late), GeneratorOptions(on_unsupported_type="skip"))
        header = gen.gen_header()

        self.assertNotIn("Lookup", header)
        self.assertIn("void proxy_demo_Reset(void);", header)
        self.assertEqual(len(gen.err), 1)
        self.assertIn("Lookup", str(gen.err))
        self.assertIn("map[string]int", str(gen.err))

        gen.gen_interface_description()
        self.assertEqual(len(gen.err), 1)

    def test_invalid_policy(self) -> None:
        with self.assertRaises(BindgenError):
            GeneratorOptions(on_unsupported_type="ignore")

    def test_definitions_use_body_writer(self) -> None:
        def body(p: Printer, csig) -> None:
            p.printf("// %d params\n", len(csig.params))

        gen = Generator(Package("p", "p", (func("Ping", [("n", Basic("int"))]),)))
        self.assertEqual(gen.gen_definitions(body), "void proxy_p_Ping(nint n) {\n\t// 1 params\n}\n\n")

    def test_interface_method_signature_operation(self) -> None:
        gen = Generator(demo_package())
        p = Printer()
        m = func("Stat", [("_", Pointer(Named("Counter")))], [Basic("bool"), Basic("float64")])
        gen.gen_interface_method_signature(p, m, "FS", header=False)
        self.assertEqual(
            p.getvalue(),
            "struct proxy_demo_FS_Stat_return proxy_demo_FS_Stat(int32_t refnum, int32_t p0) {\n",
        )

    def test_interface_description(self) -> None:
        gen = Generator(demo_package(OtherObject("Label", "label")))
        payload = gen.gen_interface_description()

        self.assertEqual(payload["package"], {"path": "example.com/demo", "name": "demo", "prefix": "demo"})
        self.assertEqual(payload["worklists"]["interfaces"], ["Greeter"])
        self.assertEqual(payload["interfaces"], [{"name": "Greeter", "implementable": True}])
        self.assertEqual(
            [item["name"] for item in payload["functions"]],
            ["proxy_demo_Add", "proxy_demo_Counter_Inc", "proxy_demo_Greeter_Greet"],
        )
        self.assertEqual(payload["diagnostics"], ["unsupported exported type for Label: label"])

    def test_unexported_methods_are_not_declared(self) -> None:
        package = Package(
            "p",
            "p",
            (
                TypeNameObject("Greeter", Interface(methods=(func("Greet"), func("hook")))),
                TypeNameObject("Counter", Struct(methods=(func("Inc"), func("reset")))),
            ),
        )
        gen = Generator(package)
        header = gen.gen_header()

        self.assertEqual([csig.name for csig in gen.signatures()], ["proxy_p_Greeter_Greet", "proxy_p_Counter_Inc"])
        self.assertNotIn("proxy_p_Greeter_hook", header)
        self.assertNotIn("proxy_p_Counter_reset", header)

    def test_foreign_embedded_interface_keeps_the_pass_going(self) -> None:
        package = Package(
            "p",
            "p",
            (
                TypeNameObject("ReadCloser", Interface(methods=(func("Read"),), embedded=("io.Closer",))),
                func("Ok", results=[Basic("bool")]),
            ),
        )
        gen = Generator(package)
        header = gen.gen_header()

        self.assertIn("void proxy_p_ReadCloser_Read(int32_t refnum);", header)
        self.assertIn("char proxy_p_Ok(void);", header)
        self.assertEqual(len(gen.err), 1)
        self.assertIsInstance(gen.err.errors[0], UnresolvedEmbeddedInterface)
        self.assertIn("io.Closer", str(gen.err))
        self.assertFalse(gen.init().interfaces[0].summary.implementable)

    def test_supplied_summary_is_used(self) -> None:
        summary = InterfaceSummary(callable=(func("Close"), func("Read")), implementable=True)
        iface = TypeNameObject(
            "ReadCloser", Interface(methods=(func("Read"),), embedded=("io.Closer",)), summary
        )
        gen = Generator(Package("p", "p", (iface,)))

        self.assertEqual(
            [csig.name for csig in gen.signatures()],
            ["proxy_p_ReadCloser_Close", "proxy_p_ReadCloser_Read"],
        )
        self.assertFalse(gen.err)

    def test_interface_method_signature_follows_policy(self) -> None:
        m = func("Set", [("v", Basic("uint16"))])

        with self.assertRaises(UnsupportedScalarKind) as ctx:
            Generator(demo_package()).gen_interface_method_signature(Printer(), m, "Store", header=True)
        self.assertEqual(ctx.exception.symbol, "example.com/demo.Store.Set")

        gen = Generator(demo_package(), GeneratorOptions(on_unsupported_type="skip"))
        p = Printer()
        gen.gen_interface_method_signature(p, m, "Store", header=True)
        self.assertEqual(p.getvalue(), "")
        self.assertEqual(str(gen.err), "example.com/demo.Store.Set: unsupported basic type: uint16")

    def test_independent_passes(self) -> None:
        first = Generator(demo_package(OtherObject("Label", "label")))
        second = Generator(demo_package())
        first.signatures()
        second.signatures()
        self.assertEqual(len(first.err), 1)
        self.assertEqual(len(second.err), 0)


class PrinterTests(unittest.TestCase):
    def test_indents_each_line(self) -> None:
        p = Printer()
        p.printf("a {\n")
        p.indent()
        p.printf("b;\nc;\n\n")
        p.outdent()
        p.printf("}\n")
        self.assertEqual(p.getvalue(), "a {\n\tb;\n\tc;\n\n}\n")

    def test_outdent_below_zero(self) -> None:
        with self.assertRaises(BindgenError):
            Printer().outdent()


if __name__ == "__main__":
    unittest.main()
