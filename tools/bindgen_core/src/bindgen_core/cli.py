from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .common import render_json, write_if_changed
from .errors import BindgenError
from .generator import DEFAULT_INCLUDES, SUPPORTED_POLICIES, Generator, GeneratorOptions
from .loader import load_package_model


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="bindgen",
        description="Generate foreign-function boundary declarations from a resolved package model.",
    )
    parser.add_argument("--model", required=True, help="Path to package model JSON.")
    parser.add_argument("--header-out", help="Write the declaration header to path.")
    parser.add_argument("--idl-out", help="Write the JSON interface description to path.")
    parser.add_argument("--prefix", help="Declaration name prefix (default: package name).")
    parser.add_argument(
        "--include",
        action="append",
        help="Header include, e.g. '<stdint.h>' (repeatable; default: stdint.h and seq.h).",
    )
    parser.add_argument(
        "--on-unsupported-type",
        choices=SUPPORTED_POLICIES,
        default="abort",
        help="Abort the pass or skip the declaration when a type cannot be mapped (default: abort).",
    )
    parser.add_argument("--check", action="store_true", help="Fail with a diff if outputs are out of date.")
    parser.add_argument("--dry-run", action="store_true", help="Do not write outputs.")
    return parser


def command_generate(args: argparse.Namespace) -> int:
    package = load_package_model(Path(args.model).resolve())
    options = GeneratorOptions(
        pkg_prefix=args.prefix,
        on_unsupported_type=args.on_unsupported_type,
        header_includes=tuple(args.include) if args.include else DEFAULT_INCLUDES,
    )
    gen = Generator(package, options)
    header = gen.gen_header()
    description = gen.gen_interface_description()

    for err in gen.err:
        print(f"bindgen warning: {err}", file=sys.stderr)

    status = 0
    if args.header_out:
        status |= write_if_changed(Path(args.header_out).resolve(), header, args.check, args.dry_run)
    if args.idl_out:
        status |= write_if_changed(Path(args.idl_out).resolve(), render_json(description), args.check, args.dry_run)
    if not args.header_out and not args.idl_out:
        sys.stdout.write(header)

    print(
        f"[{package.path}] generate: declarations={len(description['functions'])} "
        f"diagnostics={len(gen.err)}",
        file=sys.stderr,
    )
    return status


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        return int(command_generate(args))
    except BindgenError as exc:
        print(f"bindgen error: {exc}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    raise SystemExit(main())
