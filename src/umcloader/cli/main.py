# Copyright 2026 umcloader Contributors
# SPDX-License-Identifier: Apache-2.0

"""Entry point for the umcloader command-line interface."""

import argparse
import logging
import shutil
import sys
from dataclasses import replace
from pathlib import Path
from typing import BinaryIO

from umcloader.descriptor.parser import load_descriptor
from umcloader.errors import UmcLoaderError
from umcloader.resolution import Resolution, resolve
from umcloader.settings import UpstreamSettings
from umcloader.variables.substitution import substitute, substitute_stream
from umcloader.variables.table import Brand, OutputDialect

logger = logging.getLogger(__name__)

# ###############
# Public Interface
# ###############


def main() -> None:
    """Run the umcloader CLI."""
    parser = argparse.ArgumentParser(
        prog="umcloader",
        description="umcloader - resolve a mod descriptor and generate build files",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log every resolution step",
    )
    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")

    # vars subcommand
    vars_parser = subparsers.add_parser(
        "vars",
        help="Print the resolved variable table",
        description="Resolve the descriptor and print every variable as NAME=VALUE.",
    )
    _add_resolution_arguments(vars_parser)

    # render subcommand
    render_parser = subparsers.add_parser(
        "render",
        help="Substitute variables into a template directory",
        description=(
            "Copy every file below TEMPLATE_DIR to OUTPUT_DIR, substituting the "
            "resolved variables into file contents and relative paths."
        ),
    )
    _add_resolution_arguments(render_parser)
    render_parser.add_argument("template_dir", help="Directory holding the templates")
    render_parser.add_argument("output_dir", help="Directory to write generated files to")
    render_parser.add_argument(
        "--bare",
        action="store_true",
        help="Match bare variable names instead of #NAME# tokens",
    )

    # fetch-jar subcommand
    fetch_parser = subparsers.add_parser(
        "fetch-jar",
        help="Copy or download the core library binary",
        description="Copy the locally built core library binary or download the published one.",
    )
    _add_resolution_arguments(fetch_parser)
    fetch_parser.add_argument("destination", help="File to write the binary to")

    args = parser.parse_args()
    if args.command is None:
        parser.print_help()
        sys.exit(0)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    sys.exit(_dispatch(args))


# ################
# Implementation
# ################


def _add_resolution_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("descriptor", help="Path to the JSON or YAML descriptor")
    parser.add_argument("--minecraft", required=True, help="Minecraft version, e.g. 1.20")
    parser.add_argument(
        "--loader",
        required=True,
        help=f"Loader brand ({', '.join(b.value for b in Brand)})",
    )
    parser.add_argument(
        "--dialect",
        choices=[d.value for d in OutputDialect],
        default=OutputDialect.SHADOW.value,
        help="Naming of the library dependency variables (default: shadow)",
    )
    parser.add_argument("--upstream", help="Git URL of the core library repository")
    parser.add_argument("--maven-url", help="Base URL of the core library Maven repository")


def _dispatch(args: argparse.Namespace) -> int:
    """Dispatch to the appropriate subcommand handler."""
    if args.command == "vars":
        return _cmd_vars(args)
    if args.command == "render":
        return _cmd_render(args)
    if args.command == "fetch-jar":
        return _cmd_fetch_jar(args)
    return 0


def _resolve(args: argparse.Namespace) -> Resolution:
    """Resolve the descriptor named on the command line.

    Raises:
        UmcLoaderError: If any resolution step fails.
        ValueError: If the loader brand is unknown.
    """
    brand = Brand.parse(args.loader)
    settings = UpstreamSettings.from_env()
    if args.upstream:
        settings = replace(settings, upstream_repository=args.upstream)
    if args.maven_url:
        settings = replace(settings, maven_url=args.maven_url.rstrip("/"))

    descriptor = load_descriptor(Path(args.descriptor))
    return resolve(
        descriptor,
        args.minecraft,
        brand,
        dialect=OutputDialect(args.dialect),
        settings=settings,
    )


def _cmd_vars(args: argparse.Namespace) -> int:
    """Handle the vars subcommand."""
    try:
        resolution = _resolve(args)
    except (UmcLoaderError, ValueError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    for name, value in resolution.variables.items():
        print(f"{name}={value}")
    return 0


def _cmd_render(args: argparse.Namespace) -> int:
    """Handle the render subcommand."""
    template_dir = Path(args.template_dir).resolve()
    output_dir = Path(args.output_dir).resolve()

    if not template_dir.is_dir():
        print(f"Error: template directory '{template_dir}' does not exist.", file=sys.stderr)
        return 1

    try:
        resolution = _resolve(args)
    except (UmcLoaderError, ValueError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    delimited = not args.bare
    templates = sorted(f for f in template_dir.rglob("*") if f.is_file())
    for template in templates:
        rel = template.relative_to(template_dir).as_posix()
        target = output_dir / substitute(rel, resolution.variables, delimited)
        try:
            _render_file(template, target, resolution, delimited)
        except OSError as exc:
            print(f"Error: cannot render '{rel}' to '{target}': {exc}", file=sys.stderr)
            return 1

    print(f"Rendered {len(templates)} file(s) for {resolution.variant.key} into '{output_dir}'.")
    return 0


def _cmd_fetch_jar(args: argparse.Namespace) -> int:
    """Handle the fetch-jar subcommand."""
    destination = Path(args.destination)

    try:
        resolution = _resolve(args)
        with resolution.open_artifact() as stream:
            destination.parent.mkdir(parents=True, exist_ok=True)
            _write_stream(stream, destination)
    except (UmcLoaderError, ValueError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    except OSError as exc:
        print(f"Error: cannot copy core library to '{destination}': {exc}", file=sys.stderr)
        return 1

    print(f"Wrote core library {resolution.version} to '{destination}'.")
    return 0


def _render_file(template: Path, target: Path, resolution: Resolution, delimited: bool) -> None:
    """Write *template* to *target* with variables substituted; non-text files are copied unchanged."""
    logger.debug("Rendering %s to %s", template, target)
    target.parent.mkdir(parents=True, exist_ok=True)
    try:
        with template.open("rb") as source:
            rendered = substitute_stream(source, resolution.variables, delimited)
    except UnicodeDecodeError:
        logger.debug("Copying %s unchanged", template)
        shutil.copyfile(template, target)
        return
    target.write_bytes(rendered.read())


def _write_stream(stream: BinaryIO, destination: Path) -> None:
    """Copy *stream* to *destination*, removing the partially written file on failure."""
    with destination.open("wb") as out:
        try:
            shutil.copyfileobj(stream, out)
        except BaseException:
            out.close()
            destination.unlink(missing_ok=True)
            raise
