#!/usr/bin/env python3
# Copyright 2026 The fontmanifest Authors
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#    http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
#
"""fontmanifest <subcommand> [options]

Each module in this package is a subcommand, named after the module with
underscores turned into dashes. Options after the subcommand go to it."""
from argparse import RawTextHelpFormatter
from importlib import import_module
from pathlib import Path
import sys
import argparse

from fontmanifest._version import version as __version__


def _get_subcommands():
    subcommands = {}
    for module in Path(__file__).parent.glob("*.py"):
        module = module.stem
        if module == "__init__":
            continue
        friendly_name = module.replace("_", "-")
        subcommands[friendly_name] = (module, "fontmanifest.scripts")
    return subcommands


def summary(subcommand):
    """First paragraph of the subcommand module's docstring, on one line."""
    module, package = subcommands[subcommand]
    doc = import_module(f".{module}", package).__doc__ or ""
    return " ".join(doc.strip().split("\n\n")[0].split())


subcommands = _get_subcommands()


def build_parser():
    listing = "\n".join(
        f"    {name:<16}{summary(name)}" for name in sorted(subcommands)
    )
    parser = argparse.ArgumentParser(
        prog="fontmanifest",
        description=f"Subcommands:\n{listing}\n\n"
        "Run fontmanifest <subcommand> -h for the options of each one.",
        formatter_class=RawTextHelpFormatter,
    )
    parser.add_argument(
        "subcommand", choices=sorted(subcommands), metavar="subcommand"
    )
    parser.add_argument(
        "--version", "-v", action="version", version="%(prog)s " + __version__
    )
    return parser


def main(args=None):
    if args is None:
        args = sys.argv
    if len(args) >= 2 and args[1] in subcommands:
        module, package = subcommands[args[1]]
        import_module(f".{module}", package).main(args[2:])
        return
    parser = build_parser()
    if len(args) < 2:
        parser.print_help()
        return
    # Unknown subcommands and --help/--version end here.
    parser.parse_args(args[1:])


if __name__ == "__main__":
    main()
