#!/usr/bin/env python3
"""
Print the fields of METADATA.pb files as the manifest sees them.

Usage:
fontmanifest parse-metadata path/to/google/fonts/ofl/abel/METADATA.pb
fontmanifest parse-metadata path/to/google/fonts/ofl/*/METADATA.pb --json
"""
import argparse
import json
from pathlib import Path

from tabulate import tabulate

from fontmanifest.constants import METADATA_FILENAME
from fontmanifest.manifest import format_axes
from fontmanifest.metadata import FamilyMetadata


def main(args=None):
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument(
        "paths", nargs="+", type=Path, help="METADATA.pb files or family directories"
    )
    parser.add_argument("--json", action="store_true", help="Output JSON")
    args = parser.parse_args(args)

    families = {}
    for path in args.paths:
        if path.is_dir():
            path = path / METADATA_FILENAME
        families[str(path)] = FamilyMetadata.from_fp(path)

    if args.json:
        print(
            json.dumps(
                {k: v.to_json() for k, v in families.items()},
                indent=2,
                ensure_ascii=False,
            )
        )
        return

    rows = [
        [
            meta.name,
            meta.designer,
            meta.license,
            meta.category,
            ",".join(meta.subsets),
            format_axes(meta.axes),
        ]
        for meta in families.values()
    ]
    headers = ["Name", "Designer", "License", "Category", "Subsets", "Axes"]
    print(tabulate(rows, headers, tablefmt="pipe"))


if __name__ == "__main__":
    main()
