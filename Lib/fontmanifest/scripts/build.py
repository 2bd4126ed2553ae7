#!/usr/bin/env python3
"""
Generate metadata.properties and metadata.properties.gz from a local
google/fonts checkout, without touching git.

Usage:
fontmanifest build --fonts-repo path/to/google/fonts -o out/
fontmanifest build --config config.yaml
"""
from tabulate import tabulate

from fontmanifest.argparse import ManifestArgumentParser
from fontmanifest.config import config_from_args
from fontmanifest.logging import setup_logging
from fontmanifest.sync import generate


def summary_table(entries):
    counts = {}
    for entry in entries:
        license_counts = counts.setdefault(entry.family.license, [0, 0, 0])
        license_counts[0] += 1
        license_counts[1] += len(entry.family.fonts)
        license_counts[2] += entry.metadata is None
    rows = [[license, *c] for license, c in counts.items()]
    return tabulate(
        rows, ["License", "Families", "Fonts", "Missing metadata"], tablefmt="pipe"
    )


def main(args=None):
    parser = ManifestArgumentParser(description=__doc__)
    parser.add_config_arguments()
    parser.add_argument(
        "--summary", action="store_true", help="Print family counts per license"
    )
    args = parser.parse_args(args)
    setup_logging("fontmanifest.build", args, __name__)

    config = config_from_args(args)
    result = generate(config)
    if args.summary:
        print(summary_table(result.entries))


if __name__ == "__main__":
    main()
