#!/usr/bin/env python3
"""
Print the content version tag of font family directories.

Usage:
fontmanifest version-tag path/to/google/fonts/ofl/abel path/to/google/fonts/ofl/lora
"""
import argparse
from pathlib import Path

from fontmanifest.constants import FONT_EXTENSIONS, VERSION_TAG_LENGTH
from fontmanifest.scanner import list_fonts
from fontmanifest.versiontag import version_tag


def main(args=None):
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("family_dirs", nargs="+", type=Path)
    parser.add_argument("--length", type=int, default=VERSION_TAG_LENGTH)
    parser.add_argument(
        "--extension",
        dest="extensions",
        action="append",
        help="Font file extension, may be repeated",
    )
    args = parser.parse_args(args)

    for family_dir in args.family_dirs:
        fonts = list_fonts(family_dir, args.extensions or FONT_EXTENSIONS)
        if not fonts:
            print(f"{family_dir}: no fonts")
            continue
        print(f"{family_dir}: {version_tag(family_dir, fonts, args.length)}")


if __name__ == "__main__":
    main()
