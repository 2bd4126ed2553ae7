#!/usr/bin/env python3
"""
Pull the fonts checkout, regenerate the manifest inside the manifest
repository and push it.

Usage:
fontmanifest sync --config config.yaml
fontmanifest sync -f path/to/google/fonts -m path/to/manifest-repo --no-push
"""
from fontmanifest import sync
from fontmanifest.argparse import ManifestArgumentParser
from fontmanifest.config import config_from_args
from fontmanifest.logging import setup_logging


def main(args=None):
    parser = ManifestArgumentParser(description=__doc__)
    parser.add_config_arguments()
    parser.add_argument(
        "-m", "--manifest-repo", help="Path to the manifest git repository"
    )
    parser.add_argument(
        "--no-pull",
        dest="pull",
        action="store_false",
        default=None,
        help="Do not pull the fonts checkout",
    )
    parser.add_argument(
        "--no-push",
        dest="push",
        action="store_false",
        default=None,
        help="Commit the manifest but do not push it",
    )
    args = parser.parse_args(args)
    log = setup_logging("fontmanifest.sync", args, __name__)

    config = config_from_args(args, manifest_repo=args.manifest_repo)
    result = sync.run(config, pull=args.pull, push=args.push)
    if result.pushed:
        log.info(f"Pushed manifest commit {result.commit}")


if __name__ == "__main__":
    main()
