from argparse import ArgumentParser
from pathlib import Path

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class ManifestArgumentParser(ArgumentParser):

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.add_argument(
            "--show-tracebacks", action="store_true", help="Show tracebacks"
        )
        self.add_argument(
            "--log-level",
            choices=LOG_LEVELS,
            default="INFO",
        )

    def add_config_arguments(self):
        """Options that select or override the run configuration."""
        self.add_argument("-c", "--config", type=Path, help="Path to a config.yaml")
        self.add_argument(
            "-f",
            "--fonts-repo",
            type=Path,
            help="Path to the fonts checkout. Defaults to the path in "
            "local-repo-location.txt",
        )
        self.add_argument(
            "-o", "--output-dir", type=Path, help="Directory to write the manifest to"
        )
        self.add_argument(
            "--license",
            dest="licenses",
            action="append",
            help="License directory to scan, may be repeated. "
            "Defaults to apache, ofl and ufl",
        )
        self.add_argument(
            "--validate-fonts",
            action="store_true",
            default=None,
            help="Drop font files fontTools cannot open",
        )
