"""
Configuration for manifest runs.

A config file is YAML:

    fontsRepo: ../fonts
    manifestRepo: ../font-manifest
    licenses:
      - apache
      - ofl
      - ufl
    remote: origin
    branch: main
    author:
      name: Font Manifest Bot
      email: bot@example.com

Only fontsRepo is required. Without a config file the path of the fonts
checkout is read from local-repo-location.txt.
"""
from __future__ import annotations
import logging
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import List, Optional

import strictyaml
from strictyaml import Bool, Map, Optional as Opt, Str, UniqueSeq

from fontmanifest.constants import (
    DEFAULT_BRANCH,
    DEFAULT_COMMIT_MESSAGE,
    DEFAULT_REMOTE,
    FONT_EXTENSIONS,
    LICENSE_DIRS,
    LOCATION_FILENAME,
    MANIFEST_FILENAME,
)


log = logging.getLogger("fontmanifest.config")


CONFIG_SCHEMA = Map(
    {
        "fontsRepo": Str(),
        Opt("manifestRepo"): Str(),
        Opt("outputDir"): Str(),
        Opt("licenses"): UniqueSeq(Str()),
        Opt("extensions"): UniqueSeq(Str()),
        Opt("manifestName"): Str(),
        Opt("remote"): Str(),
        Opt("branch"): Str(),
        Opt("manifestRemote"): Str(),
        Opt("manifestBranch"): Str(),
        Opt("commitMessage"): Str(),
        Opt("author"): Map({"name": Str(), "email": Str()}),
        Opt("pull"): Bool(),
        Opt("push"): Bool(),
        Opt("validateFonts"): Bool(),
    }
)

# config file key -> ManifestConfig attribute
_KEYS = {
    "fontsRepo": "fonts_repo",
    "manifestRepo": "manifest_repo",
    "outputDir": "output_dir",
    "licenses": "licenses",
    "extensions": "extensions",
    "manifestName": "manifest_name",
    "remote": "remote",
    "branch": "branch",
    "manifestRemote": "manifest_remote",
    "manifestBranch": "manifest_branch",
    "commitMessage": "commit_message",
    "pull": "pull",
    "push": "push",
    "validateFonts": "validate_fonts",
}

_PATH_KEYS = ("fonts_repo", "manifest_repo", "output_dir")


@dataclass
class ManifestConfig:
    fonts_repo: Path
    manifest_repo: Optional[Path] = None
    output_dir: Optional[Path] = None
    licenses: List[str] = field(default_factory=lambda: list(LICENSE_DIRS))
    extensions: List[str] = field(default_factory=lambda: list(FONT_EXTENSIONS))
    manifest_name: str = MANIFEST_FILENAME
    remote: str = DEFAULT_REMOTE
    branch: str = DEFAULT_BRANCH
    manifest_remote: str = DEFAULT_REMOTE
    manifest_branch: str = DEFAULT_BRANCH
    commit_message: str = DEFAULT_COMMIT_MESSAGE
    author_name: Optional[str] = None
    author_email: Optional[str] = None
    pull: bool = True
    push: bool = True
    validate_fonts: bool = False

    @property
    def out_dir(self) -> Path:
        """Where the manifest files are written."""
        if self.output_dir is not None:
            return self.output_dir
        if self.manifest_repo is not None:
            return self.manifest_repo
        return Path.cwd()

    @classmethod
    def from_dict(cls, data: dict, base_dir: "str | Path | None" = None):
        base_dir = Path(base_dir) if base_dir else Path.cwd()
        kwargs = {}
        for key, attr in _KEYS.items():
            if key in data:
                kwargs[attr] = data[key]
        for attr in _PATH_KEYS:
            if kwargs.get(attr) is not None:
                kwargs[attr] = (base_dir / Path(kwargs[attr]).expanduser()).resolve()
        author = data.get("author")
        if author:
            kwargs["author_name"] = author["name"]
            kwargs["author_email"] = author["email"]
        return cls(**kwargs)

    @classmethod
    def from_yaml(cls, text: str, base_dir: "str | Path | None" = None):
        # Values come from the schema, so branch: 2024 stays the string "2024".
        try:
            data = strictyaml.load(text, CONFIG_SCHEMA).data
        except Exception as e:
            raise ValueError("Could not validate configuration") from e
        return cls.from_dict(data, base_dir)

    @classmethod
    def from_file(cls, fp: "str | Path"):
        fp = Path(fp)
        with open(fp, "r", encoding="utf-8") as doc:
            text = doc.read()
        return cls.from_yaml(text, fp.resolve().parent)

    @classmethod
    def from_location_file(cls, fp: "str | Path" = LOCATION_FILENAME):
        fp = Path(fp)
        with open(fp, "r", encoding="utf-8") as doc:
            location = doc.read().strip()
        if not location:
            raise ValueError(f"{fp} does not contain a path")
        return cls.from_dict({"fontsRepo": location}, fp.resolve().parent)

    def replace(self, **overrides):
        """Copy with every override that is not None applied."""
        values = {f.name: getattr(self, f.name) for f in fields(self)}
        for attr, value in overrides.items():
            if value is None:
                continue
            if attr in _PATH_KEYS:
                value = Path(value).expanduser().resolve()
            values[attr] = value
        return ManifestConfig(**values)


def load_config(
    config_fp: "str | Path | None" = None, fonts_repo: "str | Path | None" = None
) -> ManifestConfig:
    """Config from config_fp, fonts_repo or local-repo-location.txt."""
    if config_fp is not None:
        log.debug("Reading configuration from %s", config_fp)
        return ManifestConfig.from_file(config_fp)
    if fonts_repo is not None:
        return ManifestConfig.from_dict({"fontsRepo": str(fonts_repo)})
    if Path(LOCATION_FILENAME).is_file():
        log.debug("Reading fonts repo location from %s", LOCATION_FILENAME)
        return ManifestConfig.from_location_file(LOCATION_FILENAME)
    raise ValueError(
        f"No configuration given. Pass --config, --fonts-repo or create {LOCATION_FILENAME}"
    )


def config_from_args(args, **overrides) -> ManifestConfig:
    config = load_config(args.config, args.fonts_repo)
    return config.replace(
        fonts_repo=args.fonts_repo,
        output_dir=args.output_dir,
        licenses=args.licenses,
        validate_fonts=args.validate_fonts,
        **overrides,
    )
