"""Find font families in a google/fonts style checkout.

The checkout holds one directory per licence (apache, ofl, ufl) and one
directory per family below it:

    ofl/
      abeezee/
        ABeeZee-Italic.ttf
        ABeeZee-Regular.ttf
        METADATA.pb
"""
from __future__ import annotations
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Iterator, List, Optional

from fontTools.ttLib import TTCollection, TTFont, TTLibError  # type: ignore

from fontmanifest.constants import FONT_EXTENSIONS, LICENSE_DIRS, METADATA_FILENAME


log = logging.getLogger("fontmanifest.scanner")


@dataclass
class FamilyDir:
    license: str
    name: str
    path: Path
    fonts: List[str] = field(default_factory=list)

    @property
    def key(self) -> str:
        return f"{self.license}/{self.name}"

    @property
    def metadata_path(self) -> Path:
        return self.path / METADATA_FILENAME

    def font_paths(self) -> List[Path]:
        return [self.path / f for f in self.fonts]


def list_fonts(family_path: Path, extensions: Iterable[str] = FONT_EXTENSIONS):
    """Sorted names of the font files directly inside family_path."""
    extensions = tuple(extensions)
    return sorted(
        f
        for f in os.listdir(family_path)
        if f.endswith(extensions) and (family_path / f).is_file()
    )


def font_is_readable(fp: Path) -> bool:
    try:
        if fp.suffix.lower() == ".ttc":
            TTCollection(fp, lazy=True).close()
        else:
            TTFont(fp, lazy=True).close()
    except (TTLibError, OSError, AssertionError) as e:
        log.warning("Cannot read font %s: %s", fp, e)
        return False
    return True


def scan_license_dir(
    root: Path,
    license: str,
    extensions: Iterable[str] = FONT_EXTENSIONS,
    validate_fonts: bool = False,
) -> Iterator[FamilyDir]:
    for name in sorted(os.listdir(root)):
        family_path = root / name
        if not family_path.is_dir():
            continue
        fonts = list_fonts(family_path, extensions)
        if validate_fonts:
            fonts = [f for f in fonts if font_is_readable(family_path / f)]
        if not fonts:
            log.debug("Skipping %s/%s, no fonts found", license, name)
            continue
        yield FamilyDir(license, name, family_path, fonts)


def scan_fonts_repo(
    repo_path: "str | Path",
    licenses: Optional[Iterable[str]] = None,
    extensions: Iterable[str] = FONT_EXTENSIONS,
    validate_fonts: bool = False,
) -> List[FamilyDir]:
    repo_path = Path(repo_path)
    families = []
    for license in licenses or LICENSE_DIRS:
        root = repo_path / license
        if not root.is_dir():
            log.warning("License directory %s does not exist, skipping", root)
            continue
        found = list(scan_license_dir(root, license, extensions, validate_fonts))
        log.info("Found %s families in %s", len(found), license)
        families.extend(found)
    return families
