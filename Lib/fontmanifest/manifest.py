"""Build the consolidated font manifest.

Every family found in the fonts checkout contributes a block of
properties keyed by its path:

    ofl/mavenpro=MavenPro[wght].ttf
    ofl/mavenpro.version=0f2b8c61a9e4
    ofl/mavenpro.name=Maven Pro
    ofl/mavenpro.designer=Joe Prince
    ofl/mavenpro.license=OFL
    ofl/mavenpro.category=SANS_SERIF
    ofl/mavenpro.subsets=latin,latin-ext,vietnamese
    ofl/mavenpro.axes=wght:400:900

The values above are shown unescaped, on disk properties escaping
applies (the axes colons are written as backslash-colon). The manifest
is written as plain text and as a gzip copy.
"""
from __future__ import annotations
import gzip
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Tuple

from fontmanifest import properties
from fontmanifest.constants import (
    COMPRESSED_SUFFIX,
    FIELD_AXES,
    FIELD_CATEGORY,
    FIELD_DESIGNER,
    FIELD_LICENSE,
    FIELD_NAME,
    FIELD_SUBSETS,
    FIELD_VERSION,
    MANIFEST_FIELDS,
    MANIFEST_FILENAME,
)
from fontmanifest.metadata import Axis, FamilyMetadata, read_family_metadata
from fontmanifest.scanner import FamilyDir, scan_fonts_repo
from fontmanifest.versiontag import family_version_tag


log = logging.getLogger("fontmanifest.manifest")


def format_number(value: float) -> str:
    value = float(value)
    if value.is_integer():
        return str(int(value))
    return repr(value)


def format_axes(axes: List[Axis]) -> str:
    return ",".join(
        f"{a.tag}:{format_number(a.min_value)}:{format_number(a.max_value)}"
        for a in axes
    )


@dataclass
class FamilyEntry:
    family: FamilyDir
    version: str
    metadata: Optional[FamilyMetadata] = None

    @property
    def key(self) -> str:
        return self.family.key

    def properties(self) -> List[Tuple[str, str]]:
        key = self.key
        items = [
            (key, ",".join(self.family.fonts)),
            (f"{key}.{FIELD_VERSION}", self.version),
        ]
        meta = self.metadata
        if meta is None:
            return items
        fields = [
            (FIELD_NAME, meta.name),
            (FIELD_DESIGNER, meta.designer),
            (FIELD_LICENSE, meta.license),
            (FIELD_CATEGORY, meta.category),
            (FIELD_SUBSETS, ",".join(meta.subsets)),
            (FIELD_AXES, format_axes(meta.axes)),
        ]
        items.extend((f"{key}.{name}", value) for name, value in fields if value)
        return items


def build_entry(family: FamilyDir) -> FamilyEntry:
    version = family_version_tag(family)
    metadata = read_family_metadata(family.metadata_path)
    return FamilyEntry(family, version, metadata)


def build_entries(families: List[FamilyDir]) -> List[FamilyEntry]:
    entries = []
    for family in families:
        try:
            entries.append(build_entry(family))
        except OSError as e:
            log.error("Skipping %s: %s", family.key, e)
    return entries


def build_manifest(
    fonts_repo: "str | Path",
    licenses=None,
    extensions=None,
    validate_fonts: bool = False,
) -> List[FamilyEntry]:
    kwargs = {"validate_fonts": validate_fonts}
    if extensions:
        kwargs["extensions"] = extensions
    families = scan_fonts_repo(fonts_repo, licenses, **kwargs)
    entries = build_entries(families)
    log.info("Built manifest entries for %s families", len(entries))
    return entries


def render_manifest(entries: List[FamilyEntry]) -> str:
    items = []
    for entry in entries:
        items.extend(entry.properties())
    return properties.dumps(items)


def compressed_path(fp: Path) -> Path:
    return fp.with_name(fp.name + COMPRESSED_SUFFIX)


def write_manifest(
    text: str, out_dir: "str | Path", name: str = MANIFEST_FILENAME
) -> Tuple[Path, Path]:
    out_dir = Path(out_dir)
    out_dir.mkdir(parents=True, exist_ok=True)
    manifest_fp = out_dir / name
    gz_fp = compressed_path(manifest_fp)
    data = text.encode("ascii")
    with open(manifest_fp, "wb") as doc:
        doc.write(data)
    # No name and a zero mtime in the header keep the archive reproducible.
    with open(gz_fp, "wb") as raw:
        with gzip.GzipFile(filename="", mode="wb", fileobj=raw, mtime=0) as doc:
            doc.write(data)
    log.info("Wrote %s and %s", manifest_fp, gz_fp)
    return manifest_fp, gz_fp


def read_manifest(fp: "str | Path") -> Dict[str, str]:
    fp = Path(fp)
    if not fp.is_file():
        return {}
    with open(fp, encoding="latin-1") as doc:
        return properties.loads(doc.read())


def family_key(key: str) -> str:
    for name in MANIFEST_FIELDS:
        suffix = f".{name}"
        if key.endswith(suffix):
            return key[: -len(suffix)]
    return key


def group_by_family(manifest: Dict[str, str]) -> Dict[str, Dict[str, str]]:
    families: Dict[str, Dict[str, str]] = {}
    for key, value in manifest.items():
        families.setdefault(family_key(key), {})[key] = value
    return families


@dataclass
class ManifestDiff:
    added: List[str] = field(default_factory=list)
    removed: List[str] = field(default_factory=list)
    updated: List[str] = field(default_factory=list)

    def __bool__(self):
        return bool(self.added or self.removed or self.updated)

    def summary(self) -> str:
        lines = []
        for title, families in (
            ("Added", self.added),
            ("Updated", self.updated),
            ("Removed", self.removed),
        ):
            if families:
                lines.append(f"{title} ({len(families)}):")
                lines.extend(f"  {f}" for f in families)
        return "\n".join(lines)


def diff_manifests(old: Dict[str, str], new: Dict[str, str]) -> ManifestDiff:
    old_families = group_by_family(old)
    new_families = group_by_family(new)
    return ManifestDiff(
        added=sorted(set(new_families) - set(old_families)),
        removed=sorted(set(old_families) - set(new_families)),
        updated=sorted(
            k
            for k in set(old_families) & set(new_families)
            if old_families[k] != new_families[k]
        ),
    )
