"""Content derived version tags for font families.

A family's tag only depends on the names, sizes and bytes of its font
files, so it stays stable across checkouts and only moves when a font
is added, removed, renamed or changed."""
from __future__ import annotations
import hashlib
import logging
from pathlib import Path
from typing import Iterable

from fontmanifest.constants import HASH_CHUNK_SIZE, VERSION_TAG_LENGTH


log = logging.getLogger("fontmanifest.versiontag")


def hash_files(directory: "str | Path", filenames: Iterable[str]):
    directory = Path(directory)
    filenames = sorted(filenames)
    if not filenames:
        raise ValueError(f"No files to hash in {directory}")
    digest = hashlib.sha256()
    for filename in filenames:
        fp = directory / filename
        digest.update(filename.encode("utf-8"))
        digest.update(b"\0")
        digest.update(str(fp.stat().st_size).encode("ascii"))
        digest.update(b"\0")
        with open(fp, "rb") as f:
            for chunk in iter(lambda: f.read(HASH_CHUNK_SIZE), b""):
                digest.update(chunk)
    return digest


def version_tag(
    directory: "str | Path",
    filenames: Iterable[str],
    length: int = VERSION_TAG_LENGTH,
) -> str:
    tag = hash_files(directory, filenames).hexdigest()[:length]
    log.debug("%s: %s", directory, tag)
    return tag


def family_version_tag(family, length: int = VERSION_TAG_LENGTH) -> str:
    """Version tag of a scanner.FamilyDir."""
    return version_tag(family.path, family.fonts, length)
