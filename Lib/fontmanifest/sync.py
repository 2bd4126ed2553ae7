"""
Regenerate the font manifest and publish it.

A run pulls the fonts checkout, rebuilds the manifest from it, writes
metadata.properties and metadata.properties.gz into the manifest
repository, commits them when they changed and pushes the commit.
"""
from __future__ import annotations
import logging
import subprocess
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

import pygit2

from fontmanifest.config import ManifestConfig
from fontmanifest.git import (
    get_signature,
    git_commit_files,
    git_pull,
    git_push,
    open_repository,
)
from fontmanifest.manifest import (
    FamilyEntry,
    ManifestDiff,
    build_manifest,
    diff_manifests,
    read_manifest,
    render_manifest,
    write_manifest,
)
from fontmanifest import properties


log = logging.getLogger("fontmanifest.sync")


@dataclass
class SyncResult:
    entries: List[FamilyEntry] = field(default_factory=list)
    manifest_path: Optional[Path] = None
    compressed_path: Optional[Path] = None
    diff: ManifestDiff = field(default_factory=ManifestDiff)
    commit: Optional[pygit2.Oid] = None
    pushed: bool = False


def commit_message(config: ManifestConfig, diff: ManifestDiff) -> str:
    summary = diff.summary()
    if not summary:
        return config.commit_message
    return f"{config.commit_message}\n\n{summary}\n"


def pull_fonts_repo(config: ManifestConfig) -> bool:
    try:
        git_pull(config.fonts_repo, config.remote, config.branch)
    except (subprocess.CalledProcessError, OSError) as e:
        log.error(
            f"Could not pull {config.fonts_repo}, building from the local checkout: {e}"
        )
        return False
    return True


def generate(config: ManifestConfig) -> SyncResult:
    """Build the manifest and write it to config.out_dir."""
    entries = build_manifest(
        config.fonts_repo,
        licenses=config.licenses,
        extensions=config.extensions,
        validate_fonts=config.validate_fonts,
    )
    text = render_manifest(entries)
    previous = read_manifest(config.out_dir / config.manifest_name)
    manifest_fp, gz_fp = write_manifest(text, config.out_dir, config.manifest_name)
    diff = diff_manifests(previous, properties.loads(text))
    if diff:
        log.info(f"Manifest changes:\n{diff.summary()}")
    else:
        log.info("No family changed")
    return SyncResult(entries, manifest_fp, gz_fp, diff)


def publish(config: ManifestConfig, result: SyncResult, push: bool = True):
    repo = open_repository(config.manifest_repo)
    workdir = Path(repo.workdir).resolve()
    if workdir not in result.manifest_path.resolve().parents:
        raise ValueError(
            f"{result.manifest_path} is outside the manifest repository {workdir}"
        )
    signature = get_signature(repo, config.author_name, config.author_email)
    result.commit = git_commit_files(
        repo,
        [result.manifest_path, result.compressed_path],
        commit_message(config, result.diff),
        signature,
    )
    # Pushed even without a new commit so an earlier failed push is retried.
    if push:
        git_push(repo, config.manifest_remote, config.manifest_branch)
        result.pushed = True
    return result


def run(
    config: ManifestConfig, pull: Optional[bool] = None, push: Optional[bool] = None
) -> SyncResult:
    pull = config.pull if pull is None else pull
    push = config.push if push is None else push

    if pull:
        pull_fonts_repo(config)
    result = generate(config)
    if config.manifest_repo is None:
        log.info("No manifest repository configured, skipping commit and push")
        return result
    return publish(config, result, push=push)
