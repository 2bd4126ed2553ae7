import gzip
import subprocess
import pytest
from pathlib import Path

import pygit2

from fontmanifest import properties
from fontmanifest.config import ManifestConfig
from fontmanifest.git import get_signature, git_commit_files, open_repository
from fontmanifest.sync import commit_message, run
from fontmanifest.manifest import ManifestDiff
from conftest import ABEL_METADATA, ROBOTO_METADATA, make_family


SIGNATURE = pygit2.Signature("Font Manifest Test", "test@example.com")


def commit_all(repo, message):
    index = repo.index
    index.add_all()
    index.write()
    tree = index.write_tree()
    parents = [] if repo.head_is_unborn else [repo.head.target]
    return repo.create_commit("HEAD", SIGNATURE, SIGNATURE, message, tree, parents)


@pytest.fixture
def upstream_fonts(tmp_path):
    path = tmp_path / "upstream"
    repo = pygit2.init_repository(str(path), initial_head="main")
    make_family(path, "ofl", "abel", {"Abel-Regular.ttf": b"abel"}, ABEL_METADATA)
    commit_all(repo, "Add Abel")
    return repo


@pytest.fixture
def fonts_clone(tmp_path, upstream_fonts):
    path = tmp_path / "fonts"
    pygit2.clone_repository(upstream_fonts.workdir, str(path))
    return path


@pytest.fixture
def manifest_remote(tmp_path):
    return pygit2.init_repository(
        str(tmp_path / "manifest.git"), bare=True, initial_head="main"
    )


@pytest.fixture
def manifest_repo(tmp_path, manifest_remote):
    path = tmp_path / "manifest"
    repo = pygit2.init_repository(str(path), initial_head="main")
    repo.remotes.create("origin", manifest_remote.path)
    return path


def make_config(fonts_repo, manifest_repo=None, **kwargs):
    return ManifestConfig(
        fonts_repo=Path(fonts_repo),
        manifest_repo=Path(manifest_repo) if manifest_repo else None,
        author_name="Font Manifest Test",
        author_email="test@example.com",
        **kwargs,
    )


def remote_manifest(remote):
    commit = remote.references["refs/heads/main"].peel(pygit2.Commit)
    text = commit.tree["metadata.properties"].data.decode("ascii")
    compressed = gzip.decompress(commit.tree["metadata.properties.gz"].data)
    assert compressed.decode("ascii") == text
    return commit, properties.loads(text)


def test_sync_pulls_commits_and_pushes(
    tmp_path, upstream_fonts, fonts_clone, manifest_repo, manifest_remote
):
    config = make_config(fonts_clone, manifest_repo)
    result = run(config)
    assert result.pushed
    assert result.diff.added == ["ofl/abel"]
    commit, manifest = remote_manifest(manifest_remote)
    assert commit.id == result.commit
    assert manifest["ofl/abel.name"] == "Abel"
    assert "Added (1):\n  ofl/abel" in commit.message

    # A new family lands upstream, the next run pulls it in.
    upstream_path = Path(upstream_fonts.workdir)
    make_family(
        upstream_path,
        "apache",
        "roboto",
        {"Roboto[wdth,wght].ttf": b"roboto"},
        ROBOTO_METADATA,
    )
    commit_all(upstream_fonts, "Add Roboto")

    result = run(config)
    assert (fonts_clone / "apache" / "roboto").is_dir()
    assert result.diff == ManifestDiff(added=["apache/roboto"])
    commit, manifest = remote_manifest(manifest_remote)
    assert commit.id == result.commit
    assert manifest["apache/roboto.axes"] == "wdth:75:100,wght:100:900"
    assert len(commit.parents) == 1


def test_unchanged_manifest_is_not_committed_but_pushed(
    fonts_clone, manifest_repo, manifest_remote
):
    config = make_config(fonts_clone, manifest_repo)
    first = run(config)
    second = run(config)
    assert first.commit is not None
    assert second.commit is None
    assert second.pushed
    assert not second.diff
    commit, _ = remote_manifest(manifest_remote)
    assert commit.id == first.commit


def test_failed_push_is_retried_on_next_run(
    tmp_path, fonts_clone, manifest_repo, manifest_remote
):
    repo = open_repository(manifest_repo)
    repo.remotes.set_url("origin", str(tmp_path / "missing.git"))
    config = make_config(fonts_clone, manifest_repo)
    with pytest.raises(subprocess.CalledProcessError):
        run(config)
    local_head = repo.head.target
    assert "refs/heads/main" not in manifest_remote.references

    # The manifest is unchanged, so nothing new is committed, yet the
    # earlier commit still reaches the remote.
    repo.remotes.set_url("origin", manifest_remote.path)
    result = run(config)
    assert result.commit is None
    assert result.pushed
    commit, manifest = remote_manifest(manifest_remote)
    assert commit.id == local_head
    assert manifest["ofl/abel.name"] == "Abel"


def test_no_push_commits_locally(fonts_clone, manifest_repo, manifest_remote):
    config = make_config(fonts_clone, manifest_repo, push=False)
    result = run(config)
    assert result.commit is not None
    assert not result.pushed
    assert "refs/heads/main" not in manifest_remote.references
    repo = open_repository(manifest_repo)
    assert repo.head.target == result.commit


def test_failed_pull_builds_from_local_checkout(fonts_repo, tmp_path, caplog):
    config = make_config(fonts_repo, output_dir=tmp_path / "out")
    result = run(config)
    assert "Could not pull" in caplog.text
    assert result.commit is None
    assert (tmp_path / "out" / "metadata.properties").is_file()
    assert (tmp_path / "out" / "metadata.properties.gz").is_file()
    assert [e.key for e in result.entries] == [
        "apache/roboto",
        "ofl/abel",
        "ofl/nometa",
        "ufl/ubuntu",
    ]


def test_output_dir_outside_manifest_repo_is_rejected(fonts_clone, manifest_repo, tmp_path):
    config = make_config(fonts_clone, manifest_repo, output_dir=tmp_path / "elsewhere")
    with pytest.raises(ValueError, match="outside the manifest repository"):
        run(config, pull=False)


def test_git_commit_files_on_unborn_head(manifest_repo):
    repo = open_repository(manifest_repo)
    fp = Path(manifest_repo) / "metadata.properties"
    fp.write_text("ofl/abel=Abel-Regular.ttf")
    commit_id = git_commit_files(repo, [fp], "First", SIGNATURE)
    commit = repo[commit_id]
    assert commit.parents == []
    assert commit.tree["metadata.properties"].data == b"ofl/abel=Abel-Regular.ttf"
    assert git_commit_files(repo, [fp], "Again", SIGNATURE) is None


def test_configured_author_wins(manifest_repo):
    repo = open_repository(manifest_repo)
    signature = get_signature(repo, "Someone", "someone@example.com")
    assert (signature.name, signature.email) == ("Someone", "someone@example.com")


def test_commit_message():
    config = make_config("fonts", commit_message="Update manifest")
    assert commit_message(config, ManifestDiff()) == "Update manifest"
    message = commit_message(config, ManifestDiff(updated=["ofl/abel"]))
    assert message == "Update manifest\n\nUpdated (1):\n  ofl/abel\n"
