# This module contains the routines driving git for the two repositories
# a manifest run touches: the fonts checkout we pull and the manifest
# repository we commit to and push.

import logging
import subprocess
import typing
from pathlib import Path

import pygit2


log = logging.getLogger("fontmanifest.git")


def open_repository(path: typing.Union[str, Path]) -> pygit2.Repository:
    return pygit2.Repository(str(path))


def git_pull(repo_path: typing.Union[str, Path], remote: str, branch: str):
    """Fast-forward the checkout at repo_path to remote/branch."""
    log.info(f"Pulling {remote}/{branch} into {repo_path}")
    # pygit2 has no pull, and its network operations are unreliable on
    # MacOS, so this goes through the git CLI.
    return subprocess.run(
        ["git", "pull", "--ff-only", remote, branch],
        cwd=str(repo_path),
        check=True,
        stdout=subprocess.PIPE,
    )


def git_push(repo: pygit2.Repository, remote: str, branch: str):
    ref_spec = f"HEAD:refs/heads/{branch}"
    log.info(f"Pushing {ref_spec} to {remote}")
    return subprocess.run(
        ["git", "push", remote, ref_spec],
        cwd=repo.workdir,
        check=True,
        stdout=subprocess.PIPE,
    )


def get_signature(
    repo: pygit2.Repository,
    name: typing.Optional[str] = None,
    email: typing.Optional[str] = None,
) -> pygit2.Signature:
    if name and email:
        return pygit2.Signature(name, email)
    # Raises when user.name/user.email are not configured.
    return repo.default_signature


def git_commit_files(
    repo: pygit2.Repository,
    paths: typing.Iterable[typing.Union[str, Path]],
    message: str,
    signature: pygit2.Signature,
) -> typing.Union[pygit2.Oid, None]:
    """Stage paths and commit them on HEAD.

    Returns the new commit id, or None when the staged tree is identical
    to HEAD's tree."""
    workdir = Path(repo.workdir).resolve()
    index = repo.index
    for path in paths:
        index.add(Path(path).resolve().relative_to(workdir).as_posix())
    index.write()
    tree_id = index.write_tree()

    if repo.head_is_unborn:
        parents = []
    else:
        head = repo.head.peel(pygit2.Commit)
        if head.tree.id == tree_id:
            log.info("Manifest unchanged, nothing to commit")
            return None
        parents = [head.id]

    commit_id = repo.create_commit(
        "HEAD", signature, signature, message, tree_id, parents
    )
    log.info(f"Committed {commit_id}")
    return commit_id
