from __future__ import annotations

import subprocess
from pathlib import Path


class GitError(Exception):
    def __init__(self, command: list[str], returncode: int, stderr: str) -> None:
        self.command = command
        self.returncode = returncode
        self.stderr = stderr
        super().__init__(f"git command failed ({returncode}): {' '.join(command)}\n{stderr}")


def run_git(*args: str, cwd: Path) -> str:
    cmd = ["git", *args]
    result = subprocess.run(
        cmd,
        cwd=cwd,
        capture_output=True,
        text=True,
    )
    if result.returncode != 0:
        raise GitError(cmd, result.returncode, result.stderr.strip())
    return result.stdout.strip()


def current_branch(*, cwd: Path) -> str:
    """Name of the checked-out branch. Raises GitError on a detached HEAD."""
    return run_git("symbolic-ref", "--short", "HEAD", cwd=cwd)


def list_branches(*, remote: str | None = None, cwd: Path) -> list[str]:
    """Branch names in ref order, either local heads or ``remote``'s tracking refs."""
    if remote:
        prefix = f"refs/remotes/{remote}/"
        output = run_git("for-each-ref", "--format=%(refname)", prefix, cwd=cwd)
        names = [line[len(prefix):] for line in output.splitlines() if line]
        return [name for name in names if name != "HEAD"]
    output = run_git("for-each-ref", "--format=%(refname:short)", "refs/heads/", cwd=cwd)
    return output.splitlines() if output else []


def ls_tree(ref: str, *, cwd: Path) -> list[str]:
    output = run_git("ls-tree", "-r", "--name-only", ref, cwd=cwd)
    return output.splitlines() if output else []


def show_file(ref: str, path: str, *, cwd: Path) -> str:
    return run_git("show", f"{ref}:{path}", cwd=cwd)


def is_git_repo(path: Path) -> bool:
    try:
        run_git("rev-parse", "--is-inside-work-tree", cwd=path)
        return True
    except (GitError, FileNotFoundError):
        return False
