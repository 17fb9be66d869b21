"""Git hash capture so saved sampler runs can be traced to a code version."""

import subprocess
from pathlib import Path


def _git_ok(args: list[str], cwd: Path | None) -> bool:
    """Run a git command and report whether it exited cleanly."""
    try:
        subprocess.check_output(
            ["git", *args], stderr=subprocess.DEVNULL, cwd=cwd
        )
    except subprocess.CalledProcessError:
        return False
    return True


def get_git_hash(cwd: Path | None = None) -> str:
    """Short SHA of HEAD, suffixed with ``-dirty`` for uncommitted changes.

    Args:
        cwd: Directory inside the repository (defaults to the process cwd).

    Returns:
        "a3f9c1d", "a3f9c1d-dirty", or "unknown" outside a git checkout.
    """
    try:
        sha = subprocess.check_output(
            ["git", "rev-parse", "--short", "HEAD"],
            stderr=subprocess.DEVNULL,
            cwd=cwd,
        ).decode().strip()
    except (subprocess.CalledProcessError, FileNotFoundError):
        return "unknown"

    clean = _git_ok(["diff", "--quiet"], cwd) and _git_ok(
        ["diff", "--quiet", "--cached"], cwd
    )
    return sha if clean else f"{sha}-dirty"
