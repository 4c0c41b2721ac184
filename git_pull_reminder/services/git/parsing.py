"""Parsers for git command output."""

import re
from typing import List, Optional, Tuple

_HEAD_BRANCH_RE = re.compile(r"HEAD branch:\s*(\S+)")


def parse_ahead_behind(output: str) -> Tuple[int, int]:
    """Parse ``rev-list --left-right --count @{u}...HEAD`` output.

    The left side is the upstream, so the first number counts commits we are
    behind and the second counts commits we are ahead.

    Returns:
        (behind, ahead)

    Raises:
        ValueError: if the output is not two integers
    """
    parts = output.split()
    if len(parts) != 2:
        raise ValueError(f"unexpected rev-list output: {output!r}")
    behind, ahead = (int(p) for p in parts)
    return behind, ahead


def parse_remote_show_head(output: str) -> Optional[str]:
    """Extract the branch from the ``HEAD branch:`` line of ``git remote show``."""
    match = _HEAD_BRANCH_RE.search(output)
    if not match:
        return None
    branch = match.group(1)
    # Shown when the remote has no HEAD or it is ambiguous
    if branch.startswith("("):
        return None
    return branch


def strip_remote_prefix(ref: str, remote: str) -> Optional[str]:
    """Turn ``origin/main`` into ``main``; None when the ref is for another remote."""
    ref = ref.strip()
    prefix = f"{remote}/"
    if not ref.startswith(prefix):
        return None
    return ref[len(prefix):] or None


def pick_remote(remotes: List[str]) -> Optional[str]:
    """Prefer ``origin``, otherwise the first configured remote."""
    if not remotes:
        return None
    return "origin" if "origin" in remotes else remotes[0]


def has_changes(porcelain: str) -> bool:
    return bool(porcelain and porcelain.strip())


def clean_stderr(text: str) -> str:
    """Strip GitPython's ``stderr: '...'`` wrapper from a command error."""
    text = (text or "").strip()
    if text.startswith("stderr:"):
        text = text[len("stderr:"):].strip()
        if len(text) >= 2 and text[0] == text[-1] == "'":
            text = text[1:-1]
    return text.strip()
