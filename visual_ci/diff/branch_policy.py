from __future__ import annotations


def is_stable_reference_branch(diff_base: str, stable_branch: str = "origin/master") -> bool:
    """True if diff_base already points at the stable reference branch."""
    return diff_base.startswith(stable_branch)
