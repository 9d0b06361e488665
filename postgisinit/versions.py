from __future__ import annotations


def strip_build_metadata(raw: str) -> str:
    """Return the version core, dropping anything from the first ``+`` on.

    Args:
        raw: Version string as packaged, e.g. ``"3.5.3+dfsg-1"``.

    Returns:
        The version without build metadata, e.g. ``"3.5.3"``.
    """
    return raw.split("+", 1)[0]


def effective_version(raw: str | None) -> str | None:
    """Strip build metadata, treating blank input as no version."""
    if raw is None or not raw.strip():
        return None
    return strip_build_metadata(raw)
