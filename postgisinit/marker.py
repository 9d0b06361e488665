"""Write or read the static PostGIS version marker baked into the image."""

from __future__ import annotations

import argparse
import re
from pathlib import Path

from .config import get_target_version, get_version_file
from .versions import effective_version

MARKER_PATTERN = re.compile(r"^PostGIS\s+(\S+)")


def write_version_marker(version: str, path: str | Path) -> Path:
    """Write ``PostGIS <version>`` to ``path`` and return the path."""
    target = Path(path)
    target.write_text(f"PostGIS {version}\n", encoding="utf-8")
    return target


def read_version_marker(path: str | Path) -> str | None:
    """Return the version recorded in the marker, or None if absent."""
    target = Path(path)
    if not target.is_file():
        return None
    match = MARKER_PATTERN.match(target.read_text(encoding="utf-8").strip())
    return match.group(1) if match else None


def main(argv: list[str] | None = None) -> int:
    """CLI entrypoint used once at image build time."""
    parser = argparse.ArgumentParser(description="Write the PostGIS version marker file.")
    parser.add_argument("--target-version", default=None, help="Defaults to $POSTGIS_VERSION")
    parser.add_argument("--path", default=None, help="Defaults to $POSTGIS_VERSION_FILE")
    args = parser.parse_args(argv)

    version = effective_version(args.target_version or get_target_version())
    if version is None:
        parser.error("a version is required (--target-version or $POSTGIS_VERSION)")
    path = write_version_marker(version, args.path or get_version_file())
    print(f"Wrote {path}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
