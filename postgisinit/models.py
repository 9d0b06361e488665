from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class ExtensionStatus:
    database: str
    extension: str = "postgis"
    installed_version: Optional[str] = None
    default_version: Optional[str] = None

    @property
    def installed(self) -> bool:
        """Return True when the extension exists in the database."""
        return self.installed_version is not None

    def is_current(self, version: Optional[str] = None) -> bool:
        """Return True when the installed version matches the target.

        Args:
            version: Target version; the engine default when omitted.

        Returns:
            True if the extension is installed at the target version.
        """
        target = version or self.default_version
        return self.installed and self.installed_version == target

    def __str__(self) -> str:
        """Return a one-line status summary.

        Returns:
            Formatted status string.
        """

        def fmt(v):
            return v if v is not None else "--"

        return (
            f"{self.database}: {self.extension} "
            f"installed={fmt(self.installed_version)} "
            f"default={fmt(self.default_version)}"
        )
