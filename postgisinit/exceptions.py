from __future__ import annotations


class PostgisInitError(Exception):
    """Base class for all postgisinit errors."""


class ProvisionError(RuntimeError, PostgisInitError):
    """Raised when the engine rejects a provisioning statement."""

    def __init__(self, message: str, database: str, version: str | None = None) -> None:
        super().__init__(message)
        self.database = database
        self.version = version


class TemplateDatabaseError(ProvisionError):
    """Raised when the template database cannot be created."""


class HealthcheckError(RuntimeError, PostgisInitError):
    """Raised when the healthcheck finds an unhealthy engine."""
