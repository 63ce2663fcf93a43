"""Errors raised while preparing a render."""

from __future__ import annotations


class ConfigurationError(ValueError):
    """A render setting is invalid; raised once, before any pixel is evaluated."""

    def __init__(self, field: str, kind: str, detail: str | None = None) -> None:
        self.field = field
        self.kind = kind
        self.detail = detail
        message = f"{field}: {kind}"
        if detail:
            message = f"{message} ({detail})"
        super().__init__(message)
