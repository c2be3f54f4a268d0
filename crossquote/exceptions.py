"""
Custom exceptions for the crossquote library.

All exceptions inherit from CrossquoteError for easy catching of library-specific errors.

Data-quality findings (a quote that cannot be found, a mislabeled reference, a
missing translation) are never raised; they are returned as result values.
Only broken collaborator contracts and invalid configuration raise.
"""

from typing import Any


class CrossquoteError(Exception):
    """Base exception for all crossquote errors."""

    def __init__(self, message: str, context: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.context = context or {}

    def __str__(self) -> str:
        if self.context:
            ctx_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            return f"{self.message} ({ctx_str})"
        return self.message


class StoreError(CrossquoteError):
    """Raised when the document store is unreachable or holds corrupt data."""

    def __init__(
        self,
        message: str,
        path: str | None = None,
        language: str | None = None,
        context: dict[str, Any] | None = None,
    ) -> None:
        ctx = context or {}
        if path:
            ctx["path"] = path
        if language:
            ctx["language"] = language
        super().__init__(message, ctx)
        self.path = path
        self.language = language


class ConfigurationError(CrossquoteError):
    """Raised when configuration is invalid."""

    def __init__(
        self,
        message: str,
        setting_name: str | None = None,
        context: dict[str, Any] | None = None,
    ) -> None:
        ctx = context or {}
        if setting_name:
            ctx["setting"] = setting_name
        super().__init__(message, ctx)
        self.setting_name = setting_name


class UnsupportedLanguageError(ConfigurationError):
    """Raised when no language profile is registered for a language code."""

    def __init__(self, language: str, available: list[str] | None = None) -> None:
        message = f"No language profile registered for '{language}'"
        ctx: dict[str, Any] = {}
        if available:
            ctx["available"] = ",".join(available)
        super().__init__(message, context=ctx)
        self.language = language


class ClaimDataError(CrossquoteError):
    """Raised when a claims file cannot be read or has an unexpected shape."""

    def __init__(self, message: str = "Failed to load excerpt claims.", path: str | None = None) -> None:
        super().__init__(message, {"path": path} if path else None)
        self.path = path
