"""
Configuration management for the crossquote library.

Settings are read from environment variables prefixed with ``CROSSQUOTE_``
(and an optional ``.env`` file), e.g.::

    export CROSSQUOTE_COVERAGE_THRESHOLD=0.75
    export CROSSQUOTE_SECTIONS_DIR=public/sections

The matching thresholds are uncalibrated defaults carried over from the
maintenance scripts this library replaces.
"""

from pathlib import Path
from typing import Any, Optional

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from crossquote.exceptions import ConfigurationError


class CrossquoteSettings(BaseSettings):
    """
    Tunable parameters for normalization, alignment and verification.

    Attributes:
        source_language: Language code excerpts are quoted in
        default_collection: Collection assumed when a reference carries no prefix
        min_sentence_length: Sentences shorter than this are dropped by the segmenter
        min_result_length: An alignment must be longer than this to be accepted
        start_match_chars: Prefix length used to locate the excerpt's first sentence
        prefix_match_chars: Leading characters that must match exactly as a fallback test
        continuity_ratio: Share of excerpt sentences that must verify in sequence
        offset_probe_chars: Excerpt prefix length searched for by the offset strategy
        boundary_window_chars: Window in which the offset strategy snaps to a boundary
        signature_size: Maximum number of tokens in a lexical signature
        signature_token_min_chars: Minimum token length kept in a signature
        coverage_threshold: Coverage at or above which a quote counts as present
        evidence_snippet_chars: Length of evidence snippets in validation results
        sections_dir: Root of a JSON section corpus (``<lang>/<sequence>.json``)
        log_level: Logging level used by the scripts
    """

    model_config = SettingsConfigDict(
        env_prefix="CROSSQUOTE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    source_language: str = Field(default="en", min_length=2)
    default_collection: str = Field(default="ra", min_length=1)

    min_sentence_length: int = Field(default=10, ge=1)
    min_result_length: int = Field(default=15, ge=0)

    start_match_chars: int = Field(default=40, ge=1)
    prefix_match_chars: int = Field(default=30, ge=1)
    continuity_ratio: float = Field(default=0.8)

    offset_probe_chars: int = Field(default=50, ge=1)
    boundary_window_chars: int = Field(default=20, ge=0)

    signature_size: int = Field(default=15, ge=1)
    signature_token_min_chars: int = Field(default=5, ge=1)
    coverage_threshold: float = Field(default=0.8)
    evidence_snippet_chars: int = Field(default=160, ge=20)

    sections_dir: Optional[Path] = None
    log_level: str = "INFO"

    @field_validator("continuity_ratio", "coverage_threshold")
    @classmethod
    def _ratio_in_range(cls, value: float) -> float:
        if not 0.0 < value <= 1.0:
            raise ValueError("must be in (0, 1]")
        return value

    @field_validator("source_language", "default_collection")
    @classmethod
    def _lowercase(cls, value: str) -> str:
        return value.strip().lower()


_settings: CrossquoteSettings | None = None


def get_settings() -> CrossquoteSettings:
    """Return the process settings, loading them from the environment on first use."""
    global _settings
    if _settings is None:
        _settings = CrossquoteSettings()
    return _settings


def configure(**overrides: Any) -> CrossquoteSettings:
    """
    Replace the process settings with the current ones plus ``overrides``.

    Raises:
        ConfigurationError: If an override names an unknown setting or fails validation
    """
    global _settings
    unknown = [name for name in overrides if name not in CrossquoteSettings.model_fields]
    if unknown:
        raise ConfigurationError("Unknown setting", setting_name=unknown[0])

    base = get_settings().model_dump()
    base.update(overrides)
    try:
        _settings = CrossquoteSettings(**base)
    except ValidationError as e:
        first = e.errors()[0]
        name = str(first["loc"][0]) if first.get("loc") else None
        raise ConfigurationError(f"Invalid setting: {first['msg']}", setting_name=name) from e
    return _settings


def reset_settings() -> None:
    """Drop cached settings so the next get_settings() re-reads the environment."""
    global _settings
    _settings = None
