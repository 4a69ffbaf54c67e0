# Path: core/models/options.py
# Purpose: Define the validated, immutable options a scan runs with.
# Layer: core/models.
# Details: Normalizes extensions and size limits once so the walker can trust them.

from __future__ import annotations

from typing import FrozenSet, Iterable, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_FILE_TYPES: FrozenSet[str] = frozenset({".jpg", ".jpeg", ".png", ".gif", ".webp", ".bmp", ".tiff"})


def normalize_extension(value: str) -> str:
    """Return ``value`` lower-cased with exactly one leading dot."""

    ext = value.strip().lower()
    if not ext or ext == ".":
        raise ValueError("file type must not be empty")
    return ext if ext.startswith(".") else f".{ext}"


class ScanOptions(BaseModel):
    """Per-invocation scan configuration.

    ``file_types`` holds lower-cased extensions including the leading dot. An
    empty or omitted set falls back to :data:`DEFAULT_FILE_TYPES`. ``max_size``
    is an inclusive byte limit; ``None`` means unbounded.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    recursive: bool = True
    file_types: FrozenSet[str] = Field(default=DEFAULT_FILE_TYPES, alias="fileTypes")
    max_size: Optional[int] = Field(default=None, ge=0, alias="maxSize")

    @field_validator("file_types", mode="before")
    @classmethod
    def _normalize_file_types(cls, value: Optional[Iterable[str]]) -> FrozenSet[str]:
        if value is None:
            return DEFAULT_FILE_TYPES
        if isinstance(value, str):
            value = [value]
        normalized = frozenset(normalize_extension(item) for item in value)
        return normalized or DEFAULT_FILE_TYPES

    def accepts_name(self, name: str) -> bool:
        """Return True when the file name's extension is in ``file_types``."""

        dot = name.rfind(".")
        # Dotfiles such as ".png" have no extension.
        if dot <= 0:
            return False
        return name[dot:].lower() in self.file_types

    def accepts_size(self, size: int) -> bool:
        """Return True when ``size`` satisfies the inclusive ``max_size`` bound."""

        return self.max_size is None or size <= self.max_size

    def merged(self, overrides: Optional[dict]) -> "ScanOptions":
        """Return a new ScanOptions with the given raw overrides applied on top of this one."""

        if not overrides:
            return self
        base = self.model_dump()
        base.update(self.model_validate(overrides).model_dump(exclude_unset=True))
        return self.model_validate(base)


__all__ = ["DEFAULT_FILE_TYPES", "ScanOptions", "normalize_extension"]
