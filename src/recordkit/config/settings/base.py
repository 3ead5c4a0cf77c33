"""Config settings – Settings base class."""
from __future__ import annotations

import dataclasses
from typing import ClassVar


@dataclasses.dataclass
class Settings:
    """Dataclass of environment-driven settings.

    Each field ``name`` is read from ``<_prefix>_<NAME>``; ``_validate`` runs
    after construction for checks that span several fields.
    """

    _prefix: ClassVar[str] = ""

    def __post_init__(self) -> None:
        self._validate()

    @classmethod
    def env_key(cls, name: str) -> str:
        """Environment variable that feeds field *name*."""
        return f"{cls._prefix}_{name}".upper().lstrip("_")

    def _validate(self) -> None:
        """Override to add cross-field validation."""


__all__ = ["Settings"]
