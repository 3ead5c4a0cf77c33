"""Config settings – SettingsFactory."""
from __future__ import annotations

import dataclasses
from typing import Any, Sequence, TypeVar

from recordkit.config.settings.base import Settings
from recordkit.config.settings.loaders import SettingsLoader
from recordkit.config.validation import ConfigError, MissingRequiredSettingError

T = TypeVar("T", bound=Settings)


class SettingsFactory:
    """Merge outputs from multiple loaders, apply overrides, and construct
    a settings dataclass in one step.

    Loaders are applied in order; later loaders override earlier ones for
    overlapping fields.  *overrides* (if provided) take the highest priority.
    A loader that raises :class:`ConfigError` is skipped so the remaining
    loaders may still contribute values.
    """

    @staticmethod
    def create(
        settings_cls: type[T],
        loaders: Sequence[SettingsLoader] | None = None,
        overrides: dict[str, Any] | None = None,
    ) -> T:
        """
        Raises
        ------
        MissingRequiredSettingError
            When a required field (no default) is absent after all sources
            have been merged.
        ConfigError
            On any other construction failure.
        """
        merged: dict[str, Any] = {}

        for loader in loaders or []:
            try:
                instance = loader.load(settings_cls)
            except ConfigError:
                continue
            for field in dataclasses.fields(instance):  # type: ignore[arg-type]
                merged[field.name] = getattr(instance, field.name)

        if overrides:
            merged.update(overrides)

        for field in dataclasses.fields(settings_cls):  # type: ignore[arg-type]
            if field.name in merged:
                continue
            if (
                field.default is dataclasses.MISSING
                and field.default_factory is dataclasses.MISSING  # type: ignore[misc]
            ):
                raise MissingRequiredSettingError(field.name)

        try:
            return settings_cls(**merged)
        except ConfigError:
            raise
        except Exception as exc:
            raise ConfigError(f"Failed to construct {settings_cls.__name__}: {exc}") from exc


__all__ = ["SettingsFactory"]
