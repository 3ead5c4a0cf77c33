"""Config settings – EnvSettingsLoader, DotenvSettingsLoader."""
from __future__ import annotations

import abc
import dataclasses
import os
from typing import Any, Callable, Mapping, TypeVar

from dotenv import dotenv_values

from recordkit.config.settings.base import Settings
from recordkit.config.validation import (
    ConfigError,
    InvalidSettingValueError,
    MissingRequiredSettingError,
)

T = TypeVar("T", bound=Settings)

_TRUE = frozenset({"1", "true", "yes", "on"})
_FALSE = frozenset({"0", "false", "no", "off", ""})


class SettingsLoader(abc.ABC):
    """Port: load settings from an external source."""

    @abc.abstractmethod
    def load(self, settings_class: type[T]) -> T: ...


def _parse_bool(value: str) -> bool:
    lowered = value.strip().lower()
    if lowered in _TRUE:
        return True
    if lowered in _FALSE:
        return False
    raise ValueError("expected one of 1/0, true/false, yes/no, on/off")


def _parse_list(value: str) -> list[str]:
    return [v.strip() for v in value.split(",") if v.strip()]


def _parser_for(type_hint: Any) -> Callable[[str], Any] | None:
    # field types arrive as strings under postponed annotations
    name = type_hint if isinstance(type_hint, str) else getattr(type_hint, "__name__", "")
    if getattr(type_hint, "__origin__", None) is list or name.startswith("list"):
        return _parse_list
    return {"bool": _parse_bool, "int": int, "float": float}.get(name)


class EnvSettingsLoader(SettingsLoader):
    """Load settings from ``<PREFIX>_<FIELD>`` variables.

    Reads *environ* when given, :data:`os.environ` otherwise.  Values for
    ``bool``, ``int``, ``float`` and ``list[str]`` fields are parsed; anything
    unparseable raises :class:`InvalidSettingValueError` naming the variable.
    """

    def __init__(self, environ: Mapping[str, str] | None = None) -> None:
        self._environ = environ

    def load(self, settings_class: type[T]) -> T:
        environ = os.environ if self._environ is None else self._environ
        kwargs: dict[str, Any] = {}

        for field in dataclasses.fields(settings_class):  # type: ignore[arg-type]
            env_key = settings_class.env_key(field.name)
            raw = environ.get(env_key)

            if raw is None:
                if (
                    field.default is dataclasses.MISSING
                    and field.default_factory is dataclasses.MISSING  # type: ignore[misc]
                ):
                    raise MissingRequiredSettingError(env_key)
                continue

            kwargs[field.name] = self._parse(env_key, raw, field.type)

        try:
            return settings_class(**kwargs)
        except ConfigError:
            raise
        except Exception as exc:
            raise ConfigError(f"Failed to load settings: {exc}") from exc

    @staticmethod
    def _parse(env_key: str, raw: str, type_hint: Any) -> Any:
        parser = _parser_for(type_hint)
        if parser is None:
            return raw
        try:
            return parser(raw)
        except ValueError as exc:
            raise InvalidSettingValueError(env_key, raw, str(exc)) from exc


class DotenvSettingsLoader(SettingsLoader):
    """Load settings from a ``.env`` file layered under the process environment.

    Process variables win unless *override* is set.  :data:`os.environ` itself
    is never modified.
    """

    def __init__(self, env_file: str = ".env", override: bool = False) -> None:
        self._env_file = env_file
        self._override = override

    def load(self, settings_class: type[T]) -> T:
        from_file = {k: v for k, v in dotenv_values(self._env_file).items() if v is not None}
        if self._override:
            environ = {**os.environ, **from_file}
        else:
            environ = {**from_file, **os.environ}
        return EnvSettingsLoader(environ).load(settings_class)


__all__ = ["DotenvSettingsLoader", "EnvSettingsLoader", "SettingsLoader"]
