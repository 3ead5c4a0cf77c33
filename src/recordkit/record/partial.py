"""Partial attribute bags – validated, deep-copied field selection.

Every value that crosses into a record (construction from a partial, the
post-save overlay) passes through here, so a record never shares mutable
substructure with the mapping it was built from.
"""
from __future__ import annotations

import copy
import dataclasses
from collections.abc import Mapping
from typing import Any

from recordkit.kernel.errors import ValidationError


def record_fields(record_type: type) -> dict[str, dataclasses.Field[Any]]:
    """Return the init fields of *record_type* keyed by name (the allow-list)."""
    return {f.name: f for f in dataclasses.fields(record_type) if f.init}


def _has_default(f: dataclasses.Field[Any]) -> bool:
    return (
        f.default is not dataclasses.MISSING
        or f.default_factory is not dataclasses.MISSING  # type: ignore[misc]
    )


def _keeps_default_over_none(f: dataclasses.Field[Any]) -> bool:
    if f.default_factory is not dataclasses.MISSING:  # type: ignore[misc]
        return True
    return f.default is not dataclasses.MISSING and f.default is not None


def _select(
    fields: dict[str, dataclasses.Field[Any]],
    data: Mapping[str, Any],
) -> dict[str, Any]:
    # None stands for "absent" unless the field itself defaults to None
    return {
        name: value
        for name, value in data.items()
        if name in fields and not (value is None and _keeps_default_over_none(fields[name]))
    }


def clone_partial(
    record_type: type,
    partial: Mapping[str, Any],
    *,
    require_all: bool = True,
) -> dict[str, Any]:
    """Validate *partial* against *record_type* and return deep-copied init kwargs.

    With ``require_all=False`` fields without a default may be omitted; key
    templates are built that way.

    Raises
    ------
    ValidationError
        When *partial* is not a mapping, names a field *record_type* does
        not declare, or (``require_all``) omits a field that has no default.
    """
    name = record_type.__name__
    if not isinstance(partial, Mapping):
        raise ValidationError(
            f"{name} expects a mapping of field values, got {type(partial).__name__}"
        )
    fields = record_fields(record_type)
    unknown = sorted(str(k) for k in partial if k not in fields)
    if unknown:
        raise ValidationError(
            f"Unrecognized fields for {name}: {', '.join(unknown)}",
            errors=[{"field": k, "msg": "unrecognized field"} for k in unknown],
        )

    values = _select(fields, copy.deepcopy(dict(partial)))

    missing = [n for n, f in fields.items() if n not in values and not _has_default(f)]
    if missing and require_all:
        raise ValidationError(
            f"Missing required fields for {name}: {', '.join(missing)}",
            errors=[{"field": k, "msg": "field required"} for k in missing],
        )
    return values


def overlay_values(record_type: type, data: Mapping[str, Any]) -> dict[str, Any]:
    """Deep-copy the recognised fields of *data*; unknown attributes are dropped.

    Used for items coming back from a store, which may carry attributes the
    record type does not declare (``_id``, attributes written by other
    services, ...).
    """
    return _select(record_fields(record_type), copy.deepcopy(dict(data)))


def unknown_attributes(record_type: type, data: Mapping[str, Any]) -> list[str]:
    fields = record_fields(record_type)
    return sorted(str(k) for k in data if k not in fields)


__all__ = ["clone_partial", "overlay_values", "record_fields", "unknown_attributes"]
