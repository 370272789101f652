"""Declarative field table for the Observation schema.

The table is built once, at import time, from the fields declared on
:class:`Observation`. Indoor variants are paired with their base field by the
``_indoor`` naming convention, so adding a field to the schema is all it takes
to have it resolved and exported.
"""

from dataclasses import dataclass

from .enums import FieldKind
from .observation import Observation

INDOOR_SUFFIX = "_indoor"


@dataclass(frozen=True)
class FieldSpec:
    """Shape of one observation field."""

    name: str
    kind: FieldKind
    indoor_name: str | None = None  # Name of the indoor counterpart, if declared

    @property
    def is_numeric(self) -> bool:
        return self.kind is FieldKind.NUMERIC


def _kind_of(annotation: object) -> FieldKind:
    if annotation is float:
        return FieldKind.NUMERIC
    if annotation is str:
        return FieldKind.TEXT
    raise TypeError(f"unsupported observation field type: {annotation!r}")


def build_field_table(model: type[Observation] = Observation) -> tuple[FieldSpec, ...]:
    """Derive the field table of a record model.

    Args:
        model: Pydantic model whose declared fields form the record shape.

    Returns:
        One FieldSpec per declared field, in declaration order. Indoor fields
        are listed too, with ``indoor_name`` unset.
    """
    names = list(model.model_fields)
    table: list[FieldSpec] = []
    for name in names:
        kind = _kind_of(model.model_fields[name].annotation)
        indoor_name = None
        if not name.endswith(INDOOR_SUFFIX):
            candidate = name + INDOOR_SUFFIX
            if candidate in model.model_fields:
                indoor_name = candidate
        table.append(FieldSpec(name=name, kind=kind, indoor_name=indoor_name))
    return tuple(table)


OBSERVATION_FIELDS: tuple[FieldSpec, ...] = build_field_table()

_BY_NAME: dict[str, FieldSpec] = {spec.name: spec for spec in OBSERVATION_FIELDS}


def is_indoor_field(name: str) -> bool:
    """Whether a field is the indoor variant of some base field."""
    return name.endswith(INDOOR_SUFFIX) and name[: -len(INDOOR_SUFFIX)] in _BY_NAME


def base_fields() -> list[FieldSpec]:
    """All base (non-indoor) fields, numeric and text."""
    return [spec for spec in OBSERVATION_FIELDS if not is_indoor_field(spec.name)]


def base_numeric_field_names() -> list[str]:
    """Names of the fields exported as gauges, in declaration order."""
    return [spec.name for spec in base_fields() if spec.is_numeric]


def field_spec(name: str) -> FieldSpec | None:
    """Look up a field by name."""
    return _BY_NAME.get(name)
