"""Indoor overlay: fold indoor sensor readings onto their base fields."""

import logging
from typing import Iterable

from .schemas import OBSERVATION_FIELDS, FieldSpec, Observation

logger = logging.getLogger(__name__)


def resolve_indoor(
    observation: Observation,
    fields: Iterable[FieldSpec] = OBSERVATION_FIELDS,
) -> Observation:
    """Return a copy of ``observation`` with indoor readings overlaid.

    Every numeric base field that declares an indoor counterpart takes the
    counterpart's value when that value is non-zero. A zero indoor value leaves
    the base field alone, so an honest 0.0 indoor reading never overrides.
    Indoor fields are kept as they are; text fields pass through.

    Args:
        observation: Decoded observation, not modified.
        fields: Field table to iterate.

    Returns:
        New Observation holding the merged values.
    """
    update: dict[str, float] = {}
    for spec in fields:
        if not spec.is_numeric or spec.indoor_name is None:
            continue
        indoor_value = getattr(observation, spec.indoor_name, 0.0)
        if indoor_value:
            update[spec.name] = indoor_value

    if update:
        logger.debug("Overlaying indoor readings: %s", ", ".join(sorted(update)))
    return observation.model_copy(update=update)
