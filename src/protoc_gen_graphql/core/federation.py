"""
Federation classification - entities and key fields.

Two signals, in precedence order:
1. Explicit metadata: `(metadata.v1.entity)` on a message,
   `(metadata.v1.key)` on a field. A readable value always wins.
2. Name heuristic: well-known domain nouns are entities and fields named
   `*_id` / `*Id` are keys. Used only when no explicit value could be read.

Usage:
    resolution = resolve_key(field_desc)
    if resolution:              # truthy when the field is a key
        ...
    resolution.explicit         # False when the heuristic decided
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Optional

from .defs import FieldDesc, MessageDesc
from .errors import OptionDecodeError
from .options import (
    COMPUTED_FROM_OPTION,
    ENTITY_OPTION,
    EXTERNAL_OPTION,
    KEY_OPTION,
    REQUIRES_OPTION,
    OptionSet,
)
from .utils import is_key_name

logger = logging.getLogger(__name__)


# Messages treated as entities when they carry no explicit metadata
ENTITY_NAMES = frozenset({"Product", "Order", "User"})


@dataclass(frozen=True)
class Resolution:
    """
    Outcome of a classification: the value and where it came from.

    Distinguishes "explicitly not a key" (EXPLICIT_FALSE) from "no
    information, heuristic said no" (heuristic(False)).
    """
    value: bool
    explicit: bool

    EXPLICIT_TRUE = None  # type: Resolution
    EXPLICIT_FALSE = None  # type: Resolution

    @classmethod
    def heuristic(cls, value: bool) -> "Resolution":
        return cls(value=value, explicit=False)

    def __bool__(self) -> bool:
        return self.value

    def __repr__(self) -> str:
        if self.explicit:
            return f"Resolution.{'EXPLICIT_TRUE' if self.value else 'EXPLICIT_FALSE'}"
        return f"Resolution.heuristic({self.value})"


Resolution.EXPLICIT_TRUE = Resolution(value=True, explicit=True)
Resolution.EXPLICIT_FALSE = Resolution(value=False, explicit=True)


def _resolve(
    options: OptionSet,
    number: int,
    what: str,
    heuristic: Callable[[], bool],
) -> Resolution:
    """Read an explicit bool option, falling back to the heuristic."""
    try:
        explicit = options.get_bool(number)
    except OptionDecodeError as e:
        logger.warning(f"Could not read option {number} on {what}: {e}; falling back to name heuristic")
        explicit = None
    else:
        if explicit is None:
            logger.debug(f"No explicit option {number} on {what}; using name heuristic")

    if explicit is not None:
        return Resolution.EXPLICIT_TRUE if explicit else Resolution.EXPLICIT_FALSE
    return Resolution.heuristic(heuristic())


def resolve_key(field: FieldDesc) -> Resolution:
    """Decide whether a field is a federation key."""
    def by_name() -> bool:
        if is_key_name(field.name):
            logger.info(f"Found key field by name: {field.name}")
            return True
        return False

    return _resolve(field.options, KEY_OPTION, f"field '{field.name}'", by_name)


def resolve_entity(message: MessageDesc, has_key: Optional[bool] = None) -> Resolution:
    """
    Decide whether a message is a federated entity.

    Heuristically a message is an entity when its name is a well-known
    domain noun or when one of its fields resolves as a key.

    Args:
        message: Message to classify
        has_key: Precomputed result of find_key_field, if the caller has it
    """
    def by_name() -> bool:
        if message.name in ENTITY_NAMES:
            logger.info(f"Found entity by name: {message.name}")
            return True
        if has_key is not None:
            return has_key
        return find_key_field(message) is not None

    return _resolve(message.options, ENTITY_OPTION, f"message '{message.name}'", by_name)


def find_key_field(message: MessageDesc) -> Optional[FieldDesc]:
    """First field resolving as a key, or None."""
    for field in message.fields:
        if field is not None and resolve_key(field):
            return field
    return None


# =============================================================================
# Field directives
# =============================================================================


def is_external(field: FieldDesc) -> bool:
    """Field owned by another subgraph (`@external`)."""
    try:
        return bool(field.options.get_bool(EXTERNAL_OPTION))
    except OptionDecodeError as e:
        logger.warning(f"Could not read external option on field '{field.name}': {e}")
        return False


def requires_fields(field: FieldDesc) -> Optional[str]:
    """Selection set for `@requires(fields: ...)`, if any."""
    return _string_option(field, REQUIRES_OPTION, "requires")


def computed_from(field: FieldDesc) -> Optional[str]:
    """Source fields a computed field is derived from, if any."""
    return _string_option(field, COMPUTED_FROM_OPTION, "computed_from")


def _string_option(field: FieldDesc, number: int, what: str) -> Optional[str]:
    try:
        value = field.options.get_string(number)
    except OptionDecodeError as e:
        logger.warning(f"Could not read {what} option on field '{field.name}': {e}")
        return None
    return value or None
