"""Domain value objects.

Value objects are immutable types that represent domain concepts with
self-validation. They have no identity, only value.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Final


class Unset(Enum):
    """Marks a patch field the caller did not send, as opposed to an explicit None."""

    TOKEN = "UNSET"

    def __bool__(self) -> bool:
        return False


UNSET: Final = Unset.TOKEN


@dataclass(frozen=True)
class FieldChange:
    """One field changed by a patch: name plus raw old and new values.

    The audit logger turns each FieldChange into one log entry.
    """

    field_name: str
    old_value: Any
    new_value: Any

    def __post_init__(self) -> None:
        if not self.field_name:
            raise ValueError("FieldChange requires a field name")
        if self.old_value == self.new_value:
            raise ValueError(
                f"FieldChange for '{self.field_name}' must change the value"
            )


def normalize_tags(tags: set[str] | frozenset[str] | list[str] | None) -> set[str]:
    """Strip whitespace and drop empty tags. None becomes an empty set."""
    if not tags:
        return set()
    return {t.strip() for t in tags if t and t.strip()}
