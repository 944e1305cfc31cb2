"""Input parsing and caller checks shared by the rental services."""

from typing import TypeVar

from rentals.domain import Caller
from rentals.domain.errors import InvalidIdError, NotPermittedError

IdT = TypeVar("IdT")


def parse_id(id_type: type[IdT], value: object, kind: str) -> IdT:
    """Parse a raw identifier, mapping malformed values to InvalidIdError."""
    if isinstance(value, id_type):
        return value
    try:
        return id_type.from_string(str(value))
    except ValueError as exc:
        raise InvalidIdError(kind) from exc


def require_mpp(actor: Caller) -> None:
    if not actor.is_mpp:
        raise NotPermittedError("Only MPP administrators can manage facility applications")
