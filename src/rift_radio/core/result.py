"""Tagged result type returned by storage and catalog operations.

Every operation returns either ``Ok(value)`` or a ``CatalogError`` instance
(as a value, not raised). Callers match explicitly:

    match catalog.get(track_id):
        case Ok(value=track):
            ...
        case CatalogError() as error:
            ...
"""

from dataclasses import dataclass

from rift_radio.exceptions import CatalogError


@dataclass(frozen=True, slots=True)
class Ok[T]:
    """Successful outcome carrying a value."""

    value: T


type Result[T] = Ok[T] | CatalogError
