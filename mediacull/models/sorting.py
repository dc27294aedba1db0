from dataclasses import dataclass
from enum import Enum

from mediacull.errors import InvalidSortingOption


class SortKey(Enum):
    NAME = "name"
    SIZE = "size"
    TYPE = "type"


class Order(Enum):
    ASC = "asc"
    DESC = "desc"


@dataclass(frozen=True)
class SortingOption:
    key: SortKey = SortKey.NAME
    order: Order = Order.ASC
    
    @classmethod
    def from_code(cls, code: str) -> "SortingOption":
        """Parse one of the short codes shown to the operator."""
        try:
            key, order = SORTING_CODES[code]
        except KeyError:
            raise InvalidSortingOption(code) from None
        return cls(key, order)


# Type is only offered descending.
SORTING_CODES: dict[str, tuple[SortKey, Order]] = {
    "n": (SortKey.NAME, Order.ASC),
    "nd": (SortKey.NAME, Order.DESC),
    "sa": (SortKey.SIZE, Order.ASC),
    "s": (SortKey.SIZE, Order.DESC),
    "t": (SortKey.TYPE, Order.DESC),
}
