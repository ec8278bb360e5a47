import operator
import weakref
from typing import Iterator, Optional, Union

import pandas as pd

from .exceptions import ValidationError
from .schemas import DeviceType, Resistor, StockItem, Transistor

# Column order for the tabular view of an inventory. Variant fields are
# empty for items that don't carry them.
FRAME_COLUMNS = [
    "component_type",
    "stock_code",
    "stock_amount",
    "unit_price",
    "resistance",
    "capacitance",
    "device_type",
    "description",
]


class Inventory:
    """
    An ordered collection that owns its stock items.

    Items keep their insertion order until `sort_by_price` reorders them.
    An item belongs to at most one inventory at a time; copying an
    inventory deep-copies every item, so the copy never shares records
    with the original.

    Not safe for concurrent mutation: callers that share an instance
    between threads must serialize `add`, `remove` and `sort_by_price`.
    """

    def __init__(self, items: Optional[list[StockItem]] = None):
        self._items: list[StockItem] = []
        for item in items or []:
            self.add(item)

    def add(self, item: StockItem) -> None:
        """Appends an item to the end of the inventory and takes ownership of it."""
        owner = item._owner() if item._owner is not None else None
        if owner is not None:
            raise ValidationError(
                f"Stock item '{item.stock_code}' already belongs to an inventory."
            )
        item._owner = weakref.ref(self)
        self._items.append(item)

    def remove(self, item: StockItem) -> None:
        """Removes an item (by identity) and releases ownership of it."""
        for i, existing in enumerate(self._items):
            if existing is item:
                del self._items[i]
                item._owner = None
                return
        raise ValueError(f"Stock item '{item.stock_code}' is not in this inventory.")

    def get_size(self) -> int:
        return len(self._items)

    def get(self, index: int) -> StockItem:
        index = operator.index(index)
        if not 0 <= index < len(self._items):
            raise IndexError(
                f"Inventory index {index} out of range for size {len(self._items)}."
            )
        return self._items[index]

    def sort_by_price(self, ascending: bool = True) -> None:
        """Stable in-place sort by unit price; equal prices keep their relative order."""
        self._items.sort(key=operator.attrgetter("unit_price"), reverse=not ascending)

    def search(self, component_type: str) -> list[StockItem]:
        return [item for item in self._items if item.component_type == component_type]

    def get_stock_count(self, component_type: str) -> int:
        """Total units in stock for one component type."""
        return sum(item.stock_amount for item in self.search(component_type))

    # --- Queries ---

    def max_stock_item(self) -> Optional[StockItem]:
        """The item with the most units in stock; the first one wins a tie."""
        return max(self._items, key=operator.attrgetter("stock_amount"), default=None)

    def _transistors_of(self, device_type: Union[str, DeviceType]) -> list[Transistor]:
        device_type = DeviceType(device_type)
        return [
            item
            for item in self._items
            if isinstance(item, Transistor) and item.device_type == device_type
        ]

    def count_device_type(self, device_type: Union[str, DeviceType]) -> int:
        """Number of transistor records of the given device type."""
        return len(self._transistors_of(device_type))

    def count_device_stock(self, device_type: Union[str, DeviceType]) -> int:
        """Units in stock across all transistors of the given device type."""
        return sum(item.stock_amount for item in self._transistors_of(device_type))

    def total_resistance(self) -> float:
        """Sum of the resistance (ohms) of every resistor record."""
        return sum(
            (item.resistance for item in self._items if isinstance(item, Resistor)), 0.0
        )

    def count_above_price(self, threshold: int) -> int:
        """Number of items whose unit price is strictly greater than `threshold` pence."""
        return sum(1 for item in self._items if item.unit_price > threshold)

    # --- Views ---

    def to_dataframe(self) -> pd.DataFrame:
        records = [item.model_dump(mode="json") for item in self._items]
        return pd.DataFrame(records, columns=FRAME_COLUMNS)

    def render(self) -> str:
        blocks = [f"Inventory Size: {self.get_size()}\n"]
        blocks.extend(item.render() for item in self._items)
        return "\n".join(blocks)

    # --- Copying ---

    def copy(self) -> "Inventory":
        """Returns a new inventory owning deep copies of every item."""
        clone = Inventory()
        for item in self._items:
            clone.add(item.model_copy(deep=True))
        return clone

    def __copy__(self) -> "Inventory":
        return self.copy()

    def __deepcopy__(self, memo: dict) -> "Inventory":
        clone = self.copy()
        memo[id(self)] = clone
        return clone

    # --- Sequence protocol ---

    def __len__(self) -> int:
        return len(self._items)

    def __getitem__(self, index: int) -> StockItem:
        return self.get(index)

    def __iter__(self) -> Iterator[StockItem]:
        return iter(list(self._items))

    def __str__(self) -> str:
        return self.render()

    def __repr__(self) -> str:
        return f"Inventory(size={self.get_size()})"
