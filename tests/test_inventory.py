import copy

import pytest

from stock_program.exceptions import ValidationError
from stock_program.inventory import FRAME_COLUMNS, Inventory
from stock_program.schemas import (
    Capacitor,
    DeviceType,
    Diode,
    IntegratedCircuit,
    Resistor,
    Transistor,
)


def make_items():
    return [
        Resistor(stock_code="R1", stock_amount=5, unit_price=4, resistance="5M1"),
        Capacitor(stock_code="C1", stock_amount=50, unit_price=12, capacitance="2400"),
        Transistor(stock_code="T1", stock_amount=20, unit_price=15, device_type="NPN"),
        Diode(stock_code="D1", stock_amount=50, unit_price=2),
        Transistor(stock_code="T2", stock_amount=7, unit_price=9, device_type="NPN"),
        Resistor(stock_code="R2", stock_amount=100, unit_price=1, resistance="4R7"),
        Transistor(stock_code="T3", stock_amount=30, unit_price=11, device_type="PNP"),
        IntegratedCircuit(stock_code="IC1", stock_amount=2, unit_price=95, description="555 timer"),
    ]


@pytest.fixture
def inventory():
    return Inventory(make_items())


def codes(inventory):
    return [item.stock_code for item in inventory]


def test_add_appends_in_order():
    inventory = Inventory()
    assert inventory.get_size() == 0

    for item in make_items():
        inventory.add(item)

    assert inventory.get_size() == 8
    assert len(inventory) == 8
    assert codes(inventory) == ["R1", "C1", "T1", "D1", "T2", "R2", "T3", "IC1"]


def test_indexed_access(inventory):
    assert inventory[0].stock_code == "R1"
    assert inventory.get(7).stock_code == "IC1"


@pytest.mark.parametrize("index", [-1, 8, 100])
def test_indexed_access_out_of_range(inventory, index):
    with pytest.raises(IndexError):
        inventory[index]


def test_indexed_access_on_empty_inventory():
    with pytest.raises(IndexError):
        Inventory().get(0)


def test_sort_by_price_ascending_and_descending(inventory):
    inventory.sort_by_price(ascending=True)
    prices = [item.unit_price for item in inventory]
    assert prices == sorted(prices)

    inventory.sort_by_price(ascending=False)
    prices = [item.unit_price for item in inventory]
    assert prices == sorted(prices, reverse=True)


def test_sort_reverses_order_for_distinct_prices(inventory):
    inventory.sort_by_price(True)
    ascending = codes(inventory)
    inventory.sort_by_price(False)
    assert codes(inventory) == list(reversed(ascending))


def make_diodes():
    return [
        Diode(stock_code="A", stock_amount=1, unit_price=5),
        Diode(stock_code="B", stock_amount=1, unit_price=3),
        Diode(stock_code="C", stock_amount=1, unit_price=5),
        Diode(stock_code="D", stock_amount=1, unit_price=1),
    ]


def test_sort_is_stable_for_equal_prices():
    inventory = Inventory(make_diodes())
    inventory.sort_by_price(ascending=True)
    assert codes(inventory) == ["D", "B", "A", "C"]

    descending = Inventory(make_diodes())
    descending.sort_by_price(ascending=False)
    assert codes(descending) == ["A", "C", "B", "D"]


@pytest.mark.parametrize(
    "component_type",
    ["Resistor", "Capacitor", "Diode", "Transistor", "Integrated Circuit", "Widget", "resistor"],
)
def test_search_matches_manual_filter(inventory, component_type):
    expected = [item for item in inventory if item.component_type == component_type]
    found = inventory.search(component_type)
    assert [id(item) for item in found] == [id(item) for item in expected]


def test_search_keeps_relative_order(inventory):
    assert [item.stock_code for item in inventory.search("Transistor")] == ["T1", "T2", "T3"]
    assert inventory.search("Widget") == []


def test_item_cannot_belong_to_two_inventories():
    item = Diode(stock_code="D1", stock_amount=1, unit_price=1)
    first = Inventory()
    first.add(item)

    with pytest.raises(ValidationError):
        first.add(item)
    with pytest.raises(ValidationError):
        Inventory().add(item)
    assert first.get_size() == 1


def test_remove_releases_ownership():
    item = Diode(stock_code="D1", stock_amount=1, unit_price=1)
    first = Inventory([item])
    first.remove(item)
    assert first.get_size() == 0

    second = Inventory()
    second.add(item)
    assert second[0] is item


def test_remove_missing_item(inventory):
    with pytest.raises(ValueError):
        inventory.remove(Diode(stock_code="D9", stock_amount=1, unit_price=1))


def test_get_stock_count(inventory):
    assert inventory.get_stock_count("Transistor") == 57
    assert inventory.get_stock_count("Resistor") == 105
    assert inventory.get_stock_count("Widget") == 0


def test_max_stock_item(inventory):
    assert inventory.max_stock_item().stock_code == "R2"


def test_max_stock_item_first_wins_a_tie():
    inventory = Inventory(
        [
            Diode(stock_code="A", stock_amount=9, unit_price=1),
            Diode(stock_code="B", stock_amount=9, unit_price=1),
        ]
    )
    assert inventory.max_stock_item().stock_code == "A"
    assert Inventory().max_stock_item() is None


def test_device_type_queries(inventory):
    assert inventory.count_device_type(DeviceType.NPN) == 2
    assert inventory.count_device_type("PNP") == 1
    assert inventory.count_device_type("FET") == 0
    assert inventory.count_device_stock("NPN") == 27


def test_total_resistance(inventory):
    assert inventory.total_resistance() == pytest.approx(5_100_004.7)
    assert Inventory().total_resistance() == 0.0


def test_count_above_price_is_strict(inventory):
    assert inventory.count_above_price(11) == 3
    assert inventory.count_above_price(0) == 8
    assert inventory.count_above_price(95) == 0


def test_copy_is_deep(inventory):
    clone = inventory.copy()
    assert codes(clone) == codes(inventory)
    assert all(a is not b for a, b in zip(clone, inventory))

    clone[0].set_unit_price(999)
    clone.sort_by_price(ascending=False)
    assert inventory[0].unit_price == 4
    assert codes(inventory)[0] == "R1"


def test_copy_module_uses_deep_copy(inventory):
    for clone in (copy.copy(inventory), copy.deepcopy(inventory)):
        assert isinstance(clone, Inventory)
        assert clone.get_size() == inventory.get_size()
        assert clone[0] is not inventory[0]
        # Clones are owned by the copy, not the original.
        with pytest.raises(ValidationError):
            Inventory().add(clone[0])


def test_to_dataframe(inventory):
    df = inventory.to_dataframe()
    assert list(df.columns) == FRAME_COLUMNS
    assert len(df) == 8
    assert df.loc[2, "device_type"] == "NPN"
    assert df.loc[0, "resistance"] == 5_100_000.0
    assert df["stock_code"].tolist() == codes(inventory)


def test_render(inventory):
    text = inventory.render()
    assert text.startswith("Inventory Size: 8\n")
    assert "Total Resistance: 5100000.00ohms" in text
    assert "Description: 555 timer" in text


@pytest.mark.parametrize(
    "duplicate",
    [copy.copy, copy.deepcopy, lambda item: item.model_copy(), lambda item: item.model_copy(deep=True)],
)
def test_copied_item_is_not_owned(duplicate):
    item = Diode(stock_code="D1", stock_amount=1, unit_price=1)
    first = Inventory([item])

    clone = duplicate(item)
    second = Inventory()
    second.add(clone)

    assert second[0] is clone
    assert first[0] is item
    second.remove(clone)
    assert second.get_size() == 0
