"""Tests for the ledger-to-inventory fold."""

import pytest

from pantrylog.models import InventoryItem
from pantrylog.services.aggregator import aggregate, build_snapshot, find_add_conflict


def as_tuples(items):
    return [(i.name, i.quantity, i.unit) for i in items]


class TestAccumulation:
    """Same-unit adds and removes."""

    def test_same_unit_adds_accumulate(self, make_transactions):
        txns = make_transactions(
            ("add", 1000, "milk", "ml"),
            ("add", 500, "milk", "ml"),
        )
        assert as_tuples(aggregate(txns)) == [("milk", 1500, "ml")]

    def test_remove_subtracts(self, make_transactions):
        txns = make_transactions(
            ("add", 6, "egg", "count"),
            ("remove", 2, "egg", "count"),
        )
        assert as_tuples(aggregate(txns)) == [("egg", 4, "count")]

    def test_empty_ledger(self):
        assert aggregate([]) == []
        snapshot = build_snapshot([])
        assert snapshot.items == []
        assert snapshot.conflicts == []
        assert snapshot.transaction_count == 0

    def test_items_keep_first_seen_order(self, make_transactions):
        txns = make_transactions(
            ("add", 1, "bread", "count"),
            ("add", 200, "butter", "g"),
            ("add", 1, "bread", "count"),
        )
        assert [i.name for i in aggregate(txns)] == ["bread", "butter"]


class TestDepletion:
    """Balances that reach zero or below."""

    def test_depleted_items_vanish(self, make_transactions):
        txns = make_transactions(
            ("add", 2, "egg", "count"),
            ("remove", 2, "egg", "count"),
        )
        assert aggregate(txns) == []

    def test_negative_balance_is_hidden_but_kept(self, make_transactions):
        txns = make_transactions(
            ("add", 2, "egg", "count"),
            ("remove", 3, "egg", "count"),
        )
        assert aggregate(txns) == []

        # The -1 is carried forward, not clamped
        txns = make_transactions(
            ("add", 2, "egg", "count"),
            ("remove", 3, "egg", "count"),
            ("add", 2, "egg", "count"),
        )
        assert as_tuples(aggregate(txns)) == [("egg", 1, "count")]

    def test_add_after_depletion_adopts_new_unit(self, make_transactions):
        txns = make_transactions(
            ("add", 5, "apple", "count"),
            ("remove", 5, "apple", "count"),
            ("add", 2, "apple", "g"),
        )
        assert as_tuples(aggregate(txns)) == [("apple", 2, "g")]

    def test_add_in_new_unit_after_overdraw_starts_from_zero(self, make_transactions):
        txns = make_transactions(
            ("add", 1, "apple", "count"),
            ("remove", 3, "apple", "count"),
            ("add", 500, "apple", "g"),
        )
        assert as_tuples(aggregate(txns)) == [("apple", 500, "g")]

    def test_float_residue_counts_as_depleted(self, make_transactions):
        txns = make_transactions(
            ("add", 0.1, "flour", "kgs"),
            ("add", 0.2, "flour", "kgs"),
            ("remove", 0.3, "flour", "kgs"),
        )
        assert aggregate(txns) == []


class TestUnitMismatch:
    """Incompatible units never change a balance."""

    def test_mismatched_remove_is_noop(self, make_transactions):
        txns = make_transactions(
            ("add", 1000, "milk", "ml"),
            ("remove", 1, "milk", "count"),
        )
        assert as_tuples(aggregate(txns)) == [("milk", 1000, "ml")]

    def test_remove_before_any_add_is_noop(self, make_transactions):
        txns = make_transactions(
            ("remove", 2, "cheese", "g"),
            ("add", 100, "cheese", "g"),
        )
        assert as_tuples(aggregate(txns)) == [("cheese", 100, "g")]

    def test_mismatched_add_is_not_summed(self, make_transactions):
        txns = make_transactions(
            ("add", 1000, "milk", "ml"),
            ("add", 2, "milk", "count"),
        )
        assert as_tuples(aggregate(txns)) == [("milk", 1000, "ml")]

    def test_mismatched_add_is_reported(self, make_transactions):
        txns = make_transactions(
            ("add", 1000, "milk", "ml"),
            ("add", 2, "milk", "count"),
        )
        snapshot = build_snapshot(txns)

        assert len(snapshot.conflicts) == 1
        conflict = snapshot.conflicts[0]
        assert conflict.transaction_id == "tx_1"
        assert conflict.current_unit == "ml"
        assert conflict.current_quantity == 1000
        assert conflict.incoming_unit == "count"
        assert conflict.incoming_quantity == 2
        assert snapshot.transaction_count == 2


class TestIdentity:
    """Case-insensitive keys and display names."""

    def test_names_are_case_insensitive(self, make_transactions):
        txns = make_transactions(
            ("add", 2, "Apple", "count"),
            ("add", 3, "APPLE", "count"),
        )
        items = aggregate(txns)
        assert len(items) == 1
        assert items[0].quantity == 5

    def test_display_name_is_from_last_transaction(self, make_transactions):
        txns = make_transactions(
            ("add", 2, "apple", "count"),
            ("add", 3, "Apple", "count"),
            ("remove", 1, "APPLE", "count"),
        )
        assert aggregate(txns) == [InventoryItem(name="APPLE", quantity=4, unit="count")]


class TestDeterminism:
    """The fold is a pure function of its input."""

    def test_aggregate_is_idempotent(self, make_transactions):
        txns = make_transactions(
            ("add", 2, "egg", "count"),
            ("add", 1000, "milk", "ml"),
            ("remove", 1, "milk", "count"),
            ("add", 2, "milk", "count"),
            ("remove", 250, "Milk", "ml"),
        )
        first = build_snapshot(txns)
        second = build_snapshot(txns)
        assert first == second
        assert aggregate(txns) == aggregate(txns)

    def test_input_is_not_modified(self, make_transactions):
        txns = make_transactions(("add", 2, "egg", "count"))
        before = list(txns)
        aggregate(txns)
        assert txns == before

    @pytest.mark.parametrize("order", [[0, 1, 2], [2, 1, 0], [1, 0, 2]])
    def test_same_unit_final_balance_is_order_independent(self, make_transactions, order):
        entries = [
            ("add", 500, "rice", "g"),
            ("add", 250, "rice", "g"),
            ("remove", 100, "rice", "g"),
        ]
        # Start with a stock so intermediate values stay positive
        txns = make_transactions(("add", 1000, "rice", "g"), *[entries[i] for i in order])
        assert as_tuples(aggregate(txns)) == [("rice", 1650, "g")]


class TestFindAddConflict:
    """Pre-checks for adds."""

    def test_no_conflict_for_new_item(self):
        assert find_add_conflict([], "milk", 1, "l") is None

    def test_no_conflict_for_same_canonical_unit(self, make_transactions):
        txns = make_transactions(("add", 500, "milk", "ml"))
        assert find_add_conflict(txns, "Milk", 1, "liter") is None

    def test_no_conflict_when_depleted(self, make_transactions):
        txns = make_transactions(
            ("add", 2, "milk", "count"),
            ("remove", 2, "milk", "count"),
        )
        assert find_add_conflict(txns, "milk", 1, "l") is None

    def test_conflict_when_units_differ(self, make_transactions):
        txns = make_transactions(("add", 500, "milk", "ml"))
        conflict = find_add_conflict(txns, "MILK", 2, None)

        assert conflict is not None
        assert conflict.item_name == "MILK"
        assert conflict.current_unit == "ml"
        assert conflict.incoming_unit == "count"
        assert conflict.incoming_quantity == 2

    def test_other_items_are_ignored(self, make_transactions):
        txns = make_transactions(("add", 500, "sugar", "g"))
        assert find_add_conflict(txns, "milk", 2, None) is None
