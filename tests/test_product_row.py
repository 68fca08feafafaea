import sys
import os

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))
from functools import reduce

from shop_core.product_row import (
    AddToCartAction,
    DidTapMinusButton,
    DidTapPlusButton,
    ProductRowState,
    product_row_reducer,
    reset_row,
)


def apply(row, *actions):
    return reduce(lambda r, a: product_row_reducer(r, AddToCartAction(a))[0], actions, row)


def test_plus_increments_and_mirrors(product_a):
    row = apply(ProductRowState(id="r1", product=product_a), DidTapPlusButton(), DidTapPlusButton())

    assert row.count == 2
    assert row.add_to_cart.count == 2


def test_minus_never_below_zero(product_a):
    row = apply(
        ProductRowState(id="r1", product=product_a),
        DidTapPlusButton(),
        DidTapMinusButton(),
        DidTapMinusButton(),
    )

    assert row.count == 0
    assert row.add_to_cart.count == 0


def test_counter_has_no_effects(product_a):
    _, effects = product_row_reducer(
        ProductRowState(id="r1", product=product_a), AddToCartAction(DidTapPlusButton())
    )
    assert effects == ()


def test_reset_row_zeroes_both_counters(product_a):
    row = apply(ProductRowState(id="r1", product=product_a), DidTapPlusButton())
    reset = reset_row(row)

    assert reset.count == 0
    assert reset.add_to_cart.count == 0
    assert reset.id == "r1"
