import sys
import os

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))
import itertools
from decimal import Decimal

import pytest

from shop_core.domain import Product
from shop_core.environment import Environment


@pytest.fixture
def product_a():
    return Product(id=1, name="ProductA", price=Decimal("10"), image="a.png")


@pytest.fixture
def product_b():
    return Product(id=2, name="ProductB", price=Decimal("5"), image="b.png")


@pytest.fixture
def id_factory():
    counter = itertools.count(1)
    return lambda: f"id-{next(counter)}"


@pytest.fixture
def make_env(product_a, product_b, id_factory):
    """
    Окружение-заглушка: каталог [A, B], заказ подтверждается "OK".
    Переданные products / order_error меняют поведение.
    """

    def factory(products=None, fetch_error=None, order_error=None, sent=None):
        async def fetch_products():
            if fetch_error is not None:
                raise fetch_error
            return list(products if products is not None else [product_a, product_b])

        async def send_order(items):
            if sent is not None:
                sent.append(items)
            if order_error is not None:
                raise order_error
            return "OK"

        return Environment(
            fetch_products=fetch_products, send_order=send_order, new_id=id_factory
        )

    return factory
