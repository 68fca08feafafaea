from dataclasses import dataclass, field, replace
from typing import Any

from .domain import Tab
from .effects import NONE
from .environment import Environment
from .product_list import ProductListState, make_product_list_reducer
from .profile import ProfileState, profile_reducer
from .reducer import Reducer, ReducerFn, combine, scope


@dataclass(frozen=True)
class RootState:
    selected_tab: Tab = Tab.PRODUCTS
    product_list: ProductListState = field(default_factory=ProductListState)
    profile: ProfileState = field(default_factory=ProfileState)


@dataclass(frozen=True)
class TabSelected:
    tab: Tab


@dataclass(frozen=True)
class ProductListAction:
    action: Any


@dataclass(frozen=True)
class ProfileAction:
    action: Any


def make_root_reducer(env: Environment) -> ReducerFn:
    """Корень: вкладки + делегирование дочерним машинам без доп. логики"""
    return combine(
        scope(make_product_list_reducer(env), field="product_list", action_type=ProductListAction),
        scope(profile_reducer, field="profile", action_type=ProfileAction),
        Reducer().on(TabSelected, lambda s, a: (replace(s, selected_tab=a.tab), NONE)),
    )
