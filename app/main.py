import sys
import os
import logging
import streamlit as st

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from shop_core.api_client import live_environment
from shop_core.cart import (
    CartItemAction,
    Close,
    DestinationAction,
    DismissDestination,
    DismissError,
    DismissSuccess,
    Pay,
)
from shop_core.cart_item import RequestDelete
from shop_core.config import configure_logging, load_settings
from shop_core.destination import (
    CancelConfirmation,
    ConfirmationAlert,
    ConfirmPurchase,
    ErrorAlert,
    SuccessAlert,
)
from shop_core.domain import Tab
from shop_core.product_list import CartAction, FetchProducts, ProductAction, SetCartView
from shop_core.product_row import AddToCartAction, DidTapMinusButton, DidTapPlusButton
from shop_core.root import ProductListAction, RootState, TabSelected, make_root_reducer
from shop_core.store import Store

logger = logging.getLogger(__name__)


# ============ Инициализация ============
@st.cache_resource
def get_settings():
    settings = load_settings()
    configure_logging(settings)
    return settings


st.set_page_config(page_title="Online Store", page_icon="🛒", layout="wide")

if "store" not in st.session_state:
    st.session_state.store = Store(
        make_root_reducer(live_environment(get_settings())), RootState()
    )
    st.session_state.store.subscribe(
        lambda s: logger.debug("tab=%s cart_open=%s", s.selected_tab.value, s.product_list.should_open_cart)
    )
    # первая загрузка каталога при первом показе
    st.session_state.store.run(ProductListAction(FetchProducts()))

store: Store = st.session_state.store


def send(*actions):
    """Отправляет действия и ждёт завершения эффектов (спиннер на время запроса)"""
    with st.spinner("⏳ Загрузка..."):
        store.run(*actions)
    st.rerun()


def to_list(action):
    return ProductListAction(action)


def to_cart(action):
    return ProductListAction(CartAction(action))


# ============ SIDEBAR - вкладки ============
with st.sidebar:
    st.header("📂 Навигация")
    labels = {Tab.PRODUCTS: "🏪 Products", Tab.PROFILE: "👤 Profile"}
    selected = st.radio(
        "Раздел",
        list(labels),
        index=list(labels).index(store.state.selected_tab),
        format_func=labels.get,
        label_visibility="collapsed",
    )
    if selected != store.state.selected_tab:
        send(TabSelected(selected))

state = store.state
product_list = state.product_list


# ============ PAGE: ПРОФИЛЬ ============
if state.selected_tab == Tab.PROFILE:
    st.header("👤 Profile")
    st.info("Профиль пока не реализован")


# ============ PAGE: КОРЗИНА ============
elif product_list.cart is not None:
    cart = product_list.cart
    st.header("🛒 Cart")
    if st.button("✖️ Close"):
        send(to_cart(Close()))

    if cart.is_request_in_process:
        st.info("⏳ Отправляем заказ...")
    elif not cart.items:
        st.warning("Oops, your cart is empty!")

    for item_state in cart.items:
        item = item_state.cart_item
        cols = st.columns([5, 2, 2, 1])
        cols[0].markdown(f"**{item.product.name}**")
        cols[1].write(f"${item.product.price}")
        cols[2].write(f"× {item.quantity}")
        if cols[3].button("🗑️", key=f"del_{item_state.id}"):
            send(to_cart(CartItemAction(item_state.id, RequestDelete())))

    st.divider()
    if not cart.is_pay_button_hidden:
        if st.button(f"💳 Pay {cart.total_price_string}", disabled=cart.is_request_in_process):
            send(to_cart(Pay()))

    destination = cart.destination
    if isinstance(destination, ConfirmationAlert):
        st.subheader(destination.title)
        st.write(destination.message)
        c1, c2, c3 = st.columns(3)
        if c1.button(f"Pay {cart.total_price_string}", key="confirm"):
            send(to_cart(DestinationAction(ConfirmPurchase())))
        if c2.button("Cancel", key="cancel"):
            send(to_cart(DestinationAction(CancelConfirmation())))
        if c3.button("✖️", key="dismiss"):
            send(to_cart(DismissDestination()))
    elif isinstance(destination, SuccessAlert):
        st.success(f"**{destination.title}** {destination.message}")
        if st.button("Done", key="done_success"):
            send(to_cart(DismissSuccess()))
    elif isinstance(destination, ErrorAlert):
        st.error(f"**{destination.title}** {destination.message}")
        if st.button("Done", key="done_error"):
            send(to_cart(DismissError()))


# ============ PAGE: КАТАЛОГ ============
else:
    st.header("🏪 Products")
    if st.button("🛒 Go to Cart"):
        send(to_list(SetCartView(is_presented=True)))

    if product_list.is_loading:
        st.info("⏳ Загрузка каталога...")
    elif product_list.should_show_error:
        st.error("Oops, we couldn't fetch product list")
        if st.button("🔄 Retry"):
            send(to_list(FetchProducts()))
    else:
        for row in product_list.rows:
            with st.container():
                cols = st.columns([1, 5, 2, 1, 1, 1])
                if row.product.image:
                    cols[0].image(row.product.image, width=60)
                cols[1].markdown(f"**{row.product.name}**")
                cols[1].caption(row.product.category)
                cols[2].write(f"${row.product.price}")
                if cols[3].button("➖", key=f"minus_{row.id}"):
                    send(to_list(ProductAction(row.id, AddToCartAction(DidTapMinusButton()))))
                cols[4].write(row.count)
                if cols[5].button("➕", key=f"plus_{row.id}"):
                    send(to_list(ProductAction(row.id, AddToCartAction(DidTapPlusButton()))))
