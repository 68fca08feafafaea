from dataclasses import dataclass
from decimal import Decimal
from enum import Enum


class DataLoadingStatus(str, Enum):
    NOT_STARTED = "notStarted"
    LOADING = "loading"
    SUCCESS = "success"
    ERROR = "error"


class Tab(str, Enum):
    PRODUCTS = "products"
    PROFILE = "profile"


@dataclass(frozen=True)
class Product:
    id: int
    name: str
    price: Decimal  # неотрицательная, в долларах
    image: str
    description: str = ""
    category: str = ""

    def __post_init__(self):
        if self.price < 0:
            raise ValueError(f"Product {self.id}: price must be non-negative")


@dataclass(frozen=True)
class CartItem:
    id: str
    product: Product
    quantity: int

    def __post_init__(self):
        # позиция с нулевым количеством не должна существовать
        if self.quantity < 1:
            raise ValueError(f"CartItem {self.id}: quantity must be >= 1")

    @property
    def subtotal(self) -> Decimal:
        return self.product.price * self.quantity
