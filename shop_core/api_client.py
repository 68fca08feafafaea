"""HTTP-клиент источника каталога и приёмника заказов."""

import logging
from datetime import date
from decimal import Decimal, InvalidOperation
from typing import Any, List, Optional, Tuple

import httpx

from .config import Settings
from .domain import CartItem, Product
from .environment import Environment
from .exceptions import CatalogFetchError, OrderSubmissionError

logger = logging.getLogger(__name__)


def parse_product(raw: dict) -> Product:
    """Товар из JSON каталога (формат fakestoreapi)"""
    return Product(
        id=int(raw["id"]),
        name=str(raw["title"]),
        price=Decimal(str(raw["price"])),
        image=str(raw.get("image", "")),
        description=str(raw.get("description", "")),
        category=str(raw.get("category", "")),
    )


def order_payload(items: Tuple[CartItem, ...], user_id: int, today: date) -> dict:
    return {
        "userId": user_id,
        "date": today.isoformat(),
        "products": [
            {"productId": item.product.id, "quantity": item.quantity} for item in items
        ],
    }


class ApiClient:
    """Асинхронный клиент бэкенда магазина"""

    def __init__(
        self,
        settings: Settings,
        user_id: int = 1,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        """
        Args:
            settings: базовый URL и таймаут
            user_id: владелец отправляемых заказов
            transport: свой транспорт httpx (в тестах httpx.MockTransport)
        """
        self.user_id = user_id
        self.client = httpx.AsyncClient(
            base_url=settings.api_base_url,
            timeout=settings.api_timeout,
            transport=transport,
            headers={"Accept": "application/json"},
        )

    async def fetch_products(self) -> List[Product]:
        """
        Загружает весь каталог.

        Raises:
            CatalogFetchError: ошибка сети, статус ответа или невалидный JSON
        """
        try:
            response = await self.client.get("/products")
            response.raise_for_status()
            data: Any = response.json()
            products = [parse_product(raw) for raw in data]
        except httpx.HTTPError as e:
            raise CatalogFetchError(
                "Unable to fetch products", details={"error": repr(e)}
            ) from e
        except (ValueError, KeyError, TypeError, InvalidOperation) as e:
            raise CatalogFetchError(
                "Malformed product payload", details={"error": repr(e)}
            ) from e

        logger.info("Fetched %d products", len(products))
        return products

    async def send_order(self, items: Tuple[CartItem, ...]) -> str:
        """
        Отправляет заказ.

        Returns:
            Подтверждение от сервера (тело ответа)

        Raises:
            OrderSubmissionError: ошибка сети или статус ответа
        """
        payload = order_payload(items, self.user_id, date.today())
        try:
            response = await self.client.post("/carts", json=payload)
            response.raise_for_status()
        except httpx.HTTPError as e:
            raise OrderSubmissionError(
                "Unable to send order",
                details={"items": len(items), "error": repr(e)},
            ) from e
        return response.text

    async def aclose(self) -> None:
        await self.client.aclose()

    async def __aenter__(self) -> "ApiClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()


def live_environment(settings: Settings) -> Environment:
    """
    Окружение поверх HTTP. Клиент создаётся на каждый вызов:
    UI запускает каждое взаимодействие в отдельном event loop.
    """

    async def fetch_products() -> List[Product]:
        async with ApiClient(settings) as client:
            return await client.fetch_products()

    async def send_order(items: Tuple[CartItem, ...]) -> str:
        async with ApiClient(settings) as client:
            return await client.send_order(items)

    return Environment(fetch_products=fetch_products, send_order=send_order)
