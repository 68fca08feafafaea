"""
Ошибки внешних коллабораторов (каталог, приём заказов).
Редьюсеры получают их внутри Either.left, а не как исключения.
"""


class ShopCoreError(Exception):
    """
    Базовое исключение ядра магазина.

    message — текст для логов, details — контекст (url, статус ответа и т.п.)
    """

    def __init__(self, message: str, details: dict | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        return self.message

    def __repr__(self) -> str:
        if self.details:
            details_str = ", ".join(f"{k}={v}" for k, v in self.details.items())
            return f"{self.__class__.__name__}('{self.message}', {details_str})"
        return f"{self.__class__.__name__}('{self.message}')"


class CatalogFetchError(ShopCoreError):
    """Не удалось получить список товаров"""


class OrderSubmissionError(ShopCoreError):
    """Не удалось отправить заказ"""
