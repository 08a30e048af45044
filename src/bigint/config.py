"""
Config — Параметры разбора текста

Иммутабельные конфигурации с значениями по умолчанию.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class ParseConfig:
    """Конфигурация разбора текстового представления.

    Ограничение на длину ввода защищает от квадратичной стоимости разбора
    очень длинных строк из недоверенных источников.
    """

    # Максимальное количество цифр (без знака и префикса); 0 — без ограничения
    max_digits: int = 0

    def __post_init__(self) -> None:
        if self.max_digits < 0:
            raise ValueError(f"max_digits must be non-negative, got {self.max_digits}")


DEFAULT_PARSE_CONFIG = ParseConfig()
