"""
Errors — Иерархия исключений BigInt

Все ошибки — нарушения контракта со стороны вызывающего кода, внутри
движка они не перехватываются и не подавляются. Каждое исключение
наследует и общий BigIntError, и соответствующее встроенное исключение
Python, чтобы вызывающий код мог ловить любое из них.

Виды ошибок:
- ParseError — некорректный текст (пустая строка, неверная цифра, голый префикс)
- DivisionByZero — деление или остаток с нулевым делителем
- InvalidModulus — pow_mod с неположительным модулем
- NegativeExponent — отрицательная степень (модульная инверсия не поддерживается)
- ConversionOverflow — значение не помещается в целевой fixed-width тип
"""


class BigIntError(Exception):
    """Базовое исключение движка BigInt."""

    pass


class ParseError(BigIntError, ValueError):
    """
    Некорректное текстовое представление числа.

    Возникает при пустом вводе, недопустимой цифре для выбранной системы
    счисления, голом '-' или '0x' без цифр, а также при превышении лимита
    количества цифр из ParseConfig.
    """

    pass


class DivisionByZero(BigIntError, ZeroDivisionError):
    """Деление или взятие остатка с нулевым делителем."""

    pass


class InvalidModulus(BigIntError, ValueError):
    """Модуль pow_mod должен быть строго положительным."""

    pass


class NegativeExponent(BigIntError, ValueError):
    """Отрицательная степень: модульная инверсия не поддерживается."""

    pass


class ConversionOverflow(BigIntError, OverflowError):
    """
    Значение не помещается в fixed-width целый тип.

    Сужающие конверсии никогда не оборачивают и не усекают значение.
    """

    pass
