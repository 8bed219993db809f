"""
Money — Decimal-примитивы для денежных сумм

Все денежные значения ledger (cash, цены, стоимость сделок) хранятся как Decimal.
Конверсия из float/str/int выполняется только на границе (конфигурация,
каталог, десериализация), дальше вычисления идут без float.

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. float никогда не попадает в расчёты cash (конверсия через str)
2. NaN/Inf отклоняются на границе
3. Произведение price × quantity вычисляется точно (без округления)
"""

from decimal import ROUND_HALF_UP, Context, Decimal, InvalidOperation
from typing import Final

# =============================================================================
# КОНСТАНТЫ
# =============================================================================

ZERO: Final[Decimal] = Decimal("0")

# Шаг округления для отображения денежных сумм (копейки/пайсы)
MONEY_QUANTUM: Final[Decimal] = Decimal("0.01")

# Верхняя граница (не включительно) для cash и цен
MAX_MONEY: Final[Decimal] = Decimal("1E+15")

# Точность decimal-контекста по умолчанию
DEFAULT_PRECISION: Final[int] = 28


# =============================================================================
# КОНВЕРСИЯ
# =============================================================================


def to_decimal(value: Decimal | float | int | str, name: str = "value") -> Decimal:
    """
    Конверсия значения в конечный Decimal.

    float конвертируется через str(), чтобы 3800.1 не превратился в
    3800.09999999999990905052982270717620849609375.

    Args:
        value: Исходное значение
        name: Имя параметра (для сообщения об ошибке)

    Returns:
        Конечный Decimal

    Raises:
        ValueError: Если значение не число, NaN или Inf

    Examples:
        >>> to_decimal(3800.1)
        Decimal('3800.1')
        >>> to_decimal("10000.00")
        Decimal('10000.00')
    """
    if isinstance(value, bool):
        raise ValueError(f"{name} must be a number, got {value!r}")

    if isinstance(value, Decimal):
        result = value
    else:
        try:
            result = Decimal(str(value).strip())
        except InvalidOperation:
            raise ValueError(f"{name} must be a number, got {value!r}") from None

    if not result.is_finite():
        raise ValueError(f"{name} must be finite (not NaN/Inf), got {value!r}")

    # -0 сериализуется как "-0" и не проходит контракт
    if result.is_zero():
        result = result.copy_abs()

    return result


def quantize_money(value: Decimal) -> Decimal:
    """
    Округление суммы до MONEY_QUANTUM (round half up).

    Используется только для отображения; ledger хранит точные значения.
    Точность контекста следует порядку value: суммы длиннее 28 знаков
    (стоимость заявки на 10**30 акций) округляются без InvalidOperation.
    """
    context = Context(prec=max(DEFAULT_PRECISION, value.adjusted() + 3))
    return value.quantize(MONEY_QUANTUM, rounding=ROUND_HALF_UP, context=context)


def format_money(value: Decimal, currency_symbol: str = "") -> str:
    """
    Форматирование суммы для человека: символ валюты + два знака.

    Examples:
        >>> format_money(Decimal("2400"), "₹")
        '₹2400.00'
    """
    return f"{currency_symbol}{quantize_money(value)}"


# =============================================================================
# ВАЛИДАЦИЯ
# =============================================================================


def validate_money_amount(value: Decimal, name: str) -> None:
    """
    Валидация денежной суммы: конечная, 0 <= value < MAX_MONEY.

    Args:
        value: Проверяемое значение
        name: Имя параметра (для сообщения об ошибке)

    Raises:
        ValueError: Если value < 0, value >= MAX_MONEY или NaN/Inf
    """
    if not value.is_finite():
        raise ValueError(f"{name} must be finite (not NaN/Inf), got {value}")

    if value < ZERO:
        raise ValueError(f"{name} must be non-negative, got {value}")

    if value >= MAX_MONEY:
        raise ValueError(f"{name} must be below {MAX_MONEY}, got {value}")
