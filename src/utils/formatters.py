# src/utils/formatters.py
import datetime
import re
from typing import Union

MONTH_PATTERN = re.compile(r'^\d{4}-(0[1-9]|1[0-2])$')

MONTH_NAMES = [
    "janeiro", "fevereiro", "março", "abril", "maio", "junho",
    "julho", "agosto", "setembro", "outubro", "novembro", "dezembro",
]


class InvalidMonthError(ValueError):
    """Mês fora do formato YYYY-MM."""


def format_currency(value: float) -> str:
    """Formata valor no padrão brasileiro. Ex: 1500.5 -> "R$ 1.500,50", -20 -> "-R$ 20,00"."""
    sign = "-" if value < 0 else ""
    formatted = f"{abs(value):,.2f}".replace(',', 'X').replace('.', ',').replace('X', '.')
    return f"{sign}R$ {formatted}"


def parse_currency(value: Union[str, int, float, None]) -> float:
    """Converte "R$ 1.234,56" em 1234.56. Retorna 0.0 se não houver número."""
    if isinstance(value, (int, float)):
        return float(value)
    if not isinstance(value, str):
        return 0.0
    cleaned = re.sub(r'[^\d,-]', '', value).replace(',', '.')
    try:
        return float(cleaned)
    except ValueError:
        return 0.0


def format_percentage(value: float, decimals: int = 1) -> str:
    return f"{value:.{decimals}f}%".replace('.', ',')


def format_date(date_string: str) -> str:
    """'2025-11-05' -> '05/11/2025'."""
    year, month, day = date_string[:10].split('-')
    return f"{day}/{month}/{year}"


def format_month(month: str) -> str:
    """'2025-11' -> 'novembro de 2025'."""
    year, month_number = month.split('-')
    return f"{MONTH_NAMES[int(month_number) - 1]} de {year}"


def to_iso_date(value: Union[datetime.date, datetime.datetime, None]) -> Union[str, None]:
    if not value:
        return None
    return value.strftime("%Y-%m-%d")


def get_current_month(today: Union[datetime.date, None] = None) -> str:
    today = today or datetime.date.today()
    return today.strftime("%Y-%m")


def parse_month(value: Union[str, None], today: Union[datetime.date, None] = None) -> str:
    """Valida um mês YYYY-MM. Sem valor, usa o mês corrente."""
    if value is None or value == "":
        return get_current_month(today)
    value = value.strip()
    if not MONTH_PATTERN.match(value):
        raise InvalidMonthError(f"Mês inválido: '{value}'. Use o formato YYYY-MM (ex: 2025-11).")
    return value
