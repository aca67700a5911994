# src/core/models.py
from enum import Enum
from typing import Optional, List, Dict, Any, Union

from src.core.constants import DEFAULT_CATEGORY_COLOR

# As análises trabalham com dicionários Python vindos do Supabase (ou do
# repositório em memória); Transaction é o formato que normalize_transaction produz.


class TransactionType(str, Enum):
    INCOME = 'income'
    EXPENSE = 'expense'
    INVESTMENT = 'investment'


# Todas as grafias conhecidas do tipo de transação, mapeadas uma única vez aqui.
_TYPE_ALIASES = {
    'income': TransactionType.INCOME,
    'credit': TransactionType.INCOME,
    'receita': TransactionType.INCOME,
    'expense': TransactionType.EXPENSE,
    'debit': TransactionType.EXPENSE,
    'despesa': TransactionType.EXPENSE,
    'investment': TransactionType.INVESTMENT,
    'investimento': TransactionType.INVESTMENT,
}

ASSET_TYPES = [
    'Poupança',
    'CDB',
    'Tesouro Direto',
    'Ações',
    'Fundos',
    'Criptomoedas',
    'Outros',
]

TARGET_STATUS_COMPLETED = 'completed'
TARGET_STATUS_IN_PROGRESS = 'in_progress'


class Transaction:
    def __init__(self, id: str, date: str, amount: float, type: Optional[TransactionType],
                 description: str = '', category: Optional[str] = None):
        self.id = id
        self.date = date
        self.amount = amount
        self.type = type
        self.description = description
        self.category = category

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'date': self.date,
            'amount': self.amount,
            'type': self.type.value if self.type else None,
            'description': self.description,
            'category': self.category,
        }


UNKNOWN_CATEGORY = {
    'id': 'unknown',
    'name': 'Desconhecida',
    'color': DEFAULT_CATEGORY_COLOR,
    'icon': None,
}


def normalize_transaction_type(raw: Union[str, TransactionType, None]) -> Optional[TransactionType]:
    """Converte qualquer grafia externa do tipo (credit, debit, receita...) para TransactionType.
    Retorna None para tipos desconhecidos, que as análises ignoram."""
    if raw is None:
        return None
    if isinstance(raw, TransactionType):
        return raw
    return _TYPE_ALIASES.get(str(raw).strip().lower())


def normalize_transaction(record: Dict[str, Any]) -> Dict[str, Any]:
    """
    Normaliza um registro de transação vindo do Supabase ou do repositório em memória.
    Aceita 'type', 'type_internal_name' ou 'transaction_type_internal_name' e
    'date' ou 'transaction_date'. Nunca altera o dicionário recebido.
    """
    raw_type = record.get('type')
    if raw_type is None:
        raw_type = record.get('type_internal_name', record.get('transaction_type_internal_name'))
    tx_type = normalize_transaction_type(raw_type)

    category = record.get('category')
    if category is None:
        category = record.get('category_name')

    return Transaction(
        id=record.get('id'),
        date=record.get('date') or record.get('transaction_date') or '',
        amount=float(record.get('amount') or 0),
        type=tx_type,
        description=record.get('description') or '',
        category=category,
    ).to_dict()


def find_category(categories: List[Dict[str, Any]], name: Optional[str]) -> Optional[Dict[str, Any]]:
    """Busca a categoria pelo nome exato ou, na falta, pelo id igual ao nome em minúsculas."""
    if not name:
        return None
    for cat in categories:
        if cat.get('name') == name:
            return cat
    name_lower = name.lower()
    for cat in categories:
        if cat.get('id') == name_lower:
            return cat
    return None


def category_color(categories: List[Dict[str, Any]], name: Optional[str]) -> str:
    category = find_category(categories, name) or UNKNOWN_CATEGORY
    return category.get('color') or UNKNOWN_CATEGORY['color']
