# src/core/mock_data.py
# Dados de demonstração do repositório em memória (DATA_SOURCE=mock).
# Gera os últimos meses até hoje, para que o painel do mês atual já tenha dados.
import datetime
from typing import Dict, List, Any, Union

from src.core.analytics import get_previous_month
from src.core.models import ASSET_TYPES

CATEGORIES = [
    {'id': 'salario', 'name': 'Salário', 'color': '#10b981', 'icon': 'Wallet'},
    {'id': 'moradia', 'name': 'Moradia', 'color': '#0ea5e9', 'icon': 'Home'},
    {'id': 'alimentacao', 'name': 'Alimentação', 'color': '#f97316', 'icon': 'UtensilsCrossed'},
    {'id': 'transporte', 'name': 'Transporte', 'color': '#eab308', 'icon': 'Car'},
    {'id': 'saude', 'name': 'Saúde', 'color': '#ef4444', 'icon': 'HeartPulse'},
    {'id': 'lazer', 'name': 'Lazer', 'color': '#8b5cf6', 'icon': 'Music'},
    {'id': 'educacao', 'name': 'Educação', 'color': '#6366f1', 'icon': 'GraduationCap'},
    {'id': 'outros', 'name': 'Outros', 'color': '#64748b', 'icon': 'MoreHorizontal'},
    {'id': 'poupanca', 'name': 'Poupança', 'color': '#06b6d4', 'icon': 'PiggyBank'},
]

# (dia, descrição, categoria, tipo, valor). Tipos: 1 receita, 2 despesa, 3 investimento.
MONTHLY_ENTRIES = [
    (1, 'Salário', 'salario', 1, 2840.30),
    (1, 'Salário (segunda renda)', 'salario', 1, 3517.20),
    (5, 'Parcela do apartamento', 'moradia', 2, -1805.00),
    (5, 'Condomínio', 'moradia', 2, -550.00),
    (8, 'Água, luz e internet', 'moradia', 2, -300.00),
    (10, 'Gasolina', 'transporte', 2, -250.00),
    (12, 'Mercado do mês', 'alimentacao', 2, -850.00),
    (15, 'Streaming', 'lazer', 2, -49.90),
    (20, 'Restaurante', 'alimentacao', 2, -180.00),
    (22, 'Curso online', 'educacao', 2, -120.00),
    (25, 'Investimento poupança', 'poupanca', 3, -1109.50),
]

# Despesas diversas variam mês a mês (índice: número do mês % 6)
MISC_EXPENSES = [420.00, 380.00, 450.00, 390.00, 410.00, 430.00]

ASSETS = [
    ('Poupança', 'Poupança', 52752.00, 0.005),
    ('Tesouro Selic 2027', 'Tesouro Direto', 15000.00, 0.0095),
    ('CDB 120% CDI', 'CDB', 8000.00, 0.011),
    ('Ações ITSA4', 'Ações', 5500.00, 0.015),
    ('Fundo Imobiliário HGLG11', 'Fundos', 3200.00, 0.007),
    ('Bitcoin', 'Criptomoedas', 2000.00, 0.05),
]


def _month_entries(month: str) -> List[tuple]:
    month_number = int(month[5:7])
    entries = list(MONTHLY_ENTRIES)
    entries.append((25, 'Despesas diversas', 'outros', 2, -MISC_EXPENSES[month_number % 6]))
    # Consulta trimestral
    if month_number % 3 == 0:
        entries.append((18, 'Consulta médica', 'saude', 2, -200.00))
    return entries


def build_mock_seed(today: Union[datetime.date, None] = None, months: int = 6) -> Dict[str, List[Dict[str, Any]]]:
    """Seed para MockRepository: `months` meses de transações terminando em hoje, ativos e metas."""
    today = today or datetime.date.today()
    current_month = today.strftime("%Y-%m")

    month_list = [current_month]
    for _ in range(months - 1):
        month_list.append(get_previous_month(month_list[-1]))

    transactions = []
    for month in reversed(month_list):
        for day, description, category_id, type_id, amount in _month_entries(month):
            # No mês atual, só o que já aconteceu
            if month == current_month and day > today.day:
                continue
            transactions.append({
                'id': f"mock-tx-{len(transactions) + 1}",
                'date': f"{month}-{day:02d}",
                'amount': amount,
                'transaction_type_id': type_id,
                'category_id': category_id,
                'description': description,
            })

    asset_types = [{'id': f"at-{index}", 'name': name} for index, name in enumerate(ASSET_TYPES, start=1)]
    asset_type_ids = {asset_type['name']: asset_type['id'] for asset_type in asset_types}
    assets = [
        {
            'id': f"mock-asset-{index}",
            'name': name,
            'asset_type_id': asset_type_ids[asset_type],
            'value': value,
            'yield': yield_rate,
            'date': today.isoformat(),
        }
        for index, (name, asset_type, value, yield_rate) in enumerate(ASSETS, start=1)
    ]

    targets = [
        {'id': 'mock-target-1', 'title': 'Reserva de emergência', 'goal': 30000.00, 'progress': 18000.00,
         'monthlyAmount': 1000.00, 'date': f"{today.year + 1}-12-31"},
        {'id': 'mock-target-2', 'title': 'Viagem de férias', 'goal': 12000.00, 'progress': 4500.00,
         'monthlyAmount': 750.00, 'date': f"{today.year + 1}-07-01"},
        {'id': 'mock-target-3', 'title': 'Notebook novo', 'goal': 8000.00, 'progress': 8000.00,
         'monthlyAmount': 0.0, 'date': today.isoformat()},
    ]

    return {
        'categories': CATEGORIES,
        'asset_types': asset_types,
        'transactions': transactions,
        'assets': assets,
        'targets': targets,
    }
