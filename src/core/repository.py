# src/core/repository.py
"""
Fontes de dados do painel.

SupabaseRepository delega para as funções de src.core.db; MockRepository guarda
tudo em memória (desenvolvimento local e testes). As duas expõem os mesmos
leitores e escritores, então comandos do bot e a API não sabem de onde vêm os dados.
Os escritores retornam True quando gravam; o MockRepository levanta
RecordNotFoundError ao atualizar ou excluir um id inexistente.
"""
import copy
import datetime
import logging
import uuid
from typing import List, Dict, Any, Union

from src.core import db
from src.core.mock_data import build_mock_seed
from src.core.models import (
    normalize_transaction, TransactionType, UNKNOWN_CATEGORY, find_category,
)
from src.core.portfolio import target_status

logger = logging.getLogger(__name__)

ENTITIES = ('transactions', 'categories', 'assets', 'targets', 'asset_types', 'transaction_types')

DEFAULT_TRANSACTION_TYPES = [
    {'id': 1, 'name': 'Receita', 'internal_name': 'income', 'color': '#10b981'},
    {'id': 2, 'name': 'Despesa', 'internal_name': 'expense', 'color': '#6366f1'},
    {'id': 3, 'name': 'Investimento', 'internal_name': 'investment', 'color': '#06b6d4'},
]


class RecordNotFoundError(KeyError):
    pass


class SupabaseRepository:
    def __init__(self, supabase_client):
        self.client = supabase_client

    def get_transactions(self) -> List[Dict[str, Any]]:
        return db.get_transactions(self.client)

    def get_expenses(self) -> List[Dict[str, Any]]:
        return db.get_expenses(self.client)

    def get_categories(self) -> List[Dict[str, Any]]:
        return db.get_categories(self.client)

    def get_assets(self) -> List[Dict[str, Any]]:
        return db.get_assets(self.client)

    def get_targets(self) -> List[Dict[str, Any]]:
        return db.get_targets(self.client)

    def add_transaction(self, amount: float, transaction_type: str, date: str,
                        description: str = '', category: Union[str, None] = None) -> bool:
        category_id = None
        if category:
            found = find_category(self.get_categories(), category)
            if found:
                category_id = found['id']
            else:
                logger.warning(f"Categoria '{category}' não encontrada; transação gravada sem categoria.")
        return db.add_transaction(self.client, amount, transaction_type, date, description, category_id)

    def add_asset(self, name: str, asset_type_id: str, value: float, date: str, yield_rate: float = 0.0) -> bool:
        return db.add_asset(self.client, name, asset_type_id, value, date, yield_rate)

    def add_target(self, title: str, goal: float, date: Union[str, None] = None,
                   progress: float = 0.0, monthly_amount: Union[float, None] = None) -> bool:
        return db.add_target(self.client, title, goal, date, progress, monthly_amount)

    def update_target_progress(self, target_id: str, progress: float, goal: float) -> bool:
        return db.update_target_progress(self.client, target_id, progress, goal)

    def delete_record(self, entity: str, record_id: str) -> bool:
        return db.delete_record(self.client, entity, record_id)


class MockRepository:
    """Banco em memória com CRUD genérico por entidade."""

    def __init__(self, seed: Union[Dict[str, List[Dict[str, Any]]], None] = None):
        self._data = {entity: [] for entity in ENTITIES}
        self._data['transaction_types'] = copy.deepcopy(DEFAULT_TRANSACTION_TYPES)
        for entity, records in (seed or {}).items():
            self._data[entity] = copy.deepcopy(records)

    # --- CRUD genérico ---
    def find_all(self, entity: str) -> List[Dict[str, Any]]:
        return copy.deepcopy(self._data[entity])

    def find_by_id(self, entity: str, record_id: Any) -> Union[Dict[str, Any], None]:
        for item in self._data[entity]:
            if item.get('id') == record_id:
                return copy.deepcopy(item)
        return None

    def create(self, entity: str, data: Dict[str, Any]) -> Dict[str, Any]:
        now = datetime.datetime.now().isoformat()
        new_item = {'id': str(uuid.uuid4()), **data, 'created_at': now, 'updated_at': now}
        self._data[entity].append(new_item)
        logger.debug(f"Registro criado em {entity}: {new_item['id']}")
        return copy.deepcopy(new_item)

    def update(self, entity: str, record_id: Any, updates: Dict[str, Any]) -> Dict[str, Any]:
        for index, item in enumerate(self._data[entity]):
            if item.get('id') == record_id:
                self._data[entity][index] = {**item, **updates, 'updated_at': datetime.datetime.now().isoformat()}
                return copy.deepcopy(self._data[entity][index])
        raise RecordNotFoundError(f"{entity} não encontrado: {record_id}")

    def delete(self, entity: str, record_id: Any) -> bool:
        for index, item in enumerate(self._data[entity]):
            if item.get('id') == record_id:
                del self._data[entity][index]
                return True
        raise RecordNotFoundError(f"{entity} não encontrado: {record_id}")

    # --- Enriquecimento ---
    def enrich_with_category(self, item: Dict[str, Any]) -> Dict[str, Any]:
        category = self.find_by_id('categories', item.get('category_id')) or UNKNOWN_CATEGORY
        return {**item, 'category': category['name'], 'category_color': category['color']}

    def enrich_with_transaction_type(self, item: Dict[str, Any]) -> Dict[str, Any]:
        tx_type = self.find_by_id('transaction_types', item.get('transaction_type_id'))
        enriched = {**item}
        if tx_type:
            enriched['type_internal_name'] = tx_type['internal_name']
            enriched['type_name'] = tx_type['name']
        return enriched

    def enrich_with_asset_type(self, item: Dict[str, Any]) -> Dict[str, Any]:
        asset_type = self.find_by_id('asset_types', item.get('asset_type_id'))
        if asset_type:
            return {**item, 'type': asset_type['name']}
        return {**item, 'type': item.get('type') or 'Outros'}

    # --- Leitores usados pelo painel ---
    def get_transactions(self) -> List[Dict[str, Any]]:
        transactions = []
        for item in self.find_all('transactions'):
            if 'category_id' in item:
                item = self.enrich_with_category(item)
            transactions.append(normalize_transaction(self.enrich_with_transaction_type(item)))
        return sorted(transactions, key=lambda t: t['date'], reverse=True)

    def get_expenses(self) -> List[Dict[str, Any]]:
        expenses = []
        for tx in self.get_transactions():
            if tx['type'] != TransactionType.EXPENSE:
                continue
            expenses.append({
                **tx,
                'title': tx['description'],
                'amount': abs(tx['amount']),
                'category': tx['category'] or UNKNOWN_CATEGORY['name'],
            })
        return expenses

    def get_categories(self) -> List[Dict[str, Any]]:
        return sorted(self.find_all('categories'), key=lambda c: c.get('name') or '')

    def get_assets(self) -> List[Dict[str, Any]]:
        return [self.enrich_with_asset_type(a) for a in self.find_all('assets')]

    def get_targets(self) -> List[Dict[str, Any]]:
        return [{**t, 'status': target_status(t)} for t in self.find_all('targets')]

    # --- Escritores (mesma interface do SupabaseRepository) ---
    def add_transaction(self, amount: float, transaction_type: str, date: str,
                        description: str = '', category: Union[str, None] = None) -> bool:
        data = {'amount': amount, 'type': transaction_type, 'date': date, 'description': description}
        if category:
            found = find_category(self._data['categories'], category)
            if found:
                data['category_id'] = found['id']
            else:
                data['category'] = category
        self.create('transactions', data)
        return True

    def add_asset(self, name: str, asset_type_id: str, value: float, date: str, yield_rate: float = 0.0) -> bool:
        self.create('assets', {
            'name': name, 'asset_type_id': asset_type_id, 'value': value, 'yield': yield_rate, 'date': date,
        })
        return True

    def add_target(self, title: str, goal: float, date: Union[str, None] = None,
                   progress: float = 0.0, monthly_amount: Union[float, None] = None) -> bool:
        self.create('targets', {
            'title': title, 'goal': goal, 'progress': progress, 'monthlyAmount': monthly_amount or 0.0, 'date': date,
        })
        return True

    def update_target_progress(self, target_id: str, progress: float, goal: float) -> bool:
        self.update('targets', target_id, {'progress': progress, 'goal': goal})
        return True

    def delete_record(self, entity: str, record_id: str) -> bool:
        return self.delete(entity, record_id)


def get_repository(data_source: str, supabase_client=None):
    """Escolhe a fonte de dados configurada (DATA_SOURCE)."""
    if data_source == 'supabase':
        return SupabaseRepository(supabase_client or db.get_supabase_client())
    if data_source == 'mock':
        logger.info("Usando repositório em memória com dados de demonstração (DATA_SOURCE=mock)")
        return MockRepository(build_mock_seed())
    raise ValueError(f"Fonte de dados desconhecida: {data_source}")
