# src/core/db.py
import logging
from supabase import create_client, Client
from src.config import SUPABASE_URL, SUPABASE_KEY
from src.core.models import normalize_transaction, TransactionType
from src.core.portfolio import target_status
from typing import Union, List, Dict, Any

logger = logging.getLogger(__name__)


def get_supabase_client() -> Client:
    """Retorna uma instância do cliente Supabase."""
    return create_client(SUPABASE_URL, SUPABASE_KEY)


# --- Funções para Transações ---
def get_transactions(supabase_client: Client,
                     date_from: Union[str, None] = None,
                     date_to: Union[str, None] = None) -> List[Dict[str, Any]]:
    """Obtém as transações (view enriquecida) já normalizadas para as análises."""
    try:
        query = supabase_client.table('transactions_enriched').select(
            'id,description,amount,transaction_date,transaction_type_internal_name,category_name'
        )
        if date_from:
            query = query.gte('transaction_date', date_from)
        if date_to:
            query = query.lte('transaction_date', date_to)
        response = query.order('transaction_date', desc=True).execute()
        return [normalize_transaction(tx) for tx in response.data]
    except Exception as e:
        logger.error(f"Erro ao obter transações do Supabase: {e}")
        return []


def get_expenses(supabase_client: Client) -> List[Dict[str, Any]]:
    """Despesas categorizadas: transações do tipo despesa com o nome da categoria."""
    try:
        response = supabase_client.table('transactions_enriched').select(
            'id,description,amount,transaction_date,transaction_type_internal_name,category_name'
        ).eq('transaction_type_internal_name', TransactionType.EXPENSE.value).order('transaction_date', desc=True).execute()
        expenses = []
        for tx in response.data:
            expense = normalize_transaction(tx)
            expense['title'] = expense['description']
            expense['amount'] = abs(expense['amount'])
            if not expense['category']:
                expense['category'] = 'Desconhecida'
            expenses.append(expense)
        return expenses
    except Exception as e:
        logger.error(f"Erro ao obter despesas do Supabase: {e}")
        return []


def add_transaction(supabase_client: Client, amount: float, transaction_type: str, date: str,
                    description: Union[str, None] = None, category_id: Union[str, None] = None) -> bool:
    """Adiciona uma transação. O tipo é gravado pelo nome interno (income, expense, investment)."""
    try:
        supabase_client.table('transactions').insert({
            "amount": amount,
            "transaction_type_internal_name": transaction_type,
            "transaction_date": date,
            "description": description,
            "category_id": category_id,
        }).execute()
        return True
    except Exception as e:
        logger.error(f"Erro ao adicionar transação ao Supabase: {e}")
        return False


# --- Funções para Categorias ---
def get_categories(supabase_client: Client) -> List[Dict[str, Any]]:
    """Obtém todas as categorias do Supabase."""
    try:
        response = supabase_client.table('categories').select('id,name,color,icon').order('name').execute()
        return response.data
    except Exception as e:
        logger.error(f"Erro ao obter categorias do Supabase: {e}")
        return []


# --- Funções para Ativos ---
def get_assets(supabase_client: Client) -> List[Dict[str, Any]]:
    """Obtém os ativos (investimentos) não excluídos."""
    try:
        response = supabase_client.table('assets_enriched').select(
            'id,name,asset_type_name,value,yield,date'
        ).is_('deleted_at', 'null').execute()
        assets = []
        for asset in response.data:
            assets.append({
                'id': asset.get('id'),
                'name': asset.get('name'),
                'type': asset.get('asset_type_name') or 'Outros',
                'value': float(asset.get('value') or 0),
                'yield': float(asset.get('yield') or 0),
                'date': asset.get('date'),
            })
        return assets
    except Exception as e:
        logger.error(f"Erro ao obter ativos do Supabase: {e}")
        return []


def add_asset(supabase_client: Client, name: str, asset_type_id: str, value: float,
              date: str, yield_rate: float = 0.0) -> bool:
    try:
        supabase_client.table('assets').insert({
            "name": name,
            "asset_types_id": asset_type_id,
            "value": value,
            "yield": yield_rate,
            "date": date,
        }).execute()
        return True
    except Exception as e:
        logger.error(f"Erro ao adicionar ativo ao Supabase: {e}")
        return False


# --- Funções para Metas ---
def get_targets(supabase_client: Client, status: Union[str, None] = None) -> List[Dict[str, Any]]:
    """Obtém as metas de poupança, opcionalmente filtradas por status."""
    try:
        query = supabase_client.table('targets_enriched').select(
            'id,title,goal_amount,current_amount,monthly_target,status,deadline'
        )
        if status:
            query = query.eq('status', status)
        response = query.order('deadline').execute()
        return [
            {
                'id': target.get('id'),
                'title': target.get('title'),
                'goal': float(target.get('goal_amount') or 0),
                'progress': float(target.get('current_amount') or 0),
                'monthlyAmount': float(target.get('monthly_target') or 0),
                'status': target.get('status'),
                'date': target.get('deadline'),
            }
            for target in response.data
        ]
    except Exception as e:
        logger.error(f"Erro ao obter metas do Supabase: {e}")
        return []


def add_target(supabase_client: Client, title: str, goal: float, date: str,
               progress: float = 0.0, monthly_amount: Union[float, None] = None) -> bool:
    try:
        supabase_client.table('targets').insert({
            "title": title,
            "goal_amount": goal,
            "current_amount": progress,
            "monthly_target": monthly_amount,
            "status": target_status({'progress': progress, 'goal': goal}),
            "deadline": date,
        }).execute()
        return True
    except Exception as e:
        logger.error(f"Erro ao adicionar meta ao Supabase: {e}")
        return False


def update_target_progress(supabase_client: Client, target_id: str, progress: float, goal: float) -> bool:
    """Atualiza o progresso de uma meta e recalcula o status."""
    try:
        supabase_client.table('targets').update({
            'current_amount': progress,
            'status': target_status({'progress': progress, 'goal': goal}),
        }).eq('id', target_id).execute()
        return True
    except Exception as e:
        logger.error(f"Erro ao atualizar progresso da meta {target_id}: {e}")
        return False


def delete_record(supabase_client: Client, table: str, record_id: str) -> bool:
    try:
        supabase_client.table(table).delete().eq('id', record_id).execute()
        return True
    except Exception as e:
        logger.error(f"Erro ao excluir registro {record_id} de {table}: {e}")
        return False
