# src/core/portfolio.py
# Metas de poupança e patrimônio (ativos de investimento).
import math
from typing import List, Dict, Any, Union

from src.core.models import ASSET_TYPES, TARGET_STATUS_COMPLETED, TARGET_STATUS_IN_PROGRESS


def target_status(target: Dict[str, Any]) -> str:
    """Uma meta está concluída quando o progresso alcança o objetivo."""
    if (target.get('progress') or 0) >= (target.get('goal') or 0):
        return TARGET_STATUS_COMPLETED
    return TARGET_STATUS_IN_PROGRESS


def target_progress_percentage(target: Dict[str, Any]) -> float:
    goal = target.get('goal') or 0
    if goal <= 0:
        return 0.0
    return min((target.get('progress') or 0) / goal * 100, 100.0)


def months_to_goal(target: Dict[str, Any]) -> Union[int, None]:
    """Meses até concluir a meta no ritmo do aporte mensal planejado (None sem aporte)."""
    remaining = (target.get('goal') or 0) - (target.get('progress') or 0)
    if remaining <= 0:
        return 0
    monthly_amount = target.get('monthlyAmount') or 0
    if monthly_amount <= 0:
        return None
    return math.ceil(remaining / monthly_amount)


def summarize_targets(targets: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """Enriquece cada meta com status, percentual e previsão de conclusão."""
    summary = []
    for target in targets:
        enriched = dict(target)
        enriched['status'] = target_status(target)
        enriched['percentage'] = target_progress_percentage(target)
        enriched['monthsToGoal'] = months_to_goal(target)
        summary.append(enriched)
    return summary


def summarize_assets_by_type(assets: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """Total e participação de cada tipo de ativo, do maior para o menor."""
    totals = {}
    for asset in assets:
        asset_type = asset.get('type') if asset.get('type') in ASSET_TYPES else 'Outros'
        totals[asset_type] = totals.get(asset_type, 0) + (asset.get('value') or 0)

    grand_total = sum(totals.values())
    result = [
        {
            'type': asset_type,
            'value': value,
            'percentage': value / grand_total * 100 if grand_total else 0,
        }
        for asset_type, value in totals.items()
    ]
    return sorted(result, key=lambda item: item['value'], reverse=True)


def project_asset_value(asset: Dict[str, Any], months: int) -> float:
    """Valor futuro com o rendimento mensal composto."""
    return (asset.get('value') or 0) * (1 + (asset.get('yield') or 0)) ** months


def total_monthly_yield(assets: List[Dict[str, Any]]) -> float:
    return sum((a.get('value') or 0) * (a.get('yield') or 0) for a in assets)
