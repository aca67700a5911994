# src/core/analytics.py
"""
Funções de análise financeira do painel.

Todas as funções são puras: recebem listas de dicionários já normalizados
(ver src.core.models.normalize_transaction) e devolvem valores novos, sem
alterar as entradas. Meses são strings no formato YYYY-MM.
"""
import calendar
import datetime
import logging
from functools import cached_property
from typing import List, Dict, Any, Union, Optional, Tuple

import pandas as pd

from src.core import constants
from src.core.models import TransactionType, category_color
from src.utils.formatters import format_currency, MONTH_PATTERN

logger = logging.getLogger(__name__)


def safe_divide(numerator: float, denominator: float, fallback: Any = 0) -> Any:
    """Divide, devolvendo `fallback` quando o denominador é zero."""
    if not denominator:
        return fallback
    return numerator / denominator


def split_month(month: Any) -> Optional[Tuple[int, int]]:
    """(ano, mês) de um 'YYYY-MM' válido; None para qualquer outro valor."""
    if not isinstance(month, str) or not MONTH_PATTERN.match(month):
        return None
    year, month_number = month.split('-')
    return int(year), int(month_number)


def get_previous_month(month: str) -> str:
    """'2025-01' -> '2024-12'. Um mês inválido volta sem alteração."""
    parsed = split_month(month)
    if parsed is None:
        logger.warning("Mês inválido recebido pelas análises: %r", month)
        return month
    year, month_number = parsed
    if month_number == 1:
        return f"{year - 1}-12"
    return f"{year}-{month_number - 1:02d}"


def filter_by_month(records: List[Dict[str, Any]], month: str) -> List[Dict[str, Any]]:
    if split_month(month) is None:
        return []
    return [r for r in records if (r.get('date') or '').startswith(month)]


def _sum_amounts(records: List[Dict[str, Any]]) -> float:
    return sum(abs(r.get('amount') or 0) for r in records)


def calculate_month_data(transactions: List[Dict[str, Any]], month: str) -> Dict[str, float]:
    """
    Soma as transações do mês por tipo.
    Tipos desconhecidos (ou ausentes) não entram em nenhum total.
    """
    month_transactions = filter_by_month(transactions, month)

    credits = _sum_amounts([t for t in month_transactions if t.get('type') == TransactionType.INCOME])
    debits = _sum_amounts([t for t in month_transactions if t.get('type') == TransactionType.EXPENSE])
    investments = _sum_amounts([t for t in month_transactions if t.get('type') == TransactionType.INVESTMENT])

    return {
        'credits': credits,
        'debits': debits,
        'expenses': debits,
        'plannedExpenses': debits,
        'investments': investments,
        'balance': credits - debits - investments,
    }


def calculate_savings_rate(month_data: Dict[str, float]) -> float:
    savings = month_data['balance'] + month_data['investments']
    return safe_divide(savings, month_data['credits']) * 100


def savings_rate_tier(savings_rate: float) -> str:
    if savings_rate >= constants.EXCELLENT_SAVINGS_RATE:
        return 'excellent'
    if savings_rate >= constants.MIN_GOOD_SAVINGS_RATE:
        return 'good'
    if savings_rate >= constants.LOW_SAVINGS_RATE:
        return 'below_ideal'
    return 'critical'


def calculate_savings_summary(month_data: Dict[str, float],
                              goal_percentage: float = constants.DEFAULT_SAVINGS_GOAL_PERCENTAGE) -> Dict[str, Any]:
    """Quanto sobrou (saldo + investimentos) frente à meta de poupança."""
    savings_rate = calculate_savings_rate(month_data)
    return {
        'savings': month_data['balance'] + month_data['investments'],
        'credits': month_data['credits'],
        'savingsRate': savings_rate,
        'goal': goal_percentage,
        'tier': savings_rate_tier(savings_rate),
    }


def calculate_income_comparison(current_month_data: Dict[str, float],
                                previous_month_data: Dict[str, float]) -> Dict[str, float]:
    current = current_month_data['credits']
    previous = previous_month_data['credits']
    return {
        'current': current,
        'previous': previous,
        'change': safe_divide(current - previous, previous) * 100,
    }


def calculate_expense_ratio(month_data: Dict[str, float]) -> float:
    # Sem receita, qualquer despesa é o pior caso: 100%.
    if not month_data['credits']:
        return 100.0
    return month_data['expenses'] / month_data['credits'] * 100


def calculate_health_score(month_data: Dict[str, float],
                           assets: List[Dict[str, Any]],
                           avg_monthly_expenses: float) -> Dict[str, Any]:
    """Score de saúde financeira (0-100): quatro critérios, cada um vale pontos fixos."""
    points = constants.HEALTH_SCORE_POINTS
    score = 0
    breakdown = {
        'balancePositive': False,
        'savingsRate': False,
        'expenseRatio': False,
        'growthTrend': False,
    }

    # 1. Saldo positivo no mês
    if month_data['balance'] > 0:
        score += points['BALANCE_POSITIVE']
        breakdown['balancePositive'] = True

    # 2. Taxa de poupança
    if calculate_savings_rate(month_data) >= constants.MIN_GOOD_SAVINGS_RATE:
        score += points['SAVINGS_RATE']
        breakdown['savingsRate'] = True

    # 3. Despesas abaixo do limite sobre a receita
    if calculate_expense_ratio(month_data) < constants.MAX_EXPENSE_RATIO:
        score += points['EXPENSE_RATIO']
        breakdown['expenseRatio'] = True

    # 4. Patrimônio cobre meses suficientes de despesas
    total_assets = sum(a.get('value') or 0 for a in assets)
    runway_months = safe_divide(total_assets, avg_monthly_expenses)
    if runway_months >= constants.MIN_RUNWAY_MONTHS:
        score += points['RUNWAY']
        breakdown['growthTrend'] = True

    return {'score': score, 'breakdown': breakdown}


def _alert(severity: str, message: str, action: str, icon: str) -> Dict[str, str]:
    return {'severity': severity, 'message': message, 'action': action, 'icon': icon}


def generate_alerts(current_month_data: Dict[str, float],
                    previous_month_data: Optional[Dict[str, float]],
                    projection: Optional[Dict[str, Any]],
                    expenses_by_category: List[Dict[str, Any]],
                    categories: List[Dict[str, Any]]) -> List[Dict[str, str]]:
    """
    Gera os alertas do painel. Todas as regras são avaliadas de forma independente
    e a ordem da lista é a ordem de exibição.
    """
    alerts = []

    # Despesas muito acima do mês anterior
    if previous_month_data is not None:
        previous_expenses = previous_month_data['expenses']
        current_expenses = current_month_data['expenses']
        if current_expenses > previous_expenses * constants.EXPENSE_INCREASE_ALERT_THRESHOLD:
            increase = safe_divide(current_expenses - previous_expenses, previous_expenses, fallback=None)
            if increase is None:
                message = "Despesas acima do mês anterior (sem despesas no mês anterior)"
            else:
                message = f"Despesas {increase * 100:.0f}% acima do mês anterior"
            alerts.append(_alert(
                'critical', message,
                'Revise seus gastos e identifique o que mudou',
                'AlertTriangle',
            ))

    # Vai terminar o mês no negativo
    if projection is not None and projection['projectedBalance'] < 0:
        shortfall = abs(projection['projectedBalance'])
        daily_reduction = safe_divide(shortfall, projection['daysRemaining'], fallback=None)
        if daily_reduction is None:
            action = f"O mês termina hoje: cubra {format_currency(shortfall)} de déficit"
        else:
            action = f"Reduza {format_currency(daily_reduction)}/dia"
        alerts.append(_alert(
            'critical',
            f"Você vai terminar o mês com {format_currency(shortfall)} no negativo",
            action,
            'AlertCircle',
        ))

    # Categorias com gasto muito acima do mês anterior
    for cat in expenses_by_category:
        if cat['change'] > constants.CATEGORY_INCREASE_ALERT_THRESHOLD:
            alerts.append(_alert(
                'warning',
                f"Categoria {cat['category']} está {cat['change']:.0f}% acima do mês anterior",
                'Verifique se há gastos atípicos nesta categoria',
                'TrendingUp',
            ))

    # Alerta positivo: poupando bem
    savings_rate = calculate_savings_rate(current_month_data)
    if savings_rate >= constants.EXCELLENT_SAVINGS_RATE:
        alerts.append(_alert(
            'success',
            f"Parabéns! Você está poupando {savings_rate:.1f}% da sua receita",
            'Continue assim para atingir suas metas!',
            'CheckCircle',
        ))

    # Saldo disponível baixo com muitos dias pela frente
    balance = current_month_data['balance']
    days_remaining = projection['daysRemaining'] if projection is not None else 0
    if 0 < balance < constants.LOW_BALANCE_ALERT_THRESHOLD and days_remaining > constants.LOW_BALANCE_MIN_DAYS_REMAINING:
        alerts.append(_alert(
            'warning',
            f"Saldo disponível está baixo ({format_currency(balance)})",
            f"Ainda faltam {days_remaining} dias no mês",
            'AlertTriangle',
        ))

    return alerts


def calculate_month_end_projection(transactions: List[Dict[str, Any]],
                                   month: str,
                                   today: Union[datetime.date, None] = None) -> Dict[str, Any]:
    """
    Projeção linear do fim do mês: a média diária de despesas até hoje é
    estendida aos dias restantes. Um mês que não é o corrente conta como encerrado.
    """
    today = today or datetime.date.today()
    parsed = split_month(month)
    if parsed is None:
        # Sem mês válido não há dias nem transações: projeção zerada
        logger.warning("Projeção pedida para mês inválido: %r", month)
        days_in_month = current_day = 0
    else:
        year, month_number = parsed
        days_in_month = calendar.monthrange(year, month_number)[1]
        is_current_month = today.year == year and today.month == month_number
        current_day = today.day if is_current_month else days_in_month
    days_remaining = days_in_month - current_day

    month_data = calculate_month_data(transactions, month)
    current_expenses = month_data['expenses']

    avg_daily_expense = safe_divide(current_expenses, current_day)
    projected_future_expenses = avg_daily_expense * days_remaining
    projected_expenses = current_expenses + projected_future_expenses
    projected_balance = month_data['credits'] - projected_expenses - month_data['investments']

    return {
        'credits': month_data['credits'],
        'currentExpenses': current_expenses,
        'projectedExpenses': projected_expenses,
        'projectedFutureExpenses': projected_future_expenses,
        'investments': month_data['investments'],
        'projectedBalance': projected_balance,
        'daysRemaining': days_remaining,
        'daysPassed': current_day,
        'avgDailyExpense': avg_daily_expense,
        'totalDaysInMonth': days_in_month,
    }


def _group_by_category(expenses: List[Dict[str, Any]]) -> Dict[str, float]:
    if not expenses:
        return {}
    df = pd.DataFrame(expenses, columns=['category', 'amount'])
    df['category'] = df['category'].fillna('Desconhecida')
    df['amount'] = df['amount'].fillna(0).abs()
    # sort=False mantém a ordem de primeira ocorrência, usada como desempate
    grouped = df.groupby('category', sort=False)['amount'].sum()
    return {str(name): float(total) for name, total in grouped.items()}


def calculate_expenses_by_category(current_expenses: List[Dict[str, Any]],
                                   previous_expenses: List[Dict[str, Any]],
                                   categories: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """
    Agrupa as despesas por categoria e compara com o mês anterior.
    Categorias sem gasto no mês atual não aparecem.
    """
    current_by_category = _group_by_category(current_expenses)
    previous_by_category = _group_by_category(previous_expenses)
    total = sum(current_by_category.values())

    result = []
    for name, amount in current_by_category.items():
        previous_amount = previous_by_category.get(name, 0.0)
        change = safe_divide(amount - previous_amount, previous_amount) * 100
        result.append({
            'category': name,
            'amount': amount,
            'previousAmount': previous_amount,
            'change': change,
            'percentage': safe_divide(amount, total) * 100,
            'color': category_color(categories, name),
        })

    return sorted(result, key=lambda item: item['amount'], reverse=True)


def calculate_budget_rule_503020(expenses: List[Dict[str, Any]],
                                 month_data: Dict[str, float],
                                 categories: List[Dict[str, Any]]) -> Dict[str, Any]:
    """
    Compara os gastos do mês com a regra 50/30/20.
    Categorias fora das listas de essenciais e pessoais não entram em nenhum dos dois grupos.
    """
    essentials = _sum_amounts([e for e in expenses if e.get('category') in constants.ESSENTIAL_CATEGORIES])
    personal = _sum_amounts([e for e in expenses if e.get('category') in constants.PERSONAL_CATEGORIES])

    savings = max(month_data['balance'], 0) + month_data['investments']
    total_income = month_data['credits']

    return {
        'essentials': essentials,
        'personal': personal,
        'savings': savings,
        'totalIncome': total_income,
        'percentages': {
            'essentials': safe_divide(essentials, total_income) * 100,
            'personal': safe_divide(personal, total_income) * 100,
            'savings': safe_divide(savings, total_income) * 100,
        },
        'ideal': {
            'essentials': constants.BUDGET_RULE_ESSENTIALS,
            'personal': constants.BUDGET_RULE_PERSONAL,
            'savings': constants.BUDGET_RULE_SAVINGS,
        },
    }


def calculate_average_monthly_expenses(transactions: List[Dict[str, Any]],
                                       month: str,
                                       history_months: int = constants.EXPENSE_HISTORY_MONTHS) -> float:
    """Média de despesas dos últimos meses, ignorando meses sem despesa."""
    months = [month]
    for _ in range(history_months - 1):
        months.append(get_previous_month(months[-1]))

    totals = [calculate_month_data(transactions, m)['expenses'] for m in months]
    totals = [value for value in totals if value > 0]
    if not totals:
        return calculate_month_data(transactions, month)['expenses']
    return sum(totals) / len(totals)


def calculate_runway(assets: List[Dict[str, Any]], avg_monthly_expenses: float) -> Dict[str, float]:
    total_assets = sum(a.get('value') or 0 for a in assets)
    return {
        'totalAssets': total_assets,
        'avgMonthlyExpenses': avg_monthly_expenses,
        'runwayMonths': safe_divide(total_assets, avg_monthly_expenses),
    }


def calculate_daily_budget(month_data: Dict[str, float], days_remaining: int,
                           savings_goal_percentage: float = constants.DEFAULT_SAVINGS_GOAL_PERCENTAGE) -> Dict[str, Any]:
    """
    Quanto ainda pode ser gasto por dia até o fim do mês mantendo a meta de
    poupança (um percentual das receitas). Sem dias restantes, o valor é 0.
    """
    available = month_data['balance']
    savings_goal = month_data['credits'] * savings_goal_percentage / 100
    daily_budget = safe_divide(available - savings_goal, days_remaining)

    if daily_budget < constants.DAILY_BUDGET_CRITICAL:
        status = 'critical'
    elif daily_budget < constants.DAILY_BUDGET_LOW:
        status = 'low'
    else:
        status = 'ok'

    return {
        'available': available,
        'savingsGoal': savings_goal,
        'daysRemaining': days_remaining,
        'dailyBudget': daily_budget,
        'status': status,
    }


def calculate_monthly_evolution(transactions: List[Dict[str, Any]],
                                end_month: str,
                                months: int = 6) -> List[Dict[str, Any]]:
    """Totais por mês (receita, despesa, investimento, saldo) dos últimos `months` meses, do mais antigo ao atual."""
    if split_month(end_month) is None:
        return []
    month_list = [end_month]
    for _ in range(months - 1):
        month_list.append(get_previous_month(month_list[-1]))
    month_list.reverse()

    df = pd.DataFrame(transactions, columns=['date', 'amount', 'type'])
    df = df[df['type'].isin([t.value for t in TransactionType])].copy()
    if not df.empty:
        df['month'] = df['date'].astype(str).str.slice(0, 7)
        df['amount'] = df['amount'].abs()
        summary = df.groupby(['month', 'type'])['amount'].sum().unstack(fill_value=0)
    else:
        summary = pd.DataFrame()

    result = []
    for month in month_list:
        row = {'month': month}
        for tx_type in TransactionType:
            if month in summary.index and tx_type.value in summary.columns:
                row[tx_type.value] = float(summary.at[month, tx_type.value])
            else:
                row[tx_type.value] = 0.0
        row['balance'] = row['income'] - row['expense'] - row['investment']
        result.append(row)
    return result


class DashboardAnalytics:
    """
    Visão derivada do painel para um mês. Cada valor é calculado na primeira
    leitura e guardado; para novos dados, crie uma nova instância.

    `expenses` são as despesas categorizadas; sem elas, são usadas as
    transações do tipo despesa.
    """

    def __init__(self, transactions: List[Dict[str, Any]], assets: List[Dict[str, Any]],
                 categories: List[Dict[str, Any]], month: str,
                 expenses: Optional[List[Dict[str, Any]]] = None,
                 today: Union[datetime.date, None] = None):
        self.transactions = transactions
        self.assets = assets
        self.categories = categories
        self.month = month
        self.today = today
        if expenses is None:
            expenses = [t for t in transactions if t.get('type') == TransactionType.EXPENSE]
        self.expenses = expenses

    @cached_property
    def previous_month(self) -> str:
        return get_previous_month(self.month)

    @cached_property
    def current_month_expenses(self) -> List[Dict[str, Any]]:
        return filter_by_month(self.expenses, self.month)

    @cached_property
    def previous_month_expenses(self) -> List[Dict[str, Any]]:
        return filter_by_month(self.expenses, self.previous_month)

    @cached_property
    def current_month_data(self) -> Dict[str, float]:
        return calculate_month_data(self.transactions, self.month)

    @cached_property
    def previous_month_data(self) -> Dict[str, float]:
        return calculate_month_data(self.transactions, self.previous_month)

    @cached_property
    def projection(self) -> Dict[str, Any]:
        return calculate_month_end_projection(self.transactions, self.month, today=self.today)

    @cached_property
    def expenses_by_category(self) -> List[Dict[str, Any]]:
        return calculate_expenses_by_category(
            self.current_month_expenses, self.previous_month_expenses, self.categories
        )

    @cached_property
    def avg_monthly_expenses(self) -> float:
        return calculate_average_monthly_expenses(self.transactions, self.month)

    @cached_property
    def runway(self) -> Dict[str, float]:
        return calculate_runway(self.assets, self.avg_monthly_expenses)

    @cached_property
    def health_score(self) -> Dict[str, Any]:
        return calculate_health_score(self.current_month_data, self.assets, self.avg_monthly_expenses)

    @cached_property
    def has_previous_month(self) -> bool:
        return bool(filter_by_month(self.transactions, self.previous_month))

    @cached_property
    def alerts(self) -> List[Dict[str, str]]:
        # Sem nenhuma transação no mês anterior não há base de comparação
        return generate_alerts(
            self.current_month_data,
            self.previous_month_data if self.has_previous_month else None,
            self.projection,
            self.expenses_by_category,
            self.categories,
        )

    @cached_property
    def budget_rule_503020(self) -> Dict[str, Any]:
        return calculate_budget_rule_503020(self.current_month_expenses, self.current_month_data, self.categories)

    @cached_property
    def savings_rate(self) -> Dict[str, Any]:
        return calculate_savings_summary(self.current_month_data)

    @cached_property
    def income_comparison(self) -> Dict[str, float]:
        return calculate_income_comparison(self.current_month_data, self.previous_month_data)

    @cached_property
    def daily_budget(self) -> Dict[str, Any]:
        return calculate_daily_budget(self.current_month_data, self.projection['daysRemaining'])

    @cached_property
    def monthly_evolution(self) -> List[Dict[str, Any]]:
        return calculate_monthly_evolution(self.transactions, self.month)

    def to_dict(self) -> Dict[str, Any]:
        logger.debug("Montando painel de %s com %d transações", self.month, len(self.transactions))
        return {
            'month': self.month,
            'previousMonth': self.previous_month,
            'currentMonthData': self.current_month_data,
            'previousMonthData': self.previous_month_data,
            'projection': self.projection,
            'expensesByCategory': self.expenses_by_category,
            'avgMonthlyExpenses': self.avg_monthly_expenses,
            'runway': self.runway,
            'healthScore': self.health_score,
            'alerts': self.alerts,
            'budgetRule503020': self.budget_rule_503020,
            'savingsRate': self.savings_rate,
            'incomeComparison': self.income_comparison,
            'dailyBudget': self.daily_budget,
            'monthlyEvolution': self.monthly_evolution,
        }
