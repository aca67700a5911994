# src/bot/messages.py
# Textos (Markdown) enviados pelos comandos do bot.
from typing import Dict, Any, List

from src.utils.formatters import format_currency, format_percentage, format_month, format_date

SEVERITY_EMOJI = {
    'critical': '🚨',
    'warning': '⚠️',
    'info': 'ℹ️',
    'success': '✅',
}

HEALTH_CRITERIA_LABELS = {
    'balancePositive': 'Saldo positivo no mês',
    'savingsRate': 'Taxa de poupança adequada',
    'expenseRatio': 'Despesas abaixo de 70% da receita',
    'growthTrend': 'Reserva de pelo menos 3 meses',
}

SAVINGS_TIER_LABELS = {
    'excellent': '🟢 Excelente',
    'good': '🟡 Bom',
    'below_ideal': '🟠 Abaixo do ideal',
    'critical': '🔴 Crítico',
}

DAILY_BUDGET_WARNINGS = {
    'critical': '🚨 Orçamento apertado! Considere adiar compras não essenciais.',
    'low': '⚠️ Orçamento apertado. Monitore seus gastos com atenção.',
}


def month_summary_message(month: str, month_data: Dict[str, float]) -> str:
    return (
        f"**Resumo de {format_month(month)}**\n\n"
        f"Receitas: {format_currency(month_data['credits'])}\n"
        f"Despesas: {format_currency(month_data['debits'])}\n"
        f"Investimentos: {format_currency(month_data['investments'])}\n"
        f"Saldo: **{format_currency(month_data['balance'])}**"
    )


def health_score_message(health: Dict[str, Any], runway: Dict[str, float]) -> str:
    lines = [f"**Saúde financeira: {health['score']}/100**\n"]
    for key, label in HEALTH_CRITERIA_LABELS.items():
        mark = '✅' if health['breakdown'][key] else '❌'
        lines.append(f"{mark} {label}")
    lines.append(
        f"\nPatrimônio: {format_currency(runway['totalAssets'])} "
        f"({runway['runwayMonths']:.1f} meses de despesas)"
    )
    return "\n".join(lines)


def alerts_message(alerts: List[Dict[str, str]]) -> str:
    if not alerts:
        return "Nenhum alerta para este mês. Tudo sob controle!"
    lines = ["**Alertas do mês:**\n"]
    for alert in alerts:
        emoji = SEVERITY_EMOJI.get(alert['severity'], '')
        lines.append(f"{emoji} {alert['message']}\n   ↳ {alert['action']}")
    return "\n".join(lines)


def projection_message(projection: Dict[str, Any], daily_budget: Dict[str, Any],
                       savings: Dict[str, Any], income_comparison: Dict[str, float]) -> str:
    lines = [
        "**Projeção para o fim do mês**\n",
        f"Despesas até agora: {format_currency(projection['currentExpenses'])}",
        f"Média diária: {format_currency(projection['avgDailyExpense'])}",
        f"Despesas projetadas: {format_currency(projection['projectedExpenses'])}",
        f"Saldo projetado: **{format_currency(projection['projectedBalance'])}**",
        f"Dias restantes: {projection['daysRemaining']} de {projection['totalDaysInMonth']}",
    ]

    budget_line = f"Pode gastar por dia: {format_currency(max(daily_budget['dailyBudget'], 0))}"
    if daily_budget['savingsGoal'] > 0:
        budget_line += f" (reservando {format_currency(daily_budget['savingsGoal'])} para poupança)"
    lines.append(budget_line)
    if daily_budget['daysRemaining'] > 0 and daily_budget['status'] in DAILY_BUDGET_WARNINGS:
        lines.append(DAILY_BUDGET_WARNINGS[daily_budget['status']])

    lines.append(
        f"\n**Taxa de poupança:** {format_percentage(savings['savingsRate'])} - "
        f"{SAVINGS_TIER_LABELS[savings['tier']]} (meta {savings['goal']}%)"
    )
    if income_comparison['previous'] > 0:
        arrow = '▲' if income_comparison['change'] >= 0 else '▼'
        comparison = f"{arrow} {format_percentage(abs(income_comparison['change']), 0)} vs mês anterior"
    else:
        comparison = "sem receitas no mês anterior"
    lines.append(f"Receitas: {format_currency(income_comparison['current'])} ({comparison})")
    return "\n".join(lines)


def expenses_by_category_message(expenses_by_category: List[Dict[str, Any]]) -> str:
    if not expenses_by_category:
        return "Nenhuma despesa registrada neste mês."
    lines = ["**Despesas por categoria:**\n"]
    for item in expenses_by_category:
        change = ""
        if item['previousAmount'] > 0:
            arrow = '▲' if item['change'] > 0 else '▼'
            change = f" {arrow} {format_percentage(abs(item['change']), 0)}"
        lines.append(
            f"- {item['category']}: {format_currency(item['amount'])} "
            f"({format_percentage(item['percentage'])}){change}"
        )
    return "\n".join(lines)


def budget_rule_message(budget: Dict[str, Any]) -> str:
    if not budget['totalIncome']:
        return "Sem receitas no mês: não dá para comparar com a regra 50/30/20."
    labels = {'essentials': 'Essenciais', 'personal': 'Pessoais', 'savings': 'Poupança'}
    lines = [f"**Regra 50/30/20** (receita: {format_currency(budget['totalIncome'])})\n"]
    for key, label in labels.items():
        lines.append(
            f"{label}: {format_currency(budget[key])} - "
            f"{format_percentage(budget['percentages'][key])} (ideal {budget['ideal'][key]}%)"
        )
    return "\n".join(lines)


def targets_message(targets: List[Dict[str, Any]]) -> str:
    if not targets:
        return "Nenhuma meta cadastrada ainda."
    lines = ["**Metas:**\n"]
    for target in targets:
        status = '🏁' if target['status'] == 'completed' else '⏳'
        months = target['monthsToGoal']
        forecast = f", faltam ~{months} meses" if months else ""
        deadline = f" até {format_date(target['date'])}" if target.get('date') else ""
        lines.append(
            f"{status} {target['title']}: {format_currency(target['progress'])} de "
            f"{format_currency(target['goal'])}{deadline} ({format_percentage(target['percentage'])}){forecast}"
        )
    return "\n".join(lines)


def assets_message(assets_by_type: List[Dict[str, Any]], monthly_yield: float, projected_total: float) -> str:
    if not assets_by_type:
        return "Nenhum ativo cadastrado ainda."
    total = sum(item['value'] for item in assets_by_type)
    lines = [f"**Patrimônio: {format_currency(total)}**\n"]
    for item in assets_by_type:
        lines.append(f"- {item['type']}: {format_currency(item['value'])} ({format_percentage(item['percentage'])})")
    lines.append(f"\nRendimento mensal estimado: {format_currency(monthly_yield)}")
    lines.append(f"Em 12 meses, mantido o rendimento: {format_currency(projected_total)}")
    return "\n".join(lines)
