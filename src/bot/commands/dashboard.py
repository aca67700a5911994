import logging
from typing import Union

from telegram import Update
from telegram.ext import ContextTypes

from src.bot import messages
from src.core import charts
from src.core.analytics import DashboardAnalytics
from src.utils.formatters import parse_month, InvalidMonthError

logger = logging.getLogger(__name__)


async def _load_analytics(update: Update, context: ContextTypes.DEFAULT_TYPE) -> Union[DashboardAnalytics, None]:
    """Monta o painel do mês pedido em /comando [YYYY-MM] (padrão: mês atual)."""
    try:
        month = parse_month(context.args[0] if context.args else None)
    except InvalidMonthError as e:
        await update.message.reply_text(f"{e}\nEx: `/resumo 2025-11`")
        return None

    repository = context.bot_data["repository"]
    logger.debug(f"Carregando painel de {month}")
    return DashboardAnalytics(
        transactions=repository.get_transactions(),
        expenses=repository.get_expenses(),
        assets=repository.get_assets(),
        categories=repository.get_categories(),
        month=month,
    )


async def summary_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Resumo do mês: receitas, despesas, investimentos e saldo."""
    analytics = await _load_analytics(update, context)
    if analytics is None:
        return
    await update.message.reply_text(
        messages.month_summary_message(analytics.month, analytics.current_month_data),
        parse_mode='Markdown',
    )


async def health_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Score de saúde financeira com os critérios atendidos."""
    analytics = await _load_analytics(update, context)
    if analytics is None:
        return
    await update.message.reply_text(
        messages.health_score_message(analytics.health_score, analytics.runway),
        parse_mode='Markdown',
    )


async def alerts_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    analytics = await _load_analytics(update, context)
    if analytics is None:
        return
    await update.message.reply_text(messages.alerts_message(analytics.alerts), parse_mode='Markdown')


async def projection_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    analytics = await _load_analytics(update, context)
    if analytics is None:
        return
    await update.message.reply_text(
        messages.projection_message(
            analytics.projection, analytics.daily_budget, analytics.savings_rate, analytics.income_comparison,
        ),
        parse_mode='Markdown',
    )


async def category_breakdown_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    analytics = await _load_analytics(update, context)
    if analytics is None:
        return
    await update.message.reply_text(
        messages.expenses_by_category_message(analytics.expenses_by_category),
        parse_mode='Markdown',
    )


async def budget_rule_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Compara o mês com a regra 50/30/20 (texto + gráfico)."""
    analytics = await _load_analytics(update, context)
    if analytics is None:
        return
    budget = analytics.budget_rule_503020
    await update.message.reply_text(messages.budget_rule_message(budget), parse_mode='Markdown')
    chart_buffer = charts.generate_budget_rule_chart(budget)
    if chart_buffer:
        chart_buffer.name = "regra_503020.png"
        await update.message.reply_photo(photo=chart_buffer)


async def monthly_chart_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Gera e envia o gráfico de evolução dos últimos meses."""
    analytics = await _load_analytics(update, context)
    if analytics is None:
        return
    await update.message.reply_text("Gerando o gráfico mensal, por favor aguarde...")
    chart_buffer = charts.generate_monthly_evolution_chart(analytics.monthly_evolution)
    if chart_buffer:
        chart_buffer.name = "evolucao_mensal.png"
        await update.message.reply_photo(photo=chart_buffer, caption="Evolução dos últimos meses:")
    else:
        await update.message.reply_text(
            "Ainda não tenho dados suficientes para gerar o gráfico. Registre algumas transações primeiro!"
        )


async def category_chart_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    analytics = await _load_analytics(update, context)
    if analytics is None:
        return
    chart_buffer = charts.generate_category_chart(analytics.expenses_by_category, analytics.month)
    if chart_buffer:
        chart_buffer.name = "despesas_por_categoria.png"
        await update.message.reply_photo(photo=chart_buffer, caption="Aqui estão suas despesas por categoria:")
    else:
        await update.message.reply_text("Nenhuma despesa registrada neste mês.")
