from telegram import Update
from telegram.ext import ContextTypes

from src.bot import messages
from src.core import portfolio


async def targets_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Lista as metas de poupança com progresso e previsão."""
    repository = context.bot_data["repository"]
    targets = portfolio.summarize_targets(repository.get_targets())
    await update.message.reply_text(messages.targets_message(targets), parse_mode='Markdown')


async def assets_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Mostra o patrimônio agrupado por tipo de ativo."""
    repository = context.bot_data["repository"]
    assets = repository.get_assets()
    projected_total = sum(portfolio.project_asset_value(asset, 12) for asset in assets)
    await update.message.reply_text(
        messages.assets_message(
            portfolio.summarize_assets_by_type(assets), portfolio.total_monthly_yield(assets), projected_total,
        ),
        parse_mode='Markdown',
    )
