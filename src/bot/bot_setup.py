# src/bot/bot_setup.py
import logging
from telegram.ext import Application, CommandHandler
from src.bot.commands import ALL_COMMANDS

logger = logging.getLogger(__name__)


def setup_bot(config: dict) -> Application:
    """
    Configura a aplicação do bot do Telegram com os comandos do painel.
    Retorna o objeto Application configurado, pronto para ser usado por um servidor WSGI.
    """
    application = Application.builder().token(config["TELEGRAM_BOT_TOKEN"]).build()

    # Handlers e comandos acessam a fonte de dados pelo bot_data
    application.bot_data['repository'] = config["REPOSITORY"]

    for name, command in ALL_COMMANDS.items():
        application.add_handler(CommandHandler(name, command))

    logger.info(f"Bot Telegram configurado com {len(ALL_COMMANDS)} comandos.")
    # Não chamamos application.run_polling() aqui: as atualizações chegam pelo webhook.
    return application
