# src/main.py
# Ponto de entrada WSGI (ex: gunicorn src.main:wsgi_app)
import asyncio
import logging

from src import config
from src.api import create_app
from src.bot.bot_setup import setup_bot
from src.core.repository import get_repository

config.configure_logging()
logger = logging.getLogger(__name__)

# --- Setup da Aplicação no Escopo Global (Executado apenas uma vez ao carregar o módulo) ---
try:
    repository = get_repository(config.DATA_SOURCE)
    logger.info(f"Fonte de dados: {config.DATA_SOURCE}")

    ptb_application = None
    if config.TELEGRAM_BOT_TOKEN:
        ptb_application = setup_bot({
            "TELEGRAM_BOT_TOKEN": config.TELEGRAM_BOT_TOKEN,
            "REPOSITORY": repository,
        })
        # A aplicação PTB precisa ser inicializada uma única vez no startup.
        asyncio.run(ptb_application.initialize())
        logger.info("python-telegram-bot Application inicializada.")
    else:
        logger.warning("TELEGRAM_BOT_TOKEN ausente: webhook do Telegram desativado.")

    wsgi_app = create_app(repository, ptb_application)
    logger.info("Aplicação WSGI pronta.")

except Exception:
    logger.exception("Erro crítico durante a inicialização em src/main.py")
    raise


if __name__ == "__main__":
    wsgi_app.run(debug=False)
