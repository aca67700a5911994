# src/config.py
import logging
import os
from dotenv import load_dotenv

load_dotenv()

# Configurações do Telegram
TELEGRAM_BOT_TOKEN = os.getenv("TELEGRAM_BOT_TOKEN")

# Configurações do Supabase
SUPABASE_URL = os.getenv("SUPABASE_URL")
SUPABASE_KEY = os.getenv("SUPABASE_KEY")

# Fonte de dados: "supabase" ou "mock" (repositório em memória com dados de demonstração)
DATA_SOURCE = os.getenv("DATA_SOURCE", "supabase" if SUPABASE_URL else "mock")

# Formatação de valores
CURRENCY = os.getenv("CURRENCY", "BRL")
LOCALE = os.getenv("LOCALE", "pt_BR")

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(level: str = None) -> None:
    """Configura o logging da aplicação inteira."""
    logging.basicConfig(
        format=LOG_FORMAT,
        level=getattr(logging, (level or LOG_LEVEL).upper(), logging.INFO),
    )
    # httpx (usado pelo supabase e pelo telegram) é muito verboso em INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)
