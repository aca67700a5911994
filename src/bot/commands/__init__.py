# src/bot/commands/__init__.py

from .utils import start_command, help_command
from .dashboard import (
    alerts_command,
    budget_rule_command,
    category_breakdown_command,
    category_chart_command,
    health_command,
    monthly_chart_command,
    projection_command,
    summary_command,
)
from .portfolio import assets_command, targets_command

# Nome do comando no Telegram -> função
ALL_COMMANDS = {
    "start": start_command,
    "help": help_command,
    "resumo": summary_command,
    "saude": health_command,
    "alertas": alerts_command,
    "projecao": projection_command,
    "categorias_mes": category_breakdown_command,
    "regra_503020": budget_rule_command,
    "grafico_mensal": monthly_chart_command,
    "grafico_categorias": category_chart_command,
    "metas": targets_command,
    "patrimonio": assets_command,
}
