from telegram import Update
from telegram.ext import ContextTypes

async def start_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Envia uma mensagem quando o comando /start é emitido."""
    await update.message.reply_text(
        "Olá! Sou seu painel financeiro. Acompanhe receitas, despesas, investimentos e metas.\n\n"
        "Comandos úteis:\n"
        "- `/resumo [YYYY-MM]` para ver o resumo do mês.\n"
        "- `/saude [YYYY-MM]` para ver seu score de saúde financeira.\n"
        "- `/alertas [YYYY-MM]` para ver os alertas do mês.\n"
        "- `/help` para mais informações."
    )

async def help_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Envia uma mensagem quando o comando /help é emitido."""
    await update.message.reply_text(
        "**Como usar:**\n"
        "Todos os comandos de análise aceitam um mês opcional no formato `YYYY-MM` "
        "(ex: `/resumo 2025-11`). Sem o mês, é usado o mês atual.\n\n"
        "**Análises do mês:**\n"
        "- `/resumo`: Receitas, despesas, investimentos e saldo.\n"
        "- `/saude`: Score de 0 a 100 e os critérios atendidos.\n"
        "- `/alertas`: Alertas de gastos, saldo e poupança.\n"
        "- `/projecao`: Projeção do saldo no fim do mês e quanto pode gastar por dia.\n"
        "- `/categorias_mes`: Despesas por categoria comparadas ao mês anterior.\n"
        "- `/regra_503020`: Comparação com a regra 50/30/20.\n\n"
        "**Gráficos:**\n"
        "- `/grafico_mensal`: Evolução dos últimos 6 meses.\n"
        "- `/grafico_categorias`: Pizza das despesas por categoria.\n\n"
        "**Patrimônio e metas:**\n"
        "- `/metas`: Progresso das metas de poupança.\n"
        "- `/patrimonio`: Ativos agrupados por tipo."
    )
