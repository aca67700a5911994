# src/core/charts.py
import pandas as pd
import matplotlib.pyplot as plt
import io
import matplotlib.ticker as mticker
from typing import Union, Dict, Any, List

from src.utils.formatters import format_month


# Configurações globais para os gráficos (cores, fontes, etc.)
plt.style.use('seaborn-v0_8-darkgrid')
plt.rcParams['font.family'] = 'sans-serif'
plt.rcParams['font.size'] = 10
plt.rcParams['axes.labelsize'] = 12
plt.rcParams['axes.titlesize'] = 14
plt.rcParams['xtick.labelsize'] = 10
plt.rcParams['ytick.labelsize'] = 10
plt.rcParams['legend.fontsize'] = 10

# Cores personalizadas para os gráficos
COLORS = {
    'Receita': '#10b981',
    'Despesa': '#ef4444',
    'Investimento': '#06b6d4',
    'Saldo': '#6366f1',
    'Ideal': '#94a3b8',
}

CURRENCY_FORMATTER = mticker.FormatStrFormatter('R$%.2f')


def _to_png(dpi: int = 150) -> io.BytesIO:
    """Salva a figura atual em um buffer PNG e fecha a figura."""
    plt.tight_layout()
    buf = io.BytesIO()
    plt.savefig(buf, format='png', dpi=dpi)
    buf.seek(0)
    plt.close()
    return buf


def generate_monthly_evolution_chart(evolution: List[Dict[str, Any]]) -> Union[io.BytesIO, None]:
    """Gráfico de barras mensal: receitas, despesas e investimentos, com a linha do saldo."""
    df = pd.DataFrame(evolution)
    if df.empty or not df[['income', 'expense', 'investment']].to_numpy().any():
        return None

    df = df.set_index('month').rename(columns={
        'income': 'Receita', 'expense': 'Despesa', 'investment': 'Investimento', 'balance': 'Saldo',
    })

    fig, ax = plt.subplots(figsize=(12, 7))
    df[['Receita', 'Despesa', 'Investimento']].plot(
        kind='bar',
        ax=ax,
        color=[COLORS['Receita'], COLORS['Despesa'], COLORS['Investimento']],
    )
    ax.plot(range(len(df)), df['Saldo'].values, color=COLORS['Saldo'], marker='o', label='Saldo')

    ax.set_title('Evolução Mensal: Receitas vs. Despesas', fontsize=16, fontweight='bold')
    ax.set_ylabel('Valor (R$)')
    ax.set_xlabel('Mês/Ano')
    plt.xticks(rotation=45, ha='right')
    ax.grid(axis='y', linestyle='--', alpha=0.7)
    ax.yaxis.set_major_formatter(CURRENCY_FORMATTER)
    ax.legend(title='Tipo de Transação')

    return _to_png()


def generate_category_chart(expenses_by_category: List[Dict[str, Any]], month: str) -> Union[io.BytesIO, None]:
    """Pizza das despesas do mês por categoria, usando as cores de cada categoria."""
    if not expenses_by_category:
        return None

    df = pd.DataFrame(expenses_by_category)
    fig, ax = plt.subplots(figsize=(10, 7))
    wedges, _, _ = ax.pie(
        df['amount'],
        colors=df['color'],
        autopct='%1.1f%%',
        startangle=90,
        pctdistance=0.8,
    )
    labels = [f"{row.category}: R${row.amount:.2f}" for row in df.itertuples()]
    ax.legend(wedges, labels, title='Categoria', loc='center left', bbox_to_anchor=(1, 0, 0.5, 1))
    ax.set_title(f"Despesas por Categoria - {format_month(month)}", fontsize=16, fontweight='bold')
    ax.axis('equal')

    return _to_png()


def generate_budget_rule_chart(budget: Dict[str, Any]) -> Union[io.BytesIO, None]:
    """Compara a distribuição real da receita com a regra 50/30/20."""
    if not budget['totalIncome']:
        return None

    labels = {'essentials': 'Essenciais', 'personal': 'Pessoais', 'savings': 'Poupança'}
    df = pd.DataFrame({
        'Real': [budget['percentages'][key] for key in labels],
        'Ideal': [budget['ideal'][key] for key in labels],
    }, index=list(labels.values()))

    fig, ax = plt.subplots(figsize=(9, 6))
    df.plot(kind='bar', ax=ax, color=[COLORS['Saldo'], COLORS['Ideal']])
    for container in ax.containers:
        ax.bar_label(container, fmt='%.1f%%', fontsize=8, padding=3)

    ax.set_title('Regra 50/30/20', fontsize=16, fontweight='bold')
    ax.set_ylabel('% da receita')
    plt.xticks(rotation=0)
    ax.grid(axis='y', linestyle='--', alpha=0.7)

    return _to_png()
