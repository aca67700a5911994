# src/core/constants.py
# Limiares e pesos usados pelas análises do painel.

# --- Metas e limites financeiros ---
DEFAULT_SAVINGS_GOAL_PERCENTAGE = 20  # % das receitas reservada no orçamento diário
LOW_SAVINGS_RATE = 5  # abaixo disso a poupança é crítica
MIN_GOOD_SAVINGS_RATE = 10  # % de poupança considerada boa
EXCELLENT_SAVINGS_RATE = 20  # % de poupança considerada excelente
MAX_EXPENSE_RATIO = 70  # % máxima de despesas sobre a receita
MIN_RUNWAY_MONTHS = 3  # meses de reserva para segurança financeira
EXPENSE_HISTORY_MONTHS = 3  # meses usados na média de despesas

# --- Regra 50/30/20 ---
BUDGET_RULE_ESSENTIALS = 50
BUDGET_RULE_PERSONAL = 30
BUDGET_RULE_SAVINGS = 20

ESSENTIAL_CATEGORIES = ['Moradia', 'Transporte', 'Alimentação', 'Saúde']
PERSONAL_CATEGORIES = ['Lazer', 'Educação', 'Outros']

# --- Alertas ---
EXPENSE_INCREASE_ALERT_THRESHOLD = 1.2  # 20% acima do mês anterior
CATEGORY_INCREASE_ALERT_THRESHOLD = 40  # % de aumento numa categoria
LOW_BALANCE_ALERT_THRESHOLD = 500  # R$
LOW_BALANCE_MIN_DAYS_REMAINING = 5

# --- Orçamento diário (R$ por dia) ---
DAILY_BUDGET_LOW = 50
DAILY_BUDGET_CRITICAL = 20

# --- Score de saúde financeira (soma = 100) ---
HEALTH_SCORE_POINTS = {
    'BALANCE_POSITIVE': 25,
    'SAVINGS_RATE': 25,
    'EXPENSE_RATIO': 25,
    'RUNWAY': 25,
}

# Cor usada quando uma categoria não é encontrada
DEFAULT_CATEGORY_COLOR = '#64748b'
