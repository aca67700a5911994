# tests/sample_data.py
# Dados de exemplo para o repositório em memória usados nos testes.


def build_seed():
    return {
        'categories': [
            {'id': 'cat-moradia', 'name': 'Moradia', 'color': '#0ea5e9', 'icon': 'Home'},
            {'id': 'cat-lazer', 'name': 'Lazer', 'color': '#8b5cf6', 'icon': 'Music'},
            {'id': 'cat-salario', 'name': 'Salário', 'color': '#10b981', 'icon': 'Wallet'},
        ],
        'asset_types': [
            {'id': 'at-cdb', 'name': 'CDB'},
            {'id': 'at-acoes', 'name': 'Ações'},
        ],
        'transactions': [
            {'id': 't1', 'date': '2025-11-01', 'amount': 1000, 'transaction_type_id': 1,
             'category_id': 'cat-salario', 'description': 'Salário'},
            {'id': 't2', 'date': '2025-11-03', 'amount': -300, 'transaction_type_id': 2,
             'category_id': 'cat-moradia', 'description': 'Aluguel'},
            {'id': 't3', 'date': '2025-11-04', 'amount': -100, 'transaction_type_id': 3,
             'description': 'Aporte CDB'},
            {'id': 't4', 'date': '2025-10-10', 'amount': -50, 'type': 'debit',
             'category': 'Lazer', 'description': 'Cinema'},
            {'id': 't5', 'date': '2025-11-12', 'amount': 80, 'type': 'transfer',
             'description': 'Transferência entre contas'},
        ],
        'assets': [
            {'id': 'a1', 'name': 'CDB Banco X', 'asset_type_id': 'at-cdb', 'value': 3000, 'yield': 0.01},
            {'id': 'a2', 'name': 'PETR4', 'asset_type_id': 'at-acoes', 'value': 1000, 'yield': 0.0},
        ],
        'targets': [
            {'id': 'g1', 'title': 'Reserva de emergência', 'goal': 6000, 'progress': 1500, 'monthlyAmount': 500,
             'date': '2026-06-30'},
            {'id': 'g2', 'title': 'Notebook', 'goal': 4000, 'progress': 4000, 'monthlyAmount': 0},
        ],
    }
