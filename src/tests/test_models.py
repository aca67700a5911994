# tests/test_models.py
import unittest
from src.core.models import (
    TransactionType, Transaction,
    normalize_transaction_type, normalize_transaction, find_category, category_color,
)


class TestTransactionType(unittest.TestCase):
    def test_known_aliases(self):
        self.assertEqual(normalize_transaction_type('credit'), TransactionType.INCOME)
        self.assertEqual(normalize_transaction_type(' Income '), TransactionType.INCOME)
        self.assertEqual(normalize_transaction_type('debit'), TransactionType.EXPENSE)
        self.assertEqual(normalize_transaction_type('despesa'), TransactionType.EXPENSE)
        self.assertEqual(normalize_transaction_type('investment'), TransactionType.INVESTMENT)
        self.assertEqual(normalize_transaction_type(TransactionType.EXPENSE), TransactionType.EXPENSE)

    def test_unknown_types(self):
        self.assertIsNone(normalize_transaction_type('transfer'))
        self.assertIsNone(normalize_transaction_type(None))


class TestNormalizeTransaction(unittest.TestCase):
    def test_supabase_view_record(self):
        record = {
            'id': 'tx1',
            'transaction_date': '2025-11-05',
            'amount': '-120.50',
            'transaction_type_internal_name': 'expense',
            'category_name': 'Alimentação',
            'description': 'Mercado',
        }
        result = normalize_transaction(record)
        self.assertEqual(result, {
            'id': 'tx1',
            'date': '2025-11-05',
            'amount': -120.5,
            'type': 'expense',
            'description': 'Mercado',
            'category': 'Alimentação',
        })
        self.assertIn('transaction_date', record)

    def test_type_internal_name_and_unknown(self):
        self.assertEqual(normalize_transaction({'type_internal_name': 'credit', 'date': '2025-11-01'})['type'], 'income')
        self.assertIsNone(normalize_transaction({'type': 'transfer', 'date': '2025-11-01'})['type'])
        self.assertEqual(normalize_transaction({})['amount'], 0.0)

    def test_transaction_to_dict(self):
        tx = Transaction('1', '2025-11-01', 10.0, TransactionType.INVESTMENT)
        self.assertEqual(tx.to_dict()['type'], 'investment')


class TestCategoryLookup(unittest.TestCase):
    def setUp(self):
        self.categories = [
            {'id': 'saude', 'name': 'Saúde', 'color': '#ef4444'},
            {'id': 'lazer', 'name': 'Diversão', 'color': '#8b5cf6'},
        ]

    def test_find_by_name_then_id(self):
        self.assertEqual(find_category(self.categories, 'Saúde')['id'], 'saude')
        self.assertEqual(find_category(self.categories, 'Lazer')['name'], 'Diversão')
        self.assertIsNone(find_category(self.categories, 'Viagem'))
        self.assertIsNone(find_category(self.categories, None))

    def test_color_falls_back_to_sentinel(self):
        self.assertEqual(category_color(self.categories, 'Saúde'), '#ef4444')
        self.assertEqual(category_color(self.categories, 'Viagem'), '#64748b')


if __name__ == '__main__':
    unittest.main()
