# tests/test_repository.py
import unittest
from unittest.mock import MagicMock, patch

from src.core.repository import MockRepository, SupabaseRepository, RecordNotFoundError, get_repository
from src.tests.sample_data import build_seed


class TestMockRepository(unittest.TestCase):
    def setUp(self):
        self.repo = MockRepository(build_seed())

    def test_crud(self):
        created = self.repo.create('targets', {'title': 'Viagem', 'goal': 5000, 'progress': 0})
        self.assertIn('id', created)
        self.assertIn('created_at', created)
        self.assertEqual(self.repo.find_by_id('targets', created['id'])['title'], 'Viagem')

        updated = self.repo.update('targets', created['id'], {'progress': 5000})
        self.assertEqual(updated['progress'], 5000)
        self.assertEqual(updated['title'], 'Viagem')

        self.assertTrue(self.repo.delete('targets', created['id']))
        self.assertIsNone(self.repo.find_by_id('targets', created['id']))

    def test_missing_records_raise(self):
        with self.assertRaises(RecordNotFoundError):
            self.repo.update('assets', 'nao-existe', {'value': 1})
        with self.assertRaises(RecordNotFoundError):
            self.repo.delete('assets', 'nao-existe')

    def test_returned_records_are_copies(self):
        categories = self.repo.find_all('categories')
        categories[0]['name'] = 'Alterado'
        self.assertEqual(self.repo.find_by_id('categories', 'cat-moradia')['name'], 'Moradia')

    def test_transactions_are_normalized_and_enriched(self):
        transactions = self.repo.get_transactions()
        self.assertEqual([t['id'] for t in transactions], ['t5', 't3', 't2', 't1', 't4'])
        by_id = {t['id']: t for t in transactions}
        self.assertEqual(by_id['t1']['type'], 'income')
        self.assertEqual(by_id['t1']['category'], 'Salário')
        self.assertEqual(by_id['t3']['type'], 'investment')
        self.assertEqual(by_id['t4']['type'], 'expense')
        self.assertIsNone(by_id['t5']['type'])

    def test_expenses(self):
        expenses = self.repo.get_expenses()
        self.assertEqual([(e['category'], e['amount']) for e in expenses], [('Moradia', 300), ('Lazer', 50)])
        self.assertEqual(expenses[0]['title'], 'Aluguel')

    def test_assets_and_targets(self):
        self.assertEqual([a['type'] for a in self.repo.get_assets()], ['CDB', 'Ações'])
        self.assertEqual([t['status'] for t in self.repo.get_targets()], ['in_progress', 'completed'])
        self.assertEqual([c['name'] for c in self.repo.get_categories()], ['Lazer', 'Moradia', 'Salário'])

    def test_add_transaction_links_known_category(self):
        self.assertTrue(self.repo.add_transaction(-42, 'expense', '2025-11-20', 'Show', category='Lazer'))
        self.repo.add_transaction(-10, 'expense', '2025-11-21', 'Pão', category='Padaria')
        expenses = {e['description']: e for e in self.repo.get_expenses()}
        self.assertEqual(expenses['Show']['category'], 'Lazer')
        self.assertEqual(expenses['Pão']['category'], 'Padaria')

    def test_add_asset_and_target(self):
        self.assertTrue(self.repo.add_asset('Tesouro IPCA', 'at-cdb', 500, '2025-11-20', yield_rate=0.008))
        self.assertTrue(self.repo.add_target('Viagem', 3000, '2026-01-31', monthly_amount=500))
        assets = {a['name']: a for a in self.repo.get_assets()}
        self.assertEqual(assets['Tesouro IPCA']['type'], 'CDB')
        self.assertEqual(assets['Tesouro IPCA']['yield'], 0.008)
        targets = {t['title']: t for t in self.repo.get_targets()}
        self.assertEqual(targets['Viagem']['status'], 'in_progress')
        self.assertEqual(targets['Viagem']['monthlyAmount'], 500)

    def test_update_target_progress(self):
        self.assertTrue(self.repo.update_target_progress('g1', 6000, 6000))
        self.assertEqual(self.repo.find_by_id('targets', 'g1')['progress'], 6000)
        self.assertEqual(self.repo.get_targets()[0]['status'], 'completed')
        with self.assertRaises(RecordNotFoundError):
            self.repo.update_target_progress('nao-existe', 1, 10)

    def test_delete_record(self):
        self.assertTrue(self.repo.delete_record('transactions', 't2'))
        self.assertNotIn('t2', [t['id'] for t in self.repo.get_transactions()])
        with self.assertRaises(RecordNotFoundError):
            self.repo.delete_record('transactions', 't2')


class TestSupabaseRepository(unittest.TestCase):
    def setUp(self):
        self.client = MagicMock()
        self.repo = SupabaseRepository(self.client)

    @patch('src.core.repository.db')
    def test_delegates_to_db_functions(self, mock_db):
        mock_db.get_transactions.return_value = [{'id': 't1'}]
        self.assertEqual(self.repo.get_transactions(), [{'id': 't1'}])
        mock_db.get_transactions.assert_called_once_with(self.client)
        self.repo.get_targets()
        mock_db.get_targets.assert_called_once_with(self.client)

    @patch('src.core.repository.db')
    def test_add_transaction_resolves_category_id(self, mock_db):
        mock_db.get_categories.return_value = [{'id': 'cat-lazer', 'name': 'Lazer'}]
        mock_db.add_transaction.return_value = True
        self.assertTrue(self.repo.add_transaction(-42, 'expense', '2025-11-20', 'Show', category='Lazer'))
        mock_db.add_transaction.assert_called_once_with(
            self.client, -42, 'expense', '2025-11-20', 'Show', 'cat-lazer'
        )

    @patch('src.core.repository.db')
    def test_add_transaction_with_unknown_category(self, mock_db):
        mock_db.get_categories.return_value = []
        with self.assertLogs('src.core.repository', level='WARNING'):
            self.repo.add_transaction(-10, 'expense', '2025-11-21', 'Pão', category='Padaria')
        self.assertIsNone(mock_db.add_transaction.call_args[0][5])

    @patch('src.core.repository.db')
    def test_writers_delegate_to_db_functions(self, mock_db):
        self.repo.add_asset('CDB', 'at-cdb', 1000, '2025-11-01', yield_rate=0.01)
        mock_db.add_asset.assert_called_once_with(self.client, 'CDB', 'at-cdb', 1000, '2025-11-01', 0.01)
        self.repo.add_target('Viagem', 3000, '2026-01-31', monthly_amount=500)
        mock_db.add_target.assert_called_once_with(self.client, 'Viagem', 3000, '2026-01-31', 0.0, 500)
        self.repo.update_target_progress('g1', 100, 3000)
        mock_db.update_target_progress.assert_called_once_with(self.client, 'g1', 100, 3000)
        self.repo.delete_record('assets', 'a1')
        mock_db.delete_record.assert_called_once_with(self.client, 'assets', 'a1')


class TestGetRepository(unittest.TestCase):
    def test_mock_source(self):
        self.assertIsInstance(get_repository('mock'), MockRepository)

    def test_mock_source_comes_with_demo_data(self):
        repo = get_repository('mock')
        self.assertTrue(repo.get_transactions())
        self.assertTrue(repo.get_assets())
        self.assertTrue(repo.get_targets())
        self.assertIn('Moradia', [e['category'] for e in repo.get_expenses()])

    def test_supabase_source_uses_given_client(self):
        client = MagicMock()
        repo = get_repository('supabase', supabase_client=client)
        self.assertIs(repo.client, client)

    def test_unknown_source(self):
        with self.assertRaises(ValueError):
            get_repository('planilha')


if __name__ == '__main__':
    unittest.main()
