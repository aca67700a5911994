# tests/test_api.py
import unittest

from src.api import create_app
from src.core.repository import MockRepository, get_repository
from src.tests.sample_data import build_seed


class TestDashboardApi(unittest.TestCase):
    def setUp(self):
        self.app = create_app(MockRepository(build_seed()))
        self.client = self.app.test_client()

    def test_dashboard_for_month(self):
        response = self.client.get('/api/dashboard?month=2025-11')
        self.assertEqual(response.status_code, 200)
        data = response.get_json()
        self.assertEqual(data['month'], '2025-11')
        self.assertEqual(data['currentMonthData']['credits'], 1000)
        self.assertEqual(data['currentMonthData']['debits'], 300)
        self.assertEqual(data['currentMonthData']['investments'], 100)
        self.assertEqual(data['currentMonthData']['balance'], 600)
        self.assertEqual(data['previousMonthData']['expenses'], 50)
        self.assertEqual(data['expensesByCategory'][0]['category'], 'Moradia')
        self.assertEqual(data['expensesByCategory'][0]['color'], '#0ea5e9')
        self.assertEqual(data['runway']['totalAssets'], 4000)
        self.assertEqual(len(data['monthlyEvolution']), 6)

    def test_dashboard_defaults_to_current_month(self):
        response = self.client.get('/api/dashboard')
        self.assertEqual(response.status_code, 200)
        self.assertRegex(response.get_json()['month'], r'^\d{4}-\d{2}$')

    def test_invalid_month(self):
        response = self.client.get('/api/dashboard?month=2025-13')
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.get_json()['status'], 'error')

    def test_targets_and_assets(self):
        targets = self.client.get('/api/targets').get_json()
        self.assertEqual(targets[0]['percentage'], 25.0)
        self.assertEqual(targets[0]['monthsToGoal'], 9)
        assets = self.client.get('/api/assets').get_json()
        self.assertEqual(assets[0], {'type': 'CDB', 'value': 3000, 'percentage': 75.0})

    def test_dashboard_surfaces_savings_and_income(self):
        data = self.client.get('/api/dashboard?month=2025-11').get_json()
        self.assertEqual(data['savingsRate']['savings'], 700)
        self.assertEqual(data['savingsRate']['tier'], 'excellent')
        self.assertEqual(data['incomeComparison']['previous'], 0)
        self.assertEqual(data['dailyBudget']['savingsGoal'], 200)

    def test_webhook_disabled_without_bot(self):
        response = self.client.post('/webhook', json={})
        self.assertEqual(response.status_code, 404)


class TestWriteApi(unittest.TestCase):
    def setUp(self):
        self.app = create_app(MockRepository(build_seed()))
        self.client = self.app.test_client()

    def month_data(self):
        return self.client.get('/api/dashboard?month=2025-11').get_json()['currentMonthData']

    def test_create_transaction(self):
        response = self.client.post('/api/transactions', json={
            'type': 'despesa', 'amount': 'R$ 42,50', 'date': '2025-11-20',
            'description': 'Show', 'category': 'Lazer',
        })
        self.assertEqual(response.status_code, 201)
        self.assertEqual(self.month_data()['debits'], 342.5)

    def test_income_amount_is_stored_positive(self):
        self.client.post('/api/transactions', json={'type': 'income', 'amount': -200, 'date': '2025-11-15'})
        self.assertEqual(self.month_data()['credits'], 1200)

    def test_create_transaction_validation(self):
        self.assertEqual(self.client.post('/api/transactions', json={'type': 'transfer', 'amount': 10}).status_code, 400)
        self.assertEqual(self.client.post('/api/transactions', json={'type': 'expense'}).status_code, 400)
        response = self.client.post('/api/transactions', json={'type': 'expense', 'amount': 10, 'date': '20/11/2025'})
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.get_json()['status'], 'error')

    def test_create_target_and_update_progress(self):
        response = self.client.post('/api/targets', json={'title': 'Viagem', 'goal': 3000, 'monthlyAmount': 500})
        self.assertEqual(response.status_code, 201)
        targets = {t['title']: t for t in self.client.get('/api/targets').get_json()}
        self.assertEqual(targets['Viagem']['monthsToGoal'], 6)

        response = self.client.post('/api/targets/g1/progress', json={'progress': 6000})
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.get_json()['targetStatus'], 'completed')
        targets = {t['id']: t for t in self.client.get('/api/targets').get_json()}
        self.assertEqual(targets['g1']['status'], 'completed')

    def test_target_validation(self):
        self.assertEqual(self.client.post('/api/targets', json={'title': 'Sem meta'}).status_code, 400)
        self.assertEqual(self.client.post('/api/targets/nao-existe/progress', json={'progress': 1}).status_code, 404)
        self.assertEqual(self.client.post('/api/targets/g1/progress', json={'progress': -1}).status_code, 400)

    def test_create_asset(self):
        response = self.client.post('/api/assets', json={'name': 'CDB 2', 'asset_type_id': 'at-cdb', 'value': 1000})
        self.assertEqual(response.status_code, 201)
        assets = self.client.get('/api/assets').get_json()
        self.assertEqual(assets[0], {'type': 'CDB', 'value': 4000, 'percentage': 80.0})
        self.assertEqual(self.client.post('/api/assets', json={'name': 'Sem tipo', 'value': 10}).status_code, 400)

    def test_delete_record(self):
        self.assertEqual(self.client.delete('/api/transactions/t2').status_code, 200)
        self.assertEqual(self.month_data()['debits'], 0)
        self.assertEqual(self.client.delete('/api/transactions/t2').status_code, 404)
        self.assertEqual(self.client.delete('/api/categories/cat-lazer').status_code, 404)


class TestMockDataSource(unittest.TestCase):
    def test_dashboard_has_data_out_of_the_box(self):
        client = create_app(get_repository('mock')).test_client()
        data = client.get('/api/dashboard').get_json()
        # salários caem no dia 1, então o mês corrente sempre tem receita
        self.assertGreater(data['currentMonthData']['credits'], 0)
        self.assertEqual(len(data['monthlyEvolution']), 6)
        self.assertTrue(client.get('/api/assets').get_json())


if __name__ == '__main__':
    unittest.main()
