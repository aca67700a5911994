# tests/test_charts.py
import io
import unittest

import matplotlib
matplotlib.use('Agg')

from src.core import charts

PNG_SIGNATURE = b'\x89PNG'


class TestCharts(unittest.TestCase):
    def test_monthly_evolution_chart(self):
        evolution = [
            {'month': '2025-10', 'income': 1000.0, 'expense': 400.0, 'investment': 100.0, 'balance': 500.0},
            {'month': '2025-11', 'income': 1200.0, 'expense': 900.0, 'investment': 0.0, 'balance': 300.0},
        ]
        buf = charts.generate_monthly_evolution_chart(evolution)
        self.assertIsInstance(buf, io.BytesIO)
        self.assertEqual(buf.read(4), PNG_SIGNATURE)

    def test_monthly_evolution_chart_without_data(self):
        evolution = [{'month': '2025-11', 'income': 0.0, 'expense': 0.0, 'investment': 0.0, 'balance': 0.0}]
        self.assertIsNone(charts.generate_monthly_evolution_chart(evolution))
        self.assertIsNone(charts.generate_monthly_evolution_chart([]))

    def test_category_chart(self):
        breakdown = [
            {'category': 'Moradia', 'amount': 300.0, 'color': '#0ea5e9'},
            {'category': 'Lazer', 'amount': 100.0, 'color': '#64748b'},
        ]
        buf = charts.generate_category_chart(breakdown, '2025-11')
        self.assertEqual(buf.read(4), PNG_SIGNATURE)
        self.assertIsNone(charts.generate_category_chart([], '2025-11'))

    def test_budget_rule_chart(self):
        budget = {
            'totalIncome': 1000,
            'percentages': {'essentials': 55.0, 'personal': 25.0, 'savings': 20.0},
            'ideal': {'essentials': 50, 'personal': 30, 'savings': 20},
        }
        buf = charts.generate_budget_rule_chart(budget)
        self.assertEqual(buf.read(4), PNG_SIGNATURE)

    def test_budget_rule_chart_without_income(self):
        self.assertIsNone(charts.generate_budget_rule_chart({'totalIncome': 0}))


if __name__ == '__main__':
    unittest.main()
