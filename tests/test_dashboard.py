"""Integration tests for the dashboard facade (in-memory storage, mocked advisor)."""

import asyncio
import json
import pytest
from datetime import date
from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock

from fintrack.agents import InsightReport
from fintrack.config import AppSettings
from fintrack.dashboard import FinanceDashboard, create_dashboard
from fintrack.services.storage import InMemoryStorage, RecordStore


TODAY = date(2026, 10, 19)


@pytest.fixture
def storage():
    return InMemoryStorage()


@pytest.fixture
def dash(storage):
    store = RecordStore(storage)
    store.load()
    return FinanceDashboard(
        store=store,
        app_settings=AppSettings(),
        clock=lambda: TODAY,
    )


class TestMutationFlow:

    def test_add_transaction_persists(self, dash, storage):
        """Test that an accepted transaction is written to storage."""
        result = dash.add_transaction({"amount": "40", "description": "Groceries"})
        assert result.success
        assert dash.transactions == (result.record,)

        saved = json.loads(storage.get("fintrack_transactions"))
        assert saved[0]["description"] == "Groceries"
        assert saved[0]["date"] == "2026-10-19"

    def test_rejected_transaction_is_not_persisted(self, dash, storage):
        """Test that invalid input leaves state and storage untouched."""
        result = dash.add_transaction({"amount": "40", "description": ""})
        assert not result.success
        assert dash.transactions == ()
        assert storage.get("fintrack_transactions") is None

    def test_delete_transaction(self, dash):
        """Test deleting through the facade."""
        added = dash.add_transaction({"amount": "5", "description": "Tea"})
        dash.delete_transaction(added.record.id)
        assert dash.transactions == ()

    def test_bill_toggle_round_trip(self, dash, storage):
        """Test toggling a bill and reading it back from storage."""
        bill = dash.add_bill({"name": "Rent", "amount": "900"}).record
        dash.toggle_bill_paid(bill.id)

        assert dash.bills[0].is_paid is True
        saved = json.loads(storage.get("fintrack_bills"))
        assert saved[0]["isPaid"] is True

    def test_reload_from_same_storage(self, dash, storage):
        """Test that a new session sees the previous session's data."""
        dash.add_transaction({"amount": "100", "description": "Pay", "type": "income", "category": "Salary"})
        dash.add_budget({"category": "Food", "limit": "200"})
        dash.add_investment({"assetName": "Index fund", "quantity": "2", "purchasePrice": "10", "currentPrice": "12"})

        store = RecordStore(storage)
        store.load()
        reopened = FinanceDashboard(store=store, app_settings=AppSettings(), clock=lambda: TODAY)
        assert reopened.transactions == dash.transactions
        assert reopened.budgets == dash.budgets
        assert reopened.investments == dash.investments


class TestDerivedValues:

    def test_totals_follow_mutations(self, dash):
        """Test income 100 / expense 40 through the facade."""
        dash.add_transaction({"amount": "100", "description": "Pay", "type": "income"})
        dash.add_transaction({"amount": "40", "description": "Food"})
        assert dash.totals.balance == Decimal("60")

    def test_derived_values_are_memoized(self, dash):
        """Test unchanged collections reuse the previous result."""
        dash.add_transaction({"amount": "10", "description": "a"})
        first = dash.totals
        assert dash.totals is first

        dash.add_transaction({"amount": "20", "description": "b"})
        assert dash.totals is not first

    def test_rejected_mutation_keeps_memo(self, dash):
        """Test that a rejected mutation does not invalidate derived values."""
        dash.add_transaction({"amount": "10", "description": "a"})
        first = dash.totals
        dash.add_transaction({"amount": "oops", "description": "b"})
        assert dash.totals is first

    def test_returned_lists_are_copies(self, dash):
        """Test that editing a derived list does not change the next read."""
        dash.add_transaction({"amount": "10", "description": "a"})
        dash.filtered_transactions("").clear()
        assert len(dash.filtered_transactions("")) == 1

    def test_clock_drives_daily_flow(self, dash):
        """Test the chart window ends at the injected date."""
        dash.add_transaction({"amount": "15", "description": "Lunch"})
        flow = dash.daily_flow
        assert len(flow) == 7
        assert flow[-1].day == TODAY
        assert flow[-1].expense == Decimal("15")

    def test_budget_and_portfolio(self, dash):
        """Test budget progress and portfolio stats through the facade."""
        dash.add_budget({"category": "Food", "limit": "100"})
        dash.add_transaction({"amount": "40", "description": "Groceries", "category": "Food"})
        dash.add_investment({"quantity": "2", "purchasePrice": "10", "currentPrice": "15"})

        assert dash.budget_progress[0].percentage == Decimal("40")
        assert dash.portfolio_stats.profit_loss == Decimal("10")
        assert dash.asset_performances[0].performance == Decimal("50")

        holding = dash.investments[0]
        assert dash.asset_performance(holding).performance == Decimal("50")

    def test_recent_transactions_are_capped(self, dash):
        """Test the overview list uses the configured limit."""
        for i in range(7):
            dash.add_transaction({"amount": "1", "description": f"item {i}"})
        assert len(dash.recent_transactions()) == 5
        assert len(dash.filtered_transactions("item")) == 7


class TestInsights:

    def test_generate_insights_uses_snapshot(self, storage):
        """Test the advisor receives the current transaction tuple."""
        agent = MagicMock()
        agent.generate_insights = AsyncMock(
            return_value=InsightReport(text="Tips", generated_by_model=True, transaction_count=1)
        )
        dash = FinanceDashboard(
            store=RecordStore(storage),
            insight_agent=agent,
            app_settings=AppSettings(),
            clock=lambda: TODAY,
        )
        dash.add_transaction({"amount": "10", "description": "a"})
        snapshot = dash.transactions

        report = asyncio.run(dash.generate_insights())

        assert report.text == "Tips"
        agent.generate_insights.assert_awaited_once_with(snapshot)


class TestCreateDashboard:

    def test_in_memory_dashboard(self):
        """Test the factory with in-memory storage."""
        dashboard = create_dashboard(in_memory=True)
        assert dashboard.transactions == ()
        result = dashboard.add_budget({"category": "Food", "limit": "50"})
        assert result.success
        assert dashboard.budgets == (result.record,)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
