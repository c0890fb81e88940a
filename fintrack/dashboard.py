"""
Dashboard Facade for FinTrack

This module ties the components together:

user action → mutation handler → record store (persist) → derivations

DESIGN DECISION: the facade is the only thing that writes to the store.
Handlers stay pure, the engine stays pure, and the store is injected so
tests can run against in-memory storage.

Derived values are memoized on the identity of their input collections:
a collection is replaced by a new tuple on every change, so an unchanged
tuple means an unchanged result.
"""

import datetime
from typing import Callable, Optional
from uuid import UUID

from fintrack.activity import ActivityLogger, configure_logging
from fintrack.agents import InsightAgent, InsightReport
from fintrack.config import AppSettings, Settings, get_settings
from fintrack.derivations import engine
from fintrack.derivations.memo import IdentityMemo
from fintrack.models.derived import (
    AssetPerformance,
    BudgetProgress,
    CategoryTotal,
    DailyFlow,
    PortfolioStats,
    TransactionTotals,
)
from fintrack.models.records import Bill, Budget, Investment, Transaction
from fintrack.models.results import MutationResult
from fintrack.mutations import handlers
from fintrack.services.storage import (
    CollectionName,
    InMemoryStorage,
    JsonFileStorage,
    RecordStore,
)
from fintrack.validation import RecordValidator
from fintrack.validation.validator import DraftInput


class FinanceDashboard:
    """
    Everything a presentation layer needs, behind one object.

    Mutations return the handler's MutationResult so callers can tell
    "rejected because of invalid input" from "applied".
    """

    def __init__(
        self,
        store: RecordStore,
        insight_agent: Optional[InsightAgent] = None,
        activity_logger: Optional[ActivityLogger] = None,
        validator: Optional[RecordValidator] = None,
        app_settings: Optional[AppSettings] = None,
        clock: Callable[[], datetime.date] = datetime.date.today,
    ):
        self._store = store
        self._insight_agent = insight_agent
        self._activity = activity_logger or ActivityLogger()
        self._validator = validator or RecordValidator()
        self._app_settings = app_settings or get_settings().app
        self._clock = clock

        self._totals = IdentityMemo(engine.compute_totals)
        self._daily_flow = IdentityMemo(engine.compute_daily_flow)
        self._breakdown = IdentityMemo(engine.compute_category_breakdown)
        self._budget_progress = IdentityMemo(engine.compute_budget_progress)
        self._portfolio = IdentityMemo(engine.compute_portfolio_stats)
        self._performances = IdentityMemo(engine.compute_asset_performances)
        self._filtered = IdentityMemo(engine.filter_transactions)

    @property
    def store(self) -> RecordStore:
        return self._store

    @property
    def today(self) -> datetime.date:
        return self._clock()

    # -------------------------------------------------------------------------
    # Collections
    # -------------------------------------------------------------------------

    @property
    def transactions(self) -> tuple[Transaction, ...]:
        return self._store.transactions

    @property
    def bills(self) -> tuple[Bill, ...]:
        return self._store.bills

    @property
    def budgets(self) -> tuple[Budget, ...]:
        return self._store.budgets

    @property
    def investments(self) -> tuple[Investment, ...]:
        return self._store.investments

    # -------------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------------

    def _apply(
        self,
        name: CollectionName,
        operation: str,
        result: MutationResult,
        on_change: Callable,
    ) -> MutationResult:
        """Persist a successful change and log the outcome."""
        if not result.success:
            self._activity.log_mutation_rejected(operation, result.issues)
            return result

        if result.changed:
            self._store.replace(name, result.collection)
            on_change(result.record)
        return result

    def add_transaction(self, draft: DraftInput) -> MutationResult[Transaction]:
        result = handlers.add_transaction(
            self.transactions, draft, today=self.today, validator=self._validator
        )
        return self._apply(
            CollectionName.TRANSACTIONS,
            "add_transaction",
            result,
            self._activity.log_transaction_added,
        )

    def delete_transaction(self, transaction_id: UUID) -> MutationResult[Transaction]:
        result = handlers.delete_transaction(self.transactions, transaction_id)
        return self._apply(
            CollectionName.TRANSACTIONS,
            "delete_transaction",
            result,
            self._activity.log_transaction_deleted,
        )

    def add_bill(self, draft: DraftInput) -> MutationResult[Bill]:
        result = handlers.add_bill(
            self.bills, draft, today=self.today, validator=self._validator
        )
        return self._apply(
            CollectionName.BILLS,
            "add_bill",
            result,
            self._activity.log_bill_added,
        )

    def toggle_bill_paid(self, bill_id: UUID) -> MutationResult[Bill]:
        result = handlers.toggle_bill_paid(self.bills, bill_id)
        return self._apply(
            CollectionName.BILLS,
            "toggle_bill_paid",
            result,
            self._activity.log_bill_paid_toggled,
        )

    def add_budget(self, draft: DraftInput) -> MutationResult[Budget]:
        result = handlers.add_budget(self.budgets, draft, validator=self._validator)
        return self._apply(
            CollectionName.BUDGETS,
            "add_budget",
            result,
            self._activity.log_budget_added,
        )

    def add_investment(self, draft: DraftInput) -> MutationResult[Investment]:
        result = handlers.add_investment(
            self.investments, draft, today=self.today, validator=self._validator
        )
        return self._apply(
            CollectionName.INVESTMENTS,
            "add_investment",
            result,
            self._activity.log_investment_added,
        )

    # -------------------------------------------------------------------------
    # Derived values
    # -------------------------------------------------------------------------

    @property
    def totals(self) -> TransactionTotals:
        return self._totals(self.transactions)

    @property
    def daily_flow(self) -> list[DailyFlow]:
        return self._daily_flow(self.transactions, self.today, self._app_settings.chart_days)

    @property
    def category_breakdown(self) -> list[CategoryTotal]:
        return self._breakdown(self.transactions)

    @property
    def budget_progress(self) -> list[BudgetProgress]:
        return self._budget_progress(self.budgets, self.transactions)

    @property
    def portfolio_stats(self) -> PortfolioStats:
        return self._portfolio(self.investments)

    @property
    def asset_performances(self) -> list[AssetPerformance]:
        return self._performances(self.investments)

    def asset_performance(self, investment: Investment) -> Optional[AssetPerformance]:
        """Performance entry for one holding, or None if it is not stored."""
        return next(
            (p for p in self.asset_performances if p.investment.id == investment.id),
            None,
        )

    def filtered_transactions(self, query: str = "") -> list[Transaction]:
        return self._filtered(self.transactions, query)

    def recent_transactions(self, query: str = "") -> list[Transaction]:
        return self.filtered_transactions(query)[: self._app_settings.recent_transaction_limit]

    # -------------------------------------------------------------------------
    # Insights
    # -------------------------------------------------------------------------

    async def generate_insights(self) -> InsightReport:
        """
        Ask the advisor about the current transactions.

        The transaction tuple is captured before awaiting, so mutations
        made while the request is in flight neither affect it nor are
        affected by it.
        """
        if self._insight_agent is None:
            self._insight_agent = InsightAgent()

        snapshot = self.transactions
        self._activity.log_insight_requested(len(snapshot))
        report = await self._insight_agent.generate_insights(snapshot)
        self._activity.log_insight_completed(report.generated_by_model, len(report.text))
        return report


def create_dashboard(
    settings: Optional[Settings] = None,
    in_memory: bool = False,
    insight_agent: Optional[InsightAgent] = None,
) -> FinanceDashboard:
    """
    Factory function to build a ready-to-use dashboard.

    Args:
        settings: Settings to use; loaded from the environment if None
        in_memory: Keep data in memory only (nothing touches disk)
        insight_agent: Agent to use instead of one built from settings

    Returns:
        A dashboard whose store has already been loaded
    """
    settings = settings or get_settings()
    app_settings = settings.app
    configure_logging(app_settings.effective_log_level)

    storage_settings = settings.storage
    if in_memory:
        storage = InMemoryStorage()
    else:
        storage = JsonFileStorage(storage_settings.data_dir)

    store = RecordStore(storage, key_prefix=storage_settings.key_prefix)
    store.load()

    return FinanceDashboard(
        store=store,
        insight_agent=insight_agent,
        app_settings=app_settings,
    )
