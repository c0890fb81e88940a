"""AI Agents package."""

from fintrack.agents.insight_agent import (
    EMPTY_HISTORY_MESSAGE,
    ERROR_MESSAGE,
    NO_TEXT_MESSAGE,
    InsightAgent,
    InsightReport,
    InsightUnavailableError,
)

__all__ = [
    "EMPTY_HISTORY_MESSAGE",
    "ERROR_MESSAGE",
    "NO_TEXT_MESSAGE",
    "InsightAgent",
    "InsightReport",
    "InsightUnavailableError",
]
