"""
Insight Agent

Asks Gemini for a short, Markdown-formatted set of tips based on the
user's recent transactions.

BOUNDARIES:
- The agent only READS a snapshot of transactions it is handed
- It never touches the record store
- It never raises: every failure (no API key, network error, blocked or
  empty response) becomes a fixed fallback text

Only a reduced view of each transaction leaves the process:
type, amount, category and date. Descriptions are never sent.
"""

import json
from typing import Any, Optional, Sequence

import google.generativeai as genai
import structlog
from pydantic import BaseModel, Field
from tenacity import AsyncRetrying, stop_after_attempt, wait_exponential

from fintrack.config import GeminiSettings, get_settings
from fintrack.models.records import Transaction


logger = structlog.get_logger("fintrack.insights")


EMPTY_HISTORY_MESSAGE = "Start adding transactions to get AI-powered financial insights!"
NO_TEXT_MESSAGE = "Unable to generate insights at this time."
ERROR_MESSAGE = "Error connecting to AI advisor. Please try again later."


class InsightUnavailableError(Exception):
    """The advisor cannot be reached (e.g. no API key configured)."""
    pass


class InsightReport(BaseModel):
    """What the advisor said, and whether a model actually said it."""

    text: str = Field(
        ...,
        description="Markdown text to show the user"
    )
    generated_by_model: bool = Field(
        ...,
        description="False when the text is one of the fixed fallbacks"
    )
    transaction_count: int = Field(
        default=0,
        ge=0,
        description="How many transactions were summarized"
    )


class InsightAgent:
    """
    Financial advisor backed by Gemini.

    RESPONSIBILITIES:
    - Reduce recent transactions to a compact summary
    - Ask the model for three actionable insights
    - Retry transient failures, then fall back to fixed text
    """

    def __init__(
        self,
        settings: Optional[GeminiSettings] = None,
        model: Optional[Any] = None,
        transaction_limit: Optional[int] = None,
        wait=None,
    ):
        """
        Args:
            settings: Gemini settings; loaded from the environment if None
            model: Pre-built model object exposing ``generate_content_async``.
                   Built from settings when None.
            transaction_limit: How many recent transactions to summarize
            wait: tenacity wait strategy between attempts
        """
        self._settings = settings or get_settings().gemini
        self._limit = transaction_limit or get_settings().app.insight_transaction_limit
        self._wait = wait or wait_exponential(multiplier=1, min=2, max=10)
        self._model = model

    def _get_model(self):
        """Configure Google Generative AI on first use."""
        if self._model is None:
            if not self._settings.api_key:
                raise InsightUnavailableError("GEMINI_API_KEY is not configured")
            genai.configure(api_key=self._settings.api_key)
            self._model = genai.GenerativeModel(
                model_name=self._settings.model_name,
                generation_config={
                    "temperature": self._settings.temperature,
                    "max_output_tokens": self._settings.max_tokens,
                }
            )
        return self._model

    def summarize(self, transactions: Sequence[Transaction]) -> list[dict]:
        """
        Reduce the most recent transactions to the fields the advisor sees.

        Transactions are stored newest first, so the most recent ones are
        at the front of the collection.
        """
        return [
            {
                "type": t.type.value,
                "amount": float(t.amount),
                "category": t.category,
                "date": t.date.isoformat(),
            }
            for t in list(transactions)[: self._limit]
        ]

    def build_prompt(self, summary: list[dict]) -> str:
        return f"""As a professional financial advisor, analyze these recent transactions and provide 3 concise, actionable insights or tips to improve financial health.
Format the response in Markdown.

Transactions:
{json.dumps(summary, indent=2)}"""

    async def _generate(self, prompt: str) -> str:
        model = self._get_model()

        response = None
        async for attempt in AsyncRetrying(
            stop=stop_after_attempt(self._settings.max_attempts),
            wait=self._wait,
            reraise=True,
        ):
            with attempt:
                response = await model.generate_content_async(prompt)

        # .text raises ValueError when the response was blocked
        try:
            return (response.text or "").strip()
        except ValueError as e:
            logger.warning("insight_response_without_text", error=str(e))
            return ""

    async def generate_insights(
        self,
        transactions: Sequence[Transaction],
    ) -> InsightReport:
        """
        Produce advice for the given transactions.

        Never raises; on any failure the report carries a fallback text.
        """
        if not transactions:
            return InsightReport(text=EMPTY_HISTORY_MESSAGE, generated_by_model=False)

        summary = self.summarize(transactions)
        prompt = self.build_prompt(summary)

        try:
            text = await self._generate(prompt)
        except Exception as e:
            logger.error(
                "insight_request_failed",
                error=str(e),
                error_type=type(e).__name__,
            )
            return InsightReport(
                text=ERROR_MESSAGE,
                generated_by_model=False,
                transaction_count=len(summary),
            )

        if not text:
            return InsightReport(
                text=NO_TEXT_MESSAGE,
                generated_by_model=False,
                transaction_count=len(summary),
            )

        return InsightReport(
            text=text,
            generated_by_model=True,
            transaction_count=len(summary),
        )
