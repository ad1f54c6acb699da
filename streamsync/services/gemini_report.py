"""AI performance report via Google Gemini.

The full (unfiltered) session history is condensed into a JSON payload,
embedded in an analyst prompt and sent to Gemini.  Whatever goes wrong on the
way (missing key, network, quota) the caller gets a readable fallback string
instead of an exception.
"""
from __future__ import annotations

import json
import logging
import math
from datetime import date, datetime, timezone
from typing import TYPE_CHECKING, Iterable, Protocol, Sequence

from streamsync.services.records import Host, Session

if TYPE_CHECKING:
    from streamsync.config import Settings

logger = logging.getLogger(__name__)

NO_REPORT_MESSAGE = "无法生成分析报告，请稍后再试。"
FALLBACK_MESSAGE = "分析服务暂时不可用。请检查 API Key 设置或网络连接。"

REPORT_PROMPT = """\
Act as a Senior Data Analyst for an E-commerce Live Streaming agency.

I am providing you with the FULL historical dataset of our live streaming sessions.

Data: {data}

Please provide a comprehensive performance analysis report in Chinese (Markdown format).

Your analysis should cover:
1. **Long-term Performance Trends**: Analyze the data over the entire period. \
Identify growth trends, stagnation points, or volatility in revenue and duration. \
Compare recent months to previous months.
2. **Host Performance Matrix**: Compare hosts based on their historical consistency, \
total contribution, and recent trajectory. Who are the pillars of the team? \
Who is improving or declining?
3. **Account Analysis**: Provide specific insights on the performance of different \
accounts (e.g., 'anta_globalstore' vs 'keepmovingofficial').
4. **Actionable Strategy**: Based on the historical patterns (e.g., best days of week, \
optimal duration, best host-account pairing), provide 3 specific strategic \
recommendations for the upcoming month to maximize GMV.

Tone: Professional, analytical, and growth-oriented. Use bolding for key insights.
"""


class Summarizer(Protocol):
    def summarize(self, prompt: str) -> str:
        ...


class GeminiSummarizer:
    """Sends a prompt to Gemini ``generate_content`` and returns the text."""

    def __init__(self, settings: Settings) -> None:
        self._api_key = settings.gemini_api_key
        self._model = settings.gemini_model

    def summarize(self, prompt: str) -> str:
        if not self._api_key:
            raise RuntimeError("GEMINI_API_KEY is not configured.")

        from google import genai

        client = genai.Client(api_key=self._api_key)
        logger.info("Requesting Gemini report: model=%s, prompt=%d chars", self._model, len(prompt))
        response = client.models.generate_content(model=self._model, contents=prompt)
        return response.text or ""


def _round(value: float) -> int:
    # half-up, so 0.5 -> 1 regardless of parity
    return int(math.floor(value + 0.5))


def build_report_payload(
    sessions: Sequence[Session],
    hosts: Iterable[Host],
    analysis_date: date | None = None,
) -> dict:
    """Aggregate header plus one compact row per session."""
    analysis_date = analysis_date or datetime.now(timezone.utc).date()
    total_usd = sum(s.revenue_usd for s in sessions)
    return {
        "meta": {
            "totalSessions": len(sessions),
            "totalRevenueUSD": _round(total_usd),
            "hostNames": [h.name for h in hosts],
            "analysisDate": analysis_date.isoformat(),
        },
        "historicalData": [
            {
                "date": s.date,
                "host": s.host_name,
                "account": s.account_name,
                "duration": s.duration_minutes,
                "revenueUSD": _round(s.revenue_usd),
                "revenuePHP": _round(s.revenue),
            }
            for s in sessions
        ],
    }


def build_prompt(payload: dict) -> str:
    return REPORT_PROMPT.format(data=json.dumps(payload, ensure_ascii=False))


class ReportRequestor:
    def __init__(self, summarizer: Summarizer) -> None:
        self._summarizer = summarizer

    def generate_report(self, sessions: Sequence[Session], hosts: Iterable[Host]) -> str:
        """Return the model's report text, or a fixed message on any failure."""
        try:
            prompt = build_prompt(build_report_payload(sessions, hosts))
            text = self._summarizer.summarize(prompt)
        except Exception as exc:
            logger.error("Gemini report failed: %s", exc)
            return FALLBACK_MESSAGE

        if not text:
            logger.warning("Gemini returned an empty report")
            return NO_REPORT_MESSAGE
        logger.info("Gemini report complete: %d chars", len(text))
        return text
