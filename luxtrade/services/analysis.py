"""AI journal analysis via the Gemini REST API.

Sends the most recent trades to Gemini and asks for a JSON coaching
report.  Never raises: an empty journal yields a fixed empty-state
report and any failure yields a fixed fallback report.
"""

import json
import logging

import httpx

from luxtrade.config import Config
from luxtrade.journal.models import AnalysisResult, Trade

logger = logging.getLogger("luxtrade")

MAX_TRADES_IN_PROMPT = 50
_TIMEOUT = 60.0

EMPTY_JOURNAL = AnalysisResult(
    summary="Your journal is empty.",
    strengths=["Ready to start"],
    weaknesses=["No data yet"],
    recommendation="Log your first trade to get AI-powered insights.",
)

FALLBACK = AnalysisResult(
    summary="Unable to generate analysis at this time.",
    strengths=[],
    weaknesses=[],
    recommendation="Please try again later.",
)

_RESPONSE_SCHEMA = {
    "type": "OBJECT",
    "properties": {
        "summary": {"type": "STRING"},
        "strengths": {"type": "ARRAY", "items": {"type": "STRING"}},
        "weaknesses": {"type": "ARRAY", "items": {"type": "STRING"}},
        "recommendation": {"type": "STRING"},
    },
    "required": ["summary", "strengths", "weaknesses", "recommendation"],
}


def build_prompt(trades: list[Trade], balance: float) -> str:
    """Render the mentor prompt for the newest ``MAX_TRADES_IN_PROMPT`` trades."""
    lines = [
        f"Date: {t.date}, Pair: {t.pair}, Type: {t.type}, PnL: {t.pnl}, "
        f"Result: {t.status}, Setup: {t.setup or 'N/A'}"
        for t in trades[:MAX_TRADES_IN_PROMPT]
    ]
    return (
        "You are a professional forex trading mentor. Analyze the following "
        f"recent trades for a student with a ${balance:g} account.\n\n"
        "Trades:\n"
        + "\n".join(lines)
        + "\n\nProvide a JSON response with performance summary, strengths, "
        "risks, and a recommendation."
    )


def _parse_response(data: dict) -> AnalysisResult:
    """Extract the JSON report from a ``generateContent`` response body.

    Raises:
        ValueError: If the response carries no text or the text is not a
            valid report.
    """
    try:
        text = data["candidates"][0]["content"]["parts"][0]["text"]
    except (KeyError, IndexError, TypeError):
        text = None
    if not text:
        raise ValueError("No response from AI")

    report = json.loads(text)
    return AnalysisResult(
        summary=str(report["summary"]),
        strengths=[str(s) for s in report.get("strengths", [])],
        weaknesses=[str(w) for w in report.get("weaknesses", [])],
        recommendation=str(report.get("recommendation", "")),
    )


async def analyze_journal(
    trades: list[Trade],
    balance: float,
    config: Config,
) -> AnalysisResult:
    """Ask Gemini to review *trades* for an account of *balance* dollars."""
    if not trades:
        return EMPTY_JOURNAL

    if not config.gemini_api_key:
        logger.warning("GEMINI_API_KEY not set — skipping journal analysis.")
        return FALLBACK

    body = {
        "contents": [{"parts": [{"text": build_prompt(trades, balance)}]}],
        "generationConfig": {
            "responseMimeType": "application/json",
            "responseSchema": _RESPONSE_SCHEMA,
        },
    }
    headers = {
        "x-goog-api-key": config.gemini_api_key,
        "Content-Type": "application/json",
    }

    try:
        async with httpx.AsyncClient() as client:
            resp = await client.post(
                config.gemini_url,
                headers=headers,
                json=body,
                timeout=_TIMEOUT,
            )
        resp.raise_for_status()
        result = _parse_response(resp.json())
    except Exception:
        logger.exception("Gemini analysis failed")
        return FALLBACK

    logger.info("Journal analysis generated for %d trade(s).", len(trades))
    return result
