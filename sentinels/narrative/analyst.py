from __future__ import annotations

import json
import logging
from typing import Any, Dict, List, Optional, Sequence

import anthropic

from sentinels.data.models import AssetTelemetry, MarketAnalysis, MarketSentiment, TradeSetup

logger = logging.getLogger("sentinels")

OUTLOOKS = ("Bullish", "Bearish", "Neutral")
DIRECTIONS = ("LONG", "SHORT")
TOP_MOVERS = 8
MAX_TOKENS = 2048

MISSING_KEY_FALLBACK = MarketAnalysis(
    summary=(
        "API Key missing. Provide a valid API key to unlock AI insights. "
        "Displaying simulation mode analysis."
    ),
    key_risks=["Unknown Volatility", "Data Gaps"],
    outlook="Neutral",
    top_trade_setups=[],
    degraded=True,
)

UNAVAILABLE_FALLBACK = MarketAnalysis(
    summary="AI Analysis currently unavailable. Market shows mixed signals based on technical indicators.",
    key_risks=["High Volatility", "Liquidation Cascades"],
    outlook="Neutral",
    top_trade_setups=[],
    degraded=True,
)

SYSTEM_PROMPT = """You are an expert crypto trader using Smart Money Concepts. Analyze the provided market data.

1. Provide a concise market summary.
2. Identify 3 key risks.
3. Give an overall outlook: Bullish, Bearish or Neutral.
4. Suggest 2 high-probability trade setups (1 LONG, 1 SHORT if possible) based on the momentum and funding rates provided. Include entry, target and stop loss.

Return ONLY valid JSON with keys "summary" (string), "keyRisks" (array of strings), "outlook" (string),
"topTradeSetups" (array of objects with "coin", "direction", "entry", "target", "stopLoss", "rationale").
Do not wrap the JSON in markdown code blocks."""


class AnalysisUnavailable(Exception):
    pass


def build_context(coins: Sequence[AssetTelemetry], sentiment: MarketSentiment) -> str:
    movers = sorted(coins, key=lambda c: abs(c.price_change_24h), reverse=True)[:TOP_MOVERS]
    lines = [
        f"{c.symbol}: ${c.price:.2f} (24h: {c.price_change_24h:.2f}%, Funding: {c.funding_rate:.4f}%)"
        for c in movers
    ]
    return (
        "Market Context:\n"
        f"Fear & Greed: {sentiment.fear_greed_index}\n"
        f"BTC Dominance: {sentiment.btc_dominance:.1f}%\n\n"
        "Top Assets Data:\n" + "\n".join(lines)
    )


def _strip_fences(raw: str) -> str:
    raw = raw.strip()
    if raw.startswith("```"):
        raw = raw.split("\n", 1)[1] if "\n" in raw else ""
        if raw.endswith("```"):
            raw = raw[:-3].strip()
    return raw


def _parse_setup(item: Any) -> Optional[TradeSetup]:
    if not isinstance(item, dict):
        return None
    coin = str(item.get("coin") or "").strip().upper()
    direction = str(item.get("direction") or "").strip().upper()
    if not coin or direction not in DIRECTIONS:
        return None
    return TradeSetup(
        coin=coin,
        direction=direction,
        entry=str(item.get("entry", "")),
        target=str(item.get("target", "")),
        stop_loss=str(item.get("stopLoss", "")),
        rationale=str(item.get("rationale", "")),
    )


def parse_analysis(raw: str) -> MarketAnalysis:
    try:
        data = json.loads(_strip_fences(raw))
    except json.JSONDecodeError as e:
        raise AnalysisUnavailable(f"unparsable response: {e}") from e
    if not isinstance(data, dict):
        raise AnalysisUnavailable("response is not a JSON object")

    summary = data.get("summary")
    if not isinstance(summary, str) or not summary.strip():
        raise AnalysisUnavailable("missing summary")

    risks_raw = data.get("keyRisks")
    risks: List[str] = [str(r) for r in risks_raw] if isinstance(risks_raw, list) else []

    outlook = str(data.get("outlook") or "").strip().capitalize()
    if outlook not in OUTLOOKS:
        outlook = "Neutral"

    setups_raw = data.get("topTradeSetups")
    setups: List[TradeSetup] = []
    if isinstance(setups_raw, list):
        for item in setups_raw:
            s = _parse_setup(item)
            if s is not None:
                setups.append(s)

    return MarketAnalysis(summary=summary.strip(), key_risks=risks, outlook=outlook, top_trade_setups=setups)


class MarketAnalyst:
    """
    Narrative read of the current telemetry.
    analyze() never raises: missing credentials and failed calls return fixed neutral payloads.
    """

    def __init__(self, api_key: str, model: str, client: Optional[Any] = None) -> None:
        self.api_key = api_key
        self.model = model
        self._client = client

    def _get_client(self) -> Any:
        if self._client is None:
            self._client = anthropic.Anthropic(api_key=self.api_key)
        return self._client

    def analyze(self, coins: Sequence[AssetTelemetry], sentiment: MarketSentiment) -> MarketAnalysis:
        if not self.api_key:
            return MISSING_KEY_FALLBACK

        try:
            msg = self._get_client().messages.create(
                model=self.model,
                max_tokens=MAX_TOKENS,
                system=SYSTEM_PROMPT,
                messages=[{"role": "user", "content": build_context(coins, sentiment)}],
            )
            if getattr(msg, "stop_reason", None) == "max_tokens":
                raise AnalysisUnavailable("response truncated")
            blocks = getattr(msg, "content", None) or []
            text = "".join(getattr(b, "text", "") for b in blocks)
            if not text.strip():
                raise AnalysisUnavailable("empty response")
            return parse_analysis(text)
        except AnalysisUnavailable as e:
            logger.warning("ANALYSIS_FALLBACK | %s", e)
        except anthropic.APIError as e:
            logger.warning("ANALYSIS_FALLBACK | api error: %s", e)
        except Exception:
            logger.exception("ANALYSIS_FALLBACK | unexpected error")
        return UNAVAILABLE_FALLBACK


def analysis_to_dict(a: MarketAnalysis) -> Dict[str, Any]:
    # Wire shape of the narrative response (camelCase keys).
    return {
        "summary": a.summary,
        "keyRisks": list(a.key_risks),
        "outlook": a.outlook,
        "topTradeSetups": [
            {
                "coin": s.coin,
                "direction": s.direction,
                "entry": s.entry,
                "target": s.target,
                "stopLoss": s.stop_loss,
                "rationale": s.rationale,
            }
            for s in a.top_trade_setups
        ],
    }
