"""
Tests for sentinels/narrative/analyst.py

Covers:
  - Fallback payloads for missing key / failing client / bad content
  - Response normalization
  - Prompt context (top movers, no mutation of input)
"""
import json
from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest

from conftest import make_coin
from sentinels.data.models import MarketSentiment
from sentinels.narrative.analyst import (
    MISSING_KEY_FALLBACK,
    UNAVAILABLE_FALLBACK,
    AnalysisUnavailable,
    MarketAnalyst,
    analysis_to_dict,
    build_context,
    parse_analysis,
)

SENTIMENT = MarketSentiment(fear_greed_index=62, btc_dominance=54.21, total_market_cap=1e12, total_volume_24h=5e10)

GOOD = {
    "summary": "Momentum favors majors.",
    "keyRisks": ["Funding spikes", "Weekend liquidity", "Macro data"],
    "outlook": "bullish",
    "topTradeSetups": [
        {"coin": "sol", "direction": "Long", "entry": "185", "target": "200", "stopLoss": "178", "rationale": "Trend"},
        {"coin": "DOGE", "direction": "SHORT", "entry": "0.38", "target": "0.35", "stopLoss": "0.40", "rationale": "Funding"},
        {"coin": "XRP", "direction": "sideways"},
        "garbage",
    ],
}


def _client(text, stop_reason="end_turn"):
    client = MagicMock()
    client.messages.create.return_value = SimpleNamespace(
        content=[SimpleNamespace(type="text", text=text)],
        stop_reason=stop_reason,
    )
    return client


def _coins():
    return [make_coin(s, price_change_24h=c) for s, c in [("A", 1.0), ("B", -9.0), ("C", 4.0)]]


class TestFallbacks:
    def test_missing_key(self):
        client = MagicMock()
        out = MarketAnalyst("", "some-model", client=client).analyze(_coins(), SENTIMENT)
        assert out is MISSING_KEY_FALLBACK
        assert out.outlook == "Neutral"
        client.messages.create.assert_not_called()

    def test_client_error(self):
        client = MagicMock()
        client.messages.create.side_effect = RuntimeError("network down")
        out = MarketAnalyst("key", "some-model", client=client).analyze(_coins(), SENTIMENT)
        assert out is UNAVAILABLE_FALLBACK

    @pytest.mark.parametrize("text", ["", "not json at all", "[1, 2]", json.dumps({"outlook": "Bullish"})])
    def test_bad_content(self, text):
        out = MarketAnalyst("key", "m", client=_client(text)).analyze(_coins(), SENTIMENT)
        assert out is UNAVAILABLE_FALLBACK
        assert out.degraded

    def test_truncated_response(self):
        out = MarketAnalyst("key", "m", client=_client(json.dumps(GOOD), stop_reason="max_tokens")).analyze(
            _coins(), SENTIMENT
        )
        assert out is UNAVAILABLE_FALLBACK


class TestParse:
    def test_normalizes_response(self):
        a = parse_analysis(json.dumps(GOOD))
        assert a.outlook == "Bullish"
        assert a.key_risks == GOOD["keyRisks"]
        assert [(s.coin, s.direction) for s in a.top_trade_setups] == [("SOL", "LONG"), ("DOGE", "SHORT")]
        assert a.top_trade_setups[0].stop_loss == "178"
        assert not a.degraded

    def test_strips_code_fences(self):
        a = parse_analysis("```json\n" + json.dumps(GOOD) + "\n```")
        assert a.summary == "Momentum favors majors."

    def test_unknown_outlook_becomes_neutral(self):
        a = parse_analysis(json.dumps(dict(GOOD, outlook="Sideways")))
        assert a.outlook == "Neutral"

    def test_unparsable_raises(self):
        with pytest.raises(AnalysisUnavailable):
            parse_analysis("{")

    def test_wire_shape(self):
        d = analysis_to_dict(parse_analysis(json.dumps(GOOD)))
        assert set(d) == {"summary", "keyRisks", "outlook", "topTradeSetups"}
        assert d["topTradeSetups"][0]["stopLoss"] == "178"


class TestRequest:
    def test_successful_call(self):
        client = _client(json.dumps(GOOD))
        out = MarketAnalyst("key", "model-x", client=client).analyze(_coins(), SENTIMENT)
        assert out.outlook == "Bullish"
        _, kwargs = client.messages.create.call_args
        assert kwargs["model"] == "model-x"
        assert "Fear & Greed: 62" in kwargs["messages"][0]["content"]

    def test_context_orders_movers_without_mutating(self):
        coins = _coins()
        ctx = build_context(coins, SENTIMENT)
        assert [c.symbol for c in coins] == ["A", "B", "C"]
        assert ctx.index("B:") < ctx.index("C:") < ctx.index("A:")
        assert "BTC Dominance: 54.2%" in ctx

    def test_context_caps_movers(self):
        coins = [make_coin(f"C{i}", price_change_24h=float(i)) for i in range(12)]
        ctx = build_context(coins, SENTIMENT)
        assert ctx.count("24h:") == 8
