from __future__ import annotations

import json
import logging
import random
import threading
import time

from sentinels.config import AppConfig
from sentinels.utils.logger import setup_logger
from sentinels.feed.adapter import FeedAdapter
from sentinels.pipeline import run_cycle
from sentinels.refresh import RefreshController
from sentinels.narrative.analyst import MarketAnalyst
from sentinels.analytics.exports import snapshot_payload, snapshot_summary

# Poll interval while no snapshot has been published yet.
ANALYSIS_WARMUP_SEC = 1.0


def analysis_loop(
    analyst: MarketAnalyst,
    controller: RefreshController,
    interval_sec: float,
    stop: threading.Event,
) -> None:
    """
    Narrative cadence, decoupled from the refresh loop: a slow model call
    never delays the next refresh. Reads whatever snapshot is published.
    """
    log = logging.getLogger("sentinels")
    while not stop.is_set():
        latest = controller.latest
        if latest is None:
            stop.wait(min(interval_sec, ANALYSIS_WARMUP_SEC))
            continue
        try:
            analysis = analyst.analyze(latest.coins, latest.sentiment)
            log.info(
                "ANALYSIS | outlook=%s | setups=%d | degraded=%s | %s",
                analysis.outlook,
                len(analysis.top_trade_setups),
                analysis.degraded,
                analysis.summary,
            )
        except Exception as e:
            log.exception("Analysis loop error: %s", e)
        stop.wait(interval_sec)


def start_analysis_thread(
    analyst: MarketAnalyst,
    controller: RefreshController,
    interval_sec: float,
    stop: threading.Event,
) -> threading.Thread:
    t = threading.Thread(
        target=analysis_loop,
        args=(analyst, controller, interval_sec, stop),
        name="narrative",
        daemon=True,
    )
    t.start()
    return t


def main() -> None:
    log = setup_logger()
    cfg = AppConfig.load()

    rng = random.Random()
    adapter = FeedAdapter.from_config(cfg, rng=rng)
    controller = RefreshController(lambda: run_cycle(adapter, rng=rng, liquidation_filter=cfg.liquidation_filter))
    analyst = MarketAnalyst(cfg.anthropic_api_key, cfg.narrative_model)

    stop = threading.Event()
    start_analysis_thread(analyst, controller, cfg.analysis_interval_sec, stop)

    while True:
        try:
            snap = controller.refresh()
            if snap is not None:
                s = snapshot_summary(snap)
                log.info(
                    "SNAPSHOT | src=%s | coins=%s | fg=%s | btc_dom=%s | mcap=%s | liq24h[%s]=%s | opps=%s | best=%s/%s",
                    s["source"],
                    s["coins"],
                    s["fear_greed"],
                    s["btc_dom"],
                    s["mcap"],
                    s["liq_filter"],
                    s["liq_24h"],
                    s["opportunities"],
                    s["best"],
                    s["best_4h"],
                )
                if log.isEnabledFor(logging.DEBUG):
                    log.debug("SNAPSHOT_JSON | %s", json.dumps(snapshot_payload(snap), allow_nan=False))

            time.sleep(cfg.refresh_interval_sec)

        except KeyboardInterrupt:
            stop.set()
            raise
        except Exception as e:
            log.exception("Main loop error: %s", e)
            time.sleep(10)


if __name__ == "__main__":
    main()
