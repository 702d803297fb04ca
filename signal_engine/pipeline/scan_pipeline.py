"""
Scan Pipeline - batch signal generation.

Discovers tickers, fetches quotes and multi-timeframe history in bounded
batches, scores every candidate, keeps the best and persists them.

One run at a time per instance: a second call while a run is in flight
raises ReentrancyConflictError instead of queuing.
"""

import threading
import time
from concurrent.futures import ThreadPoolExecutor
from enum import Enum
from typing import Callable, Dict, List, Optional, Sequence, Tuple, TypeVar

import numpy as np

from config.pipeline_config import PIPELINE_DEFAULTS, QUOTE_FILTERS, SYNTHETIC_SERIES_CONFIG
from utils.logger import setup_logger
from data_acquisition.market_data.base_provider import MarketDataProvider
from data_acquisition.market_data.seed_universe import UNKNOWN_SECTOR, seed_tickers, lookup_ticker_info
from data_acquisition.market_data.synthetic_series import generate_synthetic_bars
from data_acquisition.storage.signal_store import SignalStore
from signal_engine.errors import PersistenceError, ProviderUnavailableError, ReentrancyConflictError
from signal_engine.models import (
    GenerationRequest, PipelineStats, PriceBar, ProcessedSignal, Quote, TickerInfo, TimeframeScore,
)
from signal_engine.scoring.timeframe_scorer import TimeframeScorer
from signal_engine.scoring.signal_aggregator import SignalAggregator, to_processed_signal

logger = setup_logger('scan_pipeline')

T = TypeVar('T')
R = TypeVar('R')


class PipelineState(str, Enum):
    IDLE = "IDLE"
    DISCOVERING = "DISCOVERING"
    SCANNING_QUOTES = "SCANNING_QUOTES"
    FETCHING_HISTORY = "FETCHING_HISTORY"
    SCORING = "SCORING"
    PERSISTING = "PERSISTING"
    ERROR = "ERROR"


class ScanPipeline:
    """Orchestrates one signal generation run over a market-data provider and a store."""

    def __init__(
        self,
        provider: MarketDataProvider,
        store: SignalStore,
        scorer: Optional[TimeframeScorer] = None,
        aggregator: Optional[SignalAggregator] = None,
        pool_size: int = PIPELINE_DEFAULTS["POOL_SIZE"],
        batch_size: int = PIPELINE_DEFAULTS["BATCH_SIZE"],
        batch_delay: float = PIPELINE_DEFAULTS["BATCH_DELAY_SECONDS"],
        history_periods: int = PIPELINE_DEFAULTS["HISTORY_PERIODS"],
        quote_filters: Optional[Dict[str, float]] = None,
        sleep: Callable[[float], None] = time.sleep,
        rng: Optional[np.random.Generator] = None,
    ):
        """
        Args:
            provider: Market-data collaborator
            store: Storage collaborator
            scorer: Per-timeframe scorer (default TimeframeScorer())
            aggregator: Cross-timeframe aggregator (default SignalAggregator())
            pool_size: Maximum number of tickers taken from discovery
            batch_size: Concurrent fetches per batch
            batch_delay: Seconds to wait between batches
            history_periods: Bars requested per timeframe
            quote_filters: MIN_PRICE / MIN_VOLUME floors for tradeable quotes
            sleep: Delay function between batches
            rng: Random generator for synthetic series
        """
        if batch_size < 1:
            raise ValueError("batch_size must be at least 1")
        if pool_size < 1:
            raise ValueError("pool_size must be at least 1")

        self.provider = provider
        self.store = store
        self.scorer = scorer or TimeframeScorer()
        self.aggregator = aggregator or SignalAggregator()
        self.pool_size = pool_size
        self.batch_size = batch_size
        self.batch_delay = batch_delay
        self.history_periods = history_periods
        self.quote_filters = quote_filters if quote_filters is not None else dict(QUOTE_FILTERS)
        self._sleep = sleep
        self._rng = rng if rng is not None else np.random.default_rng(SYNTHETIC_SERIES_CONFIG['SEED'])

        self._run_lock = threading.Lock()
        self._state = PipelineState.IDLE
        self.stats = PipelineStats()

    # ------------------------------------------------------------------ state

    @property
    def state(self) -> PipelineState:
        return self._state

    @property
    def is_running(self) -> bool:
        return self._run_lock.locked()

    def _set_state(self, state: PipelineState):
        logger.debug(f"Pipeline state {self._state.value} -> {state.value}")
        self._state = state

    # ------------------------------------------------------------- entrypoint

    def generate_signals(self, request: Optional[GenerationRequest] = None) -> List[ProcessedSignal]:
        """
        Run one full generation pass.

        Args:
            request: Run parameters; defaults from PIPELINE_DEFAULTS

        Returns:
            Signals that met min_score, best first, at most max_signals.
            Per-run counters are left in `self.stats`.

        Raises:
            ReentrancyConflictError: a run is already in progress
        """
        request = request or GenerationRequest()
        if not self._run_lock.acquire(blocking=False):
            logger.warning("Signal generation requested while a run is in progress; rejecting")
            raise ReentrancyConflictError("Signal generation already in progress")

        started = time.monotonic()
        self.stats = PipelineStats()
        logger.info(
            f"Starting signal generation: timeframes={request.timeframes}, "
            f"min_score={request.min_score}, max_signals={request.max_signals}"
        )
        try:
            tickers = self._discover()
            quotes = self._scan_quotes(tickers)
            candidates = self._filter_candidates(quotes, request)
            histories = self._fetch_histories(candidates, request.timeframes)
            signals = self._score_candidates(candidates, histories)
            kept = self._rank(signals, request)
            self._persist(kept)
            self._set_state(PipelineState.IDLE)
        except Exception as e:
            self._set_state(PipelineState.ERROR)
            self.stats.errors.append(str(e))
            logger.error(f"Signal generation failed: {e}")
            raise
        finally:
            self.stats.duration_seconds = round(time.monotonic() - started, 3)
            self._run_lock.release()

        logger.info(
            f"Signal generation finished: {len(kept)} signals kept, "
            f"{self.stats.signals_persisted} persisted, {self.stats.tickers_skipped} tickers skipped "
            f"in {self.stats.duration_seconds:.1f}s"
        )
        return kept

    # ------------------------------------------------------------------ steps

    def _discover(self) -> List[str]:
        self._set_state(PipelineState.DISCOVERING)
        discovered = self._call_provider(
            "ticker discovery", lambda: self.provider.list_active_tickers(self.pool_size)
        )

        tickers: List[str] = []
        for ticker in discovered or []:
            symbol = str(ticker).strip().upper()
            if symbol and symbol not in tickers:
                tickers.append(symbol)
        tickers = tickers[:self.pool_size]

        if not tickers:
            logger.warning("Ticker discovery unavailable or empty; using seed universe")
            tickers = seed_tickers(self.pool_size)
            self.stats.used_seed_universe = True

        self.stats.tickers_discovered = len(tickers)
        logger.info(f"Discovered {len(tickers)} candidate tickers")
        return tickers

    def _scan_quotes(self, tickers: List[str]) -> Dict[str, Quote]:
        self._set_state(PipelineState.SCANNING_QUOTES)
        results = self._run_batched(
            tickers,
            lambda ticker: self._call_provider(
                f"quote for {ticker}", lambda: self.provider.get_latest_quote(ticker)
            ),
        )

        quotes: Dict[str, Quote] = {}
        for ticker, quote in results:
            if quote is None:
                self.stats.tickers_skipped += 1
                continue
            if not self._is_tradeable(quote):
                logger.debug(f"{ticker} skipped: price {quote.price} / volume {quote.volume} below floor")
                self.stats.tickers_skipped += 1
                continue
            quotes[ticker] = quote

        self.stats.quotes_fetched = len(quotes)
        logger.info(f"Fetched {len(quotes)} usable quotes ({self.stats.tickers_skipped} skipped)")
        return quotes

    def _is_tradeable(self, quote: Quote) -> bool:
        return (
            quote.price >= self.quote_filters.get("MIN_PRICE", 0)
            and quote.volume >= self.quote_filters.get("MIN_VOLUME", 0)
        )

    def _filter_candidates(
        self, quotes: Dict[str, Quote], request: GenerationRequest
    ) -> List[Tuple[TickerInfo, Quote]]:
        sectors = {s.lower() for s in request.sectors}
        markets = {m.lower() for m in request.markets}

        candidates = []
        unknown_dropped = 0
        for ticker, quote in quotes.items():
            info = lookup_ticker_info(ticker)
            if sectors and info.sector.lower() not in sectors:
                self.stats.tickers_filtered_out += 1
                if info.sector == UNKNOWN_SECTOR:
                    unknown_dropped += 1
                continue
            if markets and info.market.lower() not in markets:
                self.stats.tickers_filtered_out += 1
                continue
            candidates.append((info, quote))

        if unknown_dropped:
            logger.warning(
                f"Sector filter dropped {unknown_dropped} tickers with no catalog sector; "
                f"only seed-universe tickers carry sector metadata"
            )
        if sectors or markets:
            logger.info(f"{len(candidates)} tickers left after sector/market filters")
        return candidates

    def _fetch_histories(
        self, candidates: List[Tuple[TickerInfo, Quote]], timeframes: Sequence[str]
    ) -> Dict[Tuple[str, str], Tuple[List[PriceBar], bool]]:
        """
        Returns:
            (ticker, timeframe) -> (bars, is_synthetic)
        """
        self._set_state(PipelineState.FETCHING_HISTORY)
        jobs = [(info.ticker, tf) for info, _ in candidates for tf in timeframes]
        results = self._run_batched(
            jobs,
            lambda job: self._call_provider(
                f"{job[1]} history for {job[0]}",
                lambda: self.provider.get_ohlcv(job[0], job[1], self.history_periods),
            ),
        )

        prices = {info.ticker: quote.price for info, quote in candidates}
        histories: Dict[Tuple[str, str], Tuple[List[PriceBar], bool]] = {}
        for (ticker, timeframe), bars in results:
            if bars:
                histories[(ticker, timeframe)] = (list(bars), False)
                continue
            logger.warning(f"No {timeframe} history for {ticker}; substituting synthetic series")
            synthetic = generate_synthetic_bars(prices[ticker], timeframe, rng=self._rng)
            histories[(ticker, timeframe)] = (synthetic, True)
            self.stats.synthetic_series += 1
        return histories

    def _score_candidates(
        self,
        candidates: List[Tuple[TickerInfo, Quote]],
        histories: Dict[Tuple[str, str], Tuple[List[PriceBar], bool]],
    ) -> List[ProcessedSignal]:
        self._set_state(PipelineState.SCORING)
        signals = []
        for info, quote in candidates:
            series = {tf: entry for (ticker, tf), entry in histories.items() if ticker == info.ticker}
            try:
                timeframe_scores = self._score_timeframes(info.ticker, series)
                final = self.aggregator.aggregate(info.ticker, timeframe_scores, quote.price)
            except Exception as e:
                logger.error(f"Scoring failed for {info.ticker}: {e}")
                self.stats.tickers_skipped += 1
                self.stats.errors.append(f"{info.ticker}: {e}")
                continue

            synthetic = [
                tf for tf, (_, is_synthetic) in series.items()
                if is_synthetic and tf in timeframe_scores
            ]
            signals.append(to_processed_signal(final, info, synthetic))

        self.stats.signals_scored = len(signals)
        return signals

    def _score_timeframes(
        self, ticker: str, series: Dict[str, Tuple[List[PriceBar], bool]]
    ) -> Dict[str, TimeframeScore]:
        """Score each timeframe, leaving out those too short for every indicator."""
        scored = {}
        for tf, (bars, _) in series.items():
            score = self.scorer.score_bars(tf, bars)
            if score.indicators_available == 0:
                logger.info(f"{ticker} {tf}: {len(bars)} bars is too short for any indicator, left out")
                self.stats.insufficient_timeframes += 1
                continue
            scored[tf] = score
        return scored

    def _rank(self, signals: List[ProcessedSignal], request: GenerationRequest) -> List[ProcessedSignal]:
        qualified = [s for s in signals if s.final_score >= request.min_score]
        self.stats.below_min_score = len(signals) - len(qualified)
        qualified.sort(key=lambda s: s.final_score, reverse=True)
        return qualified[:request.max_signals]

    def _persist(self, signals: List[ProcessedSignal]):
        self._set_state(PipelineState.PERSISTING)
        for signal in signals:
            try:
                saved = self.store.save_signal(signal)
            except PersistenceError as e:
                logger.error(f"Persistence failed for {signal.ticker}: {e}")
                saved = False
            except Exception as e:
                logger.error(f"Unexpected store error for {signal.ticker}: {e}")
                saved = False

            if saved:
                self.stats.signals_persisted += 1
            else:
                self.stats.persistence_failures += 1

    # ---------------------------------------------------------------- helpers

    def _run_batched(self, items: Sequence[T], fetch: Callable[[T], R]) -> List[Tuple[T, R]]:
        """
        Apply `fetch` to every item, at most batch_size at a time.

        Batches run one after another with batch_delay between them;
        results keep input order.
        """
        results: List[Tuple[T, R]] = []
        batches = [items[i:i + self.batch_size] for i in range(0, len(items), self.batch_size)]
        for index, batch in enumerate(batches):
            with ThreadPoolExecutor(max_workers=len(batch)) as executor:
                batch_results = list(executor.map(fetch, batch))
            results.extend(zip(batch, batch_results))
            if index < len(batches) - 1 and self.batch_delay > 0:
                self._sleep(self.batch_delay)
        return results

    @staticmethod
    def _call_provider(description: str, call: Callable[[], R]) -> Optional[R]:
        """Run a provider call, reporting a raised exception as unavailable."""
        try:
            return call()
        except ProviderUnavailableError as e:
            logger.warning(f"Provider unavailable for {description}: {e}")
            return None
        except Exception as e:
            logger.error(f"Provider failed during {description}: {e}")
            return None
