"""
Signal Generation - batch entrypoint.
Discovers tickers, scores them across timeframes and persists the best signals.
Used both by the scheduled trigger and for manual regeneration.
"""

import sys
import os
import argparse
from datetime import datetime
from typing import List

# Add project root to path
current_dir = os.path.dirname(os.path.abspath(__file__))
if current_dir not in sys.path:
    sys.path.insert(0, current_dir)

import utils.logger
from utils.logger import LoggingContext, set_logging_mode
from config.constants import DATA_REPORTS
from config.pipeline_config import PIPELINE_DEFAULTS, DEFAULT_TIMEFRAMES

logger = utils.logger.setup_logger('run_signal_generation')


def _split_list(values: List[str]) -> List[str]:
    """Accept both 'a,b' and 'a b' forms."""
    items = []
    for value in values or []:
        items.extend(v.strip() for v in value.split(',') if v.strip())
    return items


def format_signal_report(signals, stats, summary) -> str:
    """Consolidated plain-text report for one run."""
    lines = []
    lines.append("=" * 70)
    lines.append("SIGNAL GENERATION REPORT")
    lines.append("=" * 70)
    lines.append(f"Tickers discovered : {stats.tickers_discovered}"
                 + (" (seed universe)" if stats.used_seed_universe else ""))
    lines.append(f"Usable quotes      : {stats.quotes_fetched}")
    lines.append(f"Tickers skipped    : {stats.tickers_skipped}")
    lines.append(f"Synthetic series   : {stats.synthetic_series}")
    lines.append(f"Short timeframes   : {stats.insufficient_timeframes}")
    lines.append(f"Signals scored     : {stats.signals_scored}")
    lines.append(f"Below min score    : {stats.below_min_score}")
    lines.append(f"Signals persisted  : {stats.signals_persisted}"
                 + (f" ({stats.persistence_failures} failed)" if stats.persistence_failures else ""))
    if summary['average_score'] is not None:
        lines.append(f"Score avg / high   : {summary['average_score']:.1f} / {summary['highest_score']:.0f}")
    lines.append("-" * 70)

    for signal in signals:
        marker = " [synthetic]" if signal.data_provenance == 'synthetic' else ""
        lines.append(
            f"{signal.ticker:<6} {signal.final_score:>5.0f}  {signal.strength.value:<11} "
            f"entry {signal.entry_price:>9.2f}  stop {signal.stop_loss:>9.2f}  "
            f"target {signal.take_profit:>9.2f}{marker}"
        )
    lines.append("-" * 70)

    for signal in signals:
        lines.append("")
        lines.append(f"{signal.ticker} - {signal.company_name} ({signal.sector})")
        lines.append(signal.recommendation)
        lines.append(signal.analysis)
    return "\n".join(lines)


def main():
    parser = argparse.ArgumentParser(description='Generate ranked trade signals')
    parser.add_argument('--max-signals', type=int, default=PIPELINE_DEFAULTS['MAX_SIGNALS'])
    parser.add_argument('--min-score', type=float, default=PIPELINE_DEFAULTS['MIN_SCORE'])
    parser.add_argument('--sectors', nargs='*', default=[], help='Sector names to include; only seed-universe tickers have a known sector, others are dropped')
    parser.add_argument('--markets', nargs='*', default=[], help='Markets to include (e.g. usa)')
    parser.add_argument('--timeframes', nargs='*', default=DEFAULT_TIMEFRAMES,
                        help='Subset of 1H 4H 1D 1W')
    parser.add_argument('--provider', default=None, help='Market data provider (yahoo, polygon)')
    parser.add_argument('--pool-size', type=int, default=PIPELINE_DEFAULTS['POOL_SIZE'])
    parser.add_argument('--batch-size', type=int, default=PIPELINE_DEFAULTS['BATCH_SIZE'])
    parser.add_argument('--store-dir', default=None, help='Directory for persisted signals')
    parser.add_argument('--quiet', '-q', action='store_true', help='Only show warnings from sub-modules')
    args = parser.parse_args()

    if args.quiet:
        set_logging_mode(LoggingContext.BATCH)

    # Imported after the logging mode is set so module loggers pick it up
    from pydantic import ValidationError
    from config.settings import settings
    from data_acquisition.market_data import ProviderRegistry
    from data_acquisition.storage import JsonSignalStore
    from signal_engine.models import GenerationRequest
    from signal_engine.pipeline import ScanPipeline
    from signal_engine.scoring import summarize_signals

    try:
        request = GenerationRequest(
            max_signals=args.max_signals,
            min_score=args.min_score,
            sectors=_split_list(args.sectors),
            markets=_split_list(args.markets),
            timeframes=_split_list(args.timeframes),
        )
        provider = ProviderRegistry.create(args.provider or settings.MARKET_DATA_PROVIDER)
    except (ValidationError, ValueError) as e:
        print(f"[ERROR] {e}")
        sys.exit(2)

    pipeline = ScanPipeline(
        provider=provider,
        store=JsonSignalStore(args.store_dir),
        pool_size=args.pool_size,
        batch_size=args.batch_size,
    )

    print(f"\nGenerating signals with {provider.source_name} data...")
    print("-" * 60)
    signals = pipeline.generate_signals(request)
    summary = summarize_signals(signals, pipeline.stats.signals_scored)
    report = format_signal_report(signals, pipeline.stats, summary)
    print(report)

    timestamp_str = datetime.now().strftime('%Y-%m-%d_%H-%M-%S')
    report_dir = os.path.join(current_dir, DATA_REPORTS)
    os.makedirs(report_dir, exist_ok=True)
    report_path = os.path.join(report_dir, f"signal_scan_{timestamp_str}.txt")
    try:
        with open(report_path, 'w', encoding='utf-8') as f:
            f.write(report + "\n")
        print(f"\nFull report saved to: {report_path}")
    except OSError as e:
        logger.error(f"Failed to write report file: {e}")


if __name__ == "__main__":
    main()
