"""
Run summaries over generated signals, used for the CLI report.
"""

from typing import Any, Dict, Iterable

from signal_engine.models import ProcessedSignal, SignalStrength


def summarize_signals(signals: Iterable[ProcessedSignal], total_processed: int) -> Dict[str, Any]:
    """
    Summarize a run's output.

    Args:
        signals: Signals kept by the run
        total_processed: Tickers that reached the scoring stage

    Returns:
        Dict with counts, strength distribution, highest and average score
    """
    signals = list(signals)
    distribution = {strength.value: 0 for strength in SignalStrength}
    for signal in signals:
        distribution[signal.strength.value] += 1

    scores = [s.final_score for s in signals]
    return {
        'total_processed': total_processed,
        'signals_generated': len(signals),
        'score_distribution': distribution,
        'highest_score': max(scores) if scores else None,
        'average_score': round(sum(scores) / len(scores), 1) if scores else None,
        'synthetic_signals': sum(1 for s in signals if s.data_provenance == 'synthetic'),
    }
