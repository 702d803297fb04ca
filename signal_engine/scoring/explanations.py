"""
Human-readable text for scores.

Nothing in here feeds back into a score: the scorers and the aggregator
produce numbers, this module turns them into reason, recommendation and
analysis strings.
"""

from typing import Dict, List, Optional

from signal_engine.models import SignalStrength, TimeframeScore

INDICATOR_LABELS = {
    'rsi': 'RSI',
    'macd': 'MACD',
    'ema_pair': 'EMA 20/50',
    'bollinger': 'Bollinger Bands',
    'support_resistance': 'Support/Resistance',
    'volume': 'Volume',
}

RECOMMENDATIONS = {
    SignalStrength.STRONG_BUY: "Strong buy: indicators align bullish across timeframes.",
    SignalStrength.BUY: "Buy: bullish setup with good indicator agreement.",
    SignalStrength.WEAK_BUY: "Weak buy: mildly bullish, wait for confirmation or size down.",
    SignalStrength.NEUTRAL: "Neutral: no clear edge, stay on the sidelines.",
    SignalStrength.WEAK_SELL: "Weak sell: mildly bearish, avoid new long entries.",
    SignalStrength.SELL: "Sell: bearish setup, consider reducing exposure.",
    SignalStrength.STRONG_SELL: "Strong sell: indicators align bearish across timeframes.",
}


def describe_indicator(name: str, result: Optional[object]) -> str:
    """One-line reason for an indicator sub-score."""
    label = INDICATOR_LABELS.get(name, name)
    if result is None:
        return f"{label}: insufficient data, neutral"

    if name == 'rsi':
        return f"RSI {result.value:.1f} ({result.strength} {result.signal})"
    if name == 'macd':
        if result.crossover:
            return f"MACD {result.crossover} crossover (histogram {result.histogram:+.3f})"
        return f"MACD {result.trend}, histogram {result.histogram:+.3f}"
    if name == 'ema_pair':
        if result.cross:
            return f"EMA20/50 {result.cross.replace('_', ' ')}, price {result.price_position.replace('_', ' ')}"
        return (
            f"EMA20/50 {result.alignment} ({result.strength}, spread {result.spread_pct:.1f}%), "
            f"price {result.price_position.replace('_', ' ')}"
        )
    if name == 'bollinger':
        extra = ", squeeze" if result.squeeze else ", expanding" if result.expansion else ""
        return f"%B {result.percent_b:.2f} ({result.signal.replace('_', ' ')}{extra})"
    if name == 'support_resistance':
        if result.signal == 'at_support':
            return f"At support {result.nearest_support:.2f} ({result.support_touches} touches)"
        if result.signal == 'at_resistance':
            return f"At resistance {result.nearest_resistance:.2f} ({result.resistance_touches} touches)"
        if result.signal == 'breakout':
            return "Breakout above recent swing highs"
        return f"In range at {result.position_in_range:.0f}% between support and resistance"
    if name == 'volume':
        spike = ", spike" if result.spike else ""
        return f"Volume {result.ratio:.2f}x average, {result.trend}{spike}"
    return label


def build_recommendation(strength: SignalStrength) -> str:
    return RECOMMENDATIONS[strength]


def build_analysis(
    final_score: float,
    strength: SignalStrength,
    confidence: float,
    timeframe_scores: Dict[str, TimeframeScore],
    entry_price: float,
    stop_loss: float,
    take_profit: float,
    risk_reward_ratio: float,
) -> str:
    """
    Multi-line summary of a scored ticker.

    Lists the composite per timeframe and the strongest reasons from the
    highest-weighted timeframe present.
    """
    lines: List[str] = [
        f"Final score {final_score:.0f}/100 ({strength.value.replace('_', ' ')}), "
        f"confidence {confidence:.0f}%"
    ]

    if timeframe_scores:
        lines.append("Timeframes: " + ", ".join(
            f"{tf} {score.composite_score:.0f}" for tf, score in timeframe_scores.items()
        ))
        lead = next(iter(timeframe_scores.values()))
        top = sorted(lead.scores.values(), key=lambda s: s.contribution, reverse=True)[:3]
        lines.append(f"Key factors ({lead.timeframe}): " + "; ".join(s.reason for s in top if s.reason))
    else:
        lines.append("No timeframe had enough data")

    lines.append(
        f"Entry {entry_price:.2f}, stop {stop_loss:.2f}, target {take_profit:.2f} "
        f"(R:R 1:{risk_reward_ratio:g})"
    )
    return "\n".join(lines)
