"""
Risk Manager.

Pure calculations for interactive what-if callers: stop-loss/take-profit by
signal direction, position sizing, risk tiering and advisory validation.
Conviction is the final score for bullish setups and 100 - score for
bearish ones, so a score of 10 on a short is as convincing as 90 on a long.
"""

import math
from typing import Tuple

from signal_engine.models import RiskManagementData, SetupValidation
from .risk_config import (
    STOP_LOSS_CONFIG, RISK_TOLERANCE_MULTIPLIERS, REWARD_CONFIG, RISK_LEVEL_CONFIG, VALIDATION_LIMITS,
)

SIGNAL_TYPES = ('bullish', 'bearish', 'neutral')


def signal_conviction(final_score: float, signal_type: str) -> float:
    return 100 - final_score if signal_type == 'bearish' else final_score


def calculate_levels(
    entry_price: float,
    final_score: float,
    signal_type: str,
    risk_tolerance: str = 'moderate',
) -> Tuple[float, float, float]:
    """
    Derive stop-loss and take-profit around an entry.

    Bullish setups stop below the entry and target above it; bearish
    setups mirror that. Neutral setups use the default stop with a 1.5
    reward multiple on the long side.

    Returns:
        (stop_loss, take_profit, risk_reward_ratio)

    Raises:
        ValueError: on unknown signal type or risk tolerance
    """
    if signal_type not in SIGNAL_TYPES:
        raise ValueError(f"Unknown signal type: {signal_type}")
    if risk_tolerance not in RISK_TOLERANCE_MULTIPLIERS:
        raise ValueError(f"Unknown risk tolerance: {risk_tolerance}")

    conviction = signal_conviction(final_score, signal_type)
    if signal_type == 'neutral':
        stop_pct = STOP_LOSS_CONFIG['default_pct']
        multiplier = REWARD_CONFIG['neutral']
    else:
        stop_pct = (
            STOP_LOSS_CONFIG['strong_pct']
            if conviction >= STOP_LOSS_CONFIG['strong_conviction']
            else STOP_LOSS_CONFIG['default_pct']
        )
        multiplier = REWARD_CONFIG['default']
        for threshold, value in REWARD_CONFIG['tiers']:
            if conviction >= threshold:
                multiplier = value
                break

    stop_pct *= RISK_TOLERANCE_MULTIPLIERS[risk_tolerance]

    if signal_type == 'bearish':
        stop_loss = entry_price * (1 + stop_pct)
        take_profit = entry_price - (stop_loss - entry_price) * multiplier
    else:
        stop_loss = entry_price * (1 - stop_pct)
        take_profit = entry_price + (entry_price - stop_loss) * multiplier
    return stop_loss, take_profit, multiplier


def calculate_position_size(
    balance: float, risk_percent: float, entry_price: float, stop_loss: float
) -> int:
    """Whole shares such that hitting the stop loses risk_percent of balance."""
    per_share_risk = abs(entry_price - stop_loss)
    if per_share_risk == 0:
        return 0
    return max(0, math.floor(balance * risk_percent / 100 / per_share_risk))


def determine_risk_level(risk_reward_ratio: float, conviction: float) -> str:
    cfg = RISK_LEVEL_CONFIG
    if risk_reward_ratio < cfg['high_max_rr'] or conviction < cfg['high_max_score']:
        return 'high'
    if risk_reward_ratio >= cfg['low_min_rr'] and conviction >= cfg['low_min_score']:
        return 'low'
    return 'medium'


def validate_setup(
    entry_price: float,
    stop_loss: float,
    risk_reward_ratio: float,
    conviction: float,
    position_size: int = 0,
    balance: float = 0.0,
) -> SetupValidation:
    """
    Check a setup against the advisory limits.

    Failures are reported, never enforced.
    """
    issues, recommendations = [], []

    if risk_reward_ratio < VALIDATION_LIMITS['min_risk_reward']:
        issues.append(
            f"Risk-reward ratio 1:{risk_reward_ratio:.2f} is below 1:{VALIDATION_LIMITS['min_risk_reward']}"
        )
        recommendations.append("Widen the target or tighten the stop")

    stop_distance_pct = abs(entry_price - stop_loss) / entry_price * 100
    if stop_distance_pct > VALIDATION_LIMITS['max_stop_distance_pct']:
        issues.append(f"Stop distance {stop_distance_pct:.1f}% exceeds {VALIDATION_LIMITS['max_stop_distance_pct']:.0f}%")
        recommendations.append("Tighten the stop or reduce the position size")

    if conviction < VALIDATION_LIMITS['min_score']:
        issues.append(f"Signal score {conviction:.0f} is below {VALIDATION_LIMITS['min_score']}")
        recommendations.append("Wait for a stronger signal before entering")

    if balance > 0 and position_size * entry_price > balance:
        issues.append("Position value exceeds account balance")
        recommendations.append("Lower the risk percent or use a wider stop")

    return SetupValidation(is_valid=not issues, issues=issues, recommendations=recommendations)


def compute_risk_management(
    entry_price: float,
    final_score: float,
    signal_type: str,
    risk_percent: float,
    balance: float,
    risk_tolerance: str = 'moderate',
) -> RiskManagementData:
    """
    Full risk plan for one setup.

    Args:
        entry_price: Planned entry price
        final_score: Signal final score (0-100)
        signal_type: 'bullish', 'bearish' or 'neutral'
        risk_percent: Percent of balance risked if the stop is hit
        balance: Account balance
        risk_tolerance: 'conservative', 'moderate' or 'aggressive'

    Raises:
        ValueError: on non-positive entry, negative balance, out-of-range
            score or risk percent
    """
    if entry_price <= 0:
        raise ValueError("entry_price must be positive")
    if balance < 0:
        raise ValueError("balance cannot be negative")
    if not 0 < risk_percent <= 100:
        raise ValueError("risk_percent must be in (0, 100]")
    if not 0 <= final_score <= 100:
        raise ValueError("final_score must be in [0, 100]")

    stop_loss, take_profit, rr = calculate_levels(entry_price, final_score, signal_type, risk_tolerance)
    position_size = calculate_position_size(balance, risk_percent, entry_price, stop_loss)
    conviction = signal_conviction(final_score, signal_type)

    return RiskManagementData(
        entry_price=entry_price,
        stop_loss=round(stop_loss, 4),
        take_profit=round(take_profit, 4),
        risk_reward_ratio=rr,
        position_size=position_size,
        risk_amount=round(balance * risk_percent / 100, 2),
        potential_profit=round(abs(take_profit - entry_price) * position_size, 2),
        potential_loss=round(abs(entry_price - stop_loss) * position_size, 2),
        risk_level=determine_risk_level(rr, conviction),
        validation=validate_setup(entry_price, stop_loss, rr, conviction, position_size, balance),
    )
