"""
Risk Calculator - interactive what-if for a single setup.
Prints stop-loss, take-profit, position size and advisory validation.
"""

import sys
import os
import argparse

current_dir = os.path.dirname(os.path.abspath(__file__))
if current_dir not in sys.path:
    sys.path.insert(0, current_dir)

from utils.logger import setup_logger
from signal_engine.risk import compute_risk_management
from signal_engine.risk.risk_config import RISK_TOLERANCE_MULTIPLIERS

logger = setup_logger('run_risk_calculator')


def format_risk_report(data) -> str:
    lines = ["-" * 60, "RISK MANAGEMENT", "-" * 60]
    lines.append(f"Entry        : {data.entry_price:>10.2f}")
    lines.append(f"Stop loss    : {data.stop_loss:>10.2f}")
    lines.append(f"Take profit  : {data.take_profit:>10.2f}")
    lines.append(f"Risk/Reward  : {'1:' + format(data.risk_reward_ratio, 'g'):>10}")
    lines.append(f"Position     : {data.position_size:>10d} shares")
    lines.append(f"Risk amount  : {data.risk_amount:>10.2f}")
    lines.append(f"Max loss     : {data.potential_loss:>10.2f}")
    lines.append(f"Max profit   : {data.potential_profit:>10.2f}")
    lines.append(f"Risk level   : {data.risk_level:>10}")
    lines.append("-" * 60)
    if data.validation.is_valid:
        lines.append("Setup passes all checks")
    else:
        for issue in data.validation.issues:
            lines.append(f"[WARN] {issue}")
        for rec in data.validation.recommendations:
            lines.append(f"  -> {rec}")
    return "\n".join(lines)


def main():
    parser = argparse.ArgumentParser(description='Risk management calculator')
    parser.add_argument('entry_price', type=float)
    parser.add_argument('final_score', type=float)
    parser.add_argument('--signal-type', choices=['bullish', 'bearish', 'neutral'], default='bullish')
    parser.add_argument('--risk-percent', type=float, default=1.0)
    parser.add_argument('--balance', type=float, default=10_000.0)
    parser.add_argument('--tolerance', choices=list(RISK_TOLERANCE_MULTIPLIERS), default='moderate')
    args = parser.parse_args()

    try:
        data = compute_risk_management(
            args.entry_price, args.final_score, args.signal_type,
            args.risk_percent, args.balance, args.tolerance,
        )
    except ValueError as e:
        logger.error(f"Invalid input: {e}")
        sys.exit(2)

    print(format_risk_report(data))


if __name__ == "__main__":
    main()
