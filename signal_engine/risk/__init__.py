from .risk_manager import (
    calculate_levels,
    calculate_position_size,
    determine_risk_level,
    validate_setup,
    compute_risk_management,
)

__all__ = [
    'calculate_levels',
    'calculate_position_size',
    'determine_risk_level',
    'validate_setup',
    'compute_risk_management',
]
