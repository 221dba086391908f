# Vitality score package
from .config import load_settings, validate_settings
from .scoring import HealthMetrics, calculate_fitness_score

__version__ = "0.1.0"

__all__ = [
    "load_settings",
    "validate_settings",
    "HealthMetrics",
    "calculate_fitness_score",
]
