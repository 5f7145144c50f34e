from .calculator import calculate_projections

__all__ = ["calculate_projections"]
