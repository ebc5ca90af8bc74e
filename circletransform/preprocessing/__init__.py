from .field_selector import FieldSelector, select_field
from .noise import NoiseEstimator, estimate_noise

__all__ = ['FieldSelector', 'select_field', 'NoiseEstimator', 'estimate_noise']
