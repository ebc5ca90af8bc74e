from .gradient import GradientEstimator, SAVGOL_DX, SAVGOL_DX_NORM, compute_gradient
from .confidence import ConfidenceFilter, VoteCandidates
from .voting import VoteCaster

__all__ = [
    'GradientEstimator', 'SAVGOL_DX', 'SAVGOL_DX_NORM', 'compute_gradient',
    'ConfidenceFilter', 'VoteCandidates', 'VoteCaster',
]
