"""
Circle Transform

Radius-agnostic detection of circular features by voting along image gradients.
"""

from circletransform.config import DEFAULT_CONFIG, TransformConfig, load_config
from circletransform.core import CircleTransform, TransformResult, circle_transform
from circletransform.errors import CircleTransformError, InvalidConfigError, InvalidImageError
from circletransform.preprocessing.noise import estimate_noise

__all__ = [
    'CircleTransform',
    'TransformResult',
    'circle_transform',
    'estimate_noise',
    'TransformConfig',
    'DEFAULT_CONFIG',
    'load_config',
    'CircleTransformError',
    'InvalidImageError',
    'InvalidConfigError',
]
__version__ = '1.0.0'
