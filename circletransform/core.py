"""
Circle Transform Core
Main entry point for gradient-voting circle centre detection
"""

import logging
from typing import Any, Dict, NamedTuple, Optional, Union

import numpy as np

from circletransform.config import TransformConfig
from circletransform.detection.confidence import ConfidenceFilter
from circletransform.detection.gradient import GradientEstimator
from circletransform.detection.voting import VoteCaster
from circletransform.errors import InvalidImageError
from circletransform.preprocessing.field_selector import FieldSelector
from circletransform.preprocessing.noise import NoiseEstimator
from circletransform.utils.metrics import PerformanceMetrics

logger = logging.getLogger(__name__)


class TransformResult(NamedTuple):
    """Accumulator of centre votes and the mean vote half-range."""
    accumulator: np.ndarray
    mean_range: float


class CircleTransform:
    """Processor for the radius-agnostic circle transform"""
    
    def __init__(self, config: Union[TransformConfig, Dict[str, Any], None] = None):
        """
        Initialize circle transform
        
        Args:
            config: TransformConfig or configuration dictionary (optional)
        """
        if isinstance(config, TransformConfig):
            self.config = config.validate()
        else:
            self.config = TransformConfig.from_dict(config)
        
        self.noise_estimator = NoiseEstimator()
        self.gradient_estimator = GradientEstimator()
        self.metrics = PerformanceMetrics()
        self.last_stats: Dict[str, Any] = {}
    
    def transform(self, image: np.ndarray, noise: Optional[float] = None,
                  deinterlace: Optional[int] = None) -> TransformResult:
        """
        Run the circle transform on a single image
        
        Args:
            image: 2D numeric image indexed [y, x]
            noise: Pixel noise; estimated from the image when omitted
            deinterlace: Row parity of the field to use (value mod 2)
            
        Returns:
            TransformResult with an int64 accumulator of the image's shape
            
        Raises:
            InvalidImageError: image is not a 2D real numeric array
            InvalidConfigError: noise or deinterlace is invalid
        """
        cfg = self.config.replace(noise=noise, deinterlace=deinterlace)
        a = validate_image(image)
        self.metrics = PerformanceMetrics()
        
        field = FieldSelector(cfg.deinterlace)
        sub = field.select(a)
        empty = TransformResult(np.zeros(a.shape, dtype=np.int64), 0.0)
        self.last_stats = {'noise': cfg.noise, 'candidates': 0, 'mean_range': 0.0}
        if sub.size == 0:
            logger.info("Selected field is empty; no votes cast")
            return empty
        
        if cfg.noise is None:
            self.metrics.start_timer('noise')
            noise = self.noise_estimator.estimate(sub)
            self.metrics.stop_timer('noise')
            if not np.isfinite(noise):
                raise InvalidImageError("Cannot estimate noise from a non-finite image")
            logger.debug(f"Estimated noise: {noise:.6g}")
        else:
            noise = float(cfg.noise)
        self.last_stats['noise'] = noise
        
        self.metrics.start_timer('gradient')
        dadx, dady = self.gradient_estimator.estimate(sub, deinterlaced=field.active)
        floor = self.gradient_estimator.floor(sub)
        self.metrics.stop_timer('gradient')
        
        self.metrics.start_timer('confidence')
        confidence = ConfidenceFilter(cfg.threshold_factor, cfg.pixel_offset)
        candidates = confidence.select(dadx, dady, noise, floor, field=field)
        self.metrics.stop_timer('confidence')
        
        if len(candidates) == 0:
            logger.info("No pixels passed the confidence filter; no votes cast")
            return empty
        
        self.metrics.start_timer('voting')
        caster = VoteCaster(cfg.chunk_size, cfg.n_jobs)
        rng = caster.vote_ranges(candidates, a.shape)
        accumulator = caster.cast(candidates, rng, a.shape)
        self.metrics.stop_timer('voting')
        
        mean_range = float(np.mean(rng))
        self.last_stats.update(candidates=len(candidates), mean_range=mean_range)
        logger.info(f"{len(candidates)} candidates voted, mean range {mean_range:.2f}")
        
        return TransformResult(accumulator, mean_range)
    
    @property
    def last_timings(self) -> Dict[str, float]:
        """Stage timings of the last run in milliseconds."""
        return self.metrics.get_summary()


def validate_image(image) -> np.ndarray:
    """Return image as a 2D real numeric array or raise InvalidImageError."""
    try:
        a = np.asarray(image)
    except (TypeError, ValueError) as e:
        raise InvalidImageError(f"Image is not array-like: {e}") from e
    
    if a.dtype == np.bool_ or not (np.issubdtype(a.dtype, np.integer)
                                   or np.issubdtype(a.dtype, np.floating)):
        raise InvalidImageError(f"Image must be real numeric, got dtype {a.dtype}")
    if a.ndim != 2:
        raise InvalidImageError(f"Image must be 2-dimensional, got {a.ndim} dimension(s)")
    if a.size == 0:
        raise InvalidImageError("Image is empty")
    return a


def circle_transform(image: np.ndarray, noise: Optional[float] = None,
                     deinterlace: Optional[int] = None,
                     config: Union[TransformConfig, Dict[str, Any], None] = None) -> TransformResult:
    """
    Transform image into a map of circle-centre votes.
    
    Each pixel whose gradient stands clear of the noise votes for every cell
    along its gradient line, out to a range set by its angular uncertainty.
    Local maxima of the accumulator mark candidate circle centres.
    """
    return CircleTransform(config).transform(image, noise=noise, deinterlace=deinterlace)
