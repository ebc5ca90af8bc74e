"""Noise-based selection of pixels that are allowed to vote."""

import logging
from dataclasses import dataclass
from typing import Optional

import numpy as np

from circletransform.detection.gradient import SAVGOL_DX_NORM
from circletransform.preprocessing.field_selector import FieldSelector

logger = logging.getLogger(__name__)


@dataclass
class VoteCandidates:
    """
    Pixels whose gradient clearly exceeds the noise.
    
    Coordinates are in full-frame pixels, shifted by the pixel-centre offset.
    ``cos_theta`` and ``sin_theta`` give the unit gradient direction.
    """
    x: np.ndarray
    y: np.ndarray
    cos_theta: np.ndarray
    sin_theta: np.ndarray
    grada: np.ndarray
    delta: float
    
    def __len__(self) -> int:
        return int(self.x.size)


class ConfidenceFilter:
    """Keeps pixels whose gradient magnitude exceeds the propagated noise bound."""
    
    def __init__(self, threshold_factor: float = 2.0, pixel_offset: int = 1,
                 kernel_norm: float = SAVGOL_DX_NORM):
        """
        Initialize confidence filter.
        
        Args:
            threshold_factor: Multiple of the uncertainty bound a gradient must exceed
            pixel_offset: Shift applied to candidate coordinates before voting
            kernel_norm: sqrt(2 * sum(K^2)) of the derivative kernel
        """
        self.threshold_factor = threshold_factor
        self.pixel_offset = pixel_offset
        self.kernel_norm = kernel_norm
    
    def uncertainty(self, noise: float) -> float:
        """Standard deviation of the gradient magnitude for pixel noise `noise`."""
        return float(noise) * self.kernel_norm
    
    def mask(self, dadx: np.ndarray, dady: np.ndarray, noise: float,
             floor: float = 0.0) -> np.ndarray:
        """
        Boolean mask of candidate pixels.
        
        A pixel qualifies when its magnitude is finite, strictly above the
        degenerate floor (so never zero), and above threshold_factor * delta.
        """
        grada = np.hypot(dadx, dady)
        delta = self.uncertainty(noise)
        with np.errstate(invalid='ignore'):
            keep = np.isfinite(grada) & (grada > floor) & (grada > 0)
            keep &= grada > self.threshold_factor * delta
        return keep
    
    def select(self, dadx: np.ndarray, dady: np.ndarray, noise: float,
               floor: float = 0.0,
               field: Optional[FieldSelector] = None) -> VoteCandidates:
        """
        Extract the vote candidates.
        
        Args:
            dadx, dady: Gradient field indexed [y, x]
            noise: Pixel noise estimate
            floor: Gradient magnitudes at or below this are treated as zero
            field: Field selector used on the image, for mapping rows back
                   to the full frame
            
        Returns:
            VoteCandidates, possibly empty
        """
        keep = self.mask(dadx, dady, noise, floor)
        rows, cols = np.nonzero(keep)
        gx = dadx[rows, cols]
        gy = dady[rows, cols]
        grada = np.hypot(gx, gy)
        
        if field is not None:
            rows = field.to_frame_rows(rows)
        
        candidates = VoteCandidates(
            x=cols.astype(np.float64) + self.pixel_offset,
            y=rows.astype(np.float64) + self.pixel_offset,
            cos_theta=gx / grada,
            sin_theta=gy / grada,
            grada=grada,
            delta=self.uncertainty(noise),
        )
        logger.debug(f"{len(candidates)} of {keep.size} pixels passed the confidence filter")
        return candidates
