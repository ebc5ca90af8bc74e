"""
Field Selection Module
Extracts a single interlaced field (even or odd rows) from an image
"""

import numpy as np
from typing import Optional


class FieldSelector:
    """Selects the rows of one interlaced video field."""
    
    def __init__(self, deinterlace: Optional[int] = None):
        """
        Initialize field selector.
        
        Args:
            deinterlace: Row parity to keep (value mod 2), or None to keep every row
        """
        self.deinterlace = deinterlace
    
    @property
    def active(self) -> bool:
        return self.deinterlace is not None
    
    @property
    def parity(self) -> int:
        return 0 if self.deinterlace is None else int(self.deinterlace) % 2
    
    def select(self, image: np.ndarray) -> np.ndarray:
        """
        Extract the selected field.
        
        Args:
            image: 2D image indexed [y, x]
            
        Returns:
            The image itself when no field is selected, otherwise every second
            row starting at the parity row, as float64
        """
        if not self.active:
            return image
        return image[self.parity::2, :].astype(np.float64)
    
    def to_frame_rows(self, rows: np.ndarray) -> np.ndarray:
        """Map row indices within the field back to full-frame row indices."""
        if not self.active:
            return rows
        return 2 * rows + self.parity


def select_field(image: np.ndarray, deinterlace: Optional[int] = None) -> np.ndarray:
    """Extract one interlaced field from image."""
    return FieldSelector(deinterlace).select(image)
