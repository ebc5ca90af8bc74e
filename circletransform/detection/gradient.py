"""Smoothed image gradients from a 5x5 Savitzky-Golay derivative filter."""

import numpy as np
from scipy import ndimage
from typing import Tuple

# Least-squares third-order 2D Savitzky-Golay estimate of d/dx over a 5x5
# patch, indexed [y, x]. The y-derivative filter is the transpose.
SAVGOL_DX = np.array([
    [ 0.0738, -0.1048, 0.0, 0.1048, -0.0738],
    [-0.0119, -0.1476, 0.0, 0.1476,  0.0119],
    [-0.0405, -0.1619, 0.0, 0.1619,  0.0405],
    [-0.0119, -0.1476, 0.0, 0.1476,  0.0119],
    [ 0.0738, -0.1048, 0.0, 0.1048, -0.0738],
])

# sqrt(2 * sum(K^2)): propagated noise on the gradient magnitude per unit pixel noise
SAVGOL_DX_NORM = float(np.sqrt(2.0 * np.sum(SAVGOL_DX ** 2)))

# Round-off headroom for the degenerate-gradient floor, in units of machine epsilon
_FLOOR_ULPS = 32


class GradientEstimator:
    """Estimates (d/dx, d/dy) of an image with edge-replicating correlation."""
    
    def __init__(self, kernel: np.ndarray = SAVGOL_DX):
        self.kernel = np.asarray(kernel, dtype=np.float64)
    
    def estimate(self, image: np.ndarray, deinterlaced: bool = False) -> Tuple[np.ndarray, np.ndarray]:
        """
        Compute the gradient field.
        
        Args:
            image: 2D image indexed [y, x]
            deinterlaced: True when image holds every second row of a frame;
                          the y-derivative is then halved to match frame rows
            
        Returns:
            (dadx, dady) float64 arrays with the shape of image
        """
        a = np.asarray(image, dtype=np.float64)
        dadx = ndimage.correlate(a, self.kernel, mode='nearest')
        dady = ndimage.correlate(a, self.kernel.T, mode='nearest')
        if deinterlaced:
            dady /= 2.0
        return dadx, dady
    
    def floor(self, image: np.ndarray) -> float:
        """
        Smallest gradient magnitude distinguishable from round-off in image.
        
        A constant image correlates to zero only in exact arithmetic; its
        floating-point gradient sits below this floor.
        """
        a = np.asarray(image, dtype=np.float64)
        finite = np.abs(a[np.isfinite(a)])
        if finite.size == 0:
            return 0.0
        scale = float(finite.max())
        return _FLOOR_ULPS * np.finfo(np.float64).eps * scale * float(np.sum(np.abs(self.kernel)))


def compute_gradient(image: np.ndarray, deinterlaced: bool = False) -> Tuple[np.ndarray, np.ndarray]:
    """Estimate image gradients with the default Savitzky-Golay filter."""
    return GradientEstimator().estimate(image, deinterlaced)
