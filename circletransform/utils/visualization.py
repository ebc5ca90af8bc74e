"""Visualization utilities for debugging and display."""

import cv2
import numpy as np
from typing import Optional, Tuple

from circletransform.detection.confidence import VoteCandidates


def to_uint8(image: np.ndarray) -> np.ndarray:
    """Linearly stretch an image to the full 8-bit range."""
    a = np.asarray(image, dtype=np.float64)
    lo, hi = float(a.min()), float(a.max())
    if hi <= lo:
        return np.zeros(a.shape, dtype=np.uint8)
    return np.round(255 * (a - lo) / (hi - lo)).astype(np.uint8)


def accumulator_heatmap(accumulator: np.ndarray,
                        colormap: int = cv2.COLORMAP_JET) -> np.ndarray:
    """Render an accumulator as a BGR heatmap."""
    return cv2.applyColorMap(to_uint8(accumulator), colormap)


def overlay_accumulator(image: np.ndarray, accumulator: np.ndarray,
                        alpha: float = 0.5) -> np.ndarray:
    """Blend the accumulator heatmap over a grayscale image."""
    base = cv2.cvtColor(to_uint8(image), cv2.COLOR_GRAY2BGR)
    heatmap = accumulator_heatmap(accumulator)
    return cv2.addWeighted(base, 1 - alpha, heatmap, alpha, 0)


def draw_vote_lines(image: np.ndarray, candidates: VoteCandidates, rng: np.ndarray,
                    color: Tuple[int, int, int] = (0, 255, 255),
                    thickness: int = 1, step: Optional[int] = None) -> np.ndarray:
    """Draw the gradient line segment each candidate votes along."""
    output = cv2.cvtColor(to_uint8(image), cv2.COLOR_GRAY2BGR)
    step = step or max(1, len(candidates) // 500)
    for i in range(0, len(candidates), step):
        dx = rng[i] * candidates.cos_theta[i]
        dy = rng[i] * candidates.sin_theta[i]
        p1 = (int(round(candidates.x[i] - dx)), int(round(candidates.y[i] - dy)))
        p2 = (int(round(candidates.x[i] + dx)), int(round(candidates.y[i] + dy)))
        cv2.line(output, p1, p2, color, thickness)
    return output
