"""Vote casting along gradient lines into a centre accumulator."""

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import List, Tuple

import numpy as np

from circletransform.detection.confidence import VoteCandidates

logger = logging.getLogger(__name__)

# Largest vote half-range whose counts stay exact in int64 accumulators
_RANGE_LIMIT = 2 ** 40


def round_half_away(values: np.ndarray) -> np.ndarray:
    """Round to the nearest integer with ties away from zero."""
    values = np.asarray(values, dtype=np.float64)
    return (np.sign(values) * np.floor(np.abs(values) + 0.5)).astype(np.int64)


class VoteCaster:
    """
    Casts votes along each candidate's gradient line.
    
    Every candidate votes at integer steps t in [-rng, rng] along its
    gradient direction. Off-image targets are clamped onto the border.
    """
    
    def __init__(self, chunk_size: int = 1048576, n_jobs: int = 1):
        """
        Initialize vote caster.
        
        Args:
            chunk_size: Maximum number of votes cast per partial accumulator
            n_jobs: Number of worker threads filling partial accumulators
        """
        self.chunk_size = chunk_size
        self.n_jobs = n_jobs
    
    @staticmethod
    def max_range(shape: Tuple[int, int]) -> int:
        """Vote half-range used when there is no angular uncertainty: the image diagonal."""
        ny, nx = shape
        return int(np.ceil(np.hypot(nx, ny)))
    
    def vote_ranges(self, candidates: VoteCandidates, shape: Tuple[int, int]) -> np.ndarray:
        """
        Per-candidate vote half-range.
        
        rng = round(2 / tan((delta / grada) / 2)) is the number of steps along
        the gradient line before the angular uncertainty delta / grada
        amounts to about 4 pixels of lateral error. With delta == 0 the
        formula diverges and the range is the image diagonal instead. Ranges
        beyond _RANGE_LIMIT (noise around 1e-12 of the gradient) are limited to it.
        """
        if len(candidates) == 0:
            return np.zeros(0, dtype=np.int64)
        half_angle = (candidates.delta / candidates.grada) / 2.0
        with np.errstate(divide='ignore'):
            rng = 2.0 / np.tan(half_angle)
        rng = np.where(np.isfinite(rng), rng, self.max_range(shape))
        if np.any(rng > _RANGE_LIMIT):
            logger.warning(f"Vote ranges above {_RANGE_LIMIT} steps limited to keep counts exact")
            rng = np.minimum(rng, _RANGE_LIMIT)
        return np.maximum(round_half_away(rng), 0)
    
    def cast(self, candidates: VoteCandidates, rng: np.ndarray,
             shape: Tuple[int, int]) -> np.ndarray:
        """
        Accumulate all votes.
        
        Args:
            candidates: Voting pixels
            rng: Vote half-range per candidate
            shape: Full-frame (ny, nx) shape of the accumulator
            
        Returns:
            int64 accumulator of the given shape
        """
        accumulator = np.zeros(shape, dtype=np.int64)
        if len(candidates) == 0:
            return accumulator
        
        lo, hi = self._spans(candidates, rng, shape)
        chunks = self._partition(hi - lo + 1)
        logger.debug(f"Casting {int(np.sum(2 * rng + 1))} votes in {len(chunks)} chunk(s)")
        
        def work(bounds):
            start, stop = bounds
            return self._cast_chunk(candidates, rng, lo, hi, start, stop, shape)
        
        if self.n_jobs > 1 and len(chunks) > 1:
            with ThreadPoolExecutor(max_workers=self.n_jobs) as ex:
                for partial in ex.map(work, chunks):
                    accumulator += partial
        else:
            for bounds in chunks:
                accumulator += work(bounds)
        
        return accumulator
    
    @staticmethod
    def _spans(candidates: VoteCandidates, rng: np.ndarray,
               shape: Tuple[int, int]) -> Tuple[np.ndarray, np.ndarray]:
        """
        Offsets [lo, hi] that are cast one by one.
        
        Beyond hi (and below lo) both clamped target coordinates are fixed,
        so the remaining votes of the line all fall on the cell at hi (lo).
        """
        ny, nx = shape
        fx, bx = _saturation(candidates.x, candidates.cos_theta, nx)
        fy, by = _saturation(candidates.y, candidates.sin_theta, ny)
        hi = np.minimum(rng, np.ceil(np.maximum(fx, fy))).astype(np.int64)
        lo = -np.minimum(rng, np.ceil(np.maximum(bx, by))).astype(np.int64)
        return lo, hi
    
    def _partition(self, counts: np.ndarray) -> List[Tuple[int, int]]:
        """Split candidates into runs of at most chunk_size votes; larger candidates run alone."""
        votes = np.cumsum(counts)
        chunks = []
        start = 0
        while start < counts.size:
            before = votes[start - 1] if start else 0
            stop = int(np.searchsorted(votes, before + self.chunk_size, side='right'))
            stop = max(stop, start + 1)
            chunks.append((start, stop))
            start = stop
        return chunks
    
    @staticmethod
    def _cast_chunk(candidates: VoteCandidates, rng: np.ndarray, lo: np.ndarray,
                    hi: np.ndarray, start: int, stop: int,
                    shape: Tuple[int, int]) -> np.ndarray:
        ny, nx = shape
        
        def cells(index, t):
            x = round_half_away(candidates.x[index] + t * candidates.cos_theta[index])
            y = round_half_away(candidates.y[index] + t * candidates.sin_theta[index])
            np.clip(x, 0, nx - 1, out=x)
            np.clip(y, 0, ny - 1, out=y)
            return y * nx + x
        
        index = np.arange(start, stop)
        counts = hi[start:stop] - lo[start:stop] + 1
        owner = np.repeat(index, counts)
        
        # position of each vote within its candidate's run, shifted to [lo, hi]
        first = np.cumsum(counts) - counts
        t = np.arange(owner.size) - np.repeat(first, counts) + np.repeat(lo[start:stop], counts)
        partial = np.bincount(cells(owner, t), minlength=nx * ny).astype(np.int64)
        
        # saturated tails of each line
        for end, tail in ((hi, rng - hi), (lo, rng + lo)):
            tail = tail[start:stop]
            busy = tail > 0
            if np.any(busy):
                np.add.at(partial, cells(index[busy], end[start:stop][busy]), tail[busy])
        
        return partial.reshape(shape)


def _saturation(p: np.ndarray, c: np.ndarray, n: int) -> Tuple[np.ndarray, np.ndarray]:
    """
    Steps forward and backward along direction c after which
    clip(round(p + t * c), 0, n - 1) no longer changes.
    """
    with np.errstate(divide='ignore', invalid='ignore'):
        to_high = np.maximum(n - 1 - p, 0) / np.abs(c)
        to_low = np.maximum(p, 0) / np.abs(c)
    forward = np.where(c > 0, to_high, to_low)
    backward = np.where(c > 0, to_low, to_high)
    still = c == 0
    forward[still] = 0
    backward[still] = 0
    return forward, backward
