"""I/O handling for images, accumulators, and JSON summaries."""

import cv2
import json
import numpy as np
from pathlib import Path
from typing import Any, Dict, Optional


class JSONWriter:
    """Write transform summaries to JSON."""
    
    @staticmethod
    def save_results(output_dict: Any, output_path: str, indent: int = 2):
        """Save results to JSON file."""
        Path(output_path).parent.mkdir(parents=True, exist_ok=True)
        with open(output_path, 'w') as f:
            json.dump(output_dict, f, indent=indent)
    
    @staticmethod
    def load_results(input_path: str) -> Dict:
        """Load results from JSON file."""
        with open(input_path, 'r') as f:
            return json.load(f)


def load_image(image_path: str) -> Optional[np.ndarray]:
    """Load image from file as a single-channel array, keeping its bit depth."""
    image = cv2.imread(str(image_path), cv2.IMREAD_ANYDEPTH | cv2.IMREAD_GRAYSCALE)
    return image


def save_image(image: np.ndarray, output_path: str):
    """Save image to file."""
    Path(output_path).parent.mkdir(parents=True, exist_ok=True)
    cv2.imwrite(str(output_path), image)


def save_accumulator(accumulator: np.ndarray, output_path: str):
    """
    Save an accumulator.
    
    ``.npy`` keeps the exact int64 counts; any other extension is written
    through OpenCV as 16-bit, saturating counts above 65535.
    """
    path = Path(output_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    if path.suffix == '.npy':
        np.save(path, accumulator)
    else:
        cv2.imwrite(str(path), np.clip(accumulator, 0, 65535).astype(np.uint16))


def load_accumulator(input_path: str) -> np.ndarray:
    """Load an accumulator saved by save_accumulator."""
    path = Path(input_path)
    if path.suffix == '.npy':
        return np.load(path)
    return cv2.imread(str(path), cv2.IMREAD_UNCHANGED).astype(np.int64)
