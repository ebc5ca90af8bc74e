"""
Headless circle transform of a single image - saves results, no GUI windows
"""

import argparse
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent))

from circletransform.config import DEFAULT_CONFIG, TransformConfig, load_config
from circletransform.core import CircleTransform
from circletransform.errors import CircleTransformError
from circletransform.utils.io_handler import JSONWriter, load_image, save_accumulator, save_image
from circletransform.utils.logger import setup_from_config
from circletransform.utils.visualization import accumulator_heatmap, overlay_accumulator


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Circle transform of a grayscale image")
    parser.add_argument("image", help="Path to the input image")
    parser.add_argument("--noise", type=float, default=None,
                        help="Pixel noise (default: robust estimate from the image)")
    parser.add_argument("--deinterlace", type=int, default=None,
                        help="Use only rows of this parity (0 or 1)")
    parser.add_argument("--config", default=None, help="YAML configuration file")
    parser.add_argument("--output", default="output", help="Output directory")
    return parser.parse_args(argv)


def main(argv=None):
    """Transform one image and save the accumulator, heatmap and summary."""
    args = parse_args(argv)
    
    try:
        config = load_config(args.config) if args.config else DEFAULT_CONFIG
        logger = setup_from_config(config)
        transform = CircleTransform(TransformConfig.from_dict(config))
    except CircleTransformError as e:
        print(f"[X] Error: {e}")
        return 1
    
    image_path = Path(args.image)
    if not image_path.exists():
        logger.error(f"Image not found at '{image_path}'")
        return 1
    
    image = load_image(str(image_path))
    if image is None:
        logger.error(f"Cannot load image '{image_path}'")
        return 1
    
    logger.info(f"Image size: {image.shape[1]} x {image.shape[0]} pixels")
    
    try:
        accumulator, mean_range = transform.transform(
            image, noise=args.noise, deinterlace=args.deinterlace
        )
    except CircleTransformError as e:
        logger.error(f"Transform failed: {e}")
        return 1
    
    output_dir = Path(args.output)
    stem = image_path.stem
    save_accumulator(accumulator, str(output_dir / f"{stem}_accumulator.npy"))
    save_image(accumulator_heatmap(accumulator), str(output_dir / f"{stem}_heatmap.png"))
    save_image(overlay_accumulator(image, accumulator), str(output_dir / f"{stem}_overlay.png"))
    
    summary = {
        "image": str(image_path),
        "shape": list(accumulator.shape),
        "noise": transform.last_stats.get("noise"),
        "candidates": transform.last_stats.get("candidates", 0),
        "mean_range": mean_range,
        "max_votes": int(accumulator.max()),
        "timings_ms": transform.last_timings,
    }
    JSONWriter.save_results(summary, str(output_dir / f"{stem}_summary.json"))
    
    logger.info(f"{summary['candidates']} candidates, mean range {mean_range:.2f}, "
                f"max votes {summary['max_votes']}")
    logger.info(f"Results saved to: {output_dir}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
