"""Batch processing example for multiple images."""

from pathlib import Path

from circletransform.core import CircleTransform
from circletransform.errors import CircleTransformError
from circletransform.utils.io_handler import JSONWriter, load_image, save_accumulator
from circletransform.utils.logger import setup_logger


def process_image(image, transform):
    """Process a single image."""
    accumulator, mean_range = transform.transform(image)
    return accumulator, {
        'candidates': transform.last_stats['candidates'],
        'mean_range': mean_range,
        'max_votes': int(accumulator.max()),
    }


def main():
    """Process every image in a directory."""
    logger = setup_logger('batch_processor')
    transform = CircleTransform({'voting': {'n_jobs': 4}})
    
    images_dir = Path("test_data/images")
    image_files = sorted(images_dir.glob("*.png")) + sorted(images_dir.glob("*.tif"))
    
    logger.info(f"Processing {len(image_files)} images...")
    
    results = []
    for i, image_path in enumerate(image_files):
        logger.info(f"Processing image {i+1}/{len(image_files)}: {image_path.name}")
        
        image = load_image(str(image_path))
        if image is None:
            logger.warning(f"Could not load {image_path}")
            continue
        
        try:
            accumulator, result = process_image(image, transform)
        except CircleTransformError as e:
            logger.warning(f"Skipping {image_path.name}: {e}")
            continue
        
        save_accumulator(accumulator, f"output/{image_path.stem}_accumulator.npy")
        result['image_name'] = image_path.name
        results.append(result)
    
    JSONWriter.save_results(results, "output/batch_results.json")
    logger.info("Batch processing complete!")


if __name__ == "__main__":
    main()
