"""Batch processing example for a directory of images."""

import sys
from pathlib import Path

from bullseye.core import BullseyeProcessor
from bullseye.config import load_config
from bullseye.utils.io_handler import JSONWriter
from bullseye.utils.logger import setup_logger, create_session_log_file


def main():
    """Process every image in a directory and write one JSON report."""
    logger = setup_logger('batch_processor', log_file=create_session_log_file())

    images_dir = Path(sys.argv[1]) if len(sys.argv) > 1 else Path("test_data/images")
    config = load_config(sys.argv[2]) if len(sys.argv) > 2 else None
    processor = BullseyeProcessor(config)

    image_files = sorted(p for p in images_dir.iterdir()
                         if p.suffix.lower() in ('.png', '.jpg', '.pgm', '.bmp', '.tif'))
    logger.info(f"Processing {len(image_files)} images...")

    results = []
    for i, image_path in enumerate(image_files):
        logger.info(f"Processing image {i+1}/{len(image_files)}: {image_path.name}")
        try:
            result = processor.process_image(image_path)
        except ValueError as e:
            logger.warning(f"Could not load {image_path}: {e}")
            continue
        logger.info(f"  {result['status']}: {len(result['keypoints'])} marker(s)")
        results.append(result)

    JSONWriter.save_results(results, "output/batch_results.json",
                            indent=processor.config['output']['json_indent'])
    logger.info("Batch processing complete!")


if __name__ == "__main__":
    main()
