"""
Command line driver: reads a dataset and prints a summary.

Usage:
    # ICDAR 2013 with the default layout
    python -m icdar_reader --training-dir ./Challenge2_Training --test-dir ./Challenge2_Test

    # First 10 samples of each split, custom layout
    python -m icdar_reader --training-dir ./train --test-dir ./test \\
        --layout-config layout.yaml --training-limit 10 --test-limit 10
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

import yaml

from .dataset import DatasetAssembler
from .errors import ICDARReaderError
from .image_decoder import ImageDecoder
from .layouts import DatasetLayout, get_available_layouts, get_layout
from .utils import setup_logging

logger = logging.getLogger("icdar_reader.cli")


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Read an ICDAR text detection dataset into memory",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter
    )

    parser.add_argument(
        "--training-dir", type=Path, required=True,
        help="Directory with training images and annotation files"
    )
    parser.add_argument(
        "--test-dir", type=Path, required=True,
        help="Directory with test images and annotation files"
    )
    parser.add_argument(
        "--layout", type=str, default="icdar2013",
        choices=get_available_layouts(),
        help="Built-in dataset layout"
    )
    parser.add_argument(
        "--layout-config", type=Path, default=None,
        help="YAML layout file (overrides --layout)"
    )
    parser.add_argument(
        "--training-limit", type=int, default=0,
        help="Max training samples (0 = full range)"
    )
    parser.add_argument(
        "--test-limit", type=int, default=0,
        help="Max test samples (0 = full range)"
    )
    parser.add_argument(
        "--workers", type=int, default=1,
        help="Number of decoding threads per split"
    )
    parser.add_argument(
        "--backend", type=str, default="opencv",
        choices=list(ImageDecoder.BACKENDS),
        help="Image decoding library"
    )
    parser.add_argument(
        "--progress", action="store_true",
        help="Show progress bars"
    )
    parser.add_argument(
        "--log-dir", type=Path, default=None,
        help="Also write logs to a timestamped file in this directory"
    )
    parser.add_argument(
        "--verbose", action="store_true",
        help="Log every file read"
    )

    return parser.parse_args(argv)


def load_layout(args: argparse.Namespace) -> DatasetLayout:
    """Resolve the layout from --layout-config or --layout."""
    if args.layout_config is not None:
        return DatasetLayout.from_yaml(args.layout_config)
    return get_layout(args.layout)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    setup_logging(args.log_dir, verbose=args.verbose)

    try:
        layout = load_layout(args)
        assembler = DatasetAssembler(
            layout=layout,
            decoder=ImageDecoder(backend=args.backend),
            workers=args.workers,
            show_progress=args.progress,
        )
        dataset = assembler.assemble(
            args.training_dir,
            args.test_dir,
            training_limit=args.training_limit,
            test_limit=args.test_limit,
        )
    except (ICDARReaderError, ValueError, OSError, yaml.YAMLError) as e:
        logger.error(str(e))
        return 1

    summary = {"layout": layout.name, **dataset.summary()}
    print(json.dumps(summary, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
