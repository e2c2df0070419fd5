"""
Command Line Interface for the image optimization pipeline.
"""

import argparse
import dataclasses
import locale
import logging
import sys
from typing import List, Optional

from .cache_store import CacheStore
from .manifest import Manifest
from .pipeline import Pipeline
from .pipeline_config import PipelineConfig
from .pipeline_progress import PipelineProgress
from .reporter import Reporter


def setup_logging(verbose: bool) -> logging.Logger:
    """Configure logging."""
    level = logging.DEBUG if verbose else logging.INFO

    logging.basicConfig(
        level=level,
        format='%(asctime)s [%(levelname)s] %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    logging.getLogger('PIL').setLevel(logging.WARNING)

    return logging.getLogger('imgpipe')


def setup_locale(logger: logging.Logger) -> None:
    """Adopt the user's collation locale so manifest keys sort naturally."""
    try:
        locale.setlocale(locale.LC_COLLATE, '')
    except locale.Error as e:
        logger.debug(f"Could not set collation locale: {e}")


def get_config(args: argparse.Namespace) -> PipelineConfig:
    """Get pipeline configuration from .env/environment and CLI overrides."""
    config = PipelineConfig.from_env(args.project_root)

    overrides = {}
    if getattr(args, 'base_url', None):
        overrides['base_url'] = args.base_url
    if getattr(args, 'concurrency', None) is not None:
        overrides['concurrency'] = args.concurrency
    if getattr(args, 'remove_source', False):
        overrides['remove_source'] = True
    if getattr(args, 'dry_run', False):
        overrides['dry_run'] = True

    if overrides:
        config = dataclasses.replace(config, **overrides)
    return config


def cmd_run(args: argparse.Namespace) -> int:
    """Execute run command."""
    logger = setup_logging(args.verbose)
    setup_locale(logger)

    config = get_config(args)
    errors = config.validate()
    if errors:
        for error in errors:
            logger.error(error)
        return 1

    logger.info(f"Images: {config.images_dir}")
    logger.info(f"Output: {config.optimized_dir}")
    logger.info(f"Base URL: {config.base_url or '(none, using local paths)'}")
    logger.info(f"Concurrency: {config.concurrency}")
    if config.remove_source:
        logger.info("Sources will be removed after optimization")
    if config.dry_run:
        logger.info("Dry-run mode: nothing will be written")

    progress = None
    if not args.quiet:
        progress = PipelineProgress(show_files=args.show_files, logger=logger)

    try:
        pipeline = Pipeline(config, progress=progress, logger=logger)
        stats = pipeline.run()
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        return 130
    except Exception as e:
        logger.exception(f"Pipeline failed: {e}")
        return 1

    Reporter().report_summary(stats, config)
    return 0


def cmd_report(args: argparse.Namespace) -> int:
    """Execute report command."""
    logger = setup_logging(args.verbose)
    setup_locale(logger)

    config = PipelineConfig.from_env(args.project_root)
    manifest = Manifest.load(config.manifest_path, logger)
    cache = CacheStore.load(config.cache_path, logger)

    if not config.manifest_path.exists():
        logger.warning(f"Manifest not found: {config.manifest_path}")

    Reporter().report_manifest(manifest, cache, config)
    return 0


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog='imgpipe',
        description='Incremental WebP optimization for static image assets',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Layout (relative to --project-root):
  Images/                     source images (scanned recursively)
  Images/optimized/           generated WebP files (never scanned)
  Images/image-manifest.json  key -> URL manifest
  Images/.image-cache.json    key -> content hash cache

Environment (.env or process):
  IMAGES_BASE_URL, REMOVE_SOURCE_AFTER_OPTIMIZE, REACT_MANIFEST_OUTPUT,
  IMAGE_PIPELINE_CONCURRENCY
"""
    )

    parser.add_argument('-v', '--verbose', action='store_true', help='Enable verbose logging')

    subparsers = parser.add_subparsers(dest='command', help='Command to run (default: run)')

    run_parser = subparsers.add_parser('run', help='Optimize new and changed images')
    run_parser.add_argument('--project-root', default='.', help='Project directory (default: .)')
    run_parser.add_argument('-c', '--concurrency', type=int, metavar='N',
                            help='Maximum simultaneous encodes (default: 5)')
    run_parser.add_argument('--base-url', help='Override IMAGES_BASE_URL')
    run_parser.add_argument('--remove-source', action='store_true',
                            help='Delete sources after successful optimization')
    run_parser.add_argument('-n', '--dry-run', action='store_true', help='Show what would be done')
    run_parser.add_argument('-q', '--quiet', action='store_true', help='Suppress progress output')
    run_parser.add_argument('--show-files', action='store_true',
                            help='Print each image as it is handled')
    run_parser.add_argument('-v', '--verbose', action='store_true', default=argparse.SUPPRESS,
                            help='Enable verbose logging')

    report_parser = subparsers.add_parser('report', help='Show manifest and cache status')
    report_parser.add_argument('--project-root', default='.', help='Project directory (default: .)')
    report_parser.add_argument('-v', '--verbose', action='store_true', default=argparse.SUPPRESS,
                               help='Enable verbose logging')

    return parser


def main(args: Optional[List[str]] = None) -> int:
    """Main entry point."""
    parser = create_parser()
    argv = list(sys.argv[1:] if args is None else args)
    parsed_args = parser.parse_args(argv)

    if not parsed_args.command:
        parsed_args = parser.parse_args(argv + ['run'])

    if parsed_args.command == 'run':
        return cmd_run(parsed_args)
    elif parsed_args.command == 'report':
        return cmd_report(parsed_args)

    return 1
