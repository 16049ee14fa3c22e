#!/usr/bin/env python3
"""
Main pipeline orchestrator.

Runs the full country data pipeline:
1. Load - Read (or fetch) the base country list and supplemental sources
2. Build - Convert raw countries to canonical records
3. Merge - Fold in timezones, languages and translation patches
4. Export - Aggregate currencies, project views and write JSON files
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from . import config as cfg
from .constants import DUPLICATE_FIRST, DUPLICATE_LAST
from .export.export_json import write_outputs
from .export.views import build_views
from .ingest import countries as countries_source
from .ingest import country_languages, timezones as timezones_source
from .ingest.base import SourceError
from .ingest.languages import load_languages
from .ingest.translations import load_translation_patches
from .merge.currencies import aggregate_currencies
from .merge.merge_countries import merge_countries
from .normalize.countries import build_country_records

logger = logging.getLogger(__name__)


def load_sources(config: Dict[str, Any]) -> Dict[str, Any]:
    """
    Load every input source.

    Raises:
        SourceError: If the base country list can't be loaded or fetched
    """
    loader = countries_source.Loader(
        cfg.source_path(config, 'countries'),
        url=config['countries_url'],
        timeout=config['fetch_timeout'],
    )
    raw_countries = loader.load()

    return {
        'countries': raw_countries,
        'timezones': timezones_source.Loader(cfg.source_path(config, 'timezones')).load(),
        'languages': load_languages(cfg.source_path(config, 'languages'),
                                    cfg.source_paths(config, 'language_patches')),
        'mapping': country_languages.Loader(cfg.source_path(config, 'country_languages')).load(),
        'patches': load_translation_patches(cfg.source_paths(config, 'country_patches'),
                                            cfg.source_path(config, 'translations')),
    }


def build(sources: Dict[str, Any], duplicate_policy: str) -> Dict[str, Dict]:
    """Build and merge country records from loaded sources."""
    logger.info(f"Processing {len(sources['countries'])} countries...")
    records = build_country_records(sources['countries'], duplicate_policy)

    logger.info("Creating merged data...")
    return merge_countries(
        records,
        timezones=sources['timezones'],
        languages=sources['languages'],
        mapping=sources['mapping'],
        patches=sources['patches'],
    )


def run(config: Dict[str, Any]) -> List[str]:
    """
    Run the full pipeline.

    Returns:
        Names of outputs that failed to write

    Raises:
        SourceError: On a fatal source failure (nothing is written)
    """
    logger.info("Starting data processing...")
    sources = load_sources(config)
    merged = build(sources, config['duplicate_policy'])

    logger.info("Creating timezone and currency mappings...")
    currencies = aggregate_currencies(merged.values())
    views = build_views(merged, sources['timezones'], currencies)

    logger.info("Writing output files...")
    failed = write_outputs(views, cfg.output_dir(config))
    if failed:
        logger.warning(f"Failed to write: {', '.join(failed)}")

    logger.info("Data processing completed")
    return failed


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description='Merge country, timezone, language and translation data into JSON views',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  countrymerge                          # Use files in the current directory
  countrymerge -d data -o data/output   # Explicit data and output directories
  countrymerge -c pipeline.json         # Load settings from a config file
  countrymerge --duplicate-policy first # Keep the first of duplicate ISO2 entries
"""
    )

    parser.add_argument('--config', '-c', type=Path,
                        help='JSON config file overriding the defaults')
    parser.add_argument('--data-dir', '-d', type=str,
                        help='Directory holding the input files')
    parser.add_argument('--output-dir', '-o', type=str,
                        help='Output directory (relative paths resolve against the data directory)')
    parser.add_argument('--url', type=str,
                        help='URL of the base country dataset')
    parser.add_argument('--duplicate-policy', type=str,
                        choices=[DUPLICATE_FIRST, DUPLICATE_LAST],
                        help='Which entry to keep when ISO2 codes collide')
    parser.add_argument('--verbose', '-v', action='store_true',
                        help='Enable debug logging')

    return parser.parse_args(argv)


def config_from_args(args: argparse.Namespace) -> Dict[str, Any]:
    """Load config and apply command-line overrides."""
    config = cfg.load_config(args.config)

    overrides = {
        'data_dir': args.data_dir,
        'output_dir': args.output_dir,
        'countries_url': args.url,
        'duplicate_policy': args.duplicate_policy,
    }
    config = cfg.merge_config(config, {k: v for k, v in overrides.items() if v is not None})
    cfg.validate_config(config)
    return config


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)

    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s - %(levelname)s - %(message)s'
    )
    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    try:
        config = config_from_args(args)
    except (OSError, ValueError) as e:
        logger.error(f"Invalid configuration: {e}")
        return 1

    try:
        run(config)
    except SourceError as e:
        logger.error(f"Error in data processing: {e}")
        return 1

    return 0


if __name__ == '__main__':
    sys.exit(main())
