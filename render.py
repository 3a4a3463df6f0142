# /render.py

import yaml
import logging
import argparse
from pathlib import Path

from degraded_type.configs.base_config import Config
from degraded_type.generator import DegradedTextGenerator

def setup_logging():
    """Configures logging for the script."""
    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

def main():
    """
    Renders the configured text, degraded by each selection's score.
    Most parameters live in the YAML file; the flags below override the
    selection for a quick single render.
    """
    setup_logging()
    parser = argparse.ArgumentParser(description="Render text whose legibility follows a score.")
    parser.add_argument(
        '--config',
        type=str,
        default='degraded_type/configs/default_config.yaml',
        help='Path to the YAML configuration file.'
    )
    parser.add_argument('--text', type=str, default=None, help='Text to render (overrides the config).')
    parser.add_argument('--entity', type=str, default=None, help='Render a single entity.')
    parser.add_argument('--year', type=int, default=None, help='Year to look up for the entity.')
    parser.add_argument(
        '--dry-run',
        action='store_true',
        help='Render only the first few selections to check the configuration.'
    )
    args = parser.parse_args()

    # 1. Load and validate configuration
    config_path = Path(args.config)
    if not config_path.exists():
        logging.error(f"Configuration file not found at {config_path}")
        return

    logging.info(f"Loading configuration from: {config_path}")
    with open(config_path, 'r') as f:
        config_dict = yaml.safe_load(f) or {}

    try:
        config = Config(**config_dict)
    except Exception as e:
        logging.critical(f"Error validating configuration: {e}")
        return

    if args.entity is not None:
        config.output.entities = [args.entity]
    if args.year is not None:
        config.output.years = [args.year]

    # 2. Initialize the generator
    generator = DegradedTextGenerator.from_config(config)

    # 3. Render
    generator.generate(text=args.text, dry_run=args.dry_run)
    generator.print_summary_report()

if __name__ == "__main__":
    main()
