# /degraded_type/generator.py

import logging
import re
import time
import collections
import numpy as np
from pathlib import Path
from typing import List, Optional, Tuple
from tqdm import tqdm

from degraded_type.configs.base_config import Config
from degraded_type.core.common import GlyphMetrics, RenderContext
from degraded_type.core.renderer import TextRenderer
from degraded_type.core.surface import RecordingSurface
from degraded_type.data.score_table import ScoreTable
from degraded_type.fonts.glyph_metrics import load_glyph_metrics
from degraded_type.utils.plotter import save_surface_png
from degraded_type.utils.random_source import NumpyRandomSource

def _slug(value: str) -> str:
    return re.sub(r'[^A-Za-z0-9]+', '_', value).strip('_').lower() or "sample"

class DegradedTextGenerator:
    """Renders the configured text once per (entity, year) selection and saves PNGs."""

    def __init__(self, config: Config, score_table: Optional[ScoreTable] = None, metrics: Optional[GlyphMetrics] = None):
        self.config = config
        self.output_dir = Path(self.config.output.output_dir)
        self.score_table = score_table
        self.metrics = metrics
        self.renderer = TextRenderer(self.config.render)
        self.stats = collections.defaultdict(int)
        self.scores = []

    @classmethod
    def from_config(cls, config: Config) -> "DegradedTextGenerator":
        """Loads the score table and font named in the config. Either may be missing."""
        score_table = None
        if config.data.csv_path:
            try:
                score_table = ScoreTable.from_csv(
                    config.data.csv_path,
                    entity_column=config.data.entity_column,
                    year_column=config.data.year_column,
                    score_column=config.data.score_column,
                )
            except (OSError, ValueError) as e:
                logging.warning(f"Could not load scores from {config.data.csv_path}: {e}")
        metrics = load_glyph_metrics(config.font.font_path)
        return cls(config, score_table=score_table, metrics=metrics)

    def build_contexts(self, text: Optional[str] = None) -> List[RenderContext]:
        """One context per configured entity and year (latest year when none are given)."""
        text = self.config.text if text is None else text
        if self.score_table is None:
            return [RenderContext(text=text)]

        entities = self.config.output.entities or self.score_table.entities()
        contexts = []
        for entity in entities:
            years = self.config.output.years or [self.score_table.latest_year(entity)]
            for year in years:
                score = self.score_table.lookup(entity, year)
                if score is None:
                    logging.debug(f"No score for {entity} in {year}.")
                contexts.append(RenderContext(text=text, entity=entity, year=year, score=score))
        return contexts

    def _sample_id(self, index: int, context: RenderContext) -> str:
        if context.entity is None:
            return f"{index}"
        return f"{index}_{_slug(context.entity)}_{context.year}"

    def _render_single_sample(self, index: int, context: RenderContext, master_seed: int) -> Tuple[Optional[str], Optional[str]]:
        """Renders and saves one sample. Returns (output path, error message)."""
        # A fresh, reproducible random state per sample
        random_source = NumpyRandomSource(np.random.default_rng(master_seed + index))
        surface = RecordingSurface()
        style = self.config.style

        try:
            result = self.renderer.render_context(context, style, self.metrics, surface, random_source)

            output_path = self.output_dir / f"{self._sample_id(index, context)}.png"
            save_surface_png(
                surface, style.canvas_width, style.canvas_height, output_path,
                dpi=self.config.output.dpi, apply_blur=self.config.output.apply_blur,
            )

            self.stats['total_samples'] += 1
            self.stats['total_lines'] += len(result.lines)
            self.stats['total_glyphs'] += result.glyphs_drawn
            self.stats['skipped_chars'] += len(result.skipped_chars)
            if context.score is None:
                self.stats['default_scores'] += 1
            self.scores.append(result.score)
            return str(output_path), None
        except Exception as e:
            return None, f"Error rendering sample {index} ({context.entity}, {context.year}): {e}"

    def generate(self, text: Optional[str] = None, dry_run: bool = False) -> List[str]:
        """
        Renders every selection in turn.

        Args:
            text: Overrides the configured text.
            dry_run: If True, renders only the first few selections.

        Returns:
            Paths of the written images.
        """
        start_time = time.time()
        contexts = self.build_contexts(text)
        if dry_run:
            contexts = contexts[:self.config.output.dry_run_num_samples]

        self.output_dir.mkdir(parents=True, exist_ok=True)
        logging.info(f"Rendering {len(contexts)} samples to {self.output_dir.resolve()}")
        if self.metrics is None:
            logging.warning("Rendering without a font: images will only show the background color.")

        outputs, errors = [], []
        for index, context in enumerate(tqdm(contexts, desc="Rendering Samples")):
            output_path, error = self._render_single_sample(index, context, self.config.output.base_seed)
            if error is not None:
                errors.append(error)
            else:
                outputs.append(output_path)

        if errors:
            logging.warning(f"Encountered {len(errors)} errors during rendering:")
            for error in errors[:5]:
                logging.warning(f"  - {error}")

        duration = time.time() - start_time
        logging.info(f"Rendering completed in {duration:.2f} seconds.")
        return outputs

    def print_summary_report(self):
        """Prints aggregate statistics for the rendered samples."""
        print("\n--- Render Summary Report ---")
        if self.stats['total_samples'] == 0:
            print("No samples were rendered.")
            return

        print(f"Total Samples Rendered: {self.stats['total_samples']}")
        print(f"Samples Using Default Score: {self.stats['default_scores']}")
        print(f"Total Glyphs Drawn: {self.stats['total_glyphs']:,}")
        print(f"Average Lines per Sample: {self.stats['total_lines'] / self.stats['total_samples']:.2f}")
        print(f"Characters Without Glyphs: {self.stats['skipped_chars']}")

        scores = np.array(self.scores)
        print("\nScore:")
        print(f"  - Min: {np.min(scores):.3f}")
        print(f"  - Mean: {np.mean(scores):.3f}")
        print(f"  - Max: {np.max(scores):.3f}")
        print("-----------------------------\n")
