# /degraded_type/configs/base_config.py
import logging
import math
from pathlib import Path
from typing import Any, List, Optional, Tuple, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_FONT_SIZE_PX = 120.0
DEFAULT_LINE_HEIGHT_FACTOR = 1.2
DEFAULT_LETTER_SPACING_PX = 0.0

def _as_float(value: Any) -> Optional[float]:
    """Parses a number the way an HTML input value would be read; None if it is not one."""
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if math.isnan(number) or math.isinf(number):
        return None
    return number

class StyleConfig(BaseModel):
    """
    Typographic settings for one render call. Invalid or missing values are
    replaced by the fixed defaults instead of failing validation.
    """
    model_config = ConfigDict(frozen=True)

    font_size_px: float = DEFAULT_FONT_SIZE_PX
    letter_spacing_px: float = DEFAULT_LETTER_SPACING_PX
    line_height_factor: float = DEFAULT_LINE_HEIGHT_FACTOR
    max_line_width_px: Optional[float] = None
    canvas_width: float = 0.0
    canvas_height: float = 0.0

    @field_validator('font_size_px', mode='before')
    @classmethod
    def font_size_or_default(cls, v):
        number = _as_float(v)
        if number is None or number <= 0:
            logging.debug(f"Invalid font size {v!r}; using {DEFAULT_FONT_SIZE_PX}.")
            return DEFAULT_FONT_SIZE_PX
        return number

    @field_validator('letter_spacing_px', mode='before')
    @classmethod
    def letter_spacing_or_default(cls, v):
        number = _as_float(v)
        if number is None:
            logging.debug(f"Invalid letter spacing {v!r}; using {DEFAULT_LETTER_SPACING_PX}.")
            return DEFAULT_LETTER_SPACING_PX
        return number

    @field_validator('line_height_factor', mode='before')
    @classmethod
    def line_height_or_default(cls, v):
        number = _as_float(v)
        if number is None or number <= 0:
            logging.debug(f"Invalid line height factor {v!r}; using {DEFAULT_LINE_HEIGHT_FACTOR}.")
            return DEFAULT_LINE_HEIGHT_FACTOR
        return number

    @field_validator('max_line_width_px', mode='before')
    @classmethod
    def max_line_width_or_none(cls, v):
        number = _as_float(v)
        return number if number is not None and number > 0 else None

    @field_validator('canvas_width', 'canvas_height', mode='before')
    @classmethod
    def canvas_dimension_or_zero(cls, v):
        number = _as_float(v)
        return number if number is not None and number >= 0 else 0.0

class RenderSettings(BaseModel):
    """Constants of the score-to-visual mapping and of the render policy."""
    max_extra_points: int = Field(10, ge=0)
    max_blur_px: float = Field(4.0, ge=0)
    placeholder_text: str = "font"
    default_score: float = 0.5
    max_width_ratio: float = Field(0.8, gt=0)
    glyph_color: Tuple[int, int, int] = (0, 0, 0)
    missing_glyph_policy: str = "skip"

class DataConfig(BaseModel):
    csv_path: Optional[str] = None
    entity_column: str = "Entity"
    year_column: str = "Year"
    score_column: str = "Freedom of expression and alternative sources of information index (central estimate)"

class FontConfig(BaseModel):
    font_path: Optional[str] = None

class OutputConfig(BaseModel):
    output_dir: str = "output"
    base_seed: int = 42
    entities: List[str] = Field(default_factory=list)
    years: List[int] = Field(default_factory=list)
    dry_run_num_samples: int = 3
    dpi: int = 100
    apply_blur: bool = True

class Config(BaseModel):
    text: str = ""
    style: StyleConfig = Field(default_factory=lambda: StyleConfig(canvas_width=1200, canvas_height=600))
    render: RenderSettings = Field(default_factory=RenderSettings)
    data: DataConfig = Field(default_factory=DataConfig)
    font: FontConfig = Field(default_factory=FontConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)

def load_config(path: Union[str, Path]) -> Config:
    """Reads a YAML file and validates it into a Config."""
    with open(path, 'r') as f:
        config_dict = yaml.safe_load(f) or {}
    return Config(**config_dict)
