"""
Layout settings for the resume page.

All measurements are millimetres unless the name says points (pt). The
defaults describe an A4 page with 20mm margins and Helvetica text.

Overrides come from a YAML file merged onto the defaults:

    section_font_size: 10
    max_bullets: 6
"""

import os
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Optional, Tuple, Union

from dotenv import load_dotenv
from omegaconf import OmegaConf
from omegaconf.errors import ConfigKeyError, OmegaConfBaseException

load_dotenv()
LAYOUT_CONFIG_PATH = os.getenv("VITAE_LAYOUT_CONFIG")

RGB = Tuple[int, int, int]


@dataclass(frozen=True)
class LayoutSettings:
    # Page geometry
    page_width: float = 210.0
    page_height: float = 297.0
    margin: float = 20.0
    top: float = 20.0
    overflow_threshold: float = 280.0

    # Typography
    font_family: str = "helvetica"
    pt_to_mm: float = 0.352778
    name_font_size: float = 14.0
    name_spacing: float = 1.15
    header_font_size: float = 12.0
    header_spacing: float = 1.15
    section_font_size: float = 10.5
    section_spacing: float = 1.0

    # Vertical rhythm
    section_gap: float = 5.0
    bullet_spacing: float = 1.2
    entry_gap_divisor: float = 1.5
    underline_clearance: float = 1.0

    # Entries
    bullet_indent: float = 5.0
    bullet_marker: str = "•"
    max_bullets: int = 8
    graduation_threshold_years: int = 3
    graduated_label: str = "Status - Graduated"
    contact_separator: str = " | "

    # Links
    link_height: float = 5.0
    link_rise: float = 4.0
    underline_offset: float = 0.5

    # Colors
    text_color: RGB = (0, 0, 0)
    link_color: RGB = (0, 0, 255)

    # Headings
    education_heading: str = "Education and Certification"
    experience_heading: str = "Work History/Projects/Internships"

    @property
    def content_width(self) -> float:
        return self.page_width - 2 * self.margin


DEFAULT_LAYOUT_SETTINGS = LayoutSettings()


def load_layout_settings(config_path: Optional[Union[str, Path]] = LAYOUT_CONFIG_PATH) -> LayoutSettings:
    """
    Load layout settings, applying overrides from a YAML file.

    Args:
        config_path: YAML file with overrides (defaults to VITAE_LAYOUT_CONFIG;
            None returns the defaults)

    Returns:
        LayoutSettings with overrides applied

    Raises:
        ValueError: If the file sets an unknown key or a value of the wrong type
    """
    if config_path is None:
        return DEFAULT_LAYOUT_SETTINGS

    base = OmegaConf.create(asdict(DEFAULT_LAYOUT_SETTINGS))
    OmegaConf.set_struct(base, True)

    try:
        merged = OmegaConf.merge(base, OmegaConf.load(Path(config_path)))
    except ConfigKeyError as e:
        available = list(asdict(DEFAULT_LAYOUT_SETTINGS))
        raise ValueError(f"Unknown layout setting in {config_path}: {e}. Available: {available}")
    except OmegaConfBaseException as e:
        raise ValueError(f"Invalid layout settings in {config_path}: {e}")

    values = OmegaConf.to_container(merged, resolve=True)
    for key, value in values.items():
        if isinstance(value, list):
            value = values[key] = tuple(value)
        default = getattr(DEFAULT_LAYOUT_SETTINGS, key)
        if not _matches_type(value, default):
            raise ValueError(
                f"Invalid layout setting in {config_path}: {key}={value!r} "
                f"(expected {_type_name(default)})"
            )

    return LayoutSettings(**values)


def _type_name(default) -> str:
    if isinstance(default, tuple):
        return f"{len(default)} integers"
    if isinstance(default, float):
        return "a number"
    return type(default).__name__


def _matches_type(value, default) -> bool:
    """Whether an override has the same kind of value as the default it replaces."""
    if isinstance(value, bool) and not isinstance(default, bool):
        return False
    if isinstance(default, tuple):
        return (
            isinstance(value, tuple)
            and len(value) == len(default)
            and all(isinstance(v, int) and not isinstance(v, bool) for v in value)
        )
    if isinstance(default, float):
        return isinstance(value, (int, float))
    return isinstance(value, type(default))
