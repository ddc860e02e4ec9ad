"""Unit tests for layout settings and YAML overrides."""

import pytest

from vitae.contexts.layout import layout_resume
from vitae.contexts.layout.settings import (
    DEFAULT_LAYOUT_SETTINGS,
    LayoutSettings,
    load_layout_settings,
)


@pytest.mark.unit
def test_default_settings():
    """Test the default A4 page geometry and typography."""
    s = DEFAULT_LAYOUT_SETTINGS

    assert (s.page_width, s.page_height) == (210.0, 297.0)
    assert s.margin == 20.0
    assert s.top == 20.0
    assert s.overflow_threshold == 280.0
    assert s.content_width == 170.0
    assert s.max_bullets == 8
    assert s.graduation_threshold_years == 3
    assert s.link_color == (0, 0, 255)
    assert s.text_color == (0, 0, 0)


@pytest.mark.unit
def test_load_without_config_returns_defaults():
    assert load_layout_settings(None) is DEFAULT_LAYOUT_SETTINGS


@pytest.mark.unit
def test_load_applies_overrides(tmp_path):
    config = tmp_path / "layout.yaml"
    config.write_text("section_font_size: 10\nmax_bullets: 6\nlink_color: [10, 20, 30]\n")

    settings = load_layout_settings(config)

    assert isinstance(settings, LayoutSettings)
    assert settings.section_font_size == 10
    assert settings.max_bullets == 6
    assert settings.link_color == (10, 20, 30)
    # Untouched values keep their defaults
    assert settings.margin == DEFAULT_LAYOUT_SETTINGS.margin


@pytest.mark.unit
def test_load_rejects_unknown_keys(tmp_path):
    config = tmp_path / "layout.yaml"
    config.write_text("magin: 15\n")

    with pytest.raises(ValueError, match="Unknown layout setting"):
        load_layout_settings(config)


@pytest.mark.unit
def test_settings_are_frozen():
    with pytest.raises(AttributeError):
        DEFAULT_LAYOUT_SETTINGS.margin = 10


@pytest.mark.unit
@pytest.mark.parametrize(
    "override",
    [
        "section_font_size: abc",
        "max_bullets: 2.5",
        "max_bullets: true",
        "bullet_marker: 7",
        "link_color: [0, 0]",
        "text_color: [0, 0, dark]",
    ],
)
def test_load_rejects_wrong_value_types(tmp_path, override):
    """Test that a badly typed override fails at load time, not during layout."""
    config = tmp_path / "layout.yaml"
    config.write_text(override + "\n")

    with pytest.raises(ValueError, match="Invalid layout setting"):
        load_layout_settings(config)


@pytest.mark.unit
def test_loaded_settings_lay_out(tmp_path, jane_doe):
    config = tmp_path / "layout.yaml"
    config.write_text("section_font_size: 11\nmargin: 15.5\n")

    layout = layout_resume(jane_doe, settings=load_layout_settings(config))

    assert layout.page_count == 1
    heading = next(t for t in layout.texts if t.text == "Education and Certification")
    assert heading.x == 15.5
    assert heading.font_size == 11
