#!/usr/bin/env python3
"""
Test the main SlideGenerator functionality.
"""
import logging
import sys

import pytest
from PIL import Image

from textdeck.config import Settings
from textdeck.exceptions import InvalidInputError
from textdeck.generator import SlideGenerator, main
from textdeck.render_instructions import DrawImage


@pytest.fixture
def generator(tmp_path):
    return SlideGenerator(output_dir=tmp_path / "out", settings=Settings(title_text="Deck", numerals="latin"),
                          base_dir=str(tmp_path))


def test_slide_generator_basic(generator, tmp_path):
    """Test that SlideGenerator writes one PNG per slide, in deck order."""
    text = """
# Test Slide

This is a test slide with some content.

- Item 1
- Item 2
"""
    paths = generator.generate(text)

    assert [p.name for p in paths] == ["slide_01.png", "slide_02.png"]
    for path in paths:
        assert path.parent == (tmp_path / "out").resolve()
        with Image.open(path) as img:
            assert img.format == "PNG"
            assert img.size == (1080, 1080)


def test_slide_generator_multi_slide(generator):
    text = "### First\nContent one\n### Second\nContent two\n### Third\nContent three"
    deck = generator.build_deck(text)
    assert len(deck) == 4
    assert deck[0].is_title


def test_story_format(tmp_path):
    generator = SlideGenerator(output_dir=tmp_path, settings=Settings(slide_format="story"))
    paths = generator.generate("hello story")
    with Image.open(paths[0]) as img:
        assert img.size == (1080, 1920)


def test_empty_input_is_rejected(tmp_path):
    generator = SlideGenerator(output_dir=tmp_path, settings=Settings())
    with pytest.raises(InvalidInputError):
        generator.generate("   ")
    assert list(tmp_path.iterdir()) == []


def test_background_image(generator, tmp_path):
    Image.new("RGB", (200, 100), "blue").save(tmp_path / "bg.png")

    instructions = generator.build_instructions("body", generator._load_images("bg.png")[1])
    assert any(isinstance(i, DrawImage) for i in instructions[0])
    assert not any(isinstance(i, DrawImage) for i in instructions[1])

    paths = generator.generate("body", background="bg.png")
    assert len(paths) == 2


def test_missing_image(generator):
    with pytest.raises(FileNotFoundError):
        generator.generate("body", background="nope.png")


def test_not_an_image(generator, tmp_path):
    (tmp_path / "fake.png").write_text("text", encoding="utf-8")
    with pytest.raises(ValueError):
        generator.load_image("fake.png")


def test_parallel_rendering_matches_serial(tmp_path):
    text = "\n".join(f"### Slide {i}\nline {i}" for i in range(4))
    serial = SlideGenerator(output_dir=tmp_path / "a", settings=Settings()).preview(text)
    parallel = SlideGenerator(output_dir=tmp_path / "b", settings=Settings(), workers=3).preview(text)
    assert [img.tobytes() for img in serial] == [img.tobytes() for img in parallel]


def test_preview_limit(tmp_path):
    text = "\n".join(f"### Slide {i}" for i in range(8))
    images = SlideGenerator(output_dir=tmp_path, settings=Settings()).preview(text)
    assert len(images) == 5


def test_stats(generator):
    stats = generator.stats("# Intro\none two three")
    assert stats.word_count == 5
    assert stats.slide_count == 2
    assert stats.has_title


class TestCommandLine:

    def _main(self, monkeypatch, *argv):
        monkeypatch.setattr(sys, "argv", ["textdeck", *map(str, argv)])
        main()

    def test_writes_slides(self, monkeypatch, tmp_path):
        source = tmp_path / "deck.txt"
        source.write_text("# Hello\nworld", encoding="utf-8")
        self._main(monkeypatch, source, "-o", tmp_path / "out", "--numerals", "latin")
        assert sorted(p.name for p in (tmp_path / "out").iterdir()) == ["slide_01.png"]

    def test_stats_only_reports(self, monkeypatch, tmp_path, caplog):
        source = tmp_path / "deck.txt"
        source.write_text("# Hello\nworld", encoding="utf-8")
        caplog.set_level(logging.INFO, logger="textdeck.generator")

        self._main(monkeypatch, source, "-o", tmp_path / "out", "--stats")

        assert "Words: 3" in caplog.text
        assert "[chapter] Hello" in caplog.text
        assert not (tmp_path / "out").exists()

    def test_unknown_theme_exits(self, monkeypatch, tmp_path, caplog):
        with pytest.raises(SystemExit) as exc:
            self._main(monkeypatch, "--title", "T", "-o", tmp_path / "out", "--theme", "no_such_theme")
        assert exc.value.code == 1
        assert "Unknown theme 'no_such_theme'" in caplog.text

    def test_bad_settings_file_exits(self, monkeypatch, tmp_path, caplog):
        settings_file = tmp_path / "s.json"
        settings_file.write_text('{"fontSize": "big", "padding": 90, "lineHeightMultiplier": 2}', encoding="utf-8")
        with pytest.raises(SystemExit) as exc:
            self._main(monkeypatch, "--title", "T", "-o", tmp_path / "out", "--settings", settings_file)
        assert exc.value.code == 1
        assert "fontSize" in caplog.text

    def test_bullet_must_be_a_known_option(self, monkeypatch, tmp_path):
        with pytest.raises(SystemExit) as exc:
            self._main(monkeypatch, "--title", "T", "-o", tmp_path, "--bullet", "@")
        assert exc.value.code == 2
