#!/usr/bin/env python3
"""
Test inline markdown span parsing.
"""

import pytest

from textdeck.inline_parser import parse_inline, plain_text
from textdeck.models import Formatting, StyledRun


class TestInlineParser:
    """Test inline styling functionality."""

    def test_empty_input(self):
        assert parse_inline("") == []

    def test_plain_text_is_one_run(self):
        runs = parse_inline("plain")
        assert runs == [StyledRun("plain")]
        assert runs[0].is_plain

    @pytest.mark.parametrize("markdown_input, flag, content", [
        ('**bold**', Formatting.BOLD, 'bold'),
        ('*italic*', Formatting.ITALIC, 'italic'),
        ('__underline__', Formatting.UNDERLINE, 'underline'),
        ('~~gone~~', Formatting.STRIKETHROUGH, 'gone'),
        ('`code`', Formatting.CODE, 'code'),
        ('==highlight==', Formatting.HIGHLIGHT, 'highlight'),
    ])
    def test_single_span(self, markdown_input, flag, content):
        assert parse_inline(markdown_input) == [StyledRun(content, frozenset({flag}))]

    def test_bold_and_italic_adjacent(self):
        """Bold and italic side by side give two formatted runs and one plain gap."""
        runs = parse_inline("**bold** and *italic*")
        assert runs == [
            StyledRun("bold", frozenset({Formatting.BOLD})),
            StyledRun(" and "),
            StyledRun("italic", frozenset({Formatting.ITALIC})),
        ]

    def test_italic_inside_bold_is_discarded(self):
        runs = parse_inline("***x***")
        assert all(not run.has(Formatting.ITALIC) for run in runs)
        assert any(run.has(Formatting.BOLD) for run in runs)

    def test_gaps_and_trailing_text(self):
        runs = parse_inline("a ==b== c `d` e")
        assert [r.text for r in runs] == ["a ", "b", " c ", "d", " e"]
        assert runs[1].formatting == frozenset({Formatting.HIGHLIGHT})
        assert runs[3].formatting == frozenset({Formatting.CODE})

    def test_unmatched_delimiters_stay_literal(self):
        assert parse_inline("2 * 3 = 6 and **open") == [StyledRun("2 * 3 = 6 and **open")]
        assert parse_inline("`tick") == [StyledRun("`tick")]

    def test_overlapping_spans_first_start_wins(self):
        """Overlaps among non-bold spans resolve to the earliest start."""
        runs = parse_inline("~~a ==b~~ c==")
        assert runs[0] == StyledRun("a ==b", frozenset({Formatting.STRIKETHROUGH}))
        assert "".join(r.text for r in runs) == "a ==b c=="

    def test_each_run_has_at_most_one_flag(self):
        for run in parse_inline("**b** *i* __u__ ~~s~~ `c` ==h=="):
            assert len(run.formatting) <= 1

    @pytest.mark.parametrize("source, expected", [
        ("**bold** and *italic*", "bold and italic"),
        ("no markup here", "no markup here"),
        ("__u__ ~~s~~ `c` ==h==", "u s c h"),
        ("سلام **دنیا**", "سلام دنیا"),
    ])
    def test_concatenation_removes_delimiters_once(self, source, expected):
        assert plain_text(source) == expected
