#!/usr/bin/env python3
"""Utility helpers for resolving output directories and asset paths.

Every public entry point must supply an explicit ``output_dir``. Slides
are written into it as ``slide_01.png``, ``slide_02.png`` … in deck order.
Relative asset paths (background / avatar images) are resolved against a
``base_dir``, normally the directory of the input text file.
"""
from __future__ import annotations

from pathlib import Path


__all__ = ["prepare_output_dir", "resolve_asset", "slide_filename"]


def prepare_output_dir(output_dir: str | Path) -> Path:
    """Resolve *output_dir* to an absolute path and create it if needed."""
    out_path = Path(output_dir).expanduser().resolve()
    out_path.mkdir(parents=True, exist_ok=True)
    return out_path


def slide_filename(index: int, total: int = 0) -> str:
    """File name for the slide at zero-based *index*.

    Numbers are zero-padded to at least two digits, more when *total*
    requires it, so names sort in deck order.
    """
    width = max(2, len(str(total)))
    return f"slide_{index + 1:0{width}d}.png"


def resolve_asset(src: str | Path, *, base_dir: Path) -> Path:
    """Return the absolute path for *src*.

    Rules
    -----
    1. ``file://`` URLs are stripped to a path first.
    2. Relative paths are resolved against *base_dir*.
    """
    src = str(src)
    if src.startswith("file://"):
        src = src[7:]

    path = Path(src).expanduser()
    if not path.is_absolute():
        path = base_dir / path
    return path.resolve()
