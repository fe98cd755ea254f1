"""Tests for the Typer command-line interface."""

from __future__ import annotations

from pathlib import Path

import pytest
from PIL import Image
from typer.testing import CliRunner

from image_collager.cli import app

runner = CliRunner()


@pytest.fixture
def image_dir(tmp_path: Path) -> Path:
    src = tmp_path / "images"
    src.mkdir()
    Image.new("RGB", (100, 50), (255, 0, 0)).save(src / "wide.png")
    Image.new("RGB", (100, 100), (0, 0, 255)).save(src / "square.png")
    (src / "notes.txt").write_text("not an image")
    return src


class TestMake:
    def test_saves_collage(self, image_dir: Path, tmp_path: Path) -> None:
        out = tmp_path / "out" / "collage.png"
        result = runner.invoke(
            app, ["make", "Rectangle", "1", "200", "100", str(image_dir), "-o", str(out)],
        )
        assert result.exit_code == 0, result.output
        assert out.exists()
        with Image.open(out) as img:
            assert img.size == (203, 102)
            assert img.getpixel((1, 1)) == (0, 0, 255, 255)

    def test_unknown_output_format(self, image_dir: Path, tmp_path: Path) -> None:
        out = tmp_path / "collage.notaformat"
        result = runner.invoke(
            app, ["make", "Rectangle", "1", "200", "100", str(image_dir), "-o", str(out)],
        )
        assert result.exit_code == 1
        assert "Cannot save" in result.output
        assert "Traceback" not in result.output

    def test_circle(self, image_dir: Path, tmp_path: Path) -> None:
        out = tmp_path / "circle.png"
        result = runner.invoke(
            app, ["make", "Circle", "2", "200", "100", str(image_dir), "-o", str(out)],
        )
        assert result.exit_code == 0, result.output
        assert out.exists()

    def test_zero_rows(self, image_dir: Path) -> None:
        result = runner.invoke(app, ["make", "Rectangle", "0", "200", "100", str(image_dir)])
        assert result.exit_code == 1
        assert "positive" in result.output

    def test_zero_height(self, image_dir: Path) -> None:
        result = runner.invoke(app, ["make", "Rectangle", "1", "200", "0", str(image_dir)])
        assert result.exit_code == 1

    def test_unknown_shape(self, image_dir: Path) -> None:
        result = runner.invoke(app, ["make", "Hexagon", "1", "200", "100", str(image_dir)])
        assert result.exit_code != 0

    def test_missing_directory(self, tmp_path: Path) -> None:
        result = runner.invoke(
            app, ["make", "Rectangle", "1", "200", "100", str(tmp_path / "missing")],
        )
        assert result.exit_code == 1

    def test_empty_directory(self, tmp_path: Path) -> None:
        empty = tmp_path / "empty"
        empty.mkdir()
        result = runner.invoke(app, ["make", "Rectangle", "1", "200", "100", str(empty)])
        assert result.exit_code == 0
        assert "No images found" in result.output


class TestLayout:
    def test_prints_placements(self, image_dir: Path) -> None:
        result = runner.invoke(app, ["layout", "Rectangle", "1", "200", "100", str(image_dir)])
        assert result.exit_code == 0, result.output
        assert "Content 200x100" in result.output

    def test_too_many_rows(self, image_dir: Path) -> None:
        result = runner.invoke(app, ["layout", "Circle", "3", "200", "100", str(image_dir)])
        assert result.exit_code == 1
