# Copyright (c) 2026 Mogao
# SPDX-License-Identifier: MIT

"""Integration tests for the extract_colors() entry point."""

import io

import numpy as np
import pytest
from PIL import Image

from mogao import (
    ColorInfo,
    DecodeFailure,
    InvalidSettings,
    ProcessingSettings,
    extract_colors,
    extract_palette,
)
from mogao.measure.extract import downscale, load_rgba


def _solid_image(r, g, b, a=255, height=100, width=100):
    """Create a solid-color RGBA image."""
    return np.full((height, width, 4), [r, g, b, a], dtype=np.uint8)


def _two_tone_image(rgb1, rgb2, height=100, width=200):
    """Create an RGBA image that is half one color, half another."""
    img = np.full((height, width, 4), 255, dtype=np.uint8)
    img[:, : width // 2, :3] = rgb1
    img[:, width // 2 :, :3] = rgb2
    return img


def _png_bytes(img: Image.Image) -> bytes:
    buf = io.BytesIO()
    img.save(buf, format="PNG")
    return buf.getvalue()


def _fine(color_count=3, **kwargs):
    return ProcessingSettings(color_count=color_count, sample_precision=10, **kwargs)


class TestScenarios:

    def test_red_blue_quad(self):
        pixels = np.array(
            [[[200, 0, 0, 255], [200, 0, 0, 255]],
             [[0, 0, 200, 255], [0, 0, 200, 255]]],
            dtype=np.uint8,
        )
        palette = extract_palette(pixels, 2, 2, _fine(ignore_grayscale=False))
        # Seeds: red, red, blue; the second red seed never wins a sample
        assert [c.hex for c in palette] == ["#C80000", "#0000C8", "#C80000"]
        assert [c.percentage for c in palette] == [50.0, 50.0, 0.0]

    def test_red_blue_quad_without_empty(self):
        pixels = np.array(
            [[[200, 0, 0, 255], [200, 0, 0, 255]],
             [[0, 0, 200, 255], [0, 0, 200, 255]]],
            dtype=np.uint8,
        )
        palette = extract_palette(
            pixels, 2, 2, _fine(ignore_grayscale=False), keep_empty=False
        )
        assert [(c.hex, c.percentage) for c in palette] == [
            ("#C80000", 50.0), ("#0000C8", 50.0),
        ]

    def test_all_gray_ignored(self):
        pixels = _solid_image(128, 128, 128, height=2, width=2)
        assert extract_colors(pixels, _fine(ignore_grayscale=True)) == ()

    def test_all_transparent(self):
        pixels = _solid_image(255, 0, 0, a=0)
        assert extract_colors(pixels, _fine()) == ()


class TestExtractColors:

    def test_two_tone(self):
        pixels = _two_tone_image([200, 50, 50], [50, 50, 200])
        palette = extract_colors(pixels, _fine(color_count=4))
        assert len(palette) == 4
        top = {c.hex for c in palette[:2]}
        assert top == {"#C83232", "#3232C8"}
        assert palette[0].percentage == pytest.approx(50.0, abs=1.0)

    def test_output_ordered(self):
        rng = np.random.default_rng(8)
        pixels = rng.integers(0, 256, size=(60, 60, 4), dtype=np.uint8)
        pixels[..., 3] = 255
        palette = extract_colors(pixels, ProcessingSettings(color_count=8))
        shares = [c.percentage for c in palette]
        assert shares == sorted(shares, reverse=True)

    def test_percentages_sum(self):
        pixels = _two_tone_image([255, 0, 0], [0, 0, 255])
        palette = extract_colors(pixels, _fine())
        assert sum(c.percentage for c in palette) == pytest.approx(100.0, abs=0.1)

    def test_deterministic(self):
        rng = np.random.default_rng(21)
        pixels = rng.integers(0, 256, size=(50, 50, 4), dtype=np.uint8)
        pixels[..., 3] = 255
        settings = ProcessingSettings(color_count=6, sample_precision=7)
        assert extract_colors(pixels, settings) == extract_colors(pixels, settings)

    def test_brighten(self):
        pixels = _solid_image(255, 0, 0)
        palette = extract_colors(pixels, _fine(brighten=True))
        assert palette[0].hex == "#FF3333"
        assert palette[0].percentage == 100.0

    def test_rgb_array_is_opaque(self):
        pixels = np.full((10, 10, 3), [0, 160, 80], dtype=np.uint8)
        palette = extract_colors(pixels, _fine())
        assert palette[0].hex == "#00A050"

    def test_dict_settings(self):
        pixels = _solid_image(0, 160, 80)
        palette = extract_colors(
            pixels, {"colorCount": 5, "samplePrecision": 10, "ignoreGrayscale": True}
        )
        assert len(palette) == 5
        assert palette[0].hex == "#00A050"

    def test_default_settings(self):
        palette = extract_colors(_solid_image(0, 160, 80))
        assert len(palette) == ProcessingSettings().color_count

    def test_results_are_color_info(self):
        palette = extract_colors(_solid_image(10, 20, 200), _fine())
        assert all(isinstance(c, ColorInfo) for c in palette)


class TestImageSources:

    def test_png_bytes(self):
        img = Image.new("RGBA", (8, 8), (200, 0, 0, 255))
        palette = extract_colors(_png_bytes(img), _fine())
        assert palette[0].hex == "#C80000"
        assert palette[0].percentage == 100.0

    def test_file_path(self, tmp_path):
        path = tmp_path / "mural.png"
        Image.new("RGB", (8, 8), (0, 0, 200)).save(path)
        palette = extract_colors(path, _fine())
        assert palette[0].hex == "#0000C8"
        assert extract_colors(str(path), _fine()) == palette

    def test_pil_image(self):
        img = Image.new("RGBA", (4, 4), (0, 0, 0, 0))
        assert extract_colors(img, _fine()) == ()

    def test_palette_mode_converted(self):
        img = Image.new("RGB", (6, 6), (200, 0, 0)).convert("P")
        assert load_rgba(img).shape == (6, 6, 4)


class TestErrors:

    def test_garbage_bytes(self):
        with pytest.raises(DecodeFailure):
            extract_colors(b"definitely not an image")

    def test_missing_file(self, tmp_path):
        with pytest.raises(DecodeFailure):
            extract_colors(tmp_path / "missing.png")

    def test_bad_array_shape(self):
        with pytest.raises(DecodeFailure, match="shape"):
            extract_colors(np.zeros((4, 4), dtype=np.uint8))

    def test_bad_array_dtype(self):
        with pytest.raises(DecodeFailure, match="uint8"):
            extract_colors(np.zeros((4, 4, 4), dtype=np.float64))

    def test_decompression_bomb(self, monkeypatch):
        data = _png_bytes(Image.new("RGB", (8, 8), (200, 0, 0)))
        monkeypatch.setattr(Image, "MAX_IMAGE_PIXELS", 10)
        with pytest.raises(DecodeFailure):
            extract_colors(data, _fine())

    def test_truncated_pil_image(self):
        rng = np.random.default_rng(3)
        noise = rng.integers(0, 256, size=(64, 64, 3), dtype=np.uint8)
        data = _png_bytes(Image.fromarray(noise))
        # Header parses lazily; pixel data is cut off
        img = Image.open(io.BytesIO(data[: len(data) // 2]))
        with pytest.raises(DecodeFailure):
            extract_colors(img, _fine())

    def test_unsupported_type(self):
        with pytest.raises(TypeError):
            extract_colors(12345)

    def test_settings_rejected_before_decoding(self):
        with pytest.raises(InvalidSettings):
            extract_colors(b"not an image", {"colorCount": 20})

    def test_fractional_precision_rejected(self):
        with pytest.raises(InvalidSettings, match="sample_precision"):
            extract_colors(_solid_image(200, 0, 0), {"colorCount": 3, "samplePrecision": 5.5})


class TestDownscale:

    def test_large_image_shrunk(self):
        pixels = _solid_image(10, 200, 10, height=100, width=400)
        small = downscale(pixels, 200)
        assert small.shape == (50, 200, 4)
        np.testing.assert_allclose(small[25, 100], [10, 200, 10, 255], atol=1)

    def test_small_image_untouched(self):
        pixels = _solid_image(10, 200, 10, height=20, width=30)
        assert downscale(pixels, 200) is pixels

    def test_disabled(self):
        pixels = _solid_image(10, 200, 10, height=300, width=300)
        assert downscale(pixels, 0) is pixels

    def test_large_image_extracts(self):
        pixels = _solid_image(200, 0, 0, height=1000, width=1000)
        palette = extract_colors(pixels, _fine())
        assert abs(palette[0].rgb.r - 200) <= 1
