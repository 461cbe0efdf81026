#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/renderers/test_renderers.py
"""Unit tests for the HTML and PDF renderers.

The PDF engine is replaced by a stand-in module so these tests run without
WeasyPrint; real rendering is covered by the integration tests.
"""

import sys
import types
from io import BytesIO
from unittest.mock import patch

import pytest

from eml2pdf.exceptions import DependencyError, OutputWriteError, RenderingError, ValidationError
from eml2pdf.options import EmlOptions, PdfRendererOptions
from eml2pdf.renderers import HtmlFileRenderer, HtmlPdfRenderer


class _FakeCSS:
    def __init__(self, string):
        self.string = string


class _FakeHTML:
    calls = []
    fail_with = None

    def __init__(self, string, base_url=None):
        self.string = string
        self.base_url = base_url

    def write_pdf(self, stylesheets=None, presentational_hints=False):
        if _FakeHTML.fail_with is not None:
            raise _FakeHTML.fail_with
        _FakeHTML.calls.append(
            {
                "html": self.string,
                "base_url": self.base_url,
                "css": [sheet.string for sheet in stylesheets],
                "presentational_hints": presentational_hints,
            }
        )
        return b"%PDF-fake " + self.string.encode("utf-8")


@pytest.fixture
def fake_weasyprint(monkeypatch):
    """Install a stand-in ``weasyprint`` module and satisfy the version check."""
    module = types.ModuleType("weasyprint")
    module.HTML = _FakeHTML
    module.CSS = _FakeCSS
    _FakeHTML.calls = []
    _FakeHTML.fail_with = None
    monkeypatch.setitem(sys.modules, "weasyprint", module)
    with patch("eml2pdf.utils.decorators.check_version_requirement", return_value=(True, "62.0")):
        yield _FakeHTML


@pytest.mark.unit
class TestHtmlFileRenderer:
    def test_writes_utf8(self, temp_dir):
        target = temp_dir / "out.html"
        HtmlFileRenderer().render("<p>Grüße</p>", target)
        assert target.read_bytes() == "<p>Grüße</p>".encode("utf-8")

    def test_to_bytes(self):
        assert HtmlFileRenderer().render_to_bytes("<p>x</p>") == b"<p>x</p>"

    @pytest.mark.parametrize("html", ["", "   \n"])
    def test_empty_html_rejected(self, html, temp_dir):
        with pytest.raises(ValidationError):
            HtmlFileRenderer().render(html, temp_dir / "out.html")

    @pytest.mark.parametrize("output", [None, "", "  "])
    def test_empty_output_rejected(self, output):
        with pytest.raises(ValidationError):
            HtmlFileRenderer().render("<p>x</p>", output)

    def test_unwritable_output(self, temp_dir):
        with pytest.raises(OutputWriteError):
            HtmlFileRenderer().render("<p>x</p>", temp_dir / "missing" / "out.html")


@pytest.mark.unit
class TestHtmlPdfRenderer:
    def test_wrong_options_type(self):
        with pytest.raises(TypeError):
            HtmlPdfRenderer(EmlOptions())  # type: ignore[arg-type]

    def test_render_to_path(self, fake_weasyprint, temp_dir):
        target = temp_dir / "out.pdf"
        HtmlPdfRenderer().render("<p>hello</p>", target)

        assert target.read_bytes() == b"%PDF-fake <p>hello</p>"
        call = fake_weasyprint.calls[0]
        assert call["css"] == ["@page { size: 8.5in 11in; margin: 0; }"]
        assert call["presentational_hints"] is True
        assert call["base_url"] is None

    def test_render_to_stream(self, fake_weasyprint):
        buffer = BytesIO()
        HtmlPdfRenderer().render("<p>stream</p>", buffer)
        assert buffer.getvalue().startswith(b"%PDF-fake")

    def test_render_to_bytes(self, fake_weasyprint):
        assert HtmlPdfRenderer().render_to_bytes("<p>bytes</p>") == b"%PDF-fake <p>bytes</p>"

    def test_options_are_passed_through(self, fake_weasyprint):
        options = PdfRendererOptions(
            margin="1cm", base_url="file:///tmp/", stylesheets=("body { font-size: 9pt; }",), presentational_hints=False
        )
        HtmlPdfRenderer(options).render_to_bytes("<p>x</p>")

        call = fake_weasyprint.calls[0]
        assert call["css"] == ["@page { size: 8.5in 11in; margin: 1cm; }", "body { font-size: 9pt; }"]
        assert call["base_url"] == "file:///tmp/"
        assert call["presentational_hints"] is False

    def test_engine_failure_wrapped(self, fake_weasyprint, temp_dir):
        fake_weasyprint.fail_with = ValueError("layout exploded")
        with pytest.raises(RenderingError) as exc_info:
            HtmlPdfRenderer().render("<p>x</p>", temp_dir / "out.pdf")

        assert exc_info.value.rendering_stage == "pdf"
        assert isinstance(exc_info.value.original_error, ValueError)
        assert not (temp_dir / "out.pdf").exists()

    def test_empty_html_rejected(self, fake_weasyprint, temp_dir):
        with pytest.raises(ValidationError):
            HtmlPdfRenderer().render("", temp_dir / "out.pdf")
        assert fake_weasyprint.calls == []

    def test_missing_engine(self, monkeypatch, temp_dir):
        monkeypatch.setitem(sys.modules, "weasyprint", None)
        with pytest.raises(DependencyError) as exc_info:
            HtmlPdfRenderer().render("<p>x</p>", temp_dir / "out.pdf")
        assert exc_info.value.converter_name == "pdf"
