#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/cli/test_cli_main.py
"""End-to-end tests of the eml2pdf command through ``main``.

PDF rendering is replaced by a stub renderer; the real engine is exercised in
the integration tests.
"""

import json
from unittest.mock import patch

import pytest
from fixtures.generators.eml_fixtures import (
    attach_message,
    attach_pdf,
    build_message_chain,
    create_html_email,
    create_text_email,
    write_email_to_file,
)
from utils import MINIMAL_PDF_BYTES

from eml2pdf.cli import main
from eml2pdf.cli.builder import (
    EXIT_DEPENDENCY_ERROR,
    EXIT_ERROR,
    EXIT_FILE_ERROR,
    EXIT_SUCCESS,
    EXIT_VALIDATION_ERROR,
)
from eml2pdf.exceptions import DependencyError, RenderingError

pytestmark = [pytest.mark.unit, pytest.mark.cli, pytest.mark.usefixtures("restore_root_logger")]


class StubPdfRenderer:
    """Writes the HTML it receives so tests can inspect it."""

    rendered = []
    error = None

    def __init__(self, options=None):
        self.options = options

    def render(self, html, output):
        if StubPdfRenderer.error is not None:
            raise StubPdfRenderer.error
        StubPdfRenderer.rendered.append(html)
        with open(output, "wb") as handle:
            handle.write(b"%PDF-stub\n" + html.encode("utf-8"))


@pytest.fixture
def stub_pdf():
    StubPdfRenderer.rendered = []
    StubPdfRenderer.error = None
    with patch("eml2pdf.cli.processors.HtmlPdfRenderer", StubPdfRenderer):
        yield StubPdfRenderer


@pytest.fixture
def mail_file(isolated_env):
    def _write(message, name="mail.eml"):
        path = isolated_env / name
        write_email_to_file(message, str(path))
        return path

    return _write


def _backups(directory):
    return sorted(p.name for p in directory.iterdir() if p.name.endswith(".bak"))


class TestPdfConversion:
    def test_renders_and_archives(self, mail_file, stub_pdf, capsys, isolated_env):
        source = mail_file(create_html_email(html="<p>hello pdf</p>"))

        assert main([str(source)]) == EXIT_SUCCESS

        output = isolated_env / "mail.eml.pdf"
        assert output.read_bytes().startswith(b"%PDF-stub")
        assert "hello pdf" in stub_pdf.rendered[0]

        out = capsys.readouterr().out
        assert f"RET-OUTPUT: {output}" in out
        assert not source.exists()
        backups = _backups(isolated_env)
        assert len(backups) == 1
        assert backups[0].endswith("_mail.eml.bak")

    def test_innermost_forward_is_rendered(self, mail_file, stub_pdf):
        root = build_message_chain(3, innermost=create_html_email(html="<p>original message</p>"))
        source = mail_file(root)

        assert main([str(source), "--delete"]) == EXIT_SUCCESS
        assert "original message" in stub_pdf.rendered[0]
        assert not source.exists()

    def test_delete_flag_removes_source(self, mail_file, stub_pdf, isolated_env):
        source = mail_file(create_html_email())

        assert main([str(source), "--delete"]) == EXIT_SUCCESS
        assert not source.exists()
        assert _backups(isolated_env) == []

    def test_backup_flag_overrides_config_delete(self, mail_file, stub_pdf, isolated_env):
        (isolated_env / "appsettings.json").write_text(json.dumps({"DeleteFileAfterProcessing": True}))
        source = mail_file(create_html_email())

        assert main([str(source), "--config", "appsettings.json", "--backup"]) == EXIT_SUCCESS
        assert len(_backups(isolated_env)) == 1

    def test_config_delete(self, mail_file, stub_pdf, isolated_env):
        (isolated_env / "appsettings.json").write_text(json.dumps({"DeleteFileAfterProcessing": True}))
        source = mail_file(create_html_email())

        assert main([str(source), "--config", "appsettings.json"]) == EXIT_SUCCESS
        assert not source.exists()
        assert _backups(isolated_env) == []

    def test_explicit_output(self, mail_file, stub_pdf, isolated_env, capsys):
        source = mail_file(create_html_email())
        target = isolated_env / "custom.pdf"

        assert main([str(source), "-o", str(target), "--delete"]) == EXIT_SUCCESS
        assert target.exists()
        assert f"RET-OUTPUT: {target}" in capsys.readouterr().out

    def test_quoted_path(self, mail_file, stub_pdf):
        source = mail_file(create_html_email())
        assert main([f' "{source}" ', "--delete"]) == EXIT_SUCCESS


class TestAttachmentExtraction:
    def test_deepest_pdf_written(self, mail_file, stub_pdf, isolated_env, capsys):
        inner = attach_pdf(create_text_email(), filename="Invoice.PDF")
        source = mail_file(attach_message(create_html_email(), inner))

        assert main([str(source), "--extract-attachments", "--delete"]) == EXIT_SUCCESS

        output = isolated_env / "mail.eml.pdf"
        assert output.read_bytes() == MINIMAL_PDF_BYTES
        assert stub_pdf.rendered == []
        assert f"RET-OUTPUT: {output}" in capsys.readouterr().out

    def test_config_enables_extraction(self, mail_file, stub_pdf, isolated_env):
        (isolated_env / ".eml2pdf.json").write_text(json.dumps({"GetPDFFromAttachments": True}))
        source = mail_file(attach_pdf(create_text_email()))

        assert main([str(source), "--delete"]) == EXIT_SUCCESS
        assert (isolated_env / "mail.eml.pdf").read_bytes() == MINIMAL_PDF_BYTES

    def test_flag_disables_configured_extraction(self, mail_file, stub_pdf, isolated_env):
        (isolated_env / ".eml2pdf.json").write_text(json.dumps({"GetPDFFromAttachments": True}))
        source = mail_file(attach_pdf(create_html_email(html="<p>body wins</p>")))

        assert main([str(source), "--no-extract-attachments", "--delete"]) == EXIT_SUCCESS
        assert "body wins" in stub_pdf.rendered[0]

    def test_no_match_falls_back_to_body(self, mail_file, stub_pdf):
        source = mail_file(create_html_email(html="<p>no attachments</p>"))

        assert main([str(source), "--extract-attachments", "--delete"]) == EXIT_SUCCESS
        assert "no attachments" in stub_pdf.rendered[0]

    def test_other_suffix_keeps_its_extension(self, mail_file, stub_pdf, isolated_env):
        message = create_text_email()
        message.add_attachment(b"PK\x03\x04", maintype="application", subtype="zip", filename="Bundle.ZIP")
        source = mail_file(message)

        args = [str(source), "--extract-attachments", "--attachment-suffix", ".zip", "--delete"]
        assert main(args) == EXIT_SUCCESS
        assert (isolated_env / "mail.eml.zip").read_bytes() == b"PK\x03\x04"


class TestHtmlOnly:
    def test_writes_html(self, mail_file, isolated_env, capsys):
        source = mail_file(create_html_email(html="<p>as html</p>"))

        assert main([str(source), "--html-only", "--delete"]) == EXIT_SUCCESS

        output = isolated_env / "mail.eml.html"
        assert "<p>as html</p>" in output.read_text(encoding="utf-8")
        assert f"RET-OUTPUT: {output}" in capsys.readouterr().out


class TestFailures:
    def test_missing_file(self, isolated_env, capsys):
        assert main([str(isolated_env / "missing.eml")]) == EXIT_ERROR
        assert "Invalid file path" in capsys.readouterr().out

    def test_prompted_path(self, mail_file, stub_pdf, monkeypatch):
        source = mail_file(create_html_email())
        monkeypatch.setattr("builtins.input", lambda prompt: f'"{source}"')

        assert main(["--delete"]) == EXIT_SUCCESS
        assert not source.exists()

    def test_empty_prompt(self, isolated_env, monkeypatch, capsys):
        monkeypatch.setattr("builtins.input", lambda prompt: "")
        assert main([]) == EXIT_ERROR
        assert 'Invalid file path: ""' in capsys.readouterr().out

    def test_blank_html_body_is_reported_on_stdout(self, mail_file, stub_pdf, capsys):
        source = mail_file(create_html_email(html="   ", text=None))

        assert main([str(source)]) == EXIT_ERROR
        assert source.exists()
        assert stub_pdf.rendered == []
        assert "Failed to parse .eml file." in capsys.readouterr().out

    def test_existing_output_is_not_overwritten(self, mail_file, stub_pdf, isolated_env, capsys):
        source = mail_file(create_html_email())
        existing = isolated_env / "mail.eml.pdf"
        existing.write_bytes(b"keep me")

        assert main([str(source)]) == EXIT_SUCCESS
        assert existing.read_bytes() == b"keep me"
        assert source.exists()
        assert "already exists" in capsys.readouterr().out

    def test_render_failure_keeps_source(self, mail_file, stub_pdf, capsys):
        stub_pdf.error = RenderingError("engine failed", rendering_stage="pdf")
        source = mail_file(create_html_email())

        assert main([str(source)]) == EXIT_ERROR
        assert source.exists()
        captured = capsys.readouterr()
        assert "Error while saving HTML to PDF" in captured.err
        assert "RET-OUTPUT" not in captured.out

    def test_missing_pdf_engine(self, mail_file, stub_pdf, capsys):
        stub_pdf.error = DependencyError("pdf", [("weasyprint", ">=60.0")])
        source = mail_file(create_html_email())

        assert main([str(source)]) == EXIT_DEPENDENCY_ERROR
        assert "weasyprint" in capsys.readouterr().err

    def test_bad_config(self, mail_file, isolated_env, capsys):
        (isolated_env / "appsettings.json").write_text("{broken")
        source = mail_file(create_html_email())

        assert main([str(source), "--config", "appsettings.json"]) == EXIT_VALIDATION_ERROR
        assert source.exists()

    def test_invalid_config_value(self, mail_file, isolated_env):
        (isolated_env / "appsettings.json").write_text(json.dumps({"MaxNestingDepth": -2}))
        source = mail_file(create_html_email())

        assert main([str(source), "--config", "appsettings.json"]) == EXIT_VALIDATION_ERROR

    def test_archive_failure(self, mail_file, stub_pdf, monkeypatch):
        from eml2pdf.exceptions import FileAccessError

        def failing_archive(source, delete=False):
            raise FileAccessError(str(source), "locked")

        monkeypatch.setattr("eml2pdf.cli.processors.archive_source", failing_archive)
        source = mail_file(create_html_email())

        assert main([str(source)]) == EXIT_FILE_ERROR

    def test_invalid_max_depth(self, mail_file):
        source = mail_file(create_html_email())
        with pytest.raises(SystemExit) as exc_info:
            main([str(source), "--max-depth", "0"])
        assert exc_info.value.code == 2

    def test_delete_and_backup_are_exclusive(self, mail_file):
        source = mail_file(create_html_email())
        with pytest.raises(SystemExit):
            main([str(source), "--delete", "--backup"])
