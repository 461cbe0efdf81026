"""Tests for the eml2pdf argument parser and exit code mapping."""

import pytest

from eml2pdf.cli.builder import (
    EXIT_DEPENDENCY_ERROR,
    EXIT_ERROR,
    EXIT_FILE_ERROR,
    EXIT_VALIDATION_ERROR,
    create_parser,
    get_exit_code_for_exception,
)
from eml2pdf.exceptions import (
    ConfigError,
    DependencyError,
    FileAccessError,
    FileNotFoundError,
    MalformedFileError,
    RenderingError,
    ValidationError,
)


@pytest.mark.unit
@pytest.mark.cli
class TestCreateParser:
    def test_defaults(self):
        args = create_parser().parse_args(["mail.eml"])

        assert args.input == "mail.eml"
        assert args.extract_attachments is None
        assert args.delete_after_processing is None
        assert args.attachment_suffixes is None
        assert args.max_depth is None
        assert args.html_only is False
        assert args.log_level is None

    def test_input_is_optional(self):
        assert create_parser().parse_args([]).input is None

    def test_extraction_flags(self):
        parser = create_parser()
        assert parser.parse_args(["--extract-attachments"]).extract_attachments is True
        assert parser.parse_args(["--no-extract-attachments"]).extract_attachments is False

    def test_delete_and_backup(self):
        parser = create_parser()
        assert parser.parse_args(["--delete"]).delete_after_processing is True
        assert parser.parse_args(["--backup"]).delete_after_processing is False

    def test_repeatable_suffix(self):
        args = create_parser().parse_args(["--attachment-suffix", ".pdf", "--attachment-suffix", ".zip"])
        assert args.attachment_suffixes == [".pdf", ".zip"]

    def test_max_depth(self):
        assert create_parser().parse_args(["--max-depth", "7"]).max_depth == 7

    @pytest.mark.parametrize("value", ["0", "-3", "many"])
    def test_max_depth_rejects_non_positive(self, value):
        with pytest.raises(SystemExit):
            create_parser().parse_args(["--max-depth", value])

    def test_version(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            create_parser().parse_args(["--version"])
        assert exc_info.value.code == 0
        assert "eml2pdf" in capsys.readouterr().out


@pytest.mark.unit
@pytest.mark.cli
class TestExitCodes:
    @pytest.mark.parametrize(
        "exception, expected",
        [
            (DependencyError("pdf", [("weasyprint", "")]), EXIT_DEPENDENCY_ERROR),
            (ImportError("weasyprint"), EXIT_DEPENDENCY_ERROR),
            (ValidationError("bad"), EXIT_VALIDATION_ERROR),
            (ConfigError("bad"), EXIT_VALIDATION_ERROR),
            (FileNotFoundError("x.eml"), EXIT_FILE_ERROR),
            (FileAccessError("x.eml"), EXIT_FILE_ERROR),
            (MalformedFileError("broken"), EXIT_FILE_ERROR),
            (RenderingError("failed"), EXIT_ERROR),
            (RuntimeError("boom"), EXIT_ERROR),
        ],
    )
    def test_mapping(self, exception, expected):
        assert get_exit_code_for_exception(exception) == expected
