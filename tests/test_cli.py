"""Tests for the hasacl and listwhite commands."""

import os
from unittest.mock import patch

import click
import pytest
import typer
from typer.testing import CliRunner

from fsmeta_tools import __version__
from fsmeta_tools.cli import hasacl_app, hasacl_main, listwhite_app, listwhite_main
from fsmeta_tools.core.exceptions import (
    AclRetrievalError,
    TraversalOpenError,
    TraversalReadError,
)
from fsmeta_tools.filesystem import ModeEquivalence

runner = CliRunner()


class TestHasacl:
    """Test the hasacl command."""

    @patch("fsmeta_tools.cli.classify")
    def test_trivial(self, mock_classify, capsys):
        """Test exit code 0 and no output for a trivial ACL."""
        mock_classify.return_value = ModeEquivalence.trivial

        assert hasacl_main(["/data/file"]) == 0
        assert capsys.readouterr().out == ""
        mock_classify.assert_called_once_with("/data/file")

    @patch("fsmeta_tools.cli.classify")
    def test_non_trivial(self, mock_classify):
        """Test exit code 1 for a non-trivial ACL."""
        mock_classify.return_value = ModeEquivalence.non_trivial

        assert hasacl_main(["/data/file"]) == 1

    @patch("fsmeta_tools.cli.classify")
    def test_verbose_trivial(self, mock_classify, capsys):
        """Test that -v prints 1 for a trivial ACL."""
        mock_classify.return_value = ModeEquivalence.trivial

        assert hasacl_main(["-v", "/data/file"]) == 0
        assert capsys.readouterr().out == "1\n"

    @patch("fsmeta_tools.cli.classify")
    def test_verbose_non_trivial(self, mock_classify, capsys):
        """Test that -v prints 0 for a non-trivial ACL."""
        mock_classify.return_value = ModeEquivalence.non_trivial

        assert hasacl_main(["-v", "/data/file"]) == 1
        assert capsys.readouterr().out == "0\n"

    @patch("fsmeta_tools.cli.classify")
    def test_default_path(self, mock_classify):
        """Test that the current directory is checked without an argument."""
        mock_classify.return_value = ModeEquivalence.trivial

        hasacl_main([])

        mock_classify.assert_called_once_with(".")

    @patch("fsmeta_tools.cli.classify")
    def test_retrieval_failure(self, mock_classify, capsys):
        """Test exit code 101 when the ACL cannot be read."""
        mock_classify.side_effect = AclRetrievalError("/missing")

        assert hasacl_main(["-v", "/missing"]) == 101

        captured = capsys.readouterr()
        assert captured.out == ""
        assert "/missing" in captured.err

    def test_unknown_option(self, capsys):
        """Test exit code 100 for an unknown option."""
        assert hasacl_main(["-x"]) == 100
        assert "Usage" in capsys.readouterr().err

    def test_extra_argument(self):
        """Test exit code 100 for more than one path."""
        assert hasacl_main(["a", "b"]) == 100

    def test_version(self, capsys):
        """Test the --version option."""
        assert hasacl_main(["--version"]) == 0
        assert capsys.readouterr().out == f"hasacl {__version__}\n"

    def test_help(self):
        """Test that help text lists the verbose flag."""
        result = runner.invoke(hasacl_app, ["--help"])

        assert result.exit_code == 0
        assert "--verbose" in result.output

    def test_real_missing_path(self, temp_dir):
        """Test the full path through classify for a missing file."""
        assert hasacl_main([str(temp_dir / "nope")]) == 101


class TestListwhite:
    """Test the listwhite command."""

    @patch("fsmeta_tools.cli.scan")
    def test_lists_names(self, mock_scan, capsys):
        """Test one name per line and exit code 0."""
        mock_scan.return_value = iter(["ghost", "removed.txt"])

        assert listwhite_main(["/upper"]) == 0
        assert capsys.readouterr().out == "ghost\nremoved.txt\n"
        mock_scan.assert_called_once_with(["/upper"])

    @patch("fsmeta_tools.cli.scan")
    def test_no_arguments_scans_cwd(self, mock_scan, capsys):
        """Test that no directories are passed on as an empty root list."""
        mock_scan.return_value = iter([])

        assert listwhite_main([]) == 0
        assert capsys.readouterr().out == ""
        mock_scan.assert_called_once_with([])

    @patch("fsmeta_tools.cli.scan")
    def test_multiple_directories(self, mock_scan):
        """Test that directories are passed in order."""
        mock_scan.return_value = iter([])

        listwhite_main(["/a", "/b"])

        mock_scan.assert_called_once_with(["/a", "/b"])

    @patch("fsmeta_tools.cli.scan")
    def test_open_failure(self, mock_scan, capsys):
        """Test exit code 1 and a diagnostic naming the root."""
        mock_scan.side_effect = TraversalOpenError("/nope", "No such file or directory")

        assert listwhite_main(["/nope"]) == 1

        captured = capsys.readouterr()
        assert captured.out == ""
        assert "/nope" in captured.err

    @patch("fsmeta_tools.cli.scan")
    def test_read_failure_keeps_output(self, mock_scan, capsys):
        """Test that names printed before a read failure remain."""

        def names():
            yield "ghost"
            raise TraversalReadError("/upper", "Permission denied")

        mock_scan.return_value = names()

        assert listwhite_main(["/upper"]) == 2

        captured = capsys.readouterr()
        assert captured.out == "ghost\n"
        assert "Permission denied" in captured.err

    def test_unknown_option(self):
        """Test exit code 100 for an unknown option."""
        assert listwhite_main(["--bogus"]) == 100

    def test_version(self, capsys):
        """Test the --version option."""
        assert listwhite_main(["--version"]) == 0
        assert capsys.readouterr().out == f"listwhite {__version__}\n"

    def test_real_empty_directory(self, temp_dir, capsys):
        """Test listing an empty directory end to end."""
        assert listwhite_main([str(temp_dir)]) == 0
        assert capsys.readouterr().out == ""

    def test_real_missing_directory(self, capsys):
        """Test a missing directory end to end."""
        assert listwhite_main(["/path/does/not/exist"]) == 1
        assert "/path/does/not/exist" in capsys.readouterr().err

    def test_help(self):
        """Test that help text mentions the directories argument."""
        result = runner.invoke(listwhite_app, ["--help"])

        assert result.exit_code == 0
        assert "DIRECTORIES" in result.output

    @patch("fsmeta_tools.cli.scan")
    def test_non_utf8_name(self, mock_scan, capsysbinary):
        """Test that undecodable filenames are written as raw bytes."""
        mock_scan.return_value = iter([os.fsdecode(b"ghost\xff"), "plain"])

        assert listwhite_main(["/upper"]) == 0
        assert capsysbinary.readouterr().out == b"ghost\xff\nplain\n"

    def test_real_non_utf8_whiteout(
        self, temp_dir, marker_whiteouts, capsysbinary
    ):
        """Test listing a whiteout whose name is not valid UTF-8 end to end."""
        try:
            open(os.path.join(os.fsencode(temp_dir), b"ghost\xff"), "wb").close()
        except OSError as e:
            pytest.skip(f"filesystem rejects non-UTF-8 names: {e}")

        assert listwhite_main([str(temp_dir)]) == 0
        assert capsysbinary.readouterr().out == b"ghost\xff\n"

    @patch("fsmeta_tools.cli.scan")
    def test_interrupt(self, mock_scan, capsys):
        """Test that Ctrl-C gets its own exit code, distinct from open failures."""

        def names():
            yield "ghost"
            raise KeyboardInterrupt

        mock_scan.return_value = names()

        assert listwhite_main(["/upper"]) == 130
        assert "Aborted!" in capsys.readouterr().err


class TestUsageErrors:
    """Test that the commands raise the usage errors the entry points catch."""

    @pytest.mark.parametrize(
        "app, argv",
        [
            (hasacl_app, ["-x"]),
            (hasacl_app, ["a", "b"]),
            (listwhite_app, ["--bogus"]),
        ],
    )
    def test_usage_error_class(self, app, argv):
        """Test that typer raises click's UsageError for bad arguments."""
        command = typer.main.get_command(app)

        with pytest.raises(click.UsageError):
            command.main(args=argv, prog_name="prog", standalone_mode=False)
