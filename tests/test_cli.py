import numpy as np
import pytest
from PIL import Image
from typer.testing import CliRunner

from imgdhash.cli import app


def write_gradient(path, width=90, height=80, reverse=False):
    row = 2 * np.arange(width, dtype=np.uint8)
    if reverse:
        row = row[::-1]
    Image.fromarray(np.tile(row, (height, 1))).save(path)
    return path


class TestCLIBasicFunctionality:
    def test_help_command_works(self):
        runner = CliRunner()
        result = runner.invoke(app, ["--help"])

        assert result.exit_code == 0
        assert "IMAGE" in result.stdout
        assert "--hex" in result.stdout
        assert "--resample" in result.stdout

    def test_single_image(self, tmp_path):
        """One path prints its signature."""
        image = write_gradient(tmp_path / "a.png", reverse=True)

        runner = CliRunner()
        result = runner.invoke(app, [str(image)])

        assert result.exit_code == 0
        assert f"dhash for {image} is `18446744073709551615`" in result.stdout
        assert "distance is" not in result.stdout

    def test_two_images(self, tmp_path):
        """Two paths print both signatures and their distance."""
        first = write_gradient(tmp_path / "a.png", reverse=True)
        second = write_gradient(tmp_path / "b.png")

        runner = CliRunner()
        result = runner.invoke(app, [str(first), str(second)])

        assert result.exit_code == 0
        lines = result.stdout.strip().splitlines()
        assert lines == [
            f"dhash for {first} is `18446744073709551615`",
            f"dhash for {second} is `0`",
            "distance is: 64",
        ]

    def test_hex_output(self, tmp_path):
        image = write_gradient(tmp_path / "a.png", reverse=True)

        runner = CliRunner()
        result = runner.invoke(app, [str(image), "--hex"])

        assert result.exit_code == 0
        assert "`ffffffffffffffff`" in result.stdout

    def test_hex_output_from_env(self, tmp_path, monkeypatch):
        monkeypatch.setenv("IMGDHASH_HEX", "1")
        image = write_gradient(tmp_path / "a.png")

        runner = CliRunner()
        result = runner.invoke(app, [str(image)])

        assert "`0000000000000000`" in result.stdout

    @pytest.mark.parametrize("threshold,expected", [(64, "similar: yes"), (5, "similar: no")])
    def test_threshold_reports_similarity(self, tmp_path, threshold, expected):
        first = write_gradient(tmp_path / "a.png", reverse=True)
        second = write_gradient(tmp_path / "b.png")

        runner = CliRunner()
        result = runner.invoke(app, [str(first), str(second), "--threshold", str(threshold)])

        assert result.exit_code == 0
        assert expected in result.stdout

    def test_threshold_from_env_reports_similarity(self, tmp_path, monkeypatch):
        """IMGDHASH_THRESHOLD turns on the similarity line just like --threshold."""
        monkeypatch.setenv("IMGDHASH_THRESHOLD", "64")
        first = write_gradient(tmp_path / "a.png", reverse=True)
        second = write_gradient(tmp_path / "b.png")

        runner = CliRunner()
        result = runner.invoke(app, [str(first), str(second)])

        assert result.exit_code == 0
        assert "similar: yes" in result.stdout

    def test_threshold_option_overrides_env(self, tmp_path, monkeypatch):
        monkeypatch.setenv("IMGDHASH_THRESHOLD", "64")
        first = write_gradient(tmp_path / "a.png", reverse=True)
        second = write_gradient(tmp_path / "b.png")

        runner = CliRunner()
        result = runner.invoke(app, [str(first), str(second), "--threshold", "5"])

        assert "similar: no" in result.stdout

    def test_no_threshold_no_similarity_line(self, tmp_path):
        first = write_gradient(tmp_path / "a.png")
        second = write_gradient(tmp_path / "b.png")

        runner = CliRunner()
        result = runner.invoke(app, [str(first), str(second)])

        assert "similar:" not in result.stdout

    def test_box_resample_option(self, tmp_path):
        image = write_gradient(tmp_path / "a.png", reverse=True)

        runner = CliRunner()
        result = runner.invoke(app, [str(image), "--resample", "box", "--luminance", "mean"])

        assert result.exit_code == 0
        assert "`18446744073709551615`" in result.stdout


class TestCLIErrors:
    def test_nonexistent_file_error(self):
        """Typer validates file existence and returns exit code 2 for invalid paths."""
        runner = CliRunner()
        result = runner.invoke(app, ["nonexistent.png"])

        assert result.exit_code == 2
        assert "does not exist" in result.output

    def test_undecodable_file_error(self, tmp_path):
        corrupted = tmp_path / "corrupted.png"
        corrupted.write_bytes(b"not an image")

        runner = CliRunner()
        result = runner.invoke(app, [str(corrupted)])

        assert result.exit_code == 1
        assert "dhash for" not in result.stdout

    def test_undecodable_compare_file_error(self, tmp_path):
        image = write_gradient(tmp_path / "a.png")
        corrupted = tmp_path / "corrupted.png"
        corrupted.write_bytes(b"not an image")

        runner = CliRunner()
        result = runner.invoke(app, [str(image), str(corrupted)])

        assert result.exit_code == 1
        assert "distance is" not in result.stdout

    def test_invalid_resample_option(self, tmp_path):
        image = write_gradient(tmp_path / "a.png")

        runner = CliRunner()
        result = runner.invoke(app, [str(image), "--resample", "lanczos"])

        assert result.exit_code == 2

    def test_threshold_out_of_range(self, tmp_path):
        image = write_gradient(tmp_path / "a.png")

        runner = CliRunner()
        result = runner.invoke(app, [str(image), "--threshold", "65"])

        assert result.exit_code == 2
