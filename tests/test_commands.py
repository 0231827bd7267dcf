"""Tests for the post-extraction command runner."""

from arb_extractor.commands import run_post_extraction_command


class TestRunPostExtractionCommand:
    def test_success_captures_output(self, tmp_path):
        result = run_post_extraction_command("echo generated", tmp_path)

        assert result.success
        assert result.returncode == 0
        assert result.stdout.strip() == "generated"
        assert result.error is None

    def test_runs_in_workspace_root(self, tmp_path):
        run_post_extraction_command("echo done > marker.txt", tmp_path)

        assert (tmp_path / "marker.txt").read_text().strip() == "done"

    def test_failure_is_reported_not_raised(self, tmp_path):
        result = run_post_extraction_command("echo oops >&2; exit 3", tmp_path)

        assert not result.success
        assert result.returncode == 3
        assert "exit code 3" in result.error
        assert "oops" in result.error
        assert result.to_dict()["returncode"] == 3
