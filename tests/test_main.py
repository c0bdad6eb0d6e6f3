"""
Tests for the command-line entry point
"""

from main import main, run_script


class TestScriptMode:
    """Test running scripts from the command line"""

    def test_run_script(self, tmp_path):
        script = tmp_path / "edit.txt"
        script.write_text("load checkerboard 2\nsepia\nundo\n")

        assert main(["--script", str(script)]) == 0

    def test_unreadable_script(self, tmp_path):
        assert run_script(str(tmp_path / "absent.txt")) == 1

    def test_failing_command(self, tmp_path):
        script = tmp_path / "bad.txt"
        script.write_text("sepia\n")

        assert run_script(str(script)) == 2

    def test_missing_image(self, tmp_path):
        script = tmp_path / "load.txt"
        script.write_text(f"load {tmp_path / 'absent.png'}\n")

        assert run_script(str(script)) == 2
