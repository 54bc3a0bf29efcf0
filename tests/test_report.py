"""Tests for the report module."""

from pathlib import Path

from scaffold.report import Reporter


class TestReporter:

    def test_empty(self):
        reporter = Reporter()
        assert len(reporter) == 0
        assert reporter.total_lines == 0
        assert reporter.render() == (
            "Generated Files Report:\n"
            "======================\n"
            "\n"
            "Total files generated: 0"
        )

    def test_render(self):
        reporter = Reporter()
        reporter.record_file(Path("gen/src/pets/handlers.py"), 42)
        reporter.record_file("gen/src/__init__.py", 7)
        assert reporter.render() == (
            "Generated Files Report:\n"
            "======================\n"
            "- gen/src/pets/handlers.py (42 lines)\n"
            "- gen/src/__init__.py (7 lines)\n"
            "\n"
            "Total files generated: 2"
        )

    def test_same_path_replaces(self):
        reporter = Reporter()
        reporter.record_file("out/a.py", 10)
        reporter.record_file(Path("out/a.py"), 3)
        assert len(reporter) == 1
        assert reporter.generated_files[Path("out/a.py")] == 3

    def test_total_lines(self):
        reporter = Reporter()
        reporter.record_file("a", 1)
        reporter.record_file("b", 2)
        assert reporter.total_lines == 3
