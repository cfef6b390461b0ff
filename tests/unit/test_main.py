from unittest.mock import patch

import pytest

from turbobloom.__main__ import main, random_str


class TestTurboBloomMain:
    @pytest.fixture
    def mock_console(self):
        with patch("turbobloom.__main__.console") as mock_console:
            yield mock_console

    def run(self, argv) -> int:
        with pytest.raises(SystemExit) as exc_info:
            main(argv)
        return exc_info.value.code

    def printed(self, mock_console):
        return mock_console.print.call_args[0][0]

    # ============================================================================
    # INFO COMMAND TESTS
    # ============================================================================

    def test_info_command(self, mock_console) -> None:
        assert self.run(["info"]) == 0
        table = self.printed(mock_console)
        assert "Table" in str(type(table))
        assert table.row_count == 7

    def test_no_command_defaults_to_info(self, mock_console) -> None:
        assert self.run([]) == 0
        assert "Table" in str(type(self.printed(mock_console)))

    def test_info_reads_environment(self, mock_console, monkeypatch) -> None:
        monkeypatch.setenv("TURBOBLOOM_FP_PROB", "0.2")
        assert self.run(["info"]) == 0
        values = list(self.printed(mock_console).columns[1].cells)
        assert "0.2" in values

    def test_info_bad_environment(self, mock_console, monkeypatch) -> None:
        monkeypatch.setenv("TURBOBLOOM_FP_PROB", "often")
        assert self.run(["info"]) == 2
        assert "Error" in self.printed(mock_console)

    # ============================================================================
    # SIZE COMMAND TESTS
    # ============================================================================

    def test_size_command(self, mock_console) -> None:
        assert self.run(["size", "5000"]) == 0
        cells = list(self.printed(mock_console).columns[1].cells)
        assert cells[:2] == ["47926", "7"]

    def test_size_with_probability(self, mock_console) -> None:
        assert self.run(["size", "10", "-p", "0.04"]) == 0
        cells = list(self.printed(mock_console).columns[1].cells)
        assert cells[:3] == ["67", "5", "9"]

    @pytest.mark.parametrize("argv", [["size", "0"], ["size", "10", "-p", "1.0"]])
    def test_size_invalid_parameters(self, mock_console, argv) -> None:
        assert self.run(argv) == 2
        assert "must be" in self.printed(mock_console)

    # ============================================================================
    # DEMO / BENCH COMMAND TESTS
    # ============================================================================

    def test_demo_command(self, mock_console) -> None:
        assert self.run(["demo"]) == 0
        body = str(self.printed(mock_console).renderable)
        assert "has('foo') = True" in body
        assert "has('bar') = True" in body
        assert "has('baz') = False" in body

    def test_bench_command(self, mock_console) -> None:
        assert self.run(["bench", "-n", "500", "--queries", "500", "--seed", "1"]) == 0
        table = self.printed(mock_console)
        cells = list(table.columns[1].cells)
        assert cells[0] == "500"
        assert cells[2] == "500"

    def test_bench_debug(self, mock_console) -> None:
        with patch("turbobloom.core.bloom_filter.console") as core_console:
            assert self.run(["bench", "-n", "100", "--queries", "10", "--debug"]) == 0
            core_console.print.assert_called_once()

    def test_bench_rejects_zero_queries(self, mock_console) -> None:
        assert self.run(["bench", "--queries", "0"]) == 2

    def test_random_str(self) -> None:
        import random

        value = random_str(random.Random(0), 30)
        assert len(value) == 30
        assert value.isalnum()
        assert value == random_str(random.Random(0), 30)
