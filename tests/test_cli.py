"""Tests for the passwatch command-line interface."""

from unittest.mock import patch

from passwatch.breach import NOT_FOUND, UNAVAILABLE, BreachResult
from passwatch.cli import main


class _FakeClient:
    def __init__(self, result):
        self.result = result
        self.calls = []

    async def lookup(self, digest):
        self.calls.append(digest)
        return self.result


class TestCheckCommand:
    @patch("passwatch.cli.check_breach")
    def test_breached_exit_code(self, mock_check, capsys):
        mock_check.return_value = BreachResult.found(3533661)
        assert main(["check", "password"]) == 1
        out = capsys.readouterr().out
        assert "BREACHED" in out
        assert "3,533,661" in out
        assert "'password'" not in out

    @patch("passwatch.cli.check_breach")
    def test_safe_exit_code(self, mock_check, capsys):
        mock_check.return_value = NOT_FOUND
        assert main(["check", "Tr0ub4dor&3xyz"]) == 0
        out = capsys.readouterr().out
        assert "Safe" in out
        assert "100/100" in out

    @patch("passwatch.cli.check_breach")
    def test_unavailable_is_not_a_failure(self, mock_check, capsys):
        mock_check.return_value = UNAVAILABLE
        assert main(["check", "abc"]) == 0
        out = capsys.readouterr().out
        assert "Unavailable" in out
        assert "! Add uppercase letters" in out

    @patch("passwatch.cli.check_breach")
    def test_offline_skips_lookup(self, mock_check, capsys):
        assert main(["check", "--offline", "abc"]) == 0
        mock_check.assert_not_called()
        assert "Unknown" in capsys.readouterr().out

    @patch("passwatch.cli.check_breach")
    def test_reads_file(self, mock_check, tmp_path):
        mock_check.return_value = NOT_FOUND
        f = tmp_path / "pw.txt"
        f.write_text("one\n\ntwo\n", encoding="utf-8")
        assert main(["check", "-f", str(f)]) == 0
        assert [c.args[0] for c in mock_check.call_args_list] == ["one", "two"]

    def test_no_passwords(self, capsys):
        assert main(["check"]) == 1
        assert "Error" in capsys.readouterr().err


class TestTypeCommand:
    def test_replay_reports_final_status(self, capsys):
        fake = _FakeClient(BreachResult.found(7))
        with patch("passwatch.orchestrator.BreachLookupClient", return_value=fake):
            code = main(["type", "abc", "--interval", "0", "--delay", "0.05"])
        assert code == 1
        assert len(fake.calls) == 1
        out = capsys.readouterr().out
        assert "[found]" in out
        assert "[checking]" in out

    def test_replay_not_found(self, capsys):
        fake = _FakeClient(NOT_FOUND)
        with patch("passwatch.orchestrator.BreachLookupClient", return_value=fake):
            assert main(["type", "abc", "--interval", "0", "--delay", "0.05"]) == 0
        assert "[not-found]" in capsys.readouterr().out


def test_no_command_prints_help(capsys):
    assert main([]) == 0
    assert "usage" in capsys.readouterr().out
