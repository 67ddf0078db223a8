"""
Tests for the command line entry point.
"""

import pytest

from sysmonitor import main as cli
from sysmonitor.core.errors import SamplingError
from sysmonitor.reporters import EventLogReporter
from sysmonitor.reporters.dashboard import DashboardReporter


class TestMain:
    """Test CLI dispatch and exit codes."""

    def test_help(self, capsys):
        assert cli.main(["help"]) == 0
        assert "daemon" in capsys.readouterr().out

    def test_default_mode_is_help(self, capsys):
        assert cli.main([]) == 0

    def test_invalid_mode(self, capsys):
        assert cli.main(["serve"]) == 1
        assert "invalid mode" in capsys.readouterr().err

    def test_bad_config(self, tmp_path, capsys):
        path = tmp_path / "bad.conf"
        path.write_text("CPU_THRESHOLD=90\nCPU_KILL_THRESHOLD=50\n")

        assert cli.main(["daemon", "--config", str(path)]) == 1
        assert "configuration error" in capsys.readouterr().err

    def test_missing_explicit_config(self, tmp_path):
        assert cli.main(["daemon", "--config", str(tmp_path / "nope.conf")]) == 1

    def test_no_usable_sources(self, tmp_path, monkeypatch, capsys):
        def check_sources(self):
            raise SamplingError("nothing readable")

        monkeypatch.setattr(cli.MetricSampler, "__init__", lambda self, config, waiter: None)
        monkeypatch.setattr(cli.MetricSampler, "check_sources", check_sources)
        monkeypatch.chdir(tmp_path)

        assert cli.main(["daemon", "--log-file", str(tmp_path / "m.log")]) == 1
        assert "nothing readable" in capsys.readouterr().err

    def test_daemon_runs_loop(self, tmp_path, monkeypatch):
        runs = []
        monkeypatch.setattr(cli.MetricSampler, "__init__", lambda self, config, waiter: None)
        monkeypatch.setattr(cli.MetricSampler, "check_sources", lambda self: None)
        monkeypatch.setattr(cli.MonitorLoop, "install_signal_handlers", lambda self: None)
        monkeypatch.setattr(cli.MonitorLoop, "run", lambda self: runs.append(self))
        monkeypatch.chdir(tmp_path)

        code = cli.main(["daemon", "--interval", "2", "--csv-file", str(tmp_path / "m.csv"),
                         "--log-file", str(tmp_path / "m.log")])

        assert code == 0
        assert len(runs) == 1
        assert runs[0].config.interval == 2
        assert runs[0].config.csv_file == str(tmp_path / "m.csv")

    @pytest.mark.parametrize("interval", ["0", "-1"])
    def test_invalid_interval_override(self, tmp_path, monkeypatch, interval):
        monkeypatch.chdir(tmp_path)
        assert cli.main(["daemon", f"--interval={interval}"]) == 1

    def test_dashboard_logs_events_before_drawing(self, tmp_path, monkeypatch):
        runs = []
        monkeypatch.setattr(cli.MetricSampler, "__init__", lambda self, config, waiter: None)
        monkeypatch.setattr(cli.MetricSampler, "check_sources", lambda self: None)
        monkeypatch.setattr(cli.MonitorLoop, "install_signal_handlers", lambda self: None)
        monkeypatch.setattr(cli.MonitorLoop, "run", lambda self: runs.append(self))
        monkeypatch.chdir(tmp_path)

        assert cli.main(["dashboard", "--log-file", str(tmp_path / "m.log")]) == 0

        reporters = runs[0].reporter.reporters
        assert [type(r) for r in reporters] == [EventLogReporter, DashboardReporter]

    @pytest.mark.parametrize("interval", ["inf", "1e300"])
    def test_unbounded_interval_override(self, tmp_path, monkeypatch, interval):
        monkeypatch.chdir(tmp_path)
        assert cli.main(["daemon", f"--interval={interval}"]) == 1
