#!/usr/bin/env python3
"""
测试命令行接口
"""

import json

from click.testing import CliRunner

from progress_observer.cli.commands import cli


class TestCommands:
    """测试示例命令"""

    def test_version(self):
        result = CliRunner().invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert "0.1.0" in result.output

    def test_simulate_table(self):
        result = CliRunner().invoke(cli, [
            "simulate", "-n", "1000", "--tick-seconds", "0.01", "--interval", "1",
        ])
        assert result.exit_code == 0, result.output
        assert "检查点历史" in result.output
        assert "最终状态" in result.output

    def test_simulate_json(self):
        result = CliRunner().invoke(cli, [
            "simulate", "-n", "500", "--tick-seconds", "0.01", "--interval", "1",
            "--max-checkpoint-size", "16", "--format", "json",
        ])
        assert result.exit_code == 0, result.output
        rows = json.loads(result.stdout)
        assert rows
        assert max(row["checkpoint_size"] for row in rows) == 16

    def test_simulate_output_file(self, tmp_path):
        output_file = tmp_path / "history.csv"
        result = CliRunner().invoke(cli, [
            "simulate", "-n", "200", "--tick-seconds", "0.01",
            "--format", "csv", "--output-file", str(output_file),
        ])
        assert result.exit_code == 0, result.output
        assert "结果已保存到" in result.output
        assert output_file.read_text(encoding="utf-8").startswith("ticks,")

    def test_invalid_scale_factor(self):
        result = CliRunner().invoke(cli, ["simulate", "-n", "10", "--max-scale-factor", "0.5"])
        assert result.exit_code != 0
        assert "配置错误" in result.output

    def test_negative_tick_seconds(self):
        result = CliRunner().invoke(cli, ["simulate", "--tick-seconds", "-1"])
        assert result.exit_code != 0

    def test_pi(self):
        result = CliRunner().invoke(cli, ["pi", "-n", "2000", "--seed", "1", "--interval", "0.01"])
        assert result.exit_code == 0, result.output
        assert "π ≈" in result.output
        assert "汇报次数" in result.output

    def test_primes(self):
        result = CliRunner().invoke(cli, ["primes", "-n", "100", "--interval", "10"])
        assert result.exit_code == 0, result.output
        assert "25 / 100 = 0.2500" in result.output

    def test_primes_run_for(self):
        result = CliRunner().invoke(cli, [
            "primes", "-n", "100000000", "--interval", "0.01", "--run-for", "0.05",
        ])
        assert result.exit_code == 0, result.output
        assert "提前结束" in result.output
