# tests/cli/test_cli_commands.py
"""
Tests for the clusterlens CLI commands and their delegation to the processor.
"""

import json
from decimal import Decimal
from unittest.mock import MagicMock

import pytest
from typer.testing import CliRunner

from clusterlens import __version__
from clusterlens.cli import app
from clusterlens.core.exceptions import ClusterAccessError, ClusterConnectionError
from clusterlens.models.cost import ClusterCostSummary, InstanceCostItem
from clusterlens.models.density import NodeDensity, OwnerKey, OwnerRecord
from clusterlens.models.node import NodeRecord

runner = CliRunner()


@pytest.fixture
def processor(mocker):
    """A processor double returned by get_processor in every command module."""
    proc = MagicMock()
    proc.node_usage = mocker.AsyncMock(return_value=[NodeRecord(name="node-1", cpu_capacity=Decimal("4"))])
    owner = OwnerRecord(node="node-1", key=OwnerKey(namespace="prod", owner_type="Deployment", owner_name="web"), pod_count=2)
    proc.pod_density = mocker.AsyncMock(
        return_value=[NodeDensity(node=NodeRecord(name="node-1", pod_count=2), owners=[owner])]
    )
    proc.cost_estimate = mocker.AsyncMock(
        return_value=ClusterCostSummary(
            region="us-east-1",
            instances=[InstanceCostItem(instance_type="m5.large", count=1, hourly_price=0.096, monthly_cost=70.08)],
            total_monthly_cost=70.08,
        )
    )
    proc.close = mocker.AsyncMock()
    for module in ("node_usage", "density", "cost"):
        mocker.patch(f"clusterlens.cli.{module}.get_processor", return_value=proc)
    return proc


@pytest.fixture
def reporter(mocker):
    instance = MagicMock()
    for module in ("node_usage", "density", "cost"):
        mocker.patch(f"clusterlens.cli.{module}.ConsoleReporter", return_value=instance)
    return instance


def test_node_usage_reports_to_console(processor, reporter):
    result = runner.invoke(app, ["node-usage", "--sort", "CPU"])

    assert result.exit_code == 0, result.output
    processor.node_usage.assert_awaited_once()
    processor.close.assert_awaited_once()
    reporter.report_node_usage.assert_called_once_with(processor.node_usage.return_value, sort_by="cpu")


def test_node_usage_rejects_unknown_sort(processor, reporter):
    result = runner.invoke(app, ["node-usage", "--sort", "pods"])

    assert result.exit_code != 0
    processor.node_usage.assert_not_called()


def test_density_passes_namespace_and_top(processor, reporter):
    result = runner.invoke(app, ["density", "--namespace", "prod", "--top", "5"])

    assert result.exit_code == 0, result.output
    processor.pod_density.assert_awaited_once_with(namespace="prod")
    reporter.report_density.assert_called_once_with(processor.pod_density.return_value, top=5, namespace="prod")


def test_cost_reports_to_console(processor, reporter):
    result = runner.invoke(app, ["cost"])

    assert result.exit_code == 0, result.output
    reporter.report_cost.assert_called_once_with(processor.cost_estimate.return_value)


def test_density_exports_csv(processor, reporter, tmp_path):
    out = tmp_path / "density.csv"

    result = runner.invoke(app, ["density", "--output", "csv", "--output-path", str(out)])

    assert result.exit_code == 0, result.output
    reporter.report_density.assert_not_called()
    lines = out.read_text(encoding="utf-8").splitlines()
    assert lines[0].startswith("node,namespace,owner_type,owner_name,pod_count")
    assert lines[1].startswith("node-1,prod,Deployment,web,2")


def test_cost_exports_json_to_default_path(processor, reporter, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)

    result = runner.invoke(app, ["cost", "--output", "json"])

    assert result.exit_code == 0, result.output
    rows = json.loads((tmp_path / "data" / "clusterlens-cost.json").read_text(encoding="utf-8"))
    assert rows[0]["type"] == "m5.large"
    assert rows[0]["monthly_cost"] == 70.08


def test_invalid_output_format(processor, reporter):
    result = runner.invoke(app, ["cost", "--output", "xml"])

    assert result.exit_code != 0
    processor.cost_estimate.assert_not_called()


@pytest.mark.parametrize(
    "error",
    [ClusterAccessError("pods", "Forbidden", 403), ClusterConnectionError("nodes", "connection refused")],
)
def test_fetch_failure_exits_with_error(processor, reporter, error):
    processor.node_usage.side_effect = error

    result = runner.invoke(app, ["node-usage"])

    assert result.exit_code == 1
    processor.close.assert_awaited_once()
    reporter.report_node_usage.assert_not_called()


def test_invalid_watch_interval(processor, reporter):
    result = runner.invoke(app, ["density", "--watch", "--interval", "often"])

    assert result.exit_code != 0
    processor.pod_density.assert_not_called()


def test_version_command():
    result = runner.invoke(app, ["version"])

    assert result.exit_code == 0
    assert f"clusterlens version: {__version__}" in result.stdout


def test_version_flag():
    result = runner.invoke(app, ["--version"])

    assert result.exit_code == 0
    assert __version__ in result.stdout


def test_context_option_overrides_config(mocker, processor, reporter):
    from clusterlens.core.config import config

    mocker.patch.object(config, "KUBE_CONTEXT", None)

    result = runner.invoke(app, ["--context", "staging", "cost"])

    assert result.exit_code == 0, result.output
    assert config.KUBE_CONTEXT == "staging"


def test_invalid_log_level(processor, reporter):
    result = runner.invoke(app, ["--log-level", "chatty", "cost"])

    assert result.exit_code != 0
    processor.cost_estimate.assert_not_called()
