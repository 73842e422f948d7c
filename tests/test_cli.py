import json

import pytest

from sales_performance.cli import build_config, build_data_source, parse_args, run_cli
from sales_performance.data_sources.json_file import JsonFileDataSource
from sales_performance.data_sources.mock_records import MockSalesDataSource


def test_cli_writes_text_and_json(tmp_path, sample_dataset, capsys):
    input_path = tmp_path / "input.json"
    input_path.write_text(json.dumps(sample_dataset), encoding="utf-8")
    output_path = tmp_path / "out" / "report.json"

    exit_code = run_cli(["--input", str(input_path), "--output-json", str(output_path)])

    assert exit_code == 0
    stdout = capsys.readouterr().out
    assert "Source: json:input.json" in stdout
    assert "1. Maria Ivanova (seller_2)" in stdout
    payload = json.loads(output_path.read_text(encoding="utf-8"))
    assert [seller["seller_id"] for seller in payload["sellers"]] == ["seller_2", "seller_1", "seller_3", "seller_4"]
    assert payload["sellers"][0]["bonus"] == 10.5


def test_cli_top_n_flag(tmp_path, sample_dataset):
    input_path = tmp_path / "input.json"
    input_path.write_text(json.dumps(sample_dataset), encoding="utf-8")
    output_path = tmp_path / "report.json"

    assert run_cli(["--input", str(input_path), "--top-n", "1", "--output-json", str(output_path)]) == 0

    payload = json.loads(output_path.read_text(encoding="utf-8"))
    assert all(len(seller["top_products"]) <= 1 for seller in payload["sellers"])


def test_cli_mock_mode(capsys):
    assert run_cli(["--mode", "mock", "--seed", "5"]) == 0

    assert "Source: mock_sales_records" in capsys.readouterr().out


def test_cli_invalid_input_returns_error(tmp_path, sample_dataset, capsys):
    sample_dataset["sellers"] = []
    input_path = tmp_path / "input.json"
    input_path.write_text(json.dumps(sample_dataset), encoding="utf-8")

    assert run_cli(["--input", str(input_path)]) == 1
    assert "Source:" not in capsys.readouterr().out


def test_cli_missing_file_returns_error(tmp_path):
    assert run_cli(["--input", str(tmp_path / "nope.json")]) == 1


def test_cli_file_mode_requires_input():
    assert run_cli(["--mode", "file"]) == 1


def test_data_source_selection(monkeypatch, tmp_path):
    config = build_config(parse_args([]))
    assert isinstance(build_data_source(config, None), MockSalesDataSource)

    monkeypatch.setenv("SALES_REPORT_INPUT", str(tmp_path / "env.json"))
    config = build_config(parse_args(["--seed", "3"]))
    source = build_data_source(config, None)
    assert isinstance(source, JsonFileDataSource)
    assert source.path == tmp_path / "env.json"
    assert config.data_source.mock_seed == 3


def test_cli_rejects_unknown_log_level(capsys):
    with pytest.raises(SystemExit) as excinfo:
        parse_args(["--log-level", "FOO"])

    assert excinfo.value.code == 2
    assert "--log-level" in capsys.readouterr().err


def test_cli_log_level_is_case_insensitive():
    assert parse_args(["--log-level", "debug"]).log_level == "DEBUG"


def test_unknown_env_log_level_falls_back_to_info(monkeypatch):
    monkeypatch.setenv("SALES_REPORT_LOG_LEVEL", "loud")

    assert build_config(parse_args([])).log_level == "INFO"


def test_cli_reports_item_with_null_discount(tmp_path, single_seller_dataset, capsys):
    single_seller_dataset["purchase_records"][0]["items"][0]["discount"] = None
    input_path = tmp_path / "input.json"
    input_path.write_text(json.dumps(single_seller_dataset), encoding="utf-8")

    assert run_cli(["--input", str(input_path)]) == 0

    assert "1. Ivan Petrov (seller_1)" in capsys.readouterr().out
