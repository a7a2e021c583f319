"""Tests for the command line interface."""

import json

import pytest
from unittest.mock import patch
from typer.testing import CliRunner
from streamgraph_sql.cli import app


runner = CliRunner()

GRAPH = {
    "stream_id": "s1",
    "nodes": [
        {"type": "mysqlExtract", "id": "1", "hostname": "mysql", "username": "root",
         "password": "pw", "database": "shop", "table_names": ["user"],
         "fields": [{"type": "base", "name": "id", "format_info": {"type": "long"}}]},
        {"type": "kafkaLoad", "id": "2", "topic": "out", "bootstrap_servers": "kafka:9092",
         "fields": [{"type": "base", "name": "id", "format_info": {"type": "long"}}],
         "field_relations": [{"input_field": {"type": "base", "name": "id"},
                              "output_field": {"type": "base", "name": "id"}}]},
    ],
    "relations": [{"type": "baseRelation", "inputs": ["1"], "outputs": ["2"]}],
}


@pytest.fixture
def graph_file(tmp_path):
    path = tmp_path / "graph.json"
    path.write_text(json.dumps(GRAPH), encoding="utf-8")
    return path


@pytest.fixture
def broken_file(tmp_path):
    graph = json.loads(json.dumps(GRAPH))
    graph["relations"][0]["inputs"] = ["9"]
    path = tmp_path / "broken.json"
    path.write_text(json.dumps(graph), encoding="utf-8")
    return path


class TestCompileCommand:
    """Test the compile command."""

    def test_compile_prints_script(self, graph_file):
        result = runner.invoke(app, ["compile", str(graph_file)])
        assert result.exit_code == 0
        assert "CREATE TABLE `table_1`" in result.output
        assert "INSERT INTO `node_2_out`" in result.output

    def test_compile_to_file(self, graph_file, tmp_path):
        output = tmp_path / "out.sql"
        result = runner.invoke(app, ["compile", str(graph_file), "--output", str(output)])
        assert result.exit_code == 0
        script = output.read_text(encoding="utf-8")
        assert script.count(";\n\n") == 3

    def test_compile_invalid_graph(self, broken_file):
        result = runner.invoke(app, ["compile", str(broken_file)])
        assert result.exit_code == 1
        assert "Error" in result.output

    def test_compile_missing_file(self, tmp_path):
        result = runner.invoke(app, ["compile", str(tmp_path / "missing.json")])
        assert result.exit_code != 0


class TestValidateCommand:
    """Test the validate command."""

    def test_validate(self, graph_file):
        result = runner.invoke(app, ["validate", str(graph_file)])
        assert result.exit_code == 0
        assert "Graph is valid" in result.output

    def test_validate_failure(self, tmp_path):
        graph = json.loads(json.dumps(GRAPH))
        graph["relations"] = []
        path = tmp_path / "empty.json"
        path.write_text(json.dumps(graph), encoding="utf-8")
        result = runner.invoke(app, ["validate", str(path)])
        assert result.exit_code == 1
        assert "relations is empty" in result.output


class TestSubmitCommand:
    """Test the submit command."""

    def test_submit_dry_run(self, graph_file):
        with patch('streamgraph_sql.client.psycopg.connect') as mock_connect:
            result = runner.invoke(app, ["submit", str(graph_file), "--dry-run"])
        assert result.exit_code == 0
        assert "-- Statement 3" in result.output
        mock_connect.assert_not_called()

    @patch('streamgraph_sql.cli.SqlGatewayClient')
    def test_submit(self, mock_client_cls, graph_file):
        mock_client_cls.return_value.submit.return_value = ["a", "b", "c"]
        result = runner.invoke(app, ["submit", str(graph_file), "--host", "gw", "--port", "9000"])
        assert result.exit_code == 0
        assert "Graph submitted successfully" in result.output
        config = mock_client_cls.call_args.args[0]
        assert config.host == "gw"
        assert config.port == 9000

    @patch('streamgraph_sql.cli.SqlGatewayClient')
    def test_submit_default_gateway(self, mock_client_cls, graph_file):
        mock_client_cls.return_value.submit.return_value = []
        result = runner.invoke(app, ["submit", str(graph_file)])
        assert result.exit_code == 0
        config = mock_client_cls.call_args.args[0]
        assert config.dsn() == "postgresql://root@localhost:5432/default"


class TestVersionCommand:

    def test_version(self):
        from streamgraph_sql import __version__
        result = runner.invoke(app, ["version"])
        assert result.exit_code == 0
        assert __version__ in result.output
