"""
Tests for the command-line interface.
"""

import json

import pytest
from aioresponses import aioresponses
from click.testing import CliRunner

from graphql_http.cli import cli

ENDPOINT = "https://api.test/graphql"


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


class TestServeCommand:
    """Test the serve command."""

    def test_serve(self, runner, schema_file, monkeypatch):
        """Test the application is built from the SDL file and options."""
        served = {}

        def fake_run_server(app, host, port):
            served.update(app=app, host=host, port=port)

        monkeypatch.setattr("graphql_http.cli.main.run_server", fake_run_server)
        monkeypatch.setattr("graphql_http.cli.main.setup_logging", lambda config: None)

        result = runner.invoke(
            cli,
            [
                "serve",
                str(schema_file),
                "--port",
                "9001",
                "--path",
                "api",
                "--playground",
                "--root-value",
                '{"hello": "world"}',
            ],
        )

        assert result.exit_code == 0, result.output
        assert "✓ Serving schema.graphql at http://127.0.0.1:9001/api" in result.output
        assert "Playground enabled" in result.output
        assert served["port"] == 9001
        resources = [route.resource.canonical for route in served["app"].router.routes()]
        assert "/api" in resources

    def test_invalid_schema(self, runner, temp_dir, monkeypatch):
        """Test SDL errors are reported."""
        monkeypatch.setattr("graphql_http.cli.main.setup_logging", lambda config: None)
        path = temp_dir / "bad.graphql"
        path.write_text("type Query {", encoding="utf-8")

        result = runner.invoke(cli, ["serve", str(path)])

        assert result.exit_code != 0
        assert "Invalid schema" in result.output

    def test_invalid_root_value(self, runner, schema_file, monkeypatch):
        """Test a root value that is not a JSON object."""
        monkeypatch.setattr("graphql_http.cli.main.setup_logging", lambda config: None)

        result = runner.invoke(cli, ["serve", str(schema_file), "--root-value", "[1]"])

        assert result.exit_code == 2
        assert "must be a JSON object" in result.output


class TestQueryCommand:
    """Test the query command."""

    def test_query(self, runner):
        """Test the result is printed as JSON."""
        with aioresponses() as m:
            m.post(ENDPOINT, payload={"data": {"hello": "world"}})

            result = runner.invoke(
                cli, ["query", ENDPOINT, "{ hello }", "--header", "Authorization: Bearer t"]
            )

        assert result.exit_code == 0, result.output
        assert json.loads(result.output) == {"data": {"hello": "world"}}

    def test_request_error(self, runner):
        """Test GraphQL request errors exit with 1."""
        with aioresponses() as m:
            m.post(
                ENDPOINT,
                status=400,
                body='{"errors":[{"message":"Syntax Error"}]}',
                content_type="application/graphql-response+json",
            )

            result = runner.invoke(cli, ["query", ENDPOINT, "{"])

        assert result.exit_code == 1
        assert "Syntax Error" in result.output

    def test_invalid_variables(self, runner):
        """Test variables must be a JSON object."""
        result = runner.invoke(cli, ["query", ENDPOINT, "{ hello }", "--variables", "{bad"])

        assert result.exit_code == 2
        assert "invalid JSON" in result.output

    def test_invalid_header(self, runner):
        """Test headers must be 'Name: value'."""
        result = runner.invoke(cli, ["query", ENDPOINT, "{ hello }", "--header", "nocolon"])

        assert result.exit_code == 2


class TestPlaygroundCommand:
    """Test the playground command."""

    def test_print(self, runner):
        """Test the page is printed."""
        result = runner.invoke(cli, ["playground", "--endpoint", "/api", "--title", "My API"])

        assert result.exit_code == 0
        assert "<title>My API</title>" in result.output
        assert '"endpoint": "/api"' in result.output

    def test_output_file(self, runner, temp_dir):
        """Test the page is written to a file."""
        output = temp_dir / "playground.html"

        result = runner.invoke(cli, ["playground", "--output", str(output)])

        assert result.exit_code == 0
        assert output.read_text(encoding="utf-8").strip().startswith("<!DOCTYPE html>")


class TestVersion:
    """Test the version option."""

    def test_version(self, runner):
        """Test --version prints the package version."""
        result = runner.invoke(cli, ["--version"])

        assert result.exit_code == 0
        assert "0.1.0" in result.output
