"""
Test the quire command line.
"""

import json

import pytest
from click.testing import CliRunner

from quire.cli import cli


@pytest.fixture
def site(tmp_path):
    views = tmp_path / "views"
    (views / "partials").mkdir(parents=True)
    (views / "partials" / "nav.tpl").write_text("<nav/>")
    (views / "home.tpl").write_text("{{ require('@partials/nav') }}<p>{{ title }}</p>")
    (views / "layout.tpl").write_text("<html>{{ view() }}</html>")
    (views / "card.tpl").write_text("<i>{{ title }}</i>")
    (views / "cards.tpl").write_text("{{ include('card', {'title': 'C'}) }}")
    return tmp_path


@pytest.fixture
def runner():
    return CliRunner()


def _args(site, *extra):
    return ["--dir", str(site), "--root", "views", "--partials", "views/partials", *extra]


class TestRender:

    def test_render_with_layout_and_data(self, runner, site):
        result = runner.invoke(cli, ["render", "home", "-l", "layout", "-d", '{"title": "Hi"}', *_args(site)])
        assert result.exit_code == 0, result.output
        assert result.output == "<html><nav/><p>Hi</p></html>"

    def test_render_with_partial(self, runner, site):
        result = runner.invoke(cli, ["render", "cards", "-p", "card", *_args(site)])
        assert result.exit_code == 0, result.output
        assert result.output == "<i>C</i>"

    def test_data_from_file(self, runner, site, tmp_path):
        data_file = tmp_path / "data.json"
        data_file.write_text(json.dumps({"title": "F"}))
        result = runner.invoke(cli, ["render", "home", "-d", f"@{data_file}", *_args(site)])
        assert result.output == "<nav/><p>F</p>"

    def test_invalid_data(self, runner, site):
        result = runner.invoke(cli, ["render", "home", "-d", "{nope", *_args(site)])
        assert result.exit_code == 2
        assert "invalid JSON" in result.output

    def test_partial_as_view_fails(self, runner, site):
        result = runner.invoke(cli, ["render", "partials/nav", *_args(site)])
        assert result.exit_code == 1
        assert "partial cannot render directly" in result.output

    def test_missing_view_fails(self, runner, site):
        result = runner.invoke(cli, ["render", "missing", *_args(site)])
        assert result.exit_code == 1
        assert "template not found" in result.output

    def test_config_file(self, runner, site):
        config = site / "quire.yaml"
        config.write_text("templates:\n  root: views\n  partials: views/partials\n")
        result = runner.invoke(cli, ["render", "home", "--dir", str(site), "--config", str(config)])
        assert result.output == "<nav/><p></p>"


class TestPartials:

    def test_lists_global_partials(self, runner, site):
        result = runner.invoke(cli, ["partials", *_args(site)])
        assert result.exit_code == 0
        assert result.output == "@partials/nav\n"


def test_version(runner):
    result = runner.invoke(cli, ["--version"])
    assert "0.1.0" in result.output
