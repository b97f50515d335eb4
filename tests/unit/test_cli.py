"""Tests for CLI commands."""

import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from intent.cli import app


@pytest.fixture
def cli_runner():
    """Return a CLI test runner."""
    return CliRunner()


@pytest.fixture
def usages_file(tmp_path: Path):
    """Write a usages file with one clean and one broken Button."""
    path = tmp_path / "usages.json"
    path.write_text(
        json.dumps(
            [
                {
                    "file": "src/App.tsx",
                    "usages": [
                        {"component": "Button", "props": {"importance": "primary"}},
                        {"component": "Button", "props": {"importance": "ghost", "size": "lg"}},
                    ],
                }
            ]
        )
    )
    return path


@pytest.fixture
def themes_file(tmp_path: Path):
    """Write a themes file extending the default theme."""
    path = tmp_path / "themes.yaml"
    path.write_text(
        "themes:\n"
        "  - name: brand\n"
        "    extends: intent-default\n"
        "    tokens:\n"
        "      color: {brand-primary: '#FF6B6B'}\n"
        "    settings: {cssPrefix: brand}\n"
    )
    return path


class TestCLI:
    """Tests for global CLI behavior."""

    def test_help(self, cli_runner):
        """Test help lists every command."""
        result = cli_runner.invoke(app, ["--help"])
        assert result.exit_code == 0
        for command in ("compile", "validate", "generate", "themes"):
            assert command in result.output

    def test_version(self, cli_runner):
        """Test --version prints the version and exits."""
        result = cli_runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert result.output.startswith("Intent ")
        assert "Python" in result.output


class TestCompileCommand:
    """Tests for `intent compile`."""

    def test_writes_outputs(self, cli_runner, config_file, tmp_path):
        """Test compile writes the stylesheet and manifest."""
        out = tmp_path / "dist"
        result = cli_runner.invoke(app, ["compile", str(config_file), "--out", str(out)])
        assert result.exit_code == 0, result.output

        css = (out / "intent.css").read_text()
        assert css.startswith("/* Intent Design System: acme v1.0.0 */")
        assert '.intent-button[data-importance="primary"]' in css

        manifest = json.loads((out / "ai-manifest.json").read_text())
        assert manifest["designSystem"] == "acme"
        assert manifest["components"][0]["name"] == "Button"

    def test_directory_argument(self, cli_runner, config_file, tmp_path):
        """Test the config directory can be passed instead of the file."""
        out = tmp_path / "out"
        result = cli_runner.invoke(app, ["compile", str(config_file.parent), "-o", str(out)])
        assert result.exit_code == 0, result.output
        assert (out / "intent.css").exists()

    def test_minify_and_prefix(self, cli_runner, config_file, tmp_path):
        """Test --minify and --prefix flow into the stylesheet."""
        out = tmp_path / "dist"
        result = cli_runner.invoke(
            app, ["compile", str(config_file), "-o", str(out), "--minify", "--prefix", "acme"]
        )
        assert result.exit_code == 0, result.output
        css = (out / "intent.css").read_text()
        assert "\n" not in css
        assert ".acme-button{" in css

    def test_theme(self, cli_runner, config_file, themes_file, tmp_path):
        """Test a theme from a themes file is applied before compiling."""
        out = tmp_path / "dist"
        result = cli_runner.invoke(
            app,
            ["compile", str(config_file), "-o", str(out), "--theme", "brand", "--themes", str(themes_file)],
        )
        assert result.exit_code == 0, result.output
        css = (out / "intent.css").read_text()
        assert "--brand-color-brand-primary: #FF6B6B;" in css
        assert "--brand-color-neutral-900: #0F172A;" in css

    def test_unknown_theme(self, cli_runner, config_file, tmp_path):
        """Test an unknown theme fails."""
        result = cli_runner.invoke(
            app, ["compile", str(config_file), "-o", str(tmp_path / "dist"), "-t", "nope"]
        )
        assert result.exit_code == 1
        assert 'Theme "nope" not found' in result.output

    def test_strict_mode_setting(self, cli_runner, tmp_path):
        """Test strictMode in the config fails compile without --strict."""
        config = tmp_path / "intent.config.yaml"
        config.write_text(
            "name: acme\nsettings: {strictMode: true}\ntokens:\n  color:\n    Brand_Primary: '#000'\n"
        )
        out = tmp_path / "dist"
        result = cli_runner.invoke(app, ["compile", str(config), "-o", str(out)])
        assert result.exit_code == 1
        assert not (out / "intent.css").exists()

    def test_missing_config(self, cli_runner, tmp_path):
        """Test a directory without a config fails cleanly."""
        result = cli_runner.invoke(app, ["compile", str(tmp_path)])
        assert result.exit_code == 1
        assert "No intent.config.yaml found" in result.output

    def test_strict_failure_writes_nothing(self, cli_runner, tmp_path):
        """Test a strict build with warnings produces no files."""
        config = tmp_path / "intent.config.yaml"
        config.write_text("name: acme\ntokens:\n  color:\n    Brand_Primary: '#000'\n")
        out = tmp_path / "dist"
        result = cli_runner.invoke(app, ["compile", str(config), "-o", str(out), "--strict"])
        assert result.exit_code == 1
        assert "Compilation failed" in result.output
        assert not (out / "intent.css").exists()


class TestValidateCommand:
    """Tests for `intent validate`."""

    def test_valid_schema(self, cli_runner, config_file):
        """Test a clean schema validates."""
        result = cli_runner.invoke(app, ["validate", str(config_file)])
        assert result.exit_code == 0, result.output
        assert "Valid" in result.output

    def test_invalid_usages(self, cli_runner, config_file, usages_file):
        """Test a constraint violation in usages fails validation."""
        result = cli_runner.invoke(app, ["validate", str(config_file), "--usages", str(usages_file)])
        assert result.exit_code == 1
        assert "Invalid" in result.output
        assert "CONSTRAINT_FORBIDDEN_PROP" in result.output
        assert "src/App.tsx" in result.output
        assert ":0:0" not in result.output

    def test_strict_warnings(self, cli_runner, tmp_path):
        """Test --strict turns naming warnings into a failure."""
        config = tmp_path / "intent.config.yaml"
        config.write_text("name: acme\ntokens:\n  color:\n    Brand_Primary: '#000'\n")
        assert cli_runner.invoke(app, ["validate", str(config)]).exit_code == 0
        assert cli_runner.invoke(app, ["validate", str(config), "--strict"]).exit_code == 1

    def test_malformed_usages(self, cli_runner, config_file, tmp_path):
        """Test a broken usages file fails with a config error."""
        path = tmp_path / "usages.json"
        path.write_text("[{")
        result = cli_runner.invoke(app, ["validate", str(config_file), "-u", str(path)])
        assert result.exit_code == 1
        assert "Invalid JSON" in result.output


class TestGenerateCommand:
    """Tests for `intent generate`."""

    def test_manifest_json(self, cli_runner, config_file):
        """Test the default output is the manifest as JSON."""
        result = cli_runner.invoke(app, ["generate", str(config_file)])
        assert result.exit_code == 0, result.output
        data = json.loads(result.stdout)
        assert data["designSystem"] == "acme"
        assert "semanticDescriptions" in data

    def test_prompt_for_component(self, cli_runner, config_file):
        """Test --prompt with a component focus."""
        result = cli_runner.invoke(
            app, ["generate", str(config_file), "--prompt", "--component", "Button"]
        )
        assert result.exit_code == 0, result.output
        assert "# Intent Framework Rules" in result.output
        assert "## Component: Button" in result.output

    def test_unknown_component(self, cli_runner, config_file):
        """Test focusing an unknown component fails."""
        result = cli_runner.invoke(app, ["generate", str(config_file), "--prompt", "-c", "Card"])
        assert result.exit_code == 1
        assert 'Unknown component "Card"' in result.output

    def test_output_file(self, cli_runner, config_file, tmp_path):
        """Test --output writes to a file."""
        target = tmp_path / "prompt.md"
        result = cli_runner.invoke(
            app, ["generate", str(config_file), "--prompt", "--output", str(target)]
        )
        assert result.exit_code == 0, result.output
        assert target.read_text().startswith("# Intent Framework Rules")


class TestThemesCommand:
    """Tests for `intent themes`."""

    def test_list(self, cli_runner, themes_file):
        """Test listing built-in and file themes."""
        result = cli_runner.invoke(app, ["themes", "--themes", str(themes_file)])
        assert result.exit_code == 0, result.output
        assert "intent-default" in result.output
        assert "brand (extends intent-default)" in result.output

    def test_resolve_css(self, cli_runner, themes_file):
        """Test a resolved theme prints its CSS variables."""
        result = cli_runner.invoke(app, ["themes", "brand", "--themes", str(themes_file)])
        assert result.exit_code == 0, result.output
        assert result.output.startswith(":root {")
        assert "--brand-color-brand-primary: #FF6B6B;" in result.output
        assert "prefers-color-scheme: dark" in result.output

    def test_unknown(self, cli_runner):
        """Test resolving an unknown theme fails."""
        result = cli_runner.invoke(app, ["themes", "nope"])
        assert result.exit_code == 1
        assert 'Theme "nope" not found' in result.output
