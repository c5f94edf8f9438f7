"""
Smoke tests — verify the package is healthy.

These tests ensure the basic scaffolding works:
- Package imports successfully
- CLI entrypoint responds
- Version is set
"""

from click.testing import CliRunner

from devkit import __version__
from devkit.main import cli


class TestBootstrap:
    """Verify the project scaffolding is healthy."""

    def test_version_is_set(self):
        assert __version__
        assert isinstance(__version__, str)

    def test_cli_help(self):
        runner = CliRunner()
        result = runner.invoke(cli, ["--help"])
        assert result.exit_code == 0
        assert "Bootstrap a development environment" in result.output
        assert "--yes" in result.output

    def test_cli_version(self):
        runner = CliRunner()
        result = runner.invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output

    def test_core_package_imports(self):
        """Core sub-packages should be importable."""
        import devkit.core
        import devkit.core.config
        import devkit.core.models
        import devkit.core.observability
        import devkit.core.services.provision
        assert devkit.core is not None

    def test_adapter_packages_import(self):
        import devkit.adapters
        import devkit.adapters.packages
        import devkit.adapters.shell
        assert devkit.adapters is not None

    def test_ui_packages_import(self):
        import devkit.ui
        import devkit.ui.cli
        assert devkit.ui is not None

    def test_every_procedure_in_catalog_is_registered(self):
        from devkit.core.services.provision.data import TOOLS
        from devkit.core.services.provision.execution import PROCEDURES

        for tool in TOOLS.values():
            for strategy in tool.strategies.values():
                if strategy.procedure:
                    assert strategy.procedure in PROCEDURES, (tool.name, strategy.procedure)

    def test_every_category_tool_exists(self):
        from devkit.core.services.provision.data import CATEGORIES, TOOLS

        for category in CATEGORIES:
            for name in category.tools:
                assert name in TOOLS

    def test_console_script_declared(self, project_root):
        pyproject = (project_root / "pyproject.toml").read_text()
        assert 'devkit = "devkit.main:cli"' in pyproject
