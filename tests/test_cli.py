"""
Test Suite for the Command-Line Interface

Tests:
- sample: named samplers, importable classes, file output
- shape: single and all distributions
- config: list, show, create, validate
- Errors exit with status 1
"""

import pandas as pd
import pytest
import yaml

from anondata.cli import CLI, SAMPLERS, resolve_type


@pytest.fixture
def cli():
    return CLI()


class TestSampleCommand:
    """Test the sample command"""

    def test_named_sampler(self, cli, capsys):
        cli.run(["sample", "int", "-n", "3", "--seed", "1"])

        assert "Anonymous int" in capsys.readouterr().out

    @pytest.mark.parametrize("name", sorted(SAMPLERS))
    def test_every_sampler(self, cli, name):
        cli.run(["sample", name, "-n", "2"])

    def test_distribution_option(self, cli, capsys):
        cli.run(["sample", "float", "-n", "2", "-d", "inverted_normal"])

        assert "Anonymous float" in capsys.readouterr().out

    def test_importable_type(self, cli, capsys):
        cli.run(["sample", "collections:OrderedDict", "-n", "1", "--option", "deep"])

        assert "OrderedDict" in capsys.readouterr().out

    def test_preset(self, cli):
        cli.run(["sample", "str", "-n", "2", "--preset", "compact"])

    def test_output_file(self, cli, tmp_path):
        path = tmp_path / "names.csv"
        cli.run(["sample", "full_name", "-n", "4", "-o", str(path)])

        frame = pd.read_csv(path)
        assert len(frame) == 4
        assert list(frame.columns) == ["value"]

    def test_config_file(self, cli, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text(yaml.dump({"text": {"min_length": 3, "max_length": 3}}))

        cli.run(["sample", "str", "-n", "2", "-c", str(path)])

    def test_unknown_type(self, cli, capsys):
        with pytest.raises(SystemExit) as excinfo:
            cli.run(["sample", "widget"])

        assert excinfo.value.code == 1
        assert "Error" in capsys.readouterr().out

    def test_unknown_preset(self, cli):
        with pytest.raises(SystemExit):
            cli.run(["sample", "int", "--preset", "enormous"])

    def test_resolve_type(self):
        from collections import OrderedDict

        assert resolve_type("collections:OrderedDict") is OrderedDict

        with pytest.raises(ValueError):
            resolve_type("collections")


class TestShapeCommand:
    """Test the shape command"""

    def test_single_distribution(self, cli, capsys):
        cli.run(["shape", "positive_normal", "--runs", "500"])

        assert "positive_normal" in capsys.readouterr().out

    def test_all_distributions(self, cli, tmp_path):
        path = tmp_path / "shape.csv"
        cli.run(["shape", "all", "--runs", "300", "--seed", "4", "-o", str(path)])

        frame = pd.read_csv(path)
        assert set(frame["distribution"]) == {
            "uniform", "positive_normal", "negative_normal", "inverted_normal"
        }

    def test_unknown_distribution(self, cli):
        with pytest.raises(SystemExit):
            cli.run(["shape", "lognormal"])


class TestConfigCommand:
    """Test the config command"""

    def test_list(self, cli, capsys):
        cli.run(["config", "list"])

        out = capsys.readouterr().out
        assert "default" in out
        assert "edge" in out

    def test_show(self, cli, capsys):
        cli.run(["config", "show", "deep"])

        assert "shallow" not in capsys.readouterr().out

    def test_create_and_validate(self, cli, tmp_path, capsys):
        path = tmp_path / "custom.yaml"
        cli.run(["config", "create", str(path), "--preset", "compact"])

        assert path.exists()

        cli.run(["config", "validate", str(path)])
        assert "is valid" in capsys.readouterr().out

    def test_validate_invalid(self, cli, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text(yaml.dump({"generation": {"population": "sideways"}}))

        with pytest.raises(SystemExit) as excinfo:
            cli.run(["config", "validate", str(path)])

        assert excinfo.value.code == 1

    def test_no_subcommand(self, cli, capsys):
        cli.run(["config"])

        assert "config list" in capsys.readouterr().out


class TestNoCommand:
    def test_prints_help(self, cli, capsys):
        cli.run([])

        assert "usage" in capsys.readouterr().out


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
