"""Integration tests for the capkit command line interface."""
import json
import os
from unittest.mock import patch

import pytest
import yaml

from capkit.cli.formatters import format_output, format_rows_table
from capkit.cli.main import main, parse_roles
from capkit.domain.base.exceptions import ValidationError

pytestmark = pytest.mark.integration


class TestParseRoles:
    """Test ROLE=CAPABILITY[:IMPL] parsing."""

    def test_roles_and_selections(self):
        spec, selections = parse_roles(["door=Door:IronDoor", "bowl=Bowl"])

        assert spec == {"door": "Door", "bowl": "Bowl"}
        assert selections == {"door": "IronDoor"}

    @pytest.mark.parametrize("value", ["door", "=Door", "door="])
    def test_malformed_roles(self, value):
        with pytest.raises(ValidationError, match="expected ROLE=CAPABILITY"):
            parse_roles([value])


class TestCapabilitiesCommand:
    """Test capability inspection commands."""

    def test_list(self, capsys):
        assert main(["capabilities", "list"]) == 0

        output = json.loads(capsys.readouterr().out)
        rows = {row["capability"]: row for row in output["capabilities"]}
        assert rows["Door"]["implementations"] == ["IronDoor", "WoodenDoor"]
        assert rows["Door"]["default"] == "WoodenDoor"

    def test_list_is_default_action(self, capsys):
        assert main(["capabilities"]) == 0
        assert "capabilities" in json.loads(capsys.readouterr().out)

    def test_list_as_table(self, capsys):
        assert main(["--format", "table", "capabilities", "list"]) == 0

        output = capsys.readouterr().out
        assert "Capabilities" in output
        assert "WoodenDoor" in output
        assert "PaymentMethod" in output

    def test_show(self, capsys):
        assert main(["capabilities", "show", "Movement"]) == 0

        output = json.loads(capsys.readouterr().out)
        names = [r["name"] for r in output["registrations"]]
        assert names == ["Flying", "Swimming", "Walking"]
        assert output["registrations"][-1]["default"] is True
        assert output["registrations"][-1]["methods"] == ["move"]

    def test_show_unknown(self, capsys):
        assert main(["capabilities", "show", "Teleporter"]) == 1
        assert "Capability 'Teleporter' is not registered" in capsys.readouterr().err

    def test_strict_policy_from_environment(self, capsys):
        with patch.dict(os.environ, {"CAPKIT_REGISTRY_POLICY": "strict"}):
            assert main(["capabilities", "show", "Door"]) == 0

        output = json.loads(capsys.readouterr().out)
        assert [r["name"] for r in output["registrations"]] == ["WoodenDoor"]


class TestComposeCommand:
    """Test the compose command."""

    def test_compose_defaults(self, capsys):
        assert main(["compose", "door=Door", "bowl=Bowl"]) == 0

        output = json.loads(capsys.readouterr().out)
        assert output["parts"] == {
            "door": {"capability": "Door", "implementation": "WoodenDoor"},
            "bowl": {"capability": "Bowl", "implementation": "FruitBowl"},
        }

    def test_compose_with_selection(self, capsys):
        assert main(["--format", "yaml", "compose", "door=Door:IronDoor"]) == 0

        output = yaml.safe_load(capsys.readouterr().out)
        assert output["parts"]["door"]["implementation"] == "IronDoor"

    def test_compose_reports_implementation_behind_view(self, tmp_path, capsys):
        path = tmp_path / "capkit.yml"
        path.write_text("registry:\n  restrict_to_contract: true\n")

        assert main(["--config", str(path), "compose", "door=Door:IronDoor"]) == 0

        output = json.loads(capsys.readouterr().out)
        assert output["parts"]["door"]["implementation"] == "IronDoor"

    def test_compose_missing_roles(self, capsys):
        """Test that every missing role is listed and the exit code is 1."""
        assert main(["compose", "door=Door", "portal=Portal", "engine=Engine"]) == 1

        err = capsys.readouterr().err
        assert "2 unresolved role(s)" in err
        assert "missing: portal -> Portal" in err
        assert "missing: engine -> Engine" in err
        assert "missing: door" not in err

    def test_compose_unknown_selection(self, capsys):
        assert main(["compose", "door=Door:GlassDoor"]) == 1
        assert "missing: door -> Door" in capsys.readouterr().err

    def test_compose_malformed_role(self, capsys):
        assert main(["compose", "door"]) == 1
        assert "Invalid role 'door'" in capsys.readouterr().err


class TestDemoCommand:
    """Test running catalog scenarios."""

    def test_demo_zoo(self, capsys):
        assert main(["demo", "zoo"]) == 0

        output = json.loads(capsys.readouterr().out)
        assert output["animals"] == ["penguin swims", "sparrow flies"]

    def test_demo_payment_yaml(self, capsys):
        assert main(["--format", "yaml", "--log-level", "DEBUG", "demo", "payment"]) == 0

        output = yaml.safe_load(capsys.readouterr().out)
        assert output["method"] == "Credit card"
        assert output["amount"] == 200

    def test_demo_zoo_fails_under_strict_policy(self, capsys):
        with patch.dict(os.environ, {"CAPKIT_REGISTRY_POLICY": "strict"}):
            assert main(["demo", "zoo"]) == 1

        assert "Implementation 'Swimming' is not registered" in capsys.readouterr().err

    def test_unknown_scenario(self):
        with pytest.raises(SystemExit):
            main(["demo", "weather"])


class TestMain:
    """Test global options and error handling."""

    def test_no_command(self, capsys):
        assert main([]) == 1
        assert "No command specified" in capsys.readouterr().err

    def test_config_file(self, tmp_path, capsys):
        path = tmp_path / "capkit.yml"
        path.write_text("registry:\n  include_catalog: false\n")

        assert main(["--config", str(path), "capabilities", "list"]) == 0
        assert json.loads(capsys.readouterr().out) == {"capabilities": []}

    def test_missing_config_file(self, tmp_path, capsys):
        assert main(["--config", str(tmp_path / "missing.yml"), "capabilities", "list"]) == 1
        assert "Configuration file not found" in capsys.readouterr().err


class TestFormatters:
    """Test output formatting."""

    def test_json(self):
        assert json.loads(format_output({"a": [1, 2]}, "json")) == {"a": [1, 2]}

    def test_yaml_keeps_key_order(self):
        assert format_output({"b": 1, "a": 2}, "yaml") == "b: 1\na: 2\n"

    def test_table_falls_back_to_json(self):
        assert json.loads(format_output({"feeding": "now"}, "table")) == {"feeding": "now"}

    def test_rows_table(self):
        table = format_rows_table([{"role": "door", "implementation": ["IronDoor", "WoodenDoor"]}], title="cage")

        assert "Implementation" in table
        assert "IronDoor, WoodenDoor" in table

    def test_empty_rows(self):
        assert format_rows_table([]) == "No entries found."
