"""
Integration tests for the lbsdk-codegen command line.
"""

import pytest
from click.testing import CliRunner

from loopback_sdk_codegen.cli.cli import cli


@pytest.fixture
def runner(monkeypatch):
    for name in ("LBSDK_MODEL_PREFIX", "LBSDK_OUTPUT_DIR", "LBSDK_TEMPLATES_DIR"):
        monkeypatch.delenv(name, raising=False)
    return CliRunner()


@pytest.fixture
def descriptor_path(customer_order_descriptor, write_descriptor_file):
    return str(write_descriptor_file(customer_order_descriptor))


class TestValidate:

    def test_valid_descriptor(self, runner, descriptor_path):
        result = runner.invoke(cli, ["validate", descriptor_path])

        assert result.exit_code == 0
        assert "validation success" in result.output
        assert "4 classes" in result.output

    def test_invalid_descriptor(self, runner, write_descriptor_file):
        path = write_descriptor_file({"models": [{"ctor": {}}]}, "invalid.yaml")
        result = runner.invoke(cli, ["validate", str(path)])

        assert result.exit_code == 1
        assert "Validation failed" in result.output


class TestGenerate:

    def test_generate(self, runner, descriptor_path, temp_output_dir):
        out_dir = temp_output_dir / "sdk"
        result = runner.invoke(cli, ["generate", descriptor_path, "--out", str(out_dir), "--prefix", "XX", "-q"])

        assert result.exit_code == 0, result.output
        assert "9 files emitted" in result.output
        assert (out_dir / "XXCustomerRepository.m").exists()
        assert (out_dir / "LoopbackModelImport.h").exists()

    def test_prefix_from_environment(self, runner, descriptor_path, temp_output_dir, monkeypatch):
        out_dir = temp_output_dir / "sdk"
        monkeypatch.setenv("LBSDK_MODEL_PREFIX", "ZZ")
        monkeypatch.setenv("LBSDK_OUTPUT_DIR", str(out_dir))

        result = runner.invoke(cli, ["generate", descriptor_path, "-q"])

        assert result.exit_code == 0, result.output
        assert (out_dir / "ZZOrder.h").exists()

    def test_generate_failure_exits_with_error(
        self, runner, customer_order_descriptor, write_descriptor_file, temp_output_dir
    ):
        customer_order_descriptor["models"][1]["settings"]["base"] = "KeyValueModel"
        path = write_descriptor_file(customer_order_descriptor, "bad.yaml")
        out_dir = temp_output_dir / "sdk"

        result = runner.invoke(cli, ["generate", str(path), "--out", str(out_dir), "-q"])

        assert result.exit_code == 1
        assert "Unknown base model" in result.output
        assert not out_dir.exists()


class TestInspect:

    def test_inspect(self, runner, descriptor_path):
        result = runner.invoke(cli, ["inspect", descriptor_path])

        assert result.exit_code == 0, result.output
        assert "Customer" in result.output
        assert "findById" in result.output
        assert "scope orders -> Order" in result.output

    def test_inspect_lists_scope_return_types(self, runner, descriptor_path):
        result = runner.invoke(cli, ["inspect", descriptor_path])

        assert result.exit_code == 0, result.output
        assert "orders.create: Order" in result.output
        assert "orders.createMany: NSArray" in result.output
        assert "orders.destroyAll: void" in result.output
