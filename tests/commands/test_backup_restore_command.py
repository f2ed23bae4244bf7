"""Tests for the backup restore command."""

import json
from types import SimpleNamespace
from unittest.mock import patch

import pytest
from azure.core.exceptions import ResourceNotFoundError
from typer.testing import CliRunner

from azopsman.backup_restore.models import JobHandle
from azopsman.commands.backup import app

runner = CliRunner()

RECOVERY_POINT = {
    "recoveryPointId": "12345",
    "workloadType": "AzureVM",
    "backupManagementType": "AzureVM",
    "vaultName": "vault1",
    "vaultResourceGroup": "vault-rg",
    "containerName": "iaasvmcontainerv2;vm-rg;vm1",
    "itemName": "vm;iaasvmcontainerv2;vm-rg;vm1",
    "sourceResourceId": "/subscriptions/sub/resourceGroups/vm-rg/providers/Microsoft.Compute/virtualMachines/vm1",
}

CURRENT_STORAGE = SimpleNamespace(
    id="/subscriptions/sub/resourceGroups/storage-rg/providers/Microsoft.Storage/storageAccounts/mystorage",
    location="westeurope",
    type="Microsoft.Storage/storageAccounts",
)


@pytest.fixture
def recovery_point_file(tmp_path):
    path = tmp_path / "rp.json"
    path.write_text(json.dumps(RECOVERY_POINT), encoding="utf-8")
    return path


@pytest.fixture
def mock_client_manager():
    with patch("azopsman.commands.backup.restore.create_client_manager") as mock_create:
        manager = mock_create.return_value
        manager.get_resource_client.return_value.get_resource.side_effect = [
            ResourceNotFoundError(message="not found"),
            CURRENT_STORAGE,
        ]
        manager.get_backup_client.return_value.trigger_restore.return_value = JobHandle(
            operation_id="op-42",
            tracking_url="https://management.azure.com/x/backupOperations/op-42",
            vault_name="vault1",
            vault_resource_group="vault-rg",
        )
        yield mock_create


def restore_args(path, *extra):
    return [
        "restore",
        str(path),
        "--storage-account-name",
        "MyStorage",
        "--storage-account-resource-group",
        "storage-rg",
        *extra,
    ]


def test_backup_command_structure():
    """Test that the backup commands have the expected structure."""
    result = runner.invoke(app, ["--help"])
    assert result.exit_code == 0
    assert "Restore Azure Backup items" in result.output
    assert "restore" in result.output


def test_restore_falls_back_to_current_storage(recovery_point_file, mock_client_manager):
    """Test a restore whose storage account is only found by the current provider."""
    result = runner.invoke(app, restore_args(recovery_point_file, "--format", "json"))

    assert result.exit_code == 0, result.output
    manager = mock_client_manager.return_value
    lookup = manager.get_resource_client.return_value.get_resource
    assert lookup.call_count == 2
    assert lookup.call_args_list[0].args[1].resource_name == "mystorage"

    payload = manager.get_backup_client.return_value.trigger_restore.call_args.args[6]
    assert payload["properties"]["storageAccountId"] == CURRENT_STORAGE.id

    data = json.loads(result.output)
    assert data["operation_id"] == "op-42"
    assert data["vault_name"] == "vault1"


def test_restore_table_output(recovery_point_file, mock_client_manager):
    result = runner.invoke(app, restore_args(recovery_point_file, "--profile", "prod"))

    assert result.exit_code == 0, result.output
    assert "Restore submitted." in result.output
    assert "op-42" in result.output
    mock_client_manager.assert_called_once_with("prod")


def test_restore_from_yaml_file(tmp_path, mock_client_manager):
    path = tmp_path / "rp.yaml"
    path.write_text(
        "\n".join(f"{key}: '{value}'" for key, value in RECOVERY_POINT.items()), encoding="utf-8"
    )

    result = runner.invoke(app, restore_args(path, "--format", "json"))

    assert result.exit_code == 0, result.output


def test_unsupported_workload_is_not_submitted(tmp_path, mock_client_manager):
    path = tmp_path / "sql.json"
    path.write_text(
        json.dumps(dict(RECOVERY_POINT, workloadType="AzureSQLDatabase", backupManagementType="AzureSql")),
        encoding="utf-8",
    )
    manager = mock_client_manager.return_value
    manager.get_resource_client.return_value.get_resource.side_effect = None
    manager.get_resource_client.return_value.get_resource.return_value = SimpleNamespace(
        id="/subscriptions/sub/providers/Microsoft.ClassicStorage/storageAccounts/mystorage",
        location="westeurope",
        type="Microsoft.ClassicStorage/storageAccounts",
    )

    result = runner.invoke(app, restore_args(path))

    assert result.exit_code == 1
    assert "Unsupported workload/provider" in result.output
    assert manager.get_resource_client.return_value.get_resource.call_count == 1
    manager.get_backup_client.return_value.trigger_restore.assert_not_called()


def test_missing_recovery_point_field(tmp_path, mock_client_manager):
    path = tmp_path / "rp.json"
    path.write_text(json.dumps({"recoveryPointId": "12345"}), encoding="utf-8")

    result = runner.invoke(app, restore_args(path))

    assert result.exit_code == 1
    assert "Error:" in result.output
    mock_client_manager.assert_not_called()


def test_unparseable_recovery_point_file(tmp_path, mock_client_manager):
    path = tmp_path / "rp.json"
    path.write_text("{not json", encoding="utf-8")

    result = runner.invoke(app, restore_args(path))

    assert result.exit_code == 2
    mock_client_manager.assert_not_called()


def test_invalid_output_format(recovery_point_file, mock_client_manager):
    result = runner.invoke(app, restore_args(recovery_point_file, "--format", "xml"))

    assert result.exit_code == 1
    assert "Invalid output format" in result.output
    mock_client_manager.assert_not_called()
