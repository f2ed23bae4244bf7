"""Tests for backup providers and the provider registry."""

from unittest.mock import Mock

import pytest

from azopsman.backup_restore.models import (
    BackupManagementType,
    JobHandle,
    RecoveryPoint,
    RestoreContext,
    StorageAccountInfo,
    WorkloadType,
)
from azopsman.backup_restore.providers import (
    DEFAULT_PROVIDERS,
    BackupProvider,
    IaasVmProvider,
    ProviderRegistry,
)
from azopsman.exceptions import UnsupportedProviderError, ValidationError

CURRENT_STORAGE_ID = (
    "/subscriptions/sub/resourceGroups/storage-rg/providers/"
    "Microsoft.Storage/storageAccounts/myacct"
)


def make_recovery_point(**overrides):
    values = {
        "recovery_point_id": "12345",
        "workload_type": "AzureVM",
        "backup_management_type": "AzureVM",
        "vault_name": "vault1",
        "vault_resource_group": "vault-rg",
        "container_name": "iaasvmcontainerv2;vm-rg;vm1",
        "item_name": "vm;iaasvmcontainerv2;vm-rg;vm1",
        "source_resource_id": "/subscriptions/sub/resourceGroups/vm-rg/providers/Microsoft.Compute/virtualMachines/vm1",
    }
    values.update(overrides)
    return RecoveryPoint(**values)


def make_context(recovery_point=None, storage_type="Microsoft.Storage/storageAccounts"):
    return RestoreContext(
        recovery_point=recovery_point or make_recovery_point(),
        storage_account=StorageAccountInfo(CURRENT_STORAGE_ID, "westeurope", storage_type),
    )


class TestIaasVmProvider:
    """Test IaasVmProvider."""

    @pytest.mark.parametrize(
        "container_name,flavour",
        [
            ("iaasvmcontainer;cs1;vm1", "Classic"),
            ("iaasvmcontainerv2;rg;vm1", "Compute"),
            ("IaasVMContainer;iaasvmcontainer;cs1;vm1", "Classic"),
            ("IaasVMContainer;iaasvmcontainerv2;vm-rg;vm1", "Compute"),
            ("iaasvmcontainer;IaasVMContainerV2;vm-rg;vm1", "Compute"),
        ],
    )
    def test_vm_flavour(self, container_name, flavour):
        assert IaasVmProvider.vm_flavour(container_name) == flavour

    def test_build_restore_request(self):
        provider = IaasVmProvider(Mock())

        payload = provider.build_restore_request(make_context())

        properties = payload["properties"]
        assert properties["objectType"] == "IaasVMRestoreRequest"
        assert properties["recoveryPointId"] == "12345"
        assert properties["recoveryType"] == "RestoreDisks"
        assert properties["storageAccountId"] == CURRENT_STORAGE_ID
        assert properties["region"] == "westeurope"
        assert properties["sourceResourceId"].endswith("/virtualMachines/vm1")

    def test_classic_vm_with_current_storage_is_rejected(self):
        provider = IaasVmProvider(Mock())
        context = make_context(make_recovery_point(container_name="iaasvmcontainer;cs1;vm1"))

        with pytest.raises(ValidationError) as exc_info:
            provider.build_restore_request(context)

        assert exc_info.value.field == "StorageAccountName"

    def test_full_container_name_of_compute_vm_restores_to_current_storage(self):
        provider = IaasVmProvider(Mock())
        context = make_context(
            make_recovery_point(container_name="IaasVMContainer;iaasvmcontainerv2;vm-rg;vm1")
        )

        payload = provider.build_restore_request(context)

        assert payload["properties"]["storageAccountId"] == CURRENT_STORAGE_ID

    def test_full_container_name_of_compute_vm_rejects_classic_storage(self):
        provider = IaasVmProvider(Mock())
        context = make_context(
            make_recovery_point(container_name="IaasVMContainer;iaasvmcontainerv2;vm-rg;vm1"),
            storage_type="Microsoft.ClassicStorage/storageAccounts",
        )

        with pytest.raises(ValidationError):
            provider.build_restore_request(context)

    def test_full_container_name_of_classic_vm_rejects_current_storage(self):
        provider = IaasVmProvider(Mock())
        context = make_context(
            make_recovery_point(container_name="IaasVMContainer;iaasvmcontainer;cs1;vm1")
        )

        with pytest.raises(ValidationError):
            provider.build_restore_request(context)

    def test_trigger_restore_submits_payload_for_recovery_point(self):
        client = Mock()
        client.trigger_restore.return_value = JobHandle(operation_id="op-1")
        provider = IaasVmProvider(client)

        job = provider.trigger_restore(make_context())

        assert job.operation_id == "op-1"
        args = client.trigger_restore.call_args.args
        assert args[:6] == (
            "vault1",
            "vault-rg",
            "Azure",
            "iaasvmcontainerv2;vm-rg;vm1",
            "vm;iaasvmcontainerv2;vm-rg;vm1",
            "12345",
        )
        assert args[6]["properties"]["storageAccountId"] == CURRENT_STORAGE_ID


class TestProviderRegistry:
    """Test ProviderRegistry."""

    def test_default_table_handles_azure_vm(self):
        assert DEFAULT_PROVIDERS == {("AzureVM", "AzureVM"): IaasVmProvider}

    def test_get_provider_accepts_strings_and_enums(self):
        client = Mock()
        registry = ProviderRegistry(client)

        by_string = registry.get_provider("AzureVM", "AzureVM")
        by_enum = registry.get_provider(WorkloadType.AZURE_VM, BackupManagementType.AZURE_VM)

        assert isinstance(by_string, IaasVmProvider)
        assert isinstance(by_enum, IaasVmProvider)
        assert by_string.client is client

    def test_selection_is_pure(self):
        registry = ProviderRegistry(Mock())

        first = registry.get_provider("AzureVM", "AzureVM")
        second = registry.get_provider("AzureVM", "AzureVM")

        assert type(first) is type(second)

    @pytest.mark.parametrize(
        "workload_type,management_type",
        [
            ("AzureSQLDatabase", "AzureSql"),
            ("AzureVM", "MAB"),
            ("AzureFiles", "AzureStorage"),
        ],
    )
    def test_unknown_pair_raises(self, workload_type, management_type):
        registry = ProviderRegistry(Mock())

        with pytest.raises(UnsupportedProviderError) as exc_info:
            registry.get_provider(workload_type, management_type)

        assert exc_info.value.workload_type == workload_type
        assert exc_info.value.backup_management_type == management_type
        assert "Unsupported workload/provider combination" in str(exc_info.value)

    def test_register_additional_provider(self):
        class FilesProvider(BackupProvider):
            def build_restore_request(self, context):
                return {}

        registry = ProviderRegistry(Mock())
        registry.register(WorkloadType.AZURE_FILES, BackupManagementType.AZURE_STORAGE, FilesProvider)

        assert isinstance(registry.get_provider("AzureFiles", "AzureStorage"), FilesProvider)

    def test_duplicate_registration_is_rejected(self):
        registry = ProviderRegistry(Mock())

        with pytest.raises(ValueError):
            registry.register("AzureVM", "AzureVM", IaasVmProvider)

    def test_empty_table(self):
        registry = ProviderRegistry(Mock(), providers={})

        with pytest.raises(UnsupportedProviderError):
            registry.get_provider("AzureVM", "AzureVM")
