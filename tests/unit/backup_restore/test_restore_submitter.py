"""Tests for RestoreSubmitter."""

from types import SimpleNamespace
from unittest.mock import Mock

import pytest
from azure.core.exceptions import HttpResponseError, ResourceNotFoundError

from azopsman.backup_restore.identity import StorageIdentityResolver
from azopsman.backup_restore.models import JobHandle, RecoveryPoint, RestoreRequest
from azopsman.backup_restore.providers import ProviderRegistry
from azopsman.backup_restore.restore_submitter import RestoreSubmitter
from azopsman.exceptions import (
    ResolutionExhaustedError,
    SubmissionError,
    UnsupportedProviderError,
    ValidationError,
)

CLASSIC = "Microsoft.ClassicStorage/storageAccounts"
CURRENT = "Microsoft.Storage/storageAccounts"


def storage_resource(resource_type):
    return SimpleNamespace(
        id=f"/subscriptions/sub/resourceGroups/storage-rg/providers/{resource_type}/myacct",
        location="westeurope",
        type=resource_type,
    )


def make_request(
    workload_type="AzureVM",
    management_type="AzureVM",
    storage_name="myacct",
    container_name="iaasvmcontainerv2;vm-rg;vm1",
):
    recovery_point = RecoveryPoint(
        recovery_point_id="12345",
        workload_type=workload_type,
        backup_management_type=management_type,
        vault_name="vault1",
        vault_resource_group="vault-rg",
        container_name=container_name,
        item_name="vm;iaasvmcontainerv2;vm-rg;vm1",
        source_resource_id="/subscriptions/sub/resourceGroups/vm-rg/providers/Microsoft.Compute/virtualMachines/vm1",
    )
    return RestoreRequest(recovery_point, storage_name, "storage-rg")


@pytest.fixture
def lookup_client():
    return Mock()


@pytest.fixture
def backup_client():
    client = Mock()
    client.trigger_restore.return_value = JobHandle(
        operation_id="op-1", vault_name="vault1", vault_resource_group="vault-rg"
    )
    return client


def make_submitter(lookup_client, backup_client):
    return RestoreSubmitter(
        resolver=StorageIdentityResolver(lookup_client),
        registry=ProviderRegistry(backup_client),
    )


class TestRestoreSubmitter:
    """Test RestoreSubmitter.submit."""

    def test_fallback_to_current_storage_provider(self, lookup_client, backup_client):
        lookup_client.get_resource.side_effect = [
            ResourceNotFoundError(message="not found"),
            storage_resource(CURRENT),
        ]

        job = make_submitter(lookup_client, backup_client).submit(make_request())

        assert lookup_client.get_resource.call_count == 2
        assert job.operation_id == "op-1"
        backup_client.trigger_restore.assert_called_once()
        payload = backup_client.trigger_restore.call_args.args[6]
        assert payload["properties"]["storageAccountId"].endswith(f"{CURRENT}/myacct")
        assert payload["properties"]["region"] == "westeurope"

    def test_full_container_name_falls_back_to_current_storage(
        self, lookup_client, backup_client
    ):
        lookup_client.get_resource.side_effect = [
            ResourceNotFoundError(message="not found"),
            storage_resource(CURRENT),
        ]
        container_name = "IaasVMContainer;iaasvmcontainerv2;vm-rg;vm1"

        job = make_submitter(lookup_client, backup_client).submit(
            make_request(container_name=container_name)
        )

        assert lookup_client.get_resource.call_count == 2
        assert job.operation_id == "op-1"
        args = backup_client.trigger_restore.call_args.args
        assert args[3] == container_name
        assert args[6]["properties"]["storageAccountId"].endswith(f"{CURRENT}/myacct")

    def test_storage_account_name_is_matched_case_insensitively(
        self, lookup_client, backup_client
    ):
        lookup_client.get_resource.return_value = storage_resource(CURRENT)

        make_submitter(lookup_client, backup_client).submit(make_request(storage_name="MyAcct"))
        upper = lookup_client.get_resource.call_args_list[0].args[1]
        lookup_client.reset_mock()
        make_submitter(lookup_client, backup_client).submit(make_request(storage_name="myacct"))
        lower = lookup_client.get_resource.call_args_list[0].args[1]

        assert upper == lower
        assert upper.resource_name == "myacct"

    def test_unsupported_pair_makes_no_submission(self, lookup_client, backup_client):
        lookup_client.get_resource.return_value = storage_resource(CLASSIC)

        with pytest.raises(UnsupportedProviderError):
            make_submitter(lookup_client, backup_client).submit(
                make_request(workload_type="AzureSQLDatabase", management_type="AzureSql")
            )

        assert lookup_client.get_resource.call_count == 1
        backup_client.trigger_restore.assert_not_called()

    def test_unresolved_storage_makes_no_submission(self, lookup_client, backup_client):
        lookup_client.get_resource.side_effect = ResourceNotFoundError(message="not found")

        with pytest.raises(ResolutionExhaustedError):
            make_submitter(lookup_client, backup_client).submit(make_request())

        assert lookup_client.get_resource.call_count == 2
        backup_client.trigger_restore.assert_not_called()

    def test_flavour_mismatch_makes_no_submission(self, lookup_client, backup_client):
        lookup_client.get_resource.return_value = storage_resource(CLASSIC)

        with pytest.raises(ValidationError):
            make_submitter(lookup_client, backup_client).submit(make_request())

        backup_client.trigger_restore.assert_not_called()

    def test_service_error_is_wrapped(self, lookup_client, backup_client):
        lookup_client.get_resource.return_value = storage_resource(CURRENT)
        error = HttpResponseError(message="UserErrorRestoreInProgress")
        backup_client.trigger_restore.side_effect = error

        with pytest.raises(SubmissionError) as exc_info:
            make_submitter(lookup_client, backup_client).submit(make_request())

        assert exc_info.value.cause is error
        assert exc_info.value.__cause__ is error
        assert backup_client.trigger_restore.call_count == 1

    def test_own_errors_are_not_wrapped(self, lookup_client, backup_client):
        lookup_client.get_resource.return_value = storage_resource(CURRENT)
        backup_client.trigger_restore.side_effect = SubmissionError("Restore", RuntimeError("x"))

        with pytest.raises(SubmissionError) as exc_info:
            make_submitter(lookup_client, backup_client).submit(make_request())

        assert exc_info.value.operation == "Restore"
        assert isinstance(exc_info.value.cause, RuntimeError)
