import copy

import pytest
from kubernetes.client.rest import ApiException

from clusterboot.exceptions import PatchError
from clusterboot.k8s_client import UNSAFE_ETCD_PATCH, UNSAFE_ETCD_UNPATCH

UNSAFE_FLAG = "useUnsupportedUnsafeNonHANonProductionUnstableEtcd"


def merge_patch(target, patch):
    """JSON merge patch (RFC 7386)."""
    if not isinstance(patch, dict):
        return patch
    result = dict(target) if isinstance(target, dict) else {}
    for key, value in patch.items():
        if value is None:
            result.pop(key, None)
        else:
            result[key] = merge_patch(result.get(key), value)
    return result


@pytest.fixture
def etcd_resource(client):
    """Serve the etcd operator resource from memory and apply merge patches to it."""
    state = {
        "apiVersion": "operator.openshift.io/v1",
        "kind": "Etcd",
        "metadata": {"name": "cluster"},
        "spec": {"managementState": "Managed", "logLevel": "Normal"},
    }

    def patch(group, version, plural, name, body, **kwargs):
        assert kwargs.get("_content_type") == "application/merge-patch+json"
        state.update(merge_patch(state, copy.deepcopy(body)))
        return copy.deepcopy(state)

    client.custom_api.patch_cluster_custom_object.side_effect = patch
    return state


def test_patch_etcd_request(client):
    client.custom_api.patch_cluster_custom_object.return_value = {}

    client.patch_etcd()

    client.custom_api.patch_cluster_custom_object.assert_called_once_with(
        group="operator.openshift.io",
        version="v1",
        plural="etcds",
        name="cluster",
        body={"spec": {"unsupportedConfigOverrides": {UNSAFE_FLAG: True}}},
        _content_type="application/merge-patch+json",
    )


def test_unpatch_etcd_request(client):
    client.custom_api.patch_cluster_custom_object.return_value = {}

    client.unpatch_etcd()

    kwargs = client.custom_api.patch_cluster_custom_object.call_args.kwargs
    assert kwargs["body"] == {"spec": {"unsupportedConfigOverrides": None}}
    assert kwargs["body"] is UNSAFE_ETCD_UNPATCH


def test_patch_then_unpatch_round_trip(client, etcd_resource):
    patched = client.patch_etcd()
    assert patched["spec"]["unsupportedConfigOverrides"] == {UNSAFE_FLAG: True}
    assert patched["spec"]["managementState"] == "Managed"

    unpatched = client.unpatch_etcd()
    assert "unsupportedConfigOverrides" not in unpatched["spec"]
    assert unpatched["spec"] == {"managementState": "Managed", "logLevel": "Normal"}


def test_patch_etcd_is_idempotent(client, etcd_resource):
    first = client.patch_etcd()
    second = client.patch_etcd()
    assert first == second
    assert UNSAFE_ETCD_PATCH["spec"]["unsupportedConfigOverrides"][UNSAFE_FLAG] is True


def test_patch_etcd_failure(client):
    client.custom_api.patch_cluster_custom_object.side_effect = ApiException(status=404, reason="Not Found")

    with pytest.raises(PatchError) as excinfo:
        client.patch_etcd()
    assert str(excinfo.value).startswith("Failed to patch etcd")
    assert excinfo.value.stage == "patch"
    assert excinfo.value.status == 404


def test_unpatch_etcd_failure(client):
    client.custom_api.patch_cluster_custom_object.side_effect = ApiException(status=422)

    with pytest.raises(PatchError) as excinfo:
        client.unpatch_etcd()
    assert str(excinfo.value).startswith("Failed to unpatch etcd")
    assert excinfo.value.stage == "unpatch"


def test_unsafe_etcd_context(client, etcd_resource):
    with client.unsafe_etcd():
        assert etcd_resource["spec"]["unsupportedConfigOverrides"] == {UNSAFE_FLAG: True}
    assert "unsupportedConfigOverrides" not in etcd_resource["spec"]


def test_unsafe_etcd_context_unpatches_on_error(client, etcd_resource):
    with pytest.raises(RuntimeError, match="masters did not join"):
        with client.unsafe_etcd():
            raise RuntimeError("masters did not join")
    assert "unsupportedConfigOverrides" not in etcd_resource["spec"]


def test_patch_etcd_with_null_spec_in_response(client):
    client.custom_api.patch_cluster_custom_object.return_value = {"metadata": {"name": "cluster"}, "spec": None}

    assert client.patch_etcd()["spec"] is None
