from unittest.mock import MagicMock

import pytest

from clusterboot.config import ClientConfig, RetryConfig, set_config
from clusterboot.k8s_client import K8sClient

KUBECONFIG = """
apiVersion: v1
kind: Config
clusters:
- name: bootstrap
  cluster:
    server: https://127.0.0.1:6443
    insecure-skip-tls-verify: true
users:
- name: admin
  user:
    token: bootstrap-token
contexts:
- name: admin
  context:
    cluster: bootstrap
    user: admin
current-context: admin
"""


@pytest.fixture(autouse=True)
def isolated_config():
    set_config(ClientConfig(kubeconfig=None, admin_command="oc", use_nsenter=True,
                            retry=RetryConfig(max_retries=0, delay=0)))
    yield
    set_config(None)


@pytest.fixture
def kubeconfig(tmp_path):
    path = tmp_path / "kubeconfig"
    path.write_text(KUBECONFIG)
    return str(path)


@pytest.fixture
def client():
    return K8sClient(MagicMock(), MagicMock(), MagicMock(), MagicMock(),
                     retry=RetryConfig(max_retries=0, delay=0))
