import os
import tempfile
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional

from kubernetes import client, config

from ..config import get_config


@contextmanager
def kubeconfig_file(path: Optional[str] = None) -> Iterator[str]:
    """
    Yield the path of the kubeconfig to use: the given path, the configured
    one, or the KUBECONFIG_CONTENT env var written to a private temp file.
    The temp file is removed when the block exits.
    """
    path = path or get_config().kubeconfig

    if path:
        resolved = Path(os.path.expanduser(path)).resolve()
        if not resolved.is_file():
            raise FileNotFoundError(f"Kubeconfig not found: {resolved}")
        yield str(resolved)
        return

    # CI/CD secret-based loading
    if "KUBECONFIG_CONTENT" in os.environ:
        fd, temp_path = tempfile.mkstemp(prefix="clusterboot-", suffix=".kubeconfig")
        try:
            with os.fdopen(fd, "w") as f:
                f.write(os.environ["KUBECONFIG_CONTENT"])
            yield temp_path
        finally:
            os.remove(temp_path)
        return

    raise ValueError("No kubeconfig path provided and KUBECONFIG_CONTENT is not set.")


def load_api_client(path: str) -> client.ApiClient:
    """Build an ApiClient bound to the given kubeconfig without touching the global default."""
    return config.new_client_from_config(config_file=path)
