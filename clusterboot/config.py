"""Configuration management for the clusterboot package.

Configuration is resolved with the following precedence:
1. Explicitly passed parameters
2. Configuration file values
3. Environment variables (including a local .env file)
4. Default values
"""
import logging
import os
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

# Load environment variables from .env file if it exists
load_dotenv()

logger = logging.getLogger("clusterboot.config")

DEFAULT_CONFIG_PATHS = [
    Path("/etc/clusterboot/config.yaml"),
    Path("~/.config/clusterboot/config.yaml").expanduser(),
    Path("clusterboot.yaml").absolute(),
]


class Config:
    """Environment-derived defaults."""

    KUBECONFIG: str = os.getenv("CLUSTERBOOT_KUBECONFIG", os.getenv("KUBECONFIG", ""))
    ADMIN_COMMAND: str = os.getenv("CLUSTERBOOT_ADMIN_COMMAND", "oc")
    USE_NSENTER: bool = os.getenv("CLUSTERBOOT_USE_NSENTER", "true").lower() in ("1", "true", "yes")

    # Retries are off unless the caller asks for them
    MAX_RETRIES: int = int(os.getenv("CLUSTERBOOT_MAX_RETRIES", "0"))
    RETRY_DELAY: float = float(os.getenv("CLUSTERBOOT_RETRY_DELAY", "1.0"))
    RETRY_BACKOFF: float = float(os.getenv("CLUSTERBOOT_RETRY_BACKOFF", "2.0"))

    LOG_LEVEL: str = os.getenv("CLUSTERBOOT_LOG_LEVEL", "INFO").upper()
    LOG_FILE: str = os.getenv("CLUSTERBOOT_LOG_FILE", "")
    LOG_FORMAT: str = os.getenv(
        "CLUSTERBOOT_LOG_FORMAT",
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )


class RetryConfig(BaseModel):
    """Caller-visible retry policy for API calls.

    CSR approvals are never retried: a resent approval carries a stale
    resourceVersion and would be rejected even when the first one landed.
    """
    max_retries: int = Field(
        default_factory=lambda: Config.MAX_RETRIES,
        ge=0,
        description="Retries after the first attempt; 0 disables retrying"
    )
    delay: float = Field(
        default_factory=lambda: Config.RETRY_DELAY,
        ge=0,
        description="Initial delay between attempts in seconds"
    )
    backoff: float = Field(
        default_factory=lambda: Config.RETRY_BACKOFF,
        ge=1,
        description="Multiplier applied to the delay after each attempt"
    )
    retry_on_status: List[int] = Field(
        default_factory=lambda: [429, 500, 502, 503, 504],
        description="HTTP status codes treated as transient"
    )

    @field_validator("retry_on_status")
    @classmethod
    def reject_conflict(cls, v: List[int]) -> List[int]:
        """A 409 needs a fresh object, so resending the same body never helps."""
        if 409 in v:
            raise ValueError("409 Conflict cannot be retried without re-fetching the object")
        return v


class LoggingConfig(BaseModel):
    """Logging configuration."""
    level: str = Field(
        default_factory=lambda: Config.LOG_LEVEL,
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)"
    )
    file: Optional[str] = Field(
        default_factory=lambda: Config.LOG_FILE or None,
        description="Path to log file (if None, logs to stdout only)"
    )
    max_size_mb: int = Field(default=100, description="Maximum log file size in MB before rotation")
    backup_count: int = Field(default=5, description="Number of backup log files to keep")

    @field_validator("level")
    @classmethod
    def normalize_level(cls, v: str) -> str:
        level = v.upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"Unknown log level: {v}")
        return level


class ClientConfig(BaseModel):
    """Bootstrap client configuration."""
    kubeconfig: Optional[str] = Field(
        default_factory=lambda: Config.KUBECONFIG or None,
        description="Path to the bootstrap kubeconfig"
    )
    admin_command: str = Field(
        default_factory=lambda: Config.ADMIN_COMMAND,
        description="Cluster administration binary run through the host"
    )
    use_nsenter: bool = Field(
        default_factory=lambda: Config.USE_NSENTER,
        description="Run privileged commands in the host namespaces"
    )
    retry: RetryConfig = Field(default_factory=RetryConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    model_config = {"extra": "ignore"}

    @field_validator("kubeconfig")
    @classmethod
    def expand_kubeconfig(cls, v: Optional[str]) -> Optional[str]:
        """Expand the user home directory in the kubeconfig path."""
        return os.path.expanduser(v) if v else v

    @classmethod
    def load(cls, config_path: Optional[Union[str, Path]] = None) -> "ClientConfig":
        """Load configuration from a YAML file, falling back to the default paths."""
        config_data: Dict[str, Any] = {}

        if config_path:
            path = Path(config_path).expanduser().absolute()
            if path.exists():
                config_data = cls._load_config_file(path)
            else:
                logger.warning(f"Config file {path} not found, using defaults")
        else:
            for path in DEFAULT_CONFIG_PATHS:
                path = path.expanduser().absolute()
                if path.exists():
                    config_data = cls._load_config_file(path)
                    break

        return cls(**config_data)

    @classmethod
    def _load_config_file(cls, path: Path) -> Dict[str, Any]:
        """Load configuration from a YAML file."""
        try:
            with open(path, "r") as f:
                return yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            logger.warning(f"Failed to load config from {path}: {e}")
            return {}

    def save(self, path: Union[str, Path]) -> None:
        """Save configuration to a file."""
        path = Path(path).expanduser().absolute()
        path.parent.mkdir(parents=True, exist_ok=True)

        with open(path, "w") as f:
            yaml.safe_dump(self.model_dump(exclude_none=True), f, default_flow_style=False, sort_keys=False)


# Global configuration instance
_config: Optional[ClientConfig] = None


def get_config(config_path: Optional[Union[str, Path]] = None) -> ClientConfig:
    """Get or create the global configuration instance."""
    global _config
    if _config is None:
        _config = ClientConfig.load(config_path)
    return _config


def set_config(config: Optional[ClientConfig]) -> None:
    """Set (or with None, reset) the global configuration instance."""
    global _config
    _config = config
