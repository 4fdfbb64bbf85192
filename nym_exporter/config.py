#!/usr/bin/env python3
"""
Exporter Configuration
Defaults for the explorer client, server and batch fan-out
"""

from dataclasses import dataclass

from .exceptions import ConfigurationError

DEFAULT_EXPLORER_URL = "https://explorer.nymtech.net"
DEFAULT_TIMEOUT = 10
DEFAULT_PORT = 9100

# Concurrency cap for the HTTP-triggered batch; the CLI batch runs uncapped
HTTP_CONCURRENCY = 8

NODE_PATH = "/api/v1/tmp/unstable/nym-nodes/{node_id}"
ACCOUNT_PATH = "/api/v1/tmp/unstable/account/{address}"


@dataclass(frozen=True)
class ExporterConfig:
    """Runtime settings shared by the CLI and the HTTP server"""
    explorer_url: str = DEFAULT_EXPLORER_URL
    timeout: float = DEFAULT_TIMEOUT
    http_concurrency: int = HTTP_CONCURRENCY
    user_agent: str = "nym-exporter/1.0"

    def __post_init__(self):
        if not self.explorer_url:
            raise ConfigurationError("explorer_url must not be empty")
        if self.timeout <= 0:
            raise ConfigurationError(f"timeout must be positive, got {self.timeout}")
        if self.http_concurrency < 1:
            raise ConfigurationError(f"http_concurrency must be at least 1, got {self.http_concurrency}")
