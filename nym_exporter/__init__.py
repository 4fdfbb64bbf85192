"""
nym-exporter: Prometheus exporter for Nym explorer node and account data
"""

__version__ = "1.0.0"
__author__ = "Nym Exporter Team"

from .models import Account, Node
from .prometheus import MetricDescriptor, MetricSample, render_sample, render_samples
from .catalog import ACCOUNT_METRICS, NODE_METRICS, AccountMetric, NodeMetric
from .config import ExporterConfig
from .explorer import ExplorerClient
from .exporter import MetricsExporter, setup_logging
from .exceptions import *


__all__ = [
    "Account",
    "Node",
    "MetricDescriptor",
    "MetricSample",
    "render_sample",
    "render_samples",
    "ACCOUNT_METRICS",
    "NODE_METRICS",
    "AccountMetric",
    "NodeMetric",
    "ExporterConfig",
    "ExplorerClient",
    "MetricsExporter",
    "setup_logging",
    "NymExporterException",
    "FetchFailure",
    "SchemaViolation",
    "PartialResolutionFailure",
    "InvalidIdentifierError",
    "ConfigurationError",
]
