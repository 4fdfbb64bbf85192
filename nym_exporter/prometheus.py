#!/usr/bin/env python3
"""
Prometheus Exposition
Metric descriptors, samples and text-exposition rendering
"""

import math
import re
from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Iterable, List, Mapping, Optional, Sequence, Union

METRIC_KEY_PATTERN = re.compile(r"[a-zA-Z_:][a-zA-Z0-9_:]*")
METRIC_KINDS = ("counter", "gauge")

MetricValue = Union[int, float, str]
LabelValue = Union[str, int, float, Sequence[str], Sequence[int], Sequence[float]]
Labels = Mapping[str, LabelValue]


@dataclass(frozen=True)
class MetricDescriptor:
    """Declared metric: exposition key, kind and optional help text"""
    key: str
    kind: str
    help: Optional[str] = None

    def __post_init__(self):
        if not self.key or not METRIC_KEY_PATTERN.fullmatch(self.key):
            raise ValueError(f"Invalid metric key: {self.key!r}")
        if self.kind not in METRIC_KINDS:
            raise ValueError(f"Invalid metric kind {self.kind!r} for {self.key}")

    @classmethod
    def gauge(cls, key: str) -> "MetricDescriptor":
        return cls(key=key, kind="gauge")

    @classmethod
    def counter(cls, key: str) -> "MetricDescriptor":
        return cls(key=key, kind="counter")

    def with_help(self, help: str) -> "MetricDescriptor":
        return replace(self, help=help)

    def export_with(self, value: MetricValue, labels: Optional[Labels] = None) -> "MetricSample":
        return MetricSample(metric=self, value=value, labels=labels or {})


@dataclass(frozen=True)
class MetricSample:
    """A descriptor bound to a value and a label set"""
    metric: MetricDescriptor
    value: MetricValue
    labels: Labels = field(default_factory=dict)

    def __post_init__(self):
        object.__setattr__(self, "labels", MappingProxyType(dict(self.labels)))

    def render(self) -> str:
        return render_sample(self)


def format_number(value: MetricValue) -> str:
    """Render a value the way exposition consumers expect (no trailing '.0' on integral floats)"""
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "1" if value else "0"
    if isinstance(value, float):
        if math.isnan(value):
            return "NaN"
        if math.isinf(value):
            return "+Inf" if value > 0 else "-Inf"
        if value.is_integer() and abs(value) < 1e21:
            return str(int(value))
        return repr(value)
    return str(value)


def render_labels(labels: Optional[Labels]) -> str:
    """Render '{k="v",...}'; sequence values emit one pair per unique item in first-seen order.

    Values are interpolated literally, embedded quotes are not escaped.
    """
    if not labels:
        return ""

    pairs: List[str] = []
    for key, value in labels.items():
        if isinstance(value, (list, tuple)):
            for item in dict.fromkeys(value):
                pairs.append(f'{key}="{format_number(item)}"')
        else:
            pairs.append(f'{key}="{format_number(value)}"')
    return "{" + ",".join(pairs) + "}"


def render_sample(sample: MetricSample) -> str:
    """Render one HELP/TYPE/sample block (no trailing newline)"""
    metric = sample.metric
    return (
        f"# HELP {metric.key} {metric.help or ''}\n"
        f"# TYPE {metric.key} {metric.kind}\n"
        f"{metric.key}{render_labels(sample.labels)} {format_number(sample.value)}"
    )


def render_samples(samples: Iterable[MetricSample]) -> str:
    """Render each block followed by a blank line"""
    return "".join(f"{render_sample(sample)}\n\n" for sample in samples)
