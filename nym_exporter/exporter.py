#!/usr/bin/env python3
"""
Nym Metrics Exporter
Fetch, derive and render pipeline for nodes and accounts, with batch fan-out
"""

import asyncio
import logging
import sys
import time
from typing import AsyncIterator, Awaitable, Callable, List, Mapping, Optional, Sequence

from .catalog import ACCOUNT_METRICS, NODE_METRICS, AccountMetric, NodeMetric
from .config import HTTP_CONCURRENCY
from .derive import (
    account_labels,
    account_node_labels,
    account_samples,
    node_labels,
    node_samples,
)
from .exceptions import FetchFailure, NymExporterException, SchemaViolation
from .explorer import ExplorerClient
from .prometheus import MetricDescriptor, render_samples


def setup_logging(level=logging.INFO):
    """Set up logging configuration to stderr only"""
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(levelname)s - %(message)s',
        stream=sys.stderr
    )

logger = logging.getLogger(__name__)


class MetricsExporter:
    """Renders Prometheus exposition text for nodes and accounts fetched from the explorer"""

    def __init__(
        self,
        client: ExplorerClient,
        node_metrics: Mapping[NodeMetric, MetricDescriptor] = NODE_METRICS,
        account_metrics: Mapping[AccountMetric, MetricDescriptor] = ACCOUNT_METRICS,
    ):
        self.client = client
        self.node_metrics = node_metrics
        self.account_metrics = account_metrics
        self.logger = logger

    async def export_node(self, node_id: int) -> str:
        """Export one node; fetch and decode errors propagate"""
        node = await self.client.fetch_node(node_id)
        return render_samples(node_samples(node, node_labels(node, node_id), self.node_metrics))

    async def export_account(self, address: str) -> str:
        """Export one account, labelled with the nodes it bonds and delegates to"""
        account = await self.client.fetch_account(address)
        resolved = await account_node_labels(account, self.client)
        labels = account_labels(account, resolved)
        return render_samples(account_samples(account, labels, self.account_metrics))

    async def _safe_export(self, kind: str, target, export: Callable[..., Awaitable[str]]) -> str:
        try:
            return await export(target)
        except FetchFailure as e:
            self.logger.error(f"FETCH FAILED: {kind} {target}: {e}")
        except SchemaViolation as e:
            self.logger.error(f"SCHEMA VIOLATION: {kind} {target}: {e}")
        except NymExporterException as e:
            self.logger.error(f"EXPORT FAILED: {kind} {target}: {e}")
        except Exception as e:
            self.logger.error(f"EXPORT FAILED: {kind} {target}: {e}", exc_info=True)
        return ""

    def _jobs(self, node_ids: Sequence[int], addresses: Sequence[str]):
        jobs = [("account", address, self.export_account) for address in addresses]
        jobs += [("node", node_id, self.export_node) for node_id in node_ids]
        return jobs

    async def export_batch(
        self,
        node_ids: Sequence[int] = (),
        addresses: Sequence[str] = (),
        concurrency: Optional[int] = HTTP_CONCURRENCY,
    ) -> List[str]:
        """Export accounts then nodes; failed items yield ''.

        At most ``concurrency`` items run at once (``None`` for no cap);
        results keep input order.
        """
        start_time = time.time()
        self.logger.info(f"Exporting metrics for nodes: {list(node_ids)} addresses: {list(addresses)}")

        semaphore = asyncio.Semaphore(concurrency) if concurrency else None

        async def run(kind, target, export) -> str:
            if semaphore is None:
                return await self._safe_export(kind, target, export)
            async with semaphore:
                return await self._safe_export(kind, target, export)

        results = await asyncio.gather(*(run(*job) for job in self._jobs(node_ids, addresses)))

        exported = sum(1 for result in results if result)
        self.logger.info(f"EXPORT COMPLETE: {exported}/{len(results)} items in {time.time() - start_time:.2f}s")
        return list(results)

    async def stream_exports(self, node_ids: Sequence[int] = (), addresses: Sequence[str] = ()) -> AsyncIterator[str]:
        """Start every export at once and yield blocks in input order as they complete"""
        tasks = [asyncio.ensure_future(self._safe_export(kind, target, export))
                 for kind, target, export in self._jobs(node_ids, addresses)]
        try:
            for task in tasks:
                yield await task
        finally:
            for task in tasks:
                task.cancel()


def join_exports(exports: Sequence[str]) -> str:
    return "\n".join(exports)
