#!/usr/bin/env python3
"""
Nym Explorer Client
Fetches node and account documents from the explorer API and decodes them
"""

import asyncio
import concurrent.futures
import logging
from typing import Any, Optional
from urllib.parse import quote

import requests

from .config import ACCOUNT_PATH, NODE_PATH, ExporterConfig
from .exceptions import FetchFailure, InvalidIdentifierError
from .models import Account, Node

logger = logging.getLogger(__name__)


class ExplorerClient:
    """Explorer API client; one HTTP round trip per call, no retries or caching.

    Async fetches run on a thread pool owned by the client. The pool is widened
    whenever more fetches are in flight than it has workers, so callers alone
    decide how many fetches run at once.
    """

    def __init__(self, config: Optional[ExporterConfig] = None, session: Optional[requests.Session] = None):
        self.config = config or ExporterConfig()
        self.base_url = self.config.explorer_url.rstrip("/")
        self.timeout = self.config.timeout
        self.logger = logger

        # Session setup
        self.session = session or requests.Session()
        self.session.headers.update({
            'User-Agent': self.config.user_agent,
            'Accept': 'application/json',
        })

        self.max_workers = 0
        self.in_flight = 0
        self.executor: Optional[concurrent.futures.ThreadPoolExecutor] = None
        self._resize(self.config.http_concurrency)

    def node_url(self, node_id: int) -> str:
        if isinstance(node_id, bool) or not isinstance(node_id, int) or node_id <= 0:
            raise InvalidIdentifierError(f"Node ID must be a positive integer, got {node_id!r}")
        return self.base_url + NODE_PATH.format(node_id=node_id)

    def account_url(self, address: str) -> str:
        if not isinstance(address, str) or not address.strip():
            raise InvalidIdentifierError(f"Account address must be a non-empty string, got {address!r}")
        return self.base_url + ACCOUNT_PATH.format(address=quote(address.strip(), safe=""))

    def get_document(self, url: str) -> Any:
        """GET a JSON document, mapping every transport problem to FetchFailure"""
        self.logger.debug(f"GET {url}")
        try:
            response = self.session.get(url, timeout=self.timeout)
        except requests.exceptions.Timeout:
            raise FetchFailure(url, f"timed out after {self.timeout}s")
        except requests.exceptions.RequestException as e:
            raise FetchFailure(url, str(e))

        if not 200 <= response.status_code < 300:
            raise FetchFailure(url, f"HTTP {response.status_code}", status_code=response.status_code)

        try:
            return response.json()
        except ValueError as e:
            raise FetchFailure(url, f"invalid JSON body: {e}", status_code=response.status_code)

    def get_node(self, node_id: int) -> Node:
        return Node.decode(self.get_document(self.node_url(node_id)), node_id)

    def get_account(self, address: str) -> Account:
        return Account.decode(self.get_document(self.account_url(address)), address)

    def _resize(self, max_workers: int):
        previous = self.executor
        self.executor = concurrent.futures.ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="nym-explorer")
        self.max_workers = max_workers
        if previous is not None:
            # Running fetches finish on the old pool
            previous.shutdown(wait=False)
        self.logger.debug(f"Explorer fetch pool sized to {max_workers} workers")

    async def _run(self, fetch, target):
        self.in_flight += 1
        try:
            if self.in_flight > self.max_workers:
                self._resize(self.in_flight * 2)
            loop = asyncio.get_running_loop()
            return await loop.run_in_executor(self.executor, fetch, target)
        finally:
            self.in_flight -= 1

    async def fetch_node(self, node_id: int) -> Node:
        """Fetch and decode a node without blocking the event loop"""
        return await self._run(self.get_node, node_id)

    async def fetch_account(self, address: str) -> Account:
        """Fetch and decode an account without blocking the event loop"""
        return await self._run(self.get_account, address)

    def close(self):
        self.executor.shutdown(wait=False)
        self.session.close()
