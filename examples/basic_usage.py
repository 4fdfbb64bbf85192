#!/usr/bin/env python3
"""
Basic usage example for the nym-exporter library
"""

import asyncio

from nym_exporter import ExplorerClient, MetricsExporter, setup_logging
from nym_exporter.derive import delegations_sum, role


async def main():
    setup_logging()
    client = ExplorerClient()
    exporter = MetricsExporter(client)

    # Single node, decoded
    node = await client.fetch_node(1613)
    sums = delegations_sum(node)
    print(f"Node {node.node_id} ({node.display_name()}): role={role(node)}, "
          f"{sums.count} delegations totalling {sums.sum:.0f}")

    # Batch exposition text; failed items come back empty
    exports = await exporter.export_batch(
        node_ids=[1613, 1614],
        addresses=["n1yv7smmmzsrqx88gze33sq6a02tn5u6ge808quz"],
    )
    print("\n".join(exports))

    client.close()


if __name__ == "__main__":
    asyncio.run(main())
