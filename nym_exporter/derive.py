#!/usr/bin/env python3
"""
Metric Derivation
Pure functions turning decoded nodes and accounts into metric values and labels
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Dict, List, Mapping, NamedTuple, Tuple, Union

from .catalog import ACCOUNT_METRICS, NODE_METRICS, AccountMetric, NodeMetric
from .exceptions import NymExporterException, PartialResolutionFailure
from .models import Account, Node
from .prometheus import Labels, MetricDescriptor, MetricSample, MetricValue

logger = logging.getLogger(__name__)

# Declared-role flags in tie-break priority order
ROLE_PRIORITY = ("mixnode", "entry", "exit_nr", "exit_ipr")
UNKNOWN_ROLE = "unknown"


class DelegationsSum(NamedTuple):
    count: int
    sum: float


@dataclass(frozen=True)
class AccountNodeLabels:
    """Display names of the nodes an account bonds and delegates to"""
    bond: Tuple[str, ...] = ()
    delegate: Tuple[str, ...] = ()

    def as_labels(self) -> Dict[str, str]:
        return {
            "delegate": ",".join(self.delegate),
            "bond": ",".join(self.bond),
        }


def to_number(amount: str) -> float:
    """Convert a decoded decimal string; decoding guarantees it is numeric"""
    try:
        return float(amount)
    except (TypeError, ValueError):
        logger.error(f"Non-numeric amount after decoding: {amount!r}")
        if __debug__:
            raise
        return 0.0


def role(node: Node) -> str:
    """First declared role flag set, in priority order, else 'unknown'"""
    declared = node.description.declared_role
    for name in ROLE_PRIORITY:
        if getattr(declared, name):
            return name
    return UNKNOWN_ROLE


def delegations_sum(node: Node) -> DelegationsSum:
    return DelegationsSum(
        count=len(node.delegations),
        sum=sum((to_number(d.amount.amount) for d in node.delegations), 0.0),
    )


def node_labels(node: Node, node_id: int) -> Dict[str, Union[str, int]]:
    return {
        "node_id": node_id,
        "node_name": node.hostname or node_id,
        "node_role": role(node),
    }


def total_balances(account: Account) -> float:
    """Balances plus delegations, claimable and operator rewards, as a float"""
    total = sum((to_number(b.amount) for b in account.balances), 0.0)
    total += to_number(account.total_delegations.amount)
    total += to_number(account.claimable_rewards.amount)
    if account.operator_rewards is not None:
        total += to_number(account.operator_rewards.amount)
    return total


def node_values(node: Node) -> Dict[NodeMetric, MetricValue]:
    details = node.rewarding_details
    sums = delegations_sum(node)
    return {
        NodeMetric.TOTAL_UNIT_REWARD: details.total_unit_reward,
        NodeMetric.UNIQUE_DELEGATIONS: details.unique_delegations,
        NodeMetric.LAST_REWARDED_EPOCH: details.last_rewarded_epoch,
        NodeMetric.DELEGATORS_COUNT: sums.count,
        NodeMetric.DELEGATION_SUM: sums.sum,
        NodeMetric.PROFIT_MARGIN_PERCENT: details.cost_params.profit_margin_percent,
        NodeMetric.OPERATING_COST: details.cost_params.interval_operating_cost.amount,
        NodeMetric.OPERATOR_REWARDS: details.delegates,
    }


def account_values(account: Account) -> Dict[AccountMetric, MetricValue]:
    operator_rewards = account.operator_rewards
    return {
        AccountMetric.CLAIMABLE_REWARDS: account.claimable_rewards.amount,
        AccountMetric.OPERATOR_REWARDS: operator_rewards.amount if operator_rewards is not None else 0,
        AccountMetric.TOTAL_VALUE: account.total_value.amount,
        AccountMetric.TOTAL_DELEGATIONS: account.total_delegations.amount,
        AccountMetric.TOTAL_BALANCE: total_balances(account),
    }


def bind_samples(metrics: Mapping, values: Mapping, labels: Labels) -> List[MetricSample]:
    """Bind every catalog descriptor, in catalog order, to its value"""
    missing = [name for name in metrics if name not in values]
    if missing:
        raise KeyError(f"No value derived for metrics: {', '.join(str(m.value) for m in missing)}")
    return [descriptor.export_with(values[name], labels) for name, descriptor in metrics.items()]


def node_samples(
    node: Node,
    labels: Labels,
    metrics: Mapping[NodeMetric, MetricDescriptor] = NODE_METRICS,
) -> List[MetricSample]:
    return bind_samples(metrics, node_values(node), labels)


def account_samples(
    account: Account,
    labels: Labels,
    metrics: Mapping[AccountMetric, MetricDescriptor] = ACCOUNT_METRICS,
) -> List[MetricSample]:
    return bind_samples(metrics, account_values(account), labels)


async def account_node_labels(account: Account, client) -> AccountNodeLabels:
    """Resolve bonded and delegated node IDs to display names.

    Each lookup goes through ``client.fetch_node``; a failed lookup is logged
    and left out without failing the account.
    """
    references = [(True, r.node_id) for r in account.accumulated_rewards]
    references += [(False, d.node_id) for d in account.delegations]

    async def resolve(node_id: int):
        try:
            node = await client.fetch_node(node_id)
        except NymExporterException as e:
            failure = PartialResolutionFailure(account.address, node_id, e)
            logger.warning(f"PARTIAL RESOLUTION: {failure}")
            return None
        return node.display_name()

    names = await asyncio.gather(*(resolve(node_id) for _, node_id in references))

    bond: List[str] = []
    delegate: List[str] = []
    for (bonded, _), name in zip(references, names):
        if name is None:
            continue
        (bond if bonded else delegate).append(name)
    return AccountNodeLabels(bond=tuple(bond), delegate=tuple(delegate))


def account_labels(account: Account, resolved: AccountNodeLabels) -> Dict[str, str]:
    labels = {"address": account.address}
    labels.update(resolved.as_labels())
    return labels
