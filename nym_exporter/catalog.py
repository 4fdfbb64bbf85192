#!/usr/bin/env python3
"""
Metric Catalog
Fixed metric descriptor tables for node and account exports
"""

from enum import Enum
from types import MappingProxyType
from typing import Mapping

from .prometheus import MetricDescriptor


class NodeMetric(str, Enum):
    OPERATOR_REWARDS = "operator_rewards"
    PROFIT_MARGIN_PERCENT = "profit_margin_percent"
    DELEGATORS_COUNT = "delegators_count"
    DELEGATION_SUM = "delegation_sum"
    OPERATING_COST = "operating_cost"
    LAST_REWARDED_EPOCH = "last_rewarded_epoch"
    UNIQUE_DELEGATIONS = "unique_delegations"
    TOTAL_UNIT_REWARD = "total_unit_reward"


class AccountMetric(str, Enum):
    CLAIMABLE_REWARDS = "claimable_rewards"
    OPERATOR_REWARDS = "operator_rewards"
    TOTAL_VALUE = "total_value"
    TOTAL_BALANCE = "total_balance"
    TOTAL_DELEGATIONS = "total_delegations"


NODE_METRICS: Mapping[NodeMetric, MetricDescriptor] = MappingProxyType({
    NodeMetric.OPERATOR_REWARDS: MetricDescriptor.gauge("nym_node_operator_rewards").with_help(
        "Total rewards for the operator"),
    NodeMetric.PROFIT_MARGIN_PERCENT: MetricDescriptor.gauge("nym_node_profit_margin_percent").with_help(
        "Profit margin percent"),
    NodeMetric.DELEGATORS_COUNT: MetricDescriptor.gauge("nym_node_delegators_count").with_help(
        "Number of delegators"),
    NodeMetric.DELEGATION_SUM: MetricDescriptor.gauge("nym_node_delegation_sum").with_help(
        "Sum of delegations"),
    NodeMetric.OPERATING_COST: MetricDescriptor.gauge("nym_node_operating_cost").with_help(
        "Operating cost"),
    NodeMetric.LAST_REWARDED_EPOCH: MetricDescriptor.counter("nym_node_last_rewarded_epoch").with_help(
        "Last rewarded epoch"),
    NodeMetric.UNIQUE_DELEGATIONS: MetricDescriptor.gauge("nym_node_unique_delegations").with_help(
        "Number of unique delegations"),
    NodeMetric.TOTAL_UNIT_REWARD: MetricDescriptor.gauge("nym_node_total_unit_reward").with_help(
        "Total unit reward"),
})

ACCOUNT_METRICS: Mapping[AccountMetric, MetricDescriptor] = MappingProxyType({
    AccountMetric.CLAIMABLE_REWARDS: MetricDescriptor.gauge("nym_address_claimable_rewards").with_help(
        "Pending rewards"),
    AccountMetric.OPERATOR_REWARDS: MetricDescriptor.gauge("nym_address_operator_rewards").with_help(
        "Pending rewards for the operator"),
    AccountMetric.TOTAL_VALUE: MetricDescriptor.gauge("nym_address_total_value").with_help(
        "Total value of the address"),
    AccountMetric.TOTAL_BALANCE: MetricDescriptor.gauge("nym_address_total_balance").with_help(
        "Total balance of the address"),
    AccountMetric.TOTAL_DELEGATIONS: MetricDescriptor.gauge("nym_address_total_delegations").with_help(
        "Total delegations"),
})
