"""
Tests for metric derivation from decoded nodes and accounts
"""

import asyncio

import pytest

from nym_exporter.catalog import NODE_METRICS, AccountMetric, NodeMetric
from nym_exporter.derive import (
    account_labels,
    account_node_labels,
    account_values,
    bind_samples,
    delegations_sum,
    node_labels,
    node_samples,
    node_values,
    role,
    total_balances,
)
from nym_exporter.exceptions import FetchFailure, SchemaViolation
from nym_exporter.models import Account, Node


class FakeNodeClient:
    """Serves decoded nodes by ID; anything else fails like the explorer would"""

    def __init__(self, nodes, failures=None):
        self.nodes = nodes
        self.failures = failures or {}
        self.requested = []

    async def fetch_node(self, node_id):
        self.requested.append(node_id)
        if node_id in self.failures:
            raise self.failures[node_id]
        return self.nodes[node_id]


class TestRole:
    """Test declared-role resolution"""

    @pytest.mark.parametrize("roles,expected", [
        ({"mixnode": True}, "mixnode"),
        ({"entry": True}, "entry"),
        ({"exit_nr": True}, "exit_nr"),
        ({"exit_ipr": True}, "exit_ipr"),
        ({}, "unknown"),
        ({"mixnode": True, "entry": True}, "mixnode"),
        ({"entry": True, "exit_nr": True, "exit_ipr": True}, "entry"),
        ({"exit_nr": True, "exit_ipr": True}, "exit_nr"),
    ])
    def test_role_priority(self, make_node_document, roles, expected):
        node = Node.decode(make_node_document(**roles))

        assert role(node) == expected


class TestNodeDerivation:
    """Test node aggregation and labels"""

    def test_delegations_sum(self, node_document):
        sums = delegations_sum(Node.decode(node_document))

        assert sums.count == 2
        assert sums.sum == 4067485311 + 1000000

    def test_delegations_sum_empty(self, node_document):
        node_document["delegations"] = []

        sums = delegations_sum(Node.decode(node_document))
        assert sums.count == 0
        assert sums.sum == 0

    def test_node_labels(self, node_document):
        node = Node.decode(node_document)

        assert node_labels(node, 1613) == {
            "node_id": 1613,
            "node_name": "nym.example.com",
            "node_role": "entry",
        }

    def test_node_labels_without_hostname(self, node_document):
        node_document["description"]["host_information"]["hostname"] = None

        labels = node_labels(Node.decode(node_document), 1613)
        assert labels["node_name"] == 1613

    def test_node_values(self, node_document):
        values = node_values(Node.decode(node_document))

        assert values[NodeMetric.DELEGATORS_COUNT] == 2
        assert values[NodeMetric.DELEGATION_SUM] == 4068485311.0
        assert values[NodeMetric.PROFIT_MARGIN_PERCENT] == "0.2"
        assert values[NodeMetric.OPERATING_COST] == "800000000"
        assert values[NodeMetric.LAST_REWARDED_EPOCH] == 25012
        assert values[NodeMetric.UNIQUE_DELEGATIONS] == 2
        assert values[NodeMetric.TOTAL_UNIT_REWARD] == "1234.567"
        assert values[NodeMetric.OPERATOR_REWARDS] == "90138338.5"

    def test_every_catalog_metric_has_a_value(self, node_document):
        node = Node.decode(node_document)
        samples = node_samples(node, {"node_id": 1613})

        assert [s.metric for s in samples] == list(NODE_METRICS.values())

    def test_missing_value_is_an_error(self):
        with pytest.raises(KeyError):
            bind_samples(NODE_METRICS, {NodeMetric.DELEGATION_SUM: 1}, {})


class TestAccountDerivation:
    """Test account totals and label resolution"""

    def test_total_balances(self, account_document):
        account = Account.decode(account_document)

        assert total_balances(account) == 481464538 + 4067485311 + 90138338 + 2971714371

    def test_total_balances_without_operator_rewards(self, account_document):
        account_document["operator_rewards"] = None
        account_document["balances"].append({"denom": "unym", "amount": "10"})

        account = Account.decode(account_document)
        assert total_balances(account) == 481464538 + 10 + 4067485311 + 90138338

    def test_account_values(self, account_document):
        account_document["operator_rewards"] = None
        values = account_values(Account.decode(account_document))

        assert values[AccountMetric.OPERATOR_REWARDS] == 0
        assert values[AccountMetric.CLAIMABLE_REWARDS] == "90138338"
        assert values[AccountMetric.TOTAL_VALUE] == "7610802558"
        assert values[AccountMetric.TOTAL_DELEGATIONS] == "4067485311"

    def test_account_node_labels_partition(self, account_document, make_node_document):
        account_document["accumulated_rewards"][0]["node_id"] = 1
        account_document["delegations"] = [
            dict(account_document["delegations"][0], node_id=2),
            dict(account_document["delegations"][0], node_id=3),
        ]
        account = Account.decode(account_document)
        client = FakeNodeClient({
            1: Node.decode(make_node_document(1, "bonded.example.com")),
            2: Node.decode(make_node_document(2, "delegated.example.com")),
            3: Node.decode(make_node_document(3, None)),
        })

        resolved = asyncio.run(account_node_labels(account, client))

        assert resolved.bond == ("bonded.example.com",)
        assert resolved.delegate == ("delegated.example.com", "3")
        assert sorted(client.requested) == [1, 2, 3]
        assert account_labels(account, resolved) == {
            "address": account.address,
            "delegate": "delegated.example.com,3",
            "bond": "bonded.example.com",
        }

    def test_account_node_labels_skips_failed_lookups(self, account_document, make_node_document):
        account_document["accumulated_rewards"][0]["node_id"] = 1
        account_document["delegations"] = [
            dict(account_document["delegations"][0], node_id=2),
            dict(account_document["delegations"][0], node_id=3),
        ]
        account = Account.decode(account_document)
        client = FakeNodeClient(
            {3: Node.decode(make_node_document(3, "ok.example.com"))},
            failures={
                1: FetchFailure("node 1", "HTTP 404", status_code=404),
                2: SchemaViolation("node", 2, []),
            },
        )

        resolved = asyncio.run(account_node_labels(account, client))

        assert resolved.bond == ()
        assert resolved.delegate == ("ok.example.com",)
        assert resolved.as_labels() == {"delegate": "ok.example.com", "bond": ""}
