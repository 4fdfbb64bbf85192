"""
Shared explorer document fixtures
"""

import copy

import pytest

NODE_DOCUMENT = {
    "node_id": 1613,
    "contract_node_type": "nym_node",
    "description": {
        "last_polled": "2024-11-20 10:01:02.123456789 +00:00:00",
        "host_information": {
            "ip_address": ["95.216.1.10", "2a01:4f9:c012:3c4d:0000:0000:0000:0001"],
            "hostname": "nym.example.com",
            "keys": {
                "ed25519": "Fz6uTHZkgbwLdqvMbDTeVwXbJ1ZbGW3BhvP6RJtDTFTE",
                "x25519": "5uYTmvyQKVwxL4v9Vd1wS9STV2r4YbqbLj1VzKPsEJCy",
                "x25519_noise": None,
            },
        },
        "declared_role": {
            "mixnode": False,
            "entry": True,
            "exit_nr": True,
            "exit_ipr": False,
        },
        "auxiliary_details": {
            "location": "FI",
            "announce_ports": {"verloc_port": None, "mix_port": 1789},
            "accepted_operator_terms_and_conditions": True,
        },
        "build_information": {
            "binary_name": "nym-node",
            "build_timestamp": "2024-10-29T11:52:09.425788522Z",
            "build_version": "1.1.10",
            "commit_sha": "0a7b1dcf0b8d1c1b5a9e3ad1f8ad4d0b6d4b1e2c",
            "commit_timestamp": "2024-10-29 12:21:38.000000000 +01:00:00",
            "commit_branch": "HEAD",
            "rustc_version": "1.80.1",
            "rustc_channel": "stable",
            "cargo_profile": "release",
            "cargo_triple": "x86_64-unknown-linux-gnu",
        },
        "network_requester": {"address": "nr.address@gateway", "uses_exit_policy": True},
        "ip_packet_router": {"address": "ipr.address@gateway"},
        "authenticator": {"address": "auth.address@gateway"},
        "wireguard": {"port": 51822, "public_key": "wg-public-key"},
        "mixnet_websockets": {"ws_port": 9000, "wss_port": None},
    },
    "bond_information": {
        "node_id": 1613,
        "owner": "n1yv7smmmzsrqx88gze33sq6a02tn5u6ge808quz",
        "original_pledge": {"denom": "unym", "amount": "100000000"},
        "bonding_height": 13747124,
        "is_unbonding": False,
        "node": {
            "host": "95.216.1.10",
            "custom_http_port": 8080,
            "identity_key": "Fz6uTHZkgbwLdqvMbDTeVwXbJ1ZbGW3BhvP6RJtDTFTE",
        },
    },
    "rewarding_details": {
        "cost_params": {
            "profit_margin_percent": "0.2",
            "interval_operating_cost": {"denom": "unym", "amount": "800000000"},
        },
        "operator": "2971714371.123",
        "delegates": "90138338.5",
        "total_unit_reward": "1234.567",
        "unit_delegation": "1000000000",
        "last_rewarded_epoch": 25012,
        "unique_delegations": 2,
    },
    "location": {
        "two_letter_iso_country_code": "FI",
        "three_letter_iso_country_code": "FIN",
        "country_name": "Finland",
        "latitude": 60.1699,
        "longitude": 24,
    },
    "delegations": [
        {
            "owner": "n1delegatorone",
            "node_id": 1613,
            "cumulative_reward_ratio": "0.1",
            "amount": {"denom": "unym", "amount": "4067485311"},
            "height": 13747124,
            "proxy": None,
        },
        {
            "owner": "n1delegatortwo",
            "node_id": 1613,
            "cumulative_reward_ratio": "0.2",
            "amount": {"denom": "unym", "amount": "1000000"},
            "height": 13747200,
            "proxy": "n1proxy",
        },
    ],
}

ACCOUNT_DOCUMENT = {
    "address": "n1yv7smmmzsrqx88gze33sq6a02tn5u6ge808quz",
    "balances": [{"denom": "unym", "amount": "481464538"}],
    "total_value": {"denom": "unym", "amount": "7610802558"},
    "delegations": [
        {
            "node_id": 1613,
            "delegated": {"denom": "unym", "amount": "4067485311"},
            "height": 13747124,
            "proxy": None,
        }
    ],
    "accumulated_rewards": [
        {
            "node_id": 1613,
            "rewards": {"denom": "unym", "amount": "90138338"},
            "amount_staked": {"denom": "unym", "amount": "4067485311"},
            "node_still_fully_bonded": True,
        }
    ],
    "total_delegations": {"denom": "unym", "amount": "4067485311"},
    "claimable_rewards": {"denom": "unym", "amount": "90138338"},
    "vesting_account": None,
    "operator_rewards": {"denom": "unym", "amount": "2971714371"},
}


@pytest.fixture
def node_document():
    """Mutable copy of a valid node document"""
    return copy.deepcopy(NODE_DOCUMENT)


@pytest.fixture
def account_document():
    """Mutable copy of a valid account document"""
    return copy.deepcopy(ACCOUNT_DOCUMENT)


@pytest.fixture
def make_node_document():
    """Build node documents with a given ID, hostname and declared roles"""
    def _make(node_id=1613, hostname="nym.example.com", **roles):
        document = copy.deepcopy(NODE_DOCUMENT)
        document["node_id"] = node_id
        document["bond_information"]["node_id"] = node_id
        document["description"]["host_information"]["hostname"] = hostname
        declared = document["description"]["declared_role"]
        for name in declared:
            declared[name] = roles.get(name, False)
        return document
    return _make
