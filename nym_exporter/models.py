#!/usr/bin/env python3
"""
Nym Explorer Data Models
Typed decoding of explorer node and account documents
"""

import re
from datetime import datetime, timedelta, timezone
from typing import Annotated, Any, Literal, Optional, Tuple

from pydantic import (
    AfterValidator,
    BaseModel,
    BeforeValidator,
    ConfigDict,
    Field,
    PlainSerializer,
    StrictBool,
    StrictInt,
    StrictStr,
    ValidationError,
)

from .exceptions import SchemaViolation

IPV4_PATTERN = re.compile(r"([0-9]{1,3}\.){3}[0-9]{1,3}")
IPV6_PATTERN = re.compile(r"(?:[A-Fa-f0-9]{1,4}:){7}[A-Fa-f0-9]{1,4}")
HOSTNAME_PATTERN = re.compile(r"[a-zA-Z0-9.-]+")
DECIMAL_PATTERN = re.compile(r"-?[0-9]+(\.[0-9]+)?")

# Explorer timestamps carry a seconds field on the UTC offset: "+00:00:00"
OFFSET_SECONDS_PATTERN = re.compile(r"([+-][0-9]{2}:[0-9]{2}):[0-9]{2}\Z")
API_DATE_PATTERN = re.compile(
    r"(?P<date>[0-9]{4}-[0-9]{2}-[0-9]{2})[T ](?P<time>[0-9]{2}:[0-9]{2}:[0-9]{2})"
    r"(?:\.(?P<fraction>[0-9]+))? *(?P<offset>Z|[+-][0-9]{2}:[0-9]{2})?"
)


def parse_api_date(value: Any) -> datetime:
    """Parse an explorer timestamp, dropping the offset seconds, to a UTC datetime.

    Only millisecond precision is kept.
    """
    if isinstance(value, datetime):
        return value
    if not isinstance(value, str):
        raise ValueError("Date must be a string")

    match = API_DATE_PATTERN.fullmatch(OFFSET_SECONDS_PATTERN.sub(r"\1", value.strip()))
    if not match:
        raise ValueError(f"Invalid date: {value!r}")

    millis = int((match.group("fraction") or "")[:3].ljust(3, "0"))
    offset = match.group("offset") or "Z"
    if offset == "Z":
        tz = timezone.utc
    else:
        sign = -1 if offset[0] == "-" else 1
        tz = timezone(sign * timedelta(hours=int(offset[1:3]), minutes=int(offset[4:6])))

    parsed = datetime.strptime(f"{match.group('date')} {match.group('time')}", "%Y-%m-%d %H:%M:%S")
    return parsed.replace(microsecond=millis * 1000, tzinfo=tz).astimezone(timezone.utc)


def format_timestamp(value: datetime) -> str:
    """Format as 'YYYY-MM-DD HH:MM:SS.fffffffff +00:00:00' (UTC, ms zero-padded to 9 digits)"""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    value = value.astimezone(timezone.utc)
    nanos = f"{value.microsecond // 1000:03d}".ljust(9, "0")
    return f"{value:%Y-%m-%d %H:%M:%S}.{nanos} +00:00:00"


def validate_host_identifier(value: str) -> str:
    if IPV4_PATTERN.fullmatch(value) or IPV6_PATTERN.fullmatch(value) or HOSTNAME_PATTERN.fullmatch(value):
        return value
    raise ValueError("Invalid ipv4 address, ipv6 address or hostname")


def validate_hostname(value: str) -> str:
    if not HOSTNAME_PATTERN.fullmatch(value):
        raise ValueError("Invalid hostname")
    return value


def validate_decimal(value: str) -> str:
    if not DECIMAL_PATTERN.fullmatch(value):
        raise ValueError(f"Invalid decimal amount: {value!r}")
    return value


APIDate = Annotated[
    datetime,
    BeforeValidator(parse_api_date),
    PlainSerializer(format_timestamp, return_type=str),
]
HostIdentifier = Annotated[StrictStr, AfterValidator(validate_host_identifier)]
Hostname = Annotated[StrictStr, AfterValidator(validate_hostname)]
DecimalString = Annotated[StrictStr, AfterValidator(validate_decimal)]
Number = Annotated[float, Field(strict=True)]


class ExplorerModel(BaseModel):
    """Immutable base for explorer documents; unknown fields are ignored"""
    model_config = ConfigDict(frozen=True, extra="ignore")


class Coin(ExplorerModel):
    denom: StrictStr
    amount: DecimalString


# Node description

class HostKeys(ExplorerModel):
    ed25519: StrictStr
    x25519: StrictStr
    x25519_noise: Optional[StrictStr]


class HostInformation(ExplorerModel):
    ip_address: Tuple[HostIdentifier, ...]
    hostname: Optional[Hostname]
    keys: HostKeys


class DeclaredRole(ExplorerModel):
    mixnode: StrictBool
    entry: StrictBool
    exit_nr: StrictBool
    exit_ipr: StrictBool


class AnnouncePorts(ExplorerModel):
    verloc_port: Optional[StrictInt]
    mix_port: Optional[StrictInt]


class AuxiliaryDetails(ExplorerModel):
    location: Optional[StrictStr]
    announce_ports: AnnouncePorts
    accepted_operator_terms_and_conditions: StrictBool


class BuildInformation(ExplorerModel):
    binary_name: StrictStr
    build_timestamp: APIDate
    build_version: StrictStr
    commit_sha: StrictStr
    commit_timestamp: APIDate
    commit_branch: StrictStr
    rustc_version: StrictStr
    rustc_channel: StrictStr
    cargo_profile: StrictStr
    cargo_triple: StrictStr


class AddressEntity(ExplorerModel):
    address: StrictStr


class NetworkRequester(AddressEntity):
    uses_exit_policy: StrictBool


class Wireguard(ExplorerModel):
    port: StrictInt
    public_key: StrictStr


class MixnetWebsockets(ExplorerModel):
    ws_port: StrictInt
    wss_port: Optional[StrictInt]


class NodeDescription(ExplorerModel):
    last_polled: APIDate
    host_information: HostInformation
    declared_role: DeclaredRole
    auxiliary_details: AuxiliaryDetails
    build_information: BuildInformation
    network_requester: NetworkRequester
    ip_packet_router: AddressEntity
    authenticator: AddressEntity
    wireguard: Optional[Wireguard]
    mixnet_websockets: MixnetWebsockets


# Bonding and rewarding

class BondedNode(ExplorerModel):
    host: HostIdentifier
    custom_http_port: Optional[StrictInt]
    identity_key: StrictStr


class BondInformation(ExplorerModel):
    node_id: StrictInt
    owner: StrictStr
    original_pledge: Coin
    bonding_height: StrictInt
    is_unbonding: StrictBool
    node: BondedNode


class CostParams(ExplorerModel):
    profit_margin_percent: DecimalString
    interval_operating_cost: Coin


class RewardingDetails(ExplorerModel):
    cost_params: CostParams
    operator: DecimalString
    delegates: DecimalString
    total_unit_reward: DecimalString
    unit_delegation: DecimalString
    last_rewarded_epoch: StrictInt
    unique_delegations: StrictInt


class Location(ExplorerModel):
    two_letter_iso_country_code: Annotated[StrictStr, Field(min_length=2, max_length=2)]
    three_letter_iso_country_code: Annotated[StrictStr, Field(min_length=3, max_length=3)]
    country_name: StrictStr
    latitude: Number
    longitude: Number


class NodeDelegation(ExplorerModel):
    owner: StrictStr
    node_id: StrictInt
    cumulative_reward_ratio: StrictStr
    amount: Coin
    height: StrictInt
    proxy: Optional[StrictStr]


class Node(ExplorerModel):
    """A nym node as reported by the explorer"""
    node_id: StrictInt
    contract_node_type: Literal["nym_node"]
    description: NodeDescription
    bond_information: BondInformation
    rewarding_details: RewardingDetails
    location: Location
    delegations: Tuple[NodeDelegation, ...]

    @property
    def hostname(self) -> Optional[str]:
        return self.description.host_information.hostname

    def display_name(self) -> str:
        """Hostname, falling back to the node ID"""
        return self.hostname or str(self.node_id)

    @classmethod
    def decode(cls, data: Any, node_id: Any = None) -> "Node":
        """Validate a raw explorer document, raising SchemaViolation on mismatch"""
        return _decode(cls, "node", data, node_id)


# Accounts

class AccountDelegation(ExplorerModel):
    node_id: StrictInt
    delegated: Coin
    height: StrictInt
    proxy: Optional[StrictStr]


class AccumulatedReward(ExplorerModel):
    node_id: StrictInt
    rewards: Coin
    amount_staked: Coin
    node_still_fully_bonded: StrictBool


class Account(ExplorerModel):
    """An explorer account (wallet address) with balances, delegations and rewards"""
    address: StrictStr
    balances: Tuple[Coin, ...]
    total_value: Coin
    delegations: Tuple[AccountDelegation, ...]
    accumulated_rewards: Tuple[AccumulatedReward, ...]
    total_delegations: Coin
    claimable_rewards: Coin
    vesting_account: Optional[StrictStr]
    operator_rewards: Optional[Coin]

    @classmethod
    def decode(cls, data: Any, address: Any = None) -> "Account":
        """Validate a raw explorer document, raising SchemaViolation on mismatch"""
        return _decode(cls, "account", data, address)


def _decode(model, entity: str, data: Any, identifier: Any):
    try:
        return model.model_validate(data)
    except ValidationError as e:
        raise SchemaViolation(entity, identifier, e.errors()) from e
