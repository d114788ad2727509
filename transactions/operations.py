"""
TopShot Transaction Generator - Operation Requests

Typed parameter sets, one per supported transaction. Values are stored as
given (apart from normalising sequences, addresses and records); range and
emptiness checks happen when the request is rendered.
"""

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping, Tuple, Union

from cadence.values import Address


AddressLike = Union[Address, str, bytes]


@dataclass(frozen=True)
class OperationRequest:
    """Base class for all operation requests."""

    def _coerce_address(self, name: str):
        object.__setattr__(self, name, Address.coerce(getattr(self, name)))

    def _freeze_sequence(self, name: str):
        object.__setattr__(self, name, tuple(getattr(self, name)))


@dataclass(frozen=True)
class MintSingle(OperationRequest):
    """Mint one moment from a set/play combination into the recipient's collection."""
    set_id: int
    play_id: int
    recipient: AddressLike

    def __post_init__(self):
        self._coerce_address("recipient")


@dataclass(frozen=True)
class MintBatch(OperationRequest):
    """Mint several moments of the same set/play combination."""
    set_id: int
    play_id: int
    quantity: int
    recipient: AddressLike

    def __post_init__(self):
        self._coerce_address("recipient")


@dataclass(frozen=True)
class AddItemToGrouping(OperationRequest):
    """Add a play to a set so moments can be minted from the combination."""
    set_id: int
    item_id: int


@dataclass(frozen=True)
class AddItemsToGrouping(OperationRequest):
    """Add several plays to a set, in order."""
    set_id: int
    item_ids: Tuple[int, ...]

    def __post_init__(self):
        self._freeze_sequence("item_ids")


@dataclass(frozen=True)
class CreateMetadataRecord(OperationRequest):
    """Create a new play from a metadata record."""
    fields: Mapping[str, Union[str, int]]

    def __post_init__(self):
        object.__setattr__(self, "fields", MappingProxyType(dict(self.fields)))

    def __hash__(self):
        return hash(frozenset(self.fields.items()))


@dataclass(frozen=True)
class CreateGrouping(OperationRequest):
    """Create a new set with the given name."""
    name: str


@dataclass(frozen=True)
class FulfillBundle(OperationRequest):
    """Withdraw moments from the signer's collection and deposit them into the recipient's."""
    recipient: AddressLike
    item_ids: Tuple[int, ...]

    def __post_init__(self):
        self._coerce_address("recipient")
        self._freeze_sequence("item_ids")


@dataclass(frozen=True)
class TransferAdminCapability(OperationRequest):
    """Move the Admin resource into the admin receiver contract at grantee_address."""
    grantee_address: AddressLike

    def __post_init__(self):
        self._coerce_address("grantee_address")
