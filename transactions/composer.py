"""
TopShot Transaction Generator - Script Composer

This module binds operation requests to their transaction templates. Every
slot value is rendered through the Cadence value serializer before it is
substituted, and the finished transaction is returned as UTF-8 bytes.
"""

import logging
from typing import Callable, Dict, Iterable, Mapping, Optional, Union

from cadence.values import (
    Address,
    render_address,
    render_string_literal,
    render_structured_record,
    render_uint,
    render_uint_sequence,
)
from transactions.operations import (
    OperationRequest,
    MintSingle,
    MintBatch,
    AddItemToGrouping,
    AddItemsToGrouping,
    CreateMetadataRecord,
    CreateGrouping,
    FulfillBundle,
    TransferAdminCapability,
)
from transactions.templates import (
    SlotKind,
    TemplateRegistry,
    TemplateSlot,
    get_template_registry,
)


AddressLike = Union[Address, str, bytes]


# Slot kind -> serializer call
SLOT_RENDERERS: Dict[SlotKind, Callable[[object, str], str]] = {
    SlotKind.ADDRESS: lambda value, field: render_address(value),
    SlotKind.UINT32: lambda value, field: render_uint(32, value, field),
    SlotKind.UINT64: lambda value, field: render_uint(64, value, field),
    SlotKind.UINT32_ARRAY: lambda value, field: render_uint_sequence(32, value, True, field),
    SlotKind.UINT64_ARRAY: lambda value, field: render_uint_sequence(64, value, True, field),
    SlotKind.STRING: render_string_literal,
    SlotKind.RECORD: render_structured_record,
}


class ScriptComposer:
    """
    Composes Cadence transaction scripts from operation requests.

    The composer holds no state besides its template registry, so a single
    instance can be shared freely.
    """

    def __init__(self, registry: Optional[TemplateRegistry] = None):
        """
        Initialize script composer.

        Args:
            registry: Template registry to use (defaults to the global registry)
        """
        self.registry = registry or get_template_registry()
        self.logger = logging.getLogger(__name__)

    def render_slots(
        self,
        operation: OperationRequest,
        contract_address: Address
    ) -> Dict[str, str]:
        """Render every slot of the operation's template, in declaration order."""
        template = self.registry.template_for(operation)

        literals = {}
        for slot in template.slots:
            literals[slot.name] = self._render_slot(slot, operation, contract_address)
        return literals

    def _render_slot(
        self,
        slot: TemplateSlot,
        operation: OperationRequest,
        contract_address: Address
    ) -> str:
        value = contract_address if slot.source is None else getattr(operation, slot.source)
        return SLOT_RENDERERS[slot.kind](value, slot.source or slot.name)

    def compose(self, operation: OperationRequest, contract_address: AddressLike) -> bytes:
        """
        Compose a complete transaction script.

        Args:
            operation: Operation request to render
            contract_address: TopShot contract deployment address

        Returns:
            Transaction source as UTF-8 bytes

        Raises:
            UnsupportedOperationError: If no template handles the request
            EmptySequenceError: If a required sequence is empty
            ValueOutOfRangeError: If an integer does not fit its width
            SerializationError: If a value cannot be rendered
        """
        contract_address = Address.coerce(contract_address)
        template = self.registry.template_for(operation)
        self.logger.debug(f"Composing {template.template_type.value} (v{template.version})")

        literals = self.render_slots(operation, contract_address)
        script = template.fill(literals).encode("utf-8")

        self.logger.debug(f"Composed {template.template_type.value}: {len(script)} bytes")
        return script


# Shared composer instance
_composer = None


def get_composer() -> ScriptComposer:
    """Get the shared script composer."""
    global _composer
    if _composer is None:
        _composer = ScriptComposer()
    return _composer


def compose(operation: OperationRequest, contract_address: AddressLike) -> bytes:
    """Compose a transaction script with the shared composer."""
    return get_composer().compose(operation, contract_address)


# Convenience functions

def generate_mint_moment_script(
    topshot_address: AddressLike,
    recipient: AddressLike,
    set_id: int,
    play_id: int
) -> bytes:
    """Generate a script that mints one moment into the recipient's collection."""
    return compose(MintSingle(set_id=set_id, play_id=play_id, recipient=recipient), topshot_address)


def generate_batch_mint_moment_script(
    topshot_address: AddressLike,
    recipient: AddressLike,
    set_id: int,
    play_id: int,
    quantity: int
) -> bytes:
    """Generate a script that mints several moments of one set/play combination."""
    operation = MintBatch(set_id=set_id, play_id=play_id, quantity=quantity, recipient=recipient)
    return compose(operation, topshot_address)


def generate_add_play_to_set_script(topshot_address: AddressLike, set_id: int, play_id: int) -> bytes:
    """Generate a script that adds a play to a set."""
    return compose(AddItemToGrouping(set_id=set_id, item_id=play_id), topshot_address)


def generate_add_plays_to_set_script(
    topshot_address: AddressLike,
    set_id: int,
    play_ids: Iterable[int]
) -> bytes:
    """Generate a script that adds several plays to a set."""
    return compose(AddItemsToGrouping(set_id=set_id, item_ids=tuple(play_ids)), topshot_address)


def generate_create_play_script(
    topshot_address: AddressLike,
    metadata: Mapping[str, Union[str, int]]
) -> bytes:
    """Generate a script that creates a play from a metadata record."""
    return compose(CreateMetadataRecord(fields=metadata), topshot_address)


def generate_create_set_script(topshot_address: AddressLike, name: str) -> bytes:
    """Generate a script that creates a set."""
    return compose(CreateGrouping(name=name), topshot_address)


def generate_fulfill_pack_script(
    topshot_address: AddressLike,
    recipient: AddressLike,
    moment_ids: Iterable[int]
) -> bytes:
    """Generate a script that transfers a pack of moments to the recipient."""
    return compose(FulfillBundle(recipient=recipient, item_ids=tuple(moment_ids)), topshot_address)


def generate_transfer_admin_script(
    topshot_address: AddressLike,
    admin_receiver_address: AddressLike
) -> bytes:
    """Generate a script that moves the Admin resource into the admin receiver contract."""
    return compose(TransferAdminCapability(grantee_address=admin_receiver_address), topshot_address)
