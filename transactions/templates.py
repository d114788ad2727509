"""
TopShot Transaction Generator - Transaction Templates

This module provides the fixed catalog of Cadence transaction templates, one
per supported operation. Templates are plain data: Cadence source with
``${slot}`` placeholders, the ordered slot declarations that fill them, the
contracts they import and the privileged storage they touch.
"""

from dataclasses import dataclass, field
from enum import Enum
from string import Template
from textwrap import dedent
from typing import Any, Dict, List, Mapping, Optional, Tuple, Type

from cadence.exceptions import UnsupportedOperationError
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


class TemplateType(Enum):
    """Types of transaction templates."""
    MINT_MOMENT = "mint_moment"
    BATCH_MINT_MOMENT = "batch_mint_moment"
    ADD_PLAY_TO_SET = "add_play_to_set"
    ADD_PLAYS_TO_SET = "add_plays_to_set"
    CREATE_PLAY = "create_play"
    CREATE_SET = "create_set"
    FULFILL_PACK = "fulfill_pack"
    TRANSFER_ADMIN = "transfer_admin"


class SlotKind(Enum):
    """Literal kinds a template slot can hold."""
    ADDRESS = "address"
    UINT32 = "uint32"
    UINT64 = "uint64"
    UINT32_ARRAY = "[uint32]"
    UINT64_ARRAY = "[uint64]"
    STRING = "string"
    RECORD = "{string: string}"


@dataclass(frozen=True)
class TemplateSlot:
    """
    Substitution slot in a template.

    ``source`` names the request attribute that fills the slot; ``None``
    means the contract deployment address supplied to the composer.
    """
    name: str
    kind: SlotKind
    source: Optional[str] = None
    description: str = ""


@dataclass(frozen=True)
class ContractImport:
    """Contract imported by a template and the slot holding its address."""
    contract: str
    address_slot: str


def _placeholders(source: str) -> List[str]:
    names = []
    for match in Template.pattern.finditer(source):
        if match.group("invalid") is not None:
            raise ValueError(f"Invalid placeholder at offset {match.start('invalid')}")
        name = match.group("named") or match.group("braced")
        if name:
            names.append(name)
    return names


@dataclass(frozen=True)
class TransactionTemplate:
    """A Cadence transaction skeleton and its declared slots."""
    template_type: TemplateType
    operation: Type[OperationRequest]
    name: str
    description: str
    source: str
    slots: Tuple[TemplateSlot, ...]
    imports: Tuple[ContractImport, ...] = field(default_factory=tuple)
    storage_access: Tuple[str, ...] = field(default_factory=tuple)
    version: str = "1.0"

    def __post_init__(self):
        slot_names = [slot.name for slot in self.slots]
        if len(set(slot_names)) != len(slot_names):
            raise ValueError(f"{self.name}: duplicate slot names")

        used = _placeholders(self.source)
        if set(used) != set(slot_names):
            raise ValueError(
                f"{self.name}: placeholders {sorted(set(used))} do not match slots {sorted(slot_names)}"
            )

        kinds = {slot.name: slot.kind for slot in self.slots}
        for contract_import in self.imports:
            if kinds.get(contract_import.address_slot) != SlotKind.ADDRESS:
                raise ValueError(
                    f"{self.name}: import {contract_import.contract} needs an address slot"
                )

    def get_slot_names(self) -> List[str]:
        """Get slot names in declaration order."""
        return [slot.name for slot in self.slots]

    def fill(self, literals: Mapping[str, str]) -> str:
        """
        Substitute rendered literals into the template.

        Substitution is a single pass, so placeholder syntax inside a
        literal is never expanded.
        """
        missing = [name for name in self.get_slot_names() if name not in literals]
        if missing:
            raise KeyError(f"{self.name}: missing literals for slots {missing}")

        return Template(self.source).substitute(
            {name: literals[name] for name in self.get_slot_names()}
        )

    def to_dict(self) -> Dict[str, Any]:
        """Describe the template without its source."""
        return {
            "type": self.template_type.value,
            "name": self.name,
            "description": self.description,
            "operation": self.operation.__name__,
            "imports": [
                {"contract": i.contract, "address_slot": i.address_slot}
                for i in self.imports
            ],
            "slots": [
                {
                    "name": s.name,
                    "kind": s.kind.value,
                    "source": s.source or "contract_address",
                    "description": s.description,
                }
                for s in self.slots
            ],
            "storage_access": list(self.storage_access),
            "version": self.version,
        }


def _cadence(text: str) -> str:
    return dedent(text).strip("\n") + "\n"


TOPSHOT_IMPORT = ContractImport("TopShot", "topshot_address")
TOPSHOT_SLOT = TemplateSlot(
    "topshot_address", SlotKind.ADDRESS, description="TopShot contract deployment address"
)

ADMIN_STORAGE = "/storage/TopShotAdmin"
COLLECTION_STORAGE = "/storage/MomentCollection"
COLLECTION_PUBLIC = "/public/MomentCollection"


MINT_MOMENT_TEMPLATE = TransactionTemplate(
    template_type=TemplateType.MINT_MOMENT,
    operation=MintSingle,
    name="Mint Moment",
    description="Mint a new moment from a set/play combination and deposit it with the recipient",
    imports=(TOPSHOT_IMPORT,),
    slots=(
        TOPSHOT_SLOT,
        TemplateSlot("set_id", SlotKind.UINT32, "set_id", "Set to mint from"),
        TemplateSlot("play_id", SlotKind.UINT32, "play_id", "Play to mint"),
        TemplateSlot("recipient", SlotKind.ADDRESS, "recipient", "Account receiving the moment"),
    ),
    storage_access=(
        f"borrow &TopShot.Admin from {ADMIN_STORAGE}",
        f"capability &{{TopShot.MomentCollectionPublic}} at recipient {COLLECTION_PUBLIC}",
    ),
    source=_cadence("""
        import TopShot from 0x${topshot_address}

        transaction {
            let adminRef: &TopShot.Admin

            prepare(acct: AuthAccount) {
                self.adminRef = acct.borrow<&TopShot.Admin>(from: /storage/TopShotAdmin)!
            }

            execute {
                let setRef = self.adminRef.borrowSet(setID: ${set_id})

                // mint the moment
                let moment <- setRef.mintMoment(playID: ${play_id})

                // deposit it in the recipient's collection
                let recipient = getAccount(0x${recipient})
                let receiverRef = recipient.getCapability(/public/MomentCollection)!.borrow<&{TopShot.MomentCollectionPublic}>()!
                receiverRef.deposit(token: <-moment)
            }
        }
    """),
)


BATCH_MINT_MOMENT_TEMPLATE = TransactionTemplate(
    template_type=TemplateType.BATCH_MINT_MOMENT,
    operation=MintBatch,
    name="Batch Mint Moments",
    description="Mint several moments of one set/play combination and deposit them with the recipient",
    imports=(TOPSHOT_IMPORT,),
    slots=(
        TOPSHOT_SLOT,
        TemplateSlot("set_id", SlotKind.UINT32, "set_id", "Set to mint from"),
        TemplateSlot("play_id", SlotKind.UINT32, "play_id", "Play to mint"),
        TemplateSlot("quantity", SlotKind.UINT64, "quantity", "Number of moments to mint"),
        TemplateSlot("recipient", SlotKind.ADDRESS, "recipient", "Account receiving the moments"),
    ),
    storage_access=(
        f"borrow &TopShot.Admin from {ADMIN_STORAGE}",
        f"capability &{{TopShot.MomentCollectionPublic}} at recipient {COLLECTION_PUBLIC}",
    ),
    source=_cadence("""
        import TopShot from 0x${topshot_address}

        transaction {
            let adminRef: &TopShot.Admin

            prepare(acct: AuthAccount) {
                self.adminRef = acct.borrow<&TopShot.Admin>(from: /storage/TopShotAdmin)!
            }

            execute {
                let setRef = self.adminRef.borrowSet(setID: ${set_id})

                // mint the moments
                let collection <- setRef.batchMintMoment(playID: ${play_id}, quantity: ${quantity})

                // deposit them in the recipient's collection
                let recipient = getAccount(0x${recipient})
                let receiverRef = recipient.getCapability(/public/MomentCollection)!.borrow<&{TopShot.MomentCollectionPublic}>()!
                receiverRef.batchDeposit(tokens: <-collection)
            }
        }
    """),
)


ADD_PLAY_TO_SET_TEMPLATE = TransactionTemplate(
    template_type=TemplateType.ADD_PLAY_TO_SET,
    operation=AddItemToGrouping,
    name="Add Play To Set",
    description="Add a play to a set so moments can be minted from the combination",
    imports=(TOPSHOT_IMPORT,),
    slots=(
        TOPSHOT_SLOT,
        TemplateSlot("set_id", SlotKind.UINT32, "set_id", "Set receiving the play"),
        TemplateSlot("play_id", SlotKind.UINT32, "item_id", "Play to add"),
    ),
    storage_access=(f"borrow &TopShot.Admin from {ADMIN_STORAGE}",),
    source=_cadence("""
        import TopShot from 0x${topshot_address}

        transaction {

            prepare(acct: AuthAccount) {
                let admin = acct.borrow<&TopShot.Admin>(from: /storage/TopShotAdmin)!
                let setRef = admin.borrowSet(setID: ${set_id})
                setRef.addPlay(playID: ${play_id})
            }
        }
    """),
)


ADD_PLAYS_TO_SET_TEMPLATE = TransactionTemplate(
    template_type=TemplateType.ADD_PLAYS_TO_SET,
    operation=AddItemsToGrouping,
    name="Add Plays To Set",
    description="Add several plays to a set in the given order",
    imports=(TOPSHOT_IMPORT,),
    slots=(
        TOPSHOT_SLOT,
        TemplateSlot("set_id", SlotKind.UINT32, "set_id", "Set receiving the plays"),
        TemplateSlot("play_ids", SlotKind.UINT32_ARRAY, "item_ids", "Plays to add, at least one"),
    ),
    storage_access=(f"borrow &TopShot.Admin from {ADMIN_STORAGE}",),
    source=_cadence("""
        import TopShot from 0x${topshot_address}

        transaction {

            prepare(acct: AuthAccount) {
                let admin = acct.borrow<&TopShot.Admin>(from: /storage/TopShotAdmin)!
                let setRef = admin.borrowSet(setID: ${set_id})
                setRef.addPlays(playIDs: ${play_ids})
            }
        }
    """),
)


CREATE_PLAY_TEMPLATE = TransactionTemplate(
    template_type=TemplateType.CREATE_PLAY,
    operation=CreateMetadataRecord,
    name="Create Play",
    description="Create a new play initialized with a metadata record",
    imports=(TOPSHOT_IMPORT,),
    slots=(
        TOPSHOT_SLOT,
        TemplateSlot("metadata", SlotKind.RECORD, "fields", "Play metadata"),
    ),
    storage_access=(f"borrow &TopShot.Admin from {ADMIN_STORAGE}",),
    source=_cadence("""
        import TopShot from 0x${topshot_address}

        transaction {
            prepare(acct: AuthAccount) {
                let admin = acct.borrow<&TopShot.Admin>(from: /storage/TopShotAdmin)
                    ?? panic("No admin resource in storage")
                admin.createPlay(metadata: ${metadata})
            }
        }
    """),
)


CREATE_SET_TEMPLATE = TransactionTemplate(
    template_type=TemplateType.CREATE_SET,
    operation=CreateGrouping,
    name="Create Set",
    description="Create a new set with the given name",
    imports=(TOPSHOT_IMPORT,),
    slots=(
        TOPSHOT_SLOT,
        TemplateSlot("name", SlotKind.STRING, "name", "Set name"),
    ),
    storage_access=(f"borrow &TopShot.Admin from {ADMIN_STORAGE}",),
    source=_cadence("""
        import TopShot from 0x${topshot_address}

        transaction {
            prepare(acct: AuthAccount) {
                let admin = acct.borrow<&TopShot.Admin>(from: /storage/TopShotAdmin)!
                admin.createSet(name: ${name})
            }
        }
    """),
)


FULFILL_PACK_TEMPLATE = TransactionTemplate(
    template_type=TemplateType.FULFILL_PACK,
    operation=FulfillBundle,
    name="Fulfill Pack",
    description="Withdraw the listed moments from the signer and deposit them with the recipient",
    imports=(TOPSHOT_IMPORT,),
    slots=(
        TOPSHOT_SLOT,
        TemplateSlot("recipient", SlotKind.ADDRESS, "recipient", "Account receiving the pack"),
        TemplateSlot("moment_ids", SlotKind.UINT64_ARRAY, "item_ids", "Moments in withdrawal order"),
    ),
    storage_access=(
        f"borrow &TopShot.Collection from {COLLECTION_STORAGE}",
        f"capability &{{TopShot.MomentCollectionPublic}} at recipient {COLLECTION_PUBLIC}",
    ),
    source=_cadence("""
        import TopShot from 0x${topshot_address}

        transaction {
            prepare(acct: AuthAccount) {
                let recipient = getAccount(0x${recipient})
                let receiverRef = recipient.getCapability(/public/MomentCollection)!.borrow<&{TopShot.MomentCollectionPublic}>()!
                let momentIDs = ${moment_ids}
                let collection <- acct.borrow<&TopShot.Collection>(from: /storage/MomentCollection)!.batchWithdraw(ids: momentIDs)
                receiverRef.batchDeposit(tokens: <-collection)
            }
        }
    """),
)


TRANSFER_ADMIN_TEMPLATE = TransactionTemplate(
    template_type=TemplateType.TRANSFER_ADMIN,
    operation=TransferAdminCapability,
    name="Transfer Admin",
    description="Move the Admin resource into the TopshotAdminReceiver contract",
    imports=(
        TOPSHOT_IMPORT,
        ContractImport("TopshotAdminReceiver", "admin_receiver_address"),
    ),
    slots=(
        TOPSHOT_SLOT,
        TemplateSlot(
            "admin_receiver_address", SlotKind.ADDRESS, "grantee_address",
            "TopshotAdminReceiver contract deployment address"
        ),
    ),
    storage_access=(f"load @TopShot.Admin from {ADMIN_STORAGE}",),
    source=_cadence("""
        import TopShot from 0x${topshot_address}
        import TopshotAdminReceiver from 0x${admin_receiver_address}

        transaction {

            prepare(acct: AuthAccount) {
                let admin <- acct.load<@TopShot.Admin>(from: /storage/TopShotAdmin)
                    ?? panic("No topshot admin in storage")

                TopshotAdminReceiver.storeAdmin(newAdmin: <-admin)
            }
        }
    """),
)


DEFAULT_TEMPLATES = (
    MINT_MOMENT_TEMPLATE,
    BATCH_MINT_MOMENT_TEMPLATE,
    ADD_PLAY_TO_SET_TEMPLATE,
    ADD_PLAYS_TO_SET_TEMPLATE,
    CREATE_PLAY_TEMPLATE,
    CREATE_SET_TEMPLATE,
    FULFILL_PACK_TEMPLATE,
    TRANSFER_ADMIN_TEMPLATE,
)


class TemplateRegistry:
    """Registry of transaction templates keyed by type and operation."""

    def __init__(self, templates: Tuple[TransactionTemplate, ...] = DEFAULT_TEMPLATES):
        """Initialize template registry."""
        self.templates: Dict[TemplateType, TransactionTemplate] = {}
        self._by_operation: Dict[Type[OperationRequest], TransactionTemplate] = {}
        for template in templates:
            self._register_template(template)

    def _register_template(self, template: TransactionTemplate):
        if template.template_type in self.templates:
            raise ValueError(f"Duplicate template type: {template.template_type.value}")
        if template.operation in self._by_operation:
            raise ValueError(f"Duplicate template for operation: {template.operation.__name__}")
        self.templates[template.template_type] = template
        self._by_operation[template.operation] = template

    def get_template(self, template_type: TemplateType) -> Optional[TransactionTemplate]:
        """Get template by type."""
        return self.templates.get(template_type)

    def template_for(self, operation: OperationRequest) -> TransactionTemplate:
        """
        Get the template matching an operation request.

        Raises:
            UnsupportedOperationError: If no template handles the request type
        """
        template = self._by_operation.get(type(operation))
        if template is None:
            raise UnsupportedOperationError(operation)
        return template

    def list_templates(self) -> List[Dict[str, Any]]:
        """List all registered templates."""
        return [template.to_dict() for template in self.templates.values()]


# Global template registry instance
_template_registry = None


def get_template_registry() -> TemplateRegistry:
    """Get the global template registry."""
    global _template_registry
    if _template_registry is None:
        _template_registry = TemplateRegistry()
    return _template_registry


def get_template_info(template_type: TemplateType) -> Optional[Dict[str, Any]]:
    """Get detailed information about a template, including its source."""
    template = get_template_registry().get_template(template_type)
    if not template:
        return None

    info = template.to_dict()
    info["source"] = template.source
    return info
