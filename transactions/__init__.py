"""
TopShot Transaction Generator - Transactions

Operation requests, the transaction template catalog and the script composer.
"""

from .operations import (
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
from .templates import (
    TemplateType,
    SlotKind,
    TemplateSlot,
    ContractImport,
    TransactionTemplate,
    TemplateRegistry,
    get_template_registry,
    get_template_info,
)
from .composer import (
    ScriptComposer,
    compose,
    get_composer,
    generate_mint_moment_script,
    generate_batch_mint_moment_script,
    generate_add_play_to_set_script,
    generate_add_plays_to_set_script,
    generate_create_play_script,
    generate_create_set_script,
    generate_fulfill_pack_script,
    generate_transfer_admin_script,
)

__all__ = [
    # Operations
    'OperationRequest',
    'MintSingle',
    'MintBatch',
    'AddItemToGrouping',
    'AddItemsToGrouping',
    'CreateMetadataRecord',
    'CreateGrouping',
    'FulfillBundle',
    'TransferAdminCapability',

    # Templates
    'TemplateType',
    'SlotKind',
    'TemplateSlot',
    'ContractImport',
    'TransactionTemplate',
    'TemplateRegistry',
    'get_template_registry',
    'get_template_info',

    # Composer
    'ScriptComposer',
    'compose',
    'get_composer',
    'generate_mint_moment_script',
    'generate_batch_mint_moment_script',
    'generate_add_play_to_set_script',
    'generate_add_plays_to_set_script',
    'generate_create_play_script',
    'generate_create_set_script',
    'generate_fulfill_pack_script',
    'generate_transfer_admin_script',
]
