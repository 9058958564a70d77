from __future__ import annotations
import typing
from dataclasses import dataclass
from enum import Enum
from solders.pubkey import Pubkey


class TreeType(Enum):
    STATE_V1 = 1
    ADDRESS_V1 = 2
    STATE_V2 = 3
    ADDRESS_V2 = 4


@dataclass(frozen=True)
class TreeInfo:
    """Accounts backing one state or address tree.

    ``next_tree_info`` is set while the tree is being rolled over; new output
    state then goes to the next tree.
    """

    tree: Pubkey
    queue: Pubkey
    tree_type: TreeType
    cpi_context: typing.Optional[Pubkey] = None
    next_tree_info: typing.Optional["TreeInfo"] = None

    @property
    def is_v2(self) -> bool:
        return self.tree_type in (TreeType.STATE_V2, TreeType.ADDRESS_V2)

    @property
    def is_address_tree(self) -> bool:
        return self.tree_type in (TreeType.ADDRESS_V1, TreeType.ADDRESS_V2)


AddressTreeInfo = TreeInfo
