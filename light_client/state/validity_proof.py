from __future__ import annotations
import typing
from dataclasses import dataclass, field
from ..errors import InvalidLengthError
from .bn254 import BN254
from .tree_info import TreeInfo


@dataclass(frozen=True)
class CompressedProof:
    """Groth16 proof in compressed form."""

    a: bytes
    b: bytes
    c: bytes

    def __post_init__(self) -> None:
        for name, expected in (("a", 32), ("b", 64), ("c", 32)):
            value = getattr(self, name)
            if len(value) != expected:
                raise InvalidLengthError(f"proof.{name}", expected, len(value))


@dataclass(frozen=True)
class ValidityProofWithContext:
    """Proof plus the per-account context an indexer returns alongside it."""

    compressed_proof: typing.Optional[CompressedProof]
    roots: list[BN254] = field(default_factory=list)
    root_indices: list[int] = field(default_factory=list)
    leaf_indices: list[int] = field(default_factory=list)
    leaves: list[BN254] = field(default_factory=list)
    tree_infos: list[TreeInfo] = field(default_factory=list)
    prove_by_indices: list[bool] = field(default_factory=list)
