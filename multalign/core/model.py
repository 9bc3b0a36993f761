"""
Multiple structure alignment model

A MultipleAlignment holds one residue array per structure and an ordered
list of Blocks. Each Block stores, per structure row, the residue-array
index aligned at every block column (None for a gap).
"""

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field

import gemmi

from .atoms import RepresentativeAtom, build_atom_array

logger = logging.getLogger(__name__)


class InconsistentModelError(ValueError):
    """Alignment model whose blocks do not match its structures."""


@dataclass
class Block:
    """
    Aligned residue indices for a contiguous span of alignment columns.

    Attributes:
        align_res: One row per structure; each row lists the residue-array
            index at every block column, or None for a gap
    """

    align_res: list[list[int | None]]

    @property
    def size(self) -> int:
        """Number of structure rows."""
        return len(self.align_res)

    @property
    def length(self) -> int:
        """Number of block columns."""
        return len(self.align_res[0]) if self.align_res else 0

    @property
    def core_length(self) -> int:
        """Number of columns without a gap in any row."""
        return sum(1 for column in zip(*self.align_res) if None not in column)

    def residue_index(self, structure: int, position: int) -> int | None:
        return self.align_res[structure][position]


@dataclass
class MultipleAlignment:
    """
    Blocks of aligned residues over a set of structures.

    Attributes:
        blocks: Ordered alignment blocks
        atom_arrays: One residue array per structure, indexed by block entries
        names: Display name per structure
    """

    blocks: list[Block]
    atom_arrays: list[Sequence]
    names: list[str] = field(default_factory=list)

    def __post_init__(self) -> None:
        if not self.names:
            self.names = [f"structure_{i + 1}" for i in range(len(self.atom_arrays))]
        elif len(self.names) != len(self.atom_arrays):
            raise InconsistentModelError(
                f"Got {len(self.names)} names for {len(self.atom_arrays)} structures"
            )

    @property
    def size(self) -> int:
        """Number of aligned structures."""
        return len(self.atom_arrays)

    @property
    def length(self) -> int:
        """Total number of block columns across all blocks."""
        return sum(block.length for block in self.blocks)

    @property
    def core_length(self) -> int:
        """Total number of gap-free block columns."""
        return sum(block.core_length for block in self.blocks)

    def check_block(self, block_index: int) -> Block:
        """
        Return a block after checking its shape against the alignment.

        Raises:
            InconsistentModelError: If the block row count differs from the
                number of structures or its rows have different lengths
        """
        block = self.blocks[block_index]
        if block.size != self.size:
            raise InconsistentModelError(
                f"Block {block_index} has {block.size} rows, alignment has {self.size} structures"
            )
        lengths = {len(row) for row in block.align_res}
        if len(lengths) > 1:
            raise InconsistentModelError(
                f"Block {block_index} rows have different lengths: {sorted(lengths)}"
            )
        return block

    def get_atom(self, structure: int, residue_index: int):
        """
        Return the residue-array element of a structure.

        Raises:
            InconsistentModelError: If the index is outside the residue array
        """
        atoms = self.atom_arrays[structure]
        if not 0 <= residue_index < len(atoms):
            raise InconsistentModelError(
                f"Residue index {residue_index} out of range for structure {structure} "
                f"with {len(atoms)} residues"
            )
        return atoms[residue_index]

    def validate(self) -> None:
        """Check every block shape and every residue index."""
        for b in range(len(self.blocks)):
            block = self.check_block(b)
            for structure, row in enumerate(block.align_res):
                for residue_index in row:
                    if residue_index is not None:
                        self.get_atom(structure, residue_index)

    @classmethod
    def from_structures(
        cls,
        structures: Sequence[gemmi.Structure],
        blocks: list[Block],
        names: list[str] | None = None,
        chain_ids: Sequence[str | None] | None = None,
    ) -> "MultipleAlignment":
        """
        Build an alignment whose residue arrays come from GEMMI structures.

        Args:
            structures: One GEMMI structure per alignment row
            blocks: Alignment blocks indexing the residue arrays
            names: Display names (default: structure names)
            chain_ids: Optional chain per structure to restrict residue arrays

        Returns:
            A validated MultipleAlignment
        """
        if chain_ids is None:
            chain_ids = [None] * len(structures)
        if len(chain_ids) != len(structures):
            raise InconsistentModelError(
                f"Got {len(chain_ids)} chain selections for {len(structures)} structures"
            )

        atom_arrays: list[list[RepresentativeAtom]] = [
            build_atom_array(structure, chain_id)
            for structure, chain_id in zip(structures, chain_ids, strict=True)
        ]
        if names is None:
            names = [structure.name for structure in structures]

        alignment = cls(blocks=blocks, atom_arrays=atom_arrays, names=list(names))
        alignment.validate()
        logger.info(
            "Built alignment of %d structures, %d blocks, %d columns",
            alignment.size,
            len(alignment.blocks),
            alignment.length,
        )
        return alignment
