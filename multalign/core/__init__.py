"""Core modules for multiple structure alignment projection."""

from multalign.core.atoms import RepresentativeAtom, build_atom_array
from multalign.core.io import get_structure, load_blocks, validate_file
from multalign.core.model import Block, InconsistentModelError, MultipleAlignment
from multalign.core.projection import (
    UNALIGNED,
    SequenceAlignment,
    get_atom_for_alignment_position,
    get_block_for_alignment_position,
    get_sequence_alignment,
    get_sequence_strings,
)
from multalign.core.residues import ResidueCodeTranslator, UnknownResidueError, one_letter_code

__all__ = [
    "UNALIGNED",
    "Block",
    "InconsistentModelError",
    "MultipleAlignment",
    "RepresentativeAtom",
    "ResidueCodeTranslator",
    "SequenceAlignment",
    "UnknownResidueError",
    "build_atom_array",
    "get_atom_for_alignment_position",
    "get_block_for_alignment_position",
    "get_sequence_alignment",
    "get_sequence_strings",
    "get_structure",
    "load_blocks",
    "one_letter_code",
    "validate_file",
]
