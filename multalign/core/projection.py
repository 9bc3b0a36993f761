"""
Sequence alignment rendering of multiple structure alignments

Blocks are concatenated in order, so sequences may not be sequential. Gaps
between blocks are omitted, gaps within blocks are represented by '-', and
consecutive blocks are separated by a gap in every row, meaning something
unaligned lies between them.

The rendering comes with a column map from each sequence alignment column to
its global block position (the 0-based index among all block columns), or
UNALIGNED for separator and insertion columns. The map links the sequence
alignment back to the structural alignment.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass

from .model import Block, InconsistentModelError, MultipleAlignment
from .residues import one_letter_code

logger = logging.getLogger(__name__)

# Column map value for sequence columns without an aligned block position
UNALIGNED = -1

GAP_CHAR = "-"


@dataclass
class SequenceAlignment:
    """Rendered sequence alignment and its column map"""

    sequences: list[str]
    column_map: list[int]  # sequence column -> global block position or UNALIGNED

    def __len__(self) -> int:
        return len(self.column_map)


def get_sequence_alignment(
    alignment: MultipleAlignment,
    translator: Callable[..., str] | None = None,
) -> SequenceAlignment:
    """
    Calculate the sequence alignment strings for all blocks in an alignment.

    Residues that lie between two aligned positions of the same block row but
    are not part of the alignment (insertions) are emitted in extra UNALIGNED
    columns, with a gap in every other row, before the aligned column itself.

    Args:
        alignment: Multiple structure alignment
        translator: Callable mapping a residue-array element to its one-letter
            code (default: placeholder 'X' for unknown residues)

    Returns:
        SequenceAlignment with one string per structure and the column map

    Raises:
        InconsistentModelError: If a block does not match the alignment or a
            residue index is invalid
        ValueError: If the translator does not return a single character
    """
    if translator is None:
        translator = one_letter_code

    size = alignment.size
    rows: list[list[str]] = [[] for _ in range(size)]
    column_map: list[int] = []
    global_pos = -1

    def code(structure: int, residue_index: int) -> str:
        letter = translator(alignment.get_atom(structure, residue_index))
        if not isinstance(letter, str) or len(letter) != 1:
            raise ValueError(
                f"Translator returned {letter!r} for residue {residue_index} of "
                f"structure {structure}, expected a single character"
            )
        return letter

    for b in range(len(alignment.blocks)):
        block = alignment.check_block(b)
        if b > 0:
            for row in rows:
                row.append(GAP_CHAR)
            column_map.append(UNALIGNED)

        # Last residue index emitted per structure in this block
        previous_pos = [-1] * size

        for pos in range(block.length):
            global_pos += 1
            residues = [block.residue_index(s, pos) for s in range(size)]

            while True:
                behind = []
                for s, residue in enumerate(residues):
                    if residue is None or previous_pos[s] == -1:
                        continue
                    if residue <= previous_pos[s]:
                        raise InconsistentModelError(
                            f"Residue index {residue} of structure {s} does not follow "
                            f"{previous_pos[s]} in block {b}"
                        )
                    if residue != previous_pos[s] + 1:
                        behind.append(s)

                if not behind:
                    break

                # Catch up one unaligned residue in every row that is behind
                for s in range(size):
                    if s in behind:
                        previous_pos[s] += 1
                        rows[s].append(code(s, previous_pos[s]))
                    else:
                        rows[s].append(GAP_CHAR)
                column_map.append(UNALIGNED)

            for s, residue in enumerate(residues):
                if residue is None:
                    rows[s].append(GAP_CHAR)
                else:
                    rows[s].append(code(s, residue))
                    previous_pos[s] = residue
            column_map.append(global_pos)

    insertions = column_map.count(UNALIGNED) - max(len(alignment.blocks) - 1, 0)
    logger.debug(
        "Rendered %d columns for %d block positions (%d insertion columns)",
        len(column_map),
        global_pos + 1,
        insertions,
    )
    return SequenceAlignment(sequences=["".join(row) for row in rows], column_map=column_map)


def get_sequence_strings(
    alignment: MultipleAlignment,
    translator: Callable[..., str] | None = None,
) -> list[str]:
    """Sequence alignment strings only, without the column map."""
    return get_sequence_alignment(alignment, translator).sequences


def _aligned_position(column_map: list[int], position: int) -> int:
    if not 0 <= position < len(column_map):
        raise IndexError(
            f"Alignment position {position} out of range for {len(column_map)} columns"
        )
    global_pos = column_map[position]
    if global_pos < 0 and global_pos != UNALIGNED:
        raise InconsistentModelError(
            f"Invalid block position {global_pos} at alignment position {position}"
        )
    return global_pos


def _find_block(alignment: MultipleAlignment, global_pos: int) -> tuple[int, Block, int]:
    """Locate a global block position as (block index, block, local column)."""
    total = 0
    for b in range(len(alignment.blocks)):
        block = alignment.check_block(b)
        if total + block.length <= global_pos:
            total += block.length
            continue
        return b, block, global_pos - total
    raise InconsistentModelError(
        f"Block position {global_pos} beyond alignment length {total}"
    )


def get_atom_for_alignment_position(
    alignment: MultipleAlignment,
    column_map: list[int],
    structure: int,
    position: int,
):
    """
    Return the residue of a structure aligned at a sequence alignment column.

    Args:
        alignment: The alignment the sequence alignment was rendered from
        column_map: Column map from get_sequence_alignment
        structure: Structure index (row)
        position: Sequence alignment column

    Returns:
        The residue-array element, or None for a gap or an unaligned column

    Raises:
        IndexError: If the structure or the column is out of range
        InconsistentModelError: If the column map does not fit the alignment or
            a block does not match it
    """
    global_pos = _aligned_position(column_map, position)
    if not 0 <= structure < alignment.size:
        raise IndexError(
            f"Structure {structure} out of range for {alignment.size} structures"
        )
    if global_pos == UNALIGNED:
        return None

    _b, block, local_pos = _find_block(alignment, global_pos)
    residue = block.residue_index(structure, local_pos)
    if residue is None:
        return None
    return alignment.get_atom(structure, residue)


def get_block_for_alignment_position(
    alignment: MultipleAlignment,
    column_map: list[int],
    position: int,
) -> int | None:
    """
    Return the block index of a sequence alignment column.

    Raises:
        IndexError: If the column is out of range
        InconsistentModelError: If the column map does not fit the alignment or
            a block does not match it
    """
    global_pos = _aligned_position(column_map, position)
    if global_pos == UNALIGNED:
        return None
    b, _block, _local_pos = _find_block(alignment, global_pos)
    return b
