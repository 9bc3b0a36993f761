"""
Export of rendered sequence alignments.

Provides a per-column table linking every sequence alignment column to its
block position, block and aligned residues, plus FASTA and plain-text output.

Example:
    >>> result = get_sequence_alignment(alignment)
    >>> frame = alignment_table(alignment, result)
    >>> save_to_csv(frame, Path("alignment_columns.csv"))
    >>> write_fasta(alignment, result, Path("alignment.fasta"))
"""

import logging
from pathlib import Path

import pandas as pd
from Bio import SeqIO
from Bio.Seq import Seq
from Bio.SeqRecord import SeqRecord

from multalign.core.model import MultipleAlignment
from multalign.core.projection import (
    UNALIGNED,
    SequenceAlignment,
    get_atom_for_alignment_position,
    get_block_for_alignment_position,
)

logger = logging.getLogger(__name__)


def _residue_label(atom) -> str:
    if atom is None:
        return ""
    return getattr(atom, "residue_id", str(atom))


def alignment_table(alignment: MultipleAlignment, result: SequenceAlignment) -> pd.DataFrame:
    """
    Tabulate a rendered alignment, one row per sequence alignment column.

    Columns:
        column: Sequence alignment column index
        block_position: Global block position, or UNALIGNED (-1)
        block: Block index, or <NA> for unaligned columns
        <name>: Character of each structure
        <name>_residue: Residue label of each structure, empty for gaps and
            unaligned columns
    """
    records = []
    for column, block_position in enumerate(result.column_map):
        block = get_block_for_alignment_position(alignment, result.column_map, column)
        record = {
            "column": column,
            "block_position": block_position,
            "block": block,
        }
        for s, name in enumerate(alignment.names):
            atom = get_atom_for_alignment_position(alignment, result.column_map, s, column)
            record[name] = result.sequences[s][column]
            record[f"{name}_residue"] = _residue_label(atom)
        records.append(record)

    columns = ["column", "block_position", "block"]
    for name in alignment.names:
        columns.extend([name, f"{name}_residue"])
    df = pd.DataFrame(records, columns=columns)
    df["block"] = df["block"].astype("Int64")
    return df


def save_to_csv(frame: pd.DataFrame, output_path: Path) -> None:
    """
    Export an alignment table to CSV, creating parent directories.

    Raises:
        OSError: If file cannot be written
    """
    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        frame.to_csv(output_path, index=False)
    except OSError as e:
        raise OSError(f"Failed to save CSV to {output_path}: {e}") from e
    logger.info("Saved %d alignment columns to %s", len(frame), output_path)


def write_fasta(alignment: MultipleAlignment, result: SequenceAlignment, output_path: Path) -> int:
    """Write the rendered sequences as aligned FASTA; returns the record count."""
    records = [
        SeqRecord(Seq(sequence), id=name, description="")
        for name, sequence in zip(alignment.names, result.sequences, strict=True)
    ]
    output_path.parent.mkdir(parents=True, exist_ok=True)
    count = SeqIO.write(records, str(output_path), "fasta")
    logger.info("Wrote %d sequences to %s", count, output_path)
    return count


def format_alignment(
    alignment: MultipleAlignment, result: SequenceAlignment, width: int = 60
) -> str:
    """
    Format the rendered alignment as wrapped text blocks.

    Each chunk lists the structures by name and ends with a marker line where
    '*' flags aligned columns and ' ' flags block separators and insertions.
    """
    if width <= 0:
        raise ValueError(f"Width must be positive, got {width}")

    label_width = max((len(name) for name in alignment.names), default=0)
    marker = "".join(" " if pos == UNALIGNED else "*" for pos in result.column_map)

    chunks = []
    for start in range(0, len(result), width):
        lines = [
            f"{name.ljust(label_width)}  {sequence[start:start + width]}"
            for name, sequence in zip(alignment.names, result.sequences, strict=True)
        ]
        lines.append(f"{' ' * label_width}  {marker[start:start + width]}".rstrip())
        chunks.append("\n".join(lines))
    return "\n\n".join(chunks)
