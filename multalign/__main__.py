#!/usr/bin/env python3

"""Entry point for multalign"""

import logging
import sys

from multalign.cli import arg_parser, setup_logging
from multalign.core.io import get_structure, load_blocks
from multalign.core.model import InconsistentModelError, MultipleAlignment
from multalign.core.projection import (
    get_atom_for_alignment_position,
    get_block_for_alignment_position,
    get_sequence_alignment,
)
from multalign.core.residues import ResidueCodeTranslator, UnknownResidueError
from multalign.export import alignment_table, format_alignment, save_to_csv, write_fasta

logger = logging.getLogger("multalign")


def report_column(alignment: MultipleAlignment, column_map: list[int], column: int) -> None:
    """Print the block and aligned residues of one sequence alignment column."""
    block = get_block_for_alignment_position(alignment, column_map, column)
    print(f"\n=== COLUMN {column} ===")
    print(f"Block: {'unaligned' if block is None else block}")
    for s, name in enumerate(alignment.names):
        atom = get_atom_for_alignment_position(alignment, column_map, s, column)
        if atom is None:
            print(f"  {name}: -")
        else:
            print(f"  {name}: {atom.residue_name} {atom.residue_id} ({atom.atom_name})")


def main(argv: list[str] | None = None) -> int:
    """Main entry point for alignment rendering."""
    args = arg_parser(argv)
    setup_logging(args.verbose)

    structures = []
    for path in args.structures:
        structure = get_structure(path)
        if structure is None:
            logger.error("Could not load structure %s", path)
            return 1
        structures.append(structure)

    translator = ResidueCodeTranslator(strict=args.strict_codes, placeholder=args.placeholder)

    try:
        blocks = load_blocks(args.blocks)
        alignment = MultipleAlignment.from_structures(
            structures,
            blocks,
            names=[path.stem for path in args.structures],
            chain_ids=args.chains,
        )
        result = get_sequence_alignment(alignment, translator)
    except (InconsistentModelError, UnknownResidueError) as e:
        logger.error("Cannot render alignment: %s", e)
        return 1

    print(format_alignment(alignment, result, width=args.width))

    print("\n=== ALIGNMENT INFORMATION ===")
    print(f"Structures:        {alignment.size}")
    print(f"Blocks:            {len(alignment.blocks)}")
    print(f"Block positions:   {alignment.length}")
    print(f"Core positions:    {alignment.core_length}")
    print(f"Sequence columns:  {len(result)}")

    for column in args.columns or []:
        try:
            report_column(alignment, result.column_map, column)
        except IndexError as e:
            logger.error("%s", e)
            return 1

    if args.fasta:
        write_fasta(alignment, result, args.fasta)
        print(f"\nSequence alignment saved to: {args.fasta}")

    if args.csv:
        save_to_csv(alignment_table(alignment, result), args.csv)
        print(f"Alignment table saved to: {args.csv}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
