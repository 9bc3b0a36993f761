"""
Representative atom selection for residue arrays

Each aligned structure is reduced to one atom per residue, following CAPRI
conventions for backbone representatives:
- Proteins: Cα atom
- DNA/RNA: P (phosphate) atom, or C3' when the phosphate is missing

The resulting atom arrays are the residue coordinates that block indices of
a multiple alignment refer to.
"""

import logging
from dataclasses import dataclass

import gemmi
import numpy as np

from .residues import NUCLEIC_ACID_MAP, STANDARD_AA_CODES, lookup_one_letter_code

logger = logging.getLogger(__name__)


@dataclass(eq=False)
class RepresentativeAtom:
    """One residue of an aligned structure, reduced to its representative atom"""

    chain_id: str
    residue_name: str
    seq_num: int
    icode: str
    atom_name: str
    coord: np.ndarray

    @property
    def residue_id(self) -> str:
        """Residue label such as ``A:42`` or ``A:42B`` with an insertion code."""
        icode = self.icode.strip()
        return f"{self.chain_id}:{self.seq_num}{icode}"


def is_protein_residue(residue: gemmi.Residue) -> bool:
    """Check if residue is an amino acid, including modified ones with a known code."""
    if residue.name in STANDARD_AA_CODES:
        return True
    if residue.name in NUCLEIC_ACID_MAP or lookup_one_letter_code(residue.name) is None:
        return False
    # Modified amino acids (e.g. MSE) still carry a Cα
    return any(atom.name == "CA" for atom in residue)


def is_nucleic_acid_residue(residue: gemmi.Residue) -> bool:
    """Check if residue is a DNA or RNA nucleotide."""
    return residue.name in NUCLEIC_ACID_MAP


def get_representative_atom(residue: gemmi.Residue) -> gemmi.Atom | None:
    """
    Select the representative atom of a residue.

    Args:
        residue: GEMMI residue

    Returns:
        The Cα (protein) or P/C3' (nucleic acid) atom, or None if the residue
        is neither or lacks the atom
    """
    if is_nucleic_acid_residue(residue):
        atoms = {atom.name: atom for atom in residue}
        # Fallback to C3' (sugar) if no phosphate (terminal residues)
        return atoms.get("P", atoms.get("C3'"))

    if is_protein_residue(residue):
        for atom in residue:
            if atom.name == "CA":
                return atom

    return None


def build_atom_array(
    structure: gemmi.Structure, chain_id: str | None = None
) -> list[RepresentativeAtom]:
    """
    Build the residue array of a structure from its first model.

    Args:
        structure: GEMMI structure
        chain_id: Restrict to a single chain (default: all chains in order)

    Returns:
        List of RepresentativeAtom in chain and residue order
    """
    atom_array = []
    skipped = 0
    model = structure[0]

    for chain in model:
        if chain_id is not None and chain.name != chain_id:
            continue
        for residue in chain:
            atom = get_representative_atom(residue)
            if atom is None:
                skipped += 1
                continue
            icode = residue.seqid.icode if residue.seqid.icode else " "
            atom_array.append(
                RepresentativeAtom(
                    chain_id=chain.name,
                    residue_name=residue.name,
                    seq_num=residue.seqid.num,
                    icode=icode,
                    atom_name=atom.name,
                    coord=np.array([atom.pos.x, atom.pos.y, atom.pos.z]),
                )
            )

    if chain_id is not None and not atom_array:
        logger.warning("No residues found for chain %s", chain_id)
    logger.debug("Built atom array of %d residues (%d skipped)", len(atom_array), skipped)
    return atom_array
