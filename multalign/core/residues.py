"""
Residue name to one-letter code translation
"""

import logging

from Bio.Data.PDBData import nucleic_letters_3to1_extended, protein_letters_3to1_extended

logger = logging.getLogger(__name__)

# Placeholder emitted for residues without a known one-letter code
UNKNOWN_RESIDUE_CODE = "X"

# Define DNA nucleotide mapping
DNA_NUCLEOTIDE_MAP = {
    "DA": "A",
    "A": "A",
    "DT": "T",
    "T": "T",
    "DG": "G",
    "G": "G",
    "DC": "C",
    "C": "C",
}

# RNA nucleotides
RNA_NUCLEOTIDE_MAP = {
    "A": "A",
    "U": "U",
    "G": "G",
    "C": "C",
    "ADE": "A",
    "URA": "U",
    "GUA": "G",
    "CYT": "C",
}

NUCLEIC_ACID_MAP = {**DNA_NUCLEOTIDE_MAP, **RNA_NUCLEOTIDE_MAP}

# Mapping from 3-letter to 1-letter codes
AA_THREE_TO_ONE = {
    "ALA": "A",
    "CYS": "C",
    "ASP": "D",
    "GLU": "E",
    "PHE": "F",
    "GLY": "G",
    "HIS": "H",
    "ILE": "I",
    "LYS": "K",
    "LEU": "L",
    "MET": "M",
    "ASN": "N",
    "PRO": "P",
    "GLN": "Q",
    "ARG": "R",
    "SER": "S",
    "THR": "T",
    "VAL": "V",
    "TRP": "W",
    "TYR": "Y",
}

STANDARD_AA_CODES = set(AA_THREE_TO_ONE)


class UnknownResidueError(ValueError):
    """Raised by a strict translator for a residue without a one-letter code."""


def _lookup_extended(name: str) -> str | None:
    """Look up modified residues in Biopython's PDB tables."""
    # Biopython pads some keys to three characters
    for key in (name, name.rjust(3), name.ljust(3)):
        if key in protein_letters_3to1_extended:
            return protein_letters_3to1_extended[key]
        if key in nucleic_letters_3to1_extended:
            return nucleic_letters_3to1_extended[key]
    return None


def lookup_one_letter_code(residue_name: str) -> str | None:
    """Return the one-letter code for a residue name, or None if unknown."""
    name = residue_name.strip().upper()
    if name in AA_THREE_TO_ONE:
        return AA_THREE_TO_ONE[name]
    if name in NUCLEIC_ACID_MAP:
        return NUCLEIC_ACID_MAP[name]
    return _lookup_extended(name)


class ResidueCodeTranslator:
    """
    Translate residues into one-letter codes.

    Accepts either a residue name or any object exposing a ``residue_name``
    attribute (such as a RepresentativeAtom).

    Args:
        strict: Raise UnknownResidueError for unknown residues instead of
            returning the placeholder
        placeholder: Single character used for unknown residues
    """

    def __init__(self, strict: bool = False, placeholder: str = UNKNOWN_RESIDUE_CODE) -> None:
        if len(placeholder) != 1:
            raise ValueError(f"Placeholder must be a single character, got {placeholder!r}")
        self.strict = strict
        self.placeholder = placeholder
        self._reported: set[str] = set()

    def __call__(self, residue) -> str:
        name = residue if isinstance(residue, str) else residue.residue_name
        code = lookup_one_letter_code(name)
        if code is not None:
            return code

        if self.strict:
            raise UnknownResidueError(f"No one-letter code for residue {name!r}")

        if name not in self._reported:
            self._reported.add(name)
            logger.debug("Using placeholder %r for residue %s", self.placeholder, name)
        return self.placeholder


_default_translator = ResidueCodeTranslator()


def one_letter_code(residue) -> str:
    """Translate with the default placeholder policy."""
    return _default_translator(residue)
