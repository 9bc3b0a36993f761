"""
Shared test fixtures and helpers for alignment and GEMMI-compatible testing
"""

from unittest.mock import Mock

import numpy as np
import pytest

from multalign.core.atoms import RepresentativeAtom
from multalign.core.model import Block, MultipleAlignment
from multalign.core.residues import AA_THREE_TO_ONE

ONE_TO_THREE = {one: three for three, one in AA_THREE_TO_ONE.items()}


def make_atoms(sequence, chain_id="A", start=1):
    """Build a residue array whose one-letter sequence is ``sequence``."""
    return [
        RepresentativeAtom(
            chain_id=chain_id,
            residue_name=ONE_TO_THREE[code],
            seq_num=start + i,
            icode=" ",
            atom_name="CA",
            coord=np.array([float(i), 0.0, 0.0]),
        )
        for i, code in enumerate(sequence)
    ]


def make_alignment(sequences, blocks):
    """Build a MultipleAlignment from one-letter sequences and block rows."""
    return MultipleAlignment(
        blocks=[Block(rows) for rows in blocks],
        atom_arrays=[make_atoms(sequence) for sequence in sequences],
    )


def pdb_atom_line(serial, name, resname, chain, resseq, x, y, z, element):
    """Format a fixed-column PDB ATOM record."""
    atom_name = f" {name}" if len(name) < 4 else name
    return (
        f"ATOM  {serial:5d} {atom_name:<4} {resname:>3} {chain}{resseq:4d}    "
        f"{x:8.3f}{y:8.3f}{z:8.3f}{1.0:6.2f}{20.0:6.2f}          {element:>2}"
    )


def make_pdb_text(chains):
    """
    Build PDB text from ``{chain_id: [(resname, [atom names]), ...]}``.

    Residues are numbered from 1 and placed 3.8 Å apart along x.
    """
    lines = []
    serial = 1
    for chain_id, residues in chains.items():
        for resseq, (resname, atom_names) in enumerate(residues, 1):
            for offset, atom_name in enumerate(atom_names):
                lines.append(
                    pdb_atom_line(
                        serial, atom_name, resname, chain_id, resseq,
                        3.8 * resseq, 0.5 * offset, 0.0, atom_name[0],
                    )
                )
                serial += 1
        lines.append("TER")
    lines.append("END")
    return "\n".join(lines) + "\n"


@pytest.fixture
def write_pdb(tmp_path):
    """Factory fixture that writes PDB text and returns the path."""

    def _write(chains, filename="structure.pdb"):
        path = tmp_path / filename
        path.write_text(make_pdb_text(chains))
        return path

    return _write


def create_mock_gemmi_residue(resname, seqid_num=1, icode=" ", atom_names=("CA",)):
    """Create a GEMMI-compatible mock residue"""
    residue = Mock()
    residue.name = resname

    # Mock seqid (GEMMI uses seqid with num and icode attributes)
    seqid = Mock()
    seqid.num = seqid_num
    seqid.icode = icode
    residue.seqid = seqid

    atoms = []
    for i, atom_name in enumerate(atom_names):
        atom = Mock()
        atom.name = atom_name
        # GEMMI uses Position for atom.pos
        pos = Mock()
        pos.x = float(seqid_num)
        pos.y = float(i)
        pos.z = 0.0
        atom.pos = pos
        atoms.append(atom)
    residue.__iter__ = lambda self: iter(atoms)

    return residue


def create_mock_gemmi_chain(chain_name, residues):
    """Create a GEMMI-compatible mock chain"""
    chain = Mock()
    chain.name = chain_name
    chain.__iter__ = lambda self: iter(residues)
    return chain


def create_mock_gemmi_model(chains):
    """Create a GEMMI-compatible mock model"""
    model = Mock()
    model.__iter__ = lambda self: iter(chains)
    return model


def create_mock_gemmi_structure(chains, name="mock"):
    """Create a GEMMI-compatible mock structure"""
    structure = Mock()
    structure.name = name
    model = create_mock_gemmi_model(chains)
    structure.__iter__ = lambda self: iter([model])
    structure.__len__ = lambda self: 1
    structure.__getitem__ = lambda self, idx: model if idx == 0 else None
    return structure
