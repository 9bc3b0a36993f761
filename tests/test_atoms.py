"""Tests for representative atom selection and residue arrays."""

import gemmi
import numpy as np
import pytest

from conftest import (
    create_mock_gemmi_chain,
    create_mock_gemmi_residue,
    create_mock_gemmi_structure,
    make_pdb_text,
)
from multalign.core.atoms import (
    RepresentativeAtom,
    build_atom_array,
    get_representative_atom,
    is_nucleic_acid_residue,
    is_protein_residue,
)


class TestResidueClassification:
    """Test residue type checks."""

    @pytest.mark.parametrize("resname", ["ALA", "GLY", "TRP"])
    def test_protein_residue(self, resname):
        """Test standard amino acids."""
        residue = create_mock_gemmi_residue(resname)
        assert is_protein_residue(residue)
        assert not is_nucleic_acid_residue(residue)

    def test_modified_amino_acid_with_ca(self):
        """Test that modified amino acids with a Cα count as protein."""
        assert is_protein_residue(create_mock_gemmi_residue("MSE", atom_names=("N", "CA", "SE")))

    @pytest.mark.parametrize("resname", ["DA", "DT", "U"])
    def test_nucleic_acid_residue(self, resname):
        """Test nucleotides."""
        residue = create_mock_gemmi_residue(resname, atom_names=("P",))
        assert is_nucleic_acid_residue(residue)
        assert not is_protein_residue(residue)

    def test_water_is_neither(self):
        """Test that waters are skipped."""
        residue = create_mock_gemmi_residue("HOH", atom_names=("O",))
        assert not is_protein_residue(residue)
        assert not is_nucleic_acid_residue(residue)


class TestRepresentativeAtom:
    """Test representative atom selection."""

    def test_protein_uses_ca(self):
        """Test Cα selection among backbone atoms."""
        residue = create_mock_gemmi_residue("ALA", atom_names=("N", "CA", "C", "O"))
        assert get_representative_atom(residue).name == "CA"

    def test_nucleotide_uses_phosphate(self):
        """Test phosphate selection."""
        residue = create_mock_gemmi_residue("DG", atom_names=("C3'", "P", "O5'"))
        assert get_representative_atom(residue).name == "P"

    def test_terminal_nucleotide_falls_back_to_c3(self):
        """Test C3' fallback when the phosphate is missing."""
        residue = create_mock_gemmi_residue("DG", atom_names=("O5'", "C3'"))
        assert get_representative_atom(residue).name == "C3'"

    def test_missing_ca(self):
        """Test a protein residue without a Cα."""
        residue = create_mock_gemmi_residue("ALA", atom_names=("N", "C"))
        assert get_representative_atom(residue) is None

    def test_residue_id(self):
        """Test residue labels with and without insertion codes."""
        atom = RepresentativeAtom("A", "ALA", 42, " ", "CA", np.zeros(3))
        assert atom.residue_id == "A:42"
        atom.icode = "B"
        assert atom.residue_id == "A:42B"


class TestBuildAtomArray:
    """Test residue array construction."""

    def create_structure(self):
        protein = create_mock_gemmi_chain(
            "A",
            [
                create_mock_gemmi_residue("ALA", 1),
                create_mock_gemmi_residue("HOH", 2, atom_names=("O",)),
                create_mock_gemmi_residue("GLY", 3),
            ],
        )
        dna = create_mock_gemmi_chain(
            "B",
            [
                create_mock_gemmi_residue("DA", 1, atom_names=("P", "C3'")),
                create_mock_gemmi_residue("DC", 2, icode="A", atom_names=("P",)),
            ],
        )
        return create_mock_gemmi_structure([protein, dna])

    def test_all_chains(self):
        """Test residue order across chains, skipping waters."""
        atom_array = build_atom_array(self.create_structure())

        assert [atom.residue_id for atom in atom_array] == ["A:1", "A:3", "B:1", "B:2A"]
        assert [atom.atom_name for atom in atom_array] == ["CA", "CA", "P", "P"]

    def test_single_chain(self):
        """Test restriction to one chain."""
        atom_array = build_atom_array(self.create_structure(), chain_id="B")

        assert [atom.residue_name for atom in atom_array] == ["DA", "DC"]

    def test_missing_chain(self):
        """Test an unknown chain gives an empty array."""
        assert build_atom_array(self.create_structure(), chain_id="Z") == []

    def test_coordinates(self):
        """Test that coordinates are copied into numpy arrays."""
        atom_array = build_atom_array(self.create_structure(), chain_id="A")

        np.testing.assert_allclose(atom_array[1].coord, [3.0, 0.0, 0.0])

    def test_gemmi_structure(self):
        """Test residue arrays from a parsed GEMMI structure."""
        structure = gemmi.read_pdb_string(
            make_pdb_text(
                {
                    "A": [("MET", ["N", "CA", "C", "O"]), ("LYS", ["N", "CA"])],
                    "B": [("DT", ["P", "C3'"])],
                }
            )
        )

        atom_array = build_atom_array(structure)

        assert [atom.residue_name for atom in atom_array] == ["MET", "LYS", "DT"]
        assert [atom.residue_id for atom in atom_array] == ["A:1", "A:2", "B:1"]
        np.testing.assert_allclose(atom_array[0].coord, [3.8, 0.5, 0.0], atol=1e-3)
