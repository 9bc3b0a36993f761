"""Structure file and block description handling."""

import json
import logging
from pathlib import Path

import gemmi

from .model import Block, InconsistentModelError

logger = logging.getLogger(__name__)

# GEMMI supports .pdb, .cif, .ent (PDB), .mmcif
SUPPORTED_FORMATS = {".pdb", ".cif", ".ent", ".mmcif"}


def file_type(file_path: Path) -> str:
    """Get the file extension in lowercase."""
    return str(file_path.suffix).lower()


def validate_file(file_path: Path) -> bool:
    """Validate a single structure file of a supported type."""
    ftype = file_type(file_path)
    if ftype not in SUPPORTED_FORMATS:
        return False

    try:
        structure = gemmi.read_structure(str(file_path))
        # Verify structure has at least one model
        if len(structure) == 0:
            logger.warning("No valid model can be extracted from %s", file_path)
            return False
        return True
    except (OSError, RuntimeError, ValueError) as e:
        logger.warning("File %s could not be parsed as %s file: %s", file_path, ftype, e)
        return False


def get_structure(file_path: Path) -> gemmi.Structure | None:
    """Load and return structure from file, or None if invalid."""
    if not validate_file(file_path):
        return None

    try:
        structure = gemmi.read_structure(str(file_path))
    except (OSError, RuntimeError, ValueError):
        logger.exception("Error loading structure from %s", file_path)
        return None
    if not structure.name:
        structure.name = file_path.stem
    return structure


def parse_blocks(data: dict) -> list[Block]:
    """
    Build blocks from a decoded block description.

    The description has the form ``{"blocks": [block, ...]}`` where each block
    is a list of rows (one per structure) of residue indices or null.

    Raises:
        InconsistentModelError: If the description is malformed
    """
    if not isinstance(data, dict) or not isinstance(data.get("blocks"), list):
        raise InconsistentModelError("Block description needs a 'blocks' list")

    blocks = []
    for b, rows in enumerate(data["blocks"]):
        if not isinstance(rows, list) or not all(isinstance(row, list) for row in rows):
            raise InconsistentModelError(f"Block {b} must be a list of rows")
        for row in rows:
            for residue in row:
                # bool is an int subclass
                if residue is not None and (isinstance(residue, bool) or not isinstance(residue, int)):
                    raise InconsistentModelError(
                        f"Block {b} has non-integer residue index {residue!r}"
                    )
        blocks.append(Block([list(row) for row in rows]))
    return blocks


def load_blocks(file_path: Path) -> list[Block]:
    """Load alignment blocks from a JSON block description file."""
    try:
        data = json.loads(Path(file_path).read_text())
    except json.JSONDecodeError as e:
        raise InconsistentModelError(f"Invalid block description {file_path}: {e}") from e

    blocks = parse_blocks(data)
    logger.info("Loaded %d blocks from %s", len(blocks), file_path)
    return blocks
