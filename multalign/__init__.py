"""Sequence alignment views of multiple structure alignments."""
