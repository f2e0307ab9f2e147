"""Quantum-chemistry building blocks: input parsing, nuclear repulsion, MP2 energy, Multiwfn files and point-group symmetry."""

__version__ = "0.1.0"