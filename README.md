# chinium

Building blocks for small quantum-chemistry workflows, written on top of
NumPy.

## Installation

```
pip install .
```

To run the test suite, install the `test` extra and run pytest:

```
pip install ".[test]"
pytest
```

## What is inside

- `chinium.gateway`: reads keyword blocks from an input file. Each keyword
  (case-insensitive) stands on a line of its own, with its value on the next
  line. The readers are `read_xyz`, `read_basis_set`, `read_num_electrons`,
  `read_num_threads`, `read_job_type`, `read_guess`, `read_grid`,
  `read_method`, `read_derivative`, `read_temperature` and
  `read_chemical_potential`, for the keywords `XYZ`, `BASIS`, `CHARGE`,
  `NTHREADS`, `JOBTYPE`, `GUESS`, `GRID`, `METHOD`, `DERIVATIVE`,
  `TEMPERATURE` and `CHEMICALPOTENTIAL`. `element_symbol` and
  `atomic_number` convert between symbols and atomic numbers. Missing or
  invalid values raise `InputError`.
- `chinium.nuclear`: nuclear repulsion energy (`nuclear_repulsion`), its
  gradient (`nuclear_repulsion_gradient`) and its Hessian
  (`nuclear_repulsion_hessian`), for atoms given as rows `(Z, x, y, z)` in
  bohr.
- `chinium.mp2`: the MP2 correlation energy from orbital energies and
  chemists'-notation MO two-electron integrals, with
  `mp2_correlation_energy` and `ShellType` (restricted or unrestricted).
  `duplicate_rows` and `duplicate_cols` double a matrix row- or column-wise.
- `chinium.mwfn`: the `Mwfn` dataclass for Multiwfn `.mwfn` wavefunction
  files. `read_mwfn` reads the basis-set counts, shell lists, orbitals,
  the total density matrix and the overlap matrix; `Mwfn.export` writes a
  file. Basis functions are reordered between internal order
  (`m = -l, ..., +l`) and file order with `mwfn_matrix_transform`.
  `safe_float` reads numbers too small for single precision as zero.
- `chinium.pointgroups`: the `PointGroup` dataclass, the groups known by
  name through `point_group` (such as `"C2v"` or `"D2h"`), and
  `format_point_group` for a readable description.
- `chinium.symmetry`: the `Atom` dataclass, `atomic_mass` (H to Ar),
  `rotation_matrix`, `reflection_matrix`, `find_image`, and tests for
  symmetry elements: `has_inversion_centre`, `is_mirror`, `is_proper_axis`
  and `is_improper_axis`.
- `chinium.classify`: `get_point_group` moves a molecule to its standard
  orientation and returns its point group together with the reoriented
  atoms; `horizontal_c2_axis` and `horizontal_mirror` look for symmetry
  elements perpendicular to or containing the z axis. Linear molecules,
  spherical tops and groups without a name in `chinium.pointgroups` come back
  as an unnamed `PointGroup`.

## Example

```python
from chinium.gateway import read_xyz, read_num_electrons
from chinium.nuclear import nuclear_repulsion
from chinium.symmetry import Atom
from chinium.classify import get_point_group

atoms = read_xyz("water.inp")          # rows of (Z, Z, x, y, z) in bohr
print(read_num_electrons("water.inp"))
print(nuclear_repulsion([(a[0], *a[2:]) for a in atoms]))

group, oriented = get_point_group(
    [Atom(int(a[0]), a[2], a[3], a[4]) for a in atoms], 0.01
)
print(group.name)                      # C2v
```

with `water.inp` holding:

```
XYZ
3
O  0.000  0.000  0.117
H  0.000  0.757 -0.467
H  0.000 -0.757 -0.467
BASIS
def2-svp
CHARGE
0
```

## What it does not do

The package has no command-line program and no self-consistent-field
driver. It computes no one- or two-electron integrals, evaluates no
exchange-correlation functionals and has no integration grids, so the MP2
energy needs the MO integrals and orbital energies to be supplied by the
caller. It has no SCF convergence accelerators and does not work out
equivalent atoms or shells under the symmetry operations of a group.