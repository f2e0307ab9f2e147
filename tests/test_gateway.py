import pytest

from chinium.gateway import (
    ANGSTROM_TO_BOHR,
    InputError,
    atomic_number,
    element_symbol,
    read_basis_set,
    read_chemical_potential,
    read_derivative,
    read_grid,
    read_guess,
    read_job_type,
    read_method,
    read_num_electrons,
    read_num_threads,
    read_temperature,
    read_xyz,
)

WATER = """XYZ
3
O 0.0 0.0 0.0
H 1.0 0.0 0.0
H 0.0 1.0 0.0
BASIS
def2-SVP
"""


@pytest.fixture
def write(tmp_path):
    def _write(text):
        path = tmp_path / "job.inp"
        path.write_text(text)
        return path

    return _write


def test_element_round_trip():
    for z in range(1, 119):
        assert atomic_number(element_symbol(z)) == z


def test_atomic_number_is_case_insensitive():
    assert atomic_number("he") == atomic_number("HE") == atomic_number("He")


def test_unknown_element():
    with pytest.raises(InputError):
        atomic_number("Xx")
    with pytest.raises(InputError):
        element_symbol(0)


def test_read_xyz(write):
    atoms = read_xyz(write(WATER))
    assert len(atoms) == 3
    assert [atom[0] for atom in atoms] == [8.0, 1.0, 1.0]
    assert [atom[1] for atom in atoms] == [8.0, 1.0, 1.0]
    assert atoms[1][2] == pytest.approx(ANGSTROM_TO_BOHR)
    assert atoms[2][3] == pytest.approx(1.8897, abs=1e-3)
    assert atoms[0][2:] == [0.0, 0.0, 0.0]


def test_read_xyz_lowercase_keyword(write):
    assert read_xyz(write(WATER.lower())) == read_xyz(write(WATER))


def test_read_xyz_read(write):
    assert read_xyz(write("xyz\nread\n")) == []


def test_read_xyz_missing(write):
    with pytest.raises(InputError):
        read_xyz(write("BASIS\nsto-3g\n"))


def test_read_xyz_invalid_count(write):
    with pytest.raises(InputError):
        read_xyz(write("XYZ\n0\n"))


def test_read_xyz_missing_atom(write):
    with pytest.raises(InputError):
        read_xyz(write("XYZ\n2\nH 0 0 0\n"))


def test_read_basis_set(write):
    assert read_basis_set(write(WATER)) == "def2-SVP"
    assert read_basis_set(write("BASIS\nread\n")) == ""
    with pytest.raises(InputError):
        read_basis_set(write("XYZ\nREAD\n"))


def test_read_num_electrons(write):
    assert read_num_electrons(write(WATER)) == 10
    assert read_num_electrons(write(WATER + "CHARGE\n1\n")) == 9
    assert read_num_electrons(write(WATER + "charge\n-2\n")) == 12


def test_read_num_electrons_invalid(write):
    with pytest.raises(InputError):
        read_num_electrons(write(WATER + "CHARGE\n10\n"))
    with pytest.raises(InputError):
        read_num_electrons(write(WATER + "CHARGE\n"))


def test_read_num_threads(write):
    assert read_num_threads(write(WATER)) == 1
    assert read_num_threads(write(WATER + "NTHREADS\n4\n")) == 4
    with pytest.raises(InputError):
        read_num_threads(write(WATER + "NTHREADS\n0\n"))


def test_read_job_type(write):
    assert read_job_type(write(WATER)) == "SCF"
    assert read_job_type(write(WATER + "jobtype\nlocalization\n")) == "LOCALIZATION"
    with pytest.raises(InputError):
        read_job_type(write(WATER + "JOBTYPE\nfoo\n"))


def test_read_guess(write):
    assert read_guess(write(WATER)) == "SAP"
    assert read_guess(write(WATER + "GUESS\nread\n")) == "READ"
    with pytest.raises(InputError):
        read_guess(write(WATER + "GUESS\ncore\n"))


def test_read_grid(write):
    assert read_grid(write(WATER)) == ""
    assert read_grid(write(WATER + "GRID\nsg1\n")) == "SG1"


def test_read_method(write):
    assert read_method(write(WATER)) == "RHF"
    assert read_method(write(WATER + "method\npbe\n")) == "PBE"


def test_read_derivative(write):
    assert read_derivative(write(WATER)) == 0
    assert read_derivative(write(WATER + "DERIVATIVE\n2\n")) == 2
    with pytest.raises(InputError):
        read_derivative(write(WATER + "DERIVATIVE\n-1\n"))


def test_read_temperature(write):
    assert read_temperature(write(WATER)) == 0.0
    assert read_temperature(write(WATER + "TEMPERATURE\n0.01\n")) == pytest.approx(0.01)
    with pytest.raises(InputError):
        read_temperature(write(WATER + "TEMPERATURE\n-5\n"))


def test_read_chemical_potential(write):
    assert read_chemical_potential(write(WATER)) == 0.0
    path = write(WATER + "CHEMICALPOTENTIAL\n-0.2\n")
    assert read_chemical_potential(path) == pytest.approx(-0.2)