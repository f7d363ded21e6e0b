"""
Unit tests for Z2 random vectors and their file I/O.
"""

import numpy as np
import pytest

from slaph_lookup.random_vector import Z2_AMPLITUDE, RandomVector


class TestGeneration:
    """Tests for RandomVector.set."""

    def test_z2_entries(self):
        rv = RandomVector(2, 100)
        rv.set(0, seed=1227)
        np.testing.assert_allclose(np.abs(rv[0].real), Z2_AMPLITUDE)
        np.testing.assert_allclose(np.abs(rv[0].imag), Z2_AMPLITUDE)
        np.testing.assert_allclose(np.abs(rv[0]), 1.0)

    def test_other_entities_untouched(self):
        rv = RandomVector(2, 10)
        rv.set(1, seed=5)
        assert np.all(rv[0] == 0)

    def test_seed_reproducible(self):
        a, b = RandomVector(1, 50), RandomVector(1, 50)
        a.set(0, seed=42)
        b.set(0, seed=42)
        np.testing.assert_array_equal(a[0], b[0])

    def test_seeds_differ(self):
        rv = RandomVector(2, 50)
        rv.set(0, seed=1)
        rv.set(1, seed=2)
        assert not np.array_equal(rv[0], rv[1])

    def test_both_signs_appear(self):
        rv = RandomVector(1, 200)
        rv.set(0, seed=3)
        assert set(np.sign(rv[0].real)) == {-1.0, 1.0}


class TestFiles:
    """Tests for reading and writing random vectors."""

    def test_single_entity(self, tmp_path):
        rv = RandomVector(2, 8)
        rv.set(1, seed=11)
        path = rv.write_random_vector(tmp_path / "rnd_1", entity=1)

        other = RandomVector(2, 8)
        other.read_random_vector(path, entity=0)
        np.testing.assert_array_equal(other[0], rv[1])
        assert np.all(other[1] == 0)

    def test_all_entities(self, tmp_path):
        rv = RandomVector(3, 4)
        for i in range(3):
            rv.set(i, seed=100 + i)
        rv.set(0, seed=100, filename=tmp_path / "all")

        other = RandomVector(3, 4)
        other.read_random_vector(tmp_path / "all")
        np.testing.assert_array_equal(other.vec, rv.vec)

    def test_separate_files(self, tmp_path):
        rv = RandomVector(2, 6)
        paths = []
        for i in range(2):
            rv.set(i, seed=i)
            paths.append(rv.write_random_vector(tmp_path / f"rnd_{i}", entity=i))

        other = RandomVector(2, 6)
        other.read_random_vectors_from_separate_files(paths, verbose=True)
        np.testing.assert_array_equal(other.vec, rv.vec)

    def test_short_file_warns(self, tmp_path):
        rv = RandomVector(1, 4)
        rv.set(0, seed=9)
        path = rv.write_random_vector(tmp_path / "short", entity=0)

        longer = RandomVector(1, 6)
        with pytest.warns(UserWarning, match="not all data"):
            longer.read_random_vector(path, entity=0)
        np.testing.assert_array_equal(longer[0][:4], rv[0])
        assert np.all(longer[0][4:] == 0)

    def test_missing_file(self, tmp_path):
        rv = RandomVector(1, 4)
        with pytest.raises(FileNotFoundError, match="random vector"):
            rv.read_random_vector(tmp_path / "missing", entity=0)

    def test_too_many_files(self, tmp_path):
        rv = RandomVector(1, 4)
        with pytest.raises(ValueError):
            rv.read_random_vectors_from_separate_files(
                [tmp_path / "a", tmp_path / "b"])

    def test_too_few_files_warns(self, tmp_path):
        rv = RandomVector(2, 4)
        rv.set(0, seed=1)
        path = rv.write_random_vector(tmp_path / "rnd_0", entity=0)

        other = RandomVector(2, 4)
        with pytest.warns(UserWarning, match="number of random vectors"):
            other.read_random_vectors_from_separate_files([path])
        np.testing.assert_array_equal(other[0], rv[0])
