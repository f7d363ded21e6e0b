"""
Complex Z2 random vectors.

Each entity (one random vector) holds ``length`` entries (re + i im) with
re, im drawn independently from {-1/sqrt(2), +1/sqrt(2)}. Entities are
stored contiguously in one complex128 array of shape (nb_entities, length).

Files are raw native-endian complex128, either one entity per file or all
entities back to back.

Random numbers come from numpy's default generator seeded per entity, so
vectors are reproducible from (seed, length) but not bit-compatible with
RANLUX-generated ones.
"""

import warnings
from pathlib import Path
from typing import Sequence, Union

import numpy as np


Z2_AMPLITUDE = 0.5 * np.sqrt(2.0)
"""Magnitude of the real and imaginary part of every entry."""


class RandomVector:
    """
    Container for ``nb_entities`` Z2 random vectors of length ``length``.

    Parameters
    ----------
    nb_entities : int
        Number of random vectors.
    length : int
        Entries per random vector (time x eigenvectors x Dirac).
    """

    def __init__(self, nb_entities: int, length: int):
        self.nb_entities = nb_entities
        self.length = length
        self.vec = np.zeros((nb_entities, length), dtype=np.complex128)

    def __getitem__(self, entity: int) -> np.ndarray:
        return self.vec[entity]

    def set(self, entity: int, seed: int, filename: Union[str, Path, None] = None) -> None:
        """
        Fill one entity from ``seed``; optionally write all entities to file.
        """
        rng = np.random.default_rng(seed)
        rnd = rng.random(2 * self.length)
        re = np.where(rnd[0::2] < 0.5, -Z2_AMPLITUDE, Z2_AMPLITUDE)
        im = np.where(rnd[1::2] < 0.5, -Z2_AMPLITUDE, Z2_AMPLITUDE)
        self.vec[entity] = re + 1j * im

        if filename is not None:
            self.write_random_vector(filename)

    def write_random_vector(self, filename: Union[str, Path],
                            entity: Union[int, None] = None) -> Path:
        """Write one entity, or all of them if ``entity`` is None."""
        filename = Path(filename)
        data = self.vec if entity is None else self.vec[entity]
        data.tofile(filename)
        return filename

    def _read(self, filename: Union[str, Path], count: int) -> np.ndarray:
        filename = Path(filename)
        if not filename.exists():
            raise FileNotFoundError(
                f"failed to open file to read random vector: {filename}"
            )
        data = np.fromfile(filename, dtype=np.complex128, count=count)
        if data.size != count:
            warnings.warn(
                f"It seems that not all data are read from: {filename} "
                f"({data.size} of {count} entries)"
            )
        return data

    def read_random_vector(self, filename: Union[str, Path],
                           entity: Union[int, None] = None,
                           verbose: bool = False) -> None:
        """
        Read one entity, or all of them if ``entity`` is None.

        Missing entries are left at zero.

        Raises
        ------
        FileNotFoundError
            If the file doesn't exist.
        """
        if entity is None:
            data = self._read(filename, self.vec.size)
            flat = np.zeros(self.vec.size, dtype=np.complex128)
            flat[:data.size] = data
            self.vec[:] = flat.reshape(self.vec.shape)
        else:
            if verbose:
                print(f"\tReading random vector from file:\n\t\t{filename}")
            data = self._read(filename, self.length)
            self.vec[entity] = 0
            self.vec[entity, :data.size] = data

    def read_random_vectors_from_separate_files(
        self, filename_list: Sequence[Union[str, Path]], verbose: bool = False,
    ) -> None:
        """
        Read entity i from ``filename_list[i]``.

        Raises
        ------
        ValueError
            If more files than entities are given.
        """
        if len(filename_list) > self.nb_entities:
            raise ValueError(
                f"Got {len(filename_list)} random vector files for "
                f"{self.nb_entities} random vectors"
            )
        if len(filename_list) < self.nb_entities:
            warnings.warn(
                "Problem when reading random vectors: The number of random "
                "vectors read is not the same as the expected one!"
            )
        self.vec[:] = 0
        for i, filename in enumerate(filename_list):
            self.read_random_vector(filename, entity=i, verbose=verbose)
