"""
matrix.py
~~~~~~~~~

Dense two-dimensional matrices backed by a flat, row-major buffer.

Entry ``(i, j)`` lives at ``data[i * cols + j]``. Matrices behave as values:
every operation returns a new Matrix and never modifies its operands.
"""

from typing import Callable, Iterable, List, Optional, Sequence, Tuple

import numpy as np

from feedforward.exceptions import ConstructionSizeMismatch, DimensionMismatch


# A zero-argument callable producing a uniform float in [0, 1)
RandomSource = Callable[[], float]


def default_random_source(seed: Optional[int] = None) -> RandomSource:
    """
    Create a uniform [0, 1) random source backed by a numpy Generator.

    Args:
        seed: Optional seed for reproducible draws

    Returns:
        A callable that returns the next uniform float on every call
    """
    generator = np.random.default_rng(seed)

    def draw() -> float:
        return float(generator.random())

    return draw


class Matrix:
    """
    A dense ``rows x cols`` matrix of floats.

    Attributes:
        rows: Number of rows
        cols: Number of columns
        data: Row-major tuple of ``rows * cols`` floats
    """

    __slots__ = ('rows', 'cols', 'data')

    def __init__(self, rows: int, cols: int, data: Iterable[float]):
        """
        Initialize the matrix, validating the buffer length.

        Args:
            rows: Number of rows
            cols: Number of columns
            data: Row-major values, exactly ``rows * cols`` of them

        Raises:
            ConstructionSizeMismatch: If the buffer has the wrong length
        """
        buffer = tuple(float(value) for value in data)
        if rows < 0 or cols < 0:
            raise ConstructionSizeMismatch(
                f"Matrix dimensions must be non-negative, got {rows}x{cols}"
            )
        if len(buffer) != rows * cols:
            raise ConstructionSizeMismatch(
                f"Buffer of length {len(buffer)} cannot back a "
                f"{rows}x{cols} matrix (expected {rows * cols} values)"
            )
        self.rows = rows
        self.cols = cols
        self.data = buffer

    # ------------------------------------------------------------------
    # Constructors
    # ------------------------------------------------------------------

    @classmethod
    def zeros(cls, rows: int, cols: int) -> 'Matrix':
        """Create a matrix with every entry set to 0.0."""
        return cls(rows, cols, [0.0] * (rows * cols))

    @classmethod
    def random(
        cls,
        rows: int,
        cols: int,
        random_source: Optional[RandomSource] = None
    ) -> 'Matrix':
        """
        Create a matrix whose entries are drawn independently from [0, 1).

        Args:
            rows: Number of rows
            cols: Number of columns
            random_source: Callable returning a uniform float in [0, 1).
                A fresh, unseeded numpy generator is used when omitted.

        Returns:
            Matrix: The randomly filled matrix
        """
        if random_source is None:
            random_source = default_random_source()
        return cls(rows, cols, [random_source() for _ in range(rows * cols)])

    @classmethod
    def from_buffer(
        cls,
        rows: int,
        cols: int,
        data: Sequence[float]
    ) -> 'Matrix':
        """
        Wrap an existing row-major sequence.

        Raises:
            ConstructionSizeMismatch: If ``len(data) != rows * cols``
        """
        return cls(rows, cols, data)

    @classmethod
    def from_vector(cls, values: Sequence[float]) -> 'Matrix':
        """Create a column matrix of shape ``(len(values), 1)``."""
        return cls(len(values), 1, values)

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[float]]) -> 'Matrix':
        """
        Build a matrix from a list of rows, e.g. ``[[1, 2], [3, 4]]``.

        Raises:
            ConstructionSizeMismatch: If the rows are not all the same length
        """
        n_rows = len(rows)
        n_cols = len(rows[0]) if n_rows else 0

        for index, row in enumerate(rows):
            if len(row) != n_cols:
                raise ConstructionSizeMismatch(
                    f"Row {index} has {len(row)} values, expected {n_cols}"
                )

        return cls(n_rows, n_cols, [value for row in rows for value in row])

    # ------------------------------------------------------------------
    # Elementwise operations
    # ------------------------------------------------------------------

    def _check_same_shape(self, other: 'Matrix', operation: str) -> None:
        if self.rows != other.rows or self.cols != other.cols:
            raise DimensionMismatch(
                f"Cannot {operation} matrices of shapes "
                f"{self.shape} and {other.shape}"
            )

    def add(self, other: 'Matrix') -> 'Matrix':
        """
        Elementwise sum.

        Raises:
            DimensionMismatch: If the shapes differ
        """
        self._check_same_shape(other, 'add')
        return Matrix(
            self.rows,
            self.cols,
            [a + b for a, b in zip(self.data, other.data)]
        )

    def subtract(self, other: 'Matrix') -> 'Matrix':
        """
        Elementwise difference ``self - other``.

        Raises:
            DimensionMismatch: If the shapes differ
        """
        self._check_same_shape(other, 'subtract')
        return Matrix(
            self.rows,
            self.cols,
            [a - b for a, b in zip(self.data, other.data)]
        )

    def elementwise_multiply(self, other: 'Matrix') -> 'Matrix':
        """
        Hadamard product.

        Raises:
            DimensionMismatch: If the shapes differ
        """
        self._check_same_shape(other, 'elementwise multiply')
        return Matrix(
            self.rows,
            self.cols,
            [a * b for a, b in zip(self.data, other.data)]
        )

    def map(self, func: Callable[[float], float]) -> 'Matrix':
        """Apply ``func`` to every entry, preserving the shape."""
        return Matrix(self.rows, self.cols, [func(value) for value in self.data])

    # ------------------------------------------------------------------
    # Linear algebra
    # ------------------------------------------------------------------

    def dot_multiply(self, other: 'Matrix') -> 'Matrix':
        """
        Standard matrix product, result shape ``(self.rows, other.cols)``.

        Computed as ``result[i, j] = sum_k self[i, k] * other[k, j]``.

        Raises:
            DimensionMismatch: If ``self.cols != other.rows``
        """
        if self.cols != other.rows:
            raise DimensionMismatch(
                f"Cannot multiply a {self.rows}x{self.cols} matrix by a "
                f"{other.rows}x{other.cols} matrix: inner dimensions "
                f"{self.cols} and {other.rows} differ"
            )

        a, b = self.data, other.data
        n, m, p = self.rows, self.cols, other.cols
        result = [0.0] * (n * p)

        for i in range(n):
            for j in range(p):
                total = 0.0
                for k in range(m):
                    total += a[i * m + k] * b[k * p + j]
                result[i * p + j] = total

        return Matrix(n, p, result)

    def transpose(self) -> 'Matrix':
        """Return the ``(cols, rows)`` matrix with ``result[j, i] = self[i, j]``."""
        result = [0.0] * len(self.data)

        for i in range(self.rows):
            for j in range(self.cols):
                result[j * self.rows + i] = self.data[i * self.cols + j]

        return Matrix(self.cols, self.rows, result)

    # ------------------------------------------------------------------
    # Operator sugar
    # ------------------------------------------------------------------

    def __add__(self, other: 'Matrix') -> 'Matrix':
        if not isinstance(other, Matrix):
            return NotImplemented
        return self.add(other)

    def __sub__(self, other: 'Matrix') -> 'Matrix':
        if not isinstance(other, Matrix):
            return NotImplemented
        return self.subtract(other)

    def __mul__(self, other: 'Matrix') -> 'Matrix':
        if not isinstance(other, Matrix):
            return NotImplemented
        return self.elementwise_multiply(other)

    def __matmul__(self, other: 'Matrix') -> 'Matrix':
        if not isinstance(other, Matrix):
            return NotImplemented
        return self.dot_multiply(other)

    # ------------------------------------------------------------------
    # Inspection
    # ------------------------------------------------------------------

    @property
    def shape(self) -> Tuple[int, int]:
        return self.rows, self.cols

    def __getitem__(self, index: Tuple[int, int]) -> float:
        i, j = index
        if not (0 <= i < self.rows and 0 <= j < self.cols):
            raise IndexError(
                f"Index ({i}, {j}) out of range for shape {self.shape}"
            )
        return self.data[i * self.cols + j]

    def to_list(self) -> List[List[float]]:
        """Return the entries as a list of rows."""
        return [
            list(self.data[i * self.cols:(i + 1) * self.cols])
            for i in range(self.rows)
        ]

    def to_array(self) -> np.ndarray:
        """Return a copy of the entries as a ``(rows, cols)`` numpy array."""
        return np.array(self.data, dtype=np.float64).reshape(self.rows, self.cols)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Matrix):
            return NotImplemented
        return (
            self.rows == other.rows
            and self.cols == other.cols
            and self.data == other.data
        )

    def __str__(self) -> str:
        return '\n'.join(
            '\t'.join(str(value) for value in row) for row in self.to_list()
        )

    def __repr__(self) -> str:
        return f"Matrix(rows={self.rows}, cols={self.cols}, data={list(self.data)})"
