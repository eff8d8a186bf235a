"""Small fixed-size vectors and a 2x2 matrix."""

from __future__ import annotations

import math
import numbers
import operator
from typing import Any, Callable, ClassVar, Iterator


class _Vector:
    """Component-wise vector arithmetic shared by the fixed-size vectors."""

    __slots__ = ()
    _fields: ClassVar[tuple[str, ...]] = ()

    def __init__(self, *components: Any) -> None:
        values: list[Any] = []
        for component in components:
            if isinstance(component, _Vector):
                values.extend(component)
            elif isinstance(component, numbers.Real):
                values.append(component)
            else:
                raise TypeError(
                    f"{type(self).__name__} components must be numbers or vectors, "
                    f"not {type(component).__name__}"
                )
        if len(components) == 1 and not isinstance(components[0], _Vector):
            values *= len(self._fields)
        if len(values) != len(self._fields):
            raise TypeError(
                f"{type(self).__name__} needs {len(self._fields)} components, got {len(values)}"
            )
        for name, value in zip(self._fields, values):
            setattr(self, name, value)

    def __iter__(self) -> Iterator[Any]:
        return (getattr(self, name) for name in self._fields)

    def __len__(self) -> int:
        return len(self._fields)

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return tuple(self) == tuple(other)

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        inner = ", ".join(f"{name}={getattr(self, name)!r}" for name in self._fields)
        return f"{type(self).__name__}({inner})"

    def _operands(self, other: Any) -> tuple[Any, ...] | None:
        if isinstance(other, type(self)):
            return tuple(other)
        if isinstance(other, numbers.Real):
            return (other,) * len(self._fields)
        return None

    def _binary(self, other: Any, op: Callable[[Any, Any], Any]):
        operands = self._operands(other)
        if operands is None:
            return NotImplemented
        return type(self)(*map(op, self, operands))

    def _inplace(self, other: Any, op: Callable[[Any, Any], Any]):
        operands = self._operands(other)
        if operands is None:
            return NotImplemented
        for name, value in zip(self._fields, map(op, self, operands)):
            setattr(self, name, value)
        return self

    def _check_same(self, other: Any) -> None:
        if not isinstance(other, type(self)):
            raise TypeError(f"dot needs a {type(self).__name__}, not {type(other).__name__}")

    def __add__(self, other):
        return self._binary(other, operator.add)

    def __sub__(self, other):
        return self._binary(other, operator.sub)

    def __mul__(self, other):
        return self._binary(other, operator.mul)

    def __truediv__(self, other):
        return self._binary(other, operator.truediv)

    def __iadd__(self, other):
        return self._inplace(other, operator.add)

    def __isub__(self, other):
        return self._inplace(other, operator.sub)

    def __imul__(self, other):
        return self._inplace(other, operator.mul)

    def __itruediv__(self, other):
        return self._inplace(other, operator.truediv)


class Vector2(_Vector):
    """Two-component vector; a single number fills both components."""

    __slots__ = ("x", "y")
    _fields = ("x", "y")

    def length_squared(self):
        """Sum of the squared components."""
        return self.x * self.x + self.y * self.y

    def length(self) -> float:
        """Euclidean length."""
        return math.sqrt(self.length_squared())

    def normalize(self) -> None:
        """Scale this vector in place to unit length."""
        self._inplace(self.length(), operator.truediv)

    def normalized(self) -> Vector2:
        """Return a unit-length copy of this vector."""
        return self / self.length()

    def dot(self, other: Vector2):
        """Dot product with another Vector2."""
        self._check_same(other)
        return self.x * other.x + self.y * other.y


class Vector3(_Vector):
    """Three-component vector; accepts a Vector2 followed by z."""

    __slots__ = ("x", "y", "z")
    _fields = ("x", "y", "z")

    def length_squared(self):
        """Sum of the squared components."""
        return self.x * self.x + self.y * self.y + self.z * self.z

    def length(self) -> float:
        """Euclidean length."""
        return math.sqrt(self.length_squared())

    def normalize(self) -> None:
        """Scale this vector in place to unit length."""
        self._inplace(self.length(), operator.truediv)

    def normalized(self) -> Vector3:
        """Return a unit-length copy of this vector."""
        return self / self.length()

    def dot(self, other: Vector3):
        """Dot product with another Vector3."""
        self._check_same(other)
        return self.x * other.x + self.y * other.y + self.z * other.z


class Vector4(_Vector):
    """Four-component vector; accepts smaller vectors followed by the rest."""

    __slots__ = ("x", "y", "z", "w")
    _fields = ("x", "y", "z", "w")

    def length_squared(self):
        """Sum of the squared components."""
        return self.x * self.x + self.y * self.y + self.z * self.z + self.w * self.w

    def length(self) -> float:
        """Euclidean length."""
        return math.sqrt(self.length_squared())

    def normalize(self) -> None:
        """Scale this vector in place to unit length."""
        self._inplace(self.length(), operator.truediv)

    def normalized(self) -> Vector4:
        """Return a unit-length copy of this vector."""
        return self / self.length()

    def dot(self, other: Vector4):
        """Dot product with another Vector4."""
        self._check_same(other)
        return self.x * other.x + self.y * other.y + self.z * other.z + self.w * other.w


class Matrix2x2:
    """A 2x2 matrix that starts as the identity."""

    __slots__ = ("_data",)

    def __init__(self) -> None:
        self._data = [[1, 0], [0, 1]]

    @staticmethod
    def _check(row: int, column: int) -> None:
        if not (0 <= row < 2 and 0 <= column < 2):
            raise IndexError(f"matrix index ({row}, {column}) out of range")

    def set(self, row: int, column: int, value) -> None:
        """Store a value at the given row and column."""
        self._check(row, column)
        self._data[row][column] = value

    def get(self, row: int, column: int):
        """Return the value at the given row and column."""
        self._check(row, column)
        return self._data[row][column]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Matrix2x2):
            return NotImplemented
        return self._data == other._data

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Matrix2x2({self._data!r})"