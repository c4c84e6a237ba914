"""Support imported by generated variant types.

Generated projections raise `VariantMismatch`; capability bundles are applied
with `derive`. A capability is any `Capability`, so projects can define their
own next to the standard ones below.
"""

from __future__ import annotations

import copy
import dataclasses
from dataclasses import dataclass
from typing import Callable, FrozenSet, Tuple, TypeVar

_DERIVED_ATTR = "__derived_capabilities__"

ClassT = TypeVar("ClassT", bound=type)
Installer = Callable[[type, Tuple[str, ...], FrozenSet[str]], None]


class VariantMismatch(ValueError):
    """A projection was given a value tagged with a different variant.

    `value` is the exact object the projection received.
    """

    def __init__(self, value: object, expected: str):
        super().__init__(f"expected {expected}, got {value!r}")
        self.value = value
        self.expected = expected


@dataclass(frozen=True)
class Capability:
    name: str
    install: Installer = dataclasses.field(compare=False, repr=False)

    def __repr__(self) -> str:
        return self.name


def _values(obj: object, names: Tuple[str, ...]) -> tuple:
    return tuple(getattr(obj, name) for name in names)


def _install_repr(cls: type, names: Tuple[str, ...], derived: FrozenSet[str]) -> None:
    def __repr__(self) -> str:
        values = ", ".join(f"{name}={getattr(self, name)!r}" for name in names)
        return f"{type(self).__qualname__}({values})"

    cls.__repr__ = __repr__


def _install_eq(cls: type, names: Tuple[str, ...], derived: FrozenSet[str]) -> None:
    def __eq__(self, other: object) -> bool:
        if other.__class__ is not self.__class__:
            return NotImplemented
        return _values(self, names) == _values(other, names)

    cls.__eq__ = __eq__
    if Hash.name not in derived:
        cls.__hash__ = None


def _install_hash(cls: type, names: Tuple[str, ...], derived: FrozenSet[str]) -> None:
    def __hash__(self) -> int:
        return hash(_values(self, names))

    cls.__hash__ = __hash__


def _install_ord(cls: type, names: Tuple[str, ...], derived: FrozenSet[str]) -> None:
    def _comparison(compare: Callable[[tuple, tuple], bool]):
        def method(self, other: object):
            if other.__class__ is not self.__class__:
                return NotImplemented
            return compare(_values(self, names), _values(other, names))

        return method

    cls.__lt__ = _comparison(lambda left, right: left < right)
    cls.__le__ = _comparison(lambda left, right: left <= right)
    cls.__gt__ = _comparison(lambda left, right: left > right)
    cls.__ge__ = _comparison(lambda left, right: left >= right)


def _install_clone(cls: type, names: Tuple[str, ...], derived: FrozenSet[str]) -> None:
    def clone(self):
        return copy.deepcopy(self)

    cls.clone = clone


Repr = Capability("Repr", _install_repr)
Eq = Capability("Eq", _install_eq)
Hash = Capability("Hash", _install_hash)
Ord = Capability("Ord", _install_ord)
Clone = Capability("Clone", _install_clone)


def derived_capabilities(cls: type) -> Tuple[str, ...]:
    return tuple(cls.__dict__.get(_DERIVED_ATTR, ()))


def derive(*capabilities: Capability) -> Callable[[ClassT], ClassT]:
    """Install each capability on a dataclass, in order.

    Deriving a capability the class already has is a conflict, including when
    two separate `derive` directives name it.
    """
    for capability in capabilities:
        if not isinstance(capability, Capability):
            raise TypeError(f"{capability!r} is not a Capability")

    def decorate(cls: ClassT) -> ClassT:
        names = tuple(f.name for f in dataclasses.fields(cls))
        derived = list(derived_capabilities(cls))
        for capability in capabilities:
            if capability.name in derived:
                raise TypeError(
                    f"conflicting implementations of {capability.name} for {cls.__qualname__}"
                )
            capability.install(cls, names, frozenset(derived))
            derived.append(capability.name)
        setattr(cls, _DERIVED_ATTR, tuple(derived))
        return cls

    return decorate


__all__ = [
    "Capability",
    "Clone",
    "Eq",
    "Hash",
    "Ord",
    "Repr",
    "VariantMismatch",
    "derive",
    "derived_capabilities",
]
