"""Input model handed to the generator by the front end.

Every entity is frozen and uses tuples for sequences, so a transform can never
mutate the definition it was given.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Tuple


class Visibility(str, Enum):
    PUBLIC = "public"
    PRIVATE = "private"


class AnnotationKind(str, Enum):
    DOC = "doc"
    CONDITION = "condition"
    LINT = "lint"
    DECORATOR = "decorator"


# Annotation kinds that survive onto generated declarations and fields.
PASSTHROUGH_KINDS = frozenset(
    {AnnotationKind.DOC, AnnotationKind.CONDITION, AnnotationKind.LINT}
)


class GenericKind(str, Enum):
    TYPE_VAR = "type_var"
    TYPE_VAR_TUPLE = "type_var_tuple"
    PARAM_SPEC = "param_spec"


class PayloadShape(str, Enum):
    EMPTY = "empty"
    POSITIONAL = "positional"
    NAMED = "named"


@dataclass(frozen=True)
class Annotation:
    kind: AnnotationKind
    text: str


@dataclass(frozen=True)
class GenericParameter:
    name: str
    bound: str | None = None
    kind: GenericKind = GenericKind.TYPE_VAR

    def declaration(self) -> str:
        """Source form used inside a type parameter list."""
        if self.kind is GenericKind.TYPE_VAR_TUPLE:
            return f"*{self.name}"
        if self.kind is GenericKind.PARAM_SPEC:
            return f"**{self.name}"
        if self.bound:
            return f"{self.name}: {self.bound}"
        return self.name

    def argument(self) -> str:
        """Source form used when the parameter is applied to a generic type."""
        if self.kind is GenericKind.TYPE_VAR_TUPLE:
            return f"*{self.name}"
        return self.name


@dataclass(frozen=True)
class FieldDefinition:
    type_hint: str
    name: str | None = None
    annotations: Tuple[Annotation, ...] = ()


@dataclass(frozen=True)
class VariantDefinition:
    name: str
    # None is an empty payload; a tuple (possibly empty) is a positional or
    # named field list.
    fields: Tuple[FieldDefinition, ...] | None = None
    annotations: Tuple[Annotation, ...] = ()


@dataclass(frozen=True)
class SumTypeDefinition:
    name: str
    variants: Tuple[VariantDefinition, ...] = ()
    visibility: Visibility = Visibility.PUBLIC
    generics: Tuple[GenericParameter, ...] = ()
    annotations: Tuple[Annotation, ...] = ()

    def type_reference(self) -> str:
        if not self.generics:
            return self.name
        arguments = ", ".join(param.argument() for param in self.generics)
        return f"{self.name}[{arguments}]"


@dataclass(frozen=True)
class RecordDefinition:
    name: str
    fields: Tuple[FieldDefinition, ...] = ()
    visibility: Visibility = Visibility.PUBLIC
    annotations: Tuple[Annotation, ...] = ()


@dataclass(frozen=True)
class TypeDirectives:
    namespace: str | None = None
    capabilities: Tuple[str, ...] | None = None
    markers: Tuple[str, ...] = ()


@dataclass(frozen=True)
class VariantDirectives:
    skip: bool = False
    capabilities: Tuple[str, ...] | None = None
    passthrough: Tuple[Annotation, ...] = ()
