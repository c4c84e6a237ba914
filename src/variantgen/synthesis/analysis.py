from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Tuple

from variantgen.exceptions import ShapeError
from variantgen.model import (
    PASSTHROUGH_KINDS,
    Annotation,
    FieldDefinition,
    GenericKind,
    GenericParameter,
    PayloadShape,
    VariantDirectives,
)
from variantgen.synthesis.naming import positional_field_name
from variantgen.synthesis.selection import SelectedVariant


@dataclass(frozen=True)
class AnalyzedField:
    index: int
    name: str | None
    type_hint: str
    annotations: Tuple[Annotation, ...] = ()

    @property
    def attribute(self) -> str:
        """Attribute name on the generated product type."""
        if self.name is None:
            return positional_field_name(self.index)
        return self.name


@dataclass(frozen=True)
class AnalyzedVariant:
    name: str
    shape: PayloadShape
    fields: Tuple[AnalyzedField, ...]
    annotations: Tuple[Annotation, ...]
    directives: VariantDirectives


def filter_passthrough(annotations: Iterable[Annotation]) -> Tuple[Annotation, ...]:
    return tuple(a for a in annotations if a.kind in PASSTHROUGH_KINDS)


def check_generic_parameters(generics: Iterable[GenericParameter]) -> None:
    """Only plain type variables take a bound or constraints in a type parameter list."""
    for param in generics:
        if param.bound and param.kind is not GenericKind.TYPE_VAR:
            raise ShapeError(
                "INVALID_GENERIC_BOUND",
                f"Generic parameter {param.name} is a {param.kind.value} "
                f"and cannot carry the bound {param.bound!r}",
            )


def classify_shape(
    variant_name: str, fields: Tuple[FieldDefinition, ...] | None
) -> PayloadShape:
    if fields is None:
        return PayloadShape.EMPTY
    named = [f.name is not None for f in fields]
    if fields and all(named):
        return PayloadShape.NAMED
    if not any(named):
        return PayloadShape.POSITIONAL
    raise ShapeError(
        "MIXED_FIELD_STYLES",
        f"Variant {variant_name} mixes named and positional fields",
    )


def analyze_variant(selected: SelectedVariant) -> AnalyzedVariant:
    variant = selected.variant
    shape = classify_shape(variant.name, variant.fields)
    fields = tuple(
        AnalyzedField(
            index=index,
            name=field.name,
            type_hint=field.type_hint,
            annotations=filter_passthrough(field.annotations),
        )
        for index, field in enumerate(variant.fields or ())
    )
    return AnalyzedVariant(
        name=variant.name,
        shape=shape,
        fields=fields,
        annotations=filter_passthrough(variant.annotations),
        directives=selected.directives,
    )
