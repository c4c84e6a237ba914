"""Convert a validated JSON payload into the frozen input model."""

from __future__ import annotations

from typing import Iterable, List, Tuple

from variantgen.exceptions import ShapeError
from variantgen.json_types import JSONObject
from variantgen.model import (
    Annotation,
    AnnotationKind,
    FieldDefinition,
    GenericKind,
    GenericParameter,
    RecordDefinition,
    SumTypeDefinition,
    VariantDefinition,
    Visibility,
)
from variantgen.schema import (
    AnnotationDTO,
    DefinitionDTO,
    FieldDTO,
    GenericParameterDTO,
    VariantDTO,
)
from variantgen.synthesis.analysis import check_generic_parameters
from variantgen.synthesis.naming import is_identifier


def _require_identifier(name: str, role: str) -> str:
    if not is_identifier(name):
        raise ShapeError(
            "INVALID_IDENTIFIER",
            f"{role} name {name!r} is not a Python identifier.",
        )
    return name


def _annotations(items: Iterable[AnnotationDTO]) -> Tuple[Annotation, ...]:
    return tuple(Annotation(kind=AnnotationKind(a.kind), text=a.text) for a in items)


def _generic(param: GenericParameterDTO) -> GenericParameter:
    generic = GenericParameter(
        name=_require_identifier(param.name, "Generic parameter"),
        bound=param.bound,
        kind=GenericKind(param.kind),
    )
    check_generic_parameters((generic,))
    return generic


def _field(item: FieldDTO) -> FieldDefinition:
    name = item.name
    if name is not None:
        _require_identifier(name, "Field")
    return FieldDefinition(
        type_hint=item.type_hint,
        name=name,
        annotations=_annotations(item.annotations),
    )


def _variant(item: VariantDTO) -> VariantDefinition:
    fields = None
    if item.fields is not None:
        fields = tuple(_field(f) for f in item.fields)
    return VariantDefinition(
        name=_require_identifier(item.name, "Variant"),
        fields=fields,
        annotations=_annotations(item.annotations),
    )


def definition_from_dto(dto: DefinitionDTO) -> SumTypeDefinition | RecordDefinition:
    name = _require_identifier(dto.name, "Type")
    visibility = Visibility(dto.visibility)
    annotations = _annotations(dto.annotations)
    if dto.kind == "record":
        return RecordDefinition(
            name=name,
            fields=tuple(_field(f) for f in dto.fields),
            visibility=visibility,
            annotations=annotations,
        )
    variants: List[VariantDefinition] = [_variant(v) for v in dto.variants]
    return SumTypeDefinition(
        name=name,
        variants=tuple(variants),
        visibility=visibility,
        generics=tuple(_generic(p) for p in dto.generics),
        annotations=annotations,
    )


def load_definition(payload: JSONObject) -> SumTypeDefinition | RecordDefinition:
    """Validate a payload and build the definition it describes.

    Raises pydantic.ValidationError for a payload that does not match the
    schema, and ShapeError for names that are not identifiers or for a bound
    on a TypeVarTuple or ParamSpec parameter.
    """
    return definition_from_dto(DefinitionDTO.model_validate(payload))
