"""Declarations produced by the generator, before rendering to source."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Tuple, Union

from variantgen.json_types import JSONObject
from variantgen.model import Annotation, GenericParameter, PayloadShape, Visibility


class DirectiveLevel(str, Enum):
    TYPE = "type"
    VARIANT = "variant"


@dataclass(frozen=True)
class CapabilityDirective:
    level: DirectiveLevel
    capabilities: Tuple[str, ...]


ProductAnnotation = Union[Annotation, CapabilityDirective]


@dataclass(frozen=True)
class FieldDecl:
    attribute: str
    type_hint: str
    visibility: Visibility
    annotations: Tuple[Annotation, ...] = ()


@dataclass(frozen=True)
class ProductTypeDecl:
    name: str
    visibility: Visibility
    type_params: Tuple[GenericParameter, ...]
    shape: PayloadShape
    fields: Tuple[FieldDecl, ...]
    annotations: Tuple[ProductAnnotation, ...]


@dataclass(frozen=True)
class LiftDecl:
    enum_name: str
    enum_type: str
    variant_name: str
    method_name: str
    shape: PayloadShape
    fields: Tuple[str, ...]
    type_params: Tuple[GenericParameter, ...]


@dataclass(frozen=True)
class ProjectionDecl:
    enum_name: str
    enum_type: str
    variant_name: str
    method_name: str
    shape: PayloadShape
    fields: Tuple[str, ...]
    type_params: Tuple[GenericParameter, ...]

    @property
    def expected(self) -> str:
        return f"{self.enum_name}.{self.variant_name}"


@dataclass(frozen=True)
class ConversionPair:
    lift: LiftDecl
    projection: ProjectionDecl


@dataclass(frozen=True)
class MarkerStubDecl:
    capability: str
    target: str
    type_params: Tuple[GenericParameter, ...]


@dataclass(frozen=True)
class NamespaceDecl:
    name: str
    visibility: Visibility
    reexport: str
    annotations: Tuple[Annotation, ...]
    body: Tuple["Declaration", ...]


Declaration = Union[
    ProductTypeDecl, LiftDecl, ProjectionDecl, MarkerStubDecl, NamespaceDecl
]


def _annotation_payload(annotation: ProductAnnotation) -> JSONObject:
    if isinstance(annotation, CapabilityDirective):
        return {
            "kind": "capabilities",
            "level": annotation.level.value,
            "capabilities": list(annotation.capabilities),
        }
    return {"kind": annotation.kind.value, "text": annotation.text}


def _generic_payload(param: GenericParameter) -> JSONObject:
    return {"name": param.name, "bound": param.bound, "kind": param.kind.value}


def declaration_payload(declaration: Declaration) -> JSONObject:
    if isinstance(declaration, ProductTypeDecl):
        return {
            "kind": "product_type",
            "name": declaration.name,
            "visibility": declaration.visibility.value,
            "type_params": [_generic_payload(p) for p in declaration.type_params],
            "shape": declaration.shape.value,
            "fields": [
                {
                    "attribute": f.attribute,
                    "type_hint": f.type_hint,
                    "visibility": f.visibility.value,
                    "annotations": [_annotation_payload(a) for a in f.annotations],
                }
                for f in declaration.fields
            ],
            "annotations": [_annotation_payload(a) for a in declaration.annotations],
        }
    if isinstance(declaration, (LiftDecl, ProjectionDecl)):
        return {
            "kind": "lift" if isinstance(declaration, LiftDecl) else "projection",
            "enum_name": declaration.enum_name,
            "enum_type": declaration.enum_type,
            "variant_name": declaration.variant_name,
            "method_name": declaration.method_name,
            "shape": declaration.shape.value,
            "fields": list(declaration.fields),
        }
    if isinstance(declaration, MarkerStubDecl):
        return {
            "kind": "marker_stub",
            "capability": declaration.capability,
            "target": declaration.target,
        }
    return {
        "kind": "namespace",
        "name": declaration.name,
        "visibility": declaration.visibility.value,
        "reexport": declaration.reexport,
        "annotations": [_annotation_payload(a) for a in declaration.annotations],
        "body": [declaration_payload(d) for d in declaration.body],
    }


def plan_to_payload(name: str, declarations: Tuple[Declaration, ...]) -> JSONObject:
    return {
        "name": name,
        "declarations": [declaration_payload(d) for d in declarations],
    }
