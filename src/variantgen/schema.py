from __future__ import annotations

from typing import List, Literal, Optional, Union

from pydantic import BaseModel


class AnnotationDTO(BaseModel):
    kind: Literal["doc", "condition", "lint", "decorator"]
    text: str


class GenericParameterDTO(BaseModel):
    name: str
    bound: Optional[str] = None
    kind: Literal["type_var", "type_var_tuple", "param_spec"] = "type_var"


class FieldDTO(BaseModel):
    name: Optional[str] = None
    type_hint: str
    annotations: List[AnnotationDTO] = []


class VariantDTO(BaseModel):
    name: str
    fields: Optional[List[FieldDTO]] = None
    annotations: List[AnnotationDTO] = []


class DefinitionDTO(BaseModel):
    kind: Literal["tagged_union", "record"] = "tagged_union"
    name: str
    visibility: Literal["public", "private"] = "public"
    generics: List[GenericParameterDTO] = []
    annotations: List[AnnotationDTO] = []
    variants: List[VariantDTO] = []
    fields: List[FieldDTO] = []


class CapabilityAnnotationDTO(BaseModel):
    kind: Literal["capabilities"]
    level: Literal["type", "variant"]
    capabilities: List[str]


class FieldDeclDTO(BaseModel):
    attribute: str
    type_hint: str
    visibility: Literal["public", "private"]
    annotations: List[AnnotationDTO] = []


class ProductTypeDTO(BaseModel):
    kind: Literal["product_type"]
    name: str
    visibility: Literal["public", "private"]
    type_params: List[GenericParameterDTO] = []
    shape: Literal["empty", "positional", "named"]
    fields: List[FieldDeclDTO] = []
    annotations: List[Union[CapabilityAnnotationDTO, AnnotationDTO]] = []


class ConversionDTO(BaseModel):
    kind: Literal["lift", "projection"]
    enum_name: str
    enum_type: str
    variant_name: str
    method_name: str
    shape: Literal["empty", "positional", "named"]
    fields: List[str] = []


class MarkerStubDTO(BaseModel):
    kind: Literal["marker_stub"]
    capability: str
    target: str


class NamespaceDTO(BaseModel):
    kind: Literal["namespace"]
    name: str
    visibility: Literal["public", "private"]
    reexport: str
    annotations: List[AnnotationDTO] = []
    body: List["DeclarationDTO"] = []


DeclarationDTO = Union[ProductTypeDTO, ConversionDTO, MarkerStubDTO, NamespaceDTO]


NamespaceDTO.model_rebuild()


class GenerationPlanDTO(BaseModel):
    name: str
    declarations: List[DeclarationDTO] = []
