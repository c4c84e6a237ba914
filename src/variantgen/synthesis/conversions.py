from __future__ import annotations

from variantgen.model import SumTypeDefinition
from variantgen.synthesis.analysis import AnalyzedVariant
from variantgen.synthesis.declarations import ConversionPair, LiftDecl, ProjectionDecl
from variantgen.synthesis.naming import lift_method_name, projection_method_name


def synthesize_conversions(
    definition: SumTypeDefinition, analyzed: AnalyzedVariant
) -> ConversionPair:
    fields = tuple(field.attribute for field in analyzed.fields)
    enum_type = definition.type_reference()
    lift = LiftDecl(
        enum_name=definition.name,
        enum_type=enum_type,
        variant_name=analyzed.name,
        method_name=lift_method_name(definition.name),
        shape=analyzed.shape,
        fields=fields,
        type_params=definition.generics,
    )
    projection = ProjectionDecl(
        enum_name=definition.name,
        enum_type=enum_type,
        variant_name=analyzed.name,
        method_name=projection_method_name(definition.name),
        shape=analyzed.shape,
        fields=fields,
        type_params=definition.generics,
    )
    return ConversionPair(lift=lift, projection=projection)
