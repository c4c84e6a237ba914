from __future__ import annotations

from typing import List

from variantgen.model import SumTypeDefinition, TypeDirectives
from variantgen.synthesis.analysis import AnalyzedVariant
from variantgen.synthesis.declarations import (
    CapabilityDirective,
    DirectiveLevel,
    FieldDecl,
    ProductAnnotation,
    ProductTypeDecl,
)


def product_annotations(
    analyzed: AnalyzedVariant, directives: TypeDirectives
) -> tuple[ProductAnnotation, ...]:
    """Annotations in emission order.

    Pass-through annotations, then the type-level capability bundle, then the
    variant-level bundle, then the variant's raw directive entries. Bundles
    naming the same capability are both kept.
    """
    annotations: List[ProductAnnotation] = list(analyzed.annotations)
    if directives.capabilities is not None:
        annotations.append(
            CapabilityDirective(DirectiveLevel.TYPE, directives.capabilities)
        )
    if analyzed.directives.capabilities is not None:
        annotations.append(
            CapabilityDirective(DirectiveLevel.VARIANT, analyzed.directives.capabilities)
        )
    annotations.extend(analyzed.directives.passthrough)
    return tuple(annotations)


def synthesize_product_type(
    definition: SumTypeDefinition,
    analyzed: AnalyzedVariant,
    directives: TypeDirectives,
) -> ProductTypeDecl:
    fields = tuple(
        FieldDecl(
            attribute=field.attribute,
            type_hint=field.type_hint,
            visibility=definition.visibility,
            annotations=field.annotations,
        )
        for field in analyzed.fields
    )
    return ProductTypeDecl(
        name=analyzed.name,
        visibility=definition.visibility,
        type_params=definition.generics,
        shape=analyzed.shape,
        fields=fields,
        annotations=product_annotations(analyzed, directives),
    )
