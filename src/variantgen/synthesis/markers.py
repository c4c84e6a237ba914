from __future__ import annotations

from typing import Tuple

from variantgen.model import SumTypeDefinition, TypeDirectives
from variantgen.synthesis.analysis import AnalyzedVariant
from variantgen.synthesis.declarations import MarkerStubDecl


def bind_markers(
    definition: SumTypeDefinition,
    analyzed: AnalyzedVariant,
    directives: TypeDirectives,
) -> Tuple[MarkerStubDecl, ...]:
    # Whether the marker is an ABC that accepts the product type is only
    # discovered when the generated module runs.
    return tuple(
        MarkerStubDecl(
            capability=marker,
            target=analyzed.name,
            type_params=definition.generics,
        )
        for marker in directives.markers
    )
