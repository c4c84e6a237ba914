from __future__ import annotations

from typing import Tuple

from variantgen.model import SumTypeDefinition, TypeDirectives
from variantgen.synthesis.analysis import filter_passthrough
from variantgen.synthesis.declarations import Declaration, NamespaceDecl


def package_declarations(
    definition: SumTypeDefinition,
    directives: TypeDirectives,
    declarations: Tuple[Declaration, ...],
) -> Tuple[Declaration, ...]:
    if directives.namespace is None:
        return declarations
    return (
        NamespaceDecl(
            name=directives.namespace,
            visibility=definition.visibility,
            reexport=definition.name,
            annotations=filter_passthrough(definition.annotations),
            body=declarations,
        ),
    )
