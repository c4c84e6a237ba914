from __future__ import annotations

from typing import List, Tuple

from variantgen.config import GeneratorConfig
from variantgen.exceptions import InputKindError
from variantgen.model import RecordDefinition, SumTypeDefinition
from variantgen.synthesis.analysis import analyze_variant, check_generic_parameters
from variantgen.synthesis.conversions import synthesize_conversions
from variantgen.synthesis.declarations import Declaration
from variantgen.synthesis.directives import parse_type_directives
from variantgen.synthesis.markers import bind_markers
from variantgen.synthesis.packaging import package_declarations
from variantgen.synthesis.selection import select_variants
from variantgen.synthesis.structs import synthesize_product_type

_DEFAULT_CONFIG = GeneratorConfig()


def _require_tagged_union(definition: object) -> SumTypeDefinition:
    if isinstance(definition, SumTypeDefinition):
        return definition
    if isinstance(definition, RecordDefinition):
        raise InputKindError("record", definition.name)
    raise InputKindError(type(definition).__name__, repr(definition))


def generate(
    definition: object, config: GeneratorConfig = _DEFAULT_CONFIG
) -> Tuple[Declaration, ...]:
    """Declarations for every retained variant of a tagged union.

    Per variant, in declaration order: the product type, its lift, its
    projection, then one marker stub per configured marker. Raises a
    GenerationError subclass before producing anything if the definition or
    one of its directive blocks is malformed.
    """
    union = _require_tagged_union(definition)
    check_generic_parameters(union.generics)
    directives = parse_type_directives(union.annotations, config.directive_tag)
    selection = select_variants(union.variants, config.directive_tag)
    declarations: List[Declaration] = []
    for selected in selection.retained:
        analyzed = analyze_variant(selected)
        conversions = synthesize_conversions(union, analyzed)
        declarations.append(synthesize_product_type(union, analyzed, directives))
        declarations.append(conversions.lift)
        declarations.append(conversions.projection)
        declarations.extend(bind_markers(union, analyzed, directives))
    return package_declarations(union, directives, tuple(declarations))
