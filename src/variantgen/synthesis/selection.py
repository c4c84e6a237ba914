from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Tuple

from variantgen.config import DEFAULT_DIRECTIVE_TAG
from variantgen.model import VariantDefinition, VariantDirectives
from variantgen.synthesis.directives import parse_variant_directives


@dataclass(frozen=True)
class SelectedVariant:
    variant: VariantDefinition
    directives: VariantDirectives


@dataclass(frozen=True)
class VariantSelection:
    retained: Tuple[SelectedVariant, ...]
    skipped: Tuple[VariantDefinition, ...]


def select_variants(
    variants: Iterable[VariantDefinition], tag: str = DEFAULT_DIRECTIVE_TAG
) -> VariantSelection:
    """Split variants on `@vgen(skip)`, keeping declaration order in both halves."""
    retained: List[SelectedVariant] = []
    skipped: List[VariantDefinition] = []
    for variant in variants:
        directives = parse_variant_directives(variant.annotations, tag)
        if directives.skip:
            skipped.append(variant)
        else:
            retained.append(SelectedVariant(variant=variant, directives=directives))
    return VariantSelection(retained=tuple(retained), skipped=tuple(skipped))
