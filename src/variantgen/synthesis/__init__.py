"""Synthesis subpackage for variantgen."""

from variantgen.synthesis.analysis import AnalyzedField, AnalyzedVariant, analyze_variant
from variantgen.synthesis.conversions import synthesize_conversions
from variantgen.synthesis.declarations import (
    CapabilityDirective,
    ConversionPair,
    Declaration,
    DirectiveLevel,
    FieldDecl,
    LiftDecl,
    MarkerStubDecl,
    NamespaceDecl,
    ProductTypeDecl,
    ProjectionDecl,
    plan_to_payload,
)
from variantgen.synthesis.directives import parse_type_directives, parse_variant_directives
from variantgen.synthesis.emission import render_declarations, render_module
from variantgen.synthesis.markers import bind_markers
from variantgen.synthesis.packaging import package_declarations
from variantgen.synthesis.pipeline import generate
from variantgen.synthesis.selection import SelectedVariant, VariantSelection, select_variants
from variantgen.synthesis.structs import synthesize_product_type

__all__ = [
    "AnalyzedField",
    "AnalyzedVariant",
    "CapabilityDirective",
    "ConversionPair",
    "Declaration",
    "DirectiveLevel",
    "FieldDecl",
    "LiftDecl",
    "MarkerStubDecl",
    "NamespaceDecl",
    "ProductTypeDecl",
    "ProjectionDecl",
    "SelectedVariant",
    "VariantSelection",
    "analyze_variant",
    "bind_markers",
    "generate",
    "package_declarations",
    "parse_type_directives",
    "parse_variant_directives",
    "plan_to_payload",
    "render_declarations",
    "render_module",
    "select_variants",
    "synthesize_conversions",
    "synthesize_product_type",
]
