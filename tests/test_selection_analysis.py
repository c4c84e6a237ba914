from __future__ import annotations

import pytest

from tests.definition_helpers import condition, directive, doc, lint, named, positional


def _load():
    from variantgen.exceptions import ShapeError
    from variantgen.model import FieldDefinition, PayloadShape, VariantDefinition
    from variantgen.synthesis.analysis import analyze_variant, classify_shape
    from variantgen.synthesis.selection import select_variants

    return (
        ShapeError,
        FieldDefinition,
        PayloadShape,
        VariantDefinition,
        analyze_variant,
        classify_shape,
        select_variants,
    )


def test_select_variants_preserves_order_and_skips() -> None:
    _, _, _, VariantDefinition, _, _, select_variants = _load()
    variants = (
        VariantDefinition("A"),
        VariantDefinition("B", annotations=(directive("vgen(skip)"),)),
        VariantDefinition("C"),
        VariantDefinition("D", annotations=(directive("vgen(skip)"),)),
    )
    selection = select_variants(variants)
    assert [s.variant.name for s in selection.retained] == ["A", "C"]
    assert [v.name for v in selection.skipped] == ["B", "D"]


def test_select_variants_with_everything_skipped() -> None:
    _, _, _, VariantDefinition, _, _, select_variants = _load()
    selection = select_variants(
        (VariantDefinition("Only", annotations=(directive("vgen(skip)"),)),)
    )
    assert selection.retained == ()


def test_select_variants_rejects_malformed_blocks_on_skipped_variants() -> None:
    _, _, _, VariantDefinition, _, _, select_variants = _load()
    from variantgen.exceptions import DirectiveError

    with pytest.raises(DirectiveError):
        select_variants(
            (
                VariantDefinition(
                    "A", annotations=(directive("vgen(skip)"), directive("vgen(bogus=1)"))
                ),
            )
        )


def test_classify_shape() -> None:
    ShapeError, FieldDefinition, PayloadShape, _, _, classify_shape, _ = _load()
    assert classify_shape("Unit", None) is PayloadShape.EMPTY
    assert classify_shape("Tuple", ()) is PayloadShape.POSITIONAL
    assert classify_shape("Circle", positional("float")) is PayloadShape.POSITIONAL
    assert classify_shape("Rect", named(width="float")) is PayloadShape.NAMED
    with pytest.raises(ShapeError) as exc:
        classify_shape(
            "Broken",
            (FieldDefinition("int", name="x"), FieldDefinition("int")),
        )
    assert exc.value.code == "MIXED_FIELD_STYLES"


def test_analyze_variant_names_positional_fields_by_index() -> None:
    _, _, PayloadShape, VariantDefinition, analyze_variant, _, select_variants = _load()
    selection = select_variants((VariantDefinition("Pair", positional("int", "str")),))
    analyzed = analyze_variant(selection.retained[0])
    assert analyzed.shape is PayloadShape.POSITIONAL
    assert [f.attribute for f in analyzed.fields] == ["_0", "_1"]
    assert [f.type_hint for f in analyzed.fields] == ["int", "str"]


def test_analyze_variant_keeps_only_passthrough_annotations() -> None:
    _, FieldDefinition, _, VariantDefinition, analyze_variant, _, select_variants = _load()
    variant = VariantDefinition(
        "Circle",
        (
            FieldDefinition(
                "float",
                annotations=(doc("Radius."), directive("serde"), lint("noqa: E501")),
            ),
        ),
        (
            directive("vgen(capabilities(Eq))"),
            condition("FEATURE"),
            directive("functools.cache"),
            doc("A circle."),
        ),
    )
    analyzed = analyze_variant(select_variants((variant,)).retained[0])
    assert [a.text for a in analyzed.annotations] == ["FEATURE", "A circle."]
    assert [a.text for a in analyzed.fields[0].annotations] == ["Radius.", "noqa: E501"]
    assert analyzed.directives.capabilities == ("Eq",)
