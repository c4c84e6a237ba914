from __future__ import annotations

import pytest

from tests.definition_helpers import condition, directive, doc, lint, shape_definition


def _load():
    from variantgen.config import GeneratorConfig
    from variantgen.model import FieldDefinition, GenericKind, GenericParameter
    from variantgen.synthesis.emission import render_declarations, render_module

    return (
        GeneratorConfig,
        FieldDefinition,
        GenericKind,
        GenericParameter,
        render_declarations,
        render_module,
    )


def test_render_module_positional_variant() -> None:
    *_, render_module = _load()
    source = render_module(shape_definition())
    assert source.startswith(
        "import dataclasses\n"
        "import typing\n"
        "\n"
        "import variantgen.runtime\n"
        "\n"
        "\n"
        "@dataclasses.dataclass(repr=False, eq=False)\n"
        "class Circle:\n"
        "    _0: float\n"
    )
    assert (
        "    def into_shape(self) -> Shape:\n"
        "        return Shape.Circle(self._0)\n"
    ) in source


def test_render_module_projection_method() -> None:
    *_, render_module = _load()
    source = render_module(shape_definition())
    assert "    @classmethod\n    def try_from_shape(cls, enum_variant: Shape) -> typing.Self:\n" in source
    assert "            case Shape.Rect(width=field_0, height=field_1):\n" in source
    assert "                return cls(width=field_0, height=field_1)\n" in source
    assert "            case Shape.Circle(field_0):\n" in source
    assert "            case Shape.Unit():\n                return cls()\n" in source
    assert (
        '                raise variantgen.runtime.VariantMismatch(enum_variant, "Shape.Unit")\n'
        in source
    )


def test_render_module_lifts_named_and_empty_payloads() -> None:
    *_, render_module = _load()
    source = render_module(shape_definition())
    assert "        return Shape.Rect(width=self.width, height=self.height)\n" in source
    assert "        return Shape.Unit()\n" in source


def test_decorator_order() -> None:
    *_, render_module = _load()
    source = render_module(
        shape_definition(
            annotations=(directive("vgen(capabilities(Eq, Hash))"),),
            circle=(directive("vgen(capabilities(Eq), functools.total_ordering)"),),
        )
    )
    assert (
        "@variantgen.runtime.derive(Eq, Hash)\n"
        "@variantgen.runtime.derive(Eq)\n"
        "@functools.total_ordering\n"
        "@dataclasses.dataclass(repr=False, eq=False)\n"
        "class Circle:\n"
    ) in source
    assert (
        "@variantgen.runtime.derive(Eq, Hash)\n"
        "@dataclasses.dataclass(repr=False, eq=False)\n"
        "class Rect:\n"
    ) in source


def test_docstrings_and_lints() -> None:
    _, FieldDefinition, _, _, _, render_module = _load()
    from variantgen.model import SumTypeDefinition, VariantDefinition

    definition = SumTypeDefinition(
        name="Event",
        variants=(
            VariantDefinition(
                "Click",
                (
                    FieldDefinition(
                        "int",
                        name="x",
                        annotations=(doc("Column."), lint("noqa: E501")),
                    ),
                ),
                (lint("pylint: disable=too-few-public-methods"), doc('The "click" event.')),
            ),
        ),
    )
    source = render_module(definition)
    assert (
        "# pylint: disable=too-few-public-methods\n"
        "@dataclasses.dataclass(repr=False, eq=False)\n"
        "class Click:\n"
        '    """The \\"click\\" event."""\n'
        "\n"
        "    x: int  # noqa: E501\n"
        '    """Column."""\n'
    ) in source


def test_conditions_guard_class_and_registrations() -> None:
    *_, render_module = _load()
    source = render_module(
        shape_definition(
            annotations=(directive("vgen(implement_markers(Drawable))"),),
            circle=(condition("FEATURE"), condition("sys.version_info >= (3, 13)")),
        )
    )
    assert "if FEATURE:\n    if sys.version_info >= (3, 13):\n" in source
    assert "        class Circle:\n" in source
    assert "        Drawable.register(Circle)\n" in source
    assert "\n\nDrawable.register(Rect)\n" in source


def test_field_conditions_guard_the_field() -> None:
    _, FieldDefinition, _, _, _, render_module = _load()
    from variantgen.model import SumTypeDefinition, VariantDefinition

    definition = SumTypeDefinition(
        name="Event",
        variants=(
            VariantDefinition(
                "Click",
                (FieldDefinition("int", name="x", annotations=(condition("DEBUG"),)),),
            ),
        ),
    )
    assert "    if DEBUG:\n        x: int\n" in render_module(definition)


def test_generic_type_parameters() -> None:
    _, _, GenericKind, GenericParameter, _, render_module = _load()
    source = render_module(
        shape_definition(
            generics=(
                GenericParameter("T", bound="Hashable"),
                GenericParameter("P", kind=GenericKind.PARAM_SPEC),
            )
        )
    )
    assert "class Circle[T: Hashable, **P]:\n" in source
    assert "    def into_shape(self) -> Shape[T, P]:\n" in source
    assert "    def try_from_shape(cls, enum_variant: Shape[T, P]) -> typing.Self:\n" in source


def test_namespace_rendering() -> None:
    *_, render_module = _load()
    source = render_module(
        shape_definition(
            annotations=(doc("Shape payloads."), directive('vgen(namespace="shapes")')),
            rect=(directive("vgen(skip)"),),
            unit=(directive("vgen(skip)"),),
        )
    )
    assert (
        "class shapes:\n"
        '    """Shape payloads."""\n'
        "\n"
        "    Shape = Shape\n"
        "\n"
        "    @dataclasses.dataclass(repr=False, eq=False)\n"
        "    class Circle:\n"
        "        _0: float\n"
    ) in source


def test_empty_output_has_no_imports() -> None:
    *_, render_declarations, render_module = _load()
    skip = (directive("vgen(skip)"),)
    assert render_module(shape_definition(circle=skip, rect=skip, unit=skip)) == ""
    assert render_declarations(()) == ""


def test_empty_namespace_has_no_imports() -> None:
    *_, render_module = _load()
    skip = (directive("vgen(skip)"),)
    source = render_module(
        shape_definition(
            annotations=(directive('vgen(namespace="shapes")'),),
            circle=skip,
            rect=skip,
            unit=skip,
        )
    )
    assert source == "class shapes:\n    Shape = Shape\n"


def test_custom_runtime_module() -> None:
    GeneratorConfig, *_, render_module = _load()
    config = GeneratorConfig(runtime_module="myproject.variants")
    source = render_module(
        shape_definition(annotations=(directive("vgen(capabilities(Eq))"),)), config
    )
    assert "import myproject.variants\n" in source
    assert "@myproject.variants.derive(Eq)\n" in source
    assert "myproject.variants.VariantMismatch(" in source
    assert "variantgen.runtime" not in source


def test_unparseable_type_hint() -> None:
    _, FieldDefinition, _, _, _, render_module = _load()
    from variantgen.exceptions import GenerationError
    from variantgen.model import SumTypeDefinition, VariantDefinition

    definition = SumTypeDefinition(
        name="Bad",
        variants=(VariantDefinition("Oops", (FieldDefinition("list[int"),)),),
    )
    with pytest.raises(GenerationError) as exc:
        render_module(definition)
    assert exc.value.code == "UNPARSEABLE_SOURCE"


def test_conversion_without_product_in_scope_is_rejected() -> None:
    *_, render_declarations, _ = _load()
    from variantgen.synthesis.pipeline import generate

    declarations = generate(shape_definition())
    with pytest.raises(ValueError):
        render_declarations(declarations[1:2])
