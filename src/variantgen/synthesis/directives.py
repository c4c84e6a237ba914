"""Directive blocks: `@vgen(...)` decorator annotations.

Type level::

    @vgen(namespace="shapes")
    @vgen(capabilities(Eq, Hash), implement_markers(Drawable))

Variant level::

    @vgen(skip)
    @vgen(capabilities(Clone), functools.total_ordering)

Every other entry shape is rejected; a half-understood directive block never
degrades into a silent no-op.
"""

from __future__ import annotations

from typing import Iterable, List, Tuple

import libcst as cst

from variantgen.config import DEFAULT_DIRECTIVE_TAG
from variantgen.exceptions import DirectiveError
from variantgen.model import (
    Annotation,
    AnnotationKind,
    TypeDirectives,
    VariantDirectives,
)
from variantgen.synthesis.naming import is_identifier

_EMPTY_MODULE = cst.Module(body=[])

NAMESPACE_KEY = "namespace"
CAPABILITIES_KEY = "capabilities"
MARKERS_KEY = "implement_markers"
SKIP_KEY = "skip"


def _type_grammar(tag: str) -> str:
    return (
        f'expected @{tag}(namespace="module_name"), '
        f"@{tag}(capabilities(Eq, Hash)) or @{tag}(implement_markers(Marker))"
    )


def _variant_grammar(tag: str) -> str:
    return (
        f"expected @{tag}(skip), @{tag}(capabilities(Clone)) "
        f"or positional decorator entries such as @{tag}(functools.total_ordering)"
    )


def source_of(node: cst.CSTNode) -> str:
    return _EMPTY_MODULE.code_for_node(node)


def parse_decorator(text: str) -> cst.BaseExpression:
    try:
        return cst.parse_expression(text.strip())
    except cst.ParserSyntaxError as exc:
        raise DirectiveError(
            "MALFORMED_ANNOTATION",
            f"Decorator annotation {text!r} is not a valid expression: {exc.message}",
        ) from exc


def dotted_name(expr: cst.BaseExpression) -> str | None:
    if isinstance(expr, cst.Name):
        return expr.value
    if isinstance(expr, cst.Attribute):
        parent = dotted_name(expr.value)
        if parent is None:
            return None
        return f"{parent}.{expr.attr.value}"
    return None


def _is_call_to(expr: cst.BaseExpression, name: str) -> bool:
    return (
        isinstance(expr, cst.Call)
        and isinstance(expr.func, cst.Name)
        and expr.func.value == name
    )


def _is_name(expr: cst.BaseExpression, name: str) -> bool:
    return isinstance(expr, cst.Name) and expr.value == name


def directive_entries(
    annotations: Iterable[Annotation], tag: str = DEFAULT_DIRECTIVE_TAG
) -> List[cst.Arg]:
    """Arguments of every directive block, in annotation order."""
    entries: List[cst.Arg] = []
    for annotation in annotations:
        if annotation.kind is not AnnotationKind.DECORATOR:
            continue
        expr = parse_decorator(annotation.text)
        if _is_name(expr, tag):
            raise DirectiveError(
                "MALFORMED_DIRECTIVE",
                f"@{tag} needs at least one directive entry.",
                hint=f"write @{tag}(...)",
            )
        if not _is_call_to(expr, tag):
            continue
        assert isinstance(expr, cst.Call)
        for arg in expr.args:
            if arg.star:
                raise DirectiveError(
                    "MALFORMED_DIRECTIVE",
                    f"Unpacked arguments are not allowed in @{tag}(...): {source_of(arg.value)}",
                )
            entries.append(arg)
    return entries


def _name_list(call: cst.Call, key: str, grammar: str) -> Tuple[str, ...]:
    names: List[str] = []
    for arg in call.args:
        name = dotted_name(arg.value)
        if arg.star or arg.keyword is not None or name is None:
            raise DirectiveError(
                "MALFORMED_DIRECTIVE",
                f"{key}(...) entries must be bare or dotted names, got {source_of(arg.value)!r}",
                hint=grammar,
            )
        names.append(name)
    return tuple(names)


def _namespace_value(expr: cst.BaseExpression, grammar: str) -> str:
    if not isinstance(expr, cst.SimpleString):
        raise DirectiveError(
            "MALFORMED_DIRECTIVE",
            f"{NAMESPACE_KEY} must be a plain string literal, got {source_of(expr)!r}",
            hint=grammar,
        )
    value = expr.evaluated_value
    if not isinstance(value, str):
        raise DirectiveError(
            "MALFORMED_DIRECTIVE",
            f"{NAMESPACE_KEY} must be a str literal, not bytes: {expr.value}",
            hint=grammar,
        )
    if not is_identifier(value):
        raise DirectiveError(
            "INVALID_NAMESPACE",
            f"{NAMESPACE_KEY} {value!r} is not a valid Python identifier",
            hint=grammar,
        )
    return value


def _duplicate(key: str, tag: str) -> DirectiveError:
    return DirectiveError(
        "DUPLICATE_DIRECTIVE",
        f"{key} may only be given once across all @{tag}(...) blocks",
    )


def parse_type_directives(
    annotations: Iterable[Annotation], tag: str = DEFAULT_DIRECTIVE_TAG
) -> TypeDirectives:
    grammar = _type_grammar(tag)
    namespace: str | None = None
    capabilities: Tuple[str, ...] | None = None
    markers: Tuple[str, ...] | None = None
    for arg in directive_entries(annotations, tag):
        value = arg.value
        if arg.keyword is not None:
            key = arg.keyword.value
            if key in (CAPABILITIES_KEY, MARKERS_KEY):
                raise DirectiveError(
                    "MALFORMED_DIRECTIVE",
                    f"Wrong form for type-level directive {key}={source_of(value)}",
                    hint=grammar,
                )
            if key != NAMESPACE_KEY:
                raise DirectiveError(
                    "UNKNOWN_DIRECTIVE",
                    f"Unsupported type-level directive {key}={source_of(value)}",
                    hint=grammar,
                )
            if namespace is not None:
                raise _duplicate(NAMESPACE_KEY, tag)
            namespace = _namespace_value(value, grammar)
        elif _is_call_to(value, CAPABILITIES_KEY):
            if capabilities is not None:
                raise _duplicate(CAPABILITIES_KEY, tag)
            assert isinstance(value, cst.Call)
            capabilities = _name_list(value, CAPABILITIES_KEY, grammar)
        elif _is_call_to(value, MARKERS_KEY):
            if markers is not None:
                raise _duplicate(MARKERS_KEY, tag)
            assert isinstance(value, cst.Call)
            markers = _name_list(value, MARKERS_KEY, grammar)
        elif any(
            _is_name(value, key) or _is_call_to(value, key)
            for key in (NAMESPACE_KEY, CAPABILITIES_KEY, MARKERS_KEY)
        ):
            raise DirectiveError(
                "MALFORMED_DIRECTIVE",
                f"Wrong form for type-level directive {source_of(value)!r}",
                hint=grammar,
            )
        else:
            raise DirectiveError(
                "UNKNOWN_DIRECTIVE",
                f"Unsupported type-level directive {source_of(value)!r}",
                hint=grammar,
            )
    return TypeDirectives(
        namespace=namespace,
        capabilities=capabilities,
        markers=markers or (),
    )


def parse_variant_directives(
    annotations: Iterable[Annotation], tag: str = DEFAULT_DIRECTIVE_TAG
) -> VariantDirectives:
    grammar = _variant_grammar(tag)
    skip = False
    capabilities: Tuple[str, ...] | None = None
    passthrough: List[Annotation] = []
    for arg in directive_entries(annotations, tag):
        value = arg.value
        if arg.keyword is not None:
            raise DirectiveError(
                "MALFORMED_DIRECTIVE",
                f"Keyword entries are not allowed at variant level: {arg.keyword.value}=...",
                hint=grammar,
            )
        if _is_name(value, SKIP_KEY):
            skip = True
        elif _is_call_to(value, CAPABILITIES_KEY):
            if capabilities is not None:
                raise _duplicate(CAPABILITIES_KEY, tag)
            assert isinstance(value, cst.Call)
            capabilities = _name_list(value, CAPABILITIES_KEY, grammar)
        elif _is_call_to(value, SKIP_KEY) or _is_name(value, CAPABILITIES_KEY):
            raise DirectiveError(
                "MALFORMED_DIRECTIVE",
                f"Wrong form for variant-level directive {source_of(value)!r}",
                hint=grammar,
            )
        elif any(
            _is_name(value, key) or _is_call_to(value, key)
            for key in (NAMESPACE_KEY, MARKERS_KEY)
        ):
            raise DirectiveError(
                "UNKNOWN_DIRECTIVE",
                f"{source_of(value)!r} is a type-level directive",
                hint=grammar,
            )
        elif isinstance(value, (cst.Name, cst.Attribute, cst.Call)):
            passthrough.append(Annotation(AnnotationKind.DECORATOR, source_of(value)))
        else:
            raise DirectiveError(
                "MALFORMED_DIRECTIVE",
                f"Unsupported variant-level directive {source_of(value)!r}",
                hint=grammar,
            )
    return VariantDirectives(
        skip=skip,
        capabilities=capabilities,
        passthrough=tuple(passthrough),
    )
