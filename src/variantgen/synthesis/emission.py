"""Render generated declarations to Python source with LibCST.

Each product type becomes a dataclass carrying its lift and projection as
methods, so the conversions resolve the same way with or without a namespace
class around them. Marker stubs become ABC registrations after the class.
"""

from __future__ import annotations

from typing import Dict, Iterable, List, Sequence

import libcst as cst

from variantgen.config import GeneratorConfig
from variantgen.exceptions import GenerationError
from variantgen.model import Annotation, AnnotationKind, GenericParameter, PayloadShape
from variantgen.synthesis.declarations import (
    CapabilityDirective,
    Declaration,
    FieldDecl,
    LiftDecl,
    MarkerStubDecl,
    NamespaceDecl,
    ProductAnnotation,
    ProductTypeDecl,
    ProjectionDecl,
)
from variantgen.synthesis.naming import pattern_binding
from variantgen.synthesis.pipeline import generate

_DEFAULT_CONFIG = GeneratorConfig()
_DATACLASS_DECORATOR = "dataclasses.dataclass(repr=False, eq=False)"
_TOP_LEVEL_BLANK_LINES = 2
_NESTED_BLANK_LINES = 1


def _expression(text: str, what: str) -> cst.BaseExpression:
    try:
        return cst.parse_expression(text.strip())
    except cst.ParserSyntaxError as exc:
        raise GenerationError(
            "UNPARSEABLE_SOURCE",
            f"{what} {text!r} is not a valid Python expression: {exc.message}",
        ) from exc


def _statement(source: str) -> cst.BaseStatement:
    try:
        return cst.parse_statement(source)
    except cst.ParserSyntaxError as exc:
        first_line = source.splitlines()[0] if source else source
        raise GenerationError(
            "UNPARSEABLE_SOURCE",
            f"Generated statement {first_line!r} does not parse: {exc.message}",
        ) from exc


def _blank_lines(count: int) -> List[cst.EmptyLine]:
    return [cst.EmptyLine(indent=False) for _ in range(count)]


def _comment_text(text: str) -> str:
    collapsed = " ".join(text.split())
    return collapsed if collapsed.startswith("#") else f"# {collapsed}"


def _comment_lines(lints: Sequence[str]) -> List[cst.EmptyLine]:
    return [cst.EmptyLine(comment=cst.Comment(_comment_text(text))) for text in lints]


def _texts(annotations: Iterable[ProductAnnotation], kind: AnnotationKind) -> List[str]:
    return [
        annotation.text
        for annotation in annotations
        if isinstance(annotation, Annotation) and annotation.kind is kind
    ]


def _docstring(lines: Sequence[str]) -> cst.SimpleStatementLine:
    text = "\n".join(lines).strip()
    literal = '"""' + text.replace("\\", "\\\\").replace('"', '\\"') + '"""'
    return cst.SimpleStatementLine(body=[cst.Expr(value=cst.SimpleString(literal))])


def _with_leading(
    statements: List[cst.BaseStatement], lines: List[cst.EmptyLine]
) -> List[cst.BaseStatement]:
    if not statements:
        return statements
    first = statements[0]
    return [
        first.with_changes(leading_lines=[*lines, *first.leading_lines]),
        *statements[1:],
    ]


def _guarded(
    statements: List[cst.BaseStatement], conditions: Sequence[str]
) -> List[cst.BaseStatement]:
    # First condition is the outermost `if`.
    for condition in reversed(conditions):
        statements = [
            cst.If(
                test=_expression(condition, "Condition"),
                body=cst.IndentedBlock(body=statements),
            )
        ]
    return statements


def _class_shell(name: str, type_params: Sequence[GenericParameter]) -> cst.ClassDef:
    params = ", ".join(param.declaration() for param in type_params)
    header = f"class {name}[{params}]:" if params else f"class {name}:"
    statement = _statement(f"{header}\n    pass\n")
    assert isinstance(statement, cst.ClassDef)
    return statement


def _field_statements(field: FieldDecl) -> List[cst.BaseStatement]:
    lints = _texts(field.annotations, AnnotationKind.LINT)
    trailing = cst.TrailingWhitespace()
    if lints:
        trailing = cst.TrailingWhitespace(
            whitespace=cst.SimpleWhitespace("  "),
            comment=cst.Comment("  ".join(_comment_text(text) for text in lints)),
        )
    line = cst.SimpleStatementLine(
        body=[
            cst.AnnAssign(
                target=cst.Name(field.attribute),
                annotation=cst.Annotation(_expression(field.type_hint, "Type hint")),
                value=None,
            )
        ],
        trailing_whitespace=trailing,
    )
    statements: List[cst.BaseStatement] = [line]
    docs = _texts(field.annotations, AnnotationKind.DOC)
    if docs:
        statements.append(_docstring(docs))
    return _guarded(statements, _texts(field.annotations, AnnotationKind.CONDITION))


def _lift_method(decl: LiftDecl) -> cst.FunctionDef:
    if decl.shape is PayloadShape.NAMED:
        arguments = ", ".join(f"{name}=self.{name}" for name in decl.fields)
    else:
        arguments = ", ".join(f"self.{name}" for name in decl.fields)
    statement = _statement(
        f"def {decl.method_name}(self) -> {decl.enum_type}:\n"
        f"    return {decl.enum_name}.{decl.variant_name}({arguments})\n"
    )
    assert isinstance(statement, cst.FunctionDef)
    return statement


def _projection_method(decl: ProjectionDecl, config: GeneratorConfig) -> cst.FunctionDef:
    bindings = [pattern_binding(index) for index in range(len(decl.fields))]
    if decl.shape is PayloadShape.NAMED:
        arguments = ", ".join(
            f"{name}={binding}" for name, binding in zip(decl.fields, bindings)
        )
    else:
        arguments = ", ".join(bindings)
    statement = _statement(
        "@classmethod\n"
        f"def {decl.method_name}(cls, enum_variant: {decl.enum_type}) -> typing.Self:\n"
        "    match enum_variant:\n"
        f"        case {decl.enum_name}.{decl.variant_name}({arguments}):\n"
        f"            return cls({arguments})\n"
        "        case _:\n"
        f"            raise {config.runtime_module}.VariantMismatch("
        f'enum_variant, "{decl.expected}")\n'
    )
    assert isinstance(statement, cst.FunctionDef)
    return statement


def _marker_registration(decl: MarkerStubDecl) -> cst.SimpleStatementLine:
    call = _expression(f"{decl.capability}.register({decl.target})", "Marker registration")
    return cst.SimpleStatementLine(body=[cst.Expr(value=call)])


def _decorator_sources(decl: ProductTypeDecl, config: GeneratorConfig) -> List[str]:
    sources: List[str] = []
    for annotation in decl.annotations:
        if isinstance(annotation, CapabilityDirective):
            capabilities = ", ".join(annotation.capabilities)
            sources.append(f"{config.runtime_module}.derive({capabilities})")
        elif annotation.kind is AnnotationKind.DECORATOR:
            sources.append(annotation.text)
    sources.append(_DATACLASS_DECORATOR)
    return sources


def _product_class(
    decl: ProductTypeDecl,
    methods: Sequence[cst.FunctionDef],
    config: GeneratorConfig,
) -> cst.ClassDef:
    body: List[cst.BaseStatement] = []
    docs = _texts(decl.annotations, AnnotationKind.DOC)
    if docs:
        body.append(_docstring(docs))
    for index, field in enumerate(decl.fields):
        statements = _field_statements(field)
        if index == 0 and body:
            statements = _with_leading(statements, _blank_lines(1))
        body.extend(statements)
    for method in methods:
        body.append(method.with_changes(leading_lines=_blank_lines(1)) if body else method)
    if not body:
        body.append(cst.SimpleStatementLine(body=[cst.Pass()]))
    decorators = [
        cst.Decorator(decorator=_expression(source, "Decorator"))
        for source in _decorator_sources(decl, config)
    ]
    return _class_shell(decl.name, decl.type_params).with_changes(
        body=cst.IndentedBlock(body=body),
        decorators=decorators,
        leading_lines=_comment_lines(_texts(decl.annotations, AnnotationKind.LINT)),
    )


def _product_group(
    decl: ProductTypeDecl,
    methods: Sequence[cst.FunctionDef],
    registrations: Sequence[cst.SimpleStatementLine],
    config: GeneratorConfig,
    blank_lines: int,
) -> List[cst.BaseStatement]:
    statements: List[cst.BaseStatement] = [_product_class(decl, methods, config)]
    for registration in registrations:
        statements.append(registration.with_changes(leading_lines=_blank_lines(blank_lines)))
    statements = _guarded(statements, _texts(decl.annotations, AnnotationKind.CONDITION))
    return _with_leading(statements, _blank_lines(blank_lines))


def _namespace_class(
    decl: NamespaceDecl, config: GeneratorConfig, blank_lines: int
) -> List[cst.BaseStatement]:
    body: List[cst.BaseStatement] = []
    docs = _texts(decl.annotations, AnnotationKind.DOC)
    if docs:
        body.append(_docstring(docs))
    reexport = cst.SimpleStatementLine(
        body=[
            cst.Assign(
                targets=[cst.AssignTarget(target=cst.Name(decl.reexport))],
                value=cst.Name(decl.reexport),
            )
        ],
        leading_lines=_blank_lines(1) if body else [],
    )
    body.append(reexport)
    body.extend(_render_body(decl.body, config, _NESTED_BLANK_LINES))
    class_def = _class_shell(decl.name, ()).with_changes(
        body=cst.IndentedBlock(body=body),
        leading_lines=_comment_lines(_texts(decl.annotations, AnnotationKind.LINT)),
    )
    statements = _guarded([class_def], _texts(decl.annotations, AnnotationKind.CONDITION))
    return _with_leading(statements, _blank_lines(blank_lines))


def _render_body(
    declarations: Sequence[Declaration], config: GeneratorConfig, blank_lines: int
) -> List[cst.BaseStatement]:
    products = {d.name for d in declarations if isinstance(d, ProductTypeDecl)}
    methods: Dict[str, List[cst.FunctionDef]] = {}
    registrations: Dict[str, List[cst.SimpleStatementLine]] = {}
    for decl in declarations:
        if isinstance(decl, LiftDecl):
            owner = decl.variant_name
            methods.setdefault(owner, []).append(_lift_method(decl))
        elif isinstance(decl, ProjectionDecl):
            owner = decl.variant_name
            methods.setdefault(owner, []).append(_projection_method(decl, config))
        elif isinstance(decl, MarkerStubDecl):
            owner = decl.target
            registrations.setdefault(owner, []).append(_marker_registration(decl))
        else:
            continue
        if owner not in products:
            raise ValueError(
                f"{type(decl).__name__} for {owner} has no product type in the same scope"
            )
    statements: List[cst.BaseStatement] = []
    for decl in declarations:
        if isinstance(decl, ProductTypeDecl):
            statements.extend(
                _product_group(
                    decl,
                    methods.get(decl.name, []),
                    registrations.get(decl.name, []),
                    config,
                    blank_lines,
                )
            )
        elif isinstance(decl, NamespaceDecl):
            statements.extend(_namespace_class(decl, config, blank_lines))
    return statements


def _has_product_types(declarations: Iterable[Declaration]) -> bool:
    for decl in declarations:
        if isinstance(decl, ProductTypeDecl):
            return True
        if isinstance(decl, NamespaceDecl) and _has_product_types(decl.body):
            return True
    return False


def _prelude(config: GeneratorConfig) -> List[cst.BaseStatement]:
    runtime_import = _statement(f"import {config.runtime_module}\n")
    return [
        _statement("import dataclasses\n"),
        _statement("import typing\n"),
        runtime_import.with_changes(leading_lines=_blank_lines(1)),
    ]


def _strip_leading_blanks(statement: cst.BaseStatement) -> cst.BaseStatement:
    lines = list(statement.leading_lines)
    while lines and lines[0].comment is None:
        lines.pop(0)
    return statement.with_changes(leading_lines=lines)


def render_declarations(
    declarations: Sequence[Declaration], config: GeneratorConfig = _DEFAULT_CONFIG
) -> str:
    body = _render_body(declarations, config, _TOP_LEVEL_BLANK_LINES)
    if not body:
        return ""
    if _has_product_types(declarations):
        body = [*_prelude(config), *body]
    else:
        body[0] = _strip_leading_blanks(body[0])
    return cst.Module(body=body).code


def render_module(definition: object, config: GeneratorConfig = _DEFAULT_CONFIG) -> str:
    return render_declarations(generate(definition, config), config)
