"""Generation failures raised by the variantgen transform."""

from __future__ import annotations

VALID_ERROR_CODES = frozenset(
    {
        "MALFORMED_ANNOTATION",
        "MALFORMED_DIRECTIVE",
        "UNKNOWN_DIRECTIVE",
        "DUPLICATE_DIRECTIVE",
        "INVALID_NAMESPACE",
        "NOT_A_TAGGED_UNION",
        "MIXED_FIELD_STYLES",
        "INVALID_IDENTIFIER",
        "UNPARSEABLE_SOURCE",
        "INVALID_GENERIC_BOUND",
    }
)


class GenerationError(Exception):
    """A fatal failure for one definition.

    Generation aborts as soon as one of these is raised; nothing produced for
    the definition up to that point is emitted.
    """

    def __init__(self, code: str, message: str, hint: str | None = None):
        if code not in VALID_ERROR_CODES:
            raise ValueError(f"Unknown generation error code: {code}")
        super().__init__(message)
        self.code = code
        self.message = message
        self.hint = hint

    def __str__(self) -> str:
        if self.hint:
            return f"{self.message} ({self.hint})"
        return self.message


class DirectiveError(GenerationError):
    """A directive block that does not follow the directive grammar."""


class InputKindError(GenerationError):
    """The definition handed to the generator is not a tagged union."""

    def __init__(self, kind: str, name: str):
        super().__init__(
            "NOT_A_TAGGED_UNION",
            f"{name} is a {kind}, variant types can only be generated for a tagged union.",
        )
        self.kind = kind
        self.name = name


class ShapeError(GenerationError):
    """A variant or field whose structure cannot be mirrored."""
