"""
Exception hierarchy for the ysttxt engine.

Every error the engine raises on purpose derives from YSTError, so the
error shell (see engine.py) can tell template failures apart from bugs.
"""


class YSTError(Exception):
    """Base class for all template evaluation errors."""
    pass


class ExpressionError(YSTError):
    """Raised when an embedded expression cannot be evaluated."""

    def __init__(self, expression: str, message: str):
        super().__init__(message)
        self.expression = expression


class UndefinedExpressionError(ExpressionError):
    """Raised when an expression evaluates to undefined."""

    def __init__(self, expression: str, suffix: str = ""):
        super().__init__(expression, f"Undefined expression: {expression}{suffix}")


class UnbalancedMarkerError(YSTError):
    """Raised when a `$` marker has no closing `$`."""
    pass


class ValueSetEvaluationError(YSTError):
    """Raised when a value expression fails or yields undefined."""
    pass


class ParamsParseError(YSTError):
    """Raised when an include params literal is not a parameter object."""
    pass


class IncludeResolutionError(YSTError):
    """Raised when an include target cannot be found or invoked."""
    pass


class BooleanAttributeError(YSTError):
    """Raised when a ystBool attribute spec cannot be evaluated."""
    pass


class TemplateFormatError(YSTError):
    """Raised when a template or a serialized template is malformed."""
    pass


class ConfigurationError(YSTError):
    """Raised when engine configuration values are invalid."""
    pass
