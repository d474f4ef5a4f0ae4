"""
Exception types raised by the heatplot pipeline.

Numeric exceptional values (inf, nan) are not errors: they are ordinary
float64 results and flow through evaluation and sampling unchanged.
"""

from typing import Optional


class HeatPlotError(Exception):
    """Base class for all heatplot errors"""
    pass


class ParseError(HeatPlotError, SyntaxError):
    """Malformed equation text. Fatal to the whole run."""

    def __init__(self, text: str, detail: str, position: Optional[int] = None):
        where = f" at column {position + 1}" if position is not None else ""
        super().__init__(f"Invalid formula {text!r}: {detail}{where}")
        self.text = text
        self.detail = detail
        self.position = position

    def __str__(self):
        return self.args[0]


class NoEquationError(HeatPlotError, ValueError):
    """Raised when evaluating an equation that has neither side bound"""

    def __init__(self, message: str = "no such formula"):
        super().__init__(message)


class EvaluationFault(HeatPlotError, RuntimeError):
    """Unexpected runtime failure while evaluating one sample (strict mode)"""

    def __init__(self, x, y, t, cause: BaseException):
        self.x = x
        self.y = y
        self.t = t
        self.cause = cause
        super().__init__(f"Evaluation failed at X={x}, Y={y}, T={t}: {type(cause).__name__}: {cause}")


class UnknownFunctionError(HeatPlotError, KeyError):
    """Unregistered function name encountered in strict mode"""

    def __init__(self, name: str, arity: int):
        self.name = name
        self.arity = arity
        super().__init__(name)

    def __str__(self):
        kind = "single" if self.arity == 1 else "double"
        return f"Unknown {kind} argument function: {self.name}"
