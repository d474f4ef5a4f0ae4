"""
Named math functions callable from equations.

Two read-only tables keyed by upper-cased name:

    SINGLE_FUNCTIONS: name -> f(x)
    DOUBLE_FUNCTIONS: name -> f(x, y)

Every entry works elementwise on float64 scalars and NumPy arrays, so the
same table serves point evaluation and whole-grid evaluation. The names and
spellings follow the classic C/Go math library; ``FUNCTION_NAMES`` lists
them in display spelling, sorted.
"""

import math
from types import MappingProxyType
from typing import Callable, Dict, Mapping, Optional, Tuple

import numpy as np
from scipy import special

SingleFunction = Callable[[np.ndarray], np.ndarray]
DoubleFunction = Callable[[np.ndarray, np.ndarray], np.ndarray]

INT64_MIN = -(2.0 ** 63)
INT32_MIN = -2147483648.0
INT32_MAX = 2147483647.0
# Widest exponent that can still move a float64 away from 0 or inf
LDEXP_LIMIT = 2200


def as_int(values) -> np.ndarray:
    """
    Truncate toward zero the way an int conversion does.

    NaN, infinities and anything outside the int64 range map to the int64
    minimum. The result stays float64.
    """
    values = np.asarray(values, dtype=np.float64)
    truncated = np.trunc(values)
    valid = np.isfinite(truncated) & (np.abs(truncated) < 2.0 ** 63)
    return np.where(valid, truncated, INT64_MIN)


# ============================================================================
# FUNCTIONS WITHOUT A DIRECT NUMPY EQUIVALENT
# ============================================================================

def round_half_away(x):
    """Round to nearest, ties away from zero"""
    truncated = np.trunc(x)
    rounded = np.where(np.abs(x - truncated) >= 0.5, truncated + np.copysign(1.0, x), truncated)
    return np.where(np.isfinite(x), rounded, x)


def ilogb(x):
    """Unbiased binary exponent as an integer value"""
    _, exponent = np.frexp(x)
    result = (exponent - 1).astype(np.float64)
    result = np.where(x == 0, INT32_MIN, result)
    return np.where(np.isfinite(x), result, INT32_MAX)


def logb(x):
    """Unbiased binary exponent; -inf at zero, +inf at +-inf"""
    _, exponent = np.frexp(x)
    result = (exponent - 1).astype(np.float64)
    result = np.where(x == 0, -np.inf, result)
    result = np.where(np.isinf(x), np.inf, result)
    return np.where(np.isnan(x), np.nan, result)


def inf(sign):
    """+inf for a non-negative integer sign, -inf otherwise"""
    return np.where(as_int(sign) >= 0, np.inf, -np.inf)


def pow10(n):
    n = as_int(n)
    return np.where(n < -323, 0.0, np.where(n > 308, np.inf, np.power(10.0, n)))


def dim(x, y):
    """Positive difference: max(x - y, 0)"""
    return np.maximum(np.subtract(x, y), 0.0)


def ldexp(frac, exp):
    exponent = np.clip(as_int(exp), -LDEXP_LIMIT, LDEXP_LIMIT).astype(np.int32)
    return np.ldexp(frac, exponent)


def _remainder(x: float, y: float) -> float:
    if math.isnan(x) or math.isnan(y) or math.isinf(x) or y == 0:
        return math.nan
    return math.remainder(x, y)


# IEEE 754 remainder; math.remainder raises where IEEE returns NaN
remainder = np.vectorize(_remainder, otypes=[np.float64])


def bessel_jn(n, x):
    return special.jv(as_int(n), x)


def bessel_yn(n, x):
    return special.yv(as_int(n), x)


# ============================================================================
# REGISTRY
# ============================================================================

_SINGLE: Dict[str, SingleFunction] = {
    "Abs": np.abs,
    "Acos": np.arccos,
    "Acosh": np.arccosh,
    "Asin": np.arcsin,
    "Asinh": np.arcsinh,
    "Atan": np.arctan,
    "Atanh": np.arctanh,
    "Cbrt": np.cbrt,
    "Ceil": np.ceil,
    "Cos": np.cos,
    "Cosh": np.cosh,
    "Erf": special.erf,
    "Erfc": special.erfc,
    "Erfcinv": special.erfcinv,
    "Erfinv": special.erfinv,
    "Exp": np.exp,
    "Exp2": np.exp2,
    "Expm1": np.expm1,
    "Floor": np.floor,
    "Gamma": special.gamma,
    "Ilogb": ilogb,
    "Inf": inf,
    "J0": special.j0,
    "J1": special.j1,
    "Log": np.log,
    "Log10": np.log10,
    "Log1p": np.log1p,
    "Log2": np.log2,
    "Logb": logb,
    "Pow10": pow10,
    "Round": round_half_away,
    "RoundToEven": np.rint,
    "Sin": np.sin,
    "Sinh": np.sinh,
    "Sqrt": np.sqrt,
    "Tan": np.tan,
    "Tanh": np.tanh,
    "Trunc": np.trunc,
    "Y0": special.y0,
    "Y1": special.y1,
}

_DOUBLE: Dict[str, DoubleFunction] = {
    "Atan2": np.arctan2,
    "Copysign": np.copysign,
    "Dim": dim,
    "Hypot": np.hypot,
    "Jn": bessel_jn,
    "Ldexp": ldexp,
    "Max": np.maximum,
    "Min": np.minimum,
    "Mod": np.fmod,
    "Nextafter": np.nextafter,
    "Pow": np.power,
    "Remainder": remainder,
    "Yn": bessel_yn,
}

SINGLE_FUNCTIONS: Mapping[str, SingleFunction] = MappingProxyType(
    {name.upper(): f for name, f in _SINGLE.items()})
DOUBLE_FUNCTIONS: Mapping[str, DoubleFunction] = MappingProxyType(
    {name.upper(): f for name, f in _DOUBLE.items()})

FUNCTION_NAMES: Tuple[str, ...] = tuple(sorted({**_SINGLE, **_DOUBLE}))
SINGLE_FUNCTION_NAMES: Tuple[str, ...] = tuple(sorted(_SINGLE))
DOUBLE_FUNCTION_NAMES: Tuple[str, ...] = tuple(sorted(_DOUBLE))


def lookup_single(name: str) -> Optional[SingleFunction]:
    return SINGLE_FUNCTIONS.get(name.upper())


def lookup_double(name: str) -> Optional[DoubleFunction]:
    return DOUBLE_FUNCTIONS.get(name.upper())


def is_single(name: str) -> bool:
    return name.upper() in SINGLE_FUNCTIONS


def is_double(name: str) -> bool:
    return name.upper() in DOUBLE_FUNCTIONS
