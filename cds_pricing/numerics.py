"""
Numerically stable helpers for the (e^x - 1)/x family.

Both CDS legs integrate a product of two exponentially decaying curves piece by
piece. Over a short step the exponent differential `x` is tiny and the direct
formula `(e^x - 1)/x` loses all its digits to cancellation, so a truncated
Taylor series is used below `SMALL_ARGUMENT`.

- epsilon(x)    = (e^x - 1)/x          epsilon(0)    = 1
- epsilon_p(x)  = d/dx epsilon(x)      epsilon_p(0)  = 1/2
- epsilon_pp(x) = d2/dx2 epsilon(x)    epsilon_pp(0) = 1/3
"""

import math

# Switch between series and closed form. Also the |dhrt| switch in the leg
# integrands, which must use the same value.
SMALL_ARGUMENT = 1e-5

# The closed form of epsilon_pp cancels to ~x^3/3 out of O(x) terms, so the
# series is kept up to here (it is exact to machine precision for |x| < 1e-2).
_EPSILON_PP_SERIES_CUTOFF = 1e-2


def epsilon(x: float) -> float:
    """(e^x - 1)/x, continuously extended to 1 at x = 0."""
    if abs(x) < SMALL_ARGUMENT:
        return 1.0 + x / 2.0 * (1.0 + x / 3.0 * (1.0 + x / 4.0 * (1.0 + x / 5.0)))
    return math.expm1(x) / x


def epsilon_p(x: float) -> float:
    """First derivative of epsilon: (x e^x - e^x + 1)/x^2."""
    if abs(x) < SMALL_ARGUMENT:
        return 0.5 + x * (1.0 / 3.0 + x * (1.0 / 8.0 + x * (1.0 / 30.0 + x / 144.0)))
    return ((x - 1.0) * math.expm1(x) + x) / (x * x)


def epsilon_pp(x: float) -> float:
    """Second derivative of epsilon: (x^2 e^x - 2x e^x + 2(e^x - 1))/x^3."""
    if abs(x) < _EPSILON_PP_SERIES_CUTOFF:
        return 1.0 / 3.0 + x * (
            0.25
            + x * (0.1 + x * (1.0 / 36.0 + x * (1.0 / 168.0 + x * (1.0 / 960.0 + x / 6480.0))))
        )
    x2 = x * x
    return ((x2 - 2.0 * x + 2.0) * math.expm1(x) + x2 - 2.0 * x) / (x2 * x)
