"""Numeric domains the expression engine is generic over.

A domain bundles the scalar type and every calculus capability the tree
nodes need: arithmetic, power, sin/cos/exp, a logarithm, the additive
identity test used for division, and rendering. The engine never branches on
which domain it runs in; the differences (complex logarithm is unsupported,
the imaginary unit only exists for complex numbers, complex rendering) live
in the concrete classes below.
"""

import numpy as np
from abc import ABC, abstractmethod
from typing import Any, Union

from .errors import DivisionByZeroError, DomainError, ParseError


def format_real(value: Any) -> str:
  """Shortest positional rendering: 10.5, 10, -1 (never exponent notation)"""
  return np.format_float_positional(value, trim='-')


def to_longdouble(value: Any) -> np.longdouble:
  # Python floats go through their shortest repr so 5.2 stays 5.2
  if isinstance(value, float):
    return np.longdouble(float.__repr__(value))
  return np.longdouble(value)


def make_complex(real: Any, imag: Any = 0) -> np.clongdouble:
  """Build a clongdouble from its parts without arithmetic; inf and nan parts survive"""
  out = np.zeros((), np.clongdouble)
  out.real = to_longdouble(real)
  out.imag = to_longdouble(imag)
  return out[()]


class NumericDomain(ABC):
  """Capability contract of a numeric domain"""

  name: str = ''
  dtype: type = np.longdouble
  has_imaginary_unit: bool = False

  @property
  def zero(self):
    return self.dtype(0)

  @property
  def one(self):
    return self.dtype(1)

  @abstractmethod
  def coerce(self, value: Any) -> Any:
    pass

  @abstractmethod
  def from_literal(self, text: str) -> Any:
    """Convert a real-number token of the lexer to a domain value"""
    pass

  @abstractmethod
  def imaginary_unit(self) -> Any:
    pass

  @abstractmethod
  def log(self, value: Any) -> Any:
    pass

  @abstractmethod
  def render(self, value: Any) -> str:
    pass

  def is_zero(self, value: Any) -> bool:
    return bool(value == self.zero)

  def add(self, left: Any, right: Any) -> Any:
    return left + right

  def sub(self, left: Any, right: Any) -> Any:
    return left - right

  def mul(self, left: Any, right: Any) -> Any:
    with np.errstate(over='ignore', invalid='ignore'):
      return left * right

  def div(self, left: Any, right: Any) -> Any:
    if self.is_zero(right):
      raise DivisionByZeroError("Division by zero")
    with np.errstate(over='ignore', invalid='ignore', under='ignore'):
      return left / right

  def power(self, base: Any, exponent: Any) -> Any:
    with np.errstate(all='ignore'):
      return self.dtype(np.power(base, exponent))

  def sin(self, value: Any) -> Any:
    with np.errstate(invalid='ignore'):
      return np.sin(value)

  def cos(self, value: Any) -> Any:
    with np.errstate(invalid='ignore'):
      return np.cos(value)

  def exp(self, value: Any) -> Any:
    with np.errstate(over='ignore', under='ignore', invalid='ignore'):
      return np.exp(value)

  def __repr__(self) -> str:
    return f"{type(self).__name__}()"


class RealDomain(NumericDomain):
  """Extended precision real numbers (numpy.longdouble)"""

  name = 'real'
  dtype = np.longdouble
  has_imaginary_unit = False

  def coerce(self, value: Any) -> np.longdouble:
    if isinstance(value, str):
      return self.from_literal(value)
    if isinstance(value, (complex, np.complexfloating)):
      if value.imag != 0:
        raise TypeError(f"Complex value {value} cannot be used in the real domain")
      value = value.real
    return to_longdouble(value)

  def from_literal(self, text: str) -> np.longdouble:
    return np.longdouble(text)

  def imaginary_unit(self):
    raise ParseError("Imaginary unit is not supported for real numbers")

  def log(self, value: Any) -> np.longdouble:
    if value <= 0:
      raise DomainError(f"Logarithm argument must be positive, got {format_real(value)}")
    return np.log(value)

  def render(self, value: Any) -> str:
    return format_real(value)


class ComplexDomain(NumericDomain):
  """Complex numbers with extended precision components (numpy.clongdouble)"""

  name = 'complex'
  dtype = np.clongdouble
  has_imaginary_unit = True

  def coerce(self, value: Any) -> np.clongdouble:
    if isinstance(value, str):
      return self.from_literal(value)
    if isinstance(value, np.clongdouble):
      return value
    if isinstance(value, (complex, np.complexfloating)):
      return make_complex(value.real, value.imag)
    return make_complex(value)

  def from_literal(self, text: str) -> np.clongdouble:
    return make_complex(np.longdouble(text))

  def imaginary_unit(self) -> np.clongdouble:
    return make_complex(0, 1)

  def log(self, value: Any):
    raise DomainError("logarithm of complex values is unsupported")

  def render(self, value: Any) -> str:
    real, imag = value.real, value.imag
    if real == 0 and imag == 0:
      return "0"

    if imag == 0:
      return format_real(real)

    if abs(imag) == 1:
      imag_text = "i"
    else:
      imag_text = f"{format_real(abs(imag))}i"

    if real == 0:
      return f"-{imag_text}" if imag < 0 else imag_text

    sign = '-' if imag < 0 else '+'
    return f"({format_real(real)} {sign} {imag_text})"


REAL = RealDomain()
COMPLEX = ComplexDomain()

_DOMAINS = {REAL.name: REAL, COMPLEX.name: COMPLEX}


def get_domain(domain: Union[str, NumericDomain]) -> NumericDomain:
  if isinstance(domain, NumericDomain):
    return domain
  try:
    return _DOMAINS[str(domain).lower()]
  except KeyError:
    raise ValueError(f"Unknown numeric domain: {domain!r} (expected 'real' or 'complex')") from None
