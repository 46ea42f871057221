"""
Run-time data. Basic primitive values play themselves:
	int, float, bool, str, tuple (as a vector), and None.
The kind of a value is always judged by its exact type,
because Python considers a bool to be a kind of int.
"""
import math
from decimal import Decimal
from typing import Union

STRICT_VALUE = Union[int, float, bool, str, tuple, None]

INT_MIN = -2**63
INT_MAX = 2**63 - 1

KIND_NAME = {
	int: "Int",
	float: "Float",
	bool: "Bool",
	str: "Str",
	tuple: "Vector",
	type(None): "None",
}

def kind(value:STRICT_VALUE) -> str:
	return KIND_NAME[type(value)]

def is_number(value:STRICT_VALUE) -> bool:
	return type(value) in (int, float)

def fits_int64(n:int) -> bool:
	return INT_MIN <= n <= INT_MAX

###############################################################################

def _render_float(x:float) -> str:
	"""
	Positional notation, never exponents, with at least one fractional digit.
	The digits are the shortest ones that read back as the same float.
	"""
	if math.isnan(x): return "NaN"
	if math.isinf(x): return "inf" if x > 0 else "-inf"
	text = format(Decimal(repr(x)), "f")
	return text if "." in text else text + ".0"

_RENDER = {
	int: str,
	float: _render_float,
	bool: lambda b: "true" if b else "false",
	str: lambda s: s,
	tuple: lambda v: "[%s]" % ", ".join(map(render, v)),
	type(None): lambda _: "None",
}

def render(value:STRICT_VALUE) -> str:
	""" The textual rendering the print and println built-ins produce. """
	return _RENDER[type(value)](value)

###############################################################################

def same(a:STRICT_VALUE, b:STRICT_VALUE) -> bool:
	"""
	Structural equality, the way the language sees it:
	Numbers compare by value regardless of kind.
	Otherwise, the kinds must agree before the contents matter.
	"""
	if is_number(a) and is_number(b): return a == b
	if type(a) is not type(b): return False
	if type(a) is tuple:
		return len(a) == len(b) and all(map(same, a, b))
	return a == b
