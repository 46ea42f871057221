"""
The primitive operators, as closed tables keyed on the exact types of the operands.
Any combination missing from a table is a type mismatch for that operator.
"""
import math
import operator
from .values import STRICT_VALUE, kind, fits_int64, same
from .errors import TypeMismatch, DivisionByZero, NumericOverflow, ResultTooLarge

BINARY : dict[str, dict[tuple[type, type], callable]] = {}
UNARY : dict[str, dict[type, callable]] = {}

NUMERIC_PAIRS = [(int, int), (int, float), (float, int), (float, float)]
ANY_KIND = [int, float, bool, str, tuple, type(None)]

def _binary(glyph, pairs, fn):
	table = BINARY.setdefault(glyph, {})
	for pair in pairs:
		table[pair] = fn

def _unary(glyph, types, fn):
	table = UNARY.setdefault(glyph, {})
	for t in types:
		table[t] = fn

def _checked(glyph, fn):
	""" Integer results must stay within 64 bits. """
	def op(*args):
		result = fn(*args)
		if type(result) is int and not fits_int64(result):
			raise NumericOverflow(glyph)
		return result
	return op

###############################################################################

def _divide(a, b):
	if b == 0: raise DivisionByZero()
	return a / b

def _modulo(a, b):
	if b == 0: raise DivisionByZero()
	return a % b

def _power(a, b):
	if type(a) is int and type(b) is int and b >= 0:
		if abs(a) > 1 and b > 63: raise NumericOverflow("^")
		return a ** b
	if a == 0 and b < 0: raise DivisionByZero()
	try: return math.pow(a, b)
	except OverflowError: raise NumericOverflow("^") from None
	except ValueError: return math.nan

# No string may grow past this many characters.
MAX_TEXT = 2**30

def _repeat(n, s):
	size = len(s) * max(n, 0)
	if size > MAX_TEXT: raise ResultTooLarge("*", size)
	return s * max(n, 0)

for _glyph, _fn in [("+", operator.add), ("-", operator.sub), ("*", operator.mul)]:
	_binary(_glyph, NUMERIC_PAIRS, _checked(_glyph, _fn))
_binary("/", NUMERIC_PAIRS, _divide)
_binary("%", NUMERIC_PAIRS, _modulo)
_binary("^", NUMERIC_PAIRS, _checked("^", _power))

_binary("+", [(str, str)], operator.add)
_binary("+", [(tuple, tuple)], operator.add)
_binary("+", [(tuple, t) for t in ANY_KIND if t is not tuple], lambda v, x: v + (x,))
_binary("*", [(int, str)], _repeat)
_binary("*", [(str, int)], lambda s, n: _repeat(n, s))

_everything = [(a, b) for a in ANY_KIND for b in ANY_KIND]
_binary("==", _everything, same)
_binary("!=", _everything, lambda a, b: not same(a, b))

_ordered = NUMERIC_PAIRS + [(str, str)]
for _glyph, _fn in [("<", operator.lt), ("<=", operator.le), (">", operator.gt), (">=", operator.ge)]:
	_binary(_glyph, _ordered, _fn)

_unary("-", [int, float], _checked("-", operator.neg))
_unary("+", [int, float], operator.pos)
_unary("!", [bool], operator.not_)
_unary("!", [type(None)], lambda _: True)

# Logical connectives evaluate their right side only when needed.
SHORTCUT = {
	"&": False,
	"|": True,
}

###############################################################################

def apply_binary(glyph:str, a:STRICT_VALUE, b:STRICT_VALUE) -> STRICT_VALUE:
	try: fn = BINARY[glyph][type(a), type(b)]
	except KeyError: raise TypeMismatch(glyph, kind(a), kind(b)) from None
	return fn(a, b)

def apply_unary(glyph:str, a:STRICT_VALUE) -> STRICT_VALUE:
	try: fn = UNARY[glyph][type(a)]
	except KeyError: raise TypeMismatch(glyph, kind(a)) from None
	return fn(a)

def is_operator(glyph:str, arity:int) -> bool:
	if arity == 1: return glyph in UNARY
	return glyph in BINARY or glyph in SHORTCUT
