"""
The generic machinery that everything needs,
without the specific methods corresponding to particular syntax.

A `let` binding does not evaluate anything. It makes a Thunk: the expression,
plus the frame it must eventually be evaluated in. Forcing evaluates the
expression against that frame (never against the frame that happens to be
doing the forcing) and memoizes the result in place.
"""

from typing import Union, Optional
from . import syntax
from .ontology import ValueExpression
from .stacking import Frame
from .values import STRICT_VALUE
from .errors import EvaluationError, ForcingCycle, DanglingReference, StackOverflow


def evaluate(expr:ValueExpression, frame:Frame) -> STRICT_VALUE:
	assert isinstance(frame, Frame), frame
	frame.environment.steps += 1
	try: fn = EVALUATE[type(expr)]
	except KeyError: raise NotImplementedError(type(expr), expr)
	try: return fn(expr, frame)
	except EvaluationError as ex:
		ex.stamp(expr, frame)
		raise
	except RecursionError:
		# Long chains of deferred work nest deeply. The next step out stamps this.
		raise StackOverflow() from None

strict = evaluate

_NO_DELAY = {syntax.Literal}

def delay(expr: ValueExpression, frame: Frame, name:Optional[str] = None) -> "Thunk":
	# There is no profit to delay a literal:
	if type(expr) in _NO_DELAY: return Thunk.ready(evaluate(expr, frame), name)
	return Thunk(expr, frame, name)

def force(it:Union["Thunk", STRICT_VALUE]) -> STRICT_VALUE:
	if isinstance(it, Thunk): return it.force()
	return it

EVALUATE = {}

def attach_evaluation_methods(python_scope):
	for _k, _v in list(python_scope.items()):
		if _k.startswith("_eval_"):
			_t = _v.__annotations__["expr"]
			assert isinstance(_t, type), (_k, _t)
			EVALUATE[_t] = _v


_ABSENT = object()
_BUSY = object()


class Thunk:
	""" A kind of not-yet-value which can be forced. """
	def __init__(self, expr: ValueExpression, frame:Frame, name:Optional[str] = None):
		assert isinstance(expr, ValueExpression), type(expr)
		self.expr = expr
		self.frame = frame
		self.name = name
		self.value = _ABSENT

	@staticmethod
	def ready(value:STRICT_VALUE, name:Optional[str] = None) -> "Thunk":
		""" A thunk born already forced, as for parameters and literals. """
		thunk = Thunk.__new__(Thunk)
		thunk.name = name
		thunk.value = value
		return thunk

	def is_forced(self) -> bool:
		return self.value is not _ABSENT and self.value is not _BUSY

	def __str__(self):
		if self.value is _ABSENT or self.value is _BUSY:
			return "<Thunk: %s>" % self.expr
		else:
			return "<Forced: %r>" % (self.value,)

	def force(self) -> STRICT_VALUE:
		if self.value is _BUSY:
			raise ForcingCycle(self.name or str(self.expr))
		if self.value is _ABSENT:
			if self.frame.closed:
				raise DanglingReference(self.name or str(self.expr))
			self.value = _BUSY
			try:
				value = evaluate(self.expr, self.frame)
			except BaseException:
				self.value = _ABSENT
				raise
			self.value = value
			del self.expr
			del self.frame
		return self.value
