"""
This is the overall control for the run-time:
Statements, function calls, and the life-cycle of call frames.

A function's frame goes through these phases:
	entering -> bound -> evaluating -> returning -> exited
The arguments are evaluated in the caller's frame before the callee's
frame exists. Whatever the function returns is fully evaluated while
the frame still stands. Then the frame is discarded, along with any
local bindings nobody ever needed. The discarding happens on every way
out, including when an error is on its way to the top.
"""
import sys
from typing import NamedTuple, Optional, Sequence
from boozetools.support.foundation import Visitor
from . import syntax, runtime  # noqa: F401 -- runtime supplies the evaluation methods.
from .ontology import ValueExpression, Statement
from .evaluator import Thunk, strict, delay
from .stacking import Frame, BOUND, EVALUATING, RETURNING
from .environment import Environment
from .values import STRICT_VALUE
from .errors import EvaluationError, ArityMismatch


class Returned(NamedTuple):
	value: STRICT_VALUE


class Closure:
	""" The run-time manifestation of a function: tied to the scope it was declared in. """

	def __init__(self, static_link:Frame, function:syntax.Function):
		self._static_link = static_link
		self._function = function

	def __str__(self):
		return str(self._function)

	def _name(self): return self._function.nom.text

	def apply(self, args:Sequence[ValueExpression], caller:Frame) -> STRICT_VALUE:
		function = self._function
		if len(args) != function.arity():
			raise ArityMismatch(self._name(), function.arity(), len(args))
		values = [strict(a, caller) for a in args]
		env = caller.environment
		frame = env.push_scope(function, self._static_link)
		try:
			for param, value in zip(function.params, values):
				frame.assign(param.nom.text, Thunk.ready(value, param.nom.text))
			frame.phase = BOUND
			outcome = EXECUTIVE.run_block(function.body, frame)
			return None if outcome is None else outcome.value
		finally:
			env.pop_scope(frame)


class Executive(Visitor):
	"""
	Runs statements in order. The only statement that produces
	anything is `return`, which also ends the block.
	"""

	def run_block(self, body:Sequence[Statement], frame:Frame) -> Optional[Returned]:
		frame.phase = EVALUATING
		for stmt in body:
			frame.pc = stmt
			try:
				outcome = self.visit(stmt, frame)
			except EvaluationError as ex:
				ex.stamp(stmt, frame)
				raise
			if outcome is not None:
				return outcome

	def visit_Let(self, stmt:syntax.Let, frame:Frame):
		name = stmt.nom.text
		if stmt.expr is None:
			thunk = Thunk.ready(None, name)
		else:
			thunk = delay(stmt.expr, frame, name)
		frame.assign(name, thunk)

	def visit_ExprStatement(self, stmt:syntax.ExprStatement, frame:Frame):
		strict(stmt.expr, frame)

	def visit_Function(self, fn:syntax.Function, frame:Frame):
		frame.declare(fn.nom.text, Closure(frame, fn))

	def visit_Return(self, stmt:syntax.Return, frame:Frame) -> Returned:
		frame.phase = RETURNING
		values = [strict(e, frame) for e in stmt.exprs]
		if not values: return Returned(None)
		if len(values) == 1: return Returned(values[0])
		return Returned(tuple(values))

EXECUTIVE = Executive()

###############################################################################

# Forcing a long chain of deferred bindings, or calling deeply, nests Python calls.
# Python 3.11 and later keep those frames off the C stack.
RECURSION_LIMIT = 100_000

def execute_module(module:syntax.Module, env:Environment) -> STRICT_VALUE:
	"""
	Run a whole program in the given environment's global scope.
	A `return` at top level ends the program early; its value is the result.
	"""
	former_limit = sys.getrecursionlimit()
	sys.setrecursionlimit(max(former_limit, RECURSION_LIMIT))
	try:
		outcome = EXECUTIVE.run_block(module.body, env.root)
	finally:
		sys.setrecursionlimit(former_limit)
	env.shut_down()
	return None if outcome is None else outcome.value

def run_program(module:syntax.Module, console=None) -> STRICT_VALUE:
	if console is None:
		from .adapters.teletype_adapter import Console
		console = Console()
	return execute_module(module, Environment(console))
