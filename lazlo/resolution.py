"""
Checks that can happen before the program runs.

Nothing here may depend on the value of any expression: A `let` whose
expression would fail is perfectly fine, so long as nobody ever needs it.
What remains is structure: names defined twice in one scope,
operators that do not exist, and functions named like the built-ins.
"""
from typing import NamedTuple, Sequence
from boozetools.support.foundation import Visitor
from . import syntax
from .ontology import Nom, Statement
from .diagnostics import Report
from .primitive import is_operator
from .runtime import BUILT_IN
from .space import Layer, AlreadyExists

class Yuck(Exception):
	"""
	The first argument will be the name of the pass fraught with error.
	The end-user might not care about this, but it's handy for testing.
	"""
	pass

class Scope(NamedTuple):
	terms: Layer
	functions: Layer

	@staticmethod
	def fresh() -> "Scope":
		return Scope(Layer(), Layer())

class WordCheck(Visitor):
	"""
	Walk the whole tree, one scope per function body,
	and complain about anything structurally amiss.
	"""
	def __init__(self, report:Report):
		self._report = report

	def check_module(self, module:syntax.Module):
		self._block(module.body, Scope.fresh())

	def _block(self, body:Sequence[Statement], scope:Scope):
		for stmt in body:
			self.visit(stmt, scope)

	def _define(self, layer:Layer, nom:Nom):
		try: layer.mount(nom.key(), nom)
		except AlreadyExists:
			self._report.redefined(nom.text, layer.locate(nom.key()), nom)

	def visit_Let(self, stmt:syntax.Let, scope:Scope):
		if stmt.expr is not None:
			self.visit(stmt.expr, scope)
		self._define(scope.terms, stmt.nom)

	def visit_ExprStatement(self, stmt:syntax.ExprStatement, scope:Scope):
		self.visit(stmt.expr, scope)

	def visit_Return(self, stmt:syntax.Return, scope:Scope):
		for e in stmt.exprs:
			self.visit(e, scope)

	def visit_Function(self, fn:syntax.Function, scope:Scope):
		if fn.nom.text in BUILT_IN:
			self._report.shadows_built_in(fn.nom)
		self._define(scope.functions, fn.nom)
		inner = Scope.fresh()
		for p in fn.params:
			self._define(inner.terms, p.nom)
		self._block(fn.body, inner)

	def visit_Literal(self, expr:syntax.Literal, scope:Scope): pass
	def visit_Lookup(self, expr:syntax.Lookup, scope:Scope): pass

	def visit_VectorLiteral(self, expr:syntax.VectorLiteral, scope:Scope):
		for e in expr.elts:
			self.visit(e, scope)

	def _binary(self, expr:syntax.Binary, scope:Scope):
		if not is_operator(expr.op.text, 2):
			self._report.unknown_operator(expr.op)
		self.visit(expr.lhs, scope)
		self.visit(expr.rhs, scope)

	visit_BinExp = visit_ShortCutExp = _binary

	def visit_UnaryExp(self, expr:syntax.UnaryExp, scope:Scope):
		if not is_operator(expr.op.text, 1):
			self._report.unknown_operator(expr.op)
		self.visit(expr.arg, scope)

	def visit_Call(self, expr:syntax.Call, scope:Scope):
		for a in expr.args:
			self.visit(a, scope)

	def visit_Index(self, expr:syntax.Index, scope:Scope):
		self.visit(expr.subject, scope)
		self.visit(expr.index, scope)

def check_program(module:syntax.Module, report:Report):
	""" Raises Yuck if the report turns out sick. """
	WordCheck(report).check_module(module)
	if report.sick(): raise Yuck("check")
