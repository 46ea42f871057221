"""
The set of syntax-nodes in simple form.
Some parser (not part of this package) builds a tree out of these;
the front-end module builds the same tree from a JSON rendition.
A node may be given a spot of its own. Otherwise, it reckons its extent
from its constituent parts, which matters only for error messages.
"""
from pathlib import Path
from typing import Optional, Any, Sequence
from .ontology import ValueExpression, Statement, Phrase, Nom, Symbol

def _leftmost(parts:Sequence[Phrase]) -> int:
	for p in parts:
		if p.left(): return p.left()
	return 0

def _rightmost(parts:Sequence[Phrase]) -> int:
	for p in reversed(parts):
		if p.right(): return p.right()
	return 0

class _Composite(Phrase):
	spot: int = 0
	def parts(self) -> Sequence[Phrase]: return ()
	def left(self): return self.spot or _leftmost(self.parts())
	def right(self): return self.spot or _rightmost(self.parts())

###############################################################################

class Literal(ValueExpression):
	def __init__(self, value: Any, spot: int = None):
		assert isinstance(spot, int) or spot is None, type(spot)
		self.value, self._spot = value, spot or 0

	def __str__(self): return "<Literal %r>" % (self.value,)
	def left(self): return self._spot
	def right(self): return self._spot

class Lookup(ValueExpression):
	def __init__(self, nom: Nom): self.nom = nom
	def __str__(self): return self.nom.text
	def left(self): return self.nom.left()
	def right(self): return self.nom.right()

class VectorLiteral(_Composite, ValueExpression):
	def __init__(self, elts: Sequence[ValueExpression], spot: int = None):
		for e in elts:
			assert isinstance(e, ValueExpression), e
		self.elts = tuple(elts)
		self.spot = spot or 0
	def __str__(self): return "[%s]" % ', '.join(map(str, self.elts))
	def parts(self): return self.elts

class Binary(_Composite, ValueExpression):
	def __init__(self, lhs: ValueExpression, op:Nom, rhs: ValueExpression, spot: int = None):
		self.lhs, self.op, self.rhs = lhs, op, rhs
		self.spot = spot or 0
	def __str__(self): return "(%s %s %s)" % (self.lhs, self.op.text, self.rhs)
	def parts(self): return self.lhs, self.op, self.rhs

class BinExp(Binary): pass
class ShortCutExp(Binary): pass

SHORTCUT_GLYPHS = frozenset(["&", "|"])

def binary(lhs: ValueExpression, op:Nom, rhs: ValueExpression, spot: int = None) -> Binary:
	""" Logical connectives get the short-circuit treatment. """
	kind = ShortCutExp if op.text in SHORTCUT_GLYPHS else BinExp
	return kind(lhs, op, rhs, spot)

class UnaryExp(_Composite, ValueExpression):
	def __init__(self, op:Nom, arg: ValueExpression, spot: int = None):
		self.op, self.arg = op, arg
		self.spot = spot or 0
	def __str__(self): return "(%s%s)" % (self.op.text, self.arg)
	def parts(self): return self.op, self.arg

class Call(_Composite, ValueExpression):
	def __init__(self, fn_name: Nom, args: Sequence[ValueExpression], spot: int = None):
		self.fn_name, self.args = fn_name, tuple(args)
		self.spot = spot or 0

	def __str__(self):
		return "%s(%s)" % (self.fn_name.text, ', '.join(map(str, self.args)))
	def parts(self): return (self.fn_name, *self.args)

class Index(_Composite, ValueExpression):
	def __init__(self, subject: ValueExpression, index: ValueExpression, spot: int = None):
		self.subject, self.index = subject, index
		self.spot = spot or 0
	def __str__(self): return "%s[%s]" % (self.subject, self.index)
	def parts(self): return self.subject, self.index

###############################################################################

class Parameter(Symbol):
	def __repr__(self): return "<param %s>" % self.nom.text

class Let(_Composite, Statement):
	""" Binds a name to a not-yet-evaluated expression. """
	def __init__(self, nom: Nom, expr: Optional[ValueExpression], spot: int = None):
		self.nom, self.expr = nom, expr
		self.spot = spot or 0
	def __str__(self): return "let %s = %s;" % (self.nom.text, self.expr)
	def parts(self): return (self.nom,) if self.expr is None else (self.nom, self.expr)

class ExprStatement(_Composite, Statement):
	def __init__(self, expr: ValueExpression, spot: int = None):
		self.expr = expr
		self.spot = spot or 0
	def __str__(self): return "%s;" % self.expr
	def parts(self): return self.expr,

class Return(_Composite, Statement):
	def __init__(self, exprs: Sequence[ValueExpression], spot: int = None):
		self.exprs = tuple(exprs)
		self.spot = spot or 0
	def __str__(self): return "return %s;" % ', '.join(map(str, self.exprs))
	def parts(self): return self.exprs

class Function(Symbol, Statement):
	""" A user-defined function. The declaration is itself a statement. """

	def __init__(self, nom: Nom, params: Sequence[Parameter], body: Sequence[Statement]):
		super().__init__(nom)
		self.params = tuple(params)
		self.body = tuple(body)

	def arity(self) -> int: return len(self.params)

	def __repr__(self):
		p = ", ".join(p.nom.text for p in self.params)
		return "{fn|%s(%s)}" % (self.nom.text, p)

class Module:
	""" One whole program: a sequence of top-level statements. """
	def __init__(self, body: Sequence[Statement], path: Optional[Path] = None):
		self.body = tuple(body)
		self.path = path
