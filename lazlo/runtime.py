"""
Evaluation methods for each kind of expression.
Every one of these produces a concrete value: By the time an expression
gets evaluated at all, somebody needs the answer.
"""
from . import syntax
from .evaluator import strict, attach_evaluation_methods
from .stacking import Frame
from .values import kind
from .primitive import apply_binary, apply_unary, SHORTCUT
from .errors import TypeMismatch, NotBoolean, IndexOutOfRange

def _eval_literal(expr:syntax.Literal, frame:Frame):
	return expr.value

def _eval_lookup(expr:syntax.Lookup, frame:Frame):
	return frame.lookup(expr.nom.text).force()

def _eval_vector(expr:syntax.VectorLiteral, frame:Frame):
	# Elements are evaluated eagerly, so a vector never holds a thunk.
	return tuple([strict(e, frame) for e in expr.elts])

def _eval_bin_exp(expr:syntax.BinExp, frame:Frame):
	a = strict(expr.lhs, frame)
	b = strict(expr.rhs, frame)
	return apply_binary(expr.op.text, a, b)

def _eval_shortcut_exp(expr:syntax.ShortCutExp, frame:Frame):
	glyph = expr.op.text
	lhs = strict(expr.lhs, frame)
	if type(lhs) is not bool:
		raise NotBoolean(glyph, kind(lhs))
	if lhs == SHORTCUT[glyph]: return lhs
	rhs = strict(expr.rhs, frame)
	if type(rhs) is not bool:
		raise TypeMismatch(glyph, kind(lhs), kind(rhs))
	return rhs

def _eval_unary_exp(expr:syntax.UnaryExp, frame:Frame):
	return apply_unary(expr.op.text, strict(expr.arg, frame))

def _eval_index(expr:syntax.Index, frame:Frame):
	subject = strict(expr.subject, frame)
	index = strict(expr.index, frame)
	if type(subject) not in (tuple, str) or type(index) is not int:
		raise TypeMismatch("[]", kind(subject), kind(index))
	if not 0 <= index < len(subject):
		raise IndexOutOfRange(index, len(subject))
	return subject[index]

def _eval_call(expr:syntax.Call, frame:Frame):
	name = expr.fn_name.text
	if name in BUILT_IN:
		values = [strict(a, frame) for a in expr.args]
		return BUILT_IN[name](frame.environment.console, values)
	closure = frame.lookup_function(name)
	return closure.apply(expr.args, frame)

###############################################################################

def _print(console, values):
	console.print(*values)

def _println(console, values):
	console.println(*values)

BUILT_IN = {
	"print": _print,
	"println": _println,
}

attach_evaluation_methods(globals())
