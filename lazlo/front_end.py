"""
Lazlo does not parse source text. Some parser does that, and hands over
the tree as JSON, which this module turns into syntax nodes.

The document looks like:
	{"source": "hello.lz", "body": [statement, ...]}

Every node is an object with a "kind", and optionally "at": [start, stop],
a span of characters in the source text. The spans matter only when the
document names its source, and only for error messages.
"""
import json
from pathlib import Path
from typing import Optional, Any

from . import syntax
from .ontology import Nom, ValueExpression, Statement
from .location import start_segment, insert_token
from .values import fits_int64
from .diagnostics import Report

class MalformedProgram(Exception):
	def __init__(self, where:str, why:str):
		super().__init__(where, why)
		self.where, self.why = where, why

	def __str__(self): return "%s: %s" % (self.where, self.why)

def _need(condition, where, why):
	if not condition: raise MalformedProgram(where, why)

class TreeReader:
	""" Builds syntax from decoded JSON, keeping track of where it is for the sake of complaints. """

	def __init__(self, source:Optional[Path]):
		self._located = source is not None
		start_segment(source)

	def _spot(self, node:dict, where:str) -> int:
		at = node.get("at")
		if at is None or not self._located: return 0
		_need(
			isinstance(at, list) and len(at) == 2 and all(type(i) is int and i >= 0 for i in at) and at[0] <= at[1],
			where+".at", "expected [start, stop] character offsets"
		)
		return insert_token(slice(*at))

	def _field(self, node:dict, key:str, where:str) -> Any:
		_need(key in node, where, "missing '%s'" % key)
		return node[key]

	def _kind(self, node:Any, where:str) -> str:
		_need(isinstance(node, dict), where, "expected an object")
		kind = self._field(node, "kind", where)
		_need(isinstance(kind, str), where+".kind", "expected a string")
		return kind

	def name(self, node:Any, where:str) -> Nom:
		if isinstance(node, str):
			return Nom(node)
		_need(isinstance(node, dict), where, "expected a name")
		text = self._field(node, "text", where)
		_need(isinstance(text, str) and text, where+".text", "expected a non-empty string")
		return Nom(text, self._spot(node, where))

	def _list(self, node:dict, key:str, where:str) -> list:
		items = node.get(key, [])
		_need(isinstance(items, list), where+"."+key, "expected a list")
		return items

	# Statements:

	def statement(self, node:Any, where:str) -> Statement:
		kind = self._kind(node, where)
		try: method = getattr(self, "_stmt_"+kind)
		except AttributeError: raise MalformedProgram(where, "no such statement as '%s'" % kind) from None
		return method(node, where)

	def block(self, items:list, where:str) -> list[Statement]:
		return [self.statement(s, "%s[%d]" % (where, i)) for i, s in enumerate(items)]

	def _stmt_let(self, node, where):
		nom = self.name(self._field(node, "name", where), where+".name")
		expr = node.get("expr")
		if expr is not None: expr = self.expression(expr, where+".expr")
		return syntax.Let(nom, expr, self._spot(node, where))

	def _stmt_expr(self, node, where):
		expr = self.expression(self._field(node, "expr", where), where+".expr")
		return syntax.ExprStatement(expr, self._spot(node, where))

	def _stmt_fn(self, node, where):
		nom = self.name(self._field(node, "name", where), where+".name")
		params = [
			syntax.Parameter(self.name(p, "%s.params[%d]" % (where, i)))
			for i, p in enumerate(self._list(node, "params", where))
		]
		body = self.block(self._list(node, "body", where), where+".body")
		return syntax.Function(nom, params, body)

	def _stmt_return(self, node, where):
		exprs = [
			self.expression(e, "%s.values[%d]" % (where, i))
			for i, e in enumerate(self._list(node, "values", where))
		]
		return syntax.Return(exprs, self._spot(node, where))

	# Expressions:

	def expression(self, node:Any, where:str) -> ValueExpression:
		kind = self._kind(node, where)
		try: method = getattr(self, "_expr_"+kind)
		except AttributeError: raise MalformedProgram(where, "no such expression as '%s'" % kind) from None
		return method(node, where)

	def _literal(self, node, where, check, why):
		value = self._field(node, "value", where)
		_need(check(value), where+".value", why)
		return syntax.Literal(value, self._spot(node, where))

	def _expr_int(self, node, where):
		return self._literal(node, where, lambda v: type(v) is int and fits_int64(v), "expected a 64-bit integer")

	def _expr_float(self, node, where):
		it = self._literal(node, where, lambda v: type(v) in (int, float), "expected a number")
		it.value = float(it.value)
		return it

	def _expr_bool(self, node, where):
		return self._literal(node, where, lambda v: type(v) is bool, "expected true or false")

	def _expr_str(self, node, where):
		return self._literal(node, where, lambda v: type(v) is str, "expected a string")

	def _expr_none(self, node, where):
		return syntax.Literal(None, self._spot(node, where))

	def _expr_name(self, node, where):
		return syntax.Lookup(self.name(self._field(node, "name", where), where+".name"))

	def _expr_vector(self, node, where):
		items = [
			self.expression(e, "%s.items[%d]" % (where, i))
			for i, e in enumerate(self._list(node, "items", where))
		]
		return syntax.VectorLiteral(items, self._spot(node, where))

	def _operator(self, node, where) -> Nom:
		op = self._field(node, "op", where)
		if isinstance(op, str): return Nom(op)
		return self.name(op, where+".op")

	def _expr_unary(self, node, where):
		op = self._operator(node, where)
		arg = self.expression(self._field(node, "arg", where), where+".arg")
		return syntax.UnaryExp(op, arg, self._spot(node, where))

	def _expr_binary(self, node, where):
		op = self._operator(node, where)
		lhs = self.expression(self._field(node, "lhs", where), where+".lhs")
		rhs = self.expression(self._field(node, "rhs", where), where+".rhs")
		return syntax.binary(lhs, op, rhs, self._spot(node, where))

	def _expr_call(self, node, where):
		nom = self.name(self._field(node, "name", where), where+".name")
		args = [
			self.expression(e, "%s.args[%d]" % (where, i))
			for i, e in enumerate(self._list(node, "args", where))
		]
		return syntax.Call(nom, args, self._spot(node, where))

	def _expr_index(self, node, where):
		subject = self.expression(self._field(node, "subject", where), where+".subject")
		index = self.expression(self._field(node, "index", where), where+".index")
		return syntax.Index(subject, index, self._spot(node, where))

###############################################################################

def read_tree(document:Any, folder:Path) -> syntax.Module:
	""" Turn a decoded JSON document into a module. Raises MalformedProgram. """
	_need(isinstance(document, dict), "program", "expected an object")
	source = document.get("source")
	if source is not None:
		_need(isinstance(source, str), "program.source", "expected a path")
		source = folder / source
		if not source.is_file(): source = None
	reader = TreeReader(source)
	body = document.get("body")
	_need(isinstance(body, list), "program.body", "expected a list of statements")
	return syntax.Module(reader.block(body, "body"), source)

def parse_text(text:str, path:Path, report:Report) -> Optional[syntax.Module]:
	""" Read a JSON rendition of a program. Problems go in the report. """
	try: document = json.loads(text)
	except json.JSONDecodeError as ex:
		report.broken_file(path, str(ex))
		return
	except RecursionError:
		report.broken_file(path, "The JSON is nested too deeply to read.")
		return
	try: return read_tree(document, path.parent)
	except MalformedProgram as ex:
		report.malformed_program(path, ex.where, ex.why)
	except RecursionError:
		report.malformed_program(path, "program", "nested too deeply")

def load_program(path:Path, report:Report) -> Optional[syntax.Module]:
	try:
		with open(path, "r", encoding="utf-8") as fh: text = fh.read()
	except FileNotFoundError:
		report.no_such_file(path)
		return
	except OSError as ex:
		report.broken_file(path, str(ex))
		return
	report.info("Loaded", path)
	return parse_text(text, path, report)
