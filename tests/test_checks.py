import unittest

from lazlo import syntax, diagnostics, resolution
from lazlo.ontology import Nom

def lit(v): return syntax.Literal(v)
def ref(name): return syntax.Lookup(Nom(name))
def let(name, expr=None): return syntax.Let(Nom(name), expr)
def fn(name, params, *body): return syntax.Function(Nom(name), [syntax.Parameter(Nom(p)) for p in params], body)

class StaticCheckTests(unittest.TestCase):

	def setUp(self) -> None:
		self.report = diagnostics.Report()

	def check(self, *body):
		resolution.WordCheck(self.report).check_module(syntax.Module(body))
		return self.report.issues

	def test_clean_program(self):
		self.check(
			let("a", syntax.binary(lit(1), Nom("/"), lit(0))),
			fn("f", ["x", "y"], let("a"), syntax.Return([ref("x")])),
			syntax.ExprStatement(syntax.Call(Nom("f"), [ref("a"), ref("undefined_is_fine_until_run")])),
		)
		self.assertTrue(self.report.ok())

	def test_duplicate_let(self):
		issues = self.check(let("a", lit(1)), let("a", lit(2)), let("a", lit(3)))
		self.assertEqual(1, len(issues))
		self.assertIn("'a' is defined more than once", issues[0].intro)

	def test_duplicate_parameter(self):
		self.check(fn("f", ["x", "x"]))
		self.assertTrue(self.report.sick())

	def test_duplicate_function(self):
		self.check(fn("f", []), fn("f", ["a"]))
		self.assertEqual(1, len(self.report.issues))

	def test_variable_and_function_may_share_a_name(self):
		self.check(let("f", lit(1)), fn("f", []))
		self.assertTrue(self.report.ok())

	def test_shadowing_built_in(self):
		issues = self.check(fn("println", ["x"]))
		self.assertIn("built-in", issues[0].intro)

	def test_unknown_operator(self):
		issues = self.check(syntax.ExprStatement(syntax.binary(lit(2), Nom("**"), lit(3))))
		self.assertIn("'**'", issues[0].intro)
		self.report = diagnostics.Report()
		self.check(syntax.ExprStatement(syntax.UnaryExp(Nom("~"), lit(3))))
		self.assertTrue(self.report.sick())

	def test_check_program_raises(self):
		module = syntax.Module([let("a"), let("a")])
		with self.assertRaises(resolution.Yuck) as cm:
			resolution.check_program(module, self.report)
		self.assertEqual("check", cm.exception.args[0])
		self.assertIn("Defined again here", self.report.issues[0].as_text())

	def test_too_many_issues(self):
		report = diagnostics.Report(max_issues=3)
		with self.assertRaises(diagnostics.TooManyIssues):
			resolution.WordCheck(report).check_module(syntax.Module([
				fn("print", []), fn("println", []),
				syntax.ExprStatement(syntax.binary(lit(2), Nom("@"), lit(3))),
			]))

if __name__ == '__main__':
	unittest.main()
