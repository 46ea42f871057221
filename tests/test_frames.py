import unittest

from lazlo import syntax, errors, stacking
from lazlo.ontology import Nom
from lazlo.environment import Environment
from lazlo.evaluator import Thunk
from lazlo.executive import execute_module
from lazlo.adapters.for_test_purposes import Transcript

def lit(v): return syntax.Literal(v)
def ref(name): return syntax.Lookup(Nom(name))
def call(name, *args): return syntax.Call(Nom(name), args)
def fn(name, params, *body): return syntax.Function(Nom(name), [syntax.Parameter(Nom(p)) for p in params], body)

class PhaseSpy(Transcript):
	""" Notes which frame is current, and in what phase, whenever something prints. """
	def __init__(self):
		super().__init__()
		self.env = None
		self.seen = []

	def print(self, *values):
		frame = self.env.current
		self.seen.append((frame, frame.phase))
		super().print(*values)

class FrameLifeCycleTests(unittest.TestCase):

	def setUp(self) -> None:
		self.spy = PhaseSpy()
		self.env = Environment(self.spy)
		self.spy.env = self.env

	def test_phases(self):
		module = syntax.Module([
			fn("f", ["a"],
				syntax.ExprStatement(call("print", ref("a"))),
				syntax.Return([call("print", lit("!"))]),
			),
			syntax.ExprStatement(call("f", lit(1))),
		])
		execute_module(module, self.env)
		(body, p1), (tail, p2) = self.spy.seen
		self.assertIs(body, tail)
		self.assertIsInstance(body, stacking.Activation)
		self.assertEqual(stacking.EVALUATING, p1)
		self.assertEqual(stacking.RETURNING, p2)
		self.assertEqual(stacking.EXITED, body.phase)
		self.assertTrue(body.closed)
		self.assertFalse(body.holds("a"))
		self.assertEqual("1!", self.spy.text())

	def test_root_closes_at_normal_termination(self):
		execute_module(syntax.Module([]), self.env)
		self.assertTrue(self.env.root.closed)

	def test_push_and_pop(self):
		f = fn("f", [])
		outer = self.env.push_scope(f, self.env.root)
		self.assertEqual(stacking.ENTERING, outer.phase)
		inner = self.env.push_scope(f, self.env.root)
		self.assertEqual(2, self.env.depth())
		self.assertIs(outer, inner.dynamic_link)
		self.assertIs(self.env.root, inner.static_link)
		with self.assertRaises(AssertionError):
			self.env.pop_scope(outer)
		self.env.pop_scope(inner)
		self.env.pop_scope(outer)
		self.assertIs(self.env.root, self.env.current)
		self.assertEqual(0, self.env.depth())

	def test_define_and_lookup_follow_the_current_scope(self):
		self.env.define("x", Thunk.ready(1, "x"))
		frame = self.env.push_scope(fn("f", []), self.env.root)
		self.env.define("x", Thunk.ready(2, "x"))
		self.assertEqual(2, self.env.lookup("x").force())
		self.env.pop_scope(frame)
		self.assertEqual(1, self.env.lookup("x").force())

	def test_dangling_reference(self):
		frame = self.env.push_scope(fn("f", []), self.env.root)
		thunk = frame.assign("t", Thunk(ref("nothing"), frame, "t"))
		self.env.pop_scope(frame)
		with self.assertRaises(errors.DanglingReference) as cm:
			thunk.force()
		self.assertEqual("t", cm.exception.name)

	def test_failed_force_can_be_retried(self):
		thunk = Thunk(ref("later"), self.env.root, "t")
		with self.assertRaises(errors.UndefinedVariable):
			thunk.force()
		self.assertFalse(thunk.is_forced())
		self.env.define("later", Thunk.ready("here"))
		self.assertEqual("here", thunk.force())

	def test_backtrace_reads_outermost_first(self):
		f = fn("f", ["a"])
		frame = self.env.push_scope(f, self.env.root)
		frame.assign("a", Thunk.ready(5, "a"))
		trace = self.env.current.backtrace()
		self.assertEqual([None, f], [c.function for c in trace])
		self.assertEqual({"a": 5}, trace[1].arguments)

if __name__ == '__main__':
	unittest.main()
