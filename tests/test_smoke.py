from pathlib import Path
import io
import json
import tempfile
import unittest
from unittest.mock import patch

from lazlo import diagnostics, resolution, front_end, errors, cmdline
from lazlo.executive import run_program
from lazlo.adapters.for_test_purposes import Transcript

base_folder = Path(__file__).parent.parent
examples = base_folder/"examples"

def _good(which):
	report = diagnostics.Report(verbose=False)
	module = front_end.load_program(examples / (which + ".json"), report)
	report.assert_no_issues("Ostensibly-good example failed to load.")
	try:
		resolution.check_program(module, report)
	except resolution.Yuck as ex:
		report.complain_to_console()
		assert False, "Test failed %s phase"%ex.args[0]
	return module

class ExampleSmokeTests(unittest.TestCase):
	""" Run all the examples; Test for no smoke. """

	def run_example(self, which):
		console = Transcript()
		result = run_program(_good(which), console)
		return result, console.text()

	def test_hello_world(self):
		self.assertEqual((None, "Hello, World!\n"), self.run_example("hello_world"))

	def test_laziness(self):
		result, text = self.run_example("laziness")
		self.assertEqual("b is 7.5\n7 / 2 is 3.5\n", text)

	def test_functions(self):
		result, text = self.run_example("functions")
		self.assertEqual(2, result)
		self.assertEqual("[15, 2]\nHello, Lazlo!\n", text)

	def test_oops(self):
		console = Transcript()
		with self.assertRaises(errors.DivisionByZero):
			run_program(_good("oops"), console)
		self.assertEqual("before\n", console.text())

class CommandLineTests(unittest.TestCase):

	def run_cli(self, *argv):
		args = cmdline.parser.parse_args([*argv])
		with patch("sys.stdout", new_callable=io.StringIO) as out:
			with patch("sys.stderr", new_callable=io.StringIO) as err:
				status = cmdline.run(args)
		return status, out.getvalue(), err.getvalue()

	def test_runs_a_program(self):
		status, out, err = self.run_cli(str(examples/"hello_world.json"))
		self.assertEqual(0, status)
		self.assertEqual("Hello, World!\n", out)
		self.assertEqual("", err)

	def test_check_only(self):
		status, out, err = self.run_cli("-c", str(examples/"oops.json"))
		self.assertEqual(0, status)
		self.assertEqual("", out)
		self.assertIn("Looks plausible to me.", err)

	def test_verbose(self):
		status, out, err = self.run_cli("-v", str(examples/"functions.json"))
		self.assertEqual(0, status)
		self.assertIn("evaluation steps", err)
		self.assertIn("Result: 2", err)

	def test_runtime_error(self):
		status, out, err = self.run_cli(str(examples/"oops.json"))
		self.assertEqual(1, status)
		self.assertEqual("before\n", out)
		self.assertIn("Run-time error: Division by zero.", err)

	def test_missing_file(self):
		status, out, err = self.run_cli(str(examples/"no_such_program.json"))
		self.assertEqual(1, status)
		self.assertIn("I see no file called", err)

	def test_static_problem(self):
		with tempfile.TemporaryDirectory() as folder:
			path = Path(folder) / "twice.json"
			path.write_text(json.dumps({"body": [
				{"kind": "let", "name": "a"},
				{"kind": "let", "name": "a"},
			]}))
			status, out, err = self.run_cli(str(path))
		self.assertEqual(1, status)
		self.assertIn("defined more than once", err)

	def test_runaway_recursion(self):
		with tempfile.TemporaryDirectory() as folder:
			path = Path(folder) / "forever.json"
			path.write_text(json.dumps({"body": [
				{"kind": "fn", "name": "f", "params": [], "body": [
					{"kind": "return", "values": [{"kind": "call", "name": "f", "args": []}]},
				]},
				{"kind": "expr", "expr": {"kind": "call", "name": "f", "args": []}},
			]}))
			status, out, err = self.run_cli(str(path))
		self.assertEqual(1, status)
		self.assertIn("Function calls nested more than 5000 deep.", err)
		self.assertIn("more frames", err)
		self.assertLess(err.count("\n"), 100)

if __name__ == '__main__':
	unittest.main()
