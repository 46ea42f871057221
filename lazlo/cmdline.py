"""
This is an interpreter for lazy little programs, handed over as JSON syntax trees.

{0}

For example:

    lazlo program.json

will run program.json if possible, or else try to explain why not.

    lazlo -h

will explain all the arguments.
"""
import sys, argparse
from pathlib import Path

parser = argparse.ArgumentParser(
	prog="lazlo",
	description="Interpreter for call-by-need programs in JSON syntax-tree form.",
)
parser.add_argument("program", help="try examples/hello_world.json for example.")
parser.add_argument('-c', "--check", action="count", help="Check the program (verbosely, if repeated) but do not actually execute the program.")
parser.add_argument('-v', "--verbose", action="count", help="Say how much work the program took, and what it returned.")

def run(args):
	from .diagnostics import Report, TooManyIssues
	from .front_end import load_program
	from .resolution import check_program, Yuck
	from .errors import EvaluationError
	report = Report(verbose=args.check or args.verbose)
	try:
		module = load_program(Path.cwd() / args.program, report)
		if module is None:
			assert report.sick()
			report.complain_to_console()
			return 1
		try: check_program(module, report)
		except Yuck:
			report.complain_to_console()
			return 1
	except TooManyIssues:
		report.complain_to_console()
		print(" *"*35, file=sys.stderr)
		print("Giving up after a few issues. One crisis at a time, eh?", file=sys.stderr)
		return 1
	if args.check:
		print("Looks plausible to me.", file=sys.stderr)
		return 0
	from .environment import Environment
	from .executive import execute_module
	from .adapters.teletype_adapter import Console
	from .values import render
	env = Environment(Console())
	try: result = execute_module(module, env)
	except EvaluationError as ex:
		report.runtime_error(ex)
		report.complain_to_console()
		return 1
	if args.verbose:
		print("Finished after %d evaluation steps." % env.steps, file=sys.stderr)
		if result is not None:
			print("Result:", render(result), file=sys.stderr)
	return 0

def main():
	if len(sys.argv) > 1:
		exit(run(parser.parse_args()))
	else:
		print(__doc__.strip().format(parser.format_usage()))
