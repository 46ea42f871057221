import sys, random
from functools import lru_cache
from typing import Sequence, Optional
from pathlib import Path
from boozetools.support.failureprone import SourceText, illustration

from .location import lookup_span, is_located
from .ontology import Phrase, Nom
from .stacking import Crumb
from .values import render
from .errors import EvaluationError

class TooManyIssues(Exception):
	pass

def _outburst():
	particle = ["Oh, ", "Well, ", "Aw, ", "", ""]

	minced_oaths = [
		'Ack', 'ARGH', 'Blargh', 'Blasted Thing',
		'Confound it', 'Crud', 'Curses', "Crikey",
		'Dag Blammit', 'Dag Nabbit', 'Drat',
		'Fiddlesticks', 'Good Grief', "Great Scott",
		'Jeepers', 'Heavens', 'Nuts', 'Rats',
	]

	resignations = [
		'I am undone.',
		'I cannot continue.',
		'I have no idea what the right answer is.',
		'I need to ask for help.',
	]

	return "%s%s! %s"%tuple(map(random.choice, (particle, minced_oaths, resignations)))

class Report:
	""" Collects issues from any phase, and explains them to the console on request. """
	_issues : list["Pic"]

	def __init__(self, *, verbose:int=0, max_issues=10):
		self._verbose = verbose or 0   # Because None is incomparable.
		self._issues = []
		self._redefined = {}
		self._max_issues = max_issues

	def ok(self): return not self._issues
	def sick(self): return bool(self._issues)

	@property
	def issues(self) -> list["Pic"]: return self._issues

	def issue(self, it:"Pic"):
		self._issues.append(it)
		if len(self._issues) == self._max_issues:
			raise TooManyIssues(self)

	def info(self, *args):
		if self._verbose:
			print(*args, file=sys.stderr)

	def complain_to_console(self):
		""" Emit all the issues to the console. """
		_bemoan(self._issues)

	def assert_no_issues(self, message):
		""" Does what it says on the tin """
		if self._issues:
			self.complain_to_console()
			raise AssertionError(_outburst()+" "+message)

	# Methods the program loader calls:

	def _file_error(self, path:Path, prefix:str):
		self.issue(Pic(prefix+" "+str(path), []))

	def no_such_file(self, path:Path):
		self._file_error(path, "I see no file called")

	def broken_file(self, path:Path, why:str):
		self.issue(Pic("Something went pear-shaped while trying to read "+str(path), [], [why]))

	def malformed_program(self, path:Path, where:str, why:str):
		intro = "The program in %s is not a well-formed syntax tree." % path
		self.issue(Pic(intro, [], ["At %s: %s" % (where, why)]))

	# Methods the static checks call:

	def redefined(self, text:str, first:Phrase, guilty:Phrase):
		key = text, first
		if key not in self._redefined:
			intro = "'%s' is defined more than once in the same scope." % text
			issue = Pic(intro, [Annotation(first, "Earliest definition")])
			self.issue(issue)
			self._redefined[key] = issue
		self._redefined[key].also(guilty, "Defined again here")

	def shadows_built_in(self, nom:Nom):
		intro = "'%s' is the name of a built-in function, which always takes precedence." % nom.text
		self.issue(Pic(intro, [Annotation(nom)]))

	def unknown_operator(self, op:Nom):
		intro = "There is no such operator as '%s'." % op.text
		self.issue(Pic(intro, [Annotation(op)]))

	# The run-time calls this on its way down:

	def runtime_error(self, ex:EvaluationError):
		intro = "Run-time error: " + ex.describe()
		problem = trace_stack(ex.stack)
		if ex.site is not None:
			guilty = Annotation(ex.site, ex.describe())
			where = guilty.row_col()
			if where is not None:
				intro += " (line %d, column %d)" % tuple(where)
			problem.append(guilty)
		self.issue(Pic(intro, problem))

class Annotation:
	path: Optional[Path]
	slice: slice
	caption: str
	def __init__(self, node:Phrase, caption:str=""):
		first, last = node.span()
		if not is_located(first): first = last
		if not is_located(last): last = first
		if is_located(first):
			span = lookup_span(first, last)
			self.path = span.path
			self.slice = span.slice
		else:
			self.path = None
			self.slice = slice(0, 0)
		self.node = node
		self.caption = caption

	def row_col(self) -> Optional[tuple[int, int]]:
		if self.path is None: return None
		return _fetch(self.path).find_row_col(self.slice.start)

	def illustrate(self):
		if self.path is None:
			return "       | %s  %s" % (self.node, self.caption)
		source = _fetch(self.path)
		row, col = source.find_row_col(self.slice.start)
		single_line = source.line_of_text(row)
		width = max(1, self.slice.stop - self.slice.start)
		return illustration(single_line, col, width, prefix='% 6d |' % row, caption=self.caption)

# Deep recursion makes for a tedious trace. Show the ends of it.
TRACE_ENDS = 8

class Elision:
	path = None
	def __init__(self, count:int): self.count = count
	def illustrate(self): return "       | ... %d more frames ..." % self.count

def trace_stack(stack:Sequence[Crumb]) -> list:
	trace = []
	if len(stack) > 2 * TRACE_ENDS + 1:
		omitted = len(stack) - 2 * TRACE_ENDS
		return trace_stack(stack[:TRACE_ENDS]) + [Elision(omitted)] + trace_stack(stack[-TRACE_ENDS:])
	for crumb in stack:
		if crumb.function is not None:
			bind_text = ', '.join("%s:%s" % (k, render(v)) for k, v in crumb.arguments.items())
			trace.append(Annotation(crumb.function, "in %s(%s)" % (crumb.function.nom.text, bind_text)))
		if crumb.pc is not None:
			trace.append(Annotation(crumb.pc))
	return trace

class Pic:
	def __init__(self, intro:str, anns:list[Annotation], footer=()):
		self._intro, self._anns, self._footer = intro, anns, footer
	@property
	def intro(self) -> str: return self._intro
	def also(self, node, caption:str=""): self._anns.append(Annotation(node, caption))
	def as_text(self):
		# Hey! This has precisely the algorithm it does so that stack traces make sense!
		lines = [self._intro, ""]
		path = None
		for ann in self._anns:
			if ann.path != path and ann.path is not None:
				path = ann.path
				lines.append(str(path))
			lines.append(ann.illustrate())
		lines.extend(self._footer)
		return '\n'.join(lines)

@lru_cache(5)
def _fetch(path) -> SourceText:
	if path is None:
		return SourceText("")
	with open(path, "r", encoding="utf-8") as fh:
		return SourceText(fh.read(), filename=str(path))

def _bemoan(issues):
	""" Emit all the issues to the console. """
	if issues:
		print("*"*60, file=sys.stderr)
		print(_outburst(), file=sys.stderr)
	for i in issues:
		print("  -"*20, file=sys.stderr)
		print(i.as_text(), file=sys.stderr)
	sys.stderr.flush()
