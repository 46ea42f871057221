"""
Things that can go wrong while a program runs.

Each is raised wherever the trouble is first noticed.
On the way out, the innermost evaluation step stamps the error with
the expression it was working on and the frame it was working in,
so the diagnostics can point at the guilty phrase and trace the call stack.
Nothing catches these short of the top level: There is no recovery.
"""
from typing import Optional
from .ontology import Phrase

class EvaluationError(Exception):
	site: Optional[Phrase] = None
	frame = None  # The stacking.Frame in effect where the error came to light.
	stack = ()  # Crumbs of the call stack at that moment, outermost first.

	def describe(self) -> str:
		raise NotImplementedError(type(self))

	def __str__(self): return self.describe()

	def stamp(self, site:Phrase, frame):
		""" Only the innermost stamp counts. """
		if self.site is None:
			self.site, self.frame = site, frame
			self.stack = frame.environment.current.backtrace()

class UndefinedVariable(EvaluationError):
	def __init__(self, name:str):
		super().__init__(name)
		self.name = name
	def describe(self): return "Variable `%s` is not defined." % self.name

class UndefinedFunction(EvaluationError):
	def __init__(self, name:str):
		super().__init__(name)
		self.name = name
	def describe(self): return "Function `%s` is not defined." % self.name

class Redefinition(EvaluationError):
	def __init__(self, name:str):
		super().__init__(name)
		self.name = name
	def describe(self): return "`%s` is already defined in this scope." % self.name

class TypeMismatch(EvaluationError):
	def __init__(self, operator:str, left_kind:str, right_kind:Optional[str]=None):
		super().__init__(operator, left_kind, right_kind)
		self.operator, self.left_kind, self.right_kind = operator, left_kind, right_kind
	def describe(self):
		if self.right_kind is None:
			return "Cannot apply unary operator `%s` to type %s." % (self.operator, self.left_kind)
		return "No implementation for `%s %s %s`." % (self.left_kind, self.operator, self.right_kind)

class DivisionByZero(EvaluationError):
	def describe(self): return "Division by zero."

class NumericOverflow(EvaluationError):
	def __init__(self, operator:str):
		super().__init__(operator)
		self.operator = operator
	def describe(self): return "The result of `%s` does not fit in a 64-bit number." % self.operator

class IndexOutOfRange(EvaluationError):
	def __init__(self, index:int, length:int):
		super().__init__(index, length)
		self.index, self.length = index, length
	def describe(self): return "Index %d is out of range for length %d." % (self.index, self.length)

class ArityMismatch(EvaluationError):
	def __init__(self, function:str, expected:int, got:int):
		super().__init__(function, expected, got)
		self.function, self.expected, self.got = function, expected, got
	def describe(self):
		verb = "were" if self.got != 1 else "was"
		return "Function '%s' expects %d argument(s), but %d %s provided." % (self.function, self.expected, self.got, verb)

class ForcingCycle(EvaluationError):
	def __init__(self, name:str):
		super().__init__(name)
		self.name = name
	def describe(self): return "The value of `%s` depends on itself." % self.name

class DanglingReference(EvaluationError):
	def __init__(self, name:str):
		super().__init__(name)
		self.name = name
	def describe(self): return "`%s` outlived the scope it was defined in." % self.name

class NotBoolean(TypeMismatch):
	""" The left side of a connective was not a Bool, so the right side never got evaluated. """
	def __init__(self, operator:str, left_kind:str):
		super().__init__(operator, left_kind)
	def describe(self):
		return "Logical `%s` needs a Bool on the left, not %s." % (self.operator, self.left_kind)

class ResultTooLarge(EvaluationError):
	def __init__(self, operator:str, size:int):
		super().__init__(operator, size)
		self.operator, self.size = operator, size
	def describe(self): return "The result of `%s` would be %d characters long, which is too long." % (self.operator, self.size)

class StackOverflow(EvaluationError):
	"""
	Either function calls nested past the limit on call depth,
	or a chain of deferred computations ran the interpreter out of stack.
	"""
	def __init__(self, depth:int=None):
		super().__init__(depth)
		self.depth = depth
	def describe(self):
		if self.depth is None: return "Evaluation nested too deeply; the stack is exhausted."
		return "Function calls nested more than %d deep." % self.depth
