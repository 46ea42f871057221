"""
Activation records: the run-time scopes.

Each frame maps variable names to thunks, and separately maps function names
to closures, because the language keeps those in different namespaces.
The static link leads to the lexically-enclosing scope, which is where
name resolution continues. The dynamic link leads to the caller, and serves
only to restore the caller on return and to make stack traces make sense.
"""

from typing import NamedTuple, Optional, Any
from .ontology import Phrase
from .errors import UndefinedVariable, UndefinedFunction, Redefinition

# Phases in the life of a call frame:
ENTERING = "entering"
BOUND = "bound"
EVALUATING = "evaluating"
RETURNING = "returning"
EXITED = "exited"

class Crumb(NamedTuple):
	""" One line of a back-trace: Who was called with what, and where it got to. """
	function: Any  # syntax.Function, or None for the global scope.
	arguments: dict[str, Any]
	pc: Optional[Phrase]

class Frame:
	_bindings : dict[str, Any]  # name -> evaluator.Thunk
	_functions : dict[str, Any]  # name -> executive.Closure
	static_link : Optional["Frame"] = None
	dynamic_link : Optional["Frame"] = None
	environment : Any  # The environment.Environment this frame belongs to.
	pc : Optional[Phrase] = None
	phase : str = EVALUATING

	def __init__(self, environment):
		self._bindings = {}
		self._functions = {}
		self.environment = environment

	@property
	def closed(self) -> bool: return self.phase == EXITED

	def holds(self, name:str) -> bool: return name in self._bindings

	def assign(self, name:str, thunk):
		if name in self._bindings: raise Redefinition(name)
		self._bindings[name] = thunk
		return thunk

	def fetch(self, name:str): return self._bindings[name]

	def chase(self, name:str) -> "Frame":
		""" Find the innermost lexically-enclosing frame which binds the name. """
		frame = self
		while frame is not None:
			if name in frame._bindings: return frame
			frame = frame.static_link
		raise UndefinedVariable(name)

	def lookup(self, name:str):
		return self.chase(name).fetch(name)

	def declare(self, name:str, closure):
		if name in self._functions: raise Redefinition(name)
		self._functions[name] = closure
		return closure

	def lookup_function(self, name:str):
		frame = self
		while frame is not None:
			if name in frame._functions: return frame._functions[name]
			frame = frame.static_link
		raise UndefinedFunction(name)

	def close(self):
		"""
		Whatever is still unevaluated in this scope will never be needed,
		so it can go. Forcing anything that still refers here is an error.
		"""
		self.phase = EXITED
		self._bindings.clear()
		self._functions.clear()

	def crumb(self) -> Crumb: raise NotImplementedError(type(self))

	def backtrace(self) -> list[Crumb]:
		""" Outermost first, the way a stack trace reads. """
		trace = []
		frame = self
		while frame is not None:
			trace.append(frame.crumb())
			frame = frame.dynamic_link
		trace.reverse()
		return trace

class RootFrame(Frame):
	""" The global scope, which lasts as long as the program runs. """
	def crumb(self) -> Crumb: return Crumb(None, {}, self.pc)

class Activation(Frame):
	""" The scope of one call to a user-defined function. """
	def __init__(self, environment, function, static_link:Frame, dynamic_link:Frame):
		super().__init__(environment)
		self.function = function
		self.static_link = static_link
		self.dynamic_link = dynamic_link
		self.phase = ENTERING

	def crumb(self) -> Crumb:
		arguments = {}
		for p in self.function.params:
			thunk = self._bindings.get(p.nom.text)
			if thunk is not None: arguments[p.nom.text] = thunk.value
		return Crumb(self.function, arguments, self.pc)
