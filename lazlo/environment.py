"""
The environment: a chain of lexical scopes, plus the bits of
process-wide state that go along with running one program.

The innermost scope on the chain is whatever frame is presently executing
statements. Deferred computations do not care about that: They carry
their own frame, and consult the chain from there.
"""
from .stacking import Frame, RootFrame, Activation, EXITED
from .errors import StackOverflow

# Each call costs a dozen or so Python frames; see executive.RECURSION_LIMIT.
MAX_CALL_DEPTH = 5000

class Environment:
	root: RootFrame
	current: Frame
	steps: int  # How many expression nodes have been evaluated.
	_depth: int

	def __init__(self, console, max_depth:int=MAX_CALL_DEPTH):
		self.console = console
		self.steps = 0
		self._depth = 0
		self._max_depth = max_depth
		self.root = self.current = RootFrame(self)

	def define(self, name:str, thunk):
		""" Bind in the innermost scope. Rebinding in the same scope is an error. """
		return self.current.assign(name, thunk)

	def lookup(self, name:str):
		""" Search innermost-to-outermost. """
		return self.current.lookup(name)

	def push_scope(self, function, static_link:Frame) -> Activation:
		if self._depth >= self._max_depth:
			raise StackOverflow(self._max_depth)
		frame = Activation(self, function, static_link, self.current)
		self._depth += 1
		self.current = frame
		return frame

	def pop_scope(self, frame:Frame):
		assert frame is self.current, "Scopes must be popped in the order they were pushed."
		assert frame is not self.root
		self.current = frame.dynamic_link
		self._depth -= 1
		frame.close()

	def depth(self) -> int:
		return self._depth

	def shut_down(self):
		""" At normal termination, the global scope goes away too. """
		if self.root.phase != EXITED:
			self.root.close()
