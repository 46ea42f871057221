import sys
from ..values import render

class Console:
	""" The printer behind the print and println built-ins. """
	def __init__(self, stream=None):
		self._stream = stream

	@property
	def stream(self):
		# Looked up late, so that redirecting sys.stdout works as expected.
		return sys.stdout if self._stream is None else self._stream

	def echo(self, text:str):
		self.stream.write(text)
		self.stream.flush()

	def print(self, *values):
		self.echo(''.join(map(render, values)))

	def println(self, *values):
		self.echo(''.join(map(render, values)) + "\n")
