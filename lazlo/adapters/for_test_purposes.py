"""
A console that keeps what it hears, so tests can examine the output.
"""
from .teletype_adapter import Console

class Transcript(Console):
	def __init__(self):
		super().__init__()
		self.fragments = []
		self.values = []

	def echo(self, text:str):
		self.fragments.append(text)

	def print(self, *values):
		self.values.extend(values)
		super().print(*values)

	def println(self, *values):
		self.values.extend(values)
		super().println(*values)

	def text(self) -> str:
		return ''.join(self.fragments)
