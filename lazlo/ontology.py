"""
These most-fundamental classes in the syntax class hierarchy
are separate from the rest to avoid circular imports.
Every phrase knows the location-index of its leftmost and rightmost
pieces, so diagnostics can point at the source text when there is any.
"""

class Phrase:
	def left(self) -> int:
		""" Return the location-index of the leftmost piece of this phrase """
		raise NotImplementedError(type(self))
	def right(self) -> int:
		""" Return the location-index of the rightmost piece of this phrase """
		raise NotImplementedError(type(self))
	def span(self) -> tuple[int, int]: return self.left(), self.right()

class Nom(Phrase):
	""" Representing the occurrence of a name anywhere. """
	spot: int  # zero-spot means no known location.
	def __init__(self, text, spot=None):
		assert isinstance(text, str)
		assert isinstance(spot, int) or spot is None, type(spot)
		self.text, self.spot = text, spot or 0
	def __repr__(self): return "<Name %r>" % self.text
	def key(self): return self.text
	def left(self): return self.spot
	def right(self): return self.spot

class Symbol(Phrase):
	"""
	Any named-and-defined thing that may be found in some scope.
	Thus, functions and their parameters.
	"""
	nom: Nom

	def __init__(self, nom:Nom): self.nom = nom
	def __repr__(self): return "{%s:%s}" % (self.nom.text, type(self).__name__)

	def left(self): return self.nom.left()
	def right(self): return self.nom.right()

class ValueExpression(Phrase): pass

class Statement(Phrase): pass
