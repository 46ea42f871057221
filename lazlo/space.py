"""
Name-spaces for the static checks: Which names a scope defines, and where.
"""

from .ontology import Phrase

class AlreadyExists(KeyError): pass

class Layer:
	""" Lightly enhanced dictionary: It does not like duplicate keys. """
	_locate: dict[str, Phrase]

	def __init__(self):
		self._locate = {}

	def locate(self, key: str) -> Phrase:
		return self._locate[key]

	def mount(self, key:str, phrase:Phrase) -> Phrase:
		if key in self._locate:
			raise AlreadyExists(key)
		else:
			self._locate[key] = phrase
			return phrase
