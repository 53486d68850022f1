"""
The resolver's notion of a lexical scope: one level of a block-structured name-space.
Each name is either "declared" (not yet ready to read) or "defined" (ready).
"""

from .ontology import Nom

class AlreadyExists(KeyError): pass

class Layer:
	""" Lightly enhanced dictionary: It does not like duplicate keys. """
	_locate: dict[str, Nom]
	_ready: dict[str, bool]

	def __init__(self):
		self._locate, self._ready = {}, {}

	def __contains__(self, key: str) -> bool:
		return key in self._ready

	def locate(self, key: str) -> Nom:
		return self._locate[key]

	def is_ready(self, key: str) -> bool:
		return self._ready.get(key, True)

	def declare(self, nom: Nom):
		"""
		Insert the name as not-yet-ready. A duplicate still gets (re)declared,
		so that resolution can carry on, but the caller hears about it.
		"""
		key = nom.key()
		duplicate = key in self._ready
		if not duplicate: self._locate[key] = nom
		self._ready[key] = False
		if duplicate: raise AlreadyExists(key)

	def define(self, nom: Nom):
		key = nom.key()
		self._locate.setdefault(key, nom)
		self._ready[key] = True
