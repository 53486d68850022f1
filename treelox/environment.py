"""
Run-time scope frames: the canonical list-structured search.

Every frame but the global one has a static link to its enclosing frame.
Closures hold on to frames by ordinary reference, so a frame lives as long
as anything can still reach it. Links only ever point toward the globals,
so the structure is a tree and never a cycle.
"""
from typing import Any, Optional
from .ontology import Nom
from .diagnostics import trace_desync
from .tree_walker.types import LoxRuntimeError

class Environment:
	_bindings: dict[str, Any]
	static_link: Optional["Environment"]

	def __init__(self, static_link:Optional["Environment"]=None):
		self._bindings = {}
		self.static_link = static_link

	def __repr__(self):
		return "<Environment %s>" % ', '.join(self._bindings)

	def __contains__(self, name:str) -> bool:
		return name in self._bindings

	def define(self, name:str, value:Any):
		""" Insert or overwrite, in this frame only. """
		self._bindings[name] = value

	def ancestor(self, distance:int) -> "Environment":
		env = self
		for _ in range(distance):
			env = env.static_link
		return env

	# The resolved path: the resolver said exactly where to look.

	def fetch_at(self, distance:int, nom:Nom) -> Any:
		try: return self.ancestor(distance)._bindings[nom.key()]
		except (KeyError, AttributeError):
			trace_desync(nom, "This wasn't found %d frame(s) out; resolver bug" % distance)
			raise

	def assign_at(self, distance:int, nom:Nom, value:Any):
		frame = self.ancestor(distance)
		if frame is None or nom.key() not in frame._bindings:
			trace_desync(nom, "Nothing to assign %d frame(s) out; resolver bug" % distance)
			raise KeyError(nom.key())
		frame._bindings[nom.key()] = value

	# The dynamic path, for names the resolver left to the globals.

	def fetch(self, nom:Nom) -> Any:
		key = nom.key()
		env = self
		while env is not None:
			if key in env._bindings: return env._bindings[key]
			env = env.static_link
		raise LoxRuntimeError(nom, "Undefined variable '%s'." % key)

	def assign(self, nom:Nom, value:Any):
		key = nom.key()
		env = self
		while env is not None:
			if key in env._bindings:
				env._bindings[key] = value
				return
			env = env.static_link
		raise LoxRuntimeError(nom, "Undefined variable '%s'." % key)
