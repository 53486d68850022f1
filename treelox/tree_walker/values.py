"""
This module defines the specialized value-types that the tree-walker operates in terms of.
Basic primitive values play themselves, but special things like closures need more help.
"""
from abc import abstractmethod
from typing import Callable as PythonCallable, Optional
from .. import syntax
from ..ontology import Nom, THIS, INIT
from ..environment import Environment
from .types import ARGS, VALUE, LoxValue, LoxRuntimeError

_THIS = Nom(THIS)

class Callable(LoxValue):
	""" A run-time object that can be applied with arguments. """
	@abstractmethod
	def arity(self) -> int: pass

	@abstractmethod
	def apply(self, interpreter, args: ARGS) -> VALUE: pass

class Primitive(Callable):
	""" Host-provided behavior. No captured environment. """
	def __init__(self, fn: PythonCallable, arity: int):
		self._fn = fn
		self._arity = arity

	def __str__(self): return "<native fn>"

	def arity(self) -> int: return self._arity

	def apply(self, interpreter, args: ARGS) -> VALUE:
		return self._fn(*args)

class Closure(Callable):
	""" The run-time manifestation of a function: a callable value tied to its natal environment. """
	# The same Closure type serves for both functions and methods.

	def __init__(self, dfn: syntax.FunctionDeclaration, static_link: Environment, is_initializer: bool = False):
		self._dfn = dfn
		self._static_link = static_link
		self.is_initializer = is_initializer

	def __str__(self): return "<fn %s>" % self._name()

	def _name(self): return self._dfn.nom.text

	def arity(self) -> int: return len(self._dfn.params)

	def apply(self, interpreter, args: ARGS) -> VALUE:
		inner = Environment(self._static_link)
		for param, arg in zip(self._dfn.params, args):
			inner.define(param.key(), arg)
		completion = interpreter.execute_body(self._dfn.body, inner)
		if self.is_initializer:
			return self._static_link.fetch_at(0, _THIS)
		if completion is not None:
			return completion.value

	def bind(self, instance: "Instance") -> "Closure":
		""" Make a method aware of its receiver """
		inner = Environment(self._static_link)
		inner.define(THIS, instance)
		return Closure(self._dfn, inner, self.is_initializer)

class Class(Callable):
	""" Classes are constructors: call one to get an instance. """
	name: str
	superclass: Optional["Class"]
	_methods: dict[str, Closure]

	def __init__(self, name: str, superclass: Optional["Class"], methods: dict[str, Closure]):
		self.name = name
		self.superclass = superclass
		self._methods = methods

	def __str__(self): return self.name

	def find_method(self, name: str) -> Optional[Closure]:
		try: return self._methods[name]
		except KeyError:
			if self.superclass is not None:
				return self.superclass.find_method(name)

	def arity(self) -> int:
		initializer = self.find_method(INIT)
		return 0 if initializer is None else initializer.arity()

	def apply(self, interpreter, args: ARGS) -> "Instance":
		instance = Instance(self)
		initializer = self.find_method(INIT)
		if initializer is not None:
			initializer.bind(instance).apply(interpreter, args)
		return instance

class Instance(LoxValue):
	def __init__(self, cls: Class):
		self.cls = cls
		self._fields = {}

	def __str__(self): return "%s instance" % self.cls.name

	def get(self, nom: Nom) -> VALUE:
		key = nom.key()
		try: return self._fields[key]
		except KeyError:
			method = self.cls.find_method(key)
			if method is None:
				raise LoxRuntimeError(nom, "Undefined property '%s'." % key)
			return method.bind(self)

	def set(self, nom: Nom, value: VALUE):
		self._fields[nom.key()] = value
