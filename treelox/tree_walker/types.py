"""
This module aims to express an interface agreement
between the evaluator and various kinds of data.
"""

from abc import ABC
from typing import Sequence, Union
from ..ontology import Nom

NATIVE_DATA = Union[None, bool, float, str]

class LoxValue(ABC):
	""" Root for classes that implement specialized run-time data structures """
	pass

VALUE = Union[NATIVE_DATA, LoxValue]
ARGS = Sequence[VALUE]

class LoxRuntimeError(Exception):
	"""
	Raised wherever evaluation goes wrong in a way the program could have avoided.
	On its way out through calls, it collects the call-sites as a trace.
	"""
	nom: Nom
	message: str
	trace: list[Nom]

	def __init__(self, nom:Nom, message:str):
		super().__init__(message)
		self.nom, self.message = nom, message
		self.trace = []

	def called_from(self, site:Nom):
		self.trace.append(site)
