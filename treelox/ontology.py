"""
These most-fundamental classes in the syntax class hierarchy
are separate from the rest to avoid various circular-import
scenarios. The diagnostics module needs to know about tokens
and phrases, but it has no business knowing every node type.
"""

class Phrase:
	def head(self) -> "Nom":
		""" Return the token that best stands for this phrase in a diagnostic """
		raise NotImplementedError(type(self))

class Nom(Phrase):
	"""
	Representing the occurrence of a name (or keyword, or operator) anywhere.
	The parser supplies the line and, if it cares to, the character offset.
	"""
	line: int  # zero-line means pre-defined term.
	spot: int  # character offset into the source text, or None.
	def __init__(self, text, line=0, spot=None):
		assert isinstance(text, str)
		assert isinstance(line, int), type(line)
		self.text, self.line, self.spot = text, line, spot
	def __repr__(self): return "<Name %r>" % self.text
	def key(self): return self.text
	def head(self): return self

class ValueExpression(Phrase): pass

class Statement(Phrase): pass

THIS = "this"
SUPER = "super"
INIT = "init"
