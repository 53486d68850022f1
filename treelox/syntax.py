"""
The set of parse-nodes in simple form.
The parser calls these constructors with subordinate semantic-values in a bottom-up tree transduction.
This set is closed: the resolver and the run-time each have exactly one method per class herein.
Nodes are compared and hashed by identity, which is what the resolver's distance table relies on.
"""
from typing import Any, Optional, Sequence
from .ontology import ValueExpression, Statement, Nom

class Literal(ValueExpression):
	def __init__(self, value: Any, nom: Nom):
		assert value is None or isinstance(value, (bool, float, str)), type(value)
		self.value, self._nom = value, nom
	def __str__(self): return "<Literal %r>" % self.value
	def head(self): return self._nom

class Grouping(ValueExpression):
	def __init__(self, expr: ValueExpression): self.expr = expr
	def head(self): return self.expr.head()

class Unary(ValueExpression):
	def __init__(self, op: Nom, arg: ValueExpression):
		self.op, self.arg = op, arg
	def head(self): return self.op

class Binary(ValueExpression):
	def __init__(self, lhs: ValueExpression, op: Nom, rhs: ValueExpression):
		self.lhs, self.op, self.rhs = lhs, op, rhs
	def head(self): return self.op

class Logical(Binary):
	""" The short-cut operators "and" and "or". """
	pass

class Variable(ValueExpression):
	def __init__(self, nom: Nom): self.nom = nom
	def __str__(self): return "<ref:%s>" % self.nom.text
	def head(self): return self.nom

class Assign(ValueExpression):
	def __init__(self, nom: Nom, expr: ValueExpression):
		self.nom, self.expr = nom, expr
	def head(self): return self.nom

class Call(ValueExpression):
	def __init__(self, callee: ValueExpression, paren: Nom, args: Sequence[ValueExpression]):
		self.callee, self.paren, self.args = callee, paren, args or ()
	def __str__(self):
		return "%s(%s)" % (self.callee, ', '.join(map(str, self.args)))
	def head(self): return self.paren

class Get(ValueExpression):
	def __init__(self, obj: ValueExpression, nom: Nom):
		self.obj, self.nom = obj, nom
	def __str__(self): return "(%s.%s)" % (self.obj, self.nom.text)
	def head(self): return self.nom

class Set(ValueExpression):
	def __init__(self, obj: ValueExpression, nom: Nom, expr: ValueExpression):
		self.obj, self.nom, self.expr = obj, nom, expr
	def head(self): return self.nom

class This(ValueExpression):
	def __init__(self, keyword: Nom): self.keyword = keyword
	def __str__(self): return "<this>"
	def head(self): return self.keyword

class Super(ValueExpression):
	def __init__(self, keyword: Nom, method: Nom):
		self.keyword, self.method = keyword, method
	def __str__(self): return "<super.%s>" % self.method.text
	def head(self): return self.keyword

###############################################################################

class ExpressionStatement(Statement):
	def __init__(self, expr: ValueExpression): self.expr = expr
	def head(self): return self.expr.head()

class Print(Statement):
	def __init__(self, keyword: Nom, expr: ValueExpression):
		self.keyword, self.expr = keyword, expr
	def head(self): return self.keyword

class VarDeclaration(Statement):
	def __init__(self, nom: Nom, initializer: Optional[ValueExpression]):
		self.nom, self.initializer = nom, initializer
	def head(self): return self.nom

class Block(Statement):
	def __init__(self, statements: Sequence[Statement]):
		self.statements = statements or ()
	def head(self): return self.statements[0].head() if self.statements else None

class If(Statement):
	def __init__(self, condition: ValueExpression, then_branch: Statement, else_branch: Optional[Statement]):
		self.condition, self.then_branch, self.else_branch = condition, then_branch, else_branch
	def head(self): return self.condition.head()

class While(Statement):
	def __init__(self, condition: ValueExpression, body: Statement):
		self.condition, self.body = condition, body
	def head(self): return self.condition.head()

class FunctionDeclaration(Statement):
	""" Serves for free functions and for methods alike. """
	def __init__(self, nom: Nom, params: Sequence[Nom], body: Sequence[Statement]):
		self.nom = nom
		self.params = params or ()
		self.body = body or ()
	def __repr__(self):
		p = ", ".join(p.text for p in self.params)
		return "{fun|%s(%s)}" % (self.nom.text, p)
	def head(self): return self.nom

class Return(Statement):
	def __init__(self, keyword: Nom, value: Optional[ValueExpression]):
		self.keyword, self.value = keyword, value
	def head(self): return self.keyword

class ClassDeclaration(Statement):
	def __init__(self, nom: Nom, superclass: Optional[Variable], methods: Sequence[FunctionDeclaration]):
		assert superclass is None or isinstance(superclass, Variable), type(superclass)
		self.nom, self.superclass = nom, superclass
		self.methods = methods or ()
	def __repr__(self): return "{class|%s}" % self.nom.text
	def head(self): return self.nom

EXPRESSIONS = (Literal, Grouping, Unary, Binary, Logical, Variable, Assign, Call, Get, Set, This, Super)
STATEMENTS = (ExpressionStatement, Print, VarDeclaration, Block, If, While, FunctionDeclaration, Return, ClassDeclaration)
