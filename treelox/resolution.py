"""
All the static binding work goes here.
By the time this pass is finished, every local reference (variable, assignment,
"this", and "super") knows how many scope-frames out its definition lives.
References the pass cannot find are left alone: they must be globals,
which the run-time will look up dynamically.

This pass also enforces the structural rules of the language,
and it carries on after finding a problem so as to report them all at once.
"""
from enum import Enum
from typing import Iterable
from boozetools.support.foundation import Visitor
from . import syntax
from .diagnostics import Report
from .ontology import Nom, ValueExpression, Statement, THIS, SUPER, INIT
from .space import Layer, AlreadyExists

ResolvedBinding = dict[ValueExpression, int]

class Yuck(Exception):
	"""
	The first argument will be the name of the pass fraught with error.
	The end-user might not care about this, but it's handy for testing.
	"""
	pass

class FunctionKind(Enum):
	NONE = "none"
	FUNCTION = "function"
	METHOD = "method"
	INITIALIZER = "initializer"

class ClassKind(Enum):
	NONE = "none"
	CLASS = "class"
	SUBCLASS = "subclass"

def resolve_program(statements:Iterable[Statement], report:Report) -> ResolvedBinding:
	resolver = Resolver(report)
	resolver.tour(statements)
	if report.sick(): raise Yuck("resolve")
	report.info("Resolved %d local reference(s)." % len(resolver.depths))
	return resolver.depths

class TopDown(Visitor):
	"""
	Convenience base-class to handle the dreary bits of a
	perfectly ordinary top-down walk through a syntax tree.
	"""

	def tour(self, items):
		for i in items:
			self.visit(i)

	def visit_Literal(self, it: syntax.Literal): pass

	def visit_Grouping(self, it: syntax.Grouping):
		self.visit(it.expr)

	def visit_Unary(self, it: syntax.Unary):
		self.visit(it.arg)

	def visit_Binary(self, it: syntax.Binary):
		self.visit(it.lhs)
		self.visit(it.rhs)

	def visit_Logical(self, it: syntax.Logical):
		self.visit(it.lhs)
		self.visit(it.rhs)

	def visit_Call(self, it: syntax.Call):
		self.visit(it.callee)
		self.tour(it.args)

	def visit_Get(self, it: syntax.Get):
		# Properties are looked up dynamically, so only the object is of interest.
		self.visit(it.obj)

	def visit_Set(self, it: syntax.Set):
		self.visit(it.obj)
		self.visit(it.expr)

	def visit_ExpressionStatement(self, it: syntax.ExpressionStatement):
		self.visit(it.expr)

	def visit_Print(self, it: syntax.Print):
		self.visit(it.expr)

	def visit_If(self, it: syntax.If):
		self.visit(it.condition)
		self.visit(it.then_branch)
		if it.else_branch is not None:
			self.visit(it.else_branch)

	def visit_While(self, it: syntax.While):
		self.visit(it.condition)
		self.visit(it.body)

class Resolver(TopDown):
	"""
	This single top-down tree-walk does a few things:

	* Connect each local reference to the distance of its definition.
	* Complain about locals read in their own initializers, or declared twice in one scope.
	* Complain about misplaced "return", "this", and "super".
	* Complain about classes that inherit from themselves.

	The global scope is deliberately not on the stack of scopes.
	Top-level names may be declared again, and may be used before
	their declaration in a function body, so the run-time finds them by name.
	"""
	report: Report
	depths: ResolvedBinding

	_scopes: list[Layer]
	_function_kind: FunctionKind
	_class_kind: ClassKind

	def __init__(self, report:Report):
		self.report = report
		self.depths = {}
		self._scopes = []
		self._function_kind = FunctionKind.NONE
		self._class_kind = ClassKind.NONE

	def _begin_scope(self) -> Layer:
		layer = Layer()
		self._scopes.append(layer)
		return layer

	def _end_scope(self):
		self._scopes.pop()

	def _declare(self, nom:Nom):
		if not self._scopes: return
		layer = self._scopes[-1]
		try: layer.declare(nom)
		except AlreadyExists:
			self.report.redefined(layer.locate(nom.key()), nom)

	def _define(self, nom:Nom):
		if self._scopes: self._scopes[-1].define(nom)

	def _resolve_local(self, expr:ValueExpression, nom:Nom):
		key = nom.key()
		for distance, layer in enumerate(reversed(self._scopes)):
			if key in layer:
				self.depths[expr] = distance
				return
		# Not found. Assume it is global.

	def _resolve_function(self, fn:syntax.FunctionDeclaration, kind:FunctionKind):
		prior = self._function_kind
		self._function_kind = kind
		self._begin_scope()
		for param in fn.params:
			self._declare(param)
			self._define(param)
		self.tour(fn.body)
		self._end_scope()
		self._function_kind = prior

	def visit_Block(self, block: syntax.Block):
		self._begin_scope()
		self.tour(block.statements)
		self._end_scope()

	def visit_VarDeclaration(self, vd: syntax.VarDeclaration):
		self._declare(vd.nom)
		if vd.initializer is not None:
			self.visit(vd.initializer)
		self._define(vd.nom)

	def visit_FunctionDeclaration(self, fn: syntax.FunctionDeclaration):
		# Defined before the body, so the function may call itself.
		self._declare(fn.nom)
		self._define(fn.nom)
		self._resolve_function(fn, FunctionKind.FUNCTION)

	def visit_Return(self, rs: syntax.Return):
		if self._function_kind is FunctionKind.NONE:
			self.report.return_from_top_level(rs.keyword)
		if rs.value is not None:
			if self._function_kind is FunctionKind.INITIALIZER:
				self.report.return_value_from_initializer(rs.keyword)
			self.visit(rs.value)

	def visit_ClassDeclaration(self, cd: syntax.ClassDeclaration):
		prior = self._class_kind
		self._class_kind = ClassKind.CLASS
		self._declare(cd.nom)
		self._define(cd.nom)

		if cd.superclass is not None:
			if cd.superclass.nom.key() == cd.nom.key():
				self.report.inherits_from_itself(cd.superclass.nom)
			self._class_kind = ClassKind.SUBCLASS
			self.visit(cd.superclass)
			self._begin_scope().define(_keyword(SUPER, cd.nom))

		self._begin_scope().define(_keyword(THIS, cd.nom))
		for method in cd.methods:
			kind = FunctionKind.INITIALIZER if method.nom.key() == INIT else FunctionKind.METHOD
			self._resolve_function(method, kind)
		self._end_scope()

		if cd.superclass is not None: self._end_scope()
		self._class_kind = prior

	def visit_Variable(self, expr: syntax.Variable):
		if self._scopes and not self._scopes[-1].is_ready(expr.nom.key()):
			self.report.self_referential_initializer(expr.nom)
		self._resolve_local(expr, expr.nom)

	def visit_Assign(self, expr: syntax.Assign):
		self.visit(expr.expr)
		self._resolve_local(expr, expr.nom)

	def visit_This(self, expr: syntax.This):
		if self._class_kind is ClassKind.NONE:
			self.report.this_outside_class(expr.keyword)
			return
		self._resolve_local(expr, expr.keyword)

	def visit_Super(self, expr: syntax.Super):
		if self._class_kind is ClassKind.NONE:
			self.report.super_outside_class(expr.keyword)
		elif self._class_kind is not ClassKind.SUBCLASS:
			self.report.super_without_superclass(expr.keyword)
		self._resolve_local(expr, expr.keyword)

def _keyword(text:str, near:Nom) -> Nom:
	""" Synthesize an implicit binding, located where the class is declared """
	return Nom(text, near.line, near.spot)
