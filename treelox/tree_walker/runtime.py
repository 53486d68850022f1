"""
The tree-walking interpreter proper.

Statements and expressions are visited with the environment they run in,
passed explicitly. A block or a call builds a fresh frame and hands it down;
when that visit ends by any path (normal, "return", or a run-time error)
the caller simply carries on with the frame it already had.

Executing a statement yields a completion: None for "carry on",
or a Returning for a "return" on its way out to the nearest call.
"""
import math
import operator
import sys
from typing import Iterable, NamedTuple, Optional, TextIO
from boozetools.support.foundation import Visitor
from .. import syntax, primitive
from ..diagnostics import Report, trace_desync
from ..environment import Environment
from ..ontology import Nom, Statement, ValueExpression, THIS, SUPER, INIT
from ..resolution import ResolvedBinding
from .types import VALUE, LoxRuntimeError
from .values import Callable, Closure, Class, Instance

class Returning(NamedTuple):
	value: VALUE

COMPLETION = Optional[Returning]

def _divide(a:float, b:float) -> float:
	# IEEE-754 rules, rather than a Python exception.
	if b == 0:
		if a == 0 or math.isnan(a): return math.nan
		return math.copysign(math.inf, a) * math.copysign(1.0, b)
	return a / b

ARITHMETIC = {
	"-" : operator.sub,
	"*" : operator.mul,
	"/" : _divide,
	">" : operator.gt,
	">=" : operator.ge,
	"<" : operator.lt,
	"<=" : operator.le,
}

SHORTCUT = {
	"and":False,
	"or":True,
}

def is_truthy(value:VALUE) -> bool:
	if value is None: return False
	if isinstance(value, bool): return value
	return True

def is_equal(a:VALUE, b:VALUE) -> bool:
	# No coercion: true is not 1, and "1" is not 1. But NaN is NaN.
	if type(a) is not type(b): return False
	if isinstance(a, float) and math.isnan(a): return math.isnan(b)
	return a == b

def stringify(value:VALUE) -> str:
	if value is None: return "nil"
	if isinstance(value, bool): return "true" if value else "false"
	if isinstance(value, float):
		if math.isnan(value): return "NaN"
		if math.isinf(value): return "Infinity" if value > 0 else "-Infinity"
		text = repr(value)
		return text[:-2] if text.endswith(".0") else text
	return str(value)

def _number_operand(op:Nom, value:VALUE):
	if not isinstance(value, float):
		raise LoxRuntimeError(op, "Operand must be a number.")

def _number_operands(op:Nom, a:VALUE, b:VALUE):
	if not (isinstance(a, float) and isinstance(b, float)):
		raise LoxRuntimeError(op, "Operands must be numbers.")

class Interpreter(Visitor):
	"""
	Globals persist from one call to interpret() to the next, as do
	the resolved distances. A run-time error ends only the current call.
	"""
	globals: Environment
	_depths: ResolvedBinding

	def __init__(self, stdout:Optional[TextIO]=None):
		self.globals = Environment()
		for name, native in primitive.root_namespace.items():
			self.globals.define(name, native)
		self._depths = {}
		self.stdout = stdout

	def interpret(self, statements:Iterable[Statement], depths:ResolvedBinding, report:Report) -> bool:
		self._depths.update(depths)
		try:
			for stmt in statements:
				completion = self.execute(stmt, self.globals)
				assert completion is None, "The resolver should have stopped a top-level return."
		except LoxRuntimeError as ex:
			report.runtime_error(ex)
			return False
		return True

	def execute(self, stmt:Statement, env:Environment) -> COMPLETION:
		return self.visit(stmt, env)

	def execute_body(self, statements:Iterable[Statement], env:Environment) -> COMPLETION:
		""" Run a sequence of statements in the given frame, stopping early for "return" """
		for stmt in statements:
			completion = self.execute(stmt, env)
			if completion is not None:
				return completion

	def evaluate(self, expr:ValueExpression, env:Environment) -> VALUE:
		return self.visit(expr, env)

	def _look_up(self, expr:ValueExpression, nom:Nom, env:Environment) -> VALUE:
		try: distance = self._depths[expr]
		except KeyError: return self.globals.fetch(nom)
		else: return env.fetch_at(distance, nom)

	def _write(self, text:str):
		print(text, file=self.stdout or sys.stdout)

	###########################################################################

	def visit_ExpressionStatement(self, stmt:syntax.ExpressionStatement, env:Environment):
		self.evaluate(stmt.expr, env)

	def visit_Print(self, stmt:syntax.Print, env:Environment):
		self._write(stringify(self.evaluate(stmt.expr, env)))

	def visit_VarDeclaration(self, stmt:syntax.VarDeclaration, env:Environment):
		value = None
		if stmt.initializer is not None:
			value = self.evaluate(stmt.initializer, env)
		env.define(stmt.nom.key(), value)

	def visit_Block(self, stmt:syntax.Block, env:Environment):
		return self.execute_body(stmt.statements, Environment(env))

	def visit_If(self, stmt:syntax.If, env:Environment):
		if is_truthy(self.evaluate(stmt.condition, env)):
			return self.execute(stmt.then_branch, env)
		elif stmt.else_branch is not None:
			return self.execute(stmt.else_branch, env)

	def visit_While(self, stmt:syntax.While, env:Environment):
		while is_truthy(self.evaluate(stmt.condition, env)):
			completion = self.execute(stmt.body, env)
			if completion is not None:
				return completion

	def visit_FunctionDeclaration(self, stmt:syntax.FunctionDeclaration, env:Environment):
		env.define(stmt.nom.key(), Closure(stmt, env))

	def visit_Return(self, stmt:syntax.Return, env:Environment):
		value = None
		if stmt.value is not None:
			value = self.evaluate(stmt.value, env)
		return Returning(value)

	def visit_ClassDeclaration(self, stmt:syntax.ClassDeclaration, env:Environment):
		name = stmt.nom.key()
		env.define(name, None)
		superclass = None
		method_env = env
		if stmt.superclass is not None:
			superclass = self.evaluate(stmt.superclass, env)
			if not isinstance(superclass, Class):
				raise LoxRuntimeError(stmt.superclass.nom, "Superclass must be a class.")
			method_env = Environment(env)
			method_env.define(SUPER, superclass)
		methods = {
			method.nom.key(): Closure(method, method_env, method.nom.key() == INIT)
			for method in stmt.methods
		}
		env.define(name, Class(name, superclass, methods))

	###########################################################################

	def visit_Literal(self, expr:syntax.Literal, env:Environment):
		return expr.value

	def visit_Grouping(self, expr:syntax.Grouping, env:Environment):
		return self.evaluate(expr.expr, env)

	def visit_Unary(self, expr:syntax.Unary, env:Environment):
		arg = self.evaluate(expr.arg, env)
		if expr.op.text == "-":
			_number_operand(expr.op, arg)
			return -arg
		assert expr.op.text == "!", expr.op
		return not is_truthy(arg)

	def visit_Binary(self, expr:syntax.Binary, env:Environment):
		a = self.evaluate(expr.lhs, env)
		b = self.evaluate(expr.rhs, env)
		op = expr.op.text
		if op == "==": return is_equal(a, b)
		if op == "!=": return not is_equal(a, b)
		if op == "+":
			if isinstance(a, float) and isinstance(b, float): return a + b
			if isinstance(a, str) and isinstance(b, str): return a + b
			raise LoxRuntimeError(expr.op, "Operands must be two numbers or two strings.")
		_number_operands(expr.op, a, b)
		return ARITHMETIC[op](a, b)

	def visit_Logical(self, expr:syntax.Logical, env:Environment):
		lhs = self.evaluate(expr.lhs, env)
		if is_truthy(lhs) == SHORTCUT[expr.op.text]: return lhs
		return self.evaluate(expr.rhs, env)

	def visit_Variable(self, expr:syntax.Variable, env:Environment):
		return self._look_up(expr, expr.nom, env)

	def visit_Assign(self, expr:syntax.Assign, env:Environment):
		value = self.evaluate(expr.expr, env)
		try: distance = self._depths[expr]
		except KeyError: self.globals.assign(expr.nom, value)
		else: env.assign_at(distance, expr.nom, value)
		return value

	def visit_Call(self, expr:syntax.Call, env:Environment):
		callee = self.evaluate(expr.callee, env)
		args = [self.evaluate(a, env) for a in expr.args]
		if not isinstance(callee, Callable):
			raise LoxRuntimeError(expr.paren, "Can only call functions and classes.")
		arity = callee.arity()
		if len(args) != arity:
			raise LoxRuntimeError(expr.paren, "Expected %d arguments but got %d." % (arity, len(args)))
		try: return callee.apply(self, args)
		except LoxRuntimeError as ex:
			ex.called_from(expr.paren)
			raise

	def visit_Get(self, expr:syntax.Get, env:Environment):
		obj = self.evaluate(expr.obj, env)
		if isinstance(obj, Instance):
			return obj.get(expr.nom)
		raise LoxRuntimeError(expr.nom, "Only instances have properties.")

	def visit_Set(self, expr:syntax.Set, env:Environment):
		obj = self.evaluate(expr.obj, env)
		if not isinstance(obj, Instance):
			raise LoxRuntimeError(expr.nom, "Only instances have fields.")
		value = self.evaluate(expr.expr, env)
		obj.set(expr.nom, value)
		return value

	def visit_This(self, expr:syntax.This, env:Environment):
		return self._look_up(expr, expr.keyword, env)

	def visit_Super(self, expr:syntax.Super, env:Environment):
		try: distance = self._depths[expr]
		except KeyError:
			trace_desync(expr.keyword, "This was never resolved; resolver bug")
			raise
		superclass = env.fetch_at(distance, expr.keyword)
		receiver = env.fetch_at(distance - 1, Nom(THIS, expr.keyword.line, expr.keyword.spot))
		method = superclass.find_method(expr.method.key())
		if method is None:
			raise LoxRuntimeError(expr.method, "Undefined property '%s'." % expr.method.key())
		return method.bind(receiver)
