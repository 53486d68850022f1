import contextlib
import io
import unittest

from treelox.environment import Environment
from treelox.space import Layer, AlreadyExists
from treelox.tree_walker.types import LoxRuntimeError
from trees import nom

class EnvironmentTests(unittest.TestCase):

	def setUp(self):
		self.globals = Environment()
		self.globals.define("g", "global")
		self.middle = Environment(self.globals)
		self.middle.define("m", "middle")
		self.inner = Environment(self.middle)

	def test_define_overwrites_in_place(self):
		self.inner.define("x", 1.0)
		self.inner.define("x", 2.0)
		self.assertEqual(2.0, self.inner.fetch_at(0, nom("x")))
		self.assertNotIn("x", self.middle)

	def test_fetch_at_distance(self):
		self.assertEqual("middle", self.inner.fetch_at(1, nom("m")))
		self.assertEqual("global", self.inner.fetch_at(2, nom("g")))
		self.assertIs(self.globals, self.inner.ancestor(2))

	def test_assign_at_distance(self):
		self.inner.assign_at(1, nom("m"), "changed")
		self.assertEqual("changed", self.middle.fetch_at(0, nom("m")))

	def test_dynamic_search_walks_the_chain(self):
		self.assertEqual("global", self.inner.fetch(nom("g")))
		self.inner.assign(nom("g"), "updated")
		self.assertEqual("updated", self.globals.fetch(nom("g")))

	def test_missing_name_is_a_runtime_error(self):
		with self.assertRaises(LoxRuntimeError) as cm:
			self.globals.fetch(nom("missing", line=7))
		self.assertEqual("Undefined variable 'missing'.", cm.exception.message)
		self.assertEqual(7, cm.exception.nom.line)
		with self.assertRaises(LoxRuntimeError):
			self.globals.assign(nom("missing"), 1.0)

	def test_desync_is_not_a_user_error(self):
		stderr = io.StringIO()
		with contextlib.redirect_stderr(stderr):
			with self.assertRaises(KeyError):
				self.inner.fetch_at(0, nom("m"))
			with self.assertRaises(KeyError):
				self.inner.assign_at(1, nom("nope"), 1.0)
		self.assertIn("resolver bug", stderr.getvalue())

class LayerTests(unittest.TestCase):

	def test_declare_then_define(self):
		layer = Layer()
		a = nom("a")
		assert layer.is_ready("a")
		layer.declare(a)
		assert "a" in layer
		assert not layer.is_ready("a")
		layer.define(a)
		assert layer.is_ready("a")
		self.assertIs(a, layer.locate("a"))

	def test_duplicate(self):
		layer = Layer()
		layer.declare(nom("a"))
		with self.assertRaises(AlreadyExists):
			layer.declare(nom("a"))


if __name__ == '__main__':
	unittest.main()
