"""
Build the primitive namespace.
There is but one native function. It tells the time.
"""
import time
from .tree_walker.values import Primitive

def clock() -> float:
	""" Seconds since the epoch, as a Lox number """
	return time.time()

root_namespace = {
	"clock": Primitive(clock, 0),
}
