"""
The overall control for the run-time: resolve, then (maybe) run.
An embedder hands over a syntax tree and gets back an exit status.
"""
from typing import Optional, Sequence
from ..diagnostics import Report, TooManyIssues
from ..ontology import Statement
from ..resolution import resolve_program, Yuck
from .runtime import Interpreter

EX_OK = 0
EX_DATAERR = 65   # The program has static errors.
EX_SOFTWARE = 70  # The program failed at run-time.

def run_program(statements:Sequence[Statement], report:Report, interpreter:Optional[Interpreter]=None) -> int:
	"""
	Pass the same interpreter to successive calls for REPL-style use:
	globals and previously-resolved closures survive from one call to the next,
	even when an earlier call ended in a run-time error.
	The report is cleared on the way in, so it speaks only of this call.
	"""
	report.reset()
	try: depths = resolve_program(statements, report)
	except Yuck:
		assert report.sick()
		report.complain_to_console()
		return EX_DATAERR
	except TooManyIssues:
		report.complain_to_console()
		report.info("Giving up after a few issues. One crisis at a time, eh?")
		return EX_DATAERR
	if interpreter is None: interpreter = Interpreter()
	if interpreter.interpret(statements, depths, report):
		return EX_OK
	report.complain_to_console()
	return EX_SOFTWARE
