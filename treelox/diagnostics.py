import sys, random
from pathlib import Path
from typing import Optional
from boozetools.support.failureprone import SourceText, illustration

from .ontology import Nom

class TooManyIssues(Exception):
	pass

def _outburst():
	particle = ["Oh, ", "Well, ", "Aw, ", "", ""]

	minced_oaths = [
		'Ack', 'ARGH', 'Blargh', 'Bother',
		'Confound it', 'Crud', 'Curses', "Crikey",
		'Drat', 'Fiddlesticks', 'Gadzooks', 'Good Grief', "Great Scott",
		"Heavens", "Mercy", 'Nuts', 'Phooey', 'Rats', "Shucks",
		'Woe is me', 'Zounds',
	]

	resignations = [
		'I am undone.',
		'I cannot continue.',
		'Something here does not add up.',
		'The scope chain and I are not on speaking terms.',
		'I need to ask for help.',
	]

	return "%s%s! %s"%tuple(map(random.choice, (particle, minced_oaths, resignations)))

class Report:
	"""
	Accumulates what goes wrong, so that a single pass can complain about everything at once.
	Static issues (found before execution) and run-time mishaps are kept apart,
	because the former forbid execution and the latter merely end it.
	"""
	_issues : list["Pic"]
	_mishaps : list["Pic"]

	def __init__(self, *, verbose:int=0, max_issues:Optional[int]=None):
		self._verbose = verbose or 0   # Because None is incomparable.
		self._issues = []
		self._mishaps = []
		self._max_issues = max_issues
		self._source = None

	def ok(self): return not self._issues
	def sick(self): return bool(self._issues)
	def had_runtime_error(self): return bool(self._mishaps)

	@property
	def issues(self) -> tuple["Pic", ...]: return tuple(self._issues)

	@property
	def mishaps(self) -> tuple["Pic", ...]: return tuple(self._mishaps)

	def issue(self, it:"Pic"):
		self._issues.append(it)
		if len(self._issues) == self._max_issues:
			raise TooManyIssues(self)

	def reset(self):
		self._issues.clear()
		self._mishaps.clear()

	def set_source(self, text:str, path:Optional[Path]=None):
		""" Give annotations something to illustrate. Tokens must then carry character offsets. """
		self._source = SourceText(text, filename=str(path or "<script>"))

	def info(self, *args):
		if self._verbose:
			print(*args, file=sys.stderr)

	def complain_to_console(self):
		""" Emit all the issues to the console. """
		_bemoan(self._issues + self._mishaps, self._source)

	def assert_no_issues(self, message):
		""" Does what it says on the tin """
		if self._issues:
			self.complain_to_console()
			raise AssertionError(_outburst()+" "+message)

	# Methods the resolver calls:

	def self_referential_initializer(self, nom:Nom):
		intro = "Can't read local variable in its own initializer."
		self.issue(Pic(intro, [Annotation(nom)]))

	def redefined(self, first:Nom, guilty:Nom):
		intro = "Already a variable with this name in this scope."
		problem = [Annotation(guilty), Annotation(first, "Earliest definition")]
		self.issue(Pic(intro, problem))

	def return_from_top_level(self, keyword:Nom):
		self.issue(Pic("Can't return from top-level code.", [Annotation(keyword)]))

	def return_value_from_initializer(self, keyword:Nom):
		intro = "Can't return a value from an initializer."
		footer = ["An initializer always produces the instance under construction."]
		self.issue(Pic(intro, [Annotation(keyword)], footer))

	def this_outside_class(self, keyword:Nom):
		self.issue(Pic("Can't use 'this' outside of a class.", [Annotation(keyword)]))

	def super_outside_class(self, keyword:Nom):
		self.issue(Pic("Can't use 'super' outside of a class.", [Annotation(keyword)]))

	def super_without_superclass(self, keyword:Nom):
		intro = "Can't use 'super' in a class with no superclass."
		self.issue(Pic(intro, [Annotation(keyword)]))

	def inherits_from_itself(self, nom:Nom):
		self.issue(Pic("A class can't inherit from itself.", [Annotation(nom)]))

	# The run-time calls this one:

	def runtime_error(self, ex):
		pic = Pic(ex.message, [Annotation(ex.nom)])
		for site in ex.trace: pic.also(site, "called from here")
		self._mishaps.append(pic)

class Annotation:
	nom: Nom
	caption: str
	def __init__(self, nom:Nom, caption:str=""):
		assert isinstance(nom, Nom), nom
		self.nom = nom
		self.caption = caption
	def illustrate(self, source:Optional[SourceText]):
		nom = self.nom
		if source is None or nom.spot is None:
			text = "[line %d] at '%s'" % (nom.line, nom.text)
			return text + ": " + self.caption if self.caption else text
		row, col = source.find_row_col(nom.spot)
		single_line = source.line_of_text(row)
		return illustration(single_line, col, len(nom.text), prefix='% 6d |' % row, caption=self.caption)

class Pic:
	def __init__(self, intro:str, anns:list[Annotation], footer=()):
		self._intro, self._anns, self._footer = intro, anns, footer
	@property
	def intro(self): return self._intro
	@property
	def annotations(self): return tuple(self._anns)
	def also(self, nom:Nom, caption:str=""): self._anns.append(Annotation(nom, caption))
	def as_text(self, source:Optional[SourceText]=None):
		lines = [self._intro, ""]
		lines.extend(ann.illustrate(source) for ann in self._anns)
		lines.extend(self._footer)
		return '\n'.join(lines)

def trace_desync(nom:Nom, hint:str):
	""" For when the resolver and the run-time disagree. That's a bug, not a user error. """
	ann = Annotation(nom, hint)
	print(ann.illustrate(None), file=sys.stderr)

def _bemoan(issues, source):
	""" Emit all the issues to the console. """
	if issues:
		print("*"*60, file=sys.stderr)
		print(_outburst(), file=sys.stderr)
	for i in issues:
		print("  -"*20, file=sys.stderr)
		print(i.as_text(source), file=sys.stderr)
	sys.stderr.flush()
