"""
Phrases do not carry file positions around. They carry small integers,
which this module maps back to a file and a slice of its text.
Location zero is nowhere in particular: phrases built without source text have it.
"""
from pathlib import Path
from typing import NamedTuple, Optional

class Span(NamedTuple):
	path: Optional[Path]
	slice: slice

_NOWHERE = Span(None, slice(0, 0))
_spans: list[Span] = [_NOWHERE]
_path: Optional[Path] = None

def start_segment(path:Optional[Path]):
	""" Tokens inserted from now on belong to this file. """
	global _path
	assert isinstance(path, Path) or path is None
	_path = path

def insert_token(s:slice) -> int:
	_spans.append(Span(_path, s))
	return len(_spans) - 1

def lookup_span(first:int, last:int) -> Span:
	""" Covers both ends, provided they come from the same file. """
	left, right = _spans[first], _spans[last]
	if left.path != right.path:
		return left
	return Span(left.path, slice(left.slice.start, max(left.slice.stop, right.slice.stop)))

def is_located(index:int) -> bool:
	return index > 0 and _spans[index].path is not None
