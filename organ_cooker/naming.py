"""Rank names.

A rank's displayed name is its capitalized stop name followed by a suffix
that depends on the kind of rank: the foot height for a simple rank
(``"Montre 8'"``) or the number of rows in roman numerals for a composite
rank (``"Plein-Jeu III-IV"``). Capitalization is shared by both kinds.
"""

import enum
import re
import typing


ROMAN_NUMERALS: typing.List[typing.Tuple[int, str]] = [
	(1000, "M"),
	(900, "CM"),
	(500, "D"),
	(400, "CD"),
	(100, "C"),
	(90, "XC"),
	(50, "L"),
	(40, "XL"),
	(10, "X"),
	(9, "IX"),
	(5, "V"),
	(4, "IV"),
	(1, "I"),
]

_WORD_PATTERN = re.compile(r"[^\W\d_]+")


class RankKind (enum.Enum):

	"""
	The two families of rank, each rendering its own name suffix.
	"""

	SIMPLE = "simple"
	COMPOSITE = "composite"


class NamedRank (typing.Protocol):

	name: str

	def format_suffix (self) -> str:
		...


def capitalize_name (name: str) -> str:

	"""Capitalize every word of a stop name, including hyphenated parts.

	Example:
		```python
		capitalize_name("flûte harmonique")   # "Flûte Harmonique"
		capitalize_name("plein-jeu")          # "Plein-Jeu"
		capitalize_name("grosse TIERCE")      # "Grosse Tierce"
		```
	"""

	return _WORD_PATTERN.sub(lambda match: match.group(0).capitalize(), name)


def to_roman (number: int) -> str:

	"""
	Roman numeral for a positive integer, e.g. ``4`` -> ``"IV"``.
	"""

	if number <= 0:
		raise ValueError(f"Roman numerals need a positive integer, got {number}")

	parts = []

	for value, symbol in ROMAN_NUMERALS:
		count, number = divmod(number, value)
		parts.append(symbol * count)

	return "".join(parts)


def full_name (rank: NamedRank) -> str:

	"""
	Capitalized name followed by the rank's own suffix.
	"""

	return f"{capitalize_name(rank.name)} {rank.format_suffix()}"
