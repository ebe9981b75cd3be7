"""Note names and chromatic arithmetic.

This module provides the ``Note`` value (pitch class + octave) and the
``NoteRange`` interval used to enumerate the pipes of a rank.

Module-level constants:
- `PC_TO_NOTE_NAME`: Maps pitch classes (0-11) to note names, sharps only.
- `NOTE_NAME_TO_PC`: Reverse lookup, upper-case names to pitch classes.

Octave numbering follows the organ builder's convention used throughout
the package: C1 is the lowest C of a 61-note 8' manual and A3 is the note
that sounds the diapason at 8' pitch.
"""

import dataclasses
import functools
import re
import typing

import organ_cooker.errors


PC_TO_NOTE_NAME: typing.List[str] = [
	"C",
	"C#",
	"D",
	"D#",
	"E",
	"F",
	"F#",
	"G",
	"G#",
	"A",
	"A#",
	"B",
]

NOTE_NAME_TO_PC: typing.Dict[str, int] = {name: pc for pc, name in enumerate(PC_TO_NOTE_NAME)}

SEMITONES_PER_OCTAVE = 12

_NOTE_PATTERN = re.compile(r"^([A-G]#?)(-?\d+)$", re.IGNORECASE)


@functools.total_ordering
@dataclasses.dataclass(frozen=True)
class Note:

	"""
	A musical note: a pitch class (0 = C ... 11 = B) and an octave.

	Notes are ordered by their absolute semitone index (``octave * 12 +
	pitch_class``). Octaves may be negative for sub-contra pipes.

	Example:
		```python
		Note.parse("g#1")              # Note(pitch_class=8, octave=1)
		Note.parse("b1").successor()   # C2
		Note.parse("c1") < Note.parse("a#0")   # False
		```
	"""

	pitch_class: int
	octave: int

	def __post_init__ (self) -> None:

		if isinstance(self.pitch_class, bool) or not isinstance(self.pitch_class, int):
			raise organ_cooker.errors.InvalidNoteError(f"Pitch class must be an integer, got {self.pitch_class!r}")

		if not 0 <= self.pitch_class < SEMITONES_PER_OCTAVE:
			raise organ_cooker.errors.InvalidNoteError(f"Pitch class must be between 0 and 11, got {self.pitch_class}")

		if isinstance(self.octave, bool) or not isinstance(self.octave, int):
			raise organ_cooker.errors.InvalidNoteError(f"Octave must be an integer, got {self.octave!r}")

	@classmethod
	def parse (cls, text: str) -> "Note":

		"""Parse a note name such as ``"C4"``, ``"a#-1"`` or ``"F#3"``.

		Parameters:
			text: A letter A-G, an optional ``#`` and a signed integer octave.
				Case and surrounding whitespace are ignored.

		Returns:
			The parsed ``Note``.

		Raises:
			InvalidNoteError: If the text is not one of the twelve sharp note
				names followed by an octave number.
		"""

		if isinstance(text, Note):
			return text

		if not isinstance(text, str):
			raise organ_cooker.errors.InvalidNoteError(f"Expected a note name, got {text!r}")

		match = _NOTE_PATTERN.match(text.strip())

		if match is None:
			raise organ_cooker.errors.InvalidNoteError(
				f"{text!r} is not a music note. Valid notes are {' '.join(PC_TO_NOTE_NAME)} "
				"(case insensitive), followed by an octave number."
			)

		name = match.group(1).upper()

		if name not in NOTE_NAME_TO_PC:
			raise organ_cooker.errors.InvalidNoteError(f"{text!r} is not a music note: unknown name {name!r}")

		try:
			octave = int(match.group(2))
		except ValueError:
			raise organ_cooker.errors.InvalidNoteError(f"{text[:20]!r}... has an unreadable octave number") from None

		return cls(pitch_class=NOTE_NAME_TO_PC[name], octave=octave)

	@classmethod
	def from_semitone_index (cls, index: int) -> "Note":

		"""
		Build the note whose absolute semitone index is ``index``.
		"""

		octave, pitch_class = divmod(index, SEMITONES_PER_OCTAVE)
		return cls(pitch_class=pitch_class, octave=octave)

	@property
	def letter (self) -> str:

		"""
		The note name without octave, e.g. ``"A#"``.
		"""

		return PC_TO_NOTE_NAME[self.pitch_class]

	@property
	def semitone_index (self) -> int:

		"""
		Absolute position on the chromatic scale, used for ordering.
		"""

		return self.octave * SEMITONES_PER_OCTAVE + self.pitch_class

	def successor (self) -> "Note":

		"""
		The next note up; B wraps to C of the following octave.
		"""

		if self.pitch_class == SEMITONES_PER_OCTAVE - 1:
			return Note(pitch_class=0, octave=self.octave + 1)

		return Note(pitch_class=self.pitch_class + 1, octave=self.octave)

	def predecessor (self) -> "Note":

		"""
		The next note down; C wraps to B of the previous octave.
		"""

		if self.pitch_class == 0:
			return Note(pitch_class=SEMITONES_PER_OCTAVE - 1, octave=self.octave - 1)

		return Note(pitch_class=self.pitch_class - 1, octave=self.octave)

	def transpose (self, semitones: int) -> "Note":

		"""Return the note ``semitones`` away from this one.

		Example:
			```python
			Note.parse("C1").transpose(55)   # G5, the top of a 56-note windchest
			```
		"""

		return Note.from_semitone_index(self.semitone_index + semitones)

	def semitone_offset_from (self, reference: "Note") -> int:

		"""
		Signed distance in semitones from ``reference`` to this note.
		"""

		return self.semitone_index - reference.semitone_index

	def compare (self, other: "Note") -> int:

		"""
		Return -1, 0 or 1 as this note is lower than, equal to or higher than ``other``.
		"""

		offset = self.semitone_offset_from(other)
		return (offset > 0) - (offset < 0)

	def __lt__ (self, other: object) -> bool:

		if not isinstance(other, Note):
			return NotImplemented

		return self.semitone_index < other.semitone_index

	def to_text (self) -> str:

		"""
		Canonical text form, e.g. ``"G#1"``.
		"""

		return f"{self.letter}{self.octave}"

	def __str__ (self) -> str:

		return self.to_text()


@dataclasses.dataclass(frozen=True)
class NoteRange:

	"""
	A closed interval of notes, iterable in ascending order.

	A range whose ``last`` is the predecessor of ``first`` is empty. Composite
	ranks use empty ranges for break segments that start past the top of
	their windchest.
	"""

	first: Note
	last: Note

	def __post_init__ (self) -> None:

		if self.last.semitone_index < self.first.semitone_index - 1:
			raise organ_cooker.errors.InvalidNoteError(f"Note range {self.first}..{self.last} is reversed")

	@classmethod
	def empty_at (cls, first: Note) -> "NoteRange":

		"""
		An empty range positioned at ``first``.
		"""

		return cls(first=first, last=first.predecessor())

	@property
	def size (self) -> int:

		return self.last.semitone_index - self.first.semitone_index + 1

	def __len__ (self) -> int:

		return self.size

	def __iter__ (self) -> typing.Iterator[Note]:

		for index in range(self.first.semitone_index, self.last.semitone_index + 1):
			yield Note.from_semitone_index(index)

	def __contains__ (self, note: object) -> bool:

		if not isinstance(note, Note):
			return False

		return self.first <= note <= self.last

	def index (self, note: Note) -> int:

		"""
		Position of ``note`` within the range.
		"""

		if note not in self:
			raise organ_cooker.errors.InvalidNoteError(f"{note} is not in {self}")

		return note.semitone_offset_from(self.first)

	def notes (self) -> typing.List[Note]:

		return list(self)

	def __str__ (self) -> str:

		return f"{self.first}..{self.last}"
