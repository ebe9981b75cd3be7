"""Simple ranks: one pipe per note.

A ``SimpleRank`` covers the flute family (open pipes) and the bourdon family
(stopped pipes); the two differ only in their ``closure``. Every derived
sequence (notes, frequencies, lengths, diameters) is recomputed from the
stored parameters on each call.

Pipe diameters follow a geometric taper: each semitone up divides the
diameter by ``progression ** (1 / 48)``, so the diameter is divided by
``progression`` every four octaves. A rank may change progression at one
note (and optionally restart from a given diameter there), as is common for
harmonic flutes.
"""

import dataclasses
import math
import typing

import organ_cooker.acoustics
import organ_cooker.errors
import organ_cooker.heights
import organ_cooker.naming
import organ_cooker.notes
import organ_cooker.project


# Semitones over which the diameter is divided by the progression.
TAPER_SEMITONES = 48

FREQUENCY_DECIMALS = 2


def check_positive (label: str, value: typing.Any) -> None:

	if isinstance(value, bool) or not isinstance(value, (int, float)) or value <= 0 or not math.isfinite(value):
		raise organ_cooker.errors.InvalidParameterError(f"{label} must be a finite positive number, got {value!r}")


def taper (diameter: float, progression: float, steps: int) -> typing.List[float]:

	"""Diameters of the ``steps`` pipes following one of ``diameter``.

	Example:
		```python
		taper(145, 2, 48)[-1]   # 72.5 - halved after four octaves
		```
	"""

	ratio = progression ** (1 / TAPER_SEMITONES)
	sizes = []

	for _ in range(steps):
		diameter = diameter / ratio
		sizes.append(diameter)

	return sizes


@dataclasses.dataclass(frozen=True)
class ProgressionChange:

	"""
	A note from which a rank tapers with a new progression.

	Parameters:
		note: The note where the change happens (text is parsed).
		progression: Progression used above ``note``.
		diameter: Optional diameter forced at ``note`` itself.
	"""

	note: organ_cooker.notes.Note
	progression: float
	diameter: typing.Optional[float] = None

	def __post_init__ (self) -> None:

		object.__setattr__(self, "note", organ_cooker.notes.Note.parse(self.note))
		check_positive("Progression", self.progression)

		if self.diameter is not None:
			check_positive("Diameter", self.diameter)


@dataclasses.dataclass(frozen=True)
class SimpleRank:

	"""
	A rank of one pipe per note, from ``first_note`` to the top of its windchest.

	Parameters:
		name: Stop name, e.g. ``"montre"``.
		height: Foot height of the lowest pipe, e.g. ``"8"`` or ``"1 3/5"``.
		diameter: Internal diameter of the lowest pipe, in mm.
		progression: Taper ratio (diameter divided by this every 48 semitones).
		windchest: The windchest the rank stands on.
		project: The project supplying diapason and temperature.
		first_note: Lowest note if the rank starts above the windchest's first note.
		progression_change: Optional change of progression at one note.
		closure: ``PipeClosure.OPEN`` for flutes, ``PipeClosure.CLOSED`` for bourdons.

	Example::

		project = Project("mantes-la-jolie", temperature=18, diapason=440)
		windchest = WindChest("grand-orgue", nb_notes=56, first_note="C1")
		montre = SimpleRank("montre", "8", 145, 6, windchest, project)

		montre.full_name()         # "Montre 8'"
		montre.frequencies()[0]    # 65.41
		montre.sizes()[:3]         # [145, 140, 135]
	"""

	kind: typing.ClassVar[organ_cooker.naming.RankKind] = organ_cooker.naming.RankKind.SIMPLE

	name: str
	height: organ_cooker.heights.Height
	diameter: float
	progression: float
	windchest: organ_cooker.project.WindChest
	project: organ_cooker.project.Project
	first_note: typing.Optional[organ_cooker.notes.Note] = None
	progression_change: typing.Optional[ProgressionChange] = None
	closure: organ_cooker.acoustics.PipeClosure = organ_cooker.acoustics.PipeClosure.OPEN

	def __post_init__ (self) -> None:

		organ_cooker.heights.parse_height(self.height)
		check_positive("Diameter", self.diameter)
		check_positive("Progression", self.progression)

		if self.first_note is None:
			object.__setattr__(self, "first_note", self.windchest.first_note)
		else:
			object.__setattr__(self, "first_note", organ_cooker.notes.Note.parse(self.first_note))

		if self.first_note not in self.windchest.note_range():
			raise organ_cooker.errors.InvalidRankGeometryError(
				f"First note {self.first_note} of {self.name!r} is outside windchest {self.windchest.name!r} "
				f"({self.windchest.first_note}..{self.windchest.last_note})"
			)

		change = self.progression_change

		if change is not None and change.note not in self.note_range():
			raise organ_cooker.errors.InvalidRankGeometryError(
				f"Progression change at {change.note} is outside {self.name!r} ({self.note_range()})"
			)

	def note_range (self) -> organ_cooker.notes.NoteRange:

		"""
		Notes from the rank's first note to the windchest's last note.
		"""

		return organ_cooker.notes.NoteRange(self.first_note, self.windchest.last_note)

	def notes (self) -> typing.List[organ_cooker.notes.Note]:

		return self.note_range().notes()

	def note_names (self) -> typing.List[str]:

		return [note.to_text() for note in self.note_range()]

	def frequencies (self) -> typing.List[float]:

		"""
		Frequency of each pipe in Hz, rounded to two decimals.
		"""

		return [
			round(organ_cooker.acoustics.frequency_of(note, self.project.diapason, self.height), FREQUENCY_DECIMALS)
			for note in self.note_range()
		]

	def lengths (self) -> typing.List[float]:

		"""Speaking length of each pipe in mm.

		Open lengths are rounded to whole millimetres; stopped pipes are
		exactly half their open counterparts.
		"""

		speed = self.project.speed_of_sound()

		return [
			self.closure.apply(round(organ_cooker.acoustics.pipe_length(frequency, speed)))
			for frequency in self.frequencies()
		]

	def sizes (self) -> typing.List[int]:

		"""
		Internal diameter of each pipe in mm, rounded to whole millimetres.
		"""

		note_range = self.note_range()
		sizes = [float(self.diameter)]
		change = self.progression_change

		if change is None:
			sizes.extend(taper(sizes[-1], self.progression, note_range.size - 1))
		else:
			sizes.extend(taper(sizes[-1], self.progression, note_range.index(change.note)))

			if change.diameter is not None:
				sizes[-1] = float(change.diameter)

			sizes.extend(taper(sizes[-1], change.progression, note_range.last.semitone_offset_from(change.note)))

		return [round(size) for size in sizes]

	def external_diameters (self) -> typing.List[float]:

		return [organ_cooker.acoustics.external_diameter(size) for size in self.sizes()]

	def format_suffix (self) -> str:

		return organ_cooker.heights.format_height(self.height)

	def full_name (self) -> str:

		"""
		Capitalized name with height, e.g. ``"Grosse Tierce 1'3/5"``.
		"""

		return organ_cooker.naming.full_name(self)


def flute (*args: typing.Any, **kwargs: typing.Any) -> SimpleRank:

	"""
	Build an open-pipe ``SimpleRank``.
	"""

	return SimpleRank(*args, closure=organ_cooker.acoustics.PipeClosure.OPEN, **kwargs)


def bourdon (*args: typing.Any, **kwargs: typing.Any) -> SimpleRank:

	"""
	Build a stopped-pipe ``SimpleRank``; every length is half the open one.
	"""

	return SimpleRank(*args, closure=organ_cooker.acoustics.PipeClosure.CLOSED, **kwargs)
