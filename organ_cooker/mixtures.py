"""Composite ranks: mixtures and cornets.

A composite rank sounds several rows of pipes per key, each row at its own
foot height. The compass is cut into segments by break notes ("reprises"):
at every break each row may jump to another height, usually down an octave
or a fifth, so the highest pipes stay within a buildable size. A row may be
silent in a segment, which gives names such as "Plein-Jeu III-IV".

Diameters are not tapered row by row. One reference rank is built at the
tallest height found in the composite, with two extra octaves above the
compass, and every pipe takes the diameter of the reference pipe whose
length is closest to its own. Pipes of the same length therefore get the
same diameter whatever row they belong to.
"""

import collections.abc
import dataclasses
import logging
import typing

import organ_cooker.acoustics
import organ_cooker.errors
import organ_cooker.heights
import organ_cooker.naming
import organ_cooker.notes
import organ_cooker.project
import organ_cooker.ranks


logger = logging.getLogger(__name__)

# Markers accepted for "no pipe in this row for this segment".
SILENT_MARKERS = (None, "-", "")

# Notes added above the compass of the reference rank used by sizes().
REFERENCE_EXTENSION = 24

RowHeights = typing.Tuple[typing.Optional[organ_cooker.heights.Height], ...]
RowValues = typing.Dict[str, typing.List[typing.Optional[float]]]


def nearest_index (value: float, candidates: typing.Sequence[float]) -> int:

	"""Index of the candidate closest to ``value``.

	Values beyond the largest or smallest candidate clamp to that extreme.
	Ties go to the lowest index.

	Example:
		```python
		nearest_index(436, [654, 437, 412])   # 1
		nearest_index(9000, [654, 437, 412])  # 0
		```
	"""

	if not candidates:
		raise ValueError("Candidates cannot be empty")

	highest = max(candidates)
	lowest = min(candidates)

	if value >= highest:
		return candidates.index(highest)

	if value <= lowest:
		return candidates.index(lowest)

	differences = [abs(candidate - value) for candidate in candidates]

	return differences.index(min(differences))


def _normalize_height (row_id: str, height: typing.Any) -> typing.Optional[organ_cooker.heights.Height]:

	if height in SILENT_MARKERS:
		return None

	try:
		organ_cooker.heights.parse_height(height)
	except organ_cooker.errors.InvalidHeightError as e:
		raise organ_cooker.errors.InvalidHeightError(f"Row {row_id!r}: {e}") from e

	return height


@dataclasses.dataclass(frozen=True)
class CompositeRank:

	"""
	A rank of several rows whose heights change at break notes.

	Parameters:
		name: Stop name, e.g. ``"plein-jeu"``.
		rows: Row id -> one height per break note (``None`` or ``"-"`` for
			silent). A plain sequence of rows gets ids ``row_1``, ``row_2``...
		break_notes: Notes starting each segment, ascending. The first
			segment always starts at the rank's first note.
		diameter: Diameter of the reference rank's lowest pipe, in mm.
		progression: Taper ratio of the reference rank.
		windchest: The windchest the rank stands on.
		project: The project supplying diapason and temperature.
		first_note: Lowest note if the rank starts above the windchest's first note.
		closure: ``PipeClosure.OPEN`` for mixtures, ``PipeClosure.CLOSED`` for cornets.

	Example::

		plein_jeu = CompositeRank(
			"plein-jeu",
			rows={
				"row_1": ["2", "2 2/3", "4"],
				"row_2": ["1 1/3", "2", "2 2/3"],
				"row_3": [None, "1 1/3", "2"],
			},
			break_notes=["C1", "C2", "C3"],
			diameter=80,
			progression=5,
			windchest=windchest,
			project=project,
		)

		plein_jeu.full_name()   # "Plein-Jeu II-III"
	"""

	kind: typing.ClassVar[organ_cooker.naming.RankKind] = organ_cooker.naming.RankKind.COMPOSITE

	name: str
	rows: typing.Tuple[typing.Tuple[str, RowHeights], ...]
	break_notes: typing.Tuple[organ_cooker.notes.Note, ...]
	diameter: float
	progression: float
	windchest: organ_cooker.project.WindChest
	project: organ_cooker.project.Project
	first_note: typing.Optional[organ_cooker.notes.Note] = None
	closure: organ_cooker.acoustics.PipeClosure = organ_cooker.acoustics.PipeClosure.OPEN

	def __post_init__ (self) -> None:

		organ_cooker.ranks.check_positive("Diameter", self.diameter)
		organ_cooker.ranks.check_positive("Progression", self.progression)

		break_notes = tuple(organ_cooker.notes.Note.parse(note) for note in self.break_notes)

		if not break_notes:
			raise organ_cooker.errors.InvalidRankGeometryError(f"{self.name!r} needs at least one break note")

		for lower, upper in zip(break_notes, break_notes[1:]):
			if upper <= lower:
				raise organ_cooker.errors.InvalidRankGeometryError(
					f"Break notes of {self.name!r} must be strictly ascending: {lower} then {upper}"
				)

		object.__setattr__(self, "break_notes", break_notes)

		if isinstance(self.rows, collections.abc.Mapping):
			items = list(self.rows.items())
		else:
			items = [(f"row_{index}", heights) for index, heights in enumerate(self.rows, start=1)]

		if not items:
			raise organ_cooker.errors.InvalidRankGeometryError(f"{self.name!r} needs at least one row")

		rows = []

		for row_id, heights in items:
			if isinstance(heights, str) or not isinstance(heights, collections.abc.Sequence):
				raise organ_cooker.errors.InvalidRankGeometryError(f"Row {row_id!r} of {self.name!r} must be a list of heights")

			if len(heights) != len(break_notes):
				raise organ_cooker.errors.InvalidRankGeometryError(
					f"Row {row_id!r} of {self.name!r} has {len(heights)} heights for {len(break_notes)} break notes"
				)
			rows.append((str(row_id), tuple(_normalize_height(row_id, height) for height in heights)))

		object.__setattr__(self, "rows", tuple(rows))

		if all(height is None for _, heights in self.rows for height in heights):
			raise organ_cooker.errors.InvalidRankGeometryError(f"Every row of {self.name!r} is silent")

		if self.first_note is None:
			object.__setattr__(self, "first_note", self.windchest.first_note)
		else:
			object.__setattr__(self, "first_note", organ_cooker.notes.Note.parse(self.first_note))

		if self.first_note not in self.windchest.note_range():
			raise organ_cooker.errors.InvalidRankGeometryError(
				f"First note {self.first_note} of {self.name!r} is outside windchest {self.windchest.name!r} "
				f"({self.windchest.first_note}..{self.windchest.last_note})"
			)

		if len(break_notes) > 1 and break_notes[1] <= self.first_note:
			raise organ_cooker.errors.InvalidRankGeometryError(
				f"Break note {break_notes[1]} of {self.name!r} is not above its first note {self.first_note}"
			)

	def row_ids (self) -> typing.List[str]:

		return [row_id for row_id, _ in self.rows]

	def note_range (self) -> organ_cooker.notes.NoteRange:

		return organ_cooker.notes.NoteRange(self.first_note, self.windchest.last_note)

	def notes (self) -> typing.List[organ_cooker.notes.Note]:

		return self.note_range().notes()

	def note_names (self) -> typing.List[str]:

		return [note.to_text() for note in self.note_range()]

	def break_segments (self) -> typing.List[organ_cooker.notes.NoteRange]:

		"""One note range per break note, covering the rank's compass without gaps.

		Segments starting above the windchest's last note are empty.
		"""

		last = self.windchest.last_note
		starts = [self.first_note] + list(self.break_notes[1:])
		segments = []

		for index, start in enumerate(starts):

			if start > last:
				segments.append(organ_cooker.notes.NoteRange.empty_at(start))
				continue

			end = starts[index + 1].predecessor() if index + 1 < len(starts) else last
			segments.append(organ_cooker.notes.NoteRange(start, min(end, last)))

		return segments

	def sounding_rows (self) -> typing.List[int]:

		"""
		Number of non-silent rows in each segment.
		"""

		return [
			sum(1 for _, heights in self.rows if heights[index] is not None)
			for index in range(len(self.break_notes))
		]

	def format_suffix (self) -> str:

		"""
		Row count in roman numerals, as a range when the lowest segment has fewer rows.
		"""

		counts = self.sounding_rows()
		lowest = counts[0]
		highest = max(counts)

		if lowest == 0 or lowest == highest:
			return organ_cooker.naming.to_roman(highest)

		return f"{organ_cooker.naming.to_roman(lowest)}-{organ_cooker.naming.to_roman(highest)}"

	def full_name (self) -> str:

		return organ_cooker.naming.full_name(self)

	def frequencies (self) -> RowValues:

		"""
		Frequency of every pipe per row, ``None`` where the row is silent.
		"""

		segments = self.break_segments()
		diapason = self.project.diapason
		frequencies: RowValues = {}

		for row_id, heights in self.rows:
			values: typing.List[typing.Optional[float]] = []

			for segment, height in zip(segments, heights):
				if height is None:
					values.extend([None] * segment.size)
				else:
					values.extend(
						round(organ_cooker.acoustics.frequency_of(note, diapason, height), organ_cooker.ranks.FREQUENCY_DECIMALS)
						for note in segment
					)

			frequencies[row_id] = values

		return frequencies

	def lengths (self) -> RowValues:

		"""
		Speaking length of every pipe per row in mm; stopped rows are half the open length.
		"""

		speed = self.project.speed_of_sound()

		return {
			row_id: [
				None if frequency is None
				else self.closure.apply(round(organ_cooker.acoustics.pipe_length(frequency, speed)))
				for frequency in values
			]
			for row_id, values in self.frequencies().items()
		}

	def tallest_height (self) -> organ_cooker.heights.Height:

		"""
		The tallest height used by any row, as written.
		"""

		heights = [height for _, row in self.rows for height in row if height is not None]

		return max(heights, key=organ_cooker.heights.parse_height)

	def reference_rank (self) -> organ_cooker.ranks.SimpleRank:

		"""
		The rank whose taper supplies every diameter of this composite rank.
		"""

		windchest = organ_cooker.project.WindChest(
			name=self.windchest.name,
			nb_notes=self.note_range().size + REFERENCE_EXTENSION,
			first_note=self.first_note,
			foot_height=self.windchest.foot_height,
		)

		return organ_cooker.ranks.SimpleRank(
			name=self.name,
			height=self.tallest_height(),
			diameter=self.diameter,
			progression=self.progression,
			windchest=windchest,
			project=self.project,
			closure=self.closure,
		)

	def sizes (self) -> RowValues:

		"""
		Internal diameter of every pipe per row, matched by length on the reference rank.
		"""

		reference = self.reference_rank()
		reference_lengths = reference.lengths()
		reference_sizes = reference.sizes()

		logger.debug(
			f"{self.name}: reference rank {reference.full_name()} over {reference.note_range()} "
			f"({len(reference_sizes)} pipes)"
		)

		return {
			row_id: [
				None if length is None
				else reference_sizes[nearest_index(length, reference_lengths)]
				for length in lengths
			]
			for row_id, lengths in self.lengths().items()
		}

	def external_diameters (self) -> RowValues:

		return {
			row_id: [
				None if size is None else organ_cooker.acoustics.external_diameter(size)
				for size in sizes
			]
			for row_id, sizes in self.sizes().items()
		}


def mixture (*args: typing.Any, **kwargs: typing.Any) -> CompositeRank:

	"""
	Build an open-pipe ``CompositeRank`` (fourniture, plein-jeu, cymbale...).
	"""

	return CompositeRank(*args, closure=organ_cooker.acoustics.PipeClosure.OPEN, **kwargs)


def cornet (*args: typing.Any, **kwargs: typing.Any) -> CompositeRank:

	"""
	Build a stopped-pipe ``CompositeRank``.
	"""

	return CompositeRank(*args, closure=organ_cooker.acoustics.PipeClosure.CLOSED, **kwargs)
