"""Project and windchest parameters shared by every rank.

A ``Project`` holds the environment the organ is voiced for (temperature and
diapason). A ``WindChest`` defines the compass available to the ranks
mounted on it. Neither is a keyboard: a windchest can carry more notes than
the manual playing it.
"""

import dataclasses
import math
import typing

import organ_cooker.acoustics
import organ_cooker.errors
import organ_cooker.notes


DEFAULT_TEMPERATURE = 18.0
DEFAULT_DIAPASON = 440.0


def _is_number (value: typing.Any) -> bool:

	return isinstance(value, (int, float)) and not isinstance(value, bool) and math.isfinite(value)


@dataclasses.dataclass(frozen=True)
class Project:

	"""
	An organ project: usually named after its town, voiced at a temperature and diapason.

	Parameters:
		name: Project name.
		temperature: Temperature of the building in degrees Celsius.
		diapason: Frequency of A3 at 8' pitch, in Hz.

	Example::

		project = Project("mantes-la-jolie", temperature=15, diapason=435)
		project.speed_of_sound()   # 340.605
	"""

	name: str
	temperature: float = DEFAULT_TEMPERATURE
	diapason: float = DEFAULT_DIAPASON

	def __post_init__ (self) -> None:

		if not _is_number(self.diapason) or self.diapason <= 0:
			raise organ_cooker.errors.InvalidParameterError(f"Diapason must be a finite positive number, got {self.diapason!r}")

		# Validates the temperature band.
		organ_cooker.acoustics.speed_of_sound(self.temperature)

	def speed_of_sound (self) -> float:

		"""
		Speed of sound in m/s at the project's temperature.
		"""

		return organ_cooker.acoustics.speed_of_sound(self.temperature)


@dataclasses.dataclass(frozen=True)
class WindChest:

	"""
	A windchest (e.g. "grand-orgue", "positif", "pédale") and its compass.

	Parameters:
		name: Windchest name.
		nb_notes: Number of notes it carries.
		first_note: Lowest note; text such as ``"C1"`` is parsed.
		foot_height: Height of the pipe feet in mm.
	"""

	name: str
	nb_notes: int = 61
	first_note: organ_cooker.notes.Note = organ_cooker.notes.Note(pitch_class=0, octave=1)
	foot_height: float = 200

	def __post_init__ (self) -> None:

		if isinstance(self.nb_notes, bool) or not isinstance(self.nb_notes, int):
			raise organ_cooker.errors.InvalidParameterError(f"Number of notes must be an integer, got {self.nb_notes!r}")

		if self.nb_notes <= 0:
			raise organ_cooker.errors.InvalidParameterError(f"Number of notes must be positive, got {self.nb_notes}")

		if not _is_number(self.foot_height) or self.foot_height <= 0:
			raise organ_cooker.errors.InvalidParameterError(f"Foot height must be a finite positive number, got {self.foot_height!r}")

		object.__setattr__(self, "first_note", organ_cooker.notes.Note.parse(self.first_note))

	@property
	def last_note (self) -> organ_cooker.notes.Note:

		"""
		The highest note, ``nb_notes - 1`` semitones above the first.
		"""

		return self.first_note.transpose(self.nb_notes - 1)

	def note_range (self) -> organ_cooker.notes.NoteRange:

		return organ_cooker.notes.NoteRange(self.first_note, self.last_note)

	def __str__ (self) -> str:

		return f"== Windchest: {self.name} ==\nfrom {self.first_note} to {self.last_note} ({self.nb_notes} notes)"
