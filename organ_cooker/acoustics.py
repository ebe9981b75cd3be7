"""Frequency, pipe length and metal thickness.

The pitch model ties the project's diapason to A3 at 8' pitch: an 8' rank
sounds A3 at the diapason, a 4' rank sounds it an octave higher, a 16' rank
an octave lower. With a diapason of 440 Hz this gives C1 = 65.41 Hz for the
lowest pipe of an 8' rank.

Pipe lengths follow the half-wavelength resonator model of an open pipe.
A stopped pipe sounds the same pitch at half that length.
"""

import enum
import math

import organ_cooker.errors
import organ_cooker.heights
import organ_cooker.notes


REFERENCE_NOTE = organ_cooker.notes.Note(pitch_class=9, octave=3)
REFERENCE_HEIGHT = 8.0

SPEED_OF_SOUND_AT_ZERO = 331.5
SPEED_OF_SOUND_PER_DEGREE = 0.607

MIN_TEMPERATURE = -50.0
MAX_TEMPERATURE = 60.0

# Stepped metal thickness: 0.3 mm up to 10 mm, +0.05 mm per 5 mm bracket above.
BASE_METAL_THICKNESS = 0.3
BASE_THICKNESS_DIAMETER = 10.0
THICKNESS_STEP = 0.05
THICKNESS_BRACKET = 5.0


class PipeClosure (enum.Enum):

	"""
	Whether a rank's pipes are open (flutes, mixtures) or stopped (bourdons, cornets).
	"""

	OPEN = "open"
	CLOSED = "closed"

	def apply (self, open_length: float) -> float:

		"""
		Convert an open-pipe length to this closure's length.
		"""

		if self is PipeClosure.CLOSED:
			return open_length / 2

		return open_length

	@classmethod
	def from_name (cls, name: str) -> "PipeClosure":

		try:
			return cls(str(name).lower())
		except ValueError:
			raise organ_cooker.errors.InvalidParameterError(
				f"Unknown pipe closure: {name!r}. Expected 'open' or 'closed'."
			) from None


def speed_of_sound (temperature: float) -> float:

	"""Speed of sound in air (m/s) at ``temperature`` degrees Celsius.

	Raises:
		InvalidParameterError: If the temperature is outside -50..60 C.

	Example:
		```python
		speed_of_sound(18)   # 342.426
		speed_of_sound(15)   # 340.605
		```
	"""

	if isinstance(temperature, bool) or not isinstance(temperature, (int, float)):
		raise organ_cooker.errors.InvalidParameterError(f"Temperature must be a number, got {temperature!r}")

	if not MIN_TEMPERATURE <= temperature <= MAX_TEMPERATURE:
		raise organ_cooker.errors.InvalidParameterError(
			f"Temperature {temperature} C is outside {MIN_TEMPERATURE:g}..{MAX_TEMPERATURE:g} C"
		)

	return SPEED_OF_SOUND_AT_ZERO + SPEED_OF_SOUND_PER_DEGREE * temperature


def frequency_of (note: organ_cooker.notes.Note, diapason: float, height: organ_cooker.heights.Height) -> float:

	"""Frequency in Hz of ``note`` on a rank of ``height`` feet.

	Parameters:
		note: The key being played.
		diapason: Frequency of A3 on an 8' rank.
		height: The rank's foot height (number or text such as ``"2 2/3"``).

	Returns:
		The frequency at full precision. Callers round for display.

	Example:
		```python
		frequency_of(Note.parse("A3"), 440, "8")   # 440.0
		frequency_of(Note.parse("C1"), 440, 8)     # 65.406...
		```
	"""

	if not math.isfinite(diapason) or diapason <= 0:
		raise organ_cooker.errors.InvalidParameterError(f"Diapason must be finite and positive, got {diapason}")

	feet = organ_cooker.heights.parse_height(height)
	offset = note.semitone_offset_from(REFERENCE_NOTE)

	return diapason * 2 ** (offset / 12) / (feet / REFERENCE_HEIGHT)


def pipe_length (frequency: float, speed_of_sound: float, closed: bool = False) -> float:

	"""Speaking length in mm of a pipe sounding ``frequency``.

	An open pipe is half a wavelength long; a stopped pipe is half that again.
	"""

	if frequency <= 0:
		raise organ_cooker.errors.InvalidParameterError(f"Frequency must be positive, got {frequency}")

	if speed_of_sound <= 0:
		raise organ_cooker.errors.InvalidParameterError(f"Speed of sound must be positive, got {speed_of_sound}")

	length = speed_of_sound / (frequency * 2) * 1000

	if closed:
		return length / 2

	return length


def metal_thickness (diameter: float) -> float:

	"""
	Pipe-metal thickness in mm for an internal diameter in mm.
	"""

	if diameter <= BASE_THICKNESS_DIAMETER:
		return BASE_METAL_THICKNESS

	brackets = math.ceil((diameter - BASE_THICKNESS_DIAMETER) / THICKNESS_BRACKET)

	return round(BASE_METAL_THICKNESS + THICKNESS_STEP * brackets, 2)


def external_diameter (diameter: float) -> float:

	"""External diameter in mm: the internal diameter plus two walls.

	Example:
		```python
		external_diameter(10)    # 10.6
		external_diameter(145)   # 148.3
		```
	"""

	return round(diameter + 2 * metal_thickness(diameter), 2)
