"""Foot heights.

Organ builders name a rank's pitch by the nominal length of its lowest open
pipe in feet: ``8'``, ``4'``, ``2 2/3'``, ``1 3/5'``. These helpers turn the
written form into a number for the frequency model and back into the short
label used in rank names.
"""

import math
import re
import typing

import organ_cooker.errors


Height = typing.Union[str, int, float]

_HEIGHT_PATTERN = re.compile(
	r"^(?:(?P<whole>\d+(?:\.\d+)?)(?:\s*'\s*|\s+|$))?"
	r"(?:(?P<numerator>\d+)\s*/\s*(?P<denominator>\d+))?"
	r"\s*'?$"
)


def _split_height (text: Height) -> typing.Tuple[typing.Optional[str], typing.Optional[int], typing.Optional[int]]:

	"""
	Split a height into its whole part and optional fraction.
	"""

	if isinstance(text, bool):
		raise organ_cooker.errors.InvalidHeightError(f"Invalid height: {text!r}")

	if isinstance(text, (int, float)):
		return (repr(text) if isinstance(text, float) else str(text)), None, None

	if not isinstance(text, str):
		raise organ_cooker.errors.InvalidHeightError(f"Invalid height: {text!r}")

	match = _HEIGHT_PATTERN.match(text.strip())

	if match is None or (match.group("whole") is None and match.group("numerator") is None):
		raise organ_cooker.errors.InvalidHeightError(
			f"Invalid height: {text!r}. Expected e.g. '8', '2 2/3', \"2'2/3\" or '2/3'."
		)

	if match.group("numerator") is None:
		return match.group("whole"), None, None

	numerator = int(match.group("numerator"))
	denominator = int(match.group("denominator"))

	if denominator == 0:
		raise organ_cooker.errors.InvalidHeightError(f"Invalid height: {text!r} has a zero denominator")

	return match.group("whole"), numerator, denominator


def parse_height (text: Height) -> float:

	"""Convert a foot height to a decimal number of feet.

	Parameters:
		text: A plain number (``"8"``, ``"2.5"``, ``8``), whole feet plus a
			fraction (``"2 2/3"``, ``"2'2/3"``) or a fraction (``"2/3"``).
			A trailing foot mark is allowed.

	Returns:
		The height in feet.

	Raises:
		InvalidHeightError: On malformed text, a zero denominator or a
			non-positive or non-finite result.

	Example:
		```python
		parse_height("8")       # 8.0
		parse_height("2'2/3")   # 2.666...
		parse_height("1 3/5")   # 1.6
		```
	"""

	whole, numerator, denominator = _split_height(text)

	value = float(whole) if whole is not None else 0.0

	if numerator is not None and denominator is not None:
		value += numerator / denominator

	if not math.isfinite(value) or value <= 0:
		raise organ_cooker.errors.InvalidHeightError(f"Height must be a finite positive number, got {text!r}")

	return value


def format_height (text: Height) -> str:

	"""Render a height as it appears in a rank name.

	Example:
		```python
		format_height("8")       # "8'"
		format_height("1 3/5")   # "1'3/5"
		format_height("2/3")     # "2/3'"
		```
	"""

	whole, numerator, denominator = _split_height(text)

	if whole is not None and "." in whole and float(whole).is_integer():
		whole = str(int(float(whole)))

	if numerator is None:
		return f"{whole}'"

	if whole is None:
		return f"{numerator}/{denominator}'"

	return f"{whole}'{numerator}/{denominator}"
