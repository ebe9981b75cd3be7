"""Exceptions raised by organ_cooker.

Every error is a ``ValueError`` subclass: they all signal malformed input
(a bad note name, a bad height, an impossible rank layout) rather than a
transient failure, and callers can catch them together as
``OrganCookerError`` or individually.
"""


class OrganCookerError (ValueError):

	"""
	Base class for all organ_cooker validation errors.
	"""


class InvalidNoteError (OrganCookerError):

	"""
	Raised when a note name cannot be parsed or a note is out of range.
	"""


class InvalidHeightError (OrganCookerError):

	"""
	Raised when a foot height such as ``"2 2/3"`` cannot be parsed.
	"""


class InvalidRankGeometryError (OrganCookerError):

	"""
	Raised when a rank's notes, progression change or break notes do not fit its windchest.
	"""


class InvalidParameterError (OrganCookerError):

	"""
	Raised for non-positive dimensions, progressions, diapasons or an implausible temperature.
	"""
