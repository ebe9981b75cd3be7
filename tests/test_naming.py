import pytest

import organ_cooker.naming


def test_capitalize_name () -> None:

	"""Every alphabetic run is capitalized, accents included."""

	assert organ_cooker.naming.capitalize_name("montre") == "Montre"
	assert organ_cooker.naming.capitalize_name("flûte harmonique") == "Flûte Harmonique"
	assert organ_cooker.naming.capitalize_name("plein-jeu") == "Plein-Jeu"
	assert organ_cooker.naming.capitalize_name("grosse TIERCE") == "Grosse Tierce"
	assert organ_cooker.naming.capitalize_name("écho") == "Écho"


def test_to_roman () -> None:

	"""Row counts render in roman numerals."""

	assert [organ_cooker.naming.to_roman(n) for n in range(1, 10)] == [
		"I", "II", "III", "IV", "V", "VI", "VII", "VIII", "IX"
	]
	assert organ_cooker.naming.to_roman(12) == "XII"
	assert organ_cooker.naming.to_roman(1999) == "MCMXCIX"


def test_to_roman_rejects_zero () -> None:

	"""There is no roman numeral for zero."""

	with pytest.raises(ValueError):
		organ_cooker.naming.to_roman(0)
