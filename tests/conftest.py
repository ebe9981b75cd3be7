import pytest

import organ_cooker.project


@pytest.fixture
def project () -> organ_cooker.project.Project:

	"""A project voiced at 18 C with A3 = 440 Hz."""

	return organ_cooker.project.Project("Mantes-La-Jolie", temperature=18, diapason=440)


@pytest.fixture
def grand_orgue () -> organ_cooker.project.WindChest:

	"""A 56-note windchest from C1 to G5."""

	return organ_cooker.project.WindChest("Grand-Orgue", nb_notes=56, first_note="C1")


@pytest.fixture
def recit () -> organ_cooker.project.WindChest:

	"""A 61-note windchest from C1 to C6."""

	return organ_cooker.project.WindChest("Grand-Orgue", nb_notes=61, first_note="C1")
