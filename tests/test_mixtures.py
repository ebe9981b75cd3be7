import pytest

import organ_cooker.acoustics
import organ_cooker.errors
import organ_cooker.mixtures
import organ_cooker.naming
import organ_cooker.notes
import organ_cooker.project


Note = organ_cooker.notes.Note

PLEIN_JEU_ROWS = {
	"row_1": ["2", "2 2/3", "4", "4"],
	"row_2": ["1 1/3", "2", "2 2/3", "4"],
	"row_3": ["1", "1 1/3", "2", "2 2/3"],
	"row_4": [None, "1", "1 1/3", "2"],
}

BREAK_NOTES = ["c1", "c2", "c3", "g#5"]


@pytest.fixture
def plein_jeu (project: organ_cooker.project.Project, grand_orgue: organ_cooker.project.WindChest) -> organ_cooker.mixtures.CompositeRank:

	"""A III-IV plein-jeu whose fourth row enters at C2."""

	return organ_cooker.mixtures.mixture(
		"plein-jeu", PLEIN_JEU_ROWS, BREAK_NOTES, 80, 5, grand_orgue, project
	)


# ── Break segments ───────────────────────────────────────────────────

def test_break_segments (plein_jeu: organ_cooker.mixtures.CompositeRank) -> None:

	"""Each break note starts a segment; a break above the compass is empty."""

	segments = plein_jeu.break_segments()

	assert [str(segment) for segment in segments[:3]] == ["C1..B1", "C2..B2", "C3..G5"]
	assert [segment.size for segment in segments] == [12, 12, 32, 0]


def test_break_segments_partition_the_compass (plein_jeu: organ_cooker.mixtures.CompositeRank) -> None:

	"""Segments cover every note exactly once, in order."""

	covered = [note for segment in plein_jeu.break_segments() for note in segment]

	assert covered == plein_jeu.notes()
	assert covered[0] == Note.parse("C1")
	assert covered[-1] == Note.parse("G5")


def test_first_segment_starts_at_first_note (project: organ_cooker.project.Project, grand_orgue: organ_cooker.project.WindChest) -> None:

	"""The first break note does not move the start of the rank."""

	rank = organ_cooker.mixtures.mixture(
		"fourniture", [["2", "1"], ["1 1/3", "2/3"]], ["A0", "C3"], 60, 5, grand_orgue, project, first_note="C2"
	)
	segments = rank.break_segments()

	assert str(segments[0]) == "C2..B2"
	assert str(segments[1]) == "C3..G5"
	assert rank.row_ids() == ["row_1", "row_2"]


# ── Validation ───────────────────────────────────────────────────────

def test_row_length_mismatch_rejected (project: organ_cooker.project.Project, grand_orgue: organ_cooker.project.WindChest) -> None:

	"""Every row needs one height per break note."""

	rows = dict(PLEIN_JEU_ROWS, row_4=["1", "1 1/3", "2"])

	with pytest.raises(organ_cooker.errors.InvalidRankGeometryError):
		organ_cooker.mixtures.mixture("plein-jeu", rows, BREAK_NOTES, 80, 5, grand_orgue, project)


def test_unsorted_break_notes_rejected (project: organ_cooker.project.Project, grand_orgue: organ_cooker.project.WindChest) -> None:

	"""Break notes must rise strictly."""

	with pytest.raises(organ_cooker.errors.InvalidRankGeometryError):
		organ_cooker.mixtures.mixture("plein-jeu", PLEIN_JEU_ROWS, ["C1", "C3", "C2", "G#5"], 80, 5, grand_orgue, project)

	with pytest.raises(organ_cooker.errors.InvalidRankGeometryError):
		organ_cooker.mixtures.mixture("plein-jeu", PLEIN_JEU_ROWS, ["C1", "C2", "C2", "G#5"], 80, 5, grand_orgue, project)


def test_break_below_first_note_rejected (project: organ_cooker.project.Project, grand_orgue: organ_cooker.project.WindChest) -> None:

	"""A second break note at or below the first note would leave an empty first segment."""

	with pytest.raises(organ_cooker.errors.InvalidRankGeometryError):
		organ_cooker.mixtures.mixture("plein-jeu", PLEIN_JEU_ROWS, BREAK_NOTES, 80, 5, grand_orgue, project, first_note="C2")


def test_invalid_rows_rejected (project: organ_cooker.project.Project, grand_orgue: organ_cooker.project.WindChest) -> None:

	"""Rows must exist, hold valid heights and not all be silent."""

	with pytest.raises(organ_cooker.errors.InvalidRankGeometryError):
		organ_cooker.mixtures.mixture("plein-jeu", {}, BREAK_NOTES, 80, 5, grand_orgue, project)

	with pytest.raises(organ_cooker.errors.InvalidRankGeometryError):
		organ_cooker.mixtures.mixture("plein-jeu", {"row_1": [None, "-"]}, ["C1", "C2"], 80, 5, grand_orgue, project)

	with pytest.raises(organ_cooker.errors.InvalidHeightError):
		organ_cooker.mixtures.mixture("plein-jeu", {"row_1": ["2", "x"]}, ["C1", "C2"], 80, 5, grand_orgue, project)

	with pytest.raises(organ_cooker.errors.InvalidNoteError):
		organ_cooker.mixtures.mixture("plein-jeu", {"row_1": ["2", "1"]}, ["C1", "H2"], 80, 5, grand_orgue, project)


# ── Names ────────────────────────────────────────────────────────────

def test_full_name_with_rows (project: organ_cooker.project.Project, grand_orgue: organ_cooker.project.WindChest) -> None:

	"""Three full rows give a roman III."""

	rows = {key: value for key, value in PLEIN_JEU_ROWS.items() if key != "row_4"}
	rank = organ_cooker.mixtures.mixture("plein-jeu", rows, BREAK_NOTES, 80, 5, grand_orgue, project)

	assert rank.full_name() == "Plein-Jeu III"
	assert rank.kind is organ_cooker.naming.RankKind.COMPOSITE


def test_full_name_with_row_range (plein_jeu: organ_cooker.mixtures.CompositeRank) -> None:

	"""A row silent in the bass gives a low-high range."""

	assert plein_jeu.sounding_rows() == [3, 4, 4, 4]
	assert plein_jeu.full_name() == "Plein-Jeu III-IV"


# ── Frequencies and lengths ──────────────────────────────────────────

def test_frequencies_follow_segment_heights (plein_jeu: organ_cooker.mixtures.CompositeRank) -> None:

	"""Each row takes the height of the segment a note falls in."""

	frequencies = plein_jeu.frequencies()

	assert list(frequencies) == ["row_1", "row_2", "row_3", "row_4"]
	assert all(len(values) == 56 for values in frequencies.values())
	assert frequencies["row_1"][:3] == [261.63, 277.18, 293.66]
	assert frequencies["row_1"][12] == 392.44
	assert frequencies["row_3"][0] == 523.25
	assert frequencies["row_4"][12] == 1046.5


def test_silent_rows_yield_none (plein_jeu: organ_cooker.mixtures.CompositeRank) -> None:

	"""A silent segment has no frequency, length or diameter."""

	assert plein_jeu.frequencies()["row_4"][:12] == [None] * 12
	assert plein_jeu.lengths()["row_4"][:12] == [None] * 12
	assert plein_jeu.sizes()["row_4"][:12] == [None] * 12
	assert plein_jeu.external_diameters()["row_4"][:12] == [None] * 12
	assert None not in plein_jeu.sizes()["row_4"][12:]


def test_lengths (plein_jeu: organ_cooker.mixtures.CompositeRank) -> None:

	"""Lengths are open-pipe lengths in whole millimetres."""

	lengths = plein_jeu.lengths()

	assert lengths["row_1"][:3] == [654, 618, 583]
	assert lengths["row_1"][12] == 436
	assert lengths["row_4"][12] == 164


def test_cornet_lengths_are_halved (project: organ_cooker.project.Project, grand_orgue: organ_cooker.project.WindChest, plein_jeu: organ_cooker.mixtures.CompositeRank) -> None:

	"""A cornet is a mixture of stopped pipes: every length halves, diameters stay."""

	cornet = organ_cooker.mixtures.cornet("cornet", PLEIN_JEU_ROWS, BREAK_NOTES, 80, 5, grand_orgue, project)

	assert cornet.closure is organ_cooker.acoustics.PipeClosure.CLOSED
	assert cornet.frequencies() == plein_jeu.frequencies()

	for row_id, lengths in plein_jeu.lengths().items():
		assert cornet.lengths()[row_id] == [None if length is None else length / 2 for length in lengths]

	assert cornet.sizes() == plein_jeu.sizes()


# ── Sizes ────────────────────────────────────────────────────────────

def test_reference_rank (plein_jeu: organ_cooker.mixtures.CompositeRank) -> None:

	"""The reference rank stands at the tallest height, two octaves longer."""

	reference = plein_jeu.reference_rank()

	assert plein_jeu.tallest_height() == "4"
	assert reference.full_name() == "Plein-Jeu 4'"
	assert reference.note_range().size == 56 + 24
	assert reference.sizes()[0] == 80


def test_sizes_match_reference_lengths (plein_jeu: organ_cooker.mixtures.CompositeRank) -> None:

	"""Each pipe takes the diameter of the reference pipe nearest in length."""

	sizes = plein_jeu.sizes()

	assert sizes["row_1"][:12] == [53, 52, 50, 48, 47, 45, 44, 42, 41, 40, 38, 37]
	assert sizes["row_1"][12] == 42
	assert sizes["row_1"][-1] == 13
	assert sizes["row_4"][12] == 24
	assert sizes["row_4"][-1] == 7


def test_equal_lengths_share_a_diameter (plein_jeu: organ_cooker.mixtures.CompositeRank) -> None:

	"""Pipes of the same length get the same diameter whatever their row."""

	lengths = plein_jeu.lengths()
	sizes = plein_jeu.sizes()
	by_length = {}

	for row_id in plein_jeu.row_ids():
		for length, size in zip(lengths[row_id], sizes[row_id]):
			if length is not None:
				assert by_length.setdefault(length, size) == size


def test_external_diameters (plein_jeu: organ_cooker.mixtures.CompositeRank) -> None:

	"""External diameters add the wall thickness to every sounding pipe."""

	external = plein_jeu.external_diameters()

	assert external["row_1"][0] == 54.5
	assert external["row_4"][12] == 24.9


# ── nearest_index ────────────────────────────────────────────────────

def test_nearest_index () -> None:

	"""The closest candidate wins."""

	assert organ_cooker.mixtures.nearest_index(436, [654, 437, 412]) == 1
	assert organ_cooker.mixtures.nearest_index(420, [654, 437, 412]) == 2


def test_nearest_index_ties_go_low () -> None:

	"""Equal distances resolve to the lowest index."""

	assert organ_cooker.mixtures.nearest_index(5, [10, 6, 4, 0]) == 1


def test_nearest_index_clamps () -> None:

	"""Values beyond the candidates clamp to the extremes."""

	assert organ_cooker.mixtures.nearest_index(9000, [654, 654, 437]) == 0
	assert organ_cooker.mixtures.nearest_index(1, [654, 437, 412]) == 2


def test_nearest_index_empty () -> None:

	"""There is no nearest candidate in an empty list."""

	with pytest.raises(ValueError):
		organ_cooker.mixtures.nearest_index(1, [])
