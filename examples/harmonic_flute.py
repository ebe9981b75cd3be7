import logging

import organ_cooker

logging.basicConfig(level=logging.INFO)

project = organ_cooker.Project("mantes-la-jolie", temperature=15, diapason=435)
recit = organ_cooker.WindChest("récit", nb_notes=61, first_note="C1")

# Harmonic flutes are overblown above F3: their pipes are double length,
# so the taper restarts wider and falls faster from there.
harmonique = organ_cooker.flute(
	"flûte harmonique", "8", 83, 3, recit, project,
	progression_change=organ_cooker.ProgressionChange(note="F3", progression=7.5, diameter=83),
)

bourdon = organ_cooker.bourdon("bourdon", "8", 86, 5, recit, project)

for rank in (harmonique, bourdon):

	logging.info(f"{rank.full_name()} - {rank.note_range()}")

	for note, frequency, length, size in zip(rank.note_names(), rank.frequencies(), rank.lengths(), rank.sizes()):
		logging.info(f"{note:>4} {frequency:>8.2f} Hz {length:>7} mm {size:>4} mm")
