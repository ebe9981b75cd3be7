"""
organ_cooker - pipe dimensions for organ ranks.

Given a project's temperature and diapason and a windchest's compass,
organ_cooker works out, for every pipe of a rank, its note, frequency,
speaking length and internal and external diameter.

- **Notes.** ``Note.parse("a#-1")``, successor/predecessor arithmetic over
  the chromatic scale and ``NoteRange`` intervals.
- **Simple ranks.** Flutes (open) and bourdons (stopped) with a geometric
  diameter taper and an optional progression change.
- **Composite ranks.** Mixtures and cornets: several rows breaking back at
  break notes, diameters matched on one reference taper.
- **Organ descriptions.** Build every rank of an organ from a YAML file and
  print the tables with ``python -m organ_cooker organ.yaml``.

Minimal example:

    ```python
    import organ_cooker

    project = organ_cooker.Project("mantes-la-jolie", temperature=18, diapason=440)
    grand_orgue = organ_cooker.WindChest("grand-orgue", nb_notes=56, first_note="C1")
    montre = organ_cooker.flute("montre", "8", 145, 6, grand_orgue, project)

    montre.full_name()        # "Montre 8'"
    montre.frequencies()[:3]  # [65.41, 69.3, 73.42]
    montre.lengths()[:3]      # [2618, 2471, 2332]
    ```

Package-level exports: ``Note``, ``NoteRange``, ``Project``, ``WindChest``,
``SimpleRank``, ``CompositeRank``, ``ProgressionChange``, ``PipeClosure``,
``flute``, ``bourdon``, ``mixture``, ``cornet``, ``parse_height``.
"""

import organ_cooker.acoustics
import organ_cooker.heights
import organ_cooker.mixtures
import organ_cooker.notes
import organ_cooker.project
import organ_cooker.ranks


Note = organ_cooker.notes.Note
NoteRange = organ_cooker.notes.NoteRange
Project = organ_cooker.project.Project
WindChest = organ_cooker.project.WindChest
SimpleRank = organ_cooker.ranks.SimpleRank
CompositeRank = organ_cooker.mixtures.CompositeRank
ProgressionChange = organ_cooker.ranks.ProgressionChange
PipeClosure = organ_cooker.acoustics.PipeClosure
flute = organ_cooker.ranks.flute
bourdon = organ_cooker.ranks.bourdon
mixture = organ_cooker.mixtures.mixture
cornet = organ_cooker.mixtures.cornet
parse_height = organ_cooker.heights.parse_height
