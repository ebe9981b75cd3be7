"""Organ descriptions in YAML.

An organ description names the project, its windchests and the ranks
standing on them::

	project:
	  name: mantes-la-jolie
	  temperature: 18
	  diapason: 440

	windchests:
	  grand-orgue:
	    nb_notes: 56
	    first_note: C1

	ranks:
	  - type: flute
	    name: montre
	    windchest: grand-orgue
	    height: "8"
	    diameter: 145
	    progression: 6
	  - type: mixture
	    name: plein-jeu
	    windchest: grand-orgue
	    diameter: 80
	    progression: 5
	    break_notes: [C1, C2, C3]
	    rows:
	      row_1: ["2", "2 2/3", "4"]
	      row_2: [null, "2", "2 2/3"]

Rank types are ``flute`` and ``bourdon`` (simple ranks) and ``mixture`` and
``cornet`` (composite ranks). An explicit ``closure: open`` or
``closure: closed`` overrides the type's default. A simple rank may add
``progression_change: {note: F3, progression: 4, diameter: 83}``.
"""

import dataclasses
import logging
import os
import typing

import yaml

import organ_cooker.acoustics
import organ_cooker.errors
import organ_cooker.mixtures
import organ_cooker.project
import organ_cooker.ranks


logger = logging.getLogger(__name__)

Rank = typing.Union[organ_cooker.ranks.SimpleRank, organ_cooker.mixtures.CompositeRank]

RANK_TYPES: typing.Dict[str, typing.Tuple[str, organ_cooker.acoustics.PipeClosure]] = {
	"flute": ("simple", organ_cooker.acoustics.PipeClosure.OPEN),
	"bourdon": ("simple", organ_cooker.acoustics.PipeClosure.CLOSED),
	"mixture": ("composite", organ_cooker.acoustics.PipeClosure.OPEN),
	"cornet": ("composite", organ_cooker.acoustics.PipeClosure.CLOSED),
}


@dataclasses.dataclass(frozen=True)
class Organ:

	"""
	Everything built from one organ description.
	"""

	project: organ_cooker.project.Project
	windchests: typing.Dict[str, organ_cooker.project.WindChest]
	ranks: typing.List[Rank]


def load_config (config_path: str = 'organ.yaml') -> dict:

	"""
	Load an organ description from a YAML file.
	"""

	if not os.path.exists(config_path):
		logger.warning(f"Config file {config_path} not found. Using defaults.")
		return {}

	with open(config_path, 'r') as f:
		config = yaml.safe_load(f)

	if config is None:
		return {}

	if not isinstance(config, dict):
		raise organ_cooker.errors.InvalidParameterError(f"{config_path} must contain a mapping, got {type(config).__name__}")

	return config


def _require (section: typing.Dict[str, typing.Any], key: str, context: str) -> typing.Any:

	if key not in section:
		raise organ_cooker.errors.InvalidParameterError(f"Missing '{key}' in {context}")

	return section[key]


def build_project (config: typing.Dict[str, typing.Any]) -> organ_cooker.project.Project:

	"""
	Build the project, falling back to the default temperature and diapason.
	"""

	section = config.get('project', {}) or {}

	return organ_cooker.project.Project(
		name=section.get('name', 'organ'),
		temperature=section.get('temperature', organ_cooker.project.DEFAULT_TEMPERATURE),
		diapason=section.get('diapason', organ_cooker.project.DEFAULT_DIAPASON),
	)


def build_windchests (config: typing.Dict[str, typing.Any]) -> typing.Dict[str, organ_cooker.project.WindChest]:

	windchests = {}

	for name, section in (config.get('windchests', {}) or {}).items():
		section = section or {}

		if not isinstance(section, dict):
			raise organ_cooker.errors.InvalidParameterError(f"Windchest {name!r} must be a mapping, got {section!r}")

		windchests[name] = organ_cooker.project.WindChest(
			name=name,
			nb_notes=section.get('nb_notes', 61),
			first_note=section.get('first_note', 'C1'),
			foot_height=section.get('foot_height', 200),
		)

	return windchests


def build_rank (
	section: typing.Dict[str, typing.Any],
	project: organ_cooker.project.Project,
	windchests: typing.Dict[str, organ_cooker.project.WindChest],
) -> Rank:

	"""Build one rank from its description.

	Raises:
		InvalidParameterError: For an unknown type or windchest, or a missing key.
	"""

	if not isinstance(section, dict):
		raise organ_cooker.errors.InvalidParameterError(f"Each rank must be a mapping, got {section!r}")

	name = _require(section, 'name', "rank")
	context = f"rank {name!r}"
	rank_type = str(section.get('type', 'flute')).lower()

	if rank_type not in RANK_TYPES:
		raise organ_cooker.errors.InvalidParameterError(
			f"Unknown type {rank_type!r} for {context}. Available: {sorted(RANK_TYPES)}"
		)

	windchest_name = _require(section, 'windchest', context)

	if windchest_name not in windchests:
		raise organ_cooker.errors.InvalidParameterError(
			f"Unknown windchest {windchest_name!r} for {context}. Available: {sorted(windchests)}"
		)

	family, closure = RANK_TYPES[rank_type]

	if section.get('closure') is not None:
		closure = organ_cooker.acoustics.PipeClosure.from_name(section['closure'])

	if family == "simple":
		change = section.get('progression_change')

		return organ_cooker.ranks.SimpleRank(
			name=name,
			height=_require(section, 'height', context),
			diameter=_require(section, 'diameter', context),
			progression=_require(section, 'progression', context),
			windchest=windchests[windchest_name],
			project=project,
			first_note=section.get('first_note'),
			progression_change=organ_cooker.ranks.ProgressionChange(
				note=_require(change, 'note', f"progression change of {context}"),
				progression=_require(change, 'progression', f"progression change of {context}"),
				diameter=change.get('diameter'),
			) if change else None,
			closure=closure,
		)

	return organ_cooker.mixtures.CompositeRank(
		name=name,
		rows=_require(section, 'rows', context),
		break_notes=_require(section, 'break_notes', context),
		diameter=_require(section, 'diameter', context),
		progression=_require(section, 'progression', context),
		windchest=windchests[windchest_name],
		project=project,
		first_note=section.get('first_note'),
		closure=closure,
	)


def build_organ (config: typing.Dict[str, typing.Any]) -> Organ:

	"""
	Build the project, windchests and every rank of a description.
	"""

	project = build_project(config)
	windchests = build_windchests(config)
	ranks = []

	for section in config.get('ranks', []) or []:
		rank = build_rank(section, project, windchests)
		logger.info(f"Built {rank.full_name()} on {rank.windchest.name} ({rank.note_range()})")
		ranks.append(rank)

	return Organ(project=project, windchests=windchests, ranks=ranks)
