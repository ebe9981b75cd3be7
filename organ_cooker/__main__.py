import argparse
import logging
import sys
import typing

import yaml

import organ_cooker.config
import organ_cooker.naming


# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def _cell (value: typing.Any) -> str:

	return "-" if value is None else str(value)


def format_rank_table (rank: organ_cooker.config.Rank) -> typing.List[str]:

	"""
	Tab-separated lines describing every pipe of a rank, one line per note.
	"""

	lines = [f"== {rank.full_name()} =="]

	if rank.kind is organ_cooker.naming.RankKind.SIMPLE:
		lines.append("note\tfrequency\tlength\tsize\texternal")
		columns = zip(rank.note_names(), rank.frequencies(), rank.lengths(), rank.sizes(), rank.external_diameters())
		lines.extend("\t".join(_cell(value) for value in row) for row in columns)
		return lines

	row_ids = rank.row_ids()
	frequencies = rank.frequencies()
	lengths = rank.lengths()
	sizes = rank.sizes()
	externals = rank.external_diameters()

	lines.append("\t".join(["note"] + [f"{row_id} frequency\t{row_id} length\t{row_id} size\t{row_id} external" for row_id in row_ids]))

	for index, note_name in enumerate(rank.note_names()):
		cells = [note_name]
		for row_id in row_ids:
			cells.extend(_cell(values[row_id][index]) for values in (frequencies, lengths, sizes, externals))
		lines.append("\t".join(cells))

	return lines


def main (argv: typing.Optional[typing.List[str]] = None) -> int:

	"""
	Print the pipe tables of every rank in an organ description.
	"""

	parser = argparse.ArgumentParser(prog="organ_cooker", description="Compute pipe dimensions for organ ranks.")
	parser.add_argument("config", nargs="?", default="organ.yaml", help="YAML organ description (default: organ.yaml)")
	args = parser.parse_args(argv)

	try:
		config = organ_cooker.config.load_config(args.config)
		organ = organ_cooker.config.build_organ(config)
	except yaml.YAMLError as e:
		logger.error(f"Cannot read {args.config}: {e}")
		return 1
	except ValueError as e:
		logger.error(f"Invalid organ description: {e}")
		return 1

	logger.info(f"{organ.project.name}: {organ.project.temperature} C, diapason {organ.project.diapason} Hz")

	for rank in organ.ranks:
		print("\n".join(format_rank_table(rank)))
		print()

	return 0


if __name__ == "__main__":
	sys.exit(main())
