import argparse

from btnu.globals import Globals


def build_parser():
	parser = argparse.ArgumentParser(
		prog="btnu",
		description="Back up groups of directories to an onsite (and offsite) host with rsync over ssh.",
		add_help=False,
	)
	parser.add_argument("-M", dest="mirror", action="store_true", help="Run a mirror job (deletes files on the backup host that do not exist locally).")
	parser.add_argument("-m", dest="mirror_dry_run", action="store_true", help="Dry run of a mirror job.")
	parser.add_argument("-R", dest="run", action="store_true", help="Run a regular backup job.")
	parser.add_argument("-r", dest="run_dry_run", action="store_true", help="Dry run of a regular backup job.")
	parser.add_argument("-s", dest="group", metavar="GROUP", help=f"Back up a specific directory group from the configuration (default: {Globals.DEFAULT_GROUP}).")
	parser.add_argument("-t", dest="target", choices=Globals.TARGETS, help="Backup target to use (default: onsite).")
	parser.add_argument("-c", "--config", dest="config_file", help="Path to the configuration YAML file.")
	parser.add_argument("-v", "--verbose", action="store_true", help="Print debug output.")
	parser.add_argument("-h", "--help", dest="help", action="store_true", help="Show this help message.")
	return parser


def get_arguments(argv=None):
	"""
	Parses the command-line arguments of btnu.

	Parameters:
		argv (list): Arguments without the program name, defaults to `sys.argv[1:]`.

	Returns:
		dict: Parsed arguments. Mode flags are not interpreted here, see `btnu.mode.resolve_mode`.
	"""
	args = build_parser().parse_args(argv)

	return {
		"mirror": args.mirror,
		"mirror_dry_run": args.mirror_dry_run,
		"run": args.run,
		"run_dry_run": args.run_dry_run,
		"group": args.group,
		"target": args.target,
		"config_file": args.config_file,
		"verbose": args.verbose,
		"help": args.help,
	}


def print_usage():
	build_parser().print_help()
