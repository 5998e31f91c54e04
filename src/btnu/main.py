#!/usr/bin/env python3

"""
main.py

Backs up groups of local directories to an onsite (and optionally offsite) host.
Validates the configuration, the local paths and the backup hosts, then runs
one rsync transfer per directory.
"""

import sys

from btnu.config import load_configuration
from btnu.errors import BtnuError, ConfigMissing
from btnu.log import logger, set_verbose
from btnu.mode import resolve_mode
from btnu.parser import get_arguments, print_usage
from btnu.runner import run, summarize
from btnu.scaffold import prompt_create_config
from btnu.transfer import RsyncInvoker
from btnu.validation import check_system_dependencies, ping_host, validate


def print_summary(outcomes):
	succeeded, failed = summarize(outcomes)
	print("Summary:")
	for outcome in outcomes:
		print(f"  {outcome.describe()}")
	print(f"\n{len(succeeded)} of {len(outcomes)} transfer(s) succeeded.")
	if failed:
		logger.error(f"{len(failed)} transfer(s) failed.")


def run_cli(argv=None, invoker=None, probe=ping_host, check_dependencies=True):
	"""
	Runs btnu and returns the process exit code.

	Parameters:
		argv (list): Command-line arguments without the program name.
		invoker (TransferInvoker): Transfer implementation, defaults to `RsyncInvoker`.
		probe (Callable): Liveness probe for the backup hosts.
		check_dependencies (bool): Whether to look for rsync, ssh and ping first.

	Returns:
		int: 0 on success, help or setup; 1 on any error or failed transfer.
	"""
	args = get_arguments(argv)
	set_verbose(args["verbose"])

	try:
		# 1. Resolve run type before touching anything else
		job = resolve_mode(args)
		if job is None:
			print_usage()
			return 0

		if check_dependencies:
			check_system_dependencies()

		# 2. Load configuration, offer to create one if missing
		try:
			config = load_configuration(args["config_file"])
		except ConfigMissing as e:
			prompt_create_config(e.path)
			return 0

		# 3. Validate
		targets = config.targets(job.target_name)
		group = validate(config, job, targets, probe)

		# 4. Back up
		outcomes = []
		for target in targets:
			outcomes += run(job.bind(target), group, invoker or RsyncInvoker())

	except BtnuError as e:
		logger.error(str(e))
		return 1

	print_summary(outcomes)
	return 0 if not summarize(outcomes)[1] else 1


def main():
	sys.exit(run_cli())


if __name__ == "__main__":
	main()
