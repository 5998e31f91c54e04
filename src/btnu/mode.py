from typing import Optional

from btnu.errors import ConflictingFlags, MissingRunType
from btnu.globals import Globals
from btnu.job import JobSpec
from btnu.log import logger

MIRROR_FLAGS = {"mirror": "-M", "mirror_dry_run": "-m"}
PLAIN_FLAGS = {"run": "-R", "run_dry_run": "-r"}


def resolve_mode(flags: dict) -> Optional[JobSpec]:
	"""
	Turns the parsed command-line flags into a JobSpec.

	A mirror flag (-M/-m) and a plain flag (-R/-r) must not be combined. Within one
	family the dry-run variant wins, so `-M -m` previews the mirror job.
	The check only looks at `flags` and never touches the file system or network.

	Parameters:
		flags (dict): Arguments as returned by `btnu.parser.get_arguments`.

	Returns:
		JobSpec: The resolved job, or None if help was requested or no option was given at all.

	Raises:
		ConflictingFlags: If mirror and plain flags are given together.
		MissingRunType: If -s or -t is given without a run type.
	"""
	mirror_given = [opt for key, opt in MIRROR_FLAGS.items() if flags.get(key)]
	plain_given = [opt for key, opt in PLAIN_FLAGS.items() if flags.get(key)]

	if mirror_given and plain_given:
		raise ConflictingFlags(mirror_given + plain_given)

	if flags.get("help"):
		return None

	if not mirror_given and not plain_given:
		options_given = [opt for key, opt in (("group", "-s"), ("target", "-t")) if flags.get(key)]
		if options_given:
			raise MissingRunType(options_given)
		logger.debug("No run type selected.")
		return None

	mirror = bool(mirror_given)
	if mirror:
		dry_run = bool(flags.get("mirror_dry_run"))
	else:
		dry_run = bool(flags.get("run_dry_run"))

	group_name = flags.get("group") or Globals.DEFAULT_GROUP

	job = JobSpec(
		group_name=group_name,
		mirror=mirror,
		dry_run=dry_run,
		target_name=flags.get("target") or "onsite",
	)
	logger.debug(f"Resolved job: {job.describe()} ({job.target_name})")
	return job
