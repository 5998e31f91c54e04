from btnu.config import DirectoryGroup
from btnu.errors import TransferFailure
from btnu.job import JobSpec, TransferOutcome
from btnu.log import logger
from btnu.transfer import TransferInvoker


def run(job: JobSpec, group: DirectoryGroup, invoker: TransferInvoker) -> list[TransferOutcome]:
	"""
	Transfers every path of `group` to the job's target, one rsync call per path.

	A failing path does not stop the batch: its outcome is recorded and the
	next path is transferred.

	Parameters:
		job (JobSpec): Job bound to a RemoteTarget.
		group (DirectoryGroup): Paths to back up, in order.
		invoker (TransferInvoker): Performs the actual transfer.

	Returns:
		list[TransferOutcome]: One outcome per path, in group order.
	"""
	if not job.is_bound:
		raise ValueError("The job has no target. Use JobSpec.bind() first.")

	target = job.target
	outcomes = []
	for path in group:
		print(path)
		if job.dry_run:
			print(f"Running DRY-RUN backup on {job.group_name} ({target.host})")
		else:
			print(f"Running backup on {job.group_name} ({target.host})")

		try:
			outcome = invoker.sync(path, target, mirror=job.mirror, dry_run=job.dry_run)
		except Exception as e:
			failure = TransferFailure(path, str(e))
			outcome = TransferOutcome(path, False, str(failure), target.host)

		if not outcome.succeeded:
			logger.error(f"Rsync failed for \"{path}\": {outcome.message}")
		outcomes.append(outcome)
		print("")

	return outcomes


def summarize(outcomes: list[TransferOutcome]) -> tuple[list, list]:
	succeeded = [o for o in outcomes if o.succeeded]
	failed = [o for o in outcomes if not o.succeeded]
	return succeeded, failed


def any_failed(outcomes: list[TransferOutcome]) -> bool:
	return any(not o.succeeded for o in outcomes)
