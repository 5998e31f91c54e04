import os
import shlex
import subprocess

from btnu.log import logger

CONFIG_TEMPLATE = """\
# Config file for btnu

# List of directories you want to backup.
# Additional groups can be added as further lists and selected with `-s <GROUP>`.
DIRECTORIES:
  - /Example_directory/
  - /Another/Example/

# Meant to be a different host, but located locally
# Enter IP or hostname.
ONSITE_BACKUP_HOST: ""

# Path on the onsite host where the backup will be stored
ONSITE_BACKUP_PATH: ""

# Username for onsite host
ONSITE_USERNAME: ""

# Onsite host SSH priv key path
ONSITE_SSHKEY_PATH: ""

# Meant to be a different host located offsite away from your onsite host.
# Either set all OFFSITE values or none of them.
OFFSITE_BACKUP_HOST: ""

# Path on remote host where the backup will be stored
OFFSITE_BACKUP_PATH: ""

# Username for offsite host
OFFSITE_USERNAME: ""

# Offsite host SSH priv key path
OFFSITE_SSHKEY_PATH: ""
"""


def ask_yes_no(prompt):
	"""
	Prompt the user with a yes/no question and return their response as a boolean

	Parameters:
	prompt (str): The question to display to the user

	Returns:
		bool: True if the user answers 'y' or 'yes', False if the 'n' or 'no'

	The function will repeatedly prompt until a valid response is given.
	"""
	while True:
		answer = input(prompt).strip().lower()
		if answer == "y" or answer == "yes":
			return True
		elif answer == "n" or answer == "no":
			return False
		else:
			print("Not a valid option. Please answer 'y', 'yes', 'n', or 'no'.")


def write_template(path):
	"""
	Writes the commented configuration template to `path`, creating parent directories.

	Raises:
		FileExistsError: If `path` already exists.
	"""
	parent = os.path.dirname(path)
	if parent:
		os.makedirs(parent, exist_ok=True)
	with open(path, "x") as f:
		f.write(CONFIG_TEMPLATE)
	print(f"Config file {path} created!")


def open_in_editor(path):
	editor = os.environ.get("EDITOR")
	if not editor:
		logger.info(f"Set $EDITOR or edit {path} manually before the first run.")
		return
	try:
		subprocess.run(shlex.split(editor) + [path], check=False)
	except FileNotFoundError:
		logger.warning(f"Editor \"{editor}\" not found. Please edit {path} manually.")


def prompt_create_config(path, ask=ask_yes_no):
	"""
	Offers to create a configuration file if none exists.

	Parameters:
		path (str): Where the configuration file is expected.
		ask (Callable): Yes/no prompt.

	Returns:
		bool: True if a configuration file was created, False if the user declined.
	"""
	if not ask("No configuration file found. Would you like to create one? (y/n): "):
		print("Goodbye!")
		return False

	write_template(path)
	open_in_editor(path)
	return True
