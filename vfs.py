"""CLI entry point for vfs: interactive in-memory user/folder/file namespace."""

import argparse
import logging
import os
import sys

from errors import StorageError
from storage import ASC, DESC, SORT_CREATED, SORT_NAME, Storage

logger = logging.getLogger(__name__)

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]

SORT_FLAGS = {
    "--sort-name": SORT_NAME,
    "--sort-created": SORT_CREATED,
}

HELP = """Commands:
  register <username>
  delete <username>
  list [prefix]
  create-folder <username> <foldername> [description]
  delete-folder <username> <foldername>
  list-folders <username> [--sort-name|--sort-created] [asc|desc]
  create-file <username> <foldername> <filename> [description]
  delete-file <username> <foldername> <filename>
  list-files <username> <foldername> [--sort-name|--sort-created] [asc|desc]
  help
  exit"""


class UsageError(Exception):
    """Command was called with the wrong arguments."""
    pass


def parse_sort(args: list[str]) -> tuple[str, str]:
    """Parse optional [--sort-name|--sort-created] [asc|desc] arguments."""
    sort_field, sort_order = SORT_NAME, ASC
    rest = list(args)
    if rest and rest[0].lower() in SORT_FLAGS:
        sort_field = SORT_FLAGS[rest.pop(0).lower()]
    if rest and rest[0].lower() in (ASC, DESC):
        sort_order = rest.pop(0).lower()
    if rest:
        raise UsageError(f"unexpected argument '{rest[0]}'")
    return sort_field, sort_order


class Shell:
    """Reads commands line by line and runs them against a Storage."""

    def __init__(self, storage: Storage, stdout=None, stderr=None):
        self.storage = storage
        self.stdout = stdout if stdout is not None else sys.stdout
        self.stderr = stderr if stderr is not None else sys.stderr
        # name -> (handler, usage, min args, max args or None)
        self.commands = {
            "register": (self.do_register, "register <username>", 1, 1),
            "delete": (self.do_delete, "delete <username>", 1, 1),
            "list": (self.do_list, "list [prefix]", 0, 1),
            "create-folder": (self.do_create_folder,
                              "create-folder <username> <foldername> [description]", 2, None),
            "delete-folder": (self.do_delete_folder,
                              "delete-folder <username> <foldername>", 2, 2),
            "list-folders": (self.do_list_folders,
                             "list-folders <username> [--sort-name|--sort-created] [asc|desc]",
                             1, 3),
            "create-file": (self.do_create_file,
                            "create-file <username> <foldername> <filename> [description]",
                            3, None),
            "delete-file": (self.do_delete_file,
                            "delete-file <username> <foldername> <filename>", 3, 3),
            "list-files": (self.do_list_files,
                           "list-files <username> <foldername> [--sort-name|--sort-created] "
                           "[asc|desc]", 2, 4),
            "help": (self.do_help, "help", 0, 0),
        }

    def out(self, text: str):
        print(text, file=self.stdout)

    def err(self, text: str):
        print(text, file=self.stderr)

    def execute(self, line: str) -> bool:
        """Run one command line. Returns False when the shell should stop."""
        args = line.split()
        if not args:
            return True
        name = args[0].lower()
        if name == "exit":
            return False
        if name not in self.commands:
            self.err("Unknown command")
            return True

        handler, usage, min_args, max_args = self.commands[name]
        params = args[1:]
        if len(params) < min_args or (max_args is not None and len(params) > max_args):
            self.err(f"Usage: {usage}")
            return True
        try:
            handler(params)
        except UsageError as e:
            self.err(f"Error: {e}")
            self.err(f"Usage: {usage}")
        except StorageError as e:
            logger.debug("Command %r failed: %s", line, e)
            self.err(f"Error: {e}")
        return True

    def run(self, stdin, prompt: str = "> "):
        """Read and execute commands until exit or end of input."""
        self.out("Virtual File System")
        self.out("Type 'help' for commands, 'exit' to quit")
        while True:
            if prompt:
                self.stdout.write(prompt)
                self.stdout.flush()
            line = stdin.readline()
            if not line or not self.execute(line):
                break
        self.out("Goodbye!")

    def do_register(self, args):
        self.storage.add_user(args[0])
        self.out(f"User '{args[0]}' registered successfully")

    def do_delete(self, args):
        self.storage.delete_user(args[0])
        self.out(f"User '{args[0]}' deleted successfully")

    def do_list(self, args):
        users = self.storage.list_users(args[0] if args else "")
        if not users:
            self.out("No users found")
            return
        self.out("Users:")
        for name in users:
            self.out(f"- {name}")

    def do_create_folder(self, args):
        username, foldername = args[0], args[1]
        self.storage.create_folder(username, foldername, " ".join(args[2:]))
        self.out(f"Folder '{foldername}' created successfully for user '{username}'")

    def do_delete_folder(self, args):
        username, foldername = args
        self.storage.delete_folder(username, foldername)
        self.out(f"Folder '{foldername}' deleted successfully for user '{username}'")

    def do_list_folders(self, args):
        username = args[0]
        folders = self.storage.list_folders(username, *parse_sort(args[1:]))
        if not folders:
            self.out(f"No folders found for user '{username}'")
            return
        self.out(f"Folders for user '{username}':")
        for entry in folders:
            self.out(_format_entry(entry))

    def do_create_file(self, args):
        username, foldername, filename = args[0], args[1], args[2]
        self.storage.create_file(username, foldername, filename, " ".join(args[3:]))
        self.out(f"File '{filename}' created successfully in folder '{foldername}' "
                 f"for user '{username}'")

    def do_delete_file(self, args):
        username, foldername, filename = args
        self.storage.delete_file(username, foldername, filename)
        self.out(f"File '{filename}' deleted successfully from folder '{foldername}' "
                 f"for user '{username}'")

    def do_list_files(self, args):
        username, foldername = args[0], args[1]
        files = self.storage.list_files(username, foldername, *parse_sort(args[2:]))
        if not files:
            self.out(f"No files found in folder '{foldername}' for user '{username}'")
            return
        self.out(f"Files in folder '{foldername}' for user '{username}':")
        for entry in files:
            self.out(_format_entry(entry))

    def do_help(self, args):
        self.out(HELP)


def _format_entry(entry) -> str:
    line = f"- {entry.name}  {entry.created_at:%Y-%m-%d %H:%M:%S}"
    if entry.description:
        line += f"  {entry.description}"
    return line


def main(argv=None):
    parser = argparse.ArgumentParser(
        description="vfs: interactive in-memory user/folder/file namespace"
    )
    parser.add_argument(
        "--log-level",
        default=os.environ.get("VFS_LOG_LEVEL", "WARNING"),
        choices=LOG_LEVELS,
        type=str.upper,
        help="Logging level (default: $VFS_LOG_LEVEL or WARNING)",
    )
    parser.add_argument(
        "-c", "--command", action="append", dest="commands", metavar="LINE",
        help="Run a command and exit instead of reading stdin (repeatable)",
    )
    args = parser.parse_args(argv)
    if args.log_level not in LOG_LEVELS:
        parser.error(f"invalid log level {args.log_level!r} "
                     f"(choose from {', '.join(LOG_LEVELS)})")

    logging.basicConfig(
        level=args.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    shell = Shell(Storage())
    if args.commands:
        for line in args.commands:
            if not shell.execute(line):
                break
        return

    try:
        shell.run(sys.stdin, prompt="> " if sys.stdin.isatty() else "")
    except KeyboardInterrupt:
        print("\nGoodbye!")


if __name__ == "__main__":
    main()
