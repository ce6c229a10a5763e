import argparse
import logging
import os
import sys

from console.command import Command
from console.reply import Reply, reply
from console.shell import Shell
from llrbset.engine import Session

logging.basicConfig(
    level=os.environ.get("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger()


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="llrbset",
        description="Interactive ordered key set backed by a left-leaning red-black tree.",
    )
    parser.add_argument("input_file", nargs="?", help="binary file of native-size signed integers")
    args = parser.parse_args(argv)

    if args.input_file is None:
        print(f"Usage: {parser.prog} <input_file>", file=sys.stderr)
        return 1

    try:
        session = Session.from_file(args.input_file)
    except OSError as e:
        print(f"Error opening file: {args.input_file} ({e.strerror or e})", file=sys.stderr)
        return 1

    with session:
        shell = Shell()
        register_commands(shell, session)
        logger.debug(f"Registered commands: {list(shell.commands)}")
        shell.run()
    return 0


def register_commands(shell: Shell, session: Session) -> None:

    @shell.command('1', 'Search')
    def search(command: Command) -> Reply:
        key = command.get_int("Enter element to search: ")
        result = session.search(key)
        if result.value:
            return reply("Element found in the tree.").timed(result.elapsed)
        return reply("Element not found in the tree.").timed(result.elapsed)

    @shell.command('2', 'Insert')
    def insert(command: Command) -> Reply:
        key = command.get_int("Enter element to insert: ")
        result = session.insert(key)
        return reply("Element inserted.").timed(result.elapsed)

    @shell.command('3', 'Delete')
    def delete(command: Command) -> Reply:
        key = command.get_int("Enter element to delete: ")
        result = session.delete(key)
        return reply("Element deleted (if it existed).").timed(result.elapsed)

    @shell.command('4', f'Get {Session.DEFAULT_SMALLEST_COUNT} smallest elements')
    def smallest(command: Command) -> Reply:
        result = session.smallest()
        keys = " ".join(str(key) for key in result.value)
        return reply(f"{Session.DEFAULT_SMALLEST_COUNT} smallest elements: {keys}").timed(result.elapsed)

    @shell.command('5', 'Print tree')
    def print_tree(command: Command) -> Reply:
        max_depth = command.get_int("Enter maximum depth to print (-1 for unlimited): ")
        return reply("Tree structure:", *session.render(max_depth))


def cli() -> None:
    sys.exit(main())


if __name__ == "__main__":
    cli()
