import sys
import time
from typing import Callable, Dict, Optional, TextIO, Tuple
import logging
from .command import Command, InvalidInput
from .reply import Reply

logger = logging.getLogger()

class Shell:
    def __init__(
        self,
        stdin: Optional[TextIO] = None,
        stdout: Optional[TextIO] = None,
        exit_choice: str = '6',
        exit_label: str = 'Exit',
    ):
        self.stdin = stdin if stdin is not None else sys.stdin
        self.stdout = stdout if stdout is not None else sys.stdout
        self.exit_choice = exit_choice
        self.exit_label = exit_label
        self.commands: Dict[str, Tuple[str, Callable]] = {}

    def command(self, choice: str, label: str):
        """Decorator for registering menu entry handlers"""
        if choice == self.exit_choice:
            raise ValueError(f"Choice {choice!r} is reserved for {self.exit_label}")

        def decorator(handler):
            self.commands[choice] = (label, handler)
            return handler
        return decorator

    def menu(self) -> str:
        entries = [f"{choice}. {label}" for choice, (label, _) in self.commands.items()]
        entries.append(f"{self.exit_choice}. {self.exit_label}")
        return "Choose an operation:\n" + "\n".join(entries) + "\nYour choice: "

    def write(self, text: str) -> None:
        self.stdout.write(text)
        self.stdout.flush()

    def ask(self, prompt: str) -> Optional[str]:
        """Write a prompt and read one line; None at end of input"""
        self.write(prompt)
        line = self.stdin.readline()
        if not line:
            return None
        return line

    def handle_command(self, command: Command) -> Reply:
        """Route command to the registered handler"""
        entry = self.commands.get(command.choice)

        if entry is None:
            return Reply(lines=['Invalid choice. Please try again.'])

        _, handler = entry
        try:
            result = handler(command)

            if isinstance(result, Reply):
                return result
            elif isinstance(result, str):
                return Reply(lines=[result])
            elif isinstance(result, list):
                return Reply(lines=[str(line) for line in result])

            raise TypeError("Handler result cannot be casted to a reply")
        except EOFError:
            raise
        except InvalidInput as e:
            logger.debug(f"Rejected input: {e}")
            return Reply(lines=['Invalid number. Please try again.'])
        except Exception as e:
            logger.error(f"Handler error: {e}")
            return Reply(lines=[f'Operation failed: {e}'])

    def run(self) -> None:
        """Run the menu loop until the exit choice or end of input"""
        logger.info("Shell started")

        try:
            while True:
                line = self.ask(self.menu())
                if line is None:
                    break

                choice = line.strip()
                if choice == self.exit_choice:
                    break

                start_time = time.perf_counter()
                logger.debug(f"--> choice {choice}")

                reply = self.handle_command(Command(choice=choice, ask=self.ask))
                for reply_line in reply.render():
                    self.write(reply_line + "\n")

                elapsed_ms = (time.perf_counter() - start_time) * 1000
                logger.debug(f"<-- {len(reply.lines)} lines - {elapsed_ms:.2f}ms")
        except EOFError:
            logger.debug("Input ended inside a command")
        except KeyboardInterrupt:
            logger.info("Shell interrupted")

        logger.info("Shell stopped")
