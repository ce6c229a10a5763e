from .command import Command, InvalidInput
from .reply import Reply, reply
from .shell import Shell

__all__ = ["Command", "InvalidInput", "Reply", "Shell", "reply"]
