"""问候功能的适配器"""

from .tables import greetings, metadata
from .database_greeting_reader import DatabaseGreetingReader
from .database_greeting_writer import DatabaseGreetingWriter
from .mem_greeting_reader import DEFAULT_GREETINGS, InMemGreetingReader

__all__ = [
    "greetings",
    "metadata",
    "DatabaseGreetingReader",
    "DatabaseGreetingWriter",
    "DEFAULT_GREETINGS",
    "InMemGreetingReader",
]
