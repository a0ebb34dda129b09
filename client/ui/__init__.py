from .cli import InputSource, read_stdin_line

__all__ = ["InputSource", "read_stdin_line"]
