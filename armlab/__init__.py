"""ntlang scanner, parser and evaluator; an ARM emulator with cache simulation; instruction analysis and small routines."""

__version__ = "0.1.0"