"""Building blocks of a small command shell: tokenising, syntax checks, expansion, parsing and built-in commands."""

__version__ = "0.1.0"