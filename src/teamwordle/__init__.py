"""Two-team Wordle client for town conversation areas."""

__version__ = "0.1.0"
