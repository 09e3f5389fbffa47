"""Keep GitHub organization teams in line with a GitHub Classroom roster."""

__version__ = "0.1.0"
