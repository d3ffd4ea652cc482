"""IPL command-line front end: project scaffolding, compiler discovery, and
build/run/clean orchestration for IPL projects."""

__version__ = "0.1.0"
