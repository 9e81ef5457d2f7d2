"""lockstep — keep a project's declared, locked, and installed dependencies in step."""

__version__ = "0.3.0"
