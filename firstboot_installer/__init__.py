"""First-boot software installer.

Runs once on a freshly provisioned machine:
- Locate the staged software archive
- Extract it into the workspace
- Find an installer executable inside it
- Run it silently
- Record every outcome to an append-only log file

The process always finishes and always logs; the log file is the only
durable output.
"""

__version__ = "1.0.0"

__all__ = ["__version__"]
