"""buck: local host-security audit orchestrator."""

__version__ = "0.6.0"
PROGRAM_NAME = "buck"
