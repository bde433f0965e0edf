"""voxprep CLI.

Registers all commands on the main group.
"""

from voxprep.cli.audio import clean, features, listen, transcribe
from voxprep.cli.main import cli

__all__ = [
    "clean",
    "cli",
    "features",
    "listen",
    "transcribe",
]
