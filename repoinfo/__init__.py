"""repoinfo: build provenance metadata generator.

Snapshots build host, build user, build time, source modification time and
version control revision/URL into a generated source file of constants.

Public Interface:
    - BuildMetadataRecord: The metadata snapshot
    - generate: Collect and emit in one step
    - generate_record: Collect without writing
    - emit: Write a record as a source artifact
    - sync_file: Update declarations of an existing file
    - load_config / GeneratorSettings: Configuration
"""

from .config import GeneratorSettings
from .config import load_config
from .emitters import emit
from .errors import ConfigurationError
from .errors import EnvironmentUnavailable
from .errors import NotAVersionControlledTree
from .errors import RepoInfoError
from .generator import generate
from .generator import generate_record
from .models import BuildMetadataRecord
from .sync import sync_file

__version__ = "0.1.0"

__all__ = [
    "BuildMetadataRecord",
    "GeneratorSettings",
    "load_config",
    "generate",
    "generate_record",
    "emit",
    "sync_file",
    "RepoInfoError",
    "EnvironmentUnavailable",
    "NotAVersionControlledTree",
    "ConfigurationError",
]
