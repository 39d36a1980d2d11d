"""
csolution_builder — context resolution and build orchestration for csolution projects.

Turns a ``<name>.csolution.yml`` plus user intent (one context, one
configuration, or everything) into an ordered sequence of delegated
tool runs: pack install → convert → per-context project build.
"""

__version__ = "0.1.0"
PACKAGE_NAME = "csolution_builder"
SCHEMA_VERSION = "0.1"

# Generated per-context descriptor extension and index document suffix.
DESCRIPTOR_EXT = "cprj"
INDEX_SUFFIX = ".cbuild-idx.yml"
