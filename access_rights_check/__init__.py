"""
Access Rights compliance check for CESSDA Data Catalogue records.

Given a catalogue detail URL, the package fetches the record's DDI metadata,
reads its ``typeOfAccess`` declarations and reports whether any of them belongs
to the CESSDA Access Rights vocabulary.
"""

__all__ = [
    "config",
    "models",
    "clients",
    "extractors",
    "services",
    "workflow",
    "logging_utils",
]
