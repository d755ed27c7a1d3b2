"""File headers, records, record builders, data frames, event indexes and histograms for HIPO data files."""

__version__ = "0.1.0"
__all__ = [
    "dataframe",
    "fileheader",
    "histogram",
    "readerindex",
    "record",
    "recordbuilder",
    "utils",
]