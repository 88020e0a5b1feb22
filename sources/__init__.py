#Marks sources as a package.
#Re-exports the loader API (CsvSource, load_csv_text, load_canonical_points)
#No business logic.

from .loader import CsvSource, SourceLoadError, configured_sources, load_canonical_points, load_csv_text

__all__ = [
           "CsvSource",
           "SourceLoadError",
             "configured_sources",
             "load_csv_text",
             "load_canonical_points",
             ]
