"""Application services for building and running the crosswalk."""

from .crosswalk import CiteprocCrosswalk
from .field_mapping_table import FieldMappingTable, parse_field_mapping

__all__ = ["CiteprocCrosswalk", "FieldMappingTable", "parse_field_mapping"]
