"""Credit Sea - Parsing Layer

This layer converts raw XML reports into CanonicalReport (SSOT).
All downstream modules MUST use CanonicalReport exclusively.
"""
from .errors import ReportIngestionError, MalformedInputError, SchemaError
from .xml_tree import RawNode, Lookup, Absent, One, Many, ABSENT, parse_xml
from .extractor import REPORT_ROOT_TAG, extract, extract_node, text_at, require_root
from .coercion import to_int, to_decimal, to_trimmed_string
from .accounts import account_from_node, normalize_accounts
from .experian_parser import ExperianXMLParser, parse_experian_xml

__all__ = [
    "ReportIngestionError", "MalformedInputError", "SchemaError",
    "RawNode", "Lookup", "Absent", "One", "Many", "ABSENT", "parse_xml",
    "REPORT_ROOT_TAG", "extract", "extract_node", "text_at", "require_root",
    "to_int", "to_decimal", "to_trimmed_string",
    "account_from_node", "normalize_accounts",
    "ExperianXMLParser", "parse_experian_xml",
]
