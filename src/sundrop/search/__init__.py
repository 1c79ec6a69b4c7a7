"""Icon indexing and project reference scanning."""

from sundrop.search.icon_search import IconSearch
from sundrop.search.index import IconIndex, build_index, build_index_sync, icon_names
from sundrop.search.resolver import DefaultPackageResolver, PackageResolver
from sundrop.search.scanner import ScanReport, find_project_files, scan, scan_files
from sundrop.search.tokenizer import iter_tokens, tokenize

__all__ = [
    "DefaultPackageResolver",
    "IconIndex",
    "IconSearch",
    "PackageResolver",
    "ScanReport",
    "build_index",
    "build_index_sync",
    "find_project_files",
    "icon_names",
    "iter_tokens",
    "scan",
    "scan_files",
    "tokenize",
]
