from infrastructure.query.base_loader import QueryLoadError, QueryLoaderBase
from infrastructure.query.file_finder import QueryFileFinder
from infrastructure.query.json_loader import JsonQueryLoader
from infrastructure.query.loader_registry import QueryLoaderRegistry
from infrastructure.query.yaml_loader import YamlQueryLoader

__all__ = [
    "QueryLoadError",
    "QueryLoaderBase",
    "QueryFileFinder",
    "QueryLoaderRegistry",
    "YamlQueryLoader",
    "JsonQueryLoader",
]
