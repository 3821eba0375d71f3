"""
Document layer: turn raw database text into a generic node tree.

Components:
    - DocumentReader: Protocol defining the reader interface
    - YamlDocumentReader: PyYAML-based reader (JSON is read as YAML)
    - ScalarNode/SequenceNode/MappingNode/NullNode: one class per node kind

The database parser only sees these node classes, never PyYAML objects, so a
different reader can be plugged in without touching the schema checks.
"""

from compdb.document.base import DocumentReader
from compdb.document.models import (
    KeyValue,
    MappingNode,
    Mark,
    Node,
    NullNode,
    ScalarNode,
    SequenceNode,
)
from compdb.document.yaml_reader import YamlDocumentReader

__all__ = [
    "DocumentReader",
    "KeyValue",
    "MappingNode",
    "Mark",
    "Node",
    "NullNode",
    "ScalarNode",
    "SequenceNode",
    "YamlDocumentReader",
]
