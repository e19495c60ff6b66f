"""Configuration file formats known to the client."""

from enum import Enum


class ConfigFileFormat(str, Enum):
    """File extension of a namespace, which selects the parser for its content."""

    PROPERTIES = ".properties"
    XML = ".xml"
    JSON = ".json"
    YML = ".yml"
    YAML = ".yaml"
    DEFAULT = ""