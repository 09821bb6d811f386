"""Property trees with path access, INI reading and writing, INFO writing and XML reading."""

__version__ = "0.1.0"
__all__ = ["errors", "ptree", "ini", "info_writer", "xml_utils", "xml_reader"]