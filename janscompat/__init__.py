"""JSON values and serialization, UTF-8 checks, a hash table, option parsing and time helpers."""

__version__ = "1.3.0"

__all__ = ["utf", "hashtable", "value", "dump", "options", "timeutil"]