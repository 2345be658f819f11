"""Backends subpackage for json-unit.

Backends adapt a source representation into the engine's ``Node`` model.
The base install provides ``NativeBackend``, which reads Python JSON values
and JSON text.  Any object with a conformant ``convert`` method satisfies the
``NodeFactory`` Protocol and can be passed to ``JsonComparator`` instead.
"""

from json_unit.backends.native import NativeBackend

__all__ = ["NativeBackend"]
