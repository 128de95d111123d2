"""Fanout routing — dispatches each invocation to every requested destination.

Sinks are per-destination targets: the Rich host console, plain text
files, the chained log, logging channels, and the XML object file.
``Output`` is not a sink; its values come back to the caller untouched.
"""
