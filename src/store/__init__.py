"""Remote storage layer.

This module reads and writes JSON documents through a repository
contents API, guarded by the host's revision checks.
"""
