"""Interfaces/abstractions of the core.

Defines structural contracts (Protocol) that concrete adapters implement so
the selection flows depend on abstractions, not on sockets or subprocesses.
"""
