"""
Rowgate Test Suite.

This package contains:
- unit/: Unit tests (temporary SQLite files, fakes for collaborators)
- integration/: HTTP server and Data Client tests over real sockets
"""
