"""Functional tests: the ``tenantcat`` CLI as an operator uses it.

Assert on exit codes and printed output only, never on catalog internals.
"""
