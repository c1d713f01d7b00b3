"""Scheduling core: recurrence expansion, conflict detection and the
business services that run conflict checks before persisting changes.

Import from the submodules directly (``scheduling.detector``,
``scheduling.expander`` ...); the models package depends on
``scheduling.exceptions``, so this package keeps no eager imports.
"""
