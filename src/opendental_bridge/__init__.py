"""OpenDental bridge.

Exposes an OpenDental backend as read-only tools for agent runtimes
(patient list, dental chart, patient report) and renders their results
as interactive widgets.
"""

__version__ = "1.0.0"
