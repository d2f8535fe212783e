"""Textual viewer for a finished startup run.

Only :mod:`.inspector` is imported here; ``app`` needs the ``textual``
package and is loaded on demand.
"""

from .inspector import InspectorModel, Row, Section

__all__ = ["InspectorModel", "Row", "Section"]
