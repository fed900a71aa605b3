from __future__ import annotations

"""Application-wide logging utilities.

The planner logs through the `uvicorn.error` logger so engine warnings
(unknown resources, rejected booking rows, cache refresh failures) show up
next to the server output.
"""

import logging

logger = logging.getLogger("uvicorn.error")
