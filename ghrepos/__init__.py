"""
ghrepos package

Typed request builders for the GitHub Repos REST API.

Key responsibilities are split across modules:
- `request.py`: the inert `Request` descriptor and its low-level constructors
- `data.py`: input types (visibility filter, payload records) and JSON encoding
- `endpoints.py`: one pure builder per repository endpoint
- `executor.py`: isolated GitHub REST interaction (sending, paging, errors)
- `renderer.py`: text renderings of a descriptor (json / http / curl)
- `config.py`: client settings from YAML and the environment
- `cli.py`: CLI entrypoint (build -> render or execute)
"""

from __future__ import annotations

__all__ = ["__version__"]

__version__ = "0.1.0"
