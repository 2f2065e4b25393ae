"""buildroot-cdt: register Buildroot cross toolchains as CDT build definitions."""

from __future__ import annotations

__version__ = "0.1.0"
__license__ = "EPL-1.0"
