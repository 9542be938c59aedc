# lookout/privacy/__init__.py
# Re-export the privacy API surface so embedders can do:
from .policy import RedactionPolicy, PLACEHOLDER
from .redaction import redact, hide_parameters, hide_headers
from . import presets

__all__ = [
    # policy
    "RedactionPolicy",
    "PLACEHOLDER",
    # redaction
    "redact",
    "hide_parameters",
    "hide_headers",
    # presets module (namespace)
    "presets",
]
