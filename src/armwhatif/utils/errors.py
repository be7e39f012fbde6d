"""Custom exception classes for armwhatif."""

from typing import Optional


class WhatIfError(Exception):
    """Base exception for all armwhatif errors."""
    pass


class PlanLoadError(WhatIfError):
    """Raised when a WhatIf result file cannot be read."""
    pass


class EnvelopeError(WhatIfError):
    """Raised when the WhatIf envelope is not valid JSON or did not succeed."""
    pass


class DocumentError(WhatIfError):
    """Raised when a before/after payload is not valid JSON."""
    pass


class NormalizationError(WhatIfError):
    """Raised when a resource change cannot be normalized."""
    pass


class MalformedResourceError(NormalizationError):
    """Raised when a resource document is missing its type or id."""
    pass


class ConfigError(WhatIfError):
    """Raised when configuration or usage data is invalid or missing."""
    pass


class UnsupportedScopeError(WhatIfError):
    """Raised when no what-if arguments exist for a deployment scope."""
    pass


class CommandError(WhatIfError):
    """Raised when the external az command fails."""

    def __init__(self, message: str, stderr: bytes = b"", returncode: Optional[int] = None):
        super().__init__(message)
        self.stderr = stderr
        self.returncode = returncode

    def stderr_text(self) -> str:
        return self.stderr.decode("utf-8", errors="replace").strip()
