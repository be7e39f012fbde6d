"""Load and validate the what-if result envelope."""

from pathlib import Path
from typing import Dict, Any, Union
from pydantic import ValidationError
from .models import WhatIfResult, SUCCESS_STATUS
from ..utils.errors import EnvelopeError, PlanLoadError
from ..utils.logging import get_logger

logger = get_logger("ingest.plan_loader")


def read_whatif_file(plan_path: Union[str, Path]) -> bytes:
    """
    Read a what-if result JSON file.

    Args:
        plan_path: Path to the what-if result file

    Returns:
        Raw file content

    Raises:
        PlanLoadError: If the file cannot be read
    """
    path = Path(plan_path)

    if not path.exists():
        raise PlanLoadError(
            f"WhatIf result file not found: {plan_path}. "
            "Generate one using: az deployment group what-if --no-pretty-print > whatif.json"
        )

    if not path.is_file():
        raise PlanLoadError(f"Path is not a file: {plan_path}")

    try:
        content = path.read_bytes()
    except OSError as e:
        raise PlanLoadError(f"Error reading WhatIf result JSON file: {e}") from e

    logger.debug(f"Read {len(content)} bytes from {plan_path}")
    return content


def parse_whatif(content: Union[bytes, str]) -> WhatIfResult:
    """
    Parse raw what-if JSON into a WhatIfResult and apply the status gate.

    Args:
        content: Raw JSON bytes, from disk or from the az CLI

    Returns:
        WhatIfResult whose status is 'Succeeded'

    Raises:
        EnvelopeError: If the envelope is not valid JSON, does not match the
            result schema, or the operation did not succeed
    """
    try:
        result = WhatIfResult.model_validate_json(content)
    except ValidationError as e:
        raise EnvelopeError(f"Failed to unmarshal whatif operation result: {e}") from e

    if not result.succeeded:
        detail = f" ({result.error.describe()})" if result.error else ""
        raise EnvelopeError(
            f"WhatIf operation was not successful: status '{result.status}'{detail}"
        )

    summary = get_change_summary(result)
    logger.info(
        f"Loaded WhatIf result (status: {SUCCESS_STATUS}, changes: {summary['change_count']})"
    )
    return result


def get_change_summary(result: WhatIfResult) -> Dict[str, Any]:
    """
    Count changes by change type.

    Unrecognized change types are counted under their own string.
    """
    counts: Dict[str, int] = {}
    for change in result.changes:
        key = change.change_type.value if hasattr(change.change_type, "value") else str(change.change_type)
        counts[key] = counts.get(key, 0) + 1

    return {
        "status": result.status,
        "change_count": len(result.changes),
        "change_types": counts,
    }
