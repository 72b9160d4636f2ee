from typing import Any, Dict, Optional


def envelope(message: Optional[str] = None, **resources: Any) -> Dict[str, Any]:
    """Success envelope: ``{"success": true, "message"?: ..., <resource>: ...}``."""
    body: Dict[str, Any] = {"success": True}
    if message is not None:
        body["message"] = message
    body.update(resources)
    return body
