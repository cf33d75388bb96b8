"""Expansion of templated Nodit endpoint URLs into concrete request URIs."""

from __future__ import annotations

import logging
import re
from typing import Any, Dict, List, Mapping, Optional
from urllib.parse import quote, urlencode

from nodit_mcp.catalog.models import ResolvedApiSpec

logger = logging.getLogger(__name__)

PLACEHOLDER_REGEX = re.compile(r"\{([^}]+)\}")
NETWORK_SUFFIX = "-network"


def _stringify(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return "null"
    return str(value)


def template_variables(template: str) -> List[str]:
    """Distinct placeholder names in first-seen order."""
    return list(dict.fromkeys(PLACEHOLDER_REGEX.findall(template)))


def _derive_variable(name: str, protocol: str, network: str) -> Optional[str]:
    if name == "protocol-network":
        return f"{protocol}-{network}"
    if name.endswith(NETWORK_SUFFIX):
        return f"{name[: -len(NETWORK_SUFFIX)]}-{network}"
    if name == "protocol":
        return protocol
    if name == "network":
        return network
    return None


def build_uri(
    resolved: ResolvedApiSpec,
    protocol: str,
    network: str,
    path_params: Optional[Mapping[str, Any]] = None,
    query_params: Optional[Mapping[str, Any]] = None,
) -> str:
    """
    Build the request URI for a resolved operation.

    Chain/network placeholders are derived from ``protocol`` and ``network``;
    explicit ``path_params`` override derived values. Placeholders that stay
    unresolved are left as literal ``{name}`` tokens. Query parameters are
    appended in the mapping's iteration order.
    """
    url = resolved.base_url + resolved.path_template
    logger.debug("Base URL template: %s, path template: %s", resolved.base_url, resolved.path_template)

    variables: Dict[str, Any] = {}
    for name in template_variables(url):
        value = _derive_variable(name, protocol, network)
        if value is not None:
            variables[name] = value

    if path_params:
        variables.update(path_params)

    for name, value in variables.items():
        url = url.replace(f"{{{name}}}", _stringify(value))

    unresolved = template_variables(url)
    if unresolved:
        logger.warning(
            "Unresolved URI template variables %s for operation %s",
            ", ".join(unresolved),
            resolved.operation.operation_id,
        )

    if query_params:
        query = urlencode(
            [(str(key), _stringify(value)) for key, value in query_params.items()],
            quote_via=quote,
        )
        url = f"{url}?{query}"

    return url
