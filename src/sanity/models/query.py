# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""GROQ query model and its URL parameter encoding."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, List, Mapping, Tuple
from urllib.parse import quote

__all__ = ["Query"]


@dataclass(frozen=True)
class Query:
    """A GROQ query string with named variables.

    Variable names are given without the ``$`` prefix; it is added when the
    request is built. Each value is JSON-encoded, so strings arrive quoted and
    numbers, booleans, lists and objects keep their JSON form.

    :param query: GROQ query text.
    :type query: str
    :param variables: Mapping of variable name to JSON-serializable value.
    :type variables: Mapping[str, Any]

    Example::

        q = Query("*[_type=='site' && id==$siteId][0]", {"siteId": 1})
        q.to_query_string()
        # "query=%2A%5B_type%3D%3D%27site%27%20...&$siteId=1"
    """

    query: str
    variables: Mapping[str, Any] = field(default_factory=dict)

    def to_params(self) -> List[Tuple[str, str]]:
        """Return ``(name, value)`` pairs: the query first, then one ``$name`` per variable."""
        params: List[Tuple[str, str]] = [("query", self.query)]
        for name, value in self.variables.items():
            params.append((f"${name}", json.dumps(value, separators=(",", ":"))))
        return params

    def to_query_string(self) -> str:
        # "$" stays literal in names; everything else is percent-encoded (space -> %20).
        return "&".join(f"{quote(k, safe='$')}={quote(v, safe='')}" for k, v in self.to_params())
