# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional

from .errors import ValidationError
from ._error_codes import VALIDATION_UNKNOWN_OPTION

DEFAULT_API_VERSION = "2021-06-07"

_OPTION_KEYS = ("access_token", "api_version", "http_timeout")


@dataclass(frozen=True)
class SanityConfig:
    """
    Connection settings for one Sanity project/dataset pair.

    Values are not validated here; empty strings are accepted and only
    rejected when a client is constructed from the configuration.

    :param project_id: Sanity project ID, used as the API host prefix.
    :type project_id: str
    :param dataset: Dataset name, e.g. ``"production"``.
    :type dataset: str
    :param access_token: API token sent as ``Authorization: Bearer <token>``. Anonymous when ``None``.
    :type access_token: str or None
    :param api_version: Date-stamped API version such as ``"2021-10-21"``. Defaults to
        ``DEFAULT_API_VERSION`` when ``None``.
    :type api_version: str or None
    :param http_timeout: Request timeout in seconds. When ``None`` the transport default applies.
    :type http_timeout: float or None
    """

    project_id: str
    dataset: str
    access_token: Optional[str] = None
    api_version: Optional[str] = None
    http_timeout: Optional[float] = None

    @classmethod
    def new(cls, project_id: str, dataset: str) -> "SanityConfigBuilder":
        """
        Start a builder seeded with the required fields.

        :return: Builder with ``access_token``, ``api_version`` and ``http_timeout`` unset.
        :rtype: SanityConfigBuilder

        Example::

            config = (SanityConfig.new("abc123", "production")
                      .access_token("sk...")
                      .api_version("2021-10-21")
                      .build())
        """
        return SanityConfigBuilder(project_id, dataset)

    @classmethod
    def create(cls, project_id: str, dataset: str, **options: Any) -> "SanityConfig":
        """
        Build a configuration in one call.

        Recognized options are ``access_token``, ``api_version`` and ``http_timeout``.

        :raises ~sanity.core.errors.ValidationError: If an unknown option is passed.
        """
        unknown = sorted(set(options) - set(_OPTION_KEYS))
        if unknown:
            raise ValidationError(
                f"Unknown configuration option(s): {', '.join(unknown)}",
                subcode=VALIDATION_UNKNOWN_OPTION,
                details={"unknown": unknown, "allowed": list(_OPTION_KEYS)},
            )
        return cls(project_id=project_id, dataset=dataset, **options)

    @property
    def effective_api_version(self) -> str:
        return self.api_version if self.api_version is not None else DEFAULT_API_VERSION

    def __repr__(self) -> str:
        token = "***" if self.access_token else None
        return (
            f"SanityConfig(project_id={self.project_id!r}, dataset={self.dataset!r}, "
            f"access_token={token!r}, api_version={self.api_version!r}, http_timeout={self.http_timeout!r})"
        )


class SanityConfigBuilder:
    """
    Chainable builder for :class:`SanityConfig`.

    Every setter returns a new builder and leaves the receiver untouched, so a
    partially configured builder can be shared and branched.
    """

    __slots__ = ("_fields",)

    def __init__(self, project_id: str, dataset: str, **optional: Any) -> None:
        fields: Dict[str, Any] = {"project_id": project_id, "dataset": dataset}
        for key in _OPTION_KEYS:
            fields[key] = optional.get(key)
        self._fields = fields

    def _with(self, **changes: Any) -> "SanityConfigBuilder":
        return SanityConfigBuilder(**{**self._fields, **changes})

    def project_id(self, project_id: str) -> "SanityConfigBuilder":
        return self._with(project_id=project_id)

    def dataset(self, dataset: str) -> "SanityConfigBuilder":
        return self._with(dataset=dataset)

    def access_token(self, token: str) -> "SanityConfigBuilder":
        """Set the API token. Tokens are created under the project's API settings."""
        return self._with(access_token=token)

    def api_version(self, version: str) -> "SanityConfigBuilder":
        return self._with(api_version=version)

    def http_timeout(self, timeout: float) -> "SanityConfigBuilder":
        return self._with(http_timeout=timeout)

    def build(self) -> SanityConfig:
        return SanityConfig(**self._fields)

    def __repr__(self) -> str:
        shown = {k: ("***" if k == "access_token" and v else v) for k, v in self._fields.items()}
        return f"SanityConfigBuilder({shown!r})"
