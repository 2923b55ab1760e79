# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""Mutation data models for the Sanity SDK."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Iterable, List

from ..core.errors import ValidationError
from ..core._error_codes import VALIDATION_MUTATION_KIND

__all__ = ["MutationKind", "Mutation", "serialize_mutations"]


class MutationKind(str, Enum):
    """Mutation variants, valued by their wire tag."""

    CREATE = "create"
    CREATE_OR_REPLACE = "createOrReplace"
    CREATE_IF_NOT_EXISTS = "createIfNotExists"
    DELETE = "delete"
    PATCH = "patch"


@dataclass(frozen=True)
class Mutation:
    """A single document mutation submitted as part of a batch.

    The ``document`` payload is passed through as-is; it is whatever JSON-like
    value the mutation kind expects (a full document for the create variants,
    ``{"id": ...}`` or ``{"query": ...}`` for delete, a patch spec for patch).

    :param kind: Mutation variant.
    :type kind: MutationKind
    :param document: JSON-serializable payload for the variant.
    :type document: Any

    Example::

        m = Mutation.create_or_replace({
            "_id": "drafts.cfeba160-1123-4af9-ad4e-c657d5e537af",
            "_type": "author",
            "name": "Random",
        })
        m.to_dict()  # {"createOrReplace": {...}}
    """

    kind: MutationKind
    document: Any

    def __post_init__(self) -> None:
        if not isinstance(self.kind, MutationKind):
            try:
                object.__setattr__(self, "kind", MutationKind(self.kind))
            except ValueError:
                raise ValidationError(
                    f"Unsupported mutation kind: {self.kind!r}",
                    subcode=VALIDATION_MUTATION_KIND,
                    details={"allowed": [k.value for k in MutationKind]},
                ) from None

    @classmethod
    def create(cls, document: Any) -> "Mutation":
        return cls(MutationKind.CREATE, document)

    @classmethod
    def create_or_replace(cls, document: Any) -> "Mutation":
        return cls(MutationKind.CREATE_OR_REPLACE, document)

    @classmethod
    def create_if_not_exists(cls, document: Any) -> "Mutation":
        return cls(MutationKind.CREATE_IF_NOT_EXISTS, document)

    @classmethod
    def delete(cls, document: Any) -> "Mutation":
        return cls(MutationKind.DELETE, document)

    @classmethod
    def patch(cls, document: Any) -> "Mutation":
        return cls(MutationKind.PATCH, document)

    def to_dict(self) -> Dict[str, Any]:
        return {self.kind.value: self.document}


def serialize_mutations(mutations: Iterable[Mutation]) -> Dict[str, List[Dict[str, Any]]]:
    """Wrap a batch of mutations in the ``{"mutations": [...]}`` envelope, preserving order."""
    items: List[Dict[str, Any]] = []
    for m in mutations:
        if not isinstance(m, Mutation):
            raise TypeError("mutations must be an iterable of Mutation")
        items.append(m.to_dict())
    return {"mutations": items}
