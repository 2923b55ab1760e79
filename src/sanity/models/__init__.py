# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Data models for the Sanity SDK.

- :class:`~sanity.models.mutation.Mutation`: A single document mutation.
- :class:`~sanity.models.mutation.MutationKind`: The closed set of mutation variants.
- :class:`~sanity.models.query.Query`: A GROQ query with variables.
"""

from .mutation import Mutation, MutationKind, serialize_mutations
from .query import Query

__all__ = ["Mutation", "MutationKind", "serialize_mutations", "Query"]
