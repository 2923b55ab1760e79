# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

# Validation subcodes
VALIDATION_PROJECT_ID_EMPTY = "validation_project_id_empty"
VALIDATION_DATASET_EMPTY = "validation_dataset_empty"
VALIDATION_UNKNOWN_OPTION = "validation_unknown_option"
VALIDATION_MUTATION_KIND = "validation_mutation_kind"

# Asset subcodes
ASSET_FILE_NOT_FOUND = "asset_file_not_found"
ASSET_FILE_UNREADABLE = "asset_file_unreadable"
ASSET_NOT_A_FILE = "asset_not_a_file"
