#!/usr/bin/env python3
# Copyright 2026 The fontmanifest Authors
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
#

# =====================================
# GLOBAL CONSTANTS DEFINITIONS

# Licence directories of a google/fonts style checkout, in scan order.
LICENSE_DIRS = ("apache", "ofl", "ufl")

FONT_EXTENSIONS = (".ttf", ".otf", ".ttc")

METADATA_FILENAME = "METADATA.pb"

MANIFEST_FILENAME = "metadata.properties"
COMPRESSED_SUFFIX = ".gz"

# Legacy config: a text file holding the path to the fonts checkout.
LOCATION_FILENAME = "local-repo-location.txt"

VERSION_TAG_LENGTH = 12
HASH_CHUNK_SIZE = 64 * 1024

DEFAULT_REMOTE = "origin"
DEFAULT_BRANCH = "main"
DEFAULT_COMMIT_MESSAGE = "Update font manifest"

# Subsets that never describe real coverage.
IGNORED_SUBSETS = ("menu",)

# Suffixes of the per-family manifest keys, besides the bare family key.
FIELD_VERSION = "version"
FIELD_NAME = "name"
FIELD_DESIGNER = "designer"
FIELD_LICENSE = "license"
FIELD_CATEGORY = "category"
FIELD_SUBSETS = "subsets"
FIELD_AXES = "axes"

MANIFEST_FIELDS = (
    FIELD_VERSION,
    FIELD_NAME,
    FIELD_DESIGNER,
    FIELD_LICENSE,
    FIELD_CATEGORY,
    FIELD_SUBSETS,
    FIELD_AXES,
)
