# Copyright 2020 Google LLC
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#      http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Reads the SMuFL metadata files.

SMuFL publishes its glyph table and range table as JSON:

glyphnames.json: {"gClef": {"codepoint": "U+E050", "description": "G clef"}, ...}
ranges.json: {"clefs": {"description": "Clefs", "glyphs": ["gClef", ...]}, ...}

Both are read in file order; that order carries through to the generated
documents.
"""

from absl import logging
import json
from pathlib import Path
from typing import Any, Dict, Mapping, NamedTuple, Optional, Tuple
import urllib.error
import urllib.request


DEFAULT_METADATA_URL = "https://raw.githubusercontent.com/w3c/smufl/gh-pages/metadata"

_CODEPOINT_PREFIX = "U+"


class MetadataFetchError(Exception):
    """Raised when a metadata resource cannot be retrieved."""

    def __init__(self, resource: str, status: Optional[int], reason: str = ""):
        self.resource = resource
        self.status = status
        self.reason = reason
        message = f"Unable to fetch {resource}"
        if status is not None:
            message += f": HTTP {status}"
        if reason:
            message += f" {reason}"
        super().__init__(message)


class GlyphEntry(NamedTuple):
    name: str
    codepoint: str
    description: str

    @property
    def codepoint_hex(self) -> str:
        if self.codepoint.startswith(_CODEPOINT_PREFIX):
            return self.codepoint[len(_CODEPOINT_PREFIX) :]
        return self.codepoint


class RangeGroup(NamedTuple):
    key: str
    label: str
    glyph_names: Tuple[str, ...]


class Metadata(NamedTuple):
    glyphs: Dict[str, GlyphEntry]
    ranges: Dict[str, RangeGroup]


def parse_glyph_names(data: Mapping[str, Any]) -> Dict[str, GlyphEntry]:
    glyphs = {}
    for name, entry in data.items():
        try:
            glyphs[name] = GlyphEntry(name, entry["codepoint"], entry["description"])
        except (KeyError, TypeError) as e:
            raise ValueError(f"Bad glyph entry {name!r}: {entry!r}") from e
    return glyphs


def parse_ranges(data: Mapping[str, Any]) -> Dict[str, RangeGroup]:
    ranges = {}
    for key, entry in data.items():
        try:
            ranges[key] = RangeGroup(key, entry["description"], tuple(entry["glyphs"]))
        except (KeyError, TypeError) as e:
            raise ValueError(f"Bad range entry {key!r}: {entry!r}") from e
    return ranges


def glyph_to_range(ranges: Mapping[str, RangeGroup]) -> Dict[str, str]:
    """Map each glyph name to the label of the range that lists it.

    A glyph listed by more than one range maps to the last one.
    """
    result = {}
    for glyph_range in ranges.values():
        for glyph_name in glyph_range.glyph_names:
            result[glyph_name] = glyph_range.label
    return result


def fetch_json(base_url: str, resource: str) -> Any:
    url = base_url.rstrip("/") + "/" + resource
    logging.info("Fetching %s", url)
    try:
        with urllib.request.urlopen(url) as response:
            return json.load(response)
    except urllib.error.HTTPError as e:
        raise MetadataFetchError(resource, e.code, str(e.reason)) from e
    except urllib.error.URLError as e:
        raise MetadataFetchError(resource, None, str(e.reason)) from e


def read_json(metadata_dir: Path, resource: str) -> Any:
    with open(Path(metadata_dir) / resource, encoding="utf-8") as f:
        return json.load(f)


def load_json(
    resource: str, metadata_url: str, metadata_dir: Optional[Path] = None
) -> Any:
    if metadata_dir is not None:
        return read_json(metadata_dir, resource)
    return fetch_json(metadata_url, resource)


def load_metadata(
    metadata_url: str = DEFAULT_METADATA_URL,
    metadata_dir: Optional[Path] = None,
    glyphnames_file: str = "glyphnames.json",
    ranges_file: str = "ranges.json",
) -> Metadata:
    glyphs = parse_glyph_names(load_json(glyphnames_file, metadata_url, metadata_dir))
    ranges = parse_ranges(load_json(ranges_file, metadata_url, metadata_dir))
    logging.info("Loaded %d glyphs in %d ranges", len(glyphs), len(ranges))
    return Metadata(glyphs, ranges)
